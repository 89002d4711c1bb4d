from __future__ import annotations

from typing import BinaryIO

from gzcap.errors import SizeLimitExceeded

CHUNK_SIZE_DEFAULT = 256 * 1024


def bounded_copy(
    dst: BinaryIO, src: BinaryIO, limit: int, *, chunk_size: int = CHUNK_SIZE_DEFAULT
) -> int:
    """Copy at most ``limit`` bytes from ``src`` to ``dst``.

    Returns the number of bytes written when ``src`` ran dry first.

    Reaching ``limit`` raises SizeLimitExceeded, even when ``src`` would have
    ended exactly there: we never read past the cap to find out, so a source
    of exactly ``limit`` bytes is reported as too large. Raise the cap to
    admit it.

    Read/write errors propagate unchanged.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")

    written = 0
    while written < limit:
        b = src.read(min(chunk_size, limit - written))
        if not b:
            return written
        dst.write(b)
        written += len(b)

    raise SizeLimitExceeded(limit, written)
