from __future__ import annotations

import io

import pytest

from gzcap.core.bounded_copy import bounded_copy
from gzcap.errors import SizeLimitExceeded


class _OneByteReader(io.RawIOBase):
    """Short reads: at most one byte per call."""

    def __init__(self, data: bytes) -> None:
        self._buf = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def read(self, n: int = -1) -> bytes:
        return self._buf.read(1 if n != 0 else 0)


class _BrokenReader(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def read(self, n: int = -1) -> bytes:
        raise OSError("device went away")


def test_source_shorter_than_limit() -> None:
    dst = io.BytesIO()
    n = bounded_copy(dst, io.BytesIO(b"x" * 9), 10)
    assert n == 9
    assert dst.getvalue() == b"x" * 9


def test_source_of_exactly_limit_bytes_is_reported_as_overflow() -> None:
    dst = io.BytesIO()
    with pytest.raises(SizeLimitExceeded) as ei:
        bounded_copy(dst, io.BytesIO(b"x" * 10), 10)
    assert ei.value.limit == 10
    assert ei.value.written == 10
    assert dst.getvalue() == b"x" * 10


def test_source_longer_than_limit_stops_at_limit() -> None:
    src = io.BytesIO(b"abcdefghij")
    dst = io.BytesIO()
    with pytest.raises(SizeLimitExceeded):
        bounded_copy(dst, src, 4)
    assert dst.getvalue() == b"abcd"
    # never read past the cap
    assert src.tell() == 4


def test_zero_limit_always_overflows() -> None:
    with pytest.raises(SizeLimitExceeded):
        bounded_copy(io.BytesIO(), io.BytesIO(b""), 0)


def test_empty_source() -> None:
    assert bounded_copy(io.BytesIO(), io.BytesIO(b""), 1) == 0


def test_small_chunks_and_short_reads() -> None:
    data = bytes(range(256)) * 3
    dst = io.BytesIO()
    assert bounded_copy(dst, _OneByteReader(data), len(data) + 1, chunk_size=7) == len(data)
    assert dst.getvalue() == data

    dst = io.BytesIO()
    assert bounded_copy(dst, io.BytesIO(data), len(data) + 1, chunk_size=7) == len(data)
    assert dst.getvalue() == data


def test_negative_limit_rejected() -> None:
    with pytest.raises(ValueError):
        bounded_copy(io.BytesIO(), io.BytesIO(b"x"), -1)


def test_read_errors_propagate() -> None:
    with pytest.raises(OSError, match="device went away"):
        bounded_copy(io.BytesIO(), _BrokenReader(), 100)
