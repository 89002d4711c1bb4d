from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from gzcap.core.codec_base import StreamCodec
from gzcap.errors import CorruptStream, MissingDependency

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None

ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"
ZSTD_MAX_FRAME_HEADER = 18


@dataclass
class CodecZstd(StreamCodec):
    """
    Zstandard frames via the ``zstandard`` streaming API.

    The dependency is optional: gzip works without it, and selecting zstd
    without it installed is reported as MissingDependency.
    """

    level: int = 3
    codec_id: str = "zstd"
    extension: str = ".zst"

    def __post_init__(self) -> None:
        if not (1 <= self.level <= 22):
            raise ValueError(f"zstd level must be 1..22, got {self.level}")
        self._require()

    @property
    def corrupt_errors(self) -> tuple[type[BaseException], ...]:  # type: ignore[override]
        if zstd is None:
            return ()
        return (zstd.ZstdError,)

    def _require(self) -> None:
        if zstd is None:
            raise MissingDependency(
                "module 'zstandard' not available. Install with: python3 -m pip install 'gzcap[zstd]'"
            )

    def open_writer(self, raw: BinaryIO) -> BinaryIO:
        self._require()
        c = zstd.ZstdCompressor(level=int(self.level))
        return c.stream_writer(raw, closefd=False)

    def open_reader(self, raw: BinaryIO) -> BinaryIO:
        self._require()
        head = raw.read(ZSTD_MAX_FRAME_HEADER)
        raw.seek(0)
        if head[: len(ZSTD_MAGIC)] != ZSTD_MAGIC:
            raise CorruptStream("zstd: invalid frame header (bad magic)")
        try:
            zstd.get_frame_parameters(head)
        except zstd.ZstdError as e:
            raise CorruptStream(f"zstd: invalid frame header: {e}") from e

        return zstd.ZstdDecompressor().stream_reader(raw, closefd=False)
