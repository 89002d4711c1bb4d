from __future__ import annotations

import gzip
import zlib
from dataclasses import dataclass
from typing import BinaryIO

from gzcap.core.codec_base import StreamCodec
from gzcap.errors import CorruptStream

GZIP_MAGIC = b"\x1f\x8b"


@dataclass
class CodecGzip(StreamCodec):
    """gzip container over DEFLATE (no external deps)."""

    level: int = 6
    codec_id: str = "gzip"
    extension: str = ".gz"

    corrupt_errors = (gzip.BadGzipFile, zlib.error, EOFError)

    def __post_init__(self) -> None:
        if not (0 <= self.level <= 9):
            raise ValueError(f"gzip level must be 0..9, got {self.level}")

    def open_writer(self, raw: BinaryIO) -> BinaryIO:
        return gzip.GzipFile(fileobj=raw, mode="wb", compresslevel=int(self.level))

    def open_reader(self, raw: BinaryIO) -> BinaryIO:
        # GzipFile parses the header lazily and accepts an empty file as an
        # empty stream; check the magic ourselves, then force the header read.
        magic = raw.read(len(GZIP_MAGIC))
        if magic != GZIP_MAGIC:
            raise CorruptStream("gzip: invalid header (bad magic)")
        raw.seek(0)

        r = gzip.GzipFile(fileobj=raw, mode="rb")
        try:
            r.peek(1)
        except self.corrupt_errors as e:
            r.close()
            raise CorruptStream(f"gzip: invalid header: {e}") from e
        return r
