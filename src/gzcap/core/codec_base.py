from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO


class StreamCodec(ABC):
    """
    Minimal interface for pluggable streaming codecs.

    Wrappers returned by open_writer/open_reader never own ``raw``: closing
    them flushes the codec framing but leaves the file open, so the caller
    keeps a single place that closes (and possibly deletes) it.
    """

    codec_id: str
    extension: str
    level: int

    # Exceptions that mean "this is not a valid stream" while reading.
    corrupt_errors: tuple[type[BaseException], ...] = ()

    @abstractmethod
    def open_writer(self, raw: BinaryIO) -> BinaryIO:
        raise NotImplementedError

    @abstractmethod
    def open_reader(self, raw: BinaryIO) -> BinaryIO:
        """Return a decompressing reader over ``raw``.

        Must validate the stream header eagerly and raise CorruptStream, so
        callers can fail before creating any output.
        """
        raise NotImplementedError
