from __future__ import annotations

from gzcap.core.codec_base import StreamCodec
from gzcap.core.codec_gzip import CodecGzip
from gzcap.core.codec_zstd import CodecZstd
from gzcap.errors import UsageError

DEFAULT_CODEC_ID = "gzip"

_CODECS: dict[str, type[StreamCodec]] = {
    "gzip": CodecGzip,
    "zstd": CodecZstd,
}


def codec_ids() -> list[str]:
    return sorted(_CODECS)


def resolve_codec(codec_id: str, level: int | None = None) -> StreamCodec:
    """Build a codec by id; ``level`` None keeps the codec default."""
    cid = codec_id.strip().lower()
    cls = _CODECS.get(cid)
    if cls is None:
        raise UsageError(f"unknown codec: {codec_id!r} (available: {', '.join(codec_ids())})")
    if level is None:
        return cls()
    try:
        return cls(level=int(level))  # type: ignore[call-arg]
    except ValueError as e:
        raise UsageError(str(e)) from e
