from __future__ import annotations

import logging
import zlib
from typing import Optional, Union

from .errors import CompressionError, EncodingUnsupportedError
from .framing import UTF8, encode_base64


logger = logging.getLogger(__name__)

DEFAULT_LEVEL = zlib.Z_DEFAULT_COMPRESSION

# Window bits: negative for raw deflate (no header/trailer), positive for zlib-wrapped.
RAW_WBITS = -zlib.MAX_WBITS
ZLIB_WBITS = zlib.MAX_WBITS


def _check_level(level: int) -> int:
    if not (-1 <= int(level) <= 9):
        raise ValueError(f"zlib level must be -1..9, got {level}")
    return int(level)


def _require_bytes(data: object, what: str) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes")
    return bytes(data)


def _deflate(raw: bytes, *, level: int, wbits: int) -> bytes:
    c = zlib.compressobj(_check_level(level), zlib.DEFLATED, wbits)
    # complete stream: compress() output followed by the flushed tail
    return c.compress(raw) + c.flush()


def _inflate(raw: bytes, *, wbits: int) -> bytes:
    """Inflate `raw` in chunks sized to the input length.

    Raises CompressionError on a corrupt or truncated stream. Bytes following
    the end of the stream are ignored.
    """
    chunk = max(len(raw), 1)
    d = zlib.decompressobj(wbits)
    out = bytearray()
    pending = raw
    try:
        while True:
            out += d.decompress(pending, chunk)
            pending = d.unconsumed_tail
            if not pending:
                break
        out += d.flush()
    except zlib.error as ex:
        raise CompressionError(f"Inflate failed: {ex}") from ex
    if not d.eof:
        raise CompressionError("Unexpected end of zlib input stream")
    return bytes(out)


# -------------------- Stream helpers --------------------

def deflate_stream(data: bytes, *, level: int = DEFAULT_LEVEL) -> bytes:
    """Deflate `data` into a zlib-wrapped stream (header + adler32 trailer).

    This is the producer that `decompress` and `inflate` pair with.
    """
    return _deflate(_require_bytes(data, "data"), level=level, wbits=ZLIB_WBITS)


def inflate_stream(data: bytes) -> bytes:
    """Inflate a zlib-wrapped stream to raw bytes; raises CompressionError."""
    return _inflate(_require_bytes(data, "data"), wbits=ZLIB_WBITS)


# -------------------- Public transform --------------------

def compress(data: Union[str, bytes], *, level: int = DEFAULT_LEVEL) -> str:
    """Raw-deflate `data` and return it base64 encoded.

    - `str` input is UTF-8 encoded first; text that cannot be encoded raises
      EncodingUnsupportedError.
    - Uses the no-wrap (raw) deflate form. The result therefore does NOT
      round-trip through `decompress`, which expects zlib-wrapped input.
    """
    if isinstance(data, str):
        try:
            raw = data.encode(UTF8)
        except UnicodeEncodeError as ex:
            raise EncodingUnsupportedError(f"Cannot encode text as {UTF8}") from ex
    else:
        raw = _require_bytes(data, "data")
    return encode_base64(_deflate(raw, level=level, wbits=RAW_WBITS))


def inflate(data: bytes) -> str:
    """Inflate a zlib-wrapped stream and decode it as UTF-8.

    Raises CompressionError when the stream is invalid or the inflated bytes
    are not valid UTF-8.
    """
    out = inflate_stream(data)
    try:
        return out.decode(UTF8)
    except UnicodeDecodeError as ex:
        raise CompressionError(f"Inflated bytes are not valid {UTF8}") from ex


def decompress(data: bytes) -> Optional[str]:
    """Same as `inflate`, but failures are logged and yield None.

    Only stream failures are swallowed; non-bytes input raises TypeError.
    """
    try:
        return inflate(data)
    except CompressionError:
        logger.error("Decompressing %d bytes failed", len(data), exc_info=True)
        return None
