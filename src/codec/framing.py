from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional, Union


logger = logging.getLogger(__name__)

UTF8 = "utf-8"


def encode_base64(data: bytes) -> str:
    """Base64-encode `data` (standard alphabet, no line breaks) as a string."""
    return base64.b64encode(bytes(data)).decode("ascii")


def encode_base64_to_bytes(data: bytes) -> bytes:
    """Base64-encode `data`, keeping the result as ASCII bytes."""
    return base64.b64encode(bytes(data))


def decode_base64(data: Union[str, bytes]) -> Optional[bytes]:
    """Decode standard base64 text or bytes.

    A `str` is first encoded as UTF-8. Decoding is strict: characters outside
    the alphabet or a bad length/padding fail the decode.

    Returns the decoded bytes, or None (logged at ERROR) when decoding fails.
    """
    try:
        raw = data.encode(UTF8) if isinstance(data, str) else bytes(data)
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, UnicodeEncodeError, TypeError):
        logger.error("Base64 decoding failed", exc_info=True)
        return None
