"""
Secure object codec: turn a picklable value into an encrypted token and back.

Pipeline
- encode: pickle -> zlib deflate -> base64 text -> cipher.encode
- decode: cipher.decode -> base64 -> zlib inflate -> unpickle -> type check

Notes
- Unpickling runs only after the cipher has accepted the token. Use an
  authenticating cipher (e.g. `FernetCipherExecutor`) for untrusted input;
  `NoOpCipherExecutor` offers no protection against crafted payloads.
"""

from __future__ import annotations

import base64
import binascii
import logging
import pickle
from typing import TYPE_CHECKING, Any, Type, TypeVar

from .compression import deflate_stream, inflate_stream
from .errors import CompressionError, NullObjectError, SerializationError, TypeMismatchError
from .framing import UTF8, encode_base64

if TYPE_CHECKING:
    from cipher.executor import CipherExecutor


logger = logging.getLogger(__name__)

T = TypeVar("T")


# -------------------- Bridge between serialized bytes and cipher text --------------------

def _serialized_to_text(data: bytes) -> str:
    return encode_base64(deflate_stream(data))


def _text_to_serialized(text: str) -> bytes:
    try:
        framed = base64.b64decode(text.encode(UTF8), validate=True)
    except (binascii.Error, UnicodeEncodeError) as ex:
        raise SerializationError("Decrypted payload is not valid base64") from ex
    try:
        return inflate_stream(framed)
    except CompressionError as ex:
        raise SerializationError("Decrypted payload is not a valid zlib stream") from ex


# -------------------- Public API --------------------

def encode_object(obj: Any, cipher: CipherExecutor) -> str:
    """Serialize `obj` and return it as an encrypted token.

    Raises SerializationError if `obj` cannot be pickled. Cipher errors propagate.
    """
    try:
        data = pickle.dumps(obj, protocol=pickle.HIGHEST_PROTOCOL)
    except Exception as ex:
        # pickling runs user __reduce__/__getstate__ hooks and may hit the recursion limit
        raise SerializationError(f"Cannot serialize object of type {type(obj)!r}: {ex}") from ex
    return encode_serialized_object(data, cipher)


def encode_serialized_object(data: bytes, cipher: CipherExecutor) -> str:
    """Encrypt already-serialized object bytes into a token."""
    return cipher.encode(_serialized_to_text(bytes(data)))


def decode_object(encoded: Any, cipher: CipherExecutor, expected_type: Type[T]) -> T:
    """Decrypt and deserialize a token produced by `encode_object`.

    `encoded` is converted with `str()` before decryption.

    Raises:
    - whatever `cipher.decode` raises (e.g. DecryptionError)
    - SerializationError if the payload cannot be unframed or unpickled
    - NullObjectError if the payload deserializes to None
    - TypeMismatchError if the object is not an instance of `expected_type`
    """
    text = cipher.decode(str(encoded))
    data = _text_to_serialized(text)
    try:
        obj = pickle.loads(data)
    except Exception as ex:
        # unpickling can surface nearly any exception type from corrupt input
        raise SerializationError(f"Cannot deserialize object: {ex}") from ex

    if obj is None:
        raise NullObjectError(f"Can not decode encoded object {encoded}")

    if not isinstance(obj, expected_type):
        raise TypeMismatchError(
            f"Decoded object is of type {type(obj)!r} when we were expecting {expected_type!r}"
        )

    logger.debug("Decoded object of type %s", type(obj).__name__)
    return obj
