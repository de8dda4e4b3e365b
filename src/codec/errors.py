from __future__ import annotations


class CodecError(RuntimeError):
    """Base error for codec operations."""


class EncodingUnsupportedError(CodecError):
    """Text could not be encoded with the codec's character set (UTF-8)."""


class CompressionError(CodecError):
    """A deflate/inflate stream could not be produced or consumed."""


class SerializationError(CodecError):
    """Object serialization or deserialization failed."""


class NullObjectError(CodecError):
    """Deserialization produced no object."""


class TypeMismatchError(CodecError, TypeError):
    """Decoded object is not an instance of the expected type."""


class DecryptionError(CodecError, ValueError):
    """Ciphertext could not be decrypted (bad token, wrong key, expired)."""
