from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence, Union

from cryptography.fernet import Fernet, InvalidToken, MultiFernet

from codec.errors import DecryptionError

if TYPE_CHECKING:
    from .settings import CipherSettings


Key = Union[str, bytes]


class CipherExecutor(ABC):
    """Encrypts/decrypts text tokens. Failures propagate to the caller."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def encode(self, plaintext: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def decode(self, ciphertext: str) -> str:
        raise NotImplementedError


class NoOpCipherExecutor(CipherExecutor):
    """Identity cipher: returns its input unchanged in both directions."""

    def encode(self, plaintext: str) -> str:
        return plaintext

    def decode(self, ciphertext: str) -> str:
        return ciphertext


def _to_fernet(key: Key) -> Fernet:
    """Build one Fernet per configured key; rotation wraps several in MultiFernet."""
    raw = key.strip().encode("ascii") if isinstance(key, str) else bytes(key)
    return Fernet(raw)


class FernetCipherExecutor(CipherExecutor):
    """
    Authenticated symmetric encryption of text tokens using Fernet.

    - With several keys, the first one encrypts and any of them may decrypt
      (`MultiFernet`), which allows rotating keys without invalidating tokens.
    - When `ttl` is set, `decode` rejects tokens older than `ttl` seconds.
    """

    def __init__(self, keys: Union[Key, Sequence[Key]], *, ttl: Optional[int] = None) -> None:
        if isinstance(keys, (str, bytes)):
            keys = [keys]
        fernets = [_to_fernet(k) for k in keys]
        if not fernets:
            raise ValueError("at least one Fernet key is required")
        if ttl is not None and ttl <= 0:
            raise ValueError("ttl must be > 0")
        self._fernet: Union[Fernet, MultiFernet] = fernets[0] if len(fernets) == 1 else MultiFernet(fernets)
        self._ttl = ttl

    @classmethod
    def from_settings(cls, settings: "CipherSettings") -> "FernetCipherExecutor":
        return cls(settings.fernet_keys, ttl=settings.token_ttl_seconds)

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode("ascii")

    def encode(self, plaintext: str) -> str:
        token = self._fernet.encrypt(plaintext.encode("utf-8"))
        return token.decode("ascii")

    def decode(self, ciphertext: str) -> str:
        try:
            data = self._fernet.decrypt(ciphertext.encode("utf-8"), ttl=self._ttl)
        except InvalidToken as ex:
            raise DecryptionError("Failed to decrypt token: invalid or expired Fernet token") from ex
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as ex:
            raise DecryptionError("Decrypted token is not valid UTF-8") from ex
