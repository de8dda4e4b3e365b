"""
Cipher collaborators for the secure object codec.

The codec only relies on the `CipherExecutor` contract
(`encode(str) -> str`, `decode(str) -> str`); Fernet-backed and no-op
implementations live here together with their configuration.
"""

from .executor import CipherExecutor, FernetCipherExecutor, NoOpCipherExecutor
from .settings import CipherSettings

__all__ = ["CipherExecutor", "FernetCipherExecutor", "NoOpCipherExecutor", "CipherSettings"]
