from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional

import boto3
from botocore.exceptions import ClientError
from pydantic import BaseModel, Field, field_validator


# Environment variable names for convenience configuration
ENV_FERNET_KEYS = "CODEC_FERNET_KEYS"
ENV_TOKEN_TTL = "CODEC_TOKEN_TTL"

# SSM parameter names, relative to a caller-supplied prefix (e.g. "/auth/prod/")
PARAM_FERNET_KEYS = "fernet_keys"
PARAM_TOKEN_TTL = "token_ttl"


def _env_value(name: str) -> Optional[str]:
    return os.environ.get(name, "").strip() or None


def _split_keys(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    norm = raw.replace("\n", ",").replace(" ", ",")
    return [tok.strip() for tok in norm.split(",") if tok.strip()]


def _read_ssm_secrets(prefix: str, names: Iterable[str], *, ssm: Optional[object] = None) -> Dict[str, Optional[str]]:
    """Fetch `{prefix}{name}` SecureString parameters; a missing parameter maps to None."""
    client = ssm or boto3.client("ssm")
    found: Dict[str, Optional[str]] = {}
    for name in names:
        try:
            param = client.get_parameter(Name=f"{prefix}{name}", WithDecryption=True)["Parameter"]
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != "ParameterNotFound":
                raise
            param = {}
        found[name] = (param.get("Value") or "").strip() or None
    return found


class CipherSettings(BaseModel):
    """
    Configuration for the Fernet cipher used by the secure object codec.

    Fields
    - fernet_keys: URL-safe base64 Fernet keys; the first one encrypts, all of
      them may decrypt (key rotation).
    - token_ttl_seconds: maximum token age accepted on decode (None = no limit).

    Sources
    - `from_env()`: `CODEC_FERNET_KEYS` (comma/space separated), `CODEC_TOKEN_TTL`
    - `from_ssm(prefix)`: `{prefix}fernet_keys`, `{prefix}token_ttl` (SecureString ok)
    """

    fernet_keys: List[str] = Field(min_length=1, description="Fernet keys, primary first")
    token_ttl_seconds: Optional[int] = Field(
        default=None,
        gt=0,
        description="Max accepted token age in seconds (None disables the check)",
    )

    @field_validator("fernet_keys")
    @classmethod
    def _strip_keys(cls, v: List[str]) -> List[str]:
        keys = [k.strip() for k in v if k and k.strip()]
        if not keys:
            raise ValueError("at least one non-empty Fernet key is required")
        return keys

    # -------- Construction helpers --------
    @classmethod
    def from_env(cls) -> "CipherSettings":
        keys = _split_keys(_env_value(ENV_FERNET_KEYS))
        if not keys:
            raise RuntimeError(
                f"Missing required environment variables for cipher settings: {ENV_FERNET_KEYS}"
            )
        return cls(fernet_keys=keys, token_ttl_seconds=_env_value(ENV_TOKEN_TTL))

    @classmethod
    def from_ssm(cls, prefix: str, *, ssm: Optional[object] = None) -> "CipherSettings":
        params = _read_ssm_secrets(prefix, [PARAM_FERNET_KEYS, PARAM_TOKEN_TTL], ssm=ssm)
        keys = _split_keys(params.get(PARAM_FERNET_KEYS))
        if not keys:
            raise RuntimeError(f"Missing required configuration: {prefix}{PARAM_FERNET_KEYS}")
        return cls(fernet_keys=keys, token_ttl_seconds=params.get(PARAM_TOKEN_TTL))
