from __future__ import annotations

from typing import Dict, List

import pytest
from botocore.exceptions import ClientError
from pydantic import ValidationError

from cipher.settings import CipherSettings


class _FakeSSM:
    def __init__(self, params: Dict[str, str]) -> None:
        self._params = params
        self.calls: List[Dict[str, object]] = []

    def get_parameter(self, *, Name: str, WithDecryption: bool):
        self.calls.append({"Name": Name, "WithDecryption": WithDecryption})
        if Name not in self._params:
            raise ClientError({"Error": {"Code": "ParameterNotFound"}}, "GetParameter")
        return {"Parameter": {"Name": Name, "Value": self._params[Name]}}


class _DeniedSSM:
    def get_parameter(self, *, Name: str, WithDecryption: bool):  # noqa: ARG002
        raise ClientError({"Error": {"Code": "AccessDeniedException"}}, "GetParameter")


def test_from_env_parses_keys_and_ttl(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CODEC_FERNET_KEYS", "k1, k2\nk3")
    monkeypatch.setenv("CODEC_TOKEN_TTL", "300")

    s = CipherSettings.from_env()
    assert s.fernet_keys == ["k1", "k2", "k3"]
    assert s.token_ttl_seconds == 300


def test_from_env_ttl_is_optional(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CODEC_FERNET_KEYS", "k1")
    monkeypatch.delenv("CODEC_TOKEN_TTL", raising=False)

    assert CipherSettings.from_env().token_ttl_seconds is None


def test_from_env_missing_keys_raises(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CODEC_FERNET_KEYS", raising=False)
    with pytest.raises(RuntimeError, match="CODEC_FERNET_KEYS"):
        CipherSettings.from_env()


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        CipherSettings(fernet_keys=[])
    with pytest.raises(ValidationError):
        CipherSettings(fernet_keys=["  "])
    with pytest.raises(ValidationError):
        CipherSettings(fernet_keys=["k1"], token_ttl_seconds=-5)


def test_from_ssm_reads_prefixed_parameters():
    ssm = _FakeSSM({"/auth/dev/fernet_keys": "k1,k2", "/auth/dev/token_ttl": "60"})

    s = CipherSettings.from_ssm("/auth/dev/", ssm=ssm)
    assert s.fernet_keys == ["k1", "k2"]
    assert s.token_ttl_seconds == 60
    assert all(c["WithDecryption"] is True for c in ssm.calls)


def test_from_ssm_missing_ttl_is_none():
    ssm = _FakeSSM({"/auth/dev/fernet_keys": "k1"})
    assert CipherSettings.from_ssm("/auth/dev/", ssm=ssm).token_ttl_seconds is None


def test_from_ssm_missing_keys_raises():
    with pytest.raises(RuntimeError, match="/auth/dev/fernet_keys"):
        CipherSettings.from_ssm("/auth/dev/", ssm=_FakeSSM({}))


def test_from_ssm_other_client_errors_propagate():
    with pytest.raises(ClientError):
        CipherSettings.from_ssm("/auth/dev/", ssm=_DeniedSSM())
