from __future__ import annotations

import logging

import pytest

from codec.framing import decode_base64, encode_base64, encode_base64_to_bytes


def test_encode_known_literal():
    assert encode_base64(b"CAS") == "Q0FT"
    assert encode_base64_to_bytes(b"CAS") == b"Q0FT"


def test_decode_known_literal_from_str_and_bytes():
    assert decode_base64("Q0FT") == b"CAS"
    assert decode_base64(b"Q0FT") == b"CAS"


@pytest.mark.parametrize(
    "payload",
    [b"", b"\x00", bytes(range(256)), "ticket-ünïcødé-✓".encode("utf-8"), b"x" * 1000],
)
def test_decode_inverts_encode(payload: bytes):
    assert decode_base64(encode_base64(payload)) == payload
    assert decode_base64(encode_base64_to_bytes(payload)) == payload


def test_no_line_breaks_in_long_output():
    out = encode_base64(b"a" * 500)
    assert "\n" not in out and "\r" not in out


@pytest.mark.parametrize("bad", ["Q0F", "Q0F$", "Q0FT\n", "Q0-_"])
def test_decode_invalid_returns_none_and_logs(bad: str, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.ERROR, logger="codec.framing"):
        assert decode_base64(bad) is None
    assert any("Base64 decoding failed" in r.getMessage() for r in caplog.records)


def test_decode_unencodable_text_returns_none():
    assert decode_base64("\ud800") is None
