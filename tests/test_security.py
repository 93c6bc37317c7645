# tests/test_security.py
"""Tests for admin credential helpers."""

import base64

import pytest

from lantern.core.security import decode_basic_credentials, is_admin_request, secrets_match


def _basic(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode()).decode()


class TestDecodeBasicCredentials:
    def test_valid_header(self):
        assert decode_basic_credentials(_basic("admin:s3cret")) == ("admin", "s3cret")

    def test_password_may_contain_colons(self):
        assert decode_basic_credentials(_basic("admin:a:b:c")) == ("admin", "a:b:c")

    def test_scheme_is_case_insensitive(self):
        header = _basic("admin:pw").replace("Basic", "basic")
        assert decode_basic_credentials(header) == ("admin", "pw")

    @pytest.mark.parametrize(
        "header",
        [None, "", "Bearer abc", "Basic", "Basic !!!notbase64", _basic("no-separator")],
    )
    def test_unusable_headers(self, header):
        assert decode_basic_credentials(header) is None


class TestIsAdminRequest:
    def _check(self, authorization=None, shared_secret=None):
        return is_admin_request(
            authorization=authorization,
            shared_secret=shared_secret,
            admin_user="admin",
            admin_pass="pw",
        )

    def test_basic_credentials(self):
        assert self._check(authorization=_basic("admin:pw")) is True
        assert self._check(authorization=_basic("admin:nope")) is False
        assert self._check(authorization=_basic("root:pw")) is False

    def test_shared_secret(self):
        assert self._check(shared_secret="pw") is True
        assert self._check(shared_secret="nope") is False

    def test_bad_basic_with_good_secret(self):
        assert self._check(authorization=_basic("admin:nope"), shared_secret="pw") is True

    def test_nothing_supplied(self):
        assert self._check() is False


def test_secrets_match():
    assert secrets_match("same", "same") is True
    assert secrets_match("same", "different") is False
    assert secrets_match(None, "anything") is False
    assert secrets_match("ünïcode", "ünïcode") is True
