"""Tests for the session cookie lifecycle helpers."""

import json
from datetime import UTC, datetime
from email.utils import format_datetime
from unittest.mock import MagicMock

import pytest
from fastapi import Response

from cookieseal.security.cookies import (
    COOKIE_ATTRIBUTES,
    clear_session_cookie,
    get_session_token,
    set_session_cookie,
    verify_session_cookie,
)
from cookieseal.security.protocol import CookieSink, CookieSource
from cookieseal.security.session_tokens import (
    SESSION_COOKIE_NAME,
    SessionTokenCodec,
    b64url_decode,
)


def _make_request(cookies=None):
    req = MagicMock()
    req.cookies = cookies or {}
    return req


def _set_cookie_attrs(response: Response) -> dict[str, str | bool]:
    """Parse the single Set-Cookie header into a lowercase attribute dict."""
    headers = response.headers.getlist("set-cookie")
    assert len(headers) == 1
    name_value, *attrs = headers[0].split("; ")
    name, _, value = name_value.partition("=")
    parsed: dict[str, str | bool] = {"name": name, "value": value}
    for attr in attrs:
        key, sep, val = attr.partition("=")
        parsed[key.lower()] = val if sep else True
    return parsed


@pytest.fixture
def codec():
    return SessionTokenCodec(b"cookie-secret", clock=lambda: 1000)


class TestGetSessionToken:
    def test_present(self):
        req = _make_request({SESSION_COOKIE_NAME: "abc.def"})
        assert get_session_token(req) == "abc.def"

    def test_absent(self):
        assert get_session_token(_make_request()) is None

    def test_empty_value_is_absent(self):
        assert get_session_token(_make_request({SESSION_COOKIE_NAME: ""})) is None

    def test_other_cookies_ignored(self):
        assert get_session_token(_make_request({"session": "abc.def"})) is None


class TestSetSessionCookie:
    def test_attributes(self):
        response = Response()
        set_session_cookie(response, "tok.sig", clock=lambda: 1000)
        attrs = _set_cookie_attrs(response)
        assert attrs["name"] == SESSION_COOKIE_NAME
        assert attrs["value"] == "tok.sig"
        assert attrs["path"] == "/"
        assert attrs["httponly"] is True
        assert attrs["secure"] is True
        assert attrs["samesite"] == "None"
        # 1000 + 3600 seconds after the epoch
        assert attrs["expires"] == "Thu, 01 Jan 1970 01:16:40 GMT"

    def test_expiry_tracks_clock(self):
        response = Response()
        set_session_cookie(response, "tok.sig", clock=lambda: 86400)
        assert _set_cookie_attrs(response)["expires"] == "Fri, 02 Jan 1970 01:00:00 GMT"

    def test_delegates_to_sink(self):
        sink = MagicMock()
        set_session_cookie(sink, "tok.sig", clock=lambda: 0)
        args, kwargs = sink.set_cookie.call_args
        assert args == (SESSION_COOKIE_NAME, "tok.sig")
        for key, value in COOKIE_ATTRIBUTES.items():
            assert kwargs[key] == value

    def test_expiry_matches_token_exp(self, codec):
        token = codec.generate()
        response = Response()
        set_session_cookie(response, token, clock=codec.clock)
        exp = json.loads(b64url_decode(token.split(".")[0]))["exp"]
        expected = format_datetime(datetime.fromtimestamp(exp, tz=UTC), usegmt=True)
        assert _set_cookie_attrs(response)["expires"] == expected


class TestClearSessionCookie:
    def test_expires_at_epoch(self):
        response = Response()
        clear_session_cookie(response)
        attrs = _set_cookie_attrs(response)
        assert attrs["name"] == SESSION_COOKIE_NAME
        assert attrs["value"] in ("", '""')
        assert attrs["expires"] == "Thu, 01 Jan 1970 00:00:00 GMT"

    def test_attribute_parity_with_set(self):
        set_response = Response()
        set_session_cookie(set_response, "tok.sig", clock=lambda: 1000)
        clear_response = Response()
        clear_session_cookie(clear_response)

        set_attrs = _set_cookie_attrs(set_response)
        clear_attrs = _set_cookie_attrs(clear_response)
        for key in ("path", "httponly", "secure", "samesite"):
            assert clear_attrs[key] == set_attrs[key]
        assert clear_attrs["expires"] != set_attrs["expires"]


class TestVerifySessionCookie:
    def test_valid_cookie(self, codec):
        req = _make_request({SESSION_COOKIE_NAME: codec.generate()})
        assert verify_session_cookie(req, codec) is True

    def test_missing_cookie_skips_crypto(self):
        codec = MagicMock()
        assert verify_session_cookie(_make_request(), codec) is False
        codec.verify.assert_not_called()

    def test_garbage_cookie(self, codec):
        req = _make_request({SESSION_COOKIE_NAME: "garbage"})
        assert verify_session_cookie(req, codec) is False

    def test_foreign_secret(self, codec):
        other = SessionTokenCodec(b"other-secret", clock=lambda: 1000)
        req = _make_request({SESSION_COOKIE_NAME: other.generate()})
        assert verify_session_cookie(req, codec) is False


class TestProtocols:
    def test_fastapi_response_is_sink(self):
        assert isinstance(Response(), CookieSink)

    def test_request_like_is_source(self):
        class Req:
            cookies = {}

        assert isinstance(Req(), CookieSource)
