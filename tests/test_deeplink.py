"""Unit tests for termnotify.deeplink."""

import pytest

from termnotify.deeplink import build_focus_uri, parse_focus_uri


def test_build_focus_uri():
    assert build_focus_uri("abc123") == "termnotify:///focus?tid=abc123"


def test_build_focus_uri_with_authority():
    assert build_focus_uri("abc", authority="host") == "termnotify://host/focus?tid=abc"


def test_token_is_url_encoded():
    uri = build_focus_uri("a b&c")
    assert "a%20b%26c" in uri
    assert parse_focus_uri(uri) == "a b&c"


@pytest.mark.parametrize(
    "uri",
    [
        "termnotify:///focus?tid=tok",
        "termnotify://focus?tid=tok",
        "termnotify://some-host/focus?tid=tok",
    ],
)
def test_parse_accepts_focus_forms(uri):
    assert parse_focus_uri(uri) == "tok"


@pytest.mark.parametrize(
    "uri",
    [
        "https:///focus?tid=tok",
        "termnotify:///open?tid=tok",
        "termnotify:///focus",
        "termnotify:///focus?tid=",
        "not a uri",
    ],
)
def test_parse_rejects_other_uris(uri):
    assert parse_focus_uri(uri) is None


def test_custom_scheme():
    uri = build_focus_uri("tok", scheme="myterm")
    assert parse_focus_uri(uri) is None
    assert parse_focus_uri(uri, scheme="myterm") == "tok"
