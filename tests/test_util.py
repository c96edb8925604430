from urllib.parse import parse_qs, urlsplit

import pytest

from dbmigrate.util import MultiError, filter_custom_query, suint


def test_suint_raises_for_negative_input():
    with pytest.raises(ValueError):
        suint(-1)


def test_suint_zero():
    assert suint(0) == 0


def test_suint_positive():
    assert suint(42) == 42


def test_filter_custom_query_removes_custom_keys():
    result = filter_custom_query("foo://host?a=b&x-custom=foo&c=d&ok=y")
    query = parse_qs(urlsplit(result).query)
    assert "x-custom" not in query
    assert query["ok"] == ["y"]


def test_filter_custom_query_sorts_remaining_keys():
    result = filter_custom_query("foo://host?a=b&x-custom=foo&c=d&ok=y")
    assert result == "foo://host?a=b&c=d&ok=y"


def test_filter_custom_query_keeps_single_letter_x():
    result = filter_custom_query("foo://host?x=1&x-y=2")
    assert result == "foo://host?x=1"


def test_filter_custom_query_drops_empty_query_marker():
    assert filter_custom_query("foo://host/path?x-only=1") == "foo://host/path"


def test_multi_error_joins_messages_with_and():
    err = MultiError(ValueError("first"), None, RuntimeError("second"))
    assert str(err) == "first and second"
    assert len(err.errors) == 2


def test_multi_error_skips_empty_messages():
    err = MultiError(ValueError(""), ValueError("only"))
    assert str(err) == "only"


def test_multi_error_empty():
    assert str(MultiError()) == ""
    assert MultiError(None).errors == []