"""Unit tests for primitives module"""

import pytest

from web_identity_schemas.primitives import (
    Base64,
    Base64Url,
    DateTimeStamp,
    IsoDateTime,
    OptionalBase64Url,
    UnixTimestamp,
    Uri,
    Url,
    is_base64,
    is_base64url,
    is_date_time_stamp,
    is_iso_date_time,
    is_uri,
)
from web_identity_schemas.validation import is_valid, validate


@pytest.mark.parametrize("value", [
    "SGVsbG8",
    "AQAB",
    "abc123_ABC-",
    "z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK",
])
def test_base64url_accepts(value):
    assert is_valid(Base64Url, value)
    assert is_base64url(value)


@pytest.mark.parametrize("value", [
    "SGVsbG8=",
    "Hello+World",
    "a/b",
    "",
    " SGVsbG8",
    "SGVs bG8",
    "SGVsbG8!",
])
def test_base64url_rejects(value):
    assert not is_valid(Base64Url, value)
    assert not is_base64url(value)


def test_base64url_issue_kinds():
    """Padding is a pattern error, a number is a shape error"""
    result = validate(Base64Url, "SGVsbG8=")
    assert not result.valid
    assert result.issues[0].type == "base64url"
    assert result.issues[0].kind == "pattern"

    result = validate(Base64Url, 123)
    assert result.issues[0].kind == "shape"


def test_optional_base64url_allows_empty():
    assert is_valid(OptionalBase64Url, "")
    assert is_valid(OptionalBase64Url, "SGVsbG8")
    assert not is_valid(OptionalBase64Url, "SGVsbG8=")


@pytest.mark.parametrize("value,expected", [
    ("SGVsbG8=", True),
    ("QUJD", True),
    ("QQ==", True),
    ("SGVsbG8", False),
    ("SGVsbG8-", False),
    ("Q===", False),
])
def test_base64(value, expected):
    assert is_valid(Base64, value) is expected
    assert is_base64(value) is expected


@pytest.mark.parametrize("value,expected", [
    ("https://example.com", True),
    ("did:example:123", True),
    ("urn:uuid:3978344f-8596-4c3a-a978-8fcaba3903c5", True),
    ("not a uri", False),
    ("1http://example.com", False),
    ("https:", False),
])
def test_uri(value, expected):
    assert is_valid(Uri, value) is expected
    assert is_uri(value) is expected


def test_url_keeps_original_string():
    result = validate(Url, "https://example.com/certs")
    assert result.valid
    assert result.data == "https://example.com/certs"

    result = validate(Url, "not-a-url")
    assert not result.valid
    assert result.issues[0].type == "url_parsing"


@pytest.mark.parametrize("value,expected", [
    ("2023-01-01T00:00:00Z", True),
    ("2023-01-01T00:00:00.123+02:00", True),
    ("2023-01-01", False),
    ("2023-01-01T00:00:00.12Z", False),
    ("2023-01-01T00:00:00", False),
])
def test_date_time_stamp(value, expected):
    assert is_valid(DateTimeStamp, value) is expected
    assert is_date_time_stamp(value) is expected


@pytest.mark.parametrize("value,expected", [
    ("2023-01-01T00:00:00Z", True),
    ("2010-01-01T19:23:24.123456+05:30", True),
    ("2024-02-29T12:00:00Z", True),
    ("2023-02-29T12:00:00Z", False),
    ("2023-13-01T00:00:00Z", False),
    ("2023-01-01T24:00:00Z", False),
    ("2023-01-01T00:00:00", False),
    ("2023-01-01T00:00:00+25:00", False),
    ("yesterday", False),
])
def test_iso_date_time(value, expected):
    assert is_valid(IsoDateTime, value) is expected
    assert is_iso_date_time(value) is expected


@pytest.mark.parametrize("value,expected", [
    (0, True),
    (1700000000, True),
    (-1, False),
    (1.5, False),
    ("1700000000", False),
    (True, False),
])
def test_unix_timestamp(value, expected):
    assert is_valid(UnixTimestamp, value) is expected


def test_predicates_reject_non_strings():
    for predicate in (is_base64url, is_base64, is_uri, is_date_time_stamp, is_iso_date_time):
        assert predicate(None) is False
        assert predicate(42) is False
