# web_identity_schemas/primitives.py
"""Primitive string types: encodings, URIs and timestamps."""

import logging
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, AnyUrl, Field, StrictInt, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError

from .constants import (
    BASE58BTC_REGEX,
    BASE64_REGEX,
    BASE64URL_REGEX,
    DATE_TIME_STAMP_REGEX,
    EC_CURVES,
    ISO_DATE_TIME_REGEX,
    OKP_CURVES,
    URI_REGEX,
)
from .utils import pattern_validator

logger = logging.getLogger(__name__)

Base64Url = Annotated[
    str,
    pattern_validator(BASE64URL_REGEX, "base64url", "Must be a base64url encoded string without padding"),
]
"""base64url (RFC 4648 section 5), unpadded and non-empty."""


def _empty_or_base64url(value: str) -> str:
    if value and BASE64URL_REGEX.fullmatch(value) is None:
        raise PydanticCustomError("base64url", "Must be empty or a base64url encoded string without padding")
    return value


OptionalBase64Url = Annotated[str, AfterValidator(_empty_or_base64url)]
"""base64url or the empty string, e.g. a detached JWS payload or a JWE direct-key segment."""

Base64 = Annotated[
    str,
    pattern_validator(BASE64_REGEX, "base64", "Must be a base64 encoded string"),
]

Base58Btc = Annotated[
    str,
    pattern_validator(BASE58BTC_REGEX, "base58btc", "Must be a base58btc encoded string"),
]

Uri = Annotated[
    str,
    pattern_validator(URI_REGEX, "uri", "Must be a valid URI with scheme"),
]

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url_parsing", "Must be a valid URL")
    return value


Url = Annotated[str, AfterValidator(_check_url)]
"""An absolute URL. The original string is kept rather than pydantic's normalised form."""

DateTimeStamp = Annotated[
    str,
    pattern_validator(
        DATE_TIME_STAMP_REGEX,
        "date_time_stamp",
        "Must be a valid ISO 8601 date-time string",
    ),
]


def _check_iso_date_time(value: str) -> str:
    match = ISO_DATE_TIME_REGEX.fullmatch(value)
    if match is None:
        raise PydanticCustomError("iso_date_time", "Must be an ISO 8601 date-time with a time zone")
    parts = {name: int(part) for name, part in match.groupdict().items() if part is not None}
    try:
        datetime(
            parts["year"],
            parts["month"],
            parts["day"],
            parts["hour"],
            parts["minute"],
            parts["second"],
        )
    except ValueError:
        raise PydanticCustomError("iso_date_time", "Date-time is out of range")
    if parts.get("tz_hour", 0) > 23 or parts.get("tz_minute", 0) > 59:
        raise PydanticCustomError("iso_date_time", "Time zone offset is out of range")
    return value


IsoDateTime = Annotated[str, AfterValidator(_check_iso_date_time)]
"""ISO 8601 / RFC 3339 date-time, ``Z`` or a numeric offset, calendar-checked."""

UnixTimestamp = Annotated[StrictInt, Field(ge=0)]

EcCurve = Literal[EC_CURVES]
OkpCurve = Literal[OKP_CURVES]


def _matches(regex, value: Any) -> bool:
    return isinstance(value, str) and regex.fullmatch(value) is not None


def is_base64url(value: Any) -> bool:
    """Check whether ``value`` is an unpadded, non-empty base64url string."""
    return _matches(BASE64URL_REGEX, value)


def is_base64(value: Any) -> bool:
    return _matches(BASE64_REGEX, value)


def is_uri(value: Any) -> bool:
    return _matches(URI_REGEX, value)


def is_date_time_stamp(value: Any) -> bool:
    return _matches(DATE_TIME_STAMP_REGEX, value)


def is_iso_date_time(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _check_iso_date_time(value)
    except PydanticCustomError:
        return False
    return True
