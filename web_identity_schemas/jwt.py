# web_identity_schemas/jwt.py
"""JSON Web Token (RFC 7519) header, payload and serialized forms.

The shape of the signature depends on the header: ``alg: "none"`` requires
an empty signature, every signature algorithm requires a base64url one.
"""

import base64
import binascii
import json
import logging
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
)
from pydantic_core import PydanticCustomError

from .constants import JWT_STRING_REGEX, SIGNED_TAG, UNSECURED_ALGORITHM, UNSECURED_TAG
from .jwa import SignatureAlgorithm, UnsecuredAlgorithm
from .jws import JoseHeader
from .primitives import Base64Url, OptionalBase64Url, UnixTimestamp
from .utils import pattern_validator, single_or_array
from .validation import parse

logger = logging.getLogger(__name__)


class JwtHeaderBase(JoseHeader):
    typ: Optional[Literal["JWT"]] = None
    cty: Optional[str] = None


class JwtUnsecuredHeader(JwtHeaderBase):
    alg: UnsecuredAlgorithm


class JwtSignedHeader(JwtHeaderBase):
    alg: SignatureAlgorithm


JwtHeader = Annotated[Union[JwtUnsecuredHeader, JwtSignedHeader], Field(discriminator="alg")]


class JwtPayload(BaseModel):
    """Registered claims. Any other claim is kept as-is."""
    model_config = ConfigDict(extra="allow")

    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[single_or_array(str)] = None
    exp: Optional[UnixTimestamp] = None
    nbf: Optional[UnixTimestamp] = None
    iat: Optional[UnixTimestamp] = None
    jti: Optional[str] = None


def _require_empty_signature(value: str) -> str:
    if value != "":
        raise PydanticCustomError(
            "unsecured_signature",
            'Unsecured JWTs (alg "none") must have an empty signature',
        )
    return value


class JwtUnsecuredObject(BaseModel):
    header: JwtUnsecuredHeader
    payload: JwtPayload
    signature: Annotated[str, AfterValidator(_require_empty_signature)]


class JwtSignedObject(BaseModel):
    header: JwtSignedHeader
    payload: JwtPayload
    signature: Base64Url


def _header_algorithm(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        header = value.get("header")
    else:
        header = getattr(value, "header", None)
    if isinstance(header, dict):
        alg = header.get("alg")
    else:
        alg = getattr(header, "alg", None)
    if not isinstance(alg, str):
        return None
    return UNSECURED_TAG if alg == UNSECURED_ALGORITHM else SIGNED_TAG


JwtObject = Annotated[
    Union[
        Annotated[JwtUnsecuredObject, Tag(UNSECURED_TAG)],
        Annotated[JwtSignedObject, Tag(SIGNED_TAG)],
    ],
    Discriminator(
        _header_algorithm,
        custom_error_type="invalid_jwt_header",
        custom_error_message="JWT header must declare an algorithm in 'alg'",
    ),
]
"""A JWT as header, payload and signature, with the signature tied to ``header.alg``."""

JwtString = Annotated[
    str,
    pattern_validator(JWT_STRING_REGEX, "jwt_string", "Must be a compact JWT (header.payload.signature)"),
]


class JwtStringParts(BaseModel):
    header: Base64Url
    payload: Base64Url
    signature: OptionalBase64Url = ""


def split_jwt(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if JWT_STRING_REGEX.fullmatch(value) is None:
        raise PydanticCustomError("jwt_string", "Must be a compact JWT (header.payload.signature)")
    header, payload, signature = value.split(".")
    return {"header": header, "payload": payload, "signature": signature}


JwtParts = Annotated[JwtStringParts, BeforeValidator(split_jwt)]


def b64url_decode(segment: str) -> bytes:
    """Decode an unpadded base64url segment."""
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded)


def _decode_json_segment(segment: str, name: str) -> Dict[str, Any]:
    try:
        decoded = json.loads(b64url_decode(segment))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError):
        raise PydanticCustomError(
            "jwt_decode",
            "JWT {segment} is not base64url encoded JSON",
            {"segment": name},
        )
    if not isinstance(decoded, dict):
        raise PydanticCustomError(
            "jwt_decode",
            "JWT {segment} must be a JSON object",
            {"segment": name},
        )
    return decoded


def decode_jwt_segments(value: Any) -> Any:
    """Turn a compact JWT into ``{"header", "payload", "signature"}``.

    Header and payload are decoded from base64url JSON; the signature is kept
    encoded. Non-string input is passed through for object validation.
    """
    parts = split_jwt(value)
    if not isinstance(value, str):
        return parts
    return {
        "header": _decode_json_segment(parts["header"], "header"),
        "payload": _decode_json_segment(parts["payload"], "payload"),
        "signature": parts["signature"],
    }


JwtDecoded = Annotated[JwtObject, BeforeValidator(decode_jwt_segments)]
"""A compact JWT decoded and validated as a :data:`JwtObject`."""


def decode_jwt(token: str) -> Union[JwtUnsecuredObject, JwtSignedObject]:
    """Decode a compact JWT and validate header, payload and signature shape.

    No signature verification takes place.

    Args:
        token: Compact serialized JWT.

    Returns:
        The validated JWT object model.

    Raises:
        SchemaValidationError: If the token is malformed or violates the JWT schema.
    """
    return parse(JwtDecoded, token)


def is_jwt_string(value: Any) -> bool:
    return isinstance(value, str) and JWT_STRING_REGEX.fullmatch(value) is not None
