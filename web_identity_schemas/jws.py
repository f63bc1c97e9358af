# web_identity_schemas/jws.py
"""JSON Web Signature (RFC 7515) headers and serializations."""

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError

from .constants import DETACHED_JWS_STRING_REGEX, JWS_STRING_REGEX
from .jwa import JwsAlgorithm
from .jwk import JsonWebKey
from .primitives import Base64, Base64Url, OptionalBase64Url, Url
from .utils import pattern_validator


class JoseHeader(BaseModel):
    """Key and certificate parameters common to JWS, JWE and JWT headers."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    kid: Optional[str] = None
    jku: Optional[Url] = None
    jwk: Optional[JsonWebKey] = None
    x5u: Optional[Url] = None
    x5c: Optional[List[Base64]] = None
    x5t: Optional[Base64Url] = None
    x5t_s256: Optional[Base64Url] = Field(None, alias="x5t#S256")
    crit: Optional[List[str]] = None


class JwsUnprotectedHeader(JoseHeader):
    pass


class JwsProtectedHeader(JoseHeader):
    alg: JwsAlgorithm
    typ: Optional[str] = None
    cty: Optional[str] = None


class JwsSignature(BaseModel):
    """One entry of the ``signatures`` array of the general JSON serialization."""
    model_config = ConfigDict(extra="allow")

    protected: Optional[Base64Url] = None
    header: Optional[JwsUnprotectedHeader] = None
    signature: Base64Url


class JwsGeneralJson(BaseModel):
    model_config = ConfigDict(extra="allow")

    payload: Base64Url
    signatures: List[JwsSignature]


class JwsFlattenedJson(BaseModel):
    model_config = ConfigDict(extra="allow")

    payload: Base64Url
    protected: Optional[Base64Url] = None
    header: Optional[JwsUnprotectedHeader] = None
    signature: Base64Url


class JwsCompactParts(BaseModel):
    """The three segments of a compact JWS. ``payload`` is empty when detached."""
    protected: Base64Url
    payload: OptionalBase64Url
    signature: Base64Url


JwsString = Annotated[
    str,
    pattern_validator(JWS_STRING_REGEX, "jws_string", "Must be a compact JWS (header.payload.signature)"),
]

DetachedJwsString = Annotated[
    str,
    pattern_validator(
        DETACHED_JWS_STRING_REGEX,
        "detached_jws_string",
        "Must be a detached compact JWS (header..signature)",
    ),
]


def split_jws(value: Any) -> Any:
    """Split a compact JWS into its named segments; other input passes through."""
    if not isinstance(value, str):
        return value
    if JWS_STRING_REGEX.fullmatch(value) is None:
        raise PydanticCustomError("jws_string", "Must be a compact JWS (header.payload.signature)")
    protected, payload, signature = value.split(".")
    return {"protected": protected, "payload": payload, "signature": signature}


JwsParsed = Annotated[JwsCompactParts, BeforeValidator(split_jws)]


class JwsObject(BaseModel):
    """A JWS with its protected header already decoded."""
    model_config = ConfigDict(extra="allow")

    protected: JwsProtectedHeader
    unprotected: Optional[JwsUnprotectedHeader] = None
    payload: Base64Url
    signature: Base64Url


def is_jws_string(value: Any) -> bool:
    return isinstance(value, str) and JWS_STRING_REGEX.fullmatch(value) is not None


def is_detached_jws_string(value: Any) -> bool:
    return isinstance(value, str) and DETACHED_JWS_STRING_REGEX.fullmatch(value) is not None
