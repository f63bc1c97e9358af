# web_identity_schemas/jwe.py
"""JSON Web Encryption (RFC 7516) headers and serializations."""

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt
from pydantic_core import PydanticCustomError

from .constants import JWE_STRING_REGEX
from .jwa import CompressionAlgorithm, ContentEncryptionAlgorithm, KeyManagementAlgorithm
from .jwk import JsonWebKey
from .jws import JoseHeader
from .primitives import Base64Url, OptionalBase64Url
from .utils import pattern_validator


class JweProtectedHeader(JoseHeader):
    alg: KeyManagementAlgorithm
    enc: ContentEncryptionAlgorithm
    zip: Optional[CompressionAlgorithm] = None
    typ: Optional[str] = None
    cty: Optional[str] = None
    epk: Optional[JsonWebKey] = None
    apu: Optional[Base64Url] = None
    apv: Optional[Base64Url] = None
    iv: Optional[Base64Url] = None
    tag: Optional[Base64Url] = None
    p2s: Optional[Base64Url] = None
    p2c: Optional[Annotated[StrictInt, Field(ge=1)]] = None


class JweUnprotectedHeader(JoseHeader):
    """Shared unprotected header (``unprotected`` member)."""


class JwePerRecipientHeader(JoseHeader):
    alg: Optional[KeyManagementAlgorithm] = None


class JweRecipient(BaseModel):
    model_config = ConfigDict(extra="allow")

    header: Optional[JwePerRecipientHeader] = None
    # Empty for direct key agreement and direct encryption.
    encrypted_key: OptionalBase64Url = ""


class JweGeneralJson(BaseModel):
    model_config = ConfigDict(extra="allow")

    protected: Optional[Base64Url] = None
    unprotected: Optional[JweUnprotectedHeader] = None
    iv: Base64Url
    ciphertext: Base64Url
    tag: Base64Url
    aad: Optional[Base64Url] = None
    recipients: List[JweRecipient]


class JweFlattenedJson(BaseModel):
    model_config = ConfigDict(extra="allow")

    protected: Optional[Base64Url] = None
    unprotected: Optional[JweUnprotectedHeader] = None
    header: Optional[JwePerRecipientHeader] = None
    encrypted_key: OptionalBase64Url = ""
    iv: Base64Url
    ciphertext: Base64Url
    tag: Base64Url
    aad: Optional[Base64Url] = None


class JweCompactParts(BaseModel):
    protected: Base64Url
    encrypted_key: OptionalBase64Url
    iv: Base64Url
    ciphertext: Base64Url
    tag: Base64Url


JweString = Annotated[
    str,
    pattern_validator(
        JWE_STRING_REGEX,
        "jwe_string",
        "Must be a compact JWE (header.encryptedKey.iv.ciphertext.tag)",
    ),
]


def split_jwe(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if JWE_STRING_REGEX.fullmatch(value) is None:
        raise PydanticCustomError("jwe_string", "Must be a compact JWE (header.encryptedKey.iv.ciphertext.tag)")
    protected, encrypted_key, iv, ciphertext, tag = value.split(".")
    return {
        "protected": protected,
        "encrypted_key": encrypted_key,
        "iv": iv,
        "ciphertext": ciphertext,
        "tag": tag,
    }


JweParsed = Annotated[JweCompactParts, BeforeValidator(split_jwe)]
"""A compact JWE string split into its five named segments."""


class JweObject(BaseModel):
    model_config = ConfigDict(extra="allow")

    protected: JweProtectedHeader
    unprotected: Optional[JweUnprotectedHeader] = None
    encrypted_key: OptionalBase64Url
    iv: Base64Url
    ciphertext: Base64Url
    tag: Base64Url


def is_jwe_string(value: Any) -> bool:
    return isinstance(value, str) and JWE_STRING_REGEX.fullmatch(value) is not None
