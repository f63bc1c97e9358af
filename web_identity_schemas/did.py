# web_identity_schemas/did.py
"""Decentralized Identifiers (DID Core 1.0): identifiers, verification methods, DID documents."""

import logging
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

import multibase
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError

from .constants import (
    DID_CONTEXT_V1,
    DID_METHOD_REGEX,
    DID_PREFIX,
    DID_REGEX,
    DID_URL_REGEX,
    JSON_WEB_KEY_TYPE,
    KEY_MATERIAL_PROPERTIES,
    LEGACY_VERIFICATION_METHOD_TYPES,
    MULTIKEY_TYPE,
)
from .errors import ConfigurationError
from .json_ld import jsonld_context
from .jwk import JsonWebKey
from .primitives import Base58Btc, Uri
from .utils import pattern_validator, shape_union, single_or_array

logger = logging.getLogger(__name__)

Did = Annotated[str, pattern_validator(DID_REGEX, "did", "Must be a valid DID")]
DidUrl = Annotated[str, pattern_validator(DID_URL_REGEX, "did_url", "Must be a valid DID URL")]
DidMethod = Annotated[
    str,
    pattern_validator(DID_METHOD_REGEX, "did_method", "DID method must contain only lowercase letters and digits"),
]


def is_did(value: Any) -> bool:
    """Check whether ``value`` is a syntactically valid DID (no path, query or fragment)."""
    return isinstance(value, str) and DID_REGEX.fullmatch(value) is not None


def is_did_url(value: Any) -> bool:
    return isinstance(value, str) and DID_URL_REGEX.fullmatch(value) is not None


def is_did_method(value: Any) -> bool:
    return isinstance(value, str) and DID_METHOD_REGEX.fullmatch(value) is not None


def _require_method(method: str) -> str:
    if not is_did_method(method):
        raise ConfigurationError(f"Invalid DID method name: {method!r}")
    return method


@lru_cache(maxsize=None)
def did_schema(method: str) -> Any:
    """Create a DID type restricted to one DID method.

    Args:
        method: DID method name, e.g. ``"web"`` or ``"key"``.

    Returns:
        An annotated string type accepting only ``did:<method>:...`` values.

    Raises:
        ConfigurationError: If ``method`` is not a valid method name.
    """
    prefix = f"{DID_PREFIX}{_require_method(method)}:"

    def check_method(value: str) -> str:
        if not value.startswith(prefix):
            raise PydanticCustomError("did", "Must be a did:{method} DID", {"method": method})
        return value

    logger.debug(f"Building DID schema for method '{method}'")
    return Annotated[Did, AfterValidator(check_method)]


def is_did_with_method(method: str, value: Any) -> bool:
    """Check whether ``value`` is a valid DID of the given method."""
    prefix = f"{DID_PREFIX}{_require_method(method)}:"
    return is_did(value) and value.startswith(prefix)


def did_method_of(value: str) -> Optional[str]:
    """Return the method name of a DID or DID URL, or ``None`` if it is neither."""
    if not is_did_url(value):
        return None
    return value.split(":", 2)[1]


def _check_multibase(value: str) -> str:
    try:
        multibase.decode(value)
    except (ValueError, TypeError, KeyError):
        raise PydanticCustomError("multibase", "Must be a valid multibase encoded value")
    return value


MultibaseValue = Annotated[str, AfterValidator(_check_multibase)]


class BaseVerificationMethod(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: DidUrl
    controller: Did


class JsonWebKeyVerificationMethod(BaseVerificationMethod):
    """``JsonWebKey`` verification method with an embedded public JWK."""
    type: Literal[JSON_WEB_KEY_TYPE]
    publicKeyJwk: JsonWebKey


class MultikeyVerificationMethod(BaseVerificationMethod):
    """``Multikey`` verification method with a multibase-encoded public key."""
    type: Literal[MULTIKEY_TYPE]
    publicKeyMultibase: MultibaseValue


class LegacyVerificationMethod(BaseVerificationMethod):
    """Suite-specific verification method types (JsonWebKey2020, Ed25519VerificationKey2020, ...).

    Key material may be given in any one of the supported representations.
    """
    type: Literal[LEGACY_VERIFICATION_METHOD_TYPES]
    publicKeyJwk: Optional[JsonWebKey] = None
    publicKeyMultibase: Optional[MultibaseValue] = None
    publicKeyBase58: Optional[Base58Btc] = None

    @model_validator(mode="after")
    def check_single_key_material(self) -> "LegacyVerificationMethod":
        present = [name for name in KEY_MATERIAL_PROPERTIES if getattr(self, name) is not None]
        if len(present) > 1:
            raise PydanticCustomError(
                "conflicting_key_material",
                "Verification method must express its key in only one property, got: {present}",
                {"present": ", ".join(present)},
            )
        return self


VerificationMethod = Annotated[
    Union[JsonWebKeyVerificationMethod, MultikeyVerificationMethod, LegacyVerificationMethod],
    Field(discriminator="type"),
]

VerificationRelationship = shape_union(
    "Must be a DID URL or an embedded verification method",
    string=DidUrl,
    object=VerificationMethod,
)
"""Entry of ``authentication``, ``assertionMethod`` and the other relationships."""

ServiceEndpointMap = Dict[str, Any]

ServiceEndpoint = shape_union(
    "Service endpoint must be a URI, a map or an array of those",
    string=Uri,
    object=ServiceEndpointMap,
    array=List[
        shape_union(
            "Service endpoint entries must be URIs or maps",
            string=Uri,
            object=ServiceEndpointMap,
        )
    ],
)


class Service(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Uri
    type: single_or_array(str)
    serviceEndpoint: ServiceEndpoint


class DidDocument(BaseModel):
    """A DID document. Properties outside DID Core are kept."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    context: jsonld_context(DID_CONTEXT_V1) = Field(alias="@context")
    id: Did
    alsoKnownAs: Optional[List[Uri]] = None
    controller: Optional[single_or_array(Did)] = None
    verificationMethod: Optional[List[VerificationMethod]] = None
    authentication: Optional[List[VerificationRelationship]] = None
    assertionMethod: Optional[List[VerificationRelationship]] = None
    keyAgreement: Optional[List[VerificationRelationship]] = None
    capabilityInvocation: Optional[List[VerificationRelationship]] = None
    capabilityDelegation: Optional[List[VerificationRelationship]] = None
    service: Optional[List[Service]] = None
