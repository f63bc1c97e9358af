# web_identity_schemas/vc_core.py
"""Building blocks shared by every Verifiable Credential data model version.

The central piece is :func:`tagged_type`, which validates the ``type`` member
of credentials and presentations. Two policies exist for declared additional
types:

* ``TypeMatch.EXACT`` (default): the array must be exactly the mandatory tag
  followed by the declared types, in that order. Status-list credentials rely
  on this to reject extraneous tags.
* ``TypeMatch.CONTAINS``: a bare string or array containing every required tag
  in any position; the result is reordered to mandatory, declared, then extras.

Without additional types the default policy requires the mandatory tag to be
the first element, while ``TypeMatch.CONTAINS`` accepts it anywhere.
Declaring only the mandatory tag, e.g. ``credential_type(["VerifiableCredential"])``,
pins the exact one-element array under the default policy.
"""

import logging
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, List, Optional, Sequence, Tuple, Type, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, create_model
from pydantic_core import PydanticCustomError

from .constants import VERIFIABLE_CREDENTIAL_TYPE
from .errors import ConfigurationError
from .json_ld import jsonld_context
from .jws import JwsString
from .primitives import DateTimeStamp, Uri
from .utils import includes_all, missing_elements, one_or_many, shape_union, single_or_array

logger = logging.getLogger(__name__)


class TypeMatch(str, Enum):
    EXACT = "exact"
    CONTAINS = "contains"


def normalize_additional_types(additional_types: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    """Turn a factory's ``additional_types`` argument into a tuple."""
    if additional_types is None:
        return ()
    if isinstance(additional_types, str):
        return (additional_types,)
    types = tuple(additional_types)
    if not types:
        raise ConfigurationError("additional_types must not be empty; pass None for no additional types")
    if not all(isinstance(item, str) and item for item in types):
        raise ConfigurationError("additional_types must be non-empty strings")
    return types


@lru_cache(maxsize=None)
def _build_tagged_type(mandatory: str, additional: Tuple[str, ...], match: TypeMatch, pinned: bool) -> Any:
    required = (mandatory,) + additional
    listed = ", ".join(required)

    def first_position(value: List[str]) -> List[str]:
        if not value or value[0] != mandatory:
            raise PydanticCustomError(
                "first_type_missing",
                "First type must be {mandatory}",
                {"mandatory": mandatory},
            )
        return value

    def exact(value: List[str]) -> List[str]:
        if value != list(required):
            raise PydanticCustomError(
                "type_tuple_mismatch",
                "Type must be exactly [{required}]",
                {"required": listed},
            )
        return value

    def contains(value: List[str]) -> List[str]:
        if not includes_all(value, required):
            raise PydanticCustomError(
                "required_type_missing",
                "Type must include {missing}",
                {"missing": ", ".join(missing_elements(value, required))},
            )
        extras = [tag for tag in value if tag not in required]
        return list(required) + extras

    if match is TypeMatch.CONTAINS:
        check = contains
    elif additional or pinned:
        check = exact
    else:
        check = first_position
    logger.debug(f"Building type schema for [{listed}] ({match.value})")
    return Annotated[one_or_many(str), AfterValidator(check)]


def tagged_type(
    mandatory: str,
    additional_types: Union[str, Sequence[str], None] = None,
    match: TypeMatch = TypeMatch.EXACT,
) -> Any:
    """Create a ``type`` validator that requires ``mandatory`` and optional extra tags.

    Args:
        mandatory: Tag every value must carry, e.g. ``"VerifiableCredential"``.
        additional_types: Extra required tags, a single string or an ordered list.
        match: Policy for the required tags, see the module docstring.

    Returns:
        An annotated ``List[str]`` type; valid input is always returned as a list.

    Raises:
        ConfigurationError: If ``additional_types`` is an empty list or holds non-strings.
    """
    declared = normalize_additional_types(additional_types)
    additional = tuple(tag for tag in declared if tag != mandatory)
    return _build_tagged_type(mandatory, additional, TypeMatch(match), bool(declared))


def credential_type(
    additional_types: Union[str, Sequence[str], None] = None,
    match: TypeMatch = TypeMatch.EXACT,
) -> Any:
    """``type`` validator for credentials; ``VerifiableCredential`` is mandatory."""
    return tagged_type(VERIFIABLE_CREDENTIAL_TYPE, additional_types, match)


VcType = credential_type()


class Proof(BaseModel):
    """Embedded proof. Only the shape is checked, never the signature."""
    model_config = ConfigDict(extra="allow")

    type: str
    created: Optional[DateTimeStamp] = None
    verificationMethod: Uri
    proofPurpose: str
    challenge: Optional[str] = None
    domain: Optional[single_or_array(str)] = None
    nonce: Optional[str] = None
    jws: Optional[JwsString] = None
    signatureValue: Optional[str] = None
    proofValue: Optional[str] = None


ProofSet = single_or_array(Proof, min_length=1)
"""One proof or a non-empty array of proofs."""


class CredentialStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: str
    statusListCredential: Optional[str] = None
    statusListIndex: Optional[
        shape_union("Status list index must be a string or a number", string=str, number=int)
    ] = None
    statusPurpose: Optional[str] = None


class CredentialSchemaRef(BaseModel):
    """Entry of ``credentialSchema``."""
    model_config = ConfigDict(extra="allow")

    id: Uri
    type: str


class GenericResource(BaseModel):
    """Evidence, refresh service and terms of use entries."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: single_or_array(str)


class IdObject(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Uri


IdOrObject = shape_union("Must be a URI or an object with an 'id'", string=Uri, object=IdObject)


class CredentialSubject(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None


class BaseCredential(BaseModel):
    """Members common to all credential versions. Open to unknown members."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[Uri] = None
    type: VcType
    issuer: IdOrObject
    credentialStatus: Optional[single_or_array(CredentialStatus)] = None
    credentialSchema: Optional[single_or_array(CredentialSchemaRef)] = None
    credentialSubject: single_or_array(CredentialSubject)
    evidence: Optional[single_or_array(GenericResource)] = None
    refreshService: Optional[single_or_array(GenericResource)] = None
    termsOfUse: Optional[single_or_array(GenericResource)] = None


@lru_cache(maxsize=None)
def make_verifiable(model: Type[BaseModel]) -> Type[BaseModel]:
    """Derive a model that additionally requires at least one ``proof``."""
    logger.debug(f"Deriving verifiable variant of {model.__name__}")
    return create_model(
        f"Verifiable{model.__name__}",
        __base__=model,
        proof=(ProofSet, ...),
    )


def _as_tuple(value: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@lru_cache(maxsize=None)
def _derive_credential_model(
    base: Type[BaseModel],
    core_context: str,
    credential_subject: Optional[Type[BaseModel]],
    additional_types: Tuple[str, ...],
    contexts: Tuple[str, ...],
    type_match: TypeMatch,
) -> Type[BaseModel]:
    fields = {}
    if additional_types or type_match is not TypeMatch.EXACT:
        fields["type"] = (credential_type(additional_types or None, type_match), ...)
    if contexts:
        fields["context"] = (
            jsonld_context(core_context, *contexts, allow_map=False),
            Field(alias="@context"),
        )
    if credential_subject is not None:
        fields["credentialSubject"] = (single_or_array(credential_subject), ...)
    if not fields:
        return base
    logger.debug(f"Deriving {base.__name__} overriding {', '.join(fields)}")
    return create_model(base.__name__, __base__=base, **fields)


def derive_credential_model(
    base: Type[BaseModel],
    core_context: str,
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Type[BaseModel]:
    """Specialise a credential model's ``type``, ``@context`` and ``credentialSubject``.

    Args:
        base: Version-specific credential model to derive from.
        core_context: Core context that stays mandatory next to ``contexts``.
        credential_subject: Model for ``credentialSubject`` entries.
        additional_types: Types required next to ``VerifiableCredential``.
        contexts: Extra mandatory contexts.
        type_match: Policy for ``additional_types``.

    Returns:
        ``base`` itself when nothing is overridden, otherwise a derived model.
        Identical arguments always return the same class.

    Raises:
        ConfigurationError: On an empty ``additional_types`` list or a context that is not a URI.
    """
    return _derive_credential_model(
        base,
        core_context,
        credential_subject,
        normalize_additional_types(additional_types),
        _as_tuple(contexts),
        TypeMatch(type_match),
    )
