# web_identity_schemas/vc.py
"""Version-agnostic Verifiable Credential types.

A credential is routed to exactly one data model version before validation:

1. ``issuanceDate`` or ``expirationDate`` present: v1.1;
2. otherwise ``validFrom`` or ``validUntil`` present: v2.0;
3. otherwise the v2 core context in ``@context`` selects v2.0, anything else v1.1.

Errors therefore come from the selected version only. A document mixing v1 and
v2 date members is routed to v1.1, whose closed shape rejects the v2 members.
"""

import logging
from typing import Annotated, Any, List, Literal, Optional, Sequence, Type, Union

from pydantic import AfterValidator, BaseModel, Discriminator, Tag
from pydantic_core import PydanticCustomError

from .constants import CREDENTIAL_V1_TAG, CREDENTIAL_V2_TAG, VC_CONTEXT_V1, VC_CONTEXT_V2
from .primitives import Uri
from .utils import shape_union
from .vc_core import TypeMatch
from .vc_v1 import (
    CredentialV1,
    SignedVerifiableCredentialV1,
    VerifiableCredentialV1,
    create_credential_v1_schema,
    create_signed_verifiable_credential_v1_schema,
    create_verifiable_credential_v1_schema,
)
from .vc_v2 import (
    CredentialV2,
    SignedVerifiableCredentialV2,
    VerifiableCredentialV2,
    create_credential_v2_schema,
    create_signed_verifiable_credential_v2_schema,
    create_verifiable_credential_v2_schema,
)

logger = logging.getLogger(__name__)

V1_MEMBERS = ("issuanceDate", "expirationDate")
V2_MEMBERS = ("validFrom", "validUntil")


def _context_includes_v2(context: Any) -> bool:
    if isinstance(context, str):
        return context == VC_CONTEXT_V2
    if isinstance(context, (list, tuple)):
        return VC_CONTEXT_V2 in context
    return False


def credential_version(value: Any) -> Optional[str]:
    """Pick the data model version tag for a raw credential, or ``None`` if it is not an object."""
    if isinstance(value, (CredentialV1, CredentialV2)):
        return CREDENTIAL_V1_TAG if isinstance(value, CredentialV1) else CREDENTIAL_V2_TAG
    if not isinstance(value, dict):
        return None
    if any(member in value for member in V1_MEMBERS):
        return CREDENTIAL_V1_TAG
    if any(member in value for member in V2_MEMBERS):
        return CREDENTIAL_V2_TAG
    if _context_includes_v2(value.get("@context")):
        return CREDENTIAL_V2_TAG
    return CREDENTIAL_V1_TAG


def credential_union(v1_model: Type[BaseModel], v2_model: Type[BaseModel]) -> Any:
    """Combine a v1.1 and a v2.0 model into one version-discriminated type."""
    return Annotated[
        Union[
            Annotated[v1_model, Tag(CREDENTIAL_V1_TAG)],
            Annotated[v2_model, Tag(CREDENTIAL_V2_TAG)],
        ],
        Discriminator(
            credential_version,
            custom_error_type="unknown_credential_version",
            custom_error_message="Credential must be a JSON object",
        ),
    ]


W3CCredential = credential_union(CredentialV1, CredentialV2)
VerifiableCredential = credential_union(VerifiableCredentialV1, VerifiableCredentialV2)
SignedVerifiableCredential = credential_union(SignedVerifiableCredentialV1, SignedVerifiableCredentialV2)


def create_credential_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Any:
    return credential_union(
        create_credential_v1_schema(credential_subject, additional_types, contexts, type_match),
        create_credential_v2_schema(credential_subject, additional_types, contexts, type_match),
    )


def create_verifiable_credential_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Any:
    """Version-discriminated credential type with an optional ``proof``.

    Args:
        credential_subject: Model for ``credentialSubject`` entries.
        additional_types: Types required next to ``VerifiableCredential``.
        contexts: Contexts required next to the core context of each version.
        type_match: Policy for ``additional_types``.

    Returns:
        An annotated union of the derived v1.1 and v2.0 models.
    """
    return credential_union(
        create_verifiable_credential_v1_schema(credential_subject, additional_types, contexts, type_match),
        create_verifiable_credential_v2_schema(credential_subject, additional_types, contexts, type_match),
    )


def create_signed_verifiable_credential_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Any:
    return credential_union(
        create_signed_verifiable_credential_v1_schema(credential_subject, additional_types, contexts, type_match),
        create_signed_verifiable_credential_v2_schema(credential_subject, additional_types, contexts, type_match),
    )


CORE_CONTEXTS = (VC_CONTEXT_V1, VC_CONTEXT_V2)


def _check_core_context(value: List[str]) -> List[str]:
    if not any(context in value for context in CORE_CONTEXTS):
        raise PydanticCustomError(
            "context_missing",
            "Context must include {v1} or {v2}",
            {"v1": VC_CONTEXT_V1, "v2": VC_CONTEXT_V2},
        )
    return value


VcContext = shape_union(
    f"Context must be a string or an array including {VC_CONTEXT_V1} or {VC_CONTEXT_V2}",
    string=Literal[CORE_CONTEXTS],
    array=Annotated[List[Uri], AfterValidator(_check_core_context)],
)
"""``@context`` of a credential or presentation of either data model version."""
