# web_identity_schemas/vc_v1.py
"""Verifiable Credentials Data Model v1.1 credentials.

Closed objects: an unknown top-level member (``validFrom`` for instance) is an
error, which keeps v1 and v2 documents apart.
"""

from typing import Optional, Sequence, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import VC_CONTEXT_V1
from .json_ld import jsonld_context
from .primitives import IsoDateTime
from .vc_core import BaseCredential, ProofSet, TypeMatch, derive_credential_model

VcV1Context = jsonld_context(VC_CONTEXT_V1, allow_map=False)


class CredentialV1(BaseCredential):
    """Unsigned v1.1 credential; ``proof`` is not allowed."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    context: VcV1Context = Field(alias="@context")
    issuanceDate: IsoDateTime
    expirationDate: Optional[IsoDateTime] = None


class VerifiableCredentialV1(CredentialV1):
    """v1.1 credential that may carry a proof."""
    proof: Optional[ProofSet] = None


class SignedVerifiableCredentialV1(CredentialV1):
    """v1.1 credential that must carry at least one proof."""
    proof: ProofSet


def create_credential_v1_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Type[CredentialV1]:
    """Derive an unsigned v1.1 credential model.

    Args:
        credential_subject: Model for ``credentialSubject`` entries.
        additional_types: Types required next to ``VerifiableCredential``.
        contexts: Contexts required next to the v1 core context.
        type_match: Policy for ``additional_types``.

    Returns:
        A closed pydantic model class.
    """
    return derive_credential_model(
        CredentialV1, VC_CONTEXT_V1, credential_subject, additional_types, contexts, type_match
    )


def create_verifiable_credential_v1_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Type[VerifiableCredentialV1]:
    """Same as :func:`create_credential_v1_schema`, with an optional ``proof``."""
    return derive_credential_model(
        VerifiableCredentialV1, VC_CONTEXT_V1, credential_subject, additional_types, contexts, type_match
    )


def create_signed_verifiable_credential_v1_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Type[SignedVerifiableCredentialV1]:
    """Same as :func:`create_credential_v1_schema`, with a required ``proof``."""
    return derive_credential_model(
        SignedVerifiableCredentialV1, VC_CONTEXT_V1, credential_subject, additional_types, contexts, type_match
    )
