# web_identity_schemas/vc_v2.py
"""Verifiable Credentials Data Model v2.0 credentials.

Closed objects: an unknown top-level member (``issuanceDate`` for instance) is an
error, which keeps v2 and v1 documents apart.
"""

from typing import Optional, Sequence, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import VC_CONTEXT_V2
from .json_ld import jsonld_context
from .primitives import IsoDateTime
from .vc_core import BaseCredential, ProofSet, TypeMatch, derive_credential_model

VcV2Context = jsonld_context(VC_CONTEXT_V2, allow_map=False)


class CredentialV2(BaseCredential):
    """Unsigned v2.0 credential; ``proof`` is not allowed."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    context: VcV2Context = Field(alias="@context")
    validFrom: Optional[IsoDateTime] = None
    validUntil: Optional[IsoDateTime] = None


class VerifiableCredentialV2(CredentialV2):
    """v2.0 credential that may carry a proof."""
    proof: Optional[ProofSet] = None


class SignedVerifiableCredentialV2(CredentialV2):
    """v2.0 credential that must carry at least one proof."""
    proof: ProofSet


def create_credential_v2_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Type[CredentialV2]:
    """Derive an unsigned v2.0 credential model.

    Args:
        credential_subject: Model for ``credentialSubject`` entries.
        additional_types: Types required next to ``VerifiableCredential``.
        contexts: Contexts required next to the v2 core context.
        type_match: Policy for ``additional_types``.

    Returns:
        A closed pydantic model class.
    """
    return derive_credential_model(
        CredentialV2, VC_CONTEXT_V2, credential_subject, additional_types, contexts, type_match
    )


def create_verifiable_credential_v2_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Type[VerifiableCredentialV2]:
    """Same as :func:`create_credential_v2_schema`, with an optional ``proof``."""
    return derive_credential_model(
        VerifiableCredentialV2, VC_CONTEXT_V2, credential_subject, additional_types, contexts, type_match
    )


def create_signed_verifiable_credential_v2_schema(
    credential_subject: Optional[Type[BaseModel]] = None,
    additional_types: Union[str, Sequence[str], None] = None,
    contexts: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
) -> Type[SignedVerifiableCredentialV2]:
    """Same as :func:`create_credential_v2_schema`, with a required ``proof``."""
    return derive_credential_model(
        SignedVerifiableCredentialV2, VC_CONTEXT_V2, credential_subject, additional_types, contexts, type_match
    )
