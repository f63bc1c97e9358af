# web_identity_schemas/vp.py
"""Verifiable Presentations."""

import logging
from functools import lru_cache
from typing import Any, Optional, Sequence, Type, Union

from pydantic import BaseModel, ConfigDict, Field, create_model

from .constants import VERIFIABLE_PRESENTATION_TYPE
from .did import Did
from .utils import single_or_array
from .vc import VcContext, VerifiableCredential
from .vc_core import ProofSet, TypeMatch, make_verifiable, normalize_additional_types, tagged_type

logger = logging.getLogger(__name__)


def presentation_type(
    additional_types: Union[str, Sequence[str], None] = None,
    match: TypeMatch = TypeMatch.EXACT,
) -> Any:
    """``type`` validator for presentations; ``VerifiablePresentation`` is mandatory."""
    return tagged_type(VERIFIABLE_PRESENTATION_TYPE, additional_types, match)


VpType = presentation_type()


class VerifiablePresentation(BaseModel):
    """A presentation whose ``proof`` is optional. Unknown members are kept."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    context: VcContext = Field(alias="@context")
    id: Optional[str] = None
    type: VpType
    holder: Optional[Did] = None
    verifiableCredential: Optional[single_or_array(VerifiableCredential)] = None
    proof: Optional[ProofSet] = None


SignedVerifiablePresentation = make_verifiable(VerifiablePresentation)


@lru_cache(maxsize=None)
def _presentation_model(additional: tuple, match: TypeMatch, signed: bool) -> Type[BaseModel]:
    base = SignedVerifiablePresentation if signed else VerifiablePresentation
    if not additional and match is TypeMatch.EXACT:
        return base
    return create_model(
        base.__name__,
        __base__=base,
        type=(presentation_type(additional or None, match), ...),
    )


def create_presentation_schema(
    additional_types: Union[str, Sequence[str], None] = None,
    type_match: TypeMatch = TypeMatch.EXACT,
    signed: bool = False,
) -> Type[BaseModel]:
    """Derive a presentation model requiring extra presentation types.

    Args:
        additional_types: Types required next to ``VerifiablePresentation``.
        type_match: Policy for ``additional_types``.
        signed: Require a ``proof`` when true.
    """
    return _presentation_model(
        normalize_additional_types(additional_types), TypeMatch(type_match), signed
    )
