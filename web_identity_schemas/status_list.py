# web_identity_schemas/status_list.py
"""Credential status lists: StatusList2021 (VC v1.1) and BitstringStatusList (VC v2.0).

Status list credentials pin their ``type`` to an exact pair and require the
core context together with the status list context.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .constants import (
    BITSTRING_STATUS_LIST_CONTEXT,
    BITSTRING_STATUS_LIST_CREDENTIAL_TYPE,
    BITSTRING_STATUS_LIST_ENTRY_TYPE,
    BITSTRING_STATUS_LIST_TYPE,
    STATUS_LIST_2021_CONTEXT,
    STATUS_LIST_2021_CREDENTIAL_TYPE,
    STATUS_LIST_2021_ENTRY_TYPE,
    STATUS_LIST_2021_TYPE,
    STATUS_PURPOSES,
    VC_CONTEXT_V1,
    VC_CONTEXT_V2,
)
from .json_ld import jsonld_context
from .primitives import Base64Url, IsoDateTime, Uri
from .utils import single_or_array
from .vc_core import BaseCredential, ProofSet, credential_type

StatusPurpose = Literal[STATUS_PURPOSES]


class StatusList2021Subject(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Uri] = None
    type: Literal[STATUS_LIST_2021_TYPE]
    statusPurpose: StatusPurpose
    encodedList: Base64Url


class StatusList2021Entry(BaseModel):
    """``credentialStatus`` entry pointing into a StatusList2021 credential."""
    model_config = ConfigDict(extra="allow")

    id: Optional[Uri] = None
    type: Literal[STATUS_LIST_2021_ENTRY_TYPE]
    statusPurpose: StatusPurpose
    statusListIndex: str
    statusListCredential: Uri


class StatusList2021Credential(BaseCredential):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    context: jsonld_context(VC_CONTEXT_V1, STATUS_LIST_2021_CONTEXT, allow_map=False) = Field(alias="@context")
    type: credential_type(STATUS_LIST_2021_CREDENTIAL_TYPE)
    issuanceDate: IsoDateTime
    expirationDate: Optional[IsoDateTime] = None
    credentialSubject: StatusList2021Subject
    proof: Optional[ProofSet] = None


class BitstringStatusListSubject(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Uri] = None
    type: Literal[BITSTRING_STATUS_LIST_TYPE]
    statusPurpose: StatusPurpose
    encodedList: Base64Url
    ttl: Optional[Annotated[StrictInt, Field(ge=0)]] = None
    """Milliseconds the list may be cached for."""


class BitstringStatusListEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Uri] = None
    type: Literal[BITSTRING_STATUS_LIST_ENTRY_TYPE]
    statusPurpose: str
    statusListIndex: str
    statusListCredential: Uri
    statusSize: Optional[Annotated[StrictInt, Field(ge=1)]] = None
    statusMessage: Optional[List[Dict[str, Any]]] = None
    statusReference: Optional[single_or_array(Uri)] = None


class BitstringStatusListCredential(BaseCredential):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    context: jsonld_context(VC_CONTEXT_V2, BITSTRING_STATUS_LIST_CONTEXT, allow_map=False) = Field(alias="@context")
    type: credential_type(BITSTRING_STATUS_LIST_CREDENTIAL_TYPE)
    validFrom: Optional[IsoDateTime] = None
    validUntil: Optional[IsoDateTime] = None
    credentialSubject: BitstringStatusListSubject
    proof: Optional[ProofSet] = None
