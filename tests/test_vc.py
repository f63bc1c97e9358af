"""Unit tests for Verifiable Credential schemas"""

import copy

import pytest
from pydantic import BaseModel, ConfigDict

from web_identity_schemas.errors import SchemaValidationError
from web_identity_schemas.vc import (
    SignedVerifiableCredential,
    VcContext,
    VerifiableCredential,
    W3CCredential,
    create_credential_schema,
    create_signed_verifiable_credential_schema,
    create_verifiable_credential_schema,
    credential_version,
)
from web_identity_schemas.vc_core import Proof, TypeMatch, make_verifiable
from web_identity_schemas.vc_v1 import (
    CredentialV1,
    SignedVerifiableCredentialV1,
    VerifiableCredentialV1,
    create_credential_v1_schema,
)
from web_identity_schemas.vc_v2 import CredentialV2, VerifiableCredentialV2, create_credential_v2_schema
from web_identity_schemas.validation import is_valid, parse, validate

V1_CONTEXT = "https://www.w3.org/2018/credentials/v1"
V2_CONTEXT = "https://www.w3.org/ns/credentials/v2"
EXAMPLES_CONTEXT = "https://www.w3.org/2018/credentials/examples/v1"


class Degree(BaseModel):
    type: str
    name: str


class DegreeSubject(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    degree: Degree


def issue_paths(result):
    return {issue.path for issue in result.issues}


def test_v1_credential_routed_to_v1(v1_credential):
    credential = parse(VerifiableCredential, v1_credential)
    assert isinstance(credential, VerifiableCredentialV1)
    assert credential.issuer == "did:example:issuer"


def test_v2_credential_routed_to_v2(v2_credential):
    credential = parse(VerifiableCredential, v2_credential)
    assert isinstance(credential, VerifiableCredentialV2)
    assert credential.issuer.id == "https://university.example/issuers/565049"


def test_credential_version(v1_credential, v2_credential):
    assert credential_version(v1_credential) == "v1"
    assert credential_version(v2_credential) == "v2"
    assert credential_version({"@context": V2_CONTEXT}) == "v2"
    assert credential_version({"@context": [V2_CONTEXT, EXAMPLES_CONTEXT]}) == "v2"
    assert credential_version({}) == "v1"
    assert credential_version("not an object") is None


def test_v1_document_rejected_by_v2_model(v1_credential):
    assert not is_valid(VerifiableCredentialV2, v1_credential)
    assert not is_valid(CredentialV2, v1_credential)


def test_mixed_dates_rejected(v1_credential):
    """A v1 document carrying a v2 date member is not silently accepted"""
    credential = copy.deepcopy(v1_credential)
    credential["validFrom"] = "2023-01-01T00:00:00Z"

    result = validate(VerifiableCredential, credential)
    assert not result.valid
    assert "validFrom" in issue_paths(result)
    assert any(issue.type == "extra_forbidden" for issue in result.issues)


def test_v2_with_issuance_date_rejected(v2_credential):
    credential = copy.deepcopy(v2_credential)
    credential["issuanceDate"] = "2023-01-01T00:00:00Z"
    assert not is_valid(VerifiableCredential, credential)


def test_version_from_context_without_dates(v2_credential, v1_credential):
    credential = copy.deepcopy(v2_credential)
    del credential["validFrom"]
    assert isinstance(parse(W3CCredential, credential), CredentialV2)

    credential = copy.deepcopy(v1_credential)
    del credential["issuanceDate"]
    result = validate(W3CCredential, credential)
    assert not result.valid
    assert "issuanceDate" in issue_paths(result)
    assert result.issues[0].type == "missing"


def test_non_object_rejected():
    result = validate(VerifiableCredential, "not a credential")
    assert not result.valid
    assert result.issues[0].type == "unknown_credential_version"


def test_all_issues_reported(v1_credential):
    credential = copy.deepcopy(v1_credential)
    del credential["issuer"]
    credential["issuanceDate"] = "yesterday"

    result = validate(CredentialV1, credential)
    assert not result.valid
    assert {"issuer", "issuanceDate"} <= issue_paths(result)


def test_type_normalized_in_output(v1_credential):
    credential = copy.deepcopy(v1_credential)
    credential["type"] = "VerifiableCredential"

    result = validate(VerifiableCredential, credential)
    assert result.valid
    assert result.data["type"] == ["VerifiableCredential"]


def test_output_mirrors_input(v1_credential):
    result = validate(VerifiableCredential, v1_credential)
    assert result.valid
    assert result.data == v1_credential


def test_subject_cardinality_kept(v1_credential):
    credential = copy.deepcopy(v1_credential)
    credential["credentialSubject"] = [credential["credentialSubject"], {"id": "did:example:other"}]

    result = validate(VerifiableCredential, credential)
    assert result.valid
    assert isinstance(result.data["credentialSubject"], list)
    assert len(result.data["credentialSubject"]) == 2


def test_reversed_type_rejected_by_default(v1_credential):
    credential = copy.deepcopy(v1_credential)
    credential["type"] = ["UniversityDegreeCredential", "VerifiableCredential"]
    result = validate(VerifiableCredential, credential)
    assert not result.valid
    assert "type" in issue_paths(result)


def test_signed_requires_proof(v1_credential, signed_v1_credential):
    result = validate(SignedVerifiableCredential, v1_credential)
    assert not result.valid
    assert "proof" in issue_paths(result)

    assert is_valid(SignedVerifiableCredential, signed_v1_credential)
    assert isinstance(parse(SignedVerifiableCredential, signed_v1_credential), SignedVerifiableCredentialV1)


def test_proof_set(signed_v1_credential, sample_proof):
    credential = copy.deepcopy(signed_v1_credential)
    credential["proof"] = [sample_proof, sample_proof]
    assert is_valid(SignedVerifiableCredential, credential)

    credential["proof"] = []
    assert not is_valid(SignedVerifiableCredential, credential)
    assert not is_valid(VerifiableCredential, credential)


def test_unsigned_credential_rejects_proof(signed_v1_credential):
    result = validate(W3CCredential, signed_v1_credential)
    assert not result.valid
    assert any(issue.type == "extra_forbidden" and issue.path == "proof" for issue in result.issues)


def test_verifiable_credential_proof_optional(v1_credential, signed_v1_credential):
    assert is_valid(VerifiableCredential, v1_credential)
    assert is_valid(VerifiableCredential, signed_v1_credential)


def test_proof_fields(sample_proof):
    proof = copy.deepcopy(sample_proof)
    proof["jws"] = "invalid-jws"
    result = validate(Proof, proof)
    assert not result.valid
    assert result.issues[0].path == "jws"
    assert result.issues[0].type == "jws_string"

    proof["jws"] = "eyJhbGciOiJFUzI1NiJ9..c2lnbmF0dXJl"
    assert is_valid(Proof, proof)

    del proof["verificationMethod"]
    assert not is_valid(Proof, proof)


def test_issuer_forms(v1_credential):
    credential = copy.deepcopy(v1_credential)
    credential["issuer"] = {"id": "did:example:issuer", "name": "Example University"}
    assert is_valid(VerifiableCredential, credential)

    credential["issuer"] = {"name": "Example University"}
    result = validate(VerifiableCredential, credential)
    assert not result.valid
    assert "issuer.id" in issue_paths(result)

    credential["issuer"] = 42
    assert not is_valid(VerifiableCredential, credential)


def test_credential_status(v1_credential):
    credential = copy.deepcopy(v1_credential)
    credential["credentialStatus"] = {
        "id": "https://example.com/status/1#94567",
        "type": "StatusList2021Entry",
        "statusPurpose": "revocation",
        "statusListIndex": 94567,
        "statusListCredential": "https://example.com/status/1",
    }
    assert is_valid(VerifiableCredential, credential)

    credential["credentialStatus"]["statusListIndex"] = True
    assert not is_valid(VerifiableCredential, credential)


def test_expiration_date_checked(v1_credential):
    credential = copy.deepcopy(v1_credential)
    credential["expirationDate"] = "2023-13-01T00:00:00Z"
    result = validate(VerifiableCredential, credential)
    assert not result.valid
    assert result.issues[0].path == "expirationDate"
    assert result.issues[0].kind == "pattern"


def test_v2_validity_period(v2_credential):
    credential = copy.deepcopy(v2_credential)
    credential["validUntil"] = "2033-01-01T00:00:00Z"
    assert is_valid(VerifiableCredential, credential)

    credential["validUntil"] = "soon"
    assert not is_valid(VerifiableCredential, credential)


def test_factory_custom_subject(v1_credential, v2_credential):
    schema = create_verifiable_credential_schema(
        credential_subject=DegreeSubject,
        additional_types="UniversityDegreeCredential",
    )
    assert is_valid(schema, v1_credential)

    credential = copy.deepcopy(v1_credential)
    del credential["credentialSubject"]["degree"]
    result = validate(schema, credential)
    assert not result.valid
    assert "credentialSubject.degree" in issue_paths(result)

    # The v2 example uses a different credential type.
    assert not is_valid(schema, v2_credential)


def test_factory_contains_policy(v1_credential):
    credential = copy.deepcopy(v1_credential)
    credential["type"] = ["UniversityDegreeCredential", "VerifiableCredential"]

    assert not is_valid(create_credential_schema(additional_types="UniversityDegreeCredential"), credential)

    schema = create_credential_schema(
        additional_types="UniversityDegreeCredential", type_match=TypeMatch.CONTAINS
    )
    result = validate(schema, credential)
    assert result.valid
    assert result.data["type"] == ["VerifiableCredential", "UniversityDegreeCredential"]


def test_factory_signed(v1_credential, signed_v1_credential):
    schema = create_signed_verifiable_credential_schema(additional_types="UniversityDegreeCredential")
    assert is_valid(schema, signed_v1_credential)
    assert not is_valid(schema, v1_credential)


def test_factory_extra_contexts(v1_credential):
    schema = create_credential_v1_schema(contexts=EXAMPLES_CONTEXT)
    assert is_valid(schema, v1_credential)

    credential = copy.deepcopy(v1_credential)
    credential["@context"] = [V1_CONTEXT]
    result = validate(schema, credential)
    assert not result.valid
    assert result.issues[0].path == "@context"
    assert result.issues[0].type == "context_missing"


@pytest.mark.parametrize("factory", [
    create_credential_schema,
    create_verifiable_credential_schema,
])
def test_version_union_factory_extra_contexts(factory, v1_credential, v2_credential):
    """Both versions of the union require the extra context"""
    degree_context = "https://example.com/contexts/degree/v1"
    schema = factory(contexts=degree_context)

    result = validate(schema, v1_credential)
    assert not result.valid
    assert result.issues[0].path == "@context"
    assert result.issues[0].type == "context_missing"
    assert not is_valid(schema, v2_credential)

    for credential in (copy.deepcopy(v1_credential), copy.deepcopy(v2_credential)):
        credential["@context"].append(degree_context)
        assert is_valid(schema, credential)


def test_signed_union_factory_extra_contexts(signed_v1_credential):
    schema = create_signed_verifiable_credential_schema(contexts=EXAMPLES_CONTEXT)
    assert is_valid(schema, signed_v1_credential)

    credential = copy.deepcopy(signed_v1_credential)
    credential["@context"] = [V1_CONTEXT]
    assert not is_valid(schema, credential)


def test_factory_without_overrides_returns_base():
    assert create_credential_v1_schema() is CredentialV1
    assert create_credential_v2_schema() is CredentialV2


def test_factory_cached():
    assert create_credential_v1_schema(DegreeSubject, "UniversityDegreeCredential") is \
        create_credential_v1_schema(DegreeSubject, ["UniversityDegreeCredential"])


def test_make_verifiable(v1_credential, signed_v1_credential):
    model = make_verifiable(CredentialV1)
    assert make_verifiable(CredentialV1) is model
    assert not is_valid(model, v1_credential)
    assert is_valid(model, signed_v1_credential)


def test_parse_raises_with_issues(v1_credential):
    credential = copy.deepcopy(v1_credential)
    del credential["issuer"]
    with pytest.raises(SchemaValidationError) as excinfo:
        parse(VerifiableCredential, credential)
    assert excinfo.value.issues[0]["path"] == "issuer"


@pytest.mark.parametrize("value,expected", [
    (V1_CONTEXT, True),
    (V2_CONTEXT, True),
    ([V2_CONTEXT, EXAMPLES_CONTEXT], True),
    ("https://example.com", False),
    (["https://example.com"], False),
    ([], False),
    ({"@vocab": "https://example.com"}, False),
])
def test_vc_context(value, expected):
    assert is_valid(VcContext, value) is expected
