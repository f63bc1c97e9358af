"""Unit tests for credential and presentation type tags"""

import pytest

from web_identity_schemas.errors import ConfigurationError
from web_identity_schemas.vc_core import TypeMatch, VcType, credential_type, tagged_type
from web_identity_schemas.validation import is_valid, parse, validate
from web_identity_schemas.vp import VpType, presentation_type


def test_bare_string_becomes_list():
    assert parse(VcType, "VerifiableCredential") == ["VerifiableCredential"]
    assert parse(VpType, "VerifiablePresentation") == ["VerifiablePresentation"]


def test_order_preserved():
    value = ["VerifiableCredential", "UniversityDegreeCredential"]
    assert parse(VcType, value) == value


def test_mandatory_tag_must_come_first():
    """Exact policy without declared types wants the mandatory tag first"""
    result = validate(VcType, ["UniversityDegreeCredential", "VerifiableCredential"])
    assert not result.valid
    assert result.issues[0].type == "first_type_missing"
    assert result.issues[0].kind == "semantic"


def test_contains_policy_reorders():
    schema = credential_type(match=TypeMatch.CONTAINS)
    value = ["UniversityDegreeCredential", "VerifiableCredential"]
    assert parse(schema, value) == ["VerifiableCredential", "UniversityDegreeCredential"]


@pytest.mark.parametrize("value", [[], "SomethingElse", ["SomethingElse"]])
def test_missing_mandatory_tag(value):
    assert not is_valid(VcType, value)
    assert not is_valid(credential_type(match=TypeMatch.CONTAINS), value)


def test_non_string_tags():
    """A bare non-string is wrapped first, so the error points at the element"""
    result = validate(VcType, 42)
    assert not result.valid
    assert result.issues[0].type == "string_type"
    assert result.issues[0].path == "[0]"
    assert result.issues[0].kind == "shape"

    assert not is_valid(VcType, [1])


def test_exact_tuple():
    schema = credential_type("StatusList2021Credential")
    assert is_valid(schema, ["VerifiableCredential", "StatusList2021Credential"])

    for value in (
        ["StatusList2021Credential", "VerifiableCredential"],
        ["VerifiableCredential", "StatusList2021Credential", "Extra"],
        "VerifiableCredential",
        ["VerifiableCredential"],
    ):
        result = validate(schema, value)
        assert not result.valid
        assert result.issues[0].type == "type_tuple_mismatch"


def test_contains_with_additional_types():
    schema = credential_type(["A", "B"], match=TypeMatch.CONTAINS)
    assert parse(schema, ["B", "Extra", "VerifiableCredential", "A"]) == [
        "VerifiableCredential", "A", "B", "Extra",
    ]

    result = validate(schema, ["VerifiableCredential", "A"])
    assert not result.valid
    assert result.issues[0].type == "required_type_missing"
    assert "B" in result.issues[0].message


def test_mandatory_tag_in_additional_types_is_ignored():
    assert credential_type(["VerifiableCredential", "X"]) is credential_type("X")


@pytest.fixture(params=[
    (credential_type, "VerifiableCredential"),
    (presentation_type, "VerifiablePresentation"),
])
def pinned_mandatory(request):
    factory, mandatory = request.param
    return factory([mandatory]), mandatory


def test_declaring_only_the_mandatory_tag_pins_it(pinned_mandatory):
    """Naming just the mandatory tag means exactly that tag, not first position"""
    schema, mandatory = pinned_mandatory
    assert parse(schema, [mandatory]) == [mandatory]
    assert parse(schema, mandatory) == [mandatory]

    result = validate(schema, [mandatory, "UniversityDegreeCredential"])
    assert not result.valid
    assert result.issues[0].type == "type_tuple_mismatch"
    assert result.issues[0].kind == "semantic"


def test_pinning_does_not_apply_to_contains():
    schema = credential_type(["VerifiableCredential"], match=TypeMatch.CONTAINS)
    value = ["UniversityDegreeCredential", "VerifiableCredential"]
    assert parse(schema, value) == ["VerifiableCredential", "UniversityDegreeCredential"]


def test_invalid_additional_types():
    with pytest.raises(ConfigurationError):
        credential_type([])
    with pytest.raises(ConfigurationError):
        tagged_type("VerifiablePresentation", [1])


def test_presentation_type():
    schema = presentation_type("CredentialManagerPresentation")
    assert is_valid(schema, ["VerifiablePresentation", "CredentialManagerPresentation"])
    assert not is_valid(schema, ["VerifiablePresentation"])
