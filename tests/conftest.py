"""Configuration and shared fixtures for pytest"""

import copy
import logging

import pytest


@pytest.fixture(autouse=True)
def setup_logging():
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(levelname)s - %(name)s - %(message)s'
    )

    logging.getLogger('jwcrypto').setLevel(logging.WARNING)

    return logging.getLogger()


@pytest.fixture
def sample_proof():
    """An Ed25519Signature2020 style proof"""
    return {
        "type": "Ed25519Signature2020",
        "created": "2023-01-01T00:00:00Z",
        "verificationMethod": "did:example:issuer#key-1",
        "proofPurpose": "assertionMethod",
        "proofValue": "z3FXQjecWufY46yg5abdVZsXqLhxhueuSoZgNSARiKBk9czhSePTFehP8c3PGfb6a22gkfUKKFkTPaC9UYvhK4CaJ",
    }


@pytest.fixture
def v1_credential():
    """A minimal VC Data Model 1.1 credential"""
    return {
        "@context": ["https://www.w3.org/2018/credentials/v1", "https://www.w3.org/2018/credentials/examples/v1"],
        "id": "http://example.edu/credentials/3732",
        "type": ["VerifiableCredential", "UniversityDegreeCredential"],
        "issuer": "did:example:issuer",
        "issuanceDate": "2023-01-01T00:00:00Z",
        "credentialSubject": {
            "id": "did:example:subject",
            "degree": {"type": "BachelorDegree", "name": "Bachelor of Science and Arts"},
        },
    }


@pytest.fixture
def v2_credential():
    """A minimal VC Data Model 2.0 credential"""
    return {
        "@context": ["https://www.w3.org/ns/credentials/v2", "https://www.w3.org/ns/credentials/examples/v2"],
        "id": "http://university.example/credentials/3732",
        "type": ["VerifiableCredential", "ExampleDegreeCredential"],
        "issuer": {"id": "https://university.example/issuers/565049", "name": "Example University"},
        "validFrom": "2023-01-01T00:00:00Z",
        "credentialSubject": {
            "id": "did:example:ebfeb1f712ebc6f1c276e12ec21",
            "degree": {"type": "ExampleBachelorDegree", "name": "Bachelor of Science and Arts"},
        },
    }


@pytest.fixture
def signed_v1_credential(v1_credential, sample_proof):
    credential = copy.deepcopy(v1_credential)
    credential["proof"] = sample_proof
    return credential
