# web_identity_schemas/constants.py
"""Shared constant tables for web-identity-schemas."""

import re
import sys

LOG_LEVEL_ENV_VAR: str = "WEB_IDENTITY_SCHEMAS_LOG_LEVEL"

# Encodings
BASE64URL_REGEX = re.compile(r"[A-Za-z0-9_-]+")
BASE64_REGEX = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")
BASE58BTC_REGEX = re.compile(r"[1-9A-HJ-NP-Za-km-z]+")
URI_REGEX = re.compile(r"[a-zA-Z][a-zA-Z0-9+.-]*:.+", re.DOTALL)
DATE_TIME_STAMP_REGEX = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?([+-]\d{2}:\d{2}|Z)"
)
ISO_DATE_TIME_REGEX = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.\d+)?"
    r"(?:Z|[+-](?P<tz_hour>\d{2}):(?P<tz_minute>\d{2}))"
)

# JOSE compact serializations
JWS_STRING_REGEX = re.compile(r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+")
DETACHED_JWS_STRING_REGEX = re.compile(r"[A-Za-z0-9_-]+\.\.[A-Za-z0-9_-]+")
JWT_STRING_REGEX = re.compile(r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*")
JWE_STRING_REGEX = re.compile(
    r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"
)

# DIDs
DID_PREFIX: str = "did:"
DID_REGEX = re.compile(r"did:[a-z0-9]+:[a-zA-Z0-9.\-_:%]*[a-zA-Z0-9.\-_]")
DID_URL_REGEX = re.compile(
    r"did:[a-z0-9]+:[a-zA-Z0-9.\-_:%]*[a-zA-Z0-9.\-_](?:[/?#][\s\S]*)?"
)
DID_METHOD_REGEX = re.compile(r"[a-z0-9]+")
DID_CONTEXT_V1: str = "https://www.w3.org/ns/did/v1"

# JWA / JWK
KEY_USES = ("sig", "enc")
KEY_OPERATIONS = (
    "sign",
    "verify",
    "encrypt",
    "decrypt",
    "wrapKey",
    "unwrapKey",
    "deriveKey",
    "deriveBits",
)
EC_CURVES = ("P-256", "secp256r1", "P-256K", "secp256k1", "P-384", "P-521")
OKP_CURVES = ("Ed25519", "Ed448", "X25519", "X448")
SIGNATURE_ALGORITHMS = (
    "HS256",
    "HS384",
    "HS512",
    "RS256",
    "RS384",
    "RS512",
    "ES256",
    "ES256K",
    "ES384",
    "ES512",
    "PS256",
    "PS384",
    "PS512",
    "EdDSA",
)
UNSECURED_ALGORITHM: str = "none"
KEY_MANAGEMENT_ALGORITHMS = (
    "RSA1_5",
    "RSA-OAEP",
    "RSA-OAEP-256",
    "A128KW",
    "A192KW",
    "A256KW",
    "dir",
    "ECDH-ES",
    "ECDH-ES+A128KW",
    "ECDH-ES+A192KW",
    "ECDH-ES+A256KW",
    "A128GCMKW",
    "A192GCMKW",
    "A256GCMKW",
    "PBES2-HS256+A128KW",
    "PBES2-HS384+A192KW",
    "PBES2-HS512+A256KW",
)
CONTENT_ENCRYPTION_ALGORITHMS = (
    "A128GCM",
    "A192GCM",
    "A256GCM",
    "A128CBC-HS256",
    "A192CBC-HS384",
    "A256CBC-HS512",
)
COMPRESSION_ALGORITHMS = ("DEF",)

# Verifiable credentials
VC_CONTEXT_V1: str = "https://www.w3.org/2018/credentials/v1"
VC_CONTEXT_V2: str = "https://www.w3.org/ns/credentials/v2"
STATUS_LIST_2021_CONTEXT: str = "https://w3id.org/vc/status-list/2021/v1"
BITSTRING_STATUS_LIST_CONTEXT: str = "https://www.w3.org/ns/credentials/status/v1"

VERIFIABLE_CREDENTIAL_TYPE: str = "VerifiableCredential"
VERIFIABLE_PRESENTATION_TYPE: str = "VerifiablePresentation"
STATUS_LIST_2021_CREDENTIAL_TYPE: str = "StatusList2021Credential"
STATUS_LIST_2021_TYPE: str = "StatusList2021"
STATUS_LIST_2021_ENTRY_TYPE: str = "StatusList2021Entry"
BITSTRING_STATUS_LIST_CREDENTIAL_TYPE: str = "BitstringStatusListCredential"
BITSTRING_STATUS_LIST_TYPE: str = "BitstringStatusList"
BITSTRING_STATUS_LIST_ENTRY_TYPE: str = "BitstringStatusListEntry"

PROOF_PURPOSES = (
    "assertionMethod",
    "authentication",
    "keyAgreement",
    "capabilityInvocation",
    "capabilityDelegation",
)
STATUS_TYPES = (
    "RevocationList2020Status",
    STATUS_LIST_2021_ENTRY_TYPE,
    BITSTRING_STATUS_LIST_ENTRY_TYPE,
)
STATUS_PURPOSES = ("revocation", "suspension")

# Verification methods
JSON_WEB_KEY_TYPE: str = "JsonWebKey"
MULTIKEY_TYPE: str = "Multikey"
LEGACY_VERIFICATION_METHOD_TYPES = (
    "JsonWebKey2020",
    "Ed25519VerificationKey2020",
    "Ed25519VerificationKey2018",
    "X25519KeyAgreementKey2020",
    "X25519KeyAgreementKey2019",
    "EcdsaSecp256k1VerificationKey2019",
    "EcdsaSecp256r1VerificationKey2019",
    "RsaVerificationKey2018",
)
KEY_MATERIAL_PROPERTIES = ("publicKeyJwk", "publicKeyMultibase", "publicKeyBase58")

# Discriminator tags. They appear in pydantic error locations and are dropped
# from reported field paths.
SINGLE_TAG: str = "single"
ARRAY_TAG: str = "array"
STRING_TAG: str = "string"
NUMBER_TAG: str = "number"
OBJECT_TAG: str = "object"
UNSECURED_TAG: str = "unsecured"
SIGNED_TAG: str = "signed"
CREDENTIAL_V1_TAG: str = "v1"
CREDENTIAL_V2_TAG: str = "v2"
UNION_TAGS = frozenset(
    {
        SINGLE_TAG,
        ARRAY_TAG,
        STRING_TAG,
        NUMBER_TAG,
        OBJECT_TAG,
        UNSECURED_TAG,
        SIGNED_TAG,
        CREDENTIAL_V1_TAG,
        CREDENTIAL_V2_TAG,
    }
)

# Error taxonomy, keyed by pydantic error type
NESTING_DEPTH_ERROR: str = "nesting_depth"
PATTERN_ERROR_TYPES = frozenset(
    {
        "string_pattern_mismatch",
        "base64url",
        "base64",
        "base58btc",
        "multibase",
        "uri",
        "url_parsing",
        "url_scheme",
        "url_syntax_violation",
        "date_time_stamp",
        "iso_date_time",
        "did",
        "did_url",
        "did_method",
        "jws_string",
        "detached_jws_string",
        "jwt_string",
        "jwe_string",
        "jwt_decode",
    }
)
SEMANTIC_ERROR_TYPES = frozenset(
    {
        "context_missing",
        "first_type_missing",
        "required_type_missing",
        "type_tuple_mismatch",
        "missing_elements",
        "unsecured_signature",
        "conflicting_key_material",
        "unknown_credential_version",
    }
)

STDIN = sys.stdin

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
