# web_identity_schemas/jwa.py
"""JSON Web Algorithms (RFC 7518) name types."""

from typing import Literal

from .constants import (
    COMPRESSION_ALGORITHMS,
    CONTENT_ENCRYPTION_ALGORITHMS,
    KEY_MANAGEMENT_ALGORITHMS,
    KEY_OPERATIONS,
    KEY_USES,
    SIGNATURE_ALGORITHMS,
    UNSECURED_ALGORITHM,
)

KeyUse = Literal[KEY_USES]
KeyOperation = Literal[KEY_OPERATIONS]

SignatureAlgorithm = Literal[SIGNATURE_ALGORITHMS]
UnsecuredAlgorithm = Literal[UNSECURED_ALGORITHM]
JwsAlgorithm = Literal[SIGNATURE_ALGORITHMS + (UNSECURED_ALGORITHM,)]

KeyManagementAlgorithm = Literal[KEY_MANAGEMENT_ALGORITHMS]
ContentEncryptionAlgorithm = Literal[CONTENT_ENCRYPTION_ALGORITHMS]
CompressionAlgorithm = Literal[COMPRESSION_ALGORITHMS]

JwkAlgorithm = Literal[SIGNATURE_ALGORITHMS + KEY_MANAGEMENT_ALGORITHMS + CONTENT_ENCRYPTION_ALGORITHMS]
"""Algorithms a key may be bound to through its ``alg`` member."""
