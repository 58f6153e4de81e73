"""
credhash Authentication Core
============================

Provides password hashing and verification with:
- Argon2id key derivation
- Structural password policy
- Self-describing encoded hash format
- Tagged errors for policy, decoding and entropy failures

Security Properties:
- Memory-hard password hashing
- Constant-time verification
- Strict validation of stored hash strings
"""

from credhash.core.auth.argon2_auth import Argon2Hasher
from credhash.core.auth.codec import DecodedHash, decode_hash, encode_hash
from credhash.core.auth.errors import (
    CredentialError,
    DecodeError,
    DecodeFailure,
    PolicyError,
    PolicyViolation,
    RandomSourceError,
)
from credhash.core.auth.params import (
    DEFAULT_LIMITS,
    DEFAULT_PARAMETERS,
    HashParameters,
    VerifyLimits,
)
from credhash.core.auth.policy import DEFAULT_POLICY, PasswordPolicy, PasswordValidator
from credhash.core.auth.verifier import (
    PasswordVerifier,
    hash_password,
    verify_password,
)

__all__ = [
    "Argon2Hasher",
    "DecodedHash",
    "decode_hash",
    "encode_hash",
    "CredentialError",
    "DecodeError",
    "DecodeFailure",
    "PolicyError",
    "PolicyViolation",
    "RandomSourceError",
    "DEFAULT_PARAMETERS",
    "HashParameters",
    "DEFAULT_LIMITS",
    "VerifyLimits",
    "DEFAULT_POLICY",
    "PasswordPolicy",
    "PasswordValidator",
    "PasswordVerifier",
    "hash_password",
    "verify_password",
]
