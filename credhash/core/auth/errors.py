"""
Credential Errors
=================

Error taxonomy for password policy, stored-hash decoding and salt
generation. Every error carries a ``kind`` tag so callers can branch on a
value instead of matching message text.

Boundary rules:
- PolicyError is user-correctable and may be shown to the user
- DecodeError means corrupted or forged storage; show only a generic
  "invalid credentials" message
- RandomSourceError is operational and must be escalated
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class PolicyViolation(Enum):
    """Password policy rules, in the order they are checked."""
    INVALID_ENCODING = "password contains characters that are not valid text"
    TOO_LONG = "password too long"
    TOO_SHORT = "password too short"
    MISSING_UPPER = "password must contain at least one uppercase letter"
    MISSING_LOWER = "password must contain at least one lowercase letter"
    MISSING_DIGIT = "password must contain at least one digit"
    MISSING_SPECIAL = "password must contain at least one special character"


class DecodeFailure(Enum):
    """Reasons an encoded hash string can be rejected."""
    BAD_FIELD_COUNT = "the encoded hash is not in the correct format"
    UNSUPPORTED_ALGORITHM = "unsupported algorithm"
    VERSION_MISMATCH = "incompatible version of argon2"
    BAD_PARAMETER_BLOCK = "failed to parse parameters"
    ZERO_PARAMETER = "invalid parameters in hash"
    BAD_SALT_ENCODING = "failed to decode salt"
    EMPTY_SALT = "salt cannot be empty"
    BAD_HASH_ENCODING = "failed to decode hash"
    EMPTY_HASH = "hash cannot be empty"
    UNSUPPORTED_PARAMETERS = "parameters are not accepted by argon2"


class CredentialError(Exception):
    """Base class for all credhash errors."""
    pass


class PolicyError(CredentialError, ValueError):
    """Raised when a password does not satisfy the password policy."""

    def __init__(self, kind: PolicyViolation) -> None:
        self.kind = kind
        super().__init__(kind.value)


class DecodeError(CredentialError, ValueError):
    """
    Raised when an encoded hash cannot be decoded.

    The detail never contains the encoded string itself, only the
    reason it was rejected.
    """

    def __init__(self, kind: DecodeFailure, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.detail = detail
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)


class RandomSourceError(CredentialError, RuntimeError):
    """Raised when the secure random source cannot supply salt bytes."""
    pass
