"""
credhash - Argon2id Credential Hashing
======================================

This package hashes passwords for storage and verifies candidates
against stored hashes.

Security Notice:
- Passwords and encoded hashes are never logged
- Fresh random salt per hash, no weaker fallback source
- Constant-time comparison of derived keys
"""

from credhash.core.auth import (
    DecodeError,
    PasswordVerifier,
    PolicyError,
    RandomSourceError,
    hash_password,
    verify_password,
)
from credhash.core.config import CredhashConfig

__version__ = "0.1.0"

__all__ = [
    "CredhashConfig",
    "PasswordVerifier",
    "PolicyError",
    "DecodeError",
    "RandomSourceError",
    "hash_password",
    "verify_password",
    "__version__",
]
