"""
Argon2id Key Derivation
=======================

Derives fixed-length keys from passwords using Argon2id.

Security Properties:
- Memory-hard (resistant to GPU/ASIC attacks)
- Time-hard (configurable iterations)
- Parallelism support
- Fresh cryptographically secure salt per hash
- No fallback to a weaker KDF or entropy source

Resource Notes:
- Each derivation allocates about ``memory_cost_kib`` KiB and runs to
  completion; bound concurrent calls on the caller side.

References:
- RFC 9106: Argon2 Memory-Hard Function
- OWASP Password Storage Cheat Sheet
"""

from __future__ import annotations

import ctypes
import secrets
from typing import Callable, Optional

from argon2.low_level import Type, hash_secret_raw

from credhash.core.auth.errors import RandomSourceError
from credhash.core.auth.params import HashParameters
from credhash.security.constants import (
    ARGON2_MIN_HASH_LENGTH,
    ARGON2_MIN_MEMORY_PER_LANE,
    ARGON2_MIN_SALT_LENGTH,
    ARGON2_VERSION,
)


RandomSource = Callable[[int], bytes]


def _secure_zero_memory(data: bytearray) -> None:
    """
    Securely zero memory to prevent password leakage.

    Note: This is best-effort; Python's memory management may
    leave copies.
    """
    if not data:
        return
    ctypes.memset(ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data)), 0, len(data))


class Argon2Hasher:
    """
    Argon2id key derivation with a pluggable secure random source.

    Usage:
        hasher = Argon2Hasher()

        salt = hasher.generate_salt(params.salt_length)
        key = hasher.derive("user_password", salt, params)

    The hasher holds no per-call state and is safe to share between threads.
    """

    __slots__ = ("_random_source",)

    def __init__(self, random_source: RandomSource = secrets.token_bytes) -> None:
        """
        Initialize the hasher.

        Args:
            random_source: Callable returning n cryptographically secure
                random bytes (default: secrets.token_bytes)
        """
        self._random_source = random_source

    def generate_salt(self, length: int) -> bytes:
        """
        Generate a random salt.

        Args:
            length: Number of bytes to generate

        Returns:
            Exactly ``length`` random bytes

        Raises:
            RandomSourceError: If the random source fails or returns short
        """
        if length <= 0:
            raise ValueError("salt length must be greater than zero")

        try:
            salt = self._random_source(length)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError(f"failed to generate random bytes: {e}") from e

        if not isinstance(salt, (bytes, bytearray)) or len(salt) != length:
            raise RandomSourceError(
                f"random source returned an invalid salt (expected {length} bytes)"
            )
        return bytes(salt)

    @staticmethod
    def supports(parameters: HashParameters, salt_length: Optional[int] = None) -> bool:
        """
        Check whether libargon2 accepts the parameters.

        Args:
            parameters: The cost profile
            salt_length: Actual salt length if it differs from the profile

        Returns:
            True if a derivation with these parameters cannot be rejected
        """
        if salt_length is None:
            salt_length = parameters.salt_length
        return (
            salt_length >= ARGON2_MIN_SALT_LENGTH
            and parameters.key_length >= ARGON2_MIN_HASH_LENGTH
            and parameters.memory_cost_kib >= ARGON2_MIN_MEMORY_PER_LANE * parameters.parallelism
        )

    def derive(self, password: str, salt: bytes, parameters: HashParameters) -> bytes:
        """
        Derive a key from a password.

        Args:
            password: The password
            salt: Salt bytes
            parameters: Cost profile; ``key_length`` sets the output size

        Returns:
            Derived key of exactly ``parameters.key_length`` bytes

        Security:
            - The local bytearray copy of the password is zeroed after use.
              The str, the bytes passed to argon2-cffi and the cffi buffer
              it copies them into are not, so this is best-effort only.
        """
        password_bytes = bytearray(password.encode("utf-8"))

        try:
            return hash_secret_raw(
                secret=bytes(password_bytes),
                salt=salt,
                time_cost=parameters.iterations,
                memory_cost=parameters.memory_cost_kib,
                parallelism=parameters.parallelism,
                hash_len=parameters.key_length,
                type=Type.ID,
                version=ARGON2_VERSION,
            )
        finally:
            _secure_zero_memory(password_bytes)
