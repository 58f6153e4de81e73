"""
Password Hashing and Verification
=================================

Ties the password policy, Argon2id hasher and encoded-hash codec together
behind two operations: hash a password for storage, and verify a candidate
against a stored hash.

Contract notes:
- The candidate is checked against policy *before* the stored hash is
  looked at. A candidate that fails the current policy is rejected with
  PolicyError even if it is the correct password.
- A stored hash that cannot be decoded raises DecodeError; it is never
  reported as a simple mismatch.
- A wrong password returns False and never raises.
- Derived keys are compared with hmac.compare_digest.
- Stored hashes whose memory or time cost exceed the verifier's limits
  are rejected as UNSUPPORTED_PARAMETERS before any derivation.
"""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING, Final, Optional

from credhash.core.auth.argon2_auth import Argon2Hasher
from credhash.core.auth.codec import decode_hash, encode_hash
from credhash.core.auth.errors import (
    DecodeError,
    DecodeFailure,
    PolicyError,
    RandomSourceError,
)
from credhash.core.auth.params import (
    DEFAULT_LIMITS,
    DEFAULT_PARAMETERS,
    HashParameters,
    VerifyLimits,
)
from credhash.core.auth.policy import PasswordValidator

if TYPE_CHECKING:
    from credhash.core.config import CredhashConfig


class PasswordVerifier:
    """
    Hashes passwords for storage and verifies candidates against stored hashes.

    Usage:
        verifier = PasswordVerifier()

        # Registration / password change
        encoded = verifier.hash_password("TestP@ssw0rd")
        store(encoded)

        # Login
        if verifier.verify_password(candidate, stored):
            ...

    All collaborators are immutable, so one instance can serve any number
    of threads. Each hash or verify call allocates the profile's memory
    cost for its duration; bound concurrency on the caller side.
    """

    __slots__ = ("_parameters", "_validator", "_hasher", "_limits", "_log")

    def __init__(
        self,
        parameters: HashParameters = DEFAULT_PARAMETERS,
        validator: Optional[PasswordValidator] = None,
        hasher: Optional[Argon2Hasher] = None,
        limits: VerifyLimits = DEFAULT_LIMITS,
    ) -> None:
        """
        Initialize the verifier.

        Args:
            parameters: Cost profile for new hashes
            validator: Password policy validator (default policy if omitted)
            hasher: Argon2id hasher (system random source if omitted)
            limits: Cost ceilings for stored hashes; must admit ``parameters``
        """
        self._parameters = parameters
        self._validator = validator or PasswordValidator()
        self._hasher = hasher or Argon2Hasher()
        self._limits = limits
        self._log = logging.getLogger("credhash.auth")

        if not self._hasher.supports(parameters):
            raise ValueError(f"parameters are not accepted by argon2: {parameters!r}")
        if not limits.allows(parameters):
            raise ValueError(f"parameters exceed the verification limits: {limits!r}")

    @classmethod
    def from_config(cls, config: CredhashConfig, hasher: Optional[Argon2Hasher] = None) -> PasswordVerifier:
        """Build a verifier from the hashing, policy and limits sections of a config."""
        return cls(
            parameters=config.hashing,
            validator=PasswordValidator(config.policy),
            hasher=hasher,
            limits=config.limits,
        )

    @property
    def parameters(self) -> HashParameters:
        """Get the cost profile used for new hashes."""
        return self._parameters

    @property
    def limits(self) -> VerifyLimits:
        """Get the cost ceilings applied to stored hashes."""
        return self._limits

    @property
    def validator(self) -> PasswordValidator:
        """Get the password validator."""
        return self._validator

    def _validate(self, password: str) -> None:
        try:
            self._validator.validate(password)
        except PolicyError as e:
            self._log.debug("Password rejected by policy: %s", e.kind.name)
            raise

    def hash_password(self, password: str) -> str:
        """
        Hash a password for storage.

        Args:
            password: The password to hash

        Returns:
            Encoded hash string

        Raises:
            PolicyError: If the password violates the policy
            RandomSourceError: If no salt could be generated
        """
        self._validate(password)

        try:
            salt = self._hasher.generate_salt(self._parameters.salt_length)
        except RandomSourceError:
            self._log.critical("Secure random source failed; no hash was produced")
            raise

        key = self._hasher.derive(password, salt, self._parameters)
        encoded = encode_hash(self._parameters, salt, key)
        self._log.debug(
            "Password hashed (m=%d, t=%d, p=%d)",
            self._parameters.memory_cost_kib,
            self._parameters.iterations,
            self._parameters.parallelism,
        )
        return encoded

    def verify_password(self, password: str, encoded: str) -> bool:
        """
        Verify a password against a stored hash.

        Args:
            password: The candidate password
            encoded: The stored encoded hash

        Returns:
            True if the password matches, False otherwise

        Raises:
            PolicyError: If the candidate violates the policy
            DecodeError: If the stored hash is malformed or too costly
        """
        self._validate(password)

        try:
            parameters, salt, expected = decode_hash(encoded)
            if not self._hasher.supports(parameters):
                raise DecodeError(DecodeFailure.UNSUPPORTED_PARAMETERS)
            if not self._limits.allows(parameters):
                raise DecodeError(
                    DecodeFailure.UNSUPPORTED_PARAMETERS, "exceeds verification limits"
                )
        except DecodeError as e:
            self._log.warning("Stored hash rejected: %s", e.kind.name)
            raise

        candidate = self._hasher.derive(password, salt, parameters)
        return hmac.compare_digest(candidate, expected)

    def needs_rehash(self, encoded: str) -> bool:
        """
        Check if a stored hash was made with a different profile.

        Call after a successful verification to decide whether to store a
        fresh hash made with the current parameters.

        Raises:
            DecodeError: If the stored hash is malformed
        """
        return decode_hash(encoded).parameters != self._parameters


_DEFAULT_VERIFIER: Final[PasswordVerifier] = PasswordVerifier()


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id with the default profile and policy.

    Args:
        password: The password to hash

    Returns:
        Encoded hash string for storage
    """
    return _DEFAULT_VERIFIER.hash_password(password)


def verify_password(password: str, encoded: str) -> bool:
    """
    Verify a password against a stored hash with the default policy.

    Args:
        password: The password to verify
        encoded: The stored encoded hash

    Returns:
        True if password matches, False otherwise
    """
    return _DEFAULT_VERIFIER.verify_password(password, encoded)
