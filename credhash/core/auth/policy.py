"""
Password Policy
===============

Structural password rules checked before a password is hashed or accepted
as a verification candidate.

Rules are checked in a fixed order and the first violation is reported:
encodable text, length ceiling, length floor, uppercase, lowercase,
digit, special.
Character classes follow Unicode categories, so non-Latin scripts count.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Final, Optional

from credhash.core.auth.errors import PolicyError, PolicyViolation
from credhash.security.constants import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH


@dataclass(frozen=True, slots=True)
class PasswordPolicy:
    """Immutable password length limits, measured in UTF-8 bytes."""

    min_length: int = MIN_PASSWORD_LENGTH
    max_length: int = MAX_PASSWORD_LENGTH

    def __post_init__(self) -> None:
        """Validate policy limits."""
        if self.min_length < 1:
            raise ValueError("min_length must be at least 1")
        if self.max_length < self.min_length:
            raise ValueError("max_length must not be less than min_length")


DEFAULT_POLICY: Final[PasswordPolicy] = PasswordPolicy()


class PasswordValidator:
    """
    Checks passwords against a PasswordPolicy.

    Usage:
        validator = PasswordValidator()

        violation = validator.check("hunter2")   # PolicyViolation.TOO_SHORT
        validator.validate("TestP@ssw0rd")       # returns None
    """

    __slots__ = ("_policy",)

    def __init__(self, policy: PasswordPolicy = DEFAULT_POLICY) -> None:
        self._policy = policy

    @property
    def policy(self) -> PasswordPolicy:
        """Get the policy this validator enforces."""
        return self._policy

    def check(self, password: str) -> Optional[PolicyViolation]:
        """
        Find the first rule the password violates.

        Args:
            password: The candidate password

        Returns:
            The violated rule, or None if the password is acceptable
        """
        if not isinstance(password, str):
            raise TypeError("password must be a string")

        try:
            length = len(password.encode("utf-8"))
        except UnicodeEncodeError:
            # lone surrogates
            return PolicyViolation.INVALID_ENCODING

        if length > self._policy.max_length:
            return PolicyViolation.TOO_LONG
        if length < self._policy.min_length:
            return PolicyViolation.TOO_SHORT

        has_upper = has_lower = has_digit = has_special = False
        for char in password:
            category = unicodedata.category(char)
            if category == "Lu":
                has_upper = True
            elif category == "Ll":
                has_lower = True
            elif category == "Nd":
                has_digit = True
            elif category[0] in ("P", "S"):
                has_special = True

        if not has_upper:
            return PolicyViolation.MISSING_UPPER
        if not has_lower:
            return PolicyViolation.MISSING_LOWER
        if not has_digit:
            return PolicyViolation.MISSING_DIGIT
        if not has_special:
            return PolicyViolation.MISSING_SPECIAL
        return None

    def validate(self, password: str) -> None:
        """
        Validate a password against the policy.

        Raises:
            PolicyError: For the first violated rule
        """
        violation = self.check(password)
        if violation is not None:
            raise PolicyError(violation)
