from __future__ import annotations

import pytest

from credhash.core.auth import (
    PasswordPolicy,
    PasswordValidator,
    PolicyError,
    PolicyViolation,
)


@pytest.mark.parametrize(
    ("password", "expected"),
    [
        ("TestP@ssw0rd", None),
        ("TestP@1s", None),
        ("Te1!", PolicyViolation.TOO_SHORT),
        ("", PolicyViolation.TOO_SHORT),
        ("a" * 73 + "A1!", PolicyViolation.TOO_LONG),
        ("testp@ssw0rd", PolicyViolation.MISSING_UPPER),
        ("TESTP@SSW0RD", PolicyViolation.MISSING_LOWER),
        ("TestPassword!", PolicyViolation.MISSING_DIGIT),
        ("TestPassword1", PolicyViolation.MISSING_SPECIAL),
        ("TestPassword", PolicyViolation.MISSING_DIGIT),
        ("TestP@ss", PolicyViolation.MISSING_DIGIT),
        ("12345678", PolicyViolation.MISSING_UPPER),
        ("!@#$%^&*", PolicyViolation.MISSING_UPPER),
        ("Test!@#$%^&*()_+P@ssw0rd", None),
        ("ТестПароль1!", None),
        ("TestПароль1!", None),
        ("ТестПароль", PolicyViolation.MISSING_DIGIT),
    ],
)
def test_check_reports_first_violation(password: str, expected: PolicyViolation | None) -> None:
    assert PasswordValidator().check(password) == expected


def test_length_boundaries() -> None:
    validator = PasswordValidator()
    assert validator.check("TestP@ssw0rd" + "a" * 60) is None  # 72
    assert validator.check("TestP@ssw0rd" + "a" * 61) == PolicyViolation.TOO_LONG
    assert validator.check("A1!" + "a" * 70) == PolicyViolation.TOO_LONG  # 73


def test_length_is_measured_in_utf8_bytes() -> None:
    validator = PasswordValidator()
    # 39 characters, 75 bytes
    assert validator.check("П" * 36 + "a1!") == PolicyViolation.TOO_LONG
    # 4 characters, 6 bytes
    assert validator.check("Тп1!") == PolicyViolation.TOO_SHORT
    # 8 characters, 12 bytes
    assert validator.check("Тест1!ab") is None


def test_too_long_is_checked_before_character_classes() -> None:
    assert PasswordValidator().check("a" * 100) == PolicyViolation.TOO_LONG


@pytest.mark.parametrize(
    ("password", "expected"),
    [
        ("TestP@ss٣", None),  # ARABIC-INDIC DIGIT THREE is Nd
        ("TestPass1€", None),  # EURO SIGN is a symbol
        ("TestPass1^", None),  # modifier symbol
        ("TestPass1 ", PolicyViolation.MISSING_SPECIAL),  # space is a separator
        ("TestPass²!", PolicyViolation.MISSING_DIGIT),  # superscript two is No
    ],
)
def test_unicode_categories(password: str, expected: PolicyViolation | None) -> None:
    assert PasswordValidator().check(password) == expected


def test_validate_raises_tagged_error() -> None:
    with pytest.raises(PolicyError) as excinfo:
        PasswordValidator().validate("testp@ssw0rd")

    assert excinfo.value.kind is PolicyViolation.MISSING_UPPER
    assert str(excinfo.value) == "password must contain at least one uppercase letter"
    assert isinstance(excinfo.value, ValueError)


def test_validate_accepts_valid_password() -> None:
    assert PasswordValidator().validate("TestP@ssw0rd") is None


def test_custom_policy() -> None:
    validator = PasswordValidator(PasswordPolicy(min_length=12, max_length=16))
    assert validator.check("TestP@ssw0r") == PolicyViolation.TOO_SHORT
    assert validator.check("TestP@ssw0rd") is None
    assert validator.check("TestP@ssw0rdTest!") == PolicyViolation.TOO_LONG
    assert validator.policy.min_length == 12


@pytest.mark.parametrize(
    ("min_length", "max_length"),
    [(0, 72), (10, 9), (-1, 5)],
)
def test_invalid_policy_limits(min_length: int, max_length: int) -> None:
    with pytest.raises(ValueError):
        PasswordPolicy(min_length=min_length, max_length=max_length)


def test_non_string_password() -> None:
    with pytest.raises(TypeError):
        PasswordValidator().check(b"TestP@ssw0rd")  # type: ignore[arg-type]


@pytest.mark.parametrize("password", ["TestP@ssw0rd\ud800", "\udfffTestP@ssw0rd", "\ud800"])
def test_lone_surrogate_is_a_policy_violation(password: str) -> None:
    validator = PasswordValidator()
    assert validator.check(password) is PolicyViolation.INVALID_ENCODING

    with pytest.raises(PolicyError) as excinfo:
        validator.validate(password)
    assert excinfo.value.kind is PolicyViolation.INVALID_ENCODING
