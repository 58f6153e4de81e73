"""
Encoded Hash Codec
==================

Serializes Argon2id parameters, salt and derived key to and from the
standard encoded form:

    $argon2id$v=19$m=65536,t=3,p=2$<salt>$<key>

Salt and key use standard base64 without padding. Decoding treats its
input as untrusted: each malformed part is reported with its own
DecodeFailure, and only canonical base64 is accepted.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Final, Iterator, Union

from credhash.core.auth.errors import DecodeError, DecodeFailure
from credhash.core.auth.params import HashParameters
from credhash.security.constants import (
    ARGON2_ALGORITHM,
    ARGON2_VERSION,
    MAX_PARALLELISM,
    MAX_UINT32,
)


_FIELD_COUNT: Final[int] = 6
# Digit counts bound int() input; out-of-range values are rejected after parsing
_VERSION_RE: Final = re.compile(r"v=([0-9]{1,10})")
_PARAMS_RE: Final = re.compile(r"m=([0-9]{1,10}),t=([0-9]{1,10}),p=([0-9]{1,3})")
_B64_ALPHABET_RE: Final = re.compile(r"[A-Za-z0-9+/]*")


@dataclass(frozen=True, slots=True)
class DecodedHash:
    """
    Parameters, salt and key recovered from an encoded hash.

    Unpacks as ``parameters, salt, key = decoded``.
    """
    parameters: HashParameters
    salt: bytes
    key: bytes

    def __iter__(self) -> Iterator[Union[HashParameters, bytes]]:
        return iter((self.parameters, self.salt, self.key))

    def __repr__(self) -> str:
        """Safe representation without exposing salt or key."""
        return (
            f"DecodedHash(parameters={self.parameters!r}, "
            f"salt_len={len(self.salt)}, key_len={len(self.key)})"
        )


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def _b64decode_strict(value: str) -> bytes:
    """
    Decode unpadded standard base64, rejecting non-canonical input.

    Raises:
        ValueError: If the text is not the canonical encoding of some bytes
    """
    if not _B64_ALPHABET_RE.fullmatch(value):
        raise ValueError("invalid base64 character")
    if len(value) % 4 == 1:
        raise ValueError("invalid base64 length")

    try:
        data = base64.b64decode(value + "=" * (-len(value) % 4), validate=True)
    except binascii.Error as e:
        raise ValueError(str(e)) from e

    # Non-zero trailing bits decode fine but do not re-encode to the input
    if _b64encode(data) != value:
        raise ValueError("non-canonical base64")
    return data


def encode_hash(parameters: HashParameters, salt: bytes, key: bytes) -> str:
    """
    Encode parameters, salt and key into the storage format.

    Args:
        parameters: Cost profile used for the derivation
        salt: Salt bytes (length must equal ``parameters.salt_length``)
        key: Derived key (length must equal ``parameters.key_length``)

    Returns:
        The encoded hash string
    """
    if not salt:
        raise ValueError("salt cannot be empty")
    if not key:
        raise ValueError("key cannot be empty")
    if len(salt) != parameters.salt_length:
        raise ValueError("salt length does not match parameters")
    if len(key) != parameters.key_length:
        raise ValueError("key length does not match parameters")

    return (
        f"${ARGON2_ALGORITHM}$v={ARGON2_VERSION}"
        f"$m={parameters.memory_cost_kib},t={parameters.iterations},p={parameters.parallelism}"
        f"${_b64encode(salt)}${_b64encode(key)}"
    )


def decode_hash(encoded: str) -> DecodedHash:
    """
    Decode an encoded hash into parameters, salt and key.

    Args:
        encoded: The stored hash string

    Returns:
        DecodedHash with ``salt_length`` and ``key_length`` taken from the
        decoded byte lengths

    Raises:
        DecodeError: With the DecodeFailure describing the first problem
    """
    if not isinstance(encoded, str):
        raise TypeError("encoded hash must be a string")

    values = encoded.split("$")
    if len(values) != _FIELD_COUNT:
        raise DecodeError(
            DecodeFailure.BAD_FIELD_COUNT,
            f"expected {_FIELD_COUNT} fields, got {len(values)}",
        )

    if values[1] != ARGON2_ALGORITHM:
        raise DecodeError(DecodeFailure.UNSUPPORTED_ALGORITHM)

    version_match = _VERSION_RE.fullmatch(values[2])
    if version_match is None:
        raise DecodeError(DecodeFailure.VERSION_MISMATCH, "failed to parse version")
    version = int(version_match.group(1))
    if version != ARGON2_VERSION:
        raise DecodeError(
            DecodeFailure.VERSION_MISMATCH,
            f"expected {ARGON2_VERSION}, got {version}",
        )

    params_match = _PARAMS_RE.fullmatch(values[3])
    if params_match is None:
        raise DecodeError(DecodeFailure.BAD_PARAMETER_BLOCK)
    memory, iterations, parallelism = (int(group) for group in params_match.groups())
    if memory > MAX_UINT32 or iterations > MAX_UINT32 or parallelism > MAX_PARALLELISM:
        raise DecodeError(DecodeFailure.BAD_PARAMETER_BLOCK, "value out of range")

    if memory == 0 or iterations == 0 or parallelism == 0:
        raise DecodeError(DecodeFailure.ZERO_PARAMETER)

    try:
        salt = _b64decode_strict(values[4])
    except ValueError as e:
        raise DecodeError(DecodeFailure.BAD_SALT_ENCODING, str(e)) from e
    if not salt:
        raise DecodeError(DecodeFailure.EMPTY_SALT)

    try:
        key = _b64decode_strict(values[5])
    except ValueError as e:
        raise DecodeError(DecodeFailure.BAD_HASH_ENCODING, str(e)) from e
    if not key:
        raise DecodeError(DecodeFailure.EMPTY_HASH)

    parameters = HashParameters(
        memory_cost_kib=memory,
        iterations=iterations,
        parallelism=parallelism,
        salt_length=len(salt),
        key_length=len(key),
    )
    return DecodedHash(parameters=parameters, salt=salt, key=key)
