from __future__ import annotations

import pytest

from credhash.core.auth import Argon2Hasher, HashParameters, PasswordVerifier

# Cheap profile so tests do not allocate 64 MiB per derivation
FAST_PARAMETERS = HashParameters(
    memory_cost_kib=256,
    iterations=1,
    parallelism=1,
    salt_length=16,
    key_length=32,
)


@pytest.fixture()
def fast_parameters() -> HashParameters:
    return FAST_PARAMETERS


@pytest.fixture()
def hasher() -> Argon2Hasher:
    return Argon2Hasher()


@pytest.fixture()
def verifier() -> PasswordVerifier:
    return PasswordVerifier(parameters=FAST_PARAMETERS)
