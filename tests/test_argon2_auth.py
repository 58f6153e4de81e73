from __future__ import annotations

import pytest
from argon2.low_level import Type, hash_secret_raw

from credhash.core.auth import Argon2Hasher, HashParameters, RandomSourceError
from credhash.core.auth import argon2_auth
from credhash.core.auth.argon2_auth import _secure_zero_memory


def test_generate_salt_length_and_freshness(hasher: Argon2Hasher) -> None:
    first = hasher.generate_salt(16)
    second = hasher.generate_salt(16)

    assert isinstance(first, bytes)
    assert len(first) == 16
    assert first != second


def test_generate_salt_rejects_non_positive_length(hasher: Argon2Hasher) -> None:
    with pytest.raises(ValueError):
        hasher.generate_salt(0)


def test_random_source_failure_is_escalated() -> None:
    def broken_source(n: int) -> bytes:
        raise OSError("entropy pool unavailable")

    with pytest.raises(RandomSourceError) as excinfo:
        Argon2Hasher(random_source=broken_source).generate_salt(16)

    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.parametrize("returned", [b"", b"\x00" * 8, None, "x" * 16])
def test_short_or_invalid_random_output_is_rejected(returned: object) -> None:
    hasher = Argon2Hasher(random_source=lambda n: returned)  # type: ignore[arg-type,return-value]

    with pytest.raises(RandomSourceError):
        hasher.generate_salt(16)


def test_injected_random_source_is_used() -> None:
    hasher = Argon2Hasher(random_source=lambda n: b"\x01" * n)
    assert hasher.generate_salt(12) == b"\x01" * 12


def test_derive_is_deterministic(hasher: Argon2Hasher, fast_parameters: HashParameters) -> None:
    salt = b"saltsaltsaltsalt"

    first = hasher.derive("TestP@ssw0rd", salt, fast_parameters)
    second = hasher.derive("TestP@ssw0rd", salt, fast_parameters)

    assert first == second
    assert len(first) == fast_parameters.key_length


def test_derive_depends_on_every_input(hasher: Argon2Hasher, fast_parameters: HashParameters) -> None:
    salt = b"saltsaltsaltsalt"
    base = hasher.derive("TestP@ssw0rd", salt, fast_parameters)

    assert hasher.derive("TestP@ssw0rD", salt, fast_parameters) != base
    assert hasher.derive("TestP@ssw0rd", b"SALTSALTSALTSALT", fast_parameters) != base
    more_passes = HashParameters(memory_cost_kib=256, iterations=2, parallelism=1)
    assert hasher.derive("TestP@ssw0rd", salt, more_passes) != base


def test_derive_output_length_follows_key_length(hasher: Argon2Hasher) -> None:
    params = HashParameters(memory_cost_kib=64, iterations=1, parallelism=1, key_length=48)
    assert len(hasher.derive("TestP@ssw0rd", b"saltsalt", params)) == 48


def test_derive_handles_non_ascii_password(hasher: Argon2Hasher, fast_parameters: HashParameters) -> None:
    key = hasher.derive("ТестПароль1!", b"saltsaltsaltsalt", fast_parameters)
    assert len(key) == 32


def test_supports_reflects_argon2_minimums() -> None:
    assert Argon2Hasher.supports(HashParameters())
    assert not Argon2Hasher.supports(HashParameters(salt_length=4))
    assert not Argon2Hasher.supports(HashParameters(key_length=3))
    assert not Argon2Hasher.supports(HashParameters(memory_cost_kib=8, parallelism=2))
    assert Argon2Hasher.supports(HashParameters(memory_cost_kib=16, parallelism=2))
    assert not Argon2Hasher.supports(HashParameters(), salt_length=7)


def test_secure_zero_memory() -> None:
    buffer = bytearray(b"TestP@ssw0rd")
    _secure_zero_memory(buffer)
    assert buffer == bytearray(len(buffer))

    empty = bytearray()
    _secure_zero_memory(empty)
    assert empty == bytearray()


def test_derive_wipes_its_local_copy(
    hasher: Argon2Hasher, fast_parameters: HashParameters, monkeypatch: pytest.MonkeyPatch
) -> None:
    wiped: list[bytearray] = []

    def recording_zero(data: bytearray) -> None:
        wiped.append(data)
        _secure_zero_memory(data)

    monkeypatch.setattr(argon2_auth, "_secure_zero_memory", recording_zero)
    salt = b"s" * 16
    key = hasher.derive("TestP@ssw0rd", salt, fast_parameters)

    # Only the local bytearray is wiped; the key is derived from its contents first
    assert len(wiped) == 1
    assert wiped[0] == bytearray(len("TestP@ssw0rd"))
    assert key == hash_secret_raw(
        secret=b"TestP@ssw0rd",
        salt=salt,
        time_cost=fast_parameters.iterations,
        memory_cost=fast_parameters.memory_cost_kib,
        parallelism=fast_parameters.parallelism,
        hash_len=fast_parameters.key_length,
        type=Type.ID,
        version=19,
    )
