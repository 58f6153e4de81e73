from __future__ import annotations

import secrets
from concurrent.futures import ThreadPoolExecutor

from credhash.core.auth import PasswordVerifier

CALLS = 100
MAX_WORKERS = 8


def _random_password() -> str:
    return f"Aa1!{secrets.token_urlsafe(12)}"


def test_concurrent_hash_and_verify(verifier: PasswordVerifier) -> None:
    passwords = [_random_password() for _ in range(CALLS)]
    assert len(set(passwords)) == CALLS

    with ThreadPoolExecutor(max_workers=MAX_WORKERS) as pool:
        hashes = list(pool.map(verifier.hash_password, passwords))

        own = list(pool.map(verifier.verify_password, passwords, hashes))
        shifted = hashes[1:] + hashes[:1]
        other = list(pool.map(verifier.verify_password, passwords, shifted))

    assert len(set(hashes)) == CALLS
    assert all(own)
    assert not any(other)
