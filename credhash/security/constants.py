"""
Security Constants
==================

Defines security-related constants used throughout credhash.
These values follow security best practices and should not be modified
without careful security review.
"""

from typing import Final

# Password Requirements
MIN_PASSWORD_LENGTH: Final[int] = 8
MAX_PASSWORD_LENGTH: Final[int] = 72  # bytes of UTF-8, bounds KDF input

# Argon2id default profile
ARGON2_MEMORY_COST: Final[int] = 64 * 1024  # 64 MiB in KiB
ARGON2_TIME_COST: Final[int] = 3  # iterations
ARGON2_PARALLELISM: Final[int] = 2  # lanes
ARGON2_SALT_LENGTH: Final[int] = 16  # 128 bits
ARGON2_HASH_LENGTH: Final[int] = 32  # 256 bits

# Encoded hash format
ARGON2_ALGORITHM: Final[str] = "argon2id"
ARGON2_VERSION: Final[int] = 19  # 0x13

# libargon2 lower bounds
ARGON2_MIN_SALT_LENGTH: Final[int] = 8
ARGON2_MIN_HASH_LENGTH: Final[int] = 4
ARGON2_MIN_MEMORY_PER_LANE: Final[int] = 8  # KiB

# Upper bounds of the encoded integer fields
MAX_UINT32: Final[int] = 2 ** 32 - 1
MAX_PARALLELISM: Final[int] = 255

# Recommended floor for production profiles
RECOMMENDED_MIN_MEMORY_COST: Final[int] = 64 * 1024
RECOMMENDED_MIN_TIME_COST: Final[int] = 2
RECOMMENDED_MIN_SALT_LENGTH: Final[int] = 16

# Ceilings for parameters read back from stored hashes
MAX_VERIFY_MEMORY_COST: Final[int] = 1024 * 1024  # 1 GiB in KiB
MAX_VERIFY_TIME_COST: Final[int] = 32
