"""
Secure Configuration Module
===========================

Provides immutable, environment-aware configuration for the hashing core.

Security Features:
- Immutable configuration after initialization
- Environment variable override support
- Secret-looking keys are never read from the environment
- Warnings for hashing profiles below the recommended floor
- No process-wide singleton; pass the config explicitly
"""

from __future__ import annotations

import hashlib
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Mapping, Optional

from credhash.core.auth.params import (
    DEFAULT_LIMITS,
    DEFAULT_PARAMETERS,
    HashParameters,
    VerifyLimits,
)
from credhash.core.auth.policy import DEFAULT_POLICY, PasswordPolicy
from credhash.security.constants import (
    RECOMMENDED_MIN_MEMORY_COST,
    RECOMMENDED_MIN_SALT_LENGTH,
    RECOMMENDED_MIN_TIME_COST,
)


# Security Constants
_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "secret", "token", "pepper", "credential",
})

_HASHING_KEYS: Final[tuple[str, ...]] = (
    "memory_cost_kib", "iterations", "parallelism", "salt_length", "key_length",
)
_POLICY_KEYS: Final[tuple[str, ...]] = ("min_length", "max_length")
_LIMITS_KEYS: Final[tuple[str, ...]] = ("max_memory_cost_kib", "max_iterations")
_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS)


def _parse_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got {value!r}") from e


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "INFO"
    enable_console: bool = True
    log_file: Optional[Path] = None
    json_format: bool = False
    max_file_size_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate logging settings."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.level}")
        if self.max_file_size_bytes <= 0:
            raise ValueError("max_file_size_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count cannot be negative")


class CredhashConfig:
    """
    Immutable configuration with environment variable override support.

    Sections:
    - hashing: Argon2id profile for new hashes
    - policy: password length limits
    - limits: cost ceilings for stored hashes being verified
    - logging: log level and handlers

    Usage:
        config = CredhashConfig.load()
        verifier = PasswordVerifier.from_config(config)
        configure_logging(config.logging)
    """

    __slots__ = ("_hashing", "_policy", "_limits", "_logging", "_frozen", "_config_hash")

    def __init__(
        self,
        hashing: Optional[HashParameters] = None,
        policy: Optional[PasswordPolicy] = None,
        limits: Optional[VerifyLimits] = None,
        logging: Optional[LoggingConfig] = None,
    ) -> None:
        """Initialize configuration. Use CredhashConfig.load() to read the environment."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_hashing", hashing or DEFAULT_PARAMETERS)
        object.__setattr__(self, "_policy", policy or DEFAULT_POLICY)
        object.__setattr__(self, "_limits", limits or DEFAULT_LIMITS)
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_config_hash", self._compute_hash())
        object.__setattr__(self, "_frozen", True)

        self._check_hashing_floor()

    def _compute_hash(self) -> str:
        """Compute a hash of the configuration for integrity checking."""
        config_str = f"{self._hashing}|{self._policy}|{self._limits}|{self._logging}"
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    def _check_hashing_floor(self) -> None:
        weak = []
        if self._hashing.memory_cost_kib < RECOMMENDED_MIN_MEMORY_COST:
            weak.append(f"memory_cost_kib < {RECOMMENDED_MIN_MEMORY_COST}")
        if self._hashing.iterations < RECOMMENDED_MIN_TIME_COST:
            weak.append(f"iterations < {RECOMMENDED_MIN_TIME_COST}")
        if self._hashing.salt_length < RECOMMENDED_MIN_SALT_LENGTH:
            weak.append(f"salt_length < {RECOMMENDED_MIN_SALT_LENGTH}")
        if weak:
            warnings.warn(
                "Hashing profile is below the recommended floor: " + ", ".join(weak),
                SecurityWarning,
                stacklevel=3,
            )

    @property
    def hashing(self) -> HashParameters:
        """Get the hashing profile."""
        return self._hashing

    @property
    def policy(self) -> PasswordPolicy:
        """Get the password policy."""
        return self._policy

    @property
    def limits(self) -> VerifyLimits:
        """Get the verification cost ceilings."""
        return self._limits

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._logging

    @property
    def config_hash(self) -> str:
        """Get configuration integrity hash."""
        return self._config_hash

    @classmethod
    def load(
        cls,
        env_prefix: str = "CREDHASH",
        environ: Optional[Mapping[str, str]] = None,
    ) -> CredhashConfig:
        """
        Load configuration with environment variable overrides.

        Environment variables are prefixed with CREDHASH_ and use double
        underscores between section and key.

        Examples:
            CREDHASH_HASHING__MEMORY_COST_KIB=131072
            CREDHASH_POLICY__MIN_LENGTH=12
            CREDHASH_LIMITS__MAX_MEMORY_COST_KIB=262144
            CREDHASH_LOGGING__LEVEL=DEBUG

        Args:
            env_prefix: Prefix for environment variables (default: CREDHASH)
            environ: Mapping to read instead of os.environ

        Returns:
            Configured CredhashConfig instance
        """
        env_overrides = cls._parse_env_overrides(
            env_prefix, os.environ if environ is None else environ
        )

        hashing_kwargs: dict[str, Any] = {}
        for key in _HASHING_KEYS:
            name = f"hashing.{key}"
            if name in env_overrides:
                hashing_kwargs[key] = _parse_int(name, env_overrides[name])

        policy_kwargs: dict[str, Any] = {}
        for key in _POLICY_KEYS:
            name = f"policy.{key}"
            if name in env_overrides:
                policy_kwargs[key] = _parse_int(name, env_overrides[name])

        limits_kwargs: dict[str, Any] = {}
        for key in _LIMITS_KEYS:
            name = f"limits.{key}"
            if name in env_overrides:
                limits_kwargs[key] = _parse_int(name, env_overrides[name])

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"].upper()
        if "logging.enable_console" in env_overrides:
            logging_kwargs["enable_console"] = env_overrides["logging.enable_console"].lower() in _TRUE_VALUES
        if "logging.json_format" in env_overrides:
            logging_kwargs["json_format"] = env_overrides["logging.json_format"].lower() in _TRUE_VALUES
        if "logging.log_file" in env_overrides:
            logging_kwargs["log_file"] = Path(env_overrides["logging.log_file"])

        return cls(
            hashing=HashParameters(**hashing_kwargs) if hashing_kwargs else None,
            policy=PasswordPolicy(**policy_kwargs) if policy_kwargs else None,
            limits=VerifyLimits(**limits_kwargs) if limits_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(prefix: str, environ: Mapping[str, str]) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"

        for key, value in environ.items():
            if key.startswith(prefix_upper):
                # CREDHASH_SECTION__KEY -> section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")

                # SECURITY: Skip sensitive keys from environment
                if _is_sensitive_key(config_key):
                    continue

                overrides[config_key] = value

        return overrides

    def __repr__(self) -> str:
        """Safe string representation without sensitive data."""
        return f"CredhashConfig(hash={self._config_hash}, hashing={self._hashing!r})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if getattr(self, "_frozen", False):
            raise AttributeError("CredhashConfig is immutable after initialization")
        super().__setattr__(name, value)


class SecurityWarning(UserWarning):
    """Warning for security-related configuration issues."""
    pass
