"""
Core module - Contains configuration, logging, and the hashing core.
"""

from credhash.core.config import CredhashConfig, LoggingConfig, SecurityWarning
from credhash.core.logging import configure_logging, get_secure_logger, SecureLogFilter

__all__ = [
    "CredhashConfig",
    "LoggingConfig",
    "SecurityWarning",
    "configure_logging",
    "get_secure_logger",
    "SecureLogFilter",
]
