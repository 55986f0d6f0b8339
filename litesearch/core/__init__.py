"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config, StorageConfig
from .logger import get_logger
from .exceptions import (
    LiteSearchError,
    ConfigurationError,
    DatabaseError,
    SchemaNotFoundError,
    PayloadDecodeError,
    DocumentError,
    MissingIdentifierError,
    PayloadEncodeError,
    SearchError,
    MalformedQueryError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "StorageConfig",
    "get_logger",
    "LiteSearchError",
    "ConfigurationError",
    "DatabaseError",
    "SchemaNotFoundError",
    "PayloadDecodeError",
    "DocumentError",
    "MissingIdentifierError",
    "PayloadEncodeError",
    "SearchError",
    "MalformedQueryError"
]
