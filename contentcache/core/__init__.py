"""Core components for contentcache.

Provides the error hierarchy and configuration objects shared by the
cache and the content resolvers.
"""

from .config import CacheConfig, Config
from .exceptions import (
    ConfigurationError,
    ContentCacheError,
    InvalidSourceError,
    SourceUnavailableError,
    StorageError,
)

__all__ = [
    # Configuration
    "Config",
    "CacheConfig",
    # Exceptions
    "ContentCacheError",
    "ConfigurationError",
    "InvalidSourceError",
    "SourceUnavailableError",
    "StorageError",
]
