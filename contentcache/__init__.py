"""contentcache: bounded local file cache for stream-only content sources.

contentcache provides:
- A capacity-bounded file cache that copies sources into private files
- Recovery of previously cached files on startup
- Pluggable resolvers for file, HTTP(S) and in-memory sources
"""

__version__ = "1.0.0"

from . import core, io, utils

from .core import (
    CacheConfig,
    ConfigurationError,
    ContentCacheError,
    InvalidSourceError,
    SourceUnavailableError,
    StorageError,
)
from .io import (
    BoundedFileCache,
    CacheEntry,
    CompositeResolver,
    ContentResolver,
    FileResolver,
    HTTPResolver,
    MemoryResolver,
    default_resolver,
    get_default_cache,
    path_to_uri,
)

__all__ = [
    # Version
    "__version__",
    # Cache
    "BoundedFileCache",
    "CacheEntry",
    "CacheConfig",
    "get_default_cache",
    # Resolvers
    "ContentResolver",
    "CompositeResolver",
    "FileResolver",
    "HTTPResolver",
    "MemoryResolver",
    "default_resolver",
    "path_to_uri",
    # Errors
    "ContentCacheError",
    "ConfigurationError",
    "InvalidSourceError",
    "SourceUnavailableError",
    "StorageError",
    # Modules
    "core",
    "io",
    "utils",
]
