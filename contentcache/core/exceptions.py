"""Custom exceptions for contentcache.

This module defines all custom exceptions used throughout the package.
"""


class ContentCacheError(Exception):
    """Base exception class for all contentcache errors."""

    pass


class ConfigurationError(ContentCacheError):
    """Raised when there are configuration errors.

    This exception is raised when configuration parameters are invalid
    or incompatible.
    """

    pass


class InvalidSourceError(ContentCacheError, ValueError):
    """Raised when a source identifier is not of a kind the resolver handles.

    Raised before any I/O is attempted, so the cache directory and index are
    left untouched. The caller may retry with a different source.

    Examples
    --------
    >>> from contentcache.core.exceptions import InvalidSourceError
    >>> raise InvalidSourceError("Unsupported source scheme: 'ftp'")
    """

    pass


class SourceUnavailableError(ContentCacheError):
    """Raised when a resolver cannot open (or finish reading) a source.

    Typical causes are a deleted local file, an unknown in-memory name or an
    HTTP error status. No index entry is created.
    """

    pass


class StorageError(ContentCacheError, OSError):
    """Raised when cache storage cannot be created or written.

    This covers failures to create the cache directory and failures to open
    or write the destination file. A partially written file may remain on
    disk without an index entry.
    """

    pass
