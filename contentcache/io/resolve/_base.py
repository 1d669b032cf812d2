"""Base content resolver interface.

A resolver turns an opaque source identifier (a URI string) into a readable
binary stream. The cache only ever talks to this interface, so it never needs
to know how a source is backed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO
from urllib.parse import urlsplit

__all__ = ["ContentResolver", "source_scheme"]


def source_scheme(source: Any) -> str | None:
    """Return the lower-cased URI scheme of *source*, or None.

    Non-string sources and strings without a scheme both yield None.
    """
    if not isinstance(source, str) or not source:
        return None
    try:
        scheme = urlsplit(source).scheme
    except ValueError:
        return None
    return scheme.lower() or None


class ContentResolver(ABC):
    """Abstract base class for content resolvers.

    Subclasses declare the URI schemes they handle in ``schemes`` and
    implement :meth:`open_stream`.

    Requirements
    ------------
    1. ``supports(source)`` must not perform I/O.
    2. ``open_stream(source)`` returns a binary stream positioned at the
       start of the content. The caller owns it and closes it.
    3. A source that exists in principle but cannot be opened raises
       :class:`~contentcache.core.exceptions.SourceUnavailableError`.

    Examples
    --------
    >>> class EchoResolver(ContentResolver):
    ...     schemes = ("echo",)
    ...
    ...     def open_stream(self, source):
    ...         return io.BytesIO(source.encode())
    """

    schemes: tuple[str, ...] = ()

    def supports(self, source: Any) -> bool:
        """Check whether *source* is of a kind this resolver can open."""
        return source_scheme(source) in self.schemes

    @abstractmethod
    def open_stream(self, source: str) -> BinaryIO:
        """Open *source* as a readable binary stream.

        Raises
        ------
        SourceUnavailableError
            If the source cannot be opened.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(schemes={self.schemes!r})"
