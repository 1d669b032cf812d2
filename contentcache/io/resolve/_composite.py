"""Scheme-dispatching resolver."""

from __future__ import annotations

from typing import Any, BinaryIO, Iterable

from contentcache.core.exceptions import InvalidSourceError
from ._base import ContentResolver, source_scheme
from ._file import FileResolver
from ._http import HTTPResolver

__all__ = ["CompositeResolver", "default_resolver"]


class CompositeResolver(ContentResolver):
    """Delegate each source to the first child resolver that supports it.

    Parameters
    ----------
    resolvers : iterable of ContentResolver
        Child resolvers, consulted in order.

    Examples
    --------
    >>> from contentcache.io.resolve import FileResolver, MemoryResolver
    >>> memory = MemoryResolver()
    >>> resolver = CompositeResolver([FileResolver(), memory])
    >>> resolver.schemes
    ('file', 'memory')
    """

    def __init__(self, resolvers: Iterable[ContentResolver]):
        self.resolvers = list(resolvers)

    @property
    def schemes(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for resolver in self.resolvers:
            for scheme in resolver.schemes:
                seen.setdefault(scheme, None)
        return tuple(seen)

    def supports(self, source: Any) -> bool:
        return any(resolver.supports(source) for resolver in self.resolvers)

    def resolver_for(self, source: Any) -> ContentResolver:
        """Return the child that handles *source*.

        Raises
        ------
        InvalidSourceError
            If no child supports the source.
        """
        for resolver in self.resolvers:
            if resolver.supports(source):
                return resolver
        raise InvalidSourceError(
            f"Unsupported source {source!r} (scheme {source_scheme(source)!r}); "
            f"expected one of {self.schemes}"
        )

    def open_stream(self, source: str) -> BinaryIO:
        return self.resolver_for(source).open_stream(source)


def default_resolver() -> CompositeResolver:
    """Resolver for local files and HTTP(S) URLs."""
    return CompositeResolver([FileResolver(), HTTPResolver()])
