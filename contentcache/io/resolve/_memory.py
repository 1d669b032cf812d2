"""In-process resolver for ``memory://`` URIs.

Holds named byte payloads, which makes it a convenient backing for virtual
documents generated at runtime.
"""

from __future__ import annotations

import io
import threading
from typing import BinaryIO
from urllib.parse import quote, unquote, urlsplit

from contentcache.core.exceptions import SourceUnavailableError
from ._base import ContentResolver

__all__ = ["MemoryResolver"]


class MemoryResolver(ContentResolver):
    """Serve registered byte payloads as streams.

    Examples
    --------
    >>> resolver = MemoryResolver()
    >>> uri = resolver.register("report", b"%PDF-1.7 ...")
    >>> uri
    'memory://report'
    >>> resolver.open_stream(uri).read(8)
    b'%PDF-1.7'
    """

    schemes = ("memory",)

    def __init__(self) -> None:
        self._payloads: dict[str, bytes] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _name(source: str) -> str:
        parts = urlsplit(source)
        return unquote(parts.netloc + parts.path)

    def register(self, name: str, data: bytes) -> str:
        """Store *data* under *name* and return its ``memory://`` URI."""
        if not name:
            raise ValueError("name must not be empty")
        with self._lock:
            self._payloads[name] = bytes(data)
        return f"memory://{quote(name, safe='')}"

    def unregister(self, name: str) -> None:
        """Forget *name*. Unknown names are ignored."""
        with self._lock:
            self._payloads.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self._payloads

    def open_stream(self, source: str) -> BinaryIO:
        name = self._name(source)
        with self._lock:
            data = self._payloads.get(name)
        if data is None:
            raise SourceUnavailableError(f"No in-memory content named {name!r}")
        return io.BytesIO(data)
