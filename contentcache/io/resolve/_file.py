"""Local file resolver for ``file://`` URIs."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO
from urllib.parse import urlsplit
from urllib.request import url2pathname

from contentcache.core.exceptions import SourceUnavailableError
from ._base import ContentResolver

__all__ = ["FileResolver", "path_to_uri"]


def path_to_uri(path: str | Path) -> str:
    """Render a local path as a ``file://`` URI."""
    return Path(path).expanduser().resolve().as_uri()


class FileResolver(ContentResolver):
    """Open ``file://`` URIs from the local filesystem.

    Examples
    --------
    >>> resolver = FileResolver()
    >>> with resolver.open_stream("file:///etc/hostname") as stream:
    ...     data = stream.read()
    """

    schemes = ("file",)

    @staticmethod
    def to_path(source: str) -> Path:
        parts = urlsplit(source)
        if parts.netloc not in ("", "localhost"):
            raise SourceUnavailableError(f"Remote file host not supported: {source}")
        return Path(url2pathname(parts.path))

    def open_stream(self, source: str) -> BinaryIO:
        path = self.to_path(source)
        if path.is_dir():
            raise SourceUnavailableError(f"Source is a directory: {source}")
        try:
            return open(path, "rb")
        except OSError as e:
            raise SourceUnavailableError(f"Cannot open {source}: {e}") from e
