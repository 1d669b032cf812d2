"""HTTP/HTTPS resolver.

Opens remote sources as streamed responses with:
- Automatic retry with exponential backoff on transient statuses
- Transparent content decoding (gzip/deflate)
- Lazy, chunked reads so large bodies are never held in memory
"""

from __future__ import annotations

import io
from typing import BinaryIO

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from contentcache.core.exceptions import SourceUnavailableError
from contentcache.utils import get_logger
from ._base import ContentResolver

logger = get_logger()

__all__ = ["HTTPResolver", "ResponseStream"]


class ResponseStream(io.RawIOBase):
    """Readable binary stream over a streamed ``requests.Response``.

    Closing the stream releases the underlying connection.
    """

    def __init__(self, response: requests.Response, chunk_size: int = 8192):
        super().__init__()
        self._response = response
        self._chunks = response.iter_content(chunk_size=chunk_size)
        self._buffer = b""

    def readable(self) -> bool:
        return True

    def _next_chunk(self) -> bytes:
        try:
            for chunk in self._chunks:
                if chunk:
                    return chunk
        except requests.RequestException as e:
            raise SourceUnavailableError(f"Error reading {self._response.url}: {e}") from e
        return b""

    def readinto(self, buffer) -> int:
        if not self._buffer:
            self._buffer = self._next_chunk()
            if not self._buffer:
                return 0

        n = min(len(buffer), len(self._buffer))
        buffer[:n] = self._buffer[:n]
        self._buffer = self._buffer[n:]
        return n

    def close(self) -> None:
        if not self.closed:
            try:
                self._response.close()
            finally:
                super().close()


class HTTPResolver(ContentResolver):
    """Open ``http://`` and ``https://`` URLs as streams.

    Parameters
    ----------
    timeout : float, default=30
        Connect/read timeout in seconds.
    max_retries : int, default=3
        Maximum number of retry attempts on connection errors and
        429/5xx responses.
    backoff_factor : float, default=0.5
        Exponential backoff factor between retries.
    session : requests.Session, optional
        Session to use. A retrying session is created if omitted.

    Examples
    --------
    >>> resolver = HTTPResolver(timeout=10)
    >>> with resolver.open_stream("https://example.com/logo.png") as stream:
    ...     header = stream.read(8)
    """

    schemes = ("http", "https")

    def __init__(
        self,
        *,
        timeout: float = 30,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        chunk_size: int = 8192,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session or self._create_session(max_retries, backoff_factor)

    @staticmethod
    def _create_session(max_retries: int, backoff_factor: float) -> requests.Session:
        """Create requests session with retry logic."""
        session = requests.Session()

        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def open_stream(self, source: str) -> BinaryIO:
        logger.debug(f"Opening remote source: {source}")
        try:
            response = self.session.get(source, stream=True, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceUnavailableError(f"Failed to open {source}: {e}") from e

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            response.close()
            raise SourceUnavailableError(f"Failed to open {source}: {e}") from e

        return ResponseStream(response, chunk_size=self.chunk_size)
