"""Bounded file cache with recency-ordered eviction.

Sources are copied into randomly named files under a single cache
directory. The cache keeps at most ``max_entries`` files: once an admission
pushes the count over the limit, the least recently admitted files are
deleted.

The index is never persisted. At construction the directory is scanned and
existing files are ordered by modification time, so a new instance picks up
where a previous one left off.
"""

from __future__ import annotations

import threading
import time
import uuid
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO

from tqdm import tqdm

from contentcache.core.config import CacheConfig
from contentcache.core.exceptions import (
    InvalidSourceError,
    SourceUnavailableError,
    StorageError,
)
from contentcache.io.resolve import ContentResolver, default_resolver
from contentcache.utils import get_logger

logger = get_logger()

__all__ = ["BoundedFileCache", "CacheEntry", "get_default_cache"]


@dataclass(frozen=True)
class CacheEntry:
    """A cached file. Its identity is its location on disk."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def size_bytes(self) -> int:
        """Current file size, or 0 if the file is gone."""
        try:
            return self.path.stat().st_size
        except OSError:
            return 0


def _close_quietly(stream: Any, label: Any) -> None:
    """Close *stream*, logging instead of raising on failure."""
    if stream is None:
        return
    try:
        stream.close()
    except Exception as e:
        logger.warning(f"Failed to close stream for {label}: {e}")


class BoundedFileCache:
    """File cache holding at most ``max_entries`` files.

    Parameters
    ----------
    storage_root : Path or str
        Base directory under which the cache directory lives.
    cache_dir_name : str
        Name of the cache directory inside ``storage_root``. The directory is
        created on first admission, not at construction.
    max_entries : int
        Capacity. Values below 1 are clamped to 1.
    resolver : ContentResolver, optional
        Opens sources as streams. Defaults to :func:`default_resolver`
        (``file://`` and ``http(s)://``).
    chunk_size : int, default=8192
        Copy buffer size in bytes. Must be at least 1.
    show_progress : bool, default=False
        Show a tqdm progress bar while copying.

    Notes
    -----
    Index updates are serialized by a per-instance lock; copying runs outside
    it. Several instances sharing one directory are not supported.

    A copy that fails midway leaves its partial file on disk with no index
    entry. Such orphans are picked up as ordinary entries the next time a
    cache is constructed on the directory.

    Examples
    --------
    >>> from contentcache.io.resolve import MemoryResolver
    >>> memory = MemoryResolver()
    >>> cache = BoundedFileCache("/tmp/app", "thumbnails", 3, resolver=memory)
    >>> path = cache.admit(memory.register("a", b"hello"))
    >>> path.read_bytes()
    b'hello'
    >>> len(cache)
    1
    """

    def __init__(
        self,
        storage_root: Path | str,
        cache_dir_name: str,
        max_entries: int,
        resolver: ContentResolver | None = None,
        *,
        chunk_size: int = CacheConfig.DEFAULT_CHUNK_SIZE,
        show_progress: bool = False,
    ):
        CacheConfig.check_chunk_size(chunk_size)

        self.cache_dir = Path(storage_root).expanduser() / cache_dir_name
        self.max_entries = max(int(max_entries), 1)
        self.resolver = resolver if resolver is not None else default_resolver()
        self.chunk_size = chunk_size
        self.show_progress = show_progress

        # Front is the most recent admission
        self._index: deque[CacheEntry] = deque()
        self._lock = threading.RLock()

        self._recover()

        logger.debug(f"Initialized cache at {self.cache_dir}")
        logger.debug(f"  Max entries: {self.max_entries}, recovered: {len(self._index)}")

    @classmethod
    def from_config(
        cls, config: CacheConfig, resolver: ContentResolver | None = None
    ) -> BoundedFileCache:
        """Build a cache from a :class:`CacheConfig`."""
        return cls(
            config.storage_root,
            config.cache_dir_name,
            config.max_entries,
            resolver,
            chunk_size=config.chunk_size,
            show_progress=config.show_progress,
        )

    # ------------------------------------------------------------------
    # Recovery
    # ------------------------------------------------------------------

    def _existing_files(self) -> list[Path]:
        """List files already in the cache directory, oldest first."""
        try:
            candidates = list(self.cache_dir.iterdir())
        except (FileNotFoundError, NotADirectoryError):
            return []
        except OSError as e:
            logger.warning(f"Cannot list cache directory {self.cache_dir}: {e}")
            return []

        stamped = []
        for path in candidates:
            try:
                if not path.is_file():
                    continue
                stamped.append((path.stat().st_mtime_ns, path))
            except OSError:
                # Removed while scanning
                continue

        stamped.sort(key=lambda item: item[0])
        return [path for _, path in stamped]

    def _recover(self) -> None:
        with self._lock:
            for path in self._existing_files():
                self._insert(CacheEntry(path))

    # ------------------------------------------------------------------
    # Index maintenance
    # ------------------------------------------------------------------

    def _insert(self, entry: CacheEntry) -> None:
        """Put *entry* at the front, then evict from the back. Caller holds the lock."""
        self._index.appendleft(entry)
        while len(self._index) > self.max_entries:
            self._evict(self._index.pop())

    def _evict(self, entry: CacheEntry) -> None:
        try:
            entry.path.unlink()
        except FileNotFoundError:
            logger.debug(f"Evicted cache file already gone: {entry.path}")
        except OSError as e:
            logger.warning(f"Failed to delete evicted cache file {entry.path}: {e}")
        else:
            logger.info(f"Evicted cache entry: {entry.name}")

    # ------------------------------------------------------------------
    # Admission
    # ------------------------------------------------------------------

    def _ensure_cache_dir(self) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create cache directory {self.cache_dir}: {e}") from e

    def _open_source(self, source: str) -> BinaryIO:
        try:
            stream = self.resolver.open_stream(source)
        except (SourceUnavailableError, InvalidSourceError):
            raise
        except OSError as e:
            raise SourceUnavailableError(f"Cannot open {source}: {e}") from e

        if stream is None:
            raise SourceUnavailableError(f"Resolver returned no stream for {source}")
        return stream

    def _copy(self, source_stream: BinaryIO, target_stream: BinaryIO, source: str) -> int:
        """Copy all bytes in ``chunk_size`` pieces. Returns the byte count."""
        copied = 0
        pbar = tqdm(
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            desc=str(source),
            disable=not self.show_progress,
        )

        try:
            while True:
                try:
                    chunk = source_stream.read(self.chunk_size)
                except SourceUnavailableError:
                    raise
                except OSError as e:
                    raise SourceUnavailableError(f"Error reading {source}: {e}") from e

                if not chunk:
                    break

                try:
                    target_stream.write(chunk)
                except OSError as e:
                    raise StorageError(f"Error writing cache file: {e}") from e

                copied += len(chunk)
                pbar.update(len(chunk))

            try:
                target_stream.flush()
            except OSError as e:
                raise StorageError(f"Error writing cache file: {e}") from e
        finally:
            pbar.close()

        return copied

    def admit(self, source: str) -> Path:
        """Copy *source* into a new cache file and return its path.

        The new file becomes the most recent entry. If the cache is then over
        capacity, the oldest entries are evicted and their files deleted.

        Parameters
        ----------
        source : str
            Source URI understood by the resolver (e.g. ``file:///...``).

        Returns
        -------
        Path
            Path to a closed file holding an exact copy of the source bytes.

        Raises
        ------
        InvalidSourceError
            If the resolver does not handle this kind of source. Nothing on
            disk or in the index changes.
        SourceUnavailableError
            If the source cannot be opened or read.
        StorageError
            If the cache directory or the cache file cannot be created or
            written. A partially written file may remain on disk.
        """
        if not self.resolver.supports(source):
            raise InvalidSourceError(
                f"Unsupported source {source!r}; expected a URI with one of the "
                f"schemes {tuple(self.resolver.schemes)}"
            )

        self._ensure_cache_dir()

        start_time = time.time()
        source_stream = self._open_source(source)
        target = self.cache_dir / str(uuid.uuid4())
        target_stream = None

        try:
            try:
                target_stream = open(target, "xb")
            except OSError as e:
                raise StorageError(f"Cannot create cache file {target}: {e}") from e

            size = self._copy(source_stream, target_stream, source)
        finally:
            _close_quietly(source_stream, source)
            _close_quietly(target_stream, target)

        with self._lock:
            self._insert(CacheEntry(target))

        elapsed = time.time() - start_time
        logger.info(
            f"Cached {source} as {target.name}: {size / 1024:.1f} KB "
            f"(copied in {elapsed:.2f}s)"
        )
        return target

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def entries(self) -> list[CacheEntry]:
        """Snapshot of the index, most recent first."""
        with self._lock:
            return list(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, CacheEntry):
            entry = item
        elif isinstance(item, (str, Path)):
            entry = CacheEntry(Path(item))
        else:
            return False
        with self._lock:
            return entry in self._index

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        entries = [
            {"path": str(entry.path), "size_bytes": entry.size_bytes()}
            for entry in self.entries()
        ]
        total_size = sum(e["size_bytes"] for e in entries)

        return {
            "cache_dir": str(self.cache_dir),
            "num_entries": len(entries),
            "max_entries": self.max_entries,
            "size_bytes": total_size,
            "size_mb": total_size / 1024 / 1024,
            "entries": entries,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(cache_dir={str(self.cache_dir)!r}, "
            f"entries={len(self)}/{self.max_entries})"
        )


_default_cache: BoundedFileCache | None = None


def get_default_cache() -> BoundedFileCache:
    """Get or create the process-wide cache configured from the environment."""
    global _default_cache
    if _default_cache is None:
        _default_cache = BoundedFileCache.from_config(CacheConfig.from_env())
    return _default_cache
