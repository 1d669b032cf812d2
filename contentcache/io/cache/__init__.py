"""Bounded file cache.

Materializes stream-only sources as ordinary files in a private cache
directory, keeping at most a fixed number of them.

Examples
--------
>>> from contentcache.io.cache import BoundedFileCache
>>> from contentcache.io.resolve import path_to_uri
>>>
>>> cache = BoundedFileCache("~/.cache/myapp", "attachments", max_entries=20)
>>> local = cache.admit(path_to_uri("report.pdf"))
>>> local.read_bytes()[:4]
b'%PDF'
"""

from ._bounded import BoundedFileCache, CacheEntry, get_default_cache

__all__ = [
    "BoundedFileCache",
    "CacheEntry",
    "get_default_cache",
]
