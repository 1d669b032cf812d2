"""I/O layer for contentcache.

- **cache**: bounded, recency-ordered file cache
- **resolve**: content resolvers turning source URIs into byte streams

Quick Start
-----------
>>> from contentcache.io import BoundedFileCache, MemoryResolver
>>>
>>> memory = MemoryResolver()
>>> cache = BoundedFileCache("/tmp/myapp", "docs", max_entries=5, resolver=memory)
>>> path = cache.admit(memory.register("greeting", b"hi"))
"""

from .cache import BoundedFileCache, CacheEntry, get_default_cache
from .resolve import (
    CompositeResolver,
    ContentResolver,
    FileResolver,
    HTTPResolver,
    MemoryResolver,
    default_resolver,
    path_to_uri,
)

__all__ = [
    "BoundedFileCache",
    "CacheEntry",
    "get_default_cache",
    "ContentResolver",
    "CompositeResolver",
    "FileResolver",
    "HTTPResolver",
    "MemoryResolver",
    "default_resolver",
    "path_to_uri",
]
