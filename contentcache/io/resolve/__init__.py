"""Content resolvers.

Turn opaque source identifiers into readable byte streams:

- FileResolver: ``file://`` URIs on the local filesystem
- HTTPResolver: ``http://`` / ``https://`` with retry and streaming
- MemoryResolver: ``memory://`` payloads registered in-process
- CompositeResolver: dispatch by scheme across several resolvers

Custom resolvers subclass :class:`ContentResolver`.
"""

from ._base import ContentResolver, source_scheme
from ._composite import CompositeResolver, default_resolver
from ._file import FileResolver, path_to_uri
from ._http import HTTPResolver, ResponseStream
from ._memory import MemoryResolver

__all__ = [
    "ContentResolver",
    "CompositeResolver",
    "FileResolver",
    "HTTPResolver",
    "MemoryResolver",
    "ResponseStream",
    "default_resolver",
    "path_to_uri",
    "source_scheme",
]
