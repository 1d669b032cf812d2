"""Configuration classes for contentcache.

Provides a JSON-backed ``Config`` base and the ``CacheConfig`` used to
build a :class:`~contentcache.io.cache.BoundedFileCache`. Settings are
layered: built-in defaults, then an optional JSON file named by
``CONTENTCACHE_CONFIG``, then individual environment variables, then
explicit overrides.
"""

import inspect
import json
import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any

from typing_extensions import Self

from .exceptions import ConfigurationError

__all__ = ["Config", "CacheConfig"]


# Allowed basic types for config values
BASIC_TYPES = (int, float, str, bool, type(None))


@dataclass
class Config:
    """Base class for configurations.

    Public attributes (not starting with '_') must be basic types or nested
    dict/list of them, so that every config can be read from JSON.

    Examples
    --------
    >>> class MyConfig(Config):
    ...     def __init__(self, name: str, retries: int = 3):
    ...         self.name = name
    ...         self.retries = retries
    >>>
    >>> config = MyConfig.load("config.json")  # {"name": "thumbnails"}
    >>> config.retries
    3
    """

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_"):
            self._validate_value(value, name)

        super().__setattr__(name, value)

    @staticmethod
    def _validate_value(value: Any, name: str = "value") -> None:
        """Recursively validate that value is JSON-serializable.

        Raises
        ------
        TypeError
            If value contains non-serializable types.
        """
        if isinstance(value, BASIC_TYPES):
            return

        if isinstance(value, list):
            for i, item in enumerate(value):
                Config._validate_value(item, f"{name}[{i}]")
            return

        if isinstance(value, dict):
            for key, val in value.items():
                if not isinstance(key, str):
                    raise TypeError(
                        f"Dict keys must be strings, got {type(key).__name__} for key in {name}"
                    )
                Config._validate_value(val, f"{name}['{key}']")
            return

        raise TypeError(
            f"Attribute '{name}' has invalid type {type(value).__name__}. "
            f"Only basic types (int, float, str, bool, None) and nested "
            f"dict/list are allowed."
        )

    def to_dict(self) -> dict[str, Any]:
        """Public attributes (not starting with '_') as a dictionary."""
        return {
            key: value
            for key, value in self.__dict__.items()
            if not key.startswith("_") and not callable(value)
        }

    @classmethod
    def parameters(cls) -> dict[str, inspect.Parameter]:
        """``__init__`` parameters, keyed by name."""
        return {
            name: param
            for name, param in inspect.signature(cls.__init__).parameters.items()
            if name != "self" and param.kind is not inspect.Parameter.VAR_KEYWORD
        }

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> Self:
        """Create config from dictionary.

        Missing keys fall back to ``__init__`` defaults.

        Raises
        ------
        ConfigurationError
            If a key is not an ``__init__`` parameter, or a required
            parameter (no default) is missing.
        """
        params = cls.parameters()

        unknown = sorted(set(config_dict) - set(params))
        if unknown:
            raise ConfigurationError(f"Unknown settings for {cls.__name__}: {unknown}")

        missing_required = [
            name
            for name, param in params.items()
            if name not in config_dict and param.default is inspect.Parameter.empty
        ]
        if missing_required:
            raise ConfigurationError(
                f"Missing required parameters for {cls.__name__}: {missing_required}. "
                f"These parameters have no default values in __init__."
            )

        return cls(**config_dict)

    @staticmethod
    def read_file(path: str | Path) -> dict[str, Any]:
        """Read a JSON object from *path*.

        Raises
        ------
        ConfigurationError
            If the file is missing, unreadable, not JSON, or not an object.
        """
        path = Path(path).expanduser()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must hold a JSON object, got {type(data).__name__}"
            )
        return data

    @classmethod
    def load(cls, path: str | Path) -> Self:
        """Load config from a JSON file, filling missing keys with defaults."""
        return cls.from_dict(cls.read_file(path))

    def update(self, **kwargs) -> None:
        """Update config attributes."""
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{self.__class__.__name__}({items})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Config):
            return False
        return self.to_dict() == other.to_dict()


class CacheConfig(Config):
    """Settings for a bounded file cache.

    Parameters
    ----------
    storage_root : str
        Base directory under which the cache subdirectory is created.
    cache_dir_name : str
        Name of the cache subdirectory. Must be a single relative path
        component so that caches sharing a root stay isolated.
    max_entries : int
        Capacity bound. Values below 1 are clamped to 1 by the cache.
    chunk_size : int, default=8192
        Copy buffer size in bytes.
    show_progress : bool, default=False
        Show a progress bar while copying sources.

    Environment variables (read by :meth:`from_env`):
        CONTENTCACHE_CONFIG:        JSON file with any of the parameters
                                    above. Applied before the variables below.
        CONTENTCACHE_STORAGE_ROOT:  Storage root. Default
                                    "$XDG_CACHE_HOME/contentcache" or
                                    "~/.cache/contentcache".
        CONTENTCACHE_DIR_NAME:      Cache directory name. Default "contents".
        CONTENTCACHE_MAX_ENTRIES:   Capacity. Default 10.
        CONTENTCACHE_CHUNK_SIZE:    Copy buffer size. Default 8192.
    """

    DEFAULT_DIR_NAME = "contents"
    DEFAULT_MAX_ENTRIES = 10
    DEFAULT_CHUNK_SIZE = 8192

    CONFIG_FILE_ENV = "CONTENTCACHE_CONFIG"
    ENV_SETTINGS = {
        "storage_root": ("CONTENTCACHE_STORAGE_ROOT", str),
        "cache_dir_name": ("CONTENTCACHE_DIR_NAME", str),
        "max_entries": ("CONTENTCACHE_MAX_ENTRIES", int),
        "chunk_size": ("CONTENTCACHE_CHUNK_SIZE", int),
    }

    def __init__(
        self,
        storage_root: str,
        cache_dir_name: str,
        max_entries: int,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        show_progress: bool = False,
    ):
        self.storage_root = str(storage_root)
        self.cache_dir_name = cache_dir_name
        self.max_entries = max_entries
        self.chunk_size = chunk_size
        self.show_progress = show_progress
        self.validate()

    @staticmethod
    def check_chunk_size(chunk_size: Any) -> None:
        """Raise ConfigurationError unless *chunk_size* is a positive integer."""
        # bool is an int subclass
        if not isinstance(chunk_size, int) or isinstance(chunk_size, bool) or chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be a positive integer, got {chunk_size!r}")

    def validate(self) -> None:
        """Check value constraints.

        Raises
        ------
        ConfigurationError
            If any value is out of range.
        """
        if not self.storage_root:
            raise ConfigurationError("storage_root must not be empty")

        name = self.cache_dir_name
        if not isinstance(name, str) or not name:
            raise ConfigurationError("cache_dir_name must be a non-empty string")
        parts = PurePath(name).parts
        if len(parts) != 1 or parts[0] in (".", "..") or PurePath(name).is_absolute():
            raise ConfigurationError(
                f"cache_dir_name must be a single relative path component, got {name!r}"
            )

        if not isinstance(self.max_entries, int) or isinstance(self.max_entries, bool):
            raise ConfigurationError(
                f"max_entries must be an integer, got {type(self.max_entries).__name__}"
            )
        self.check_chunk_size(self.chunk_size)

    def update(self, **kwargs) -> None:
        """Update attributes; on an invalid value nothing changes."""
        previous = dict(self.__dict__)
        try:
            super().update(**kwargs)
            self.validate()
        except (ConfigurationError, TypeError):
            self.__dict__.clear()
            self.__dict__.update(previous)
            raise

    @property
    def cache_dir(self) -> Path:
        """Resolved cache directory (``storage_root / cache_dir_name``)."""
        return Path(self.storage_root).expanduser() / self.cache_dir_name

    @staticmethod
    def default_storage_root() -> Path:
        xdg_cache = os.environ.get("XDG_CACHE_HOME")
        base = Path(xdg_cache) if xdg_cache else Path.home() / ".cache"
        return base / "contentcache"

    @classmethod
    def from_env(cls, **overrides: Any) -> "CacheConfig":
        """Build config from defaults, config file, environment and overrides.

        Later layers win: ``CONTENTCACHE_CONFIG`` file values replace the
        defaults, single ``CONTENTCACHE_*`` variables replace file values,
        and keyword overrides replace everything.

        Raises
        ------
        ConfigurationError
            If the config file is unusable or a numeric variable cannot be
            parsed.
        """
        values: dict[str, Any] = {
            "storage_root": str(cls.default_storage_root()),
            "cache_dir_name": cls.DEFAULT_DIR_NAME,
            "max_entries": cls.DEFAULT_MAX_ENTRIES,
            "chunk_size": cls.DEFAULT_CHUNK_SIZE,
        }

        config_file = os.environ.get(cls.CONFIG_FILE_ENV)
        if config_file:
            values.update(cls.read_file(config_file))

        for key, (var, convert) in cls.ENV_SETTINGS.items():
            raw = os.environ.get(var)
            if raw is None:
                continue
            try:
                values[key] = convert(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {var}: {raw!r}") from e

        values.update(overrides)
        return cls.from_dict(values)
