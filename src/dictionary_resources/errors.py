"""Error taxonomy for dictionary resolution and spell checking sessions."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SpellError(Exception):
    """Base class for every error raised by this package."""


class NoDictionarySourceError(SpellError):
    """Neither a local file nor a configured URL exists for a dictionary file."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"no source for {filename}: not found on disk and no URL configured")
        self.filename = filename


class FileCachingError(SpellError):
    """Directory creation, copy, download or deletion failed while caching a file."""


class CacheCleanupError(FileCachingError):
    """The final file was produced but the cache file could not be deleted.

    Callers may treat this as cleanup noise: ``final_path`` is valid and usable.
    """

    def __init__(self, message: str, final_path: Path, cache_path: Path) -> None:
        super().__init__(message)
        self.final_path = final_path
        self.cache_path = cache_path


class ConversionError(SpellError):
    """Reading the cache file, resolving its encoding or writing the final file failed."""


class RemoveDictionaryError(SpellError):
    """An existing final dictionary file could not be deleted."""


class InitConfigError(SpellError):
    """The default configuration file could not be created."""


class ReadConfigError(SpellError):
    """The configuration file exists but could not be read."""


class LoadConfigError(SpellError):
    """The configuration file content is not valid TOML or does not match the schema."""


class DictionaryNotFoundError(SpellError):
    """A dictionary file expected on disk is missing."""

    def __init__(self, path: Path, message: Optional[str] = None) -> None:
        super().__init__(message or f"dictionary file not found: {path}")
        self.path = path


class SessionClosedError(SpellError):
    """A spell checking session was used after being closed."""


__all__ = [
    "SpellError",
    "NoDictionarySourceError",
    "FileCachingError",
    "CacheCleanupError",
    "ConversionError",
    "RemoveDictionaryError",
    "InitConfigError",
    "ReadConfigError",
    "LoadConfigError",
    "DictionaryNotFoundError",
    "SessionClosedError",
]
