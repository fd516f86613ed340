"""Location, download and UTF-8 normalization of Hunspell dictionary files."""

from .config import Config, DictionariesConfig, SourceConfig, load_config
from .dirs import ProjectDirs
from .errors import (
    CacheCleanupError,
    ConversionError,
    DictionaryNotFoundError,
    FileCachingError,
    InitConfigError,
    LoadConfigError,
    NoDictionarySourceError,
    ReadConfigError,
    RemoveDictionaryError,
    SessionClosedError,
    SpellError,
)
from .fetch import Fetcher, HttpFetcher
from .providers import FileProvider, LangProvider

__all__ = [
    "CacheCleanupError",
    "Config",
    "ConversionError",
    "DictionariesConfig",
    "DictionaryNotFoundError",
    "Fetcher",
    "FileCachingError",
    "FileProvider",
    "HttpFetcher",
    "InitConfigError",
    "LangProvider",
    "LoadConfigError",
    "NoDictionarySourceError",
    "ProjectDirs",
    "ReadConfigError",
    "RemoveDictionaryError",
    "SessionClosedError",
    "SourceConfig",
    "SpellError",
    "load_config",
]
