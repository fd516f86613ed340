"""Configuration of dictionary search directories and download sources.

The configuration lives in a TOML file::

    [dictionaries]
    directories = ["/usr/share/hunspell"]

    [dictionaries.sources.fr_FR]
    aff = "https://example.org/fr.aff"
    dic = "https://example.org/fr.dic"

Both ``directories`` and ``sources`` are required; either may be empty
(``sources = {}``).

On first use the file does not exist yet; :func:`load_config` then writes
:data:`DEFAULT_CONFIG` before reading it back.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .dirs import ProjectDirs
from .errors import InitConfigError, LoadConfigError, ReadConfigError

LOGGER = logging.getLogger(__name__)

_LIBREOFFICE = "https://raw.githubusercontent.com/LibreOffice/dictionaries/master"

DEFAULT_CONFIG = f"""\
[dictionaries]
# Directories searched, in order, for <lang>.aff and <lang>.dic before downloading.
directories = [
    "/usr/share/hunspell",
    "/usr/share/myspell",
    "/usr/share/myspell/dicts",
    "/Library/Spelling",
]

[dictionaries.sources.en_US]
aff = "{_LIBREOFFICE}/en/en_US.aff"
dic = "{_LIBREOFFICE}/en/en_US.dic"

[dictionaries.sources.en_GB]
aff = "{_LIBREOFFICE}/en/en_GB.aff"
dic = "{_LIBREOFFICE}/en/en_GB.dic"

[dictionaries.sources.fr_FR]
aff = "{_LIBREOFFICE}/fr_FR/fr.aff"
dic = "{_LIBREOFFICE}/fr_FR/fr.dic"

[dictionaries.sources.de_DE]
aff = "{_LIBREOFFICE}/de/de_DE_frami.aff"
dic = "{_LIBREOFFICE}/de/de_DE_frami.dic"

[dictionaries.sources.es_ES]
aff = "{_LIBREOFFICE}/es/es_ES.aff"
dic = "{_LIBREOFFICE}/es/es_ES.dic"
"""


@dataclass(slots=True, frozen=True)
class SourceConfig:
    """Download URLs of the two files of one language."""

    aff: str
    dic: str


@dataclass(slots=True, frozen=True)
class DictionariesConfig:
    """Search directories (in priority order) and per-language sources."""

    directories: Tuple[Path, ...] = ()
    sources: Mapping[str, SourceConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "directories", tuple(Path(d) for d in self.directories))
        object.__setattr__(self, "sources", MappingProxyType(dict(self.sources)))


@dataclass(slots=True, frozen=True)
class Config:
    dictionaries: DictionariesConfig = field(default_factory=DictionariesConfig)

    def source_for(self, lang: str) -> Optional[SourceConfig]:
        """Return the configured sources of ``lang`` or ``None``."""

        return self.dictionaries.sources.get(lang)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Config":
        """Validate a parsed TOML document and build a :class:`Config`.

        Raises :class:`ValueError` describing the first schema violation.
        """

        section = raw.get("dictionaries")
        if not isinstance(section, Mapping):
            raise ValueError("missing [dictionaries] table")

        for key in ("directories", "sources"):
            if key not in section:
                raise ValueError(f"missing dictionaries.{key}")

        directories = section["directories"]
        if not isinstance(directories, list) or not all(isinstance(d, str) for d in directories):
            raise ValueError("dictionaries.directories must be an array of strings")

        raw_sources = section["sources"]
        if not isinstance(raw_sources, Mapping):
            raise ValueError("dictionaries.sources must be a table")
        sources: Dict[str, SourceConfig] = {}
        for lang, entry in raw_sources.items():
            if not isinstance(entry, Mapping):
                raise ValueError(f"dictionaries.sources.{lang} must be a table")
            for key in ("aff", "dic"):
                if not isinstance(entry.get(key), str):
                    raise ValueError(f"dictionaries.sources.{lang}.{key} must be a string")
            sources[lang] = SourceConfig(aff=entry["aff"], dic=entry["dic"])

        return cls(
            dictionaries=DictionariesConfig(
                directories=tuple(Path(d).expanduser() for d in directories),
                sources=sources,
            )
        )


def ensure_config_file(path: Path) -> bool:
    """Write :data:`DEFAULT_CONFIG` to ``path`` when it is absent.

    Returns True when the file was created.
    """

    if path.exists():
        return False
    LOGGER.info("No config file, creating one at %s", path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as exc:
        raise InitConfigError(f"cannot create default config {path}: {exc}") from exc
    return True


def load_config(dirs: Optional[ProjectDirs] = None, path: str | Path | None = None) -> Config:
    """Load the configuration, creating the default file on first run."""

    config_path = Path(path) if path else (dirs or ProjectDirs.default()).config_file
    LOGGER.debug("Config file: %s", config_path)
    ensure_config_file(config_path)

    try:
        raw = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadConfigError(f"cannot read config {config_path}: {exc}") from exc

    try:
        return Config.from_dict(tomllib.loads(raw))
    except (tomllib.TOMLDecodeError, ValueError) as exc:
        raise LoadConfigError(f"invalid config {config_path}: {exc}") from exc


__all__ = [
    "DEFAULT_CONFIG",
    "SourceConfig",
    "DictionariesConfig",
    "Config",
    "ensure_config_file",
    "load_config",
]
