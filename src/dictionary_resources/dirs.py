"""Platform directory roots used to parameterize the resolution pipeline."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

APP_NAME = "rspell"


def _env_path(environ: Mapping[str, str], name: str, fallback: Path) -> Path:
    value = environ.get(name)
    if value and Path(value).is_absolute():
        return Path(value)
    return fallback


@dataclass(slots=True, frozen=True)
class ProjectDirs:
    """Config, cache and data roots for one application.

    Instances are plain values so tests and embedders can point the pipeline at
    any directory tree; :meth:`default` computes the per-platform locations.
    """

    config_dir: Path
    cache_dir: Path
    data_dir: Path

    @classmethod
    def default(
        cls,
        app: str = APP_NAME,
        *,
        platform: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        home: Optional[Path] = None,
    ) -> "ProjectDirs":
        """Return the conventional directories for ``app`` on the current platform."""

        platform = platform or sys.platform
        environ = os.environ if environ is None else environ
        home = home or Path.home()

        if platform.startswith("win"):
            roaming = _env_path(environ, "APPDATA", home / "AppData" / "Roaming")
            local = _env_path(environ, "LOCALAPPDATA", home / "AppData" / "Local")
            return cls(
                config_dir=roaming / app / "config",
                cache_dir=local / app / "cache",
                data_dir=local / app / "data",
            )
        if platform == "darwin":
            support = home / "Library" / "Application Support" / app
            return cls(
                config_dir=support,
                cache_dir=home / "Library" / "Caches" / app,
                data_dir=support,
            )
        return cls(
            config_dir=_env_path(environ, "XDG_CONFIG_HOME", home / ".config") / app,
            cache_dir=_env_path(environ, "XDG_CACHE_HOME", home / ".cache") / app,
            data_dir=_env_path(environ, "XDG_DATA_HOME", home / ".local" / "share") / app,
        )

    @classmethod
    def under(cls, root: str | Path) -> "ProjectDirs":
        """Lay out all three roots below a single directory."""

        base = Path(root)
        return cls(config_dir=base / "config", cache_dir=base / "cache", data_dir=base / "data")

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.toml"

    @property
    def dictionaries_dir(self) -> Path:
        return self.data_dir / "dictionaries"


__all__ = ["APP_NAME", "ProjectDirs"]
