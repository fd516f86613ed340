"""Resolution of the ``.aff``/``.dic`` pair of a language to UTF-8 local files.

Each file is resolved independently by a :class:`FileProvider`:

1. the normalized file already exists in the dictionaries directory: done;
2. otherwise a raw copy is placed in the cache, taken from the first search
   directory holding a same-named file, or downloaded from the configured URL;
3. the ``SET`` directive of the raw copy selects the decoder, the content is
   converted to UTF-8 and written to its final location;
4. the raw copy is deleted.

The cache and data directories are not locked. Two processes resolving the
same language at the same time may race on the cache file.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

from langcodes import standardize_tag, tag_is_valid

from .config import Config, SourceConfig
from .dirs import ProjectDirs
from .encoding import detect_encoding, resolve_codec, transcode
from .errors import (
    CacheCleanupError,
    ConversionError,
    FileCachingError,
    NoDictionarySourceError,
    RemoveDictionaryError,
)
from .fetch import Fetcher, HttpFetcher

LOGGER = logging.getLogger(__name__)

AFF = "aff"
DIC = "dic"
FILE_KINDS = (AFF, DIC)


class FileProvider:
    """Ensures one dictionary file is available, normalized, at ``file_path``."""

    def __init__(
        self,
        file_path: Path,
        cache_path: Path,
        directories: Sequence[Path],
        url: Optional[str],
        fetcher: Fetcher,
    ) -> None:
        self.file_path = file_path
        self.cache_path = cache_path
        self.directories = directories
        self.url = url
        self.fetcher = fetcher

    def find(self) -> Optional[Path]:
        """Return the file from the first search directory that has it."""

        for directory in self.directories:
            candidate = Path(directory) / self.file_path.name
            if candidate.exists():
                return candidate
        return None

    def fetch(self) -> None:
        if self.url is None:
            raise NoDictionarySourceError(self.file_path.name)
        LOGGER.debug("Downloading %s from %s", self.file_path.name, self.url)
        self.fetcher.fetch(self.url, self.cache_path)

    def _copy_to_cache(self, source: Path) -> None:
        LOGGER.debug("Found source file: %s", source)
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, self.cache_path)
        except OSError as exc:
            raise FileCachingError(f"cannot copy {source} to {self.cache_path}: {exc}") from exc

    def _write_final(self, content: bytes) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileCachingError(f"cannot create {self.file_path.parent}: {exc}") from exc

        # Written beside the target and renamed so the final path is never partial.
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.file_path.name}.", suffix=".tmp", dir=self.file_path.parent
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            os.replace(tmp_name, self.file_path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise ConversionError(f"cannot write {self.file_path}: {exc}") from exc

    def convert(self) -> None:
        """Fill the cache if needed, then write the UTF-8 version to ``file_path``."""

        if not self.cache_path.exists():
            source = self.find()
            if source is not None:
                self._copy_to_cache(source)
            else:
                self.fetch()
        else:
            LOGGER.debug("Using cached file %s", self.cache_path)

        try:
            label = detect_encoding(self.cache_path)
        except (OSError, UnicodeDecodeError) as exc:
            raise ConversionError(f"cannot detect encoding of {self.cache_path}: {exc}") from exc
        LOGGER.debug("Detected encoding: %s", label)

        try:
            codec = resolve_codec(label)
        except LookupError as exc:
            raise ConversionError(f"unknown encoding {label!r} in {self.cache_path}") from exc
        LOGGER.debug("Using decoder: %s", codec.name)

        try:
            raw = self.cache_path.read_bytes()
        except OSError as exc:
            raise ConversionError(f"cannot read {self.cache_path}: {exc}") from exc
        try:
            content = transcode(raw, label, codec)
        except (UnicodeError, TypeError, ValueError) as exc:
            raise ConversionError(f"cannot convert {self.cache_path} from {label}: {exc}") from exc
        self._write_final(content)

    def ensure(self) -> None:
        """Make ``file_path`` available; a no-op when it already exists."""

        if not self.file_path.exists():
            try:
                self.convert()
            except ConversionError:
                self.cache_path.unlink(missing_ok=True)
                raise
            try:
                self.cache_path.unlink()
            except OSError as exc:
                raise CacheCleanupError(
                    f"cannot remove cache file {self.cache_path}: {exc}",
                    final_path=self.file_path,
                    cache_path=self.cache_path,
                ) from exc
        LOGGER.debug("File available at %s", self.file_path)


class LangProvider:
    """Ensures the data files of a language are available.

    Files are looked up in the configured directories or downloaded from the
    configured sources, and land in ``<data_dir>/dictionaries``.
    """

    def __init__(
        self,
        lang: str,
        config: Config,
        dirs: Optional[ProjectDirs] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.lang = lang
        self.config = config
        self.dirs = dirs or ProjectDirs.default()
        self.fetcher = fetcher or HttpFetcher()
        dictionaries_dir = self.dirs.dictionaries_dir
        self._aff_path = dictionaries_dir / f"{lang}.{AFF}"
        self._dic_path = dictionaries_dir / f"{lang}.{DIC}"

    @property
    def aff(self) -> Path:
        """Location of the normalized ``.aff`` file."""

        return self._aff_path

    @property
    def dic(self) -> Path:
        """Location of the normalized ``.dic`` file."""

        return self._dic_path

    @property
    def source(self) -> Optional[SourceConfig]:
        return self.config.source_for(self.lang)

    @property
    def language_tag(self) -> Optional[str]:
        """BCP-47 form of the language code, or None when it is not a valid tag."""

        candidate = self.lang.replace("_", "-")
        if not tag_is_valid(candidate):
            return None
        return standardize_tag(candidate)

    def path(self, kind: str) -> Path:
        if kind == AFF:
            return self._aff_path
        if kind == DIC:
            return self._dic_path
        raise ValueError(f"kind must be one of {FILE_KINDS}, got {kind!r}")

    def on_disk(self, kind: str) -> List[Path]:
        """List every search directory file matching ``<lang>.<kind>``, in order."""

        filename = self.path(kind).name
        return [
            Path(directory) / filename
            for directory in self.config.dictionaries.directories
            if (Path(directory) / filename).exists()
        ]

    def aff_on_disk(self) -> List[Path]:
        return self.on_disk(AFF)

    def dic_on_disk(self) -> List[Path]:
        return self.on_disk(DIC)

    def file_provider(self, kind: str) -> FileProvider:
        """Build the provider resolving the ``kind`` file of this language."""

        final_path = self.path(kind)
        source = self.source
        return FileProvider(
            file_path=final_path,
            cache_path=self.dirs.cache_dir / final_path.name,
            directories=self.config.dictionaries.directories,
            url=getattr(source, kind) if source is not None else None,
            fetcher=self.fetcher,
        )

    def ensure_data(self) -> None:
        """Ensure both files are present, the affix file first.

        The first failure propagates and the dictionary file is not attempted.
        """

        LOGGER.debug("Ensuring dictionaries for %s", self.lang)
        for kind in FILE_KINDS:
            self.file_provider(kind).ensure()

    def remove_data(self) -> None:
        """Delete the normalized files; absent files are ignored."""

        for path in (self._aff_path, self._dic_path):
            if path.exists():
                try:
                    path.unlink()
                except OSError as exc:
                    raise RemoveDictionaryError(f"cannot remove {path}: {exc}") from exc
                LOGGER.debug("Removed %s", path)


__all__ = ["AFF", "DIC", "FILE_KINDS", "FileProvider", "LangProvider"]
