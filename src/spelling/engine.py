"""Hunspell engine session over a resolved ``.aff``/``.dic`` pair.

The engine is :class:`spylls.hunspell.Dictionary`. A session owns the loaded
dictionary; :meth:`HunspellSession.close` releases it exactly once and the
context manager protocol guarantees it runs on every exit path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Set

from spylls.hunspell import Dictionary

from dictionary_resources.errors import DictionaryNotFoundError, SessionClosedError

LOGGER = logging.getLogger(__name__)

# Opens an engine from the common path of the two files, without extension.
EngineOpener = Callable[[str], Any]


def _open_spylls(base_path: str) -> Dictionary:
    return Dictionary.from_files(base_path)


class HunspellSession:
    """Exclusively owned checking session.

    ``add``/``remove`` maintain a personal word list for the lifetime of the
    session; it is consulted before the engine and never written to disk.
    """

    def __init__(self, aff_path: Path, dic_path: Path, opener: Optional[EngineOpener] = None) -> None:
        aff_path, dic_path = Path(aff_path), Path(dic_path)
        for path in (aff_path, dic_path):
            if not path.exists():
                raise DictionaryNotFoundError(path)
        base = aff_path.with_suffix("")
        if dic_path.with_suffix("") != base:
            raise ValueError(f"{aff_path} and {dic_path} must share directory and base name")

        LOGGER.debug("aff file: %s", aff_path)
        LOGGER.debug("dic file: %s", dic_path)
        self.aff_path = aff_path
        self.dic_path = dic_path
        self._engine: Any = (opener or _open_spylls)(str(base))
        self._added: Set[str] = set()

    @property
    def closed(self) -> bool:
        return self._engine is None

    def _require_engine(self) -> Any:
        if self._engine is None:
            raise SessionClosedError("session is closed")
        return self._engine

    def spell(self, word: str) -> bool:
        """Return True when ``word`` is correctly spelt."""

        engine = self._require_engine()
        LOGGER.debug("spell(%r)", word)
        if word in self._added:
            return True
        return bool(engine.lookup(word))

    def suggest(self, word: str) -> List[str]:
        """Return corrections for ``word`` in the engine's ranking order."""

        engine = self._require_engine()
        LOGGER.debug("suggest(%r)", word)
        return list(engine.suggest(word))

    def add(self, word: str) -> None:
        self._require_engine()
        self._added.add(word)

    def remove(self, word: str) -> bool:
        """Drop ``word`` from the personal list; returns False if it was not there."""

        self._require_engine()
        if word in self._added:
            self._added.discard(word)
            return True
        return False

    def close(self) -> None:
        if self._engine is None:
            return
        LOGGER.debug("Closing session for %s", self.aff_path.stem)
        self._engine = None
        self._added.clear()

    def __enter__(self) -> "HunspellSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["EngineOpener", "HunspellSession"]
