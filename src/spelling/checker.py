"""Spell checking of words and texts for a language code."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dictionary_resources.config import Config, load_config
from dictionary_resources.dirs import ProjectDirs
from dictionary_resources.fetch import Fetcher
from dictionary_resources.providers import LangProvider

from .engine import EngineOpener, HunspellSession

LOGGER = logging.getLogger(__name__)

# Word characters, optionally joined by apostrophes ("don't", "aujourd'hui").
_WORD_RE = re.compile(r"\w+(?:['’]\w+)*")


@dataclass(slots=True, frozen=True)
class SpellResult:
    """Outcome of checking one word; suggestions are empty when it is correct."""

    correct: bool
    suggestions: List[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class BadWord:
    """A misspelt word of a text and its character offset (0-based)."""

    offset: int
    word: str
    suggestions: List[str] = field(default_factory=list)


class Spell:
    """Spell checker for one language.

    Use :meth:`open` to obtain one; it makes sure the dictionary files are
    available before loading the engine.

    >>> with Spell.open("en_US") as spell:  # doctest: +SKIP
    ...     for bad in spell.check("Wht color is this flg?"):
    ...         print(bad.word, bad.offset, bad.suggestions)
    """

    def __init__(self, session: HunspellSession) -> None:
        self.session = session

    @classmethod
    def open(
        cls,
        lang: str,
        *,
        config: Optional[Config] = None,
        dirs: Optional[ProjectDirs] = None,
        fetcher: Optional[Fetcher] = None,
        local_dir: str | Path | None = None,
        opener: Optional[EngineOpener] = None,
    ) -> "Spell":
        """Create a checker for ``lang``.

        With ``local_dir`` the files ``<local_dir>/<lang>.aff`` and ``.dic`` are
        used as they are. Otherwise the configuration is loaded (unless given)
        and the files are resolved through :class:`LangProvider`.
        """

        if local_dir is not None:
            directory = Path(local_dir)
            LOGGER.debug("Using bundled dictionaries from %s", directory)
            session = HunspellSession(directory / f"{lang}.aff", directory / f"{lang}.dic", opener=opener)
            return cls(session)

        dirs = dirs or ProjectDirs.default()
        if config is None:
            config = load_config(dirs)
        provider = LangProvider(lang, config, dirs=dirs, fetcher=fetcher)
        provider.ensure_data()
        return cls(HunspellSession(provider.aff, provider.dic, opener=opener))

    def check_word(self, word: str) -> SpellResult:
        if self.session.spell(word):
            return SpellResult(correct=True)
        return SpellResult(correct=False, suggestions=self.session.suggest(word))

    def check(self, text: str) -> List[BadWord]:
        """Return the misspelt words of ``text`` in order of appearance."""

        bad_words: List[BadWord] = []
        for match in _WORD_RE.finditer(text):
            word = match.group()
            if not any(char.isalnum() for char in word):
                continue
            result = self.check_word(word)
            if not result.correct:
                bad_words.append(BadWord(offset=match.start(), word=word, suggestions=result.suggestions))
        return bad_words

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Spell":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["SpellResult", "BadWord", "Spell"]
