"""Spell checking sessions backed by resolved Hunspell dictionaries."""

from .checker import BadWord, Spell, SpellResult
from .engine import HunspellSession

__all__ = ["BadWord", "HunspellSession", "Spell", "SpellResult"]
