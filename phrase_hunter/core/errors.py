"""Exception hierarchy raised by the solver."""

from __future__ import annotations


class PhraseHunterError(Exception):
    """Base class for every error raised by :mod:`phrase_hunter`."""


class ConfigurationError(PhraseHunterError):
    """Raised when run settings are missing, malformed or unusable."""


class WordListError(PhraseHunterError):
    """Raised when the word list file cannot be read."""


__all__ = ["PhraseHunterError", "ConfigurationError", "WordListError"]
