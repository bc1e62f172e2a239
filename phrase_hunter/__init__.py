"""Phrase Hunter: multi-word anagram search with digest verification."""

from .core import (
    AnswerCounter,
    AnswerMatch,
    DigestVerifier,
    WeighedPhrase,
    filter_words,
    get_all_permutations,
    search_combinations,
    weigh,
)

__version__ = "0.1.0"

__all__ = [
    "AnswerCounter",
    "AnswerMatch",
    "DigestVerifier",
    "WeighedPhrase",
    "filter_words",
    "get_all_permutations",
    "search_combinations",
    "weigh",
    "__version__",
]
