"""Anagram search core for Phrase Hunter."""

from .digest import (
    AnswerCounter,
    AnswerMatch,
    DigestTarget,
    DigestVerifier,
)
from .errors import ConfigurationError, PhraseHunterError, WordListError
from .permutations import get_all_permutations, iter_permutations
from .search import CombinationSearch, search_combinations
from .weighed_phrase import (
    WeighedPhrase,
    combine,
    is_subset_of,
    weigh,
    weights_equal,
)
from .word_list import WordListLoader, filter_words

__all__ = [
    "AnswerCounter",
    "AnswerMatch",
    "CombinationSearch",
    "ConfigurationError",
    "DigestTarget",
    "DigestVerifier",
    "PhraseHunterError",
    "WeighedPhrase",
    "WordListError",
    "WordListLoader",
    "combine",
    "filter_words",
    "get_all_permutations",
    "is_subset_of",
    "iter_permutations",
    "search_combinations",
    "weigh",
    "weights_equal",
]
