"""Character-weight model for phrases.

A phrase's *weight* is the multiset of its non-space characters.  Two
phrases are anagrams of each other exactly when their weights are equal, and
a word can take part in an anagram of a phrase only when its weight is a
subset of the phrase's weight.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

SEPARATOR = " "


@dataclass(frozen=True, eq=False)
class WeighedPhrase:
    """A phrase together with its character weight.

    Instances are built by :func:`weigh` or :func:`combine`, which keep
    ``weight`` consistent with ``text``.  Equality and addition are not
    overloaded; use :func:`weights_equal` and :func:`combine`.
    """

    text: str
    weight: Mapping[str, int]
    space_count: int

    @property
    def word_count(self) -> int:
        return self.space_count + 1

    @property
    def distinct_characters(self) -> int:
        return len(self.weight)


def _frozen_weight(counts: Counter) -> Mapping[str, int]:
    return MappingProxyType(dict(counts))


@lru_cache(maxsize=65536)
def weigh(text: str) -> WeighedPhrase:
    """Return the :class:`WeighedPhrase` for ``text``.

    Spaces are ignored and characters are counted case-sensitively.  Results
    are memoized per process since phrases are immutable.
    """

    counts = Counter(text.replace(SEPARATOR, ""))
    return WeighedPhrase(
        text=text,
        weight=_frozen_weight(counts),
        space_count=text.count(SEPARATOR),
    )


def is_subset_of(candidate: WeighedPhrase, container: WeighedPhrase) -> bool:
    """Return whether ``candidate``'s weight is contained in ``container``'s.

    Equal weights qualify, so every phrase is a subset of itself.
    """

    if candidate.distinct_characters > container.distinct_characters:
        return False
    available = container.weight
    for character, count in candidate.weight.items():
        if count > available.get(character, 0):
            return False
    return True


def weights_equal(first: WeighedPhrase, second: WeighedPhrase) -> bool:
    """Return whether the two phrases are anagrams of each other."""

    if first.distinct_characters != second.distinct_characters:
        return False
    other = second.weight
    for character, count in first.weight.items():
        if other.get(character) != count:
            return False
    return True


def combine(first: WeighedPhrase, second: WeighedPhrase) -> WeighedPhrase:
    """Join two phrases with a single space and sum their weights."""

    counts = Counter(first.weight)
    counts.update(second.weight)
    return WeighedPhrase(
        text=f"{first.text}{SEPARATOR}{second.text}",
        weight=_frozen_weight(counts),
        space_count=first.space_count + second.space_count + 1,
    )


__all__ = [
    "SEPARATOR",
    "WeighedPhrase",
    "weigh",
    "is_subset_of",
    "weights_equal",
    "combine",
]
