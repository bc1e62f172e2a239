"""Word-order permutations of a candidate phrase."""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .weighed_phrase import SEPARATOR


def _permute(words: List[str], start: int) -> Iterator[Tuple[str, ...]]:
    if start >= len(words) - 1:
        yield tuple(words)
        return
    for index in range(start, len(words)):
        words[start], words[index] = words[index], words[start]
        yield from _permute(words, start + 1)
        words[start], words[index] = words[index], words[start]


def iter_permutations(phrase: str, separator: str = SEPARATOR) -> Iterator[str]:
    """Yield every ordering of the words in ``phrase``.

    Repeated words are not collapsed, so a phrase of ``k`` words always
    yields ``k!`` strings, the original order first.
    """

    words = phrase.split(separator)
    for ordering in _permute(words, 0):
        yield separator.join(ordering)


def get_all_permutations(phrase: str, separator: str = SEPARATOR) -> List[str]:
    return list(iter_permutations(phrase, separator))


__all__ = ["iter_permutations", "get_all_permutations"]
