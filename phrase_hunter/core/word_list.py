"""Loading and filtering of the candidate word list."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from .errors import WordListError
from .weighed_phrase import WeighedPhrase, is_subset_of, weigh


class WordListLoader:
    """Reads a word list stored one word per line."""

    def __init__(self, path: Path | str, *, encoding: str = "utf-8") -> None:
        self.path: Path = Path(path)
        self.encoding = encoding
        self._words: Optional[Tuple[str, ...]] = None

    def load(self) -> Tuple[str, ...]:
        """Return the words in file order, with blank lines skipped.

        The file is read once; later calls return the same tuple.
        """

        if self._words is not None:
            return self._words

        if not self.path.is_file():
            raise WordListError(f"Word list not found: {self.path}")

        words: List[str] = []
        try:
            with self.path.open("r", encoding=self.encoding) as handle:
                for line in handle:
                    word = line.strip()
                    if word:
                        words.append(word)
        except (OSError, UnicodeDecodeError) as exc:
            raise WordListError(f"Unable to read word list {self.path}: {exc}") from exc

        self._words = tuple(words)
        return self._words


def filter_words(words: Iterable[str], target: WeighedPhrase) -> Tuple[str, ...]:
    """Keep the distinct words that could be part of an anagram of ``target``.

    A word survives when its weight is a subset of the target's weight.  The
    first occurrence of each word wins and the input order is preserved.
    """

    seen: Set[str] = set()
    result: List[str] = []
    for word in words:
        if not word or word in seen:
            continue
        if is_subset_of(weigh(word), target):
            seen.add(word)
            result.append(word)
    return tuple(result)


__all__ = ["WordListLoader", "filter_words"]
