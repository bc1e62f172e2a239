"""Recursive search for multi-word anagrams of a target phrase."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence, Tuple

from ..utils.observability import get_logger
from .digest import AnswerCounter
from .weighed_phrase import (
    SEPARATOR,
    WeighedPhrase,
    combine,
    is_subset_of,
    weigh,
    weights_equal,
)

CandidateListener = Callable[[str], None]


class CombinationSearch:
    """Enumerates word combinations whose weight equals the target's.

    Every combination of ``2`` to ``max_words`` distinct dictionary words
    with exactly the target's letters is passed to ``on_candidate`` as a
    space-joined phrase.  The search stops as soon as ``counter`` is
    satisfied.
    """

    def __init__(
        self,
        words: Sequence[str],
        target: WeighedPhrase,
        max_words: int,
        counter: AnswerCounter,
        on_candidate: CandidateListener,
        *,
        workers: int = 1,
    ) -> None:
        self.words: Tuple[str, ...] = tuple(words)
        self.target = target
        self.max_words = int(max_words)
        self.counter = counter
        self.workers = max(1, int(workers))
        self.candidates_emitted = 0
        self._on_candidate = on_candidate
        self._emit_lock = threading.Lock()
        self._logger = get_logger(__name__).bind(component="combination_search")

    def run(self) -> int:
        """Run the search and return the number of candidates emitted."""

        if self.max_words < 2 or not self.words:
            return 0

        ordered = tuple(sorted(self.words, key=len, reverse=True))
        self._logger.debug(
            "Combination search started",
            context={
                "words": len(ordered),
                "max_words": self.max_words,
                "workers": self.workers,
            },
        )

        if self.workers == 1:
            for index, word in enumerate(ordered):
                if self.counter.is_satisfied:
                    break
                self._extend(weigh(word), ordered[index + 1 :])
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [
                    executor.submit(self._start_branch, word, ordered[index + 1 :])
                    for index, word in enumerate(ordered)
                ]
                for future in futures:
                    future.result()

        return self.candidates_emitted

    def _start_branch(self, word: str, pool: Tuple[str, ...]) -> None:
        if self.counter.is_satisfied:
            return
        self._extend(weigh(word), pool)

    def _emit(self, phrase: str) -> None:
        with self._emit_lock:
            if self.counter.is_satisfied:
                return
            self.candidates_emitted += 1
            self._on_candidate(phrase)

    def _extend(self, base: WeighedPhrase, pool: Tuple[str, ...]) -> None:
        if self.counter.is_satisfied:
            return

        target = self.target
        for word in pool:
            if weights_equal(combine(base, weigh(word)), target):
                self._emit(f"{base.text}{SEPARATOR}{word}")

        # Room for another word plus the completing one.
        if base.word_count >= self.max_words - 1:
            return

        eligible = sorted(
            (word for word in pool if is_subset_of(combine(base, weigh(word)), target)),
            key=len,
        )
        room = len(target.text) - len(base.text) + 1
        for index, word in enumerate(eligible):
            # Ascending length: nothing after this word fits either.
            if len(word) > room:
                return
            self._extend(combine(base, weigh(word)), tuple(eligible[index + 1 :]))


def search_combinations(
    words: Sequence[str],
    target: WeighedPhrase,
    max_words: int,
    counter: AnswerCounter,
    on_candidate: CandidateListener,
    *,
    workers: int = 1,
) -> int:
    """Convenience wrapper around :class:`CombinationSearch`."""

    search = CombinationSearch(
        words,
        target,
        max_words,
        counter,
        on_candidate,
        workers=workers,
    )
    return search.run()


__all__ = ["CandidateListener", "CombinationSearch", "search_combinations"]
