"""Digest verification of candidate phrases."""

from __future__ import annotations

import hashlib
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..utils.observability import get_logger
from .errors import ConfigurationError
from .permutations import iter_permutations

DEFAULT_ALGORITHM = "md5"
DEFAULT_ENCODING = "ascii"


@dataclass(frozen=True)
class DigestTarget:
    """A labelled hex digest that a solution phrase must produce."""

    label: str
    digest: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "digest", self.digest.strip().lower())


@dataclass(frozen=True)
class AnswerMatch:
    """Notification emitted when a phrase produces a target digest."""

    label: str
    phrase: str
    digest: str


MatchListener = Callable[[AnswerMatch], None]


class AnswerCounter:
    """Thread-safe count of digest matches found during a run.

    The search stops once ``value`` reaches ``threshold``.
    """

    def __init__(self, threshold: int) -> None:
        self.threshold = int(threshold)
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def is_satisfied(self) -> bool:
        return self.value >= self.threshold


def normalize_targets(
    targets: Mapping[str, str] | Iterable[DigestTarget],
) -> Tuple[DigestTarget, ...]:
    if isinstance(targets, Mapping):
        return tuple(DigestTarget(label, digest) for label, digest in targets.items())
    return tuple(targets)


def resolve_algorithm(name: str) -> str:
    """Validate ``name`` as a fixed-length :mod:`hashlib` algorithm."""

    normalized = (name or "").strip().lower()
    if normalized not in hashlib.algorithms_available:
        raise ConfigurationError(f"Unsupported digest algorithm: {name!r}")
    if hashlib.new(normalized).digest_size == 0:
        raise ConfigurationError(f"Digest algorithm {name!r} has no fixed length")
    return normalized


class DigestVerifier:
    """Checks phrases, and every word ordering of them, against target digests."""

    def __init__(
        self,
        targets: Mapping[str, str] | Iterable[DigestTarget],
        counter: Optional[AnswerCounter] = None,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        encoding: str = DEFAULT_ENCODING,
        on_match: Optional[MatchListener] = None,
    ) -> None:
        self.targets: Tuple[DigestTarget, ...] = normalize_targets(targets)
        self.algorithm = resolve_algorithm(algorithm)
        self.encoding = encoding
        self.counter = counter or AnswerCounter(len(self.targets))
        self.on_match = on_match
        self.permutations_checked = 0
        self._logger = get_logger(__name__).bind(
            component="digest_verifier",
            algorithm=self.algorithm,
        )

    def hexdigest(self, phrase: str) -> str:
        data = phrase.encode(self.encoding)
        return hashlib.new(self.algorithm, data, usedforsecurity=False).hexdigest()

    def check(self, phrase: str) -> List[AnswerMatch]:
        """Compare ``phrase``'s digest with every target.

        Each matching target is reported and increments the answer counter.
        """

        self.permutations_checked += 1
        digest = self.hexdigest(phrase)
        matches: List[AnswerMatch] = []
        for target in self.targets:
            if digest != target.digest:
                continue
            match = AnswerMatch(label=target.label, phrase=phrase, digest=digest)
            matches.append(match)
            found = self.counter.increment()
            self._logger.info(
                "Digest match found",
                context={"label": target.label, "phrase": phrase, "found": found},
            )
            if self.on_match is not None:
                self.on_match(match)
        return matches

    def verify_candidate(self, candidate: str) -> Sequence[AnswerMatch]:
        """Check every word ordering of ``candidate``."""

        matches: List[AnswerMatch] = []
        for ordering in iter_permutations(candidate):
            matches.extend(self.check(ordering))
        return matches


__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_ENCODING",
    "AnswerCounter",
    "AnswerMatch",
    "DigestTarget",
    "DigestVerifier",
    "MatchListener",
    "normalize_targets",
    "resolve_algorithm",
]
