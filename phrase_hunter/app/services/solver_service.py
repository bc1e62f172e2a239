"""Solver service orchestrating word list loading, search and verification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from ...core import (
    AnswerCounter,
    AnswerMatch,
    CombinationSearch,
    DigestVerifier,
    PhraseHunterError,
    WordListLoader,
    filter_words,
    weigh,
)
from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry
from ..config import SolverSettings


@dataclass
class SolverReport:
    """Summary of a completed solver run."""

    phrase: str
    raw_word_count: int = 0
    filtered_word_count: int = 0
    candidates_emitted: int = 0
    permutations_checked: int = 0
    matches: List[AnswerMatch] = field(default_factory=list)
    all_answers_found: bool = False
    elapsed_seconds: float = 0.0

    @property
    def answers_found(self) -> int:
        return len(self.matches)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "phrase": self.phrase,
            "raw_word_count": self.raw_word_count,
            "filtered_word_count": self.filtered_word_count,
            "candidates_emitted": self.candidates_emitted,
            "permutations_checked": self.permutations_checked,
            "matches": [
                {"label": match.label, "phrase": match.phrase, "digest": match.digest}
                for match in self.matches
            ],
            "all_answers_found": self.all_answers_found,
            "elapsed_seconds": self.elapsed_seconds,
        }


class SolverService:
    """Runs the anagram search for one set of :class:`SolverSettings`."""

    def __init__(
        self,
        settings: SolverSettings,
        *,
        loader: Optional[WordListLoader] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.settings = settings
        self.loader = loader or WordListLoader(settings.word_list_path)
        self.telemetry = telemetry or StructuredTelemetry()
        self._logger = get_logger(__name__).bind(
            component="solver_service",
            phrase=settings.phrase,
        )

        self._metric_runs = create_counter(
            "phrase_hunter_runs_total",
            "Total solver runs started.",
        )
        self._metric_failures = create_counter(
            "phrase_hunter_run_failures_total",
            "Total solver runs that raised an exception.",
        )
        self._metric_answers = create_counter(
            "phrase_hunter_answers_total",
            "Digest matches found, by tier.",
            label_names=("tier",),
        )
        self._metric_candidates = create_counter(
            "phrase_hunter_candidates_total",
            "Word combinations with the target's exact letters.",
        )
        self._metric_duration = create_histogram(
            "phrase_hunter_run_seconds",
            "Duration of solver runs.",
        )

    def load_words(self) -> Sequence[str]:
        with self.telemetry.timer("load"):
            return self.loader.load()

    def solve(
        self,
        on_match: Optional[Callable[[AnswerMatch], None]] = None,
        *,
        on_filtered: Optional[Callable[[int, int], None]] = None,
    ) -> SolverReport:
        """Search for the target phrase's anagrams and verify their digests.

        ``on_filtered`` receives the raw and filtered word counts before the
        search starts; ``on_match`` is called for every digest match as soon
        as it is found.
        """

        settings = self.settings
        report = SolverReport(phrase=settings.phrase)
        self._metric_runs.inc()
        self.telemetry.start_trace("solve")
        started = self.telemetry.now()

        with start_span(
            "phrase_hunter.solve",
            {"phrase.length": len(settings.phrase), "max_words": settings.max_words},
        ) as span:
            try:
                with self._metric_duration.time():
                    self._run(report, on_match, on_filtered)
            except PhraseHunterError as exc:
                self._metric_failures.inc()
                record_exception(span, exc)
                self._logger.error(
                    "Solver run failed",
                    context={"error": str(exc), "error_type": type(exc).__name__},
                )
                raise

            report.elapsed_seconds = self.telemetry.now() - started
            add_span_attributes(
                span,
                {
                    "words.filtered": report.filtered_word_count,
                    "candidates": report.candidates_emitted,
                    "answers": report.answers_found,
                },
            )

        self.telemetry.annotate("answers_found", report.answers_found)
        self._logger.info(
            "Solver run finished",
            context={
                "answers_found": report.answers_found,
                "candidates": report.candidates_emitted,
                "permutations": report.permutations_checked,
                "all_answers_found": report.all_answers_found,
                "elapsed_seconds": round(report.elapsed_seconds, 3),
            },
        )
        return report

    def _run(
        self,
        report: SolverReport,
        on_match: Optional[Callable[[AnswerMatch], None]],
        on_filtered: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        settings = self.settings
        target = weigh(settings.phrase)

        raw_words = self.load_words()
        report.raw_word_count = len(raw_words)

        with self.telemetry.timer("filter"):
            words = filter_words(raw_words, target)
        report.filtered_word_count = len(words)
        self._logger.info(
            "Word list filtered",
            context={"raw_words": report.raw_word_count, "filtered_words": len(words)},
        )
        if on_filtered is not None:
            on_filtered(report.raw_word_count, report.filtered_word_count)

        def _record_match(match: AnswerMatch) -> None:
            report.matches.append(match)
            self._metric_answers.labels(tier=match.label).inc()
            self.telemetry.increment("search.answers")
            if on_match is not None:
                on_match(match)

        counter = AnswerCounter(len(settings.targets))
        verifier = DigestVerifier(
            settings.targets,
            counter,
            algorithm=settings.algorithm,
            encoding=settings.encoding,
            on_match=_record_match,
        )

        def _verify(candidate: str) -> None:
            self._metric_candidates.inc()
            verifier.verify_candidate(candidate)

        search = CombinationSearch(
            words,
            target,
            settings.max_words,
            counter,
            _verify,
            workers=settings.workers,
        )
        with self.telemetry.timer("search"):
            search.run()

        report.candidates_emitted = search.candidates_emitted
        report.permutations_checked = verifier.permutations_checked
        report.all_answers_found = counter.is_satisfied
        self.telemetry.increment("search.combinations", search.candidates_emitted)
        self.telemetry.increment("search.permutations", verifier.permutations_checked)


__all__ = ["SolverReport", "SolverService"]
