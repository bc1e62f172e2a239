"""Command line entry point for Phrase Hunter."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from typing import Dict, Optional, Sequence

from ..core import AnswerMatch, PhraseHunterError
from ..utils.logging_config import configure_logging
from ..utils.observability import get_logger
from ..utils.telemetry import StructuredTelemetry, TelemetryLogger
from .config import SolverSettings
from .services.solver_service import SolverService

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def _parse_targets(values: Optional[Sequence[str]]) -> Dict[str, str]:
    """Turn ``LABEL=DIGEST`` tokens into a mapping.

    Tokens may also be comma separated: ``--target easy=...,hard=...``.
    """

    targets: Dict[str, str] = {}
    for value in values or []:
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            label, sep, digest = part.partition("=")
            if not sep or not label.strip() or not digest.strip():
                raise argparse.ArgumentTypeError(
                    f"Targets must look like LABEL=DIGEST, got {part!r}"
                )
            targets[label.strip()] = digest.strip()
    return targets


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phrase-hunter",
        description=(
            "Find multi-word anagrams of a phrase in a word list and report "
            "the orderings whose digest matches a known answer."
        ),
    )
    parser.add_argument("--config", help="JSON settings file.")
    parser.add_argument("--phrase", help="Phrase to find anagrams of.")
    parser.add_argument("--word-list", help="Word list file, one word per line.")
    parser.add_argument(
        "--max-words",
        type=int,
        help="Maximum number of words in an anagram (default 4).",
    )
    parser.add_argument(
        "--target",
        action="append",
        metavar="LABEL=DIGEST",
        help="Target digest; repeat or comma separate for several tiers.",
    )
    parser.add_argument("--algorithm", help="hashlib algorithm name (default md5).")
    parser.add_argument("--encoding", help="Text encoding hashed (default ascii).")
    parser.add_argument(
        "--workers",
        type=int,
        help="Threads used for the top-level search loop (default 1).",
    )
    parser.add_argument("--log-level", help="Logging level (default INFO).")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the run report as JSON once the search ends.",
    )
    return parser


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger = get_logger(__name__).bind(component="cli")

    try:
        targets = _parse_targets(args.target)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    overrides = {
        "phrase": args.phrase,
        "word_list": args.word_list,
        "max_words": args.max_words,
        "targets": targets or None,
        "algorithm": args.algorithm,
        "encoding": args.encoding,
        "workers": args.workers,
    }

    try:
        settings = SolverSettings.from_sources(overrides, config_path=args.config)
    except PhraseHunterError as exc:
        logger.error("Invalid settings", context={"error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    telemetry = StructuredTelemetry(listeners=[TelemetryLogger()])
    service = SolverService(settings, telemetry=telemetry)

    def _print_counts(raw_count: int, filtered_count: int) -> None:
        print(f"The initial word list contains {raw_count} words.")
        print(f"The word list after removing invalid words contains {filtered_count} words.")
        print()
        print(f"Processing started....{_timestamp()}")

    def _print_match(match: AnswerMatch) -> None:
        print(f"The {match.label} answer is: {match.phrase}", flush=True)

    try:
        report = service.solve(_print_match, on_filtered=_print_counts)
    except PhraseHunterError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print(f"Processing ended....{_timestamp()}")
    if args.json:
        json.dump(report.as_dict(), sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
