"""Run settings resolved from a settings file, the environment and overrides."""

from __future__ import annotations

import codecs
import hashlib
import json
import os
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..core.digest import DEFAULT_ALGORITHM, DEFAULT_ENCODING, resolve_algorithm
from ..core.errors import ConfigurationError

ENV_PREFIX = "PHRASE_HUNTER_"
CONFIG_ENV = f"{ENV_PREFIX}CONFIG"
DEFAULT_MAX_WORDS = 4
DEFAULT_TIERS = ("easy", "medium", "hard")

_ENV_KEYS = {
    "phrase": f"{ENV_PREFIX}PHRASE",
    "word_list": f"{ENV_PREFIX}WORD_LIST",
    "max_words": f"{ENV_PREFIX}MAX_WORDS",
    "algorithm": f"{ENV_PREFIX}ALGORITHM",
    "encoding": f"{ENV_PREFIX}ENCODING",
    "workers": f"{ENV_PREFIX}WORKERS",
}
_HEX_DIGITS = frozenset(string.hexdigits)


def _target_env_key(label: str) -> str:
    return f"{ENV_PREFIX}HASH_{label.upper()}"


def _parse_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None
    if parsed < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {parsed}")
    return parsed


def load_settings_file(path: Path | str) -> Dict[str, Any]:
    """Read a JSON settings file into a plain dictionary."""

    settings_path = Path(path)
    try:
        with settings_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise ConfigurationError(f"Unable to read settings file {settings_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Malformed settings file {settings_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Settings file {settings_path} must contain a JSON object")
    targets = payload.get("targets")
    if targets is not None and not isinstance(targets, dict):
        raise ConfigurationError("'targets' must map tier labels to digests")
    return payload


@dataclass(frozen=True)
class SolverSettings:
    """Everything a solver run needs besides the word list contents."""

    phrase: str
    targets: Mapping[str, str]
    word_list_path: Path
    max_words: int = DEFAULT_MAX_WORDS
    algorithm: str = DEFAULT_ALGORITHM
    encoding: str = DEFAULT_ENCODING
    workers: int = 1
    source: Optional[Path] = field(default=None, compare=False)

    def validate(self) -> "SolverSettings":
        """Raise :class:`ConfigurationError` unless the settings are usable."""

        if not self.phrase or not self.phrase.strip():
            raise ConfigurationError("A target phrase is required")
        if not self.targets:
            raise ConfigurationError("At least one target digest is required")

        algorithm = resolve_algorithm(self.algorithm)
        expected_length = hashlib.new(algorithm).digest_size * 2
        for label, digest in self.targets.items():
            normalized = (digest or "").strip()
            if len(normalized) != expected_length or not set(normalized) <= _HEX_DIGITS:
                raise ConfigurationError(
                    f"Digest for {label!r} is not a {algorithm} hex digest: {digest!r}"
                )

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigurationError(f"Unknown text encoding: {self.encoding!r}") from None
        try:
            self.phrase.encode(self.encoding)
        except UnicodeEncodeError:
            raise ConfigurationError(
                f"Phrase {self.phrase!r} cannot be encoded as {self.encoding}"
            ) from None

        _parse_positive_int("max_words", self.max_words)
        _parse_positive_int("workers", self.workers)
        return self

    @classmethod
    def from_sources(
        cls,
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        config_path: Optional[Path | str] = None,
    ) -> "SolverSettings":
        """Merge defaults, settings file, environment and ``overrides``.

        Later sources win.  ``None`` values in ``overrides`` are ignored so
        unset CLI flags fall through to the other sources.
        """

        environ = os.environ if environ is None else environ
        overrides = {key: value for key, value in (overrides or {}).items() if value is not None}

        resolved_path = config_path or environ.get(CONFIG_ENV)
        file_values: Dict[str, Any] = {}
        if resolved_path:
            file_values = load_settings_file(resolved_path)

        values: Dict[str, Any] = {
            "max_words": DEFAULT_MAX_WORDS,
            "algorithm": DEFAULT_ALGORITHM,
            "encoding": DEFAULT_ENCODING,
            "workers": 1,
        }
        values.update({k: v for k, v in file_values.items() if k != "targets"})
        for key, env_name in _ENV_KEYS.items():
            env_value = environ.get(env_name)
            if env_value:
                values[key] = env_value
        values.update({k: v for k, v in overrides.items() if k != "targets"})

        targets: Dict[str, str] = {}
        targets.update({str(k): str(v) for k, v in (file_values.get("targets") or {}).items()})
        for label in DEFAULT_TIERS:
            env_value = environ.get(_target_env_key(label))
            if env_value:
                targets[label] = env_value
        targets.update({str(k): str(v) for k, v in (overrides.get("targets") or {}).items()})

        word_list = values.get("word_list")
        if not word_list:
            raise ConfigurationError("A word list path is required")

        settings = cls(
            phrase=str(values.get("phrase") or ""),
            targets=targets,
            word_list_path=Path(word_list),
            max_words=_parse_positive_int("max_words", values["max_words"]),
            algorithm=str(values["algorithm"]),
            encoding=str(values["encoding"]),
            workers=_parse_positive_int("workers", values["workers"]),
            source=Path(resolved_path) if resolved_path else None,
        )
        return settings.validate()


__all__ = [
    "CONFIG_ENV",
    "DEFAULT_MAX_WORDS",
    "DEFAULT_TIERS",
    "SolverSettings",
    "load_settings_file",
]
