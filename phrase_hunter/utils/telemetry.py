"""Structured telemetry collected over a single solver run."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]

_logger = get_logger(__name__)


class StructuredTelemetry:
    """Lightweight collector for phase timings, counters, and run metadata."""

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._lock = threading.RLock()
        self._trace_id = 0
        self._listeners: list[TelemetryListener] = list(listeners or [])
        self._reset_state()

    def _reset_state(self) -> None:
        self._timings: Dict[str, Dict[str, float]] = {}
        self._counters: Dict[str, float] = {}
        self._metadata: Dict[str, Any] = {}
        self._trace_name: Optional[str] = None

    def _listeners_snapshot(self) -> Tuple[TelemetryListener, ...]:
        with self._lock:
            return tuple(self._listeners)

    def _notify_listeners(self, event_type: str, payload: Dict[str, Any]) -> None:
        for listener in self._listeners_snapshot():
            try:
                listener(event_type, dict(payload))
            except Exception:
                _logger.exception(
                    "Telemetry listener failed",
                    context={"event_type": event_type},
                )

    def now(self) -> float:
        return float(self._time_fn())

    def start_trace(self, name: str) -> int:
        """Reset telemetry state and start a new trace."""

        with self._lock:
            self._trace_id += 1
            self._reset_state()
            self._trace_name = name
            self._metadata["trace_name"] = name
            trace_id = self._trace_id

        self._notify_listeners("trace_started", {"trace_id": trace_id, "name": name})
        return trace_id

    def record_timing(self, name: str, duration: float) -> None:
        """Add ``duration`` seconds to the timing bucket ``name``."""

        duration = max(0.0, float(duration))
        with self._lock:
            bucket = self._timings.setdefault(
                name, {"count": 0, "total": 0.0, "max": 0.0}
            )
            bucket["count"] += 1
            bucket["total"] += duration
            bucket["max"] = max(bucket["max"], duration)

        self._notify_listeners("timing", {"name": name, "duration": duration})

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        """Context manager that records a timing measurement for ``name``."""

        start = self.now()
        self._notify_listeners("timer_started", {"name": name})
        try:
            yield
        finally:
            self.record_timing(name, self.now() - start)

    def increment(self, name: str, amount: float = 1.0) -> None:
        value = float(amount)
        with self._lock:
            self._counters[name] = self._counters.get(name, 0.0) + value
            current_value = self._counters[name]

        self._notify_listeners(
            "counter",
            {"name": name, "delta": value, "value": current_value},
        )

    def annotate(self, key: str, value: Any) -> None:
        """Attach arbitrary metadata to the current trace."""

        with self._lock:
            self._metadata[key] = value

        self._notify_listeners("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        """Capture the telemetry data for the active trace."""

        with self._lock:
            return {
                "trace_id": self._trace_id,
                "name": self._trace_name,
                "timings": {key: dict(value) for key, value in self._timings.items()},
                "counters": dict(self._counters),
                "metadata": dict(self._metadata),
            }

    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners.append(listener)


class TelemetryLogger:
    """Listener that forwards telemetry events to the project logger."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._level = level

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(self._level):
            return

        context = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items()})

        name = payload.get("name") or payload.get("key") or "event"
        self._logger.log(self._level, f"Telemetry {event_type}: {name}", context=context)


__all__ = ["StructuredTelemetry", "TelemetryLogger", "TelemetryListener"]
