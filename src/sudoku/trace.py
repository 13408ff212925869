"""Solve trace records for the candidate-propagation solver."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, MutableSequence, Tuple

TRACE_LEVELS = ("none", "summary", "steps")

TRACE_KINDS = frozenset(
    {"init", "propagate", "guess", "adopt", "exclude", "contradiction", "solved"}
)

# ``summary`` keeps every kind except the per-round propagation records.
_SUMMARY_KINDS = TRACE_KINDS - {"propagate"}


class TraceValidationError(ValueError):
    """Raised when a trace entry is malformed."""


@dataclass(frozen=True, slots=True)
class TraceEntry:
    """Single record emitted by the solver."""

    step: int
    kind: str
    depth: int
    degree_of_freedom: int
    note: str | None = None

    def __post_init__(self) -> None:
        if self.step < 1:
            raise TraceValidationError("step must be >= 1")
        if self.kind not in TRACE_KINDS:
            raise TraceValidationError(f"unknown trace kind: {self.kind!r}")
        if self.depth < 0:
            raise TraceValidationError("depth must be >= 0")
        if self.degree_of_freedom < 0:
            raise TraceValidationError("degree_of_freedom must be >= 0")

    def to_payload(self) -> dict:
        payload = {
            "step": int(self.step),
            "kind": self.kind,
            "depth": int(self.depth),
            "degree_of_freedom": int(self.degree_of_freedom),
        }
        if self.note is not None:
            payload["note"] = str(self.note)
        return payload


@dataclass
class SolveTrace:
    """Trace accumulator respecting ``trace_level`` semantics.

    Step numbers are assigned by :meth:`record` and keep increasing even for
    entries filtered out by the level, so a ``summary`` trace still shows
    where in the run each decision happened.
    """

    trace_level: str = "none"
    entries: MutableSequence[TraceEntry] = field(default_factory=list)
    _counter: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.trace_level not in TRACE_LEVELS:
            raise TraceValidationError(f"unknown trace level: {self.trace_level!r}")

    def record(self, kind: str, *, depth: int, degree_of_freedom: int, note: str | None = None) -> None:
        self._counter += 1
        if not self._wants(kind):
            return
        self.append(
            TraceEntry(
                step=self._counter,
                kind=kind,
                depth=depth,
                degree_of_freedom=degree_of_freedom,
                note=note,
            )
        )

    def append(self, entry: TraceEntry) -> None:
        if self.entries and entry.step <= self.entries[-1].step:
            raise TraceValidationError("trace steps must be strictly increasing")
        self.entries.append(entry)
        self._counter = max(self._counter, entry.step)

    def snapshot(self) -> Tuple[TraceEntry, ...]:
        return tuple(self.entries)

    def counts(self) -> Dict[str, int]:
        return dict(Counter(entry.kind for entry in self.entries))

    def reset(self) -> None:
        self.entries.clear()
        self._counter = 0

    def to_json(self, *, indent: int | None = None) -> str:
        payload: List[dict] = [entry.to_payload() for entry in self.entries]
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), indent=indent)

    def _wants(self, kind: str) -> bool:
        if self.trace_level == "none":
            return False
        if self.trace_level == "summary":
            return kind in _SUMMARY_KINDS
        return True


__all__ = ["TRACE_KINDS", "TRACE_LEVELS", "SolveTrace", "TraceEntry", "TraceValidationError"]
