"""Light-weight JSONL log of solve events with rotation support."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping

from project_config import get_section, get_setting

__all__ = ["append_event", "configure", "current_log_path", "iter_events", "summarise"]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_LOCK = threading.Lock()
_LOG_DIR: Path | None = None
_MAX_BYTES = _DEFAULT_MAX_BYTES
_CURRENT_PATH: Path | None = None


def configure(base_dir: str | Path | None = None, *, max_bytes: int | None = None) -> None:
    """Configure the logger to use ``base_dir`` for all files.

    Without arguments the directory and size limit come from the ``[log]``
    configuration section (``SUDOKU_LOG_DIR`` overrides the directory).
    """

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH
    if base_dir is None:
        base_dir = str(get_setting("log.dir", "logs/solve"))
    if max_bytes is None:
        max_bytes = int(get_section("log.max_bytes", _DEFAULT_MAX_BYTES))
    _LOG_DIR = Path(base_dir)
    _MAX_BYTES = max_bytes or _DEFAULT_MAX_BYTES
    _CURRENT_PATH = None


def _date_prefix() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d")


def _resolve_log_path() -> Path:
    global _CURRENT_PATH
    if _LOG_DIR is None:
        configure()
    assert _LOG_DIR is not None
    date_dir = _LOG_DIR / _date_prefix()
    date_dir.mkdir(parents=True, exist_ok=True)

    if _CURRENT_PATH is not None and _CURRENT_PATH.parent == date_dir and _CURRENT_PATH.exists():
        if _CURRENT_PATH.stat().st_size < _MAX_BYTES:
            return _CURRENT_PATH

    counter = 0
    while True:
        candidate = date_dir / f"solve_{counter:02d}.jsonl"
        if not candidate.exists() or candidate.stat().st_size < _MAX_BYTES:
            _CURRENT_PATH = candidate
            return candidate
        counter += 1


def append_event(event: Dict[str, Any]) -> Path:
    """Append ``event`` to the active JSONL file and return the file path."""

    payload = dict(event)
    payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

    line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        path = _resolve_log_path()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def current_log_path() -> Path | None:
    return _CURRENT_PATH


def iter_events(paths: Iterable[Path]) -> Iterator[Mapping[str, Any]]:
    for path in paths:
        for line in path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            yield json.loads(line)


def summarise(paths: Iterable[Path]) -> Dict[str, Any]:
    """Aggregate ``solve.completed`` events into counts and mean guesses."""

    total = solved = guesses = 0
    for event in iter_events(paths):
        if event.get("event") != "solve.completed":
            continue
        total += 1
        if event.get("solved"):
            solved += 1
        stats = event.get("stats")
        if isinstance(stats, Mapping):
            guesses += int(stats.get("guesses", 0))
    return {
        "total": total,
        "solved": solved,
        "unsolved": total - solved,
        "mean_guesses": round(guesses / total, 3) if total else 0.0,
    }
