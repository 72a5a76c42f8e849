import os, json, time, pathlib
from typing import Any, Dict, Optional

from .config import LOGS


class EventLog:
    """Append-only JSONL log, one event dict per line."""

    def __init__(self, log_dir: Optional[pathlib.Path] = None, name: str = "filer"):
        log_dir = log_dir or LOGS
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y-%m-%d_%H-%M-%S")
        self.path = log_dir / f"{ts}_{name}.jsonl"
        self._f = open(self.path, "w", buffering=1, encoding="utf-8")

    def __call__(self, ev: Dict[str, Any]) -> None:
        self._f.write(json.dumps(ev, ensure_ascii=False, default=str) + "\n")
        self._f.flush(); os.fsync(self._f.fileno())

    def close(self) -> None:
        if not self._f.closed:
            self._f.close()

    def __enter__(self) -> "EventLog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class NullLog:
    """Stand-in when event logging is off."""

    path = None

    def __call__(self, ev: Dict[str, Any]) -> None:
        return None

    def close(self) -> None:
        return None

    def __enter__(self) -> "NullLog":
        return self

    def __exit__(self, *exc) -> None:
        return None


def open_event_log(enabled: bool, log_dir: Optional[pathlib.Path] = None):
    return EventLog(log_dir) if enabled else NullLog()
