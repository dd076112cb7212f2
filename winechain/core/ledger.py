"""Versioned key-value stores the core reads and writes through.

Every put appends a new version; get returns the latest one and
history_of returns all of them, oldest first, each with the timestamp the
store assigned when it was written.
"""
import base64
import binascii
import json
import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Protocol, Tuple

from winechain.core.errors import CollaboratorError

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class HistoryEntry:
    """One version of a key: store timestamp and raw bytes."""
    timestamp: str
    value: bytes


class HistoryIterator:
    """Iterator over a key's versions that must be closed after use.

    Usable as a context manager; close() is idempotent.
    """

    def __init__(
        self,
        entries: List[HistoryEntry],
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._entries = iter(entries)
        self._on_close = on_close
        self.closed = False

    def __iter__(self) -> Iterator[HistoryEntry]:
        return self

    def __next__(self) -> HistoryEntry:
        if self.closed:
            raise StopIteration
        return next(self._entries)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._on_close is not None:
            self._on_close()

    def __enter__(self) -> "HistoryIterator":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class LedgerStore(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def put(self, key: str, value: bytes) -> None: ...

    def history_of(self, key: str) -> HistoryIterator: ...


class InMemoryLedger:
    """Process-local store; used in tests and with WINECHAIN_LEDGER_BACKEND=memory."""

    def __init__(self, clock: Callable[[], str] = utc_timestamp) -> None:
        self._clock = clock
        self._versions: Dict[str, List[HistoryEntry]] = {}
        self._lock = threading.Lock()
        self.open_histories = 0

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            versions = self._versions.get(key)
            return versions[-1].value if versions else None

    def put(self, key: str, value: bytes) -> None:
        with self._lock:
            self._versions.setdefault(key, []).append(HistoryEntry(self._clock(), value))

    def history_of(self, key: str) -> HistoryIterator:
        with self._lock:
            entries = list(self._versions.get(key, []))
            self.open_histories += 1
        return HistoryIterator(entries, on_close=self._release)

    def _release(self) -> None:
        with self._lock:
            self.open_histories -= 1

    def snapshot(self) -> Dict[str, Tuple[HistoryEntry, ...]]:
        """Copy of every key's versions (for comparing state before/after a call)."""
        with self._lock:
            return {k: tuple(v) for k, v in self._versions.items()}


class JsonFileLedger:
    """Store that keeps every version of every key in one JSON file.

    The file is re-read on every call so other processes' writes are seen;
    writes go to a temp file that replaces the ledger in one step.
    """

    def __init__(self, path: Path, clock: Callable[[], str] = utc_timestamp) -> None:
        self.path = Path(path)
        self._clock = clock
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, List[HistoryEntry]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return {
                key: [
                    HistoryEntry(v["timestamp"], base64.b64decode(v["value"], validate=True))
                    for v in versions
                ]
                for key, versions in data["keys"].items()
            }
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            KeyError,
            TypeError,
            AttributeError,
            binascii.Error,
        ) as e:
            logger.error("Ledger file %s unreadable: %s", self.path, e)
            raise CollaboratorError(f"Ledger file unreadable: {e}") from e

    def _save(self, versions: Dict[str, List[HistoryEntry]]) -> None:
        data = {
            "keys": {
                key: [
                    {
                        "timestamp": v.timestamp,
                        "value": base64.b64encode(v.value).decode("ascii"),
                    }
                    for v in entries
                ]
                for key, entries in versions.items()
            }
        }
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error("Ledger file %s not writable: %s", self.path, e)
            raise CollaboratorError(f"Ledger file not writable: {e}") from e

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            versions = self._load().get(key)
        return versions[-1].value if versions else None

    def put(self, key: str, value: bytes) -> None:
        with self._lock:
            versions = self._load()
            versions.setdefault(key, []).append(HistoryEntry(self._clock(), value))
            self._save(versions)

    def history_of(self, key: str) -> HistoryIterator:
        with self._lock:
            entries = self._load().get(key, [])
        return HistoryIterator(entries)
