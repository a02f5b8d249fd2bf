from __future__ import annotations

import threading
from typing import List, Tuple

from .types import Record


class RunAccumulator:
    """Records of one run, kept in completion order. Safe to append from several threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[Record] = []

    def append(self, record: Record) -> None:
        with self._lock:
            self._records.append(record)

    def snapshot(self) -> Tuple[Record, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
