from __future__ import annotations

import os
from datetime import datetime
from typing import Callable

from .errors import LogError


class ErrorLog:
    """Append-only failure log: one `[timestamp] message` line per failure."""

    def __init__(self, path: str = "log/scraper-error.log", clock: Callable[[], datetime] = datetime.now) -> None:
        self.path = path
        self.clock = clock

    def log(self, error: object) -> None:
        line = f"[{self.clock().strftime('%Y-%m-%d %H:%M:%S')}] {error}\n"
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as fh:
                fh.write(line)
        except OSError as exc:
            raise LogError(f"cannot write error log {self.path}: {exc}") from exc
