from __future__ import annotations

import csv
import os
import tempfile
from datetime import date
from typing import Iterable

from .errors import ExportError
from .types import COLUMNS, Record


def ensure_dir(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        raise ExportError(path, exc) from exc


def export_path_for(data_dir: str, run_date: date, ext: str = "csv") -> str:
    return os.path.join(data_dir, f"{run_date.isoformat()}.{ext}")


def export_records(records: Iterable[Record], run_date: date, data_dir: str = "data") -> str:
    """
    Write the full record set to <data_dir>/<YYYY-MM-DD>.csv, replacing any earlier
    export for the same date. The file is swapped in atomically. Returns the path.
    """
    ensure_dir(data_dir)
    out_path = export_path_for(data_dir, run_date)

    fd, tmp_path = tempfile.mkstemp(prefix=".export-", suffix=".csv", dir=data_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            writer = csv.DictWriter(fh, fieldnames=COLUMNS, lineterminator="\n")
            writer.writeheader()
            for record in records:
                writer.writerow(record.as_row())
        os.replace(tmp_path, out_path)
    except OSError as exc:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise ExportError(out_path, exc) from exc
    return out_path
