from __future__ import annotations

from typing import Iterable, Optional, Sequence

from openpyxl import Workbook

from .errors import ExportError
from .types import COLUMNS, Record


def write_records_to_excel(
    records: Iterable[Record],
    out_path: str,
    headers: Optional[Sequence[str]] = None,
) -> None:
    headers = headers or COLUMNS

    wb = Workbook()
    ws = wb.active
    ws.title = "Products"
    for col_idx, title in enumerate(headers, start=1):
        ws.cell(row=1, column=col_idx).value = title

    for idx, r in enumerate(records, start=2):
        ws.cell(row=idx, column=1).value = r.title
        # Keep the price numeric so spreadsheets can sum it
        ws.cell(row=idx, column=2).value = float(r.price)
        ws.cell(row=idx, column=3).value = r.image_url
        ws.cell(row=idx, column=4).value = r.source_url
        ws.cell(row=idx, column=5).value = r.extracted_at

    try:
        wb.save(out_path)
    except OSError as exc:
        raise ExportError(out_path, exc) from exc
