from __future__ import annotations

import re
import unicodedata
from datetime import datetime
from decimal import Decimal
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .errors import ExtractionError
from .types import Record, SelectorSet


PRICE_RE = re.compile(r"\d+(\.\d+)?", re.ASCII)


def _text(el) -> str:
    return (el.get_text() if el else "").strip()


def parse_price(text: str) -> Optional[Decimal]:
    """Parse '$19.99' -> Decimal('19.99'). Returns None when the text is not a non-negative number."""
    text = (text or "").strip()
    if text and unicodedata.category(text[0]) == "Sc":
        text = text[1:].strip()
    if not PRICE_RE.fullmatch(text):
        return None
    return Decimal(text)


def zero_pad(value: int) -> str:
    return f"{value:02d}"


def format_time(moment: datetime) -> str:
    return ":".join(zero_pad(v) for v in (moment.hour, moment.minute, moment.second))


def extract_record(
    url: str,
    html: str,
    base_url: str,
    selectors: Optional[SelectorSet] = None,
    now: Optional[datetime] = None,
) -> Record:
    """Build a Record from a detail page, raising ExtractionError for the first missing field."""
    selectors = selectors or SelectorSet()
    soup = BeautifulSoup(html, "lxml")

    image_el = soup.select_one(selectors.image)
    image_src = image_el.get("src") if image_el else None
    if not image_src:
        raise ExtractionError("image", url, f"no src on {selectors.image!r}")

    price_el = soup.select_one(selectors.price)
    if price_el is None:
        raise ExtractionError("price", url, f"{selectors.price!r} not found")
    price = parse_price(price_el.get_text())
    if price is None:
        raise ExtractionError("price", url, f"not a price: {_text(price_el)!r}")

    title_el = soup.select_one(selectors.title)
    if title_el is not None:
        for annotation in title_el.select(selectors.title_annotation):
            annotation.decompose()
    title = _text(title_el)
    if not title:
        raise ExtractionError("title", url, f"{selectors.title!r} missing or empty")

    try:
        image_url = urljoin(base_url, image_src)
    except ValueError as exc:
        raise ExtractionError("image", url, f"bad src {image_src!r}: {exc}") from exc

    return Record(
        title=title,
        price=price,
        image_url=image_url,
        source_url=url,
        extracted_at=format_time(now or datetime.now()),
    )
