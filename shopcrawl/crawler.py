from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .errors import TransportError, TransportErrorKind
from .types import SelectorSet


def _dedupe_keep_order(urls: Iterable[str]) -> List[str]:
    seen = set()
    result: List[str] = []
    for u in urls:
        if u in seen:
            continue
        seen.add(u)
        result.append(u)
    return result


def extract_listing_links(html: str, selectors: Optional[SelectorSet] = None) -> List[str]:
    """
    Collect the href of every entry in the listing container, verbatim and in document order.
    Entries without a link are skipped; duplicates are kept.
    """
    selectors = selectors or SelectorSet()
    soup = BeautifulSoup(html, "lxml")

    links: List[str] = []
    for container in soup.select(selectors.listing_container):
        for entry in container.select(selectors.listing_entry):
            anchor = entry.select_one(selectors.listing_link)
            href = anchor.get("href") if anchor else None
            if href is None:
                continue
            links.append(href)
    return links


def resolve_link(base_url: str, href: str) -> str:
    """Absolute URL for one listing href. An href urllib cannot parse is a TransportError."""
    try:
        return urljoin(base_url, href)
    except ValueError as exc:
        raise TransportError(href, TransportErrorKind.UNREACHABLE, cause=exc) from exc


def _resolve_or_keep(base_url: str, href: str) -> str:
    try:
        return resolve_link(base_url, href)
    except TransportError:
        return href


def resolve_links(base_url: str, hrefs: Iterable[str]) -> List[str]:
    """Absolute detail-page URLs, duplicates dropped in first-seen order.

    Hrefs that cannot be resolved are passed through unchanged so the
    failure surfaces when that one page is fetched.
    """
    return _dedupe_keep_order(_resolve_or_keep(base_url, href) for href in hrefs)
