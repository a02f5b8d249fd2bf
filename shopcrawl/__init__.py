"""
Storefront product crawler package.

Exports:
- Record: immutable product row extracted from one detail page
- SiteConfig / SelectorSet: where to crawl and how to read the markup
- scrape_store: run the crawl and write the dated CSV export
"""

from .types import Record, SelectorSet, SiteConfig
from .cli import scrape_store

__all__ = ["Record", "SelectorSet", "SiteConfig", "scrape_store"]
