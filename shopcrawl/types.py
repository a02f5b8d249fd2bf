from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Tuple


COLUMNS = ("Title", "Price", "ImageURL", "URL", "Time")


@dataclass(frozen=True)
class Record:
    title: str
    price: Decimal
    image_url: str
    source_url: str
    extracted_at: str

    def as_row(self) -> Dict[str, str]:
        return dict(
            zip(
                COLUMNS,
                (self.title, str(self.price), self.image_url, self.source_url, self.extracted_at),
            )
        )


@dataclass(frozen=True)
class SelectorSet:
    """CSS selectors describing one storefront's markup."""

    listing_container: str = "ul.products"
    listing_entry: str = "li"
    listing_link: str = "a"
    image: str = ".shirt-picture img"
    price: str = ".shirt-details .price"
    title: str = ".shirt-details h1"
    title_annotation: str = "span"


@dataclass
class SiteConfig:
    base_url: str = "http://shirts4mike.com/"
    listing_path: str = "shirts.php"
    data_dir: str = "data"
    log_path: str = "log/scraper-error.log"
    selectors: SelectorSet = field(default_factory=SelectorSet)
    workers: int = 4
    timeout_seconds: float = 15
    user_agent: Optional[str] = None
    export_each: bool = True
    xlsx: bool = False


@dataclass
class RunResult:
    records: Tuple[Record, ...]
    links_found: int
    failures: List[Exception] = field(default_factory=list)
    export_path: Optional[str] = None
