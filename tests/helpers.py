from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Union
from unittest import mock

import requests


BASE_URL = "http://shirts4mike.com/"
FIXED_NOW = datetime(2026, 10, 19, 9, 5, 3)


def fixed_clock() -> datetime:
    return FIXED_NOW


def listing_page(hrefs: List[str]) -> str:
    items = "\n".join(
        f'<li><a href="{href}"><img src="img/shirts/x.jpg"><p>View Details</p></a></li>' for href in hrefs
    )
    return f"""
    <html><body>
      <div class="wrapper">
        <h2>Mike&rsquo;s Full Catalog of Shirts</h2>
        <ul class="products">
          {items}
        </ul>
      </div>
    </body></html>
    """


def detail_page(title: str = "Logo Shirt, Red", price: str = "$18", image: str = "img/shirts/shirt-101.jpg") -> str:
    return f"""
    <html><body>
      <div class="section page">
        <div class="shirt-picture"><span><img src="{image}" alt="{title}"></span></div>
        <div class="shirt-details">
          <h1><span class="price">{price}</span> {title}</h1>
          <form><input type="submit" value="Add to Cart"></form>
        </div>
      </div>
    </body></html>
    """


Page = Union[tuple, Exception]


class FakeSession:
    """Stands in for requests.Session: maps URLs to (status, body) or an exception."""

    def __init__(self, pages: Dict[str, Page]) -> None:
        self.pages = pages
        self.requested: List[str] = []

    def get(self, url, timeout=None, allow_redirects=True):
        self.requested.append(url)
        page = self.pages.get(url)
        if page is None:
            raise requests.ConnectionError(f"Failed to resolve {url}")
        if isinstance(page, Exception):
            raise page
        status, body = page
        return mock.Mock(status_code=status, text=body, url=url)
