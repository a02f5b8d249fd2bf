from __future__ import annotations

from enum import Enum
from typing import Optional


class ScraperError(Exception):
    """Base class for every classified failure raised by the crawler."""


class TransportErrorKind(str, Enum):
    UNREACHABLE = "unreachable"
    HTTP_ERROR = "http_error"


class TransportError(ScraperError):
    def __init__(
        self,
        url: str,
        kind: TransportErrorKind,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.url = url
        self.kind = kind
        self.status = status
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.kind is TransportErrorKind.HTTP_ERROR:
            return f"HTTP {self.status} while fetching {self.url}"
        return f"cannot connect to {self.url}: {self.cause}"


class ExtractionError(ScraperError):
    """A detail page lacks one of the required fields (image, price or title)."""

    FIELDS = ("image", "price", "title")

    def __init__(self, field: str, url: str, reason: str = "") -> None:
        if field not in self.FIELDS:
            raise ValueError(f"unknown field: {field}")
        self.field = field
        self.url = url
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        msg = f"extraction failed (field: {self.field}) for {self.url}"
        return f"{msg}: {self.reason}" if self.reason else msg


class ExportError(ScraperError):
    def __init__(self, path: str, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"could not write {self.path}: {self.cause}"


class LogError(ScraperError):
    """Writing to the error log failed. Never caught by the pipeline."""


class RunAborted(ScraperError):
    """The listing page could not be fetched; nothing to crawl."""

    def __init__(self, cause: TransportError) -> None:
        self.cause = cause
        super().__init__(f"run aborted: {cause}")
