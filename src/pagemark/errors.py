"""Exceptions raised by pagemark."""

from typing import Optional


class PagemarkError(Exception):
    """Base class for all pagemark errors."""


class DocumentParseError(PagemarkError):
    """Raised when the input cannot be parsed into any document tree.

    This is the only error that aborts a whole extraction; every other
    failure degrades to a partial document.
    """


class SiteExtractionError(PagemarkError):
    """Raised by a site extractor whose structured pass failed."""

    def __init__(self, message: str, site: Optional[str] = None):
        super().__init__(message)
        self.site = site


class XiaohongshuExtractionError(SiteExtractionError):
    """Xiaohongshu parse failure; callers fall back to generic extraction."""

    def __init__(self, message: str = "XiaohongshuParser failed"):
        super().__init__(message, site="xiaohongshu")


class ShareError(PagemarkError):
    """Raised when a paste service rejects or fails to store a document."""
