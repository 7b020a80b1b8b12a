"""
pagemark - Turn the readable content of a web page into one Markdown document.

Usage:
    from pagemark import build_document

    doc = build_document(html, "https://example.com/post", "Post title")
    print(doc.to_markdown())
"""

__version__ = "1.0.0"

from .conversion import HtmlToMarkdown, ReadabilityExtractor
from .dispatcher import DocumentBuilder, build_document
from .errors import (
    DocumentParseError,
    PagemarkError,
    ShareError,
    SiteExtractionError,
    XiaohongshuExtractionError,
)
from .models.config import ConverterConfig, ExtractorConfig, PagemarkConfig, SiteConfig
from .models.document import ExtractionResult, ExtractionTier, MarkdownDocument, SiteKind
from .sites import classify_url

__all__ = [
    "__version__",
    # Core
    "DocumentBuilder",
    "build_document",
    "classify_url",
    "HtmlToMarkdown",
    "ReadabilityExtractor",
    # Config
    "PagemarkConfig",
    "ExtractorConfig",
    "ConverterConfig",
    "SiteConfig",
    # Documents
    "ExtractionResult",
    "ExtractionTier",
    "MarkdownDocument",
    "SiteKind",
    # Errors
    "PagemarkError",
    "DocumentParseError",
    "SiteExtractionError",
    "XiaohongshuExtractionError",
    "ShareError",
]
