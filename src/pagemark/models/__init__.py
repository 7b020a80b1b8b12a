"""Pagemark configuration and document models."""

from .config import (
    ConverterConfig,
    ExtractorConfig,
    PagemarkConfig,
    SiteConfig,
)
from .document import (
    ExtractionResult,
    ExtractionTier,
    MarkdownDocument,
    SiteContent,
    SiteKind,
)

__all__ = [
    # Config
    "ConverterConfig",
    "ExtractorConfig",
    "PagemarkConfig",
    "SiteConfig",
    # Documents
    "ExtractionResult",
    "ExtractionTier",
    "MarkdownDocument",
    "SiteContent",
    "SiteKind",
]
