"""Content conversion for pagemark (main content extraction, HTML to Markdown)."""

from .extractor import ReadabilityExtractor
from .markdown import HtmlToMarkdown
from .protocols import ContentExtractor, MarkdownConverter

__all__ = [
    # Protocols
    "ContentExtractor",
    "MarkdownConverter",
    # Implementations
    "ReadabilityExtractor",
    "HtmlToMarkdown",
]
