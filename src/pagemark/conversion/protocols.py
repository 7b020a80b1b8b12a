"""Protocol definitions for content conversion."""

from typing import Protocol, Union

from ..models.document import ExtractionResult


class ContentExtractor(Protocol):
    """
    Protocol for extracting the main content of an HTML page.

    Implementations isolate the article body and its metadata while
    dropping navigation, headers, footers, ads, etc.
    """

    def extract(self, html: Union[str, bytes], base_url: str) -> ExtractionResult:
        """
        Extract main content from HTML.

        Args:
            html: Raw HTML
            base_url: URL used to resolve relative links (never fetched)

        Returns:
            ExtractionResult whose content is still HTML
        """
        ...


class MarkdownConverter(Protocol):
    """
    Protocol for converting HTML fragments to Markdown.

    Implementations must be deterministic: the same fragment always
    converts to the same text.
    """

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML fragment

        Returns:
            Markdown string
        """
        ...

    def convert_text(self, text: str) -> str:
        """Convert plain text (e.g. rendered comment text) to Markdown."""
        ...
