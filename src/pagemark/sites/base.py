"""Base site extractor interface."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from bs4 import BeautifulSoup

from ..conversion.extractor import ReadabilityExtractor
from ..conversion.markdown import HtmlToMarkdown
from ..conversion.protocols import ContentExtractor, MarkdownConverter
from ..models.config import SiteConfig
from ..models.document import SiteContent, SiteKind


def format_comment_block(comments: str) -> str:
    """Wrap converted comment text in the trailer appended to a post body."""
    return f"\n\n------\n<comments>\n{comments}\n</comments>"


class SiteExtractor(ABC):
    """Base class for platform-specific extractors.

    A site extractor knows one platform's markup and turns a page from it
    into a Markdown body. Failures propagate; the dispatcher decides how
    to fall back.
    """

    kind: SiteKind = SiteKind.GENERIC

    def __init__(
        self,
        config: Optional[SiteConfig] = None,
        extractor: Optional[ContentExtractor] = None,
        converter: Optional[MarkdownConverter] = None,
    ):
        """Initialize the site extractor.

        Args:
            config: Site settings (defaults if None)
            extractor: Generic content extractor (uses default if None)
            converter: Markdown converter (uses default if None)
        """
        self.config = config or SiteConfig()
        self._extractor = extractor or ReadabilityExtractor()
        self._converter = converter or HtmlToMarkdown()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def parse(self, html: str) -> str:
        """Convert a page from this platform to Markdown.

        Args:
            html: Raw page HTML

        Returns:
            Markdown body
        """

    def extract(self, html: str, page_title: str) -> SiteContent:
        """Parse the page and report any title/summary overrides."""
        return SiteContent(body=self.parse(html))

    def adjust_metadata(self, byline: str, excerpt: str) -> tuple[str, str]:
        """Post-process the generic byline/summary for this platform."""
        return byline, excerpt


class ForumExtractor(SiteExtractor):
    """Post-plus-comments platforms: generic article extraction and a comment trailer."""

    base_url: str = ""
    empty_comments: str = ""

    @abstractmethod
    def _comments_text(self, soup: BeautifulSoup) -> Optional[str]:
        """Return the rendered text of the comment subtree, if there is one."""

    def _parse_comments(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    def parse(self, html: str) -> str:
        result = self._extractor.extract(html, self.base_url)
        body = self._converter.convert(result.content_html)

        comments_text = self._comments_text(self._parse_comments(html))
        if comments_text and comments_text.strip():
            comments = self._converter.convert_text(comments_text)
        else:
            self.logger.debug(f"No comment subtree found on {self.kind.value} page")
            comments = self.empty_comments

        return body + format_comment_block(comments)
