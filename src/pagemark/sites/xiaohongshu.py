"""Xiaohongshu (RED) note page extractor."""

from typing import Optional

from bs4 import BeautifulSoup

from ..errors import XiaohongshuExtractionError
from ..models.document import SiteKind
from .base import ForumExtractor


class XiaohongshuExtractor(ForumExtractor):
    """
    Extracts a Xiaohongshu note and its comments.

    Unlike the other site extractors, any failure is re-raised as
    :class:`XiaohongshuExtractionError` so callers can tell it apart and
    fall back to generic extraction.
    """

    kind = SiteKind.XIAOHONGSHU

    @property
    def base_url(self) -> str:
        return self.config.xhs_base_url

    @property
    def empty_comments(self) -> str:
        return self.config.xhs_no_comments

    def _parse_comments(self, html: str) -> BeautifulSoup:
        soup = BeautifulSoup(html, "html.parser")

        # Note markup uses root-relative links throughout
        head = soup.head
        if head is None:
            head = soup.new_tag("head")
            if soup.html is not None:
                soup.html.insert(0, head)
            else:
                soup.insert(0, head)
        head.append(soup.new_tag("base", href=self.base_url))
        return soup

    def _comments_text(self, soup: BeautifulSoup) -> Optional[str]:
        for selector in self.config.xhs_comment_selectors:
            container = soup.select_one(selector)
            if container is not None and container.get_text(strip=True):
                return container.get_text("\n", strip=True)
        return None

    def parse(self, html: str) -> str:
        try:
            return super().parse(html)
        except Exception as e:
            self.logger.error(f"Xiaohongshu extraction failed: {e}")
            raise XiaohongshuExtractionError() from e

    def adjust_metadata(self, byline: str, excerpt: str) -> tuple[str, str]:
        # Bylines scraped from notes carry the "follow" button label
        return byline.replace(self.config.xhs_byline_noise, "", 1).strip(), ""
