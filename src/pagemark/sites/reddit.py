"""Reddit post page extractor."""

from typing import Optional

from bs4 import BeautifulSoup

from ..models.document import SiteKind
from .base import ForumExtractor


class RedditExtractor(ForumExtractor):
    """
    Extracts a Reddit post and its comment tree.

    The post goes through generic extraction; the ``shreddit-comment-tree``
    element's rendered text becomes the ``<comments>`` trailer.
    """

    kind = SiteKind.REDDIT

    @property
    def base_url(self) -> str:
        return self.config.reddit_base_url

    @property
    def empty_comments(self) -> str:
        return self.config.reddit_no_comments

    def _comments_text(self, soup: BeautifulSoup) -> Optional[str]:
        container = soup.select_one(self.config.reddit_comment_selector)
        if container is None:
            return None
        return container.get_text("\n", strip=True)
