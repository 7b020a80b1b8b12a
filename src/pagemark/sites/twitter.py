"""Twitter/X tweet page extractor."""

from bs4 import BeautifulSoup

from ..models.document import SiteContent, SiteKind
from .base import SiteExtractor


class TwitterExtractor(SiteExtractor):
    """
    Extracts the text of every tweet on a Twitter/X page.

    Tweets are the whole payload: there is no article/comment split and
    no fallback to generic extraction. A page without tweets yields the
    configured "no tweets" marker instead.

    Example:
        extractor = TwitterExtractor()
        content = extractor.extract(html, page_title="Jane on X")
        # content.title == "Tweets from Jane on X"
    """

    kind = SiteKind.TWITTER

    def tweets(self, html: str) -> list[str]:
        """Text content of each tweet element, in document order."""
        soup = BeautifulSoup(html, "html.parser")
        return [element.get_text() for element in soup.select(self.config.tweet_selector)]

    def parse(self, html: str) -> str:
        text = "\n".join(self.tweets(html))
        if not text.strip():
            return self.config.no_tweets_body
        return text

    def extract(self, html: str, page_title: str) -> SiteContent:
        tweets = [tweet for tweet in self.tweets(html) if tweet.strip()]
        title = self.config.tweets_title_template.format(page_title=page_title)

        if not tweets:
            self.logger.info("No tweets found on page")
            return SiteContent(
                body=self.config.no_tweets_body,
                title=title,
                excerpt=self.config.no_tweets_excerpt,
            )

        return SiteContent(
            body=self.parse(html),
            title=title,
            excerpt=f"Extracted {len(tweets)} tweet(s)",
        )
