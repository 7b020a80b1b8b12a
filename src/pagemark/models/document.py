"""Value types produced by the extraction pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SiteKind(str, Enum):
    """Platforms with a dedicated extractor, plus the generic fallback."""

    TWITTER = "twitter"
    REDDIT = "reddit"
    XIAOHONGSHU = "xiaohongshu"
    GENERIC = "generic"


class ExtractionTier(str, Enum):
    """Which stage of the generic extractor produced the content."""

    READABILITY = "readability"
    SELECTOR = "selector"
    BODY = "body"
    EMPTY = "empty"


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the generic content extractor for one HTML document.

    ``content_html`` is still HTML and must go through the Markdown
    converter before it is shown to anyone.
    """

    title: str
    content_html: str = ""
    byline: str = ""
    excerpt: str = ""
    tier: ExtractionTier = ExtractionTier.EMPTY


@dataclass(frozen=True)
class SiteContent:
    """Markdown body from a site extractor, with optional metadata overrides."""

    body: str
    title: Optional[str] = None
    excerpt: Optional[str] = None


@dataclass(frozen=True)
class MarkdownDocument:
    """
    Final Markdown document for one page.

    Example:
        doc = MarkdownDocument(url="https://example.com", title="Hi", body="Text")
        print(doc.to_markdown())
    """

    url: str
    title: str
    body: str = ""
    byline: str = ""
    excerpt: str = ""
    site: SiteKind = SiteKind.GENERIC
    used_fallback: bool = False

    def to_markdown(self) -> str:
        """Render the fixed source/author/summary header followed by the body."""
        header = f"**Source:** {self.url}"
        if self.byline:
            header += f"\n**Author:** {self.byline}"
        if self.excerpt:
            header += f"\n\n**Summary:** {self.excerpt}"

        return f"{header}\n\n------\n\n# {self.title}\n\n{self.body}"

    def __str__(self) -> str:
        return self.to_markdown()
