"""Builds the final Markdown document for a page."""

import logging
from typing import Optional

from .conversion.extractor import ReadabilityExtractor
from .conversion.markdown import HtmlToMarkdown
from .conversion.protocols import ContentExtractor, MarkdownConverter
from .models.config import PagemarkConfig
from .models.document import MarkdownDocument, SiteContent, SiteKind
from .sites.base import SiteExtractor
from .sites.registry import find_profile

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    Turns a page snapshot into a :class:`MarkdownDocument`.

    Site extractors are tried first for known platforms; their failures
    are logged and the body falls back to generic extraction. Generic
    extraction always runs, because it supplies the title, byline and
    summary. Only :class:`~pagemark.errors.DocumentParseError` escapes.

    Example:
        builder = DocumentBuilder()
        doc = builder.build(html, "https://example.com/post", "Post title")
        print(doc.to_markdown())
    """

    def __init__(
        self,
        config: Optional[PagemarkConfig] = None,
        extractor: Optional[ContentExtractor] = None,
        converter: Optional[MarkdownConverter] = None,
        diagnostics: Optional[logging.Logger] = None,
    ):
        """
        Initialize the document builder.

        Args:
            config: Pagemark settings (defaults if None)
            extractor: Generic content extractor (built from config if None)
            converter: Markdown converter (built from config if None)
            diagnostics: Logger receiving extraction diagnostics
        """
        self._config = config or PagemarkConfig()
        self._extractor = extractor or ReadabilityExtractor(self._config.extractor)
        self._converter = converter or HtmlToMarkdown(self._config.converter)
        self._log = diagnostics or logger

    def site_extractor(self, url: str) -> Optional[SiteExtractor]:
        """Build the site extractor for ``url``, or None for generic pages."""
        profile = find_profile(url)
        if profile is None:
            return None
        return profile.extractor(
            config=self._config.sites,
            extractor=self._extractor,
            converter=self._converter,
        )

    def _run_site_extractor(self, site: SiteExtractor, html: str, page_title: str) -> Optional[SiteContent]:
        try:
            content = site.extract(html, page_title)
        except Exception as e:
            self._log.error(f"{type(site).__name__} failed, using generic extraction: {e}")
            return None

        if not content.body.strip():
            self._log.warning(f"{type(site).__name__} returned no content, using generic extraction")
            return None
        return content

    def build(self, html: str, url: str, page_title: str = "") -> MarkdownDocument:
        """
        Build the Markdown document for one page.

        Args:
            html: Full page HTML
            url: Page URL (classifies the site and resolves relative links)
            page_title: Title reported by the browser tab

        Returns:
            MarkdownDocument; its body may be empty but is always a string

        Raises:
            DocumentParseError: If the HTML cannot be parsed at all
        """
        site = self.site_extractor(url)
        kind = site.kind if site else SiteKind.GENERIC

        site_content: Optional[SiteContent] = None
        if site is not None:
            self._log.debug(f"Detected {kind.value} page, using {type(site).__name__}")
            site_content = self._run_site_extractor(site, html, page_title)

        result = self._extractor.extract(html, url)

        title = result.title or page_title
        byline = result.byline
        excerpt = result.excerpt

        if site_content is not None:
            title = site_content.title or title
            excerpt = site_content.excerpt or excerpt
            body = site_content.body
        else:
            body = self._converter.convert(result.content_html)

        if site is not None:
            byline, excerpt = site.adjust_metadata(byline, excerpt)

        return MarkdownDocument(
            url=url,
            title=title,
            body=body,
            byline=byline,
            excerpt=excerpt,
            site=kind,
            used_fallback=site is not None and site_content is None,
        )


def build_document(
    html: str,
    url: str,
    page_title: str = "",
    config: Optional[PagemarkConfig] = None,
) -> MarkdownDocument:
    """Build a Markdown document with a default :class:`DocumentBuilder`."""
    return DocumentBuilder(config).build(html, url, page_title)
