"""Main content extraction from HTML pages."""

import copy
import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from readability import Document

from ..errors import DocumentParseError
from ..models.config import ExtractorConfig
from ..models.document import ExtractionResult, ExtractionTier

logger = logging.getLogger(__name__)

# readability-lxml's title when the page has none
_NO_TITLE = "[no-title]"

# Document-level elements that are never visible content
_HEAD_TAGS = ["head", "title", "meta", "link", "base"]

BYLINE_SELECTORS = [
    'meta[name="author"]',
    'meta[property="article:author"]',
    '[rel="author"]',
    '[itemprop="author"]',
    ".byline",
    ".author",
]

EXCERPT_SELECTORS = [
    'meta[name="description"]',
    'meta[property="og:description"]',
    'meta[name="twitter:description"]',
]


@dataclass(frozen=True)
class PageSnapshot:
    """One parsed page shared read-only by every extraction tier."""

    html: str
    soup: BeautifulSoup
    base_url: str
    title: str
    byline: str
    excerpt: str


Tier = Callable[[PageSnapshot], Optional[ExtractionResult]]


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def decode_html(html: bytes) -> str:
    """Decode HTML bytes using the charset the page declares (UTF-8 otherwise)."""
    head = html[:2048].decode("latin-1", errors="ignore")
    charset_match = re.search(r'charset=["\']?([^"\'\s>/;]+)', head, re.IGNORECASE)
    encoding = charset_match.group(1).strip() if charset_match else "utf-8"
    try:
        return html.decode(encoding, errors="replace")
    except LookupError:
        return html.decode("utf-8", errors="replace")


def inner_html(element: Tag) -> str:
    """Serialize an element's children, like the DOM's ``innerHTML``."""
    return "".join(str(child) for child in element.contents)


class ReadabilityExtractor:
    """
    Extracts the main content of arbitrary HTML pages.

    Runs an ordered list of tiers and keeps the first one that finds
    something:

    1. readability-lxml's article detection
    2. the first structural container (``main``, ``article``, ...)
    3. the page body with navigation and other boilerplate filtered out

    When every tier misses, the result has empty ``content_html``.

    Example:
        extractor = ReadabilityExtractor()
        result = extractor.extract(html, "https://example.com/post")
        print(result.title, result.byline)
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        """
        Initialize the content extractor.

        Args:
            config: Extractor settings (defaults if None)
        """
        self._config = config or ExtractorConfig()
        self._content_selector = ", ".join(self._config.content_selectors)
        self._boilerplate_selector = ", ".join(self._config.boilerplate_selectors)

        available: dict[str, Tier] = {
            "readability": self._readability_tier,
            "selector": self._selector_tier,
            "body": self._body_tier,
        }
        self._tiers: list[tuple[str, Tier]] = [(name, available[name]) for name in self._config.tiers]

    @property
    def tier_names(self) -> list[str]:
        """Names of the configured tiers, in the order they are tried."""
        return [name for name, _ in self._tiers]

    def _parse(self, html: Union[str, bytes], base_url: str) -> PageSnapshot:
        if isinstance(html, bytes):
            html = decode_html(html)
        if not isinstance(html, str):
            raise DocumentParseError(f"Cannot parse {type(html).__name__} as HTML")

        try:
            soup = BeautifulSoup(html, "html.parser")
        except Exception as e:
            raise DocumentParseError(f"Failed to parse HTML: {e}") from e

        title_tag = soup.find("title")
        title = _collapse(title_tag.get_text()) if title_tag else ""

        return PageSnapshot(
            html=html,
            soup=soup,
            base_url=base_url,
            title=title,
            byline=self._find_metadata(soup, BYLINE_SELECTORS),
            excerpt=self._find_metadata(soup, EXCERPT_SELECTORS),
        )

    def _find_metadata(self, soup: BeautifulSoup, selectors: list[str]) -> str:
        for selector in selectors:
            element = soup.select_one(selector)
            if element is None:
                continue
            value = element.get("content") if element.name == "meta" else element.get_text(" ")
            if isinstance(value, str) and value.strip():
                return _collapse(value)
        return ""

    def _resolve_links(self, element: Tag, base_url: str) -> None:
        """Convert relative URLs to absolute URLs."""
        if not base_url:
            return

        for tag in element.find_all("a", href=True):
            href = tag["href"]
            if href.startswith("#"):
                continue  # Keep anchor links
            if not href.startswith(("http://", "https://", "//", "mailto:", "tel:", "javascript:")):
                tag["href"] = urljoin(base_url, href)

        for tag in element.find_all(src=True):
            src = tag["src"]
            if not src.startswith(("http://", "https://", "//", "data:")):
                tag["src"] = urljoin(base_url, src)

    def _readability_tier(self, page: PageSnapshot) -> Optional[ExtractionResult]:
        try:
            document = Document(
                page.html,
                url=page.base_url or None,
                min_text_length=self._config.readability_min_text_length,
                retry_length=self._config.readability_retry_length,
            )
            content = document.summary(html_partial=True)
            title = document.title()
        except Exception as e:
            logger.warning(f"Readability extraction failed for {page.base_url}: {e}")
            return None

        if not BeautifulSoup(content, "html.parser").get_text(strip=True):
            logger.warning(f"Readability found no article for {page.base_url}, falling back")
            return None

        if not title or title == _NO_TITLE:
            title = page.title

        return ExtractionResult(
            title=title,
            content_html=content,
            byline=page.byline,
            excerpt=page.excerpt,
            tier=ExtractionTier.READABILITY,
        )

    def _selector_tier(self, page: PageSnapshot) -> Optional[ExtractionResult]:
        if not self._content_selector:
            return None

        element = page.soup.select_one(self._content_selector)
        if element is None:
            return None

        # Work on a copy so the snapshot stays untouched for later tiers
        content = copy.copy(element)
        self._resolve_links(content, page.base_url)

        return ExtractionResult(
            title=page.title,
            content_html=inner_html(content),
            byline=page.byline,
            excerpt=page.excerpt,
            tier=ExtractionTier.SELECTOR,
        )

    def _body_tier(self, page: PageSnapshot) -> Optional[ExtractionResult]:
        # html.parser only creates <body> when the markup has one
        body = page.soup.body
        root: Tag = body if isinstance(body, Tag) else page.soup

        excluded: set[int] = set()
        if self._boilerplate_selector:
            excluded = {id(element) for element in root.select(self._boilerplate_selector)}
        if body is None:
            excluded.update(id(element) for element in root.find_all(_HEAD_TAGS))

        content = self._filter_tree(root, excluded, page.soup)
        if not content.get_text(strip=True):
            return None
        self._resolve_links(content, page.base_url)

        return ExtractionResult(
            title=page.title,
            content_html=inner_html(content),
            byline=page.byline,
            excerpt=page.excerpt,
            tier=ExtractionTier.BODY,
        )

    def _filter_tree(self, root: Tag, excluded: set[int], factory: BeautifulSoup) -> Tag:
        """Build a new tree from ``root`` without the excluded subtrees."""
        # The parsed document itself has no real tag name
        name = root.name if root is not factory else "div"
        clone = factory.new_tag(name, attrs=dict(root.attrs))

        # Walk with an explicit stack; pages can nest deeper than the recursion limit
        stack = [(root, clone)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                if isinstance(child, Tag):
                    if id(child) in excluded:
                        continue
                    child_clone = factory.new_tag(child.name, attrs=dict(child.attrs))
                    target.append(child_clone)
                    stack.append((child, child_clone))
                elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                    target.append(NavigableString(str(child)))
        return clone

    def extract(self, html: Union[str, bytes], base_url: str = "") -> ExtractionResult:
        """
        Extract main content from HTML.

        Args:
            html: Raw HTML (bytes are decoded using the declared charset)
            base_url: URL for resolving relative links; never fetched

        Returns:
            ExtractionResult; ``content_html`` is empty when nothing was found

        Raises:
            DocumentParseError: If the input cannot be parsed at all
        """
        page = self._parse(html, base_url)

        for name, tier in self._tiers:
            result = tier(page)
            if result is not None:
                logger.debug(f"Extracted {len(result.content_html)} bytes from {base_url} via {name}")
                return result

        logger.warning(f"Could not find main content for {base_url}")
        return ExtractionResult(
            title=page.title,
            content_html="",
            byline=page.byline,
            excerpt=page.excerpt,
            tier=ExtractionTier.EMPTY,
        )
