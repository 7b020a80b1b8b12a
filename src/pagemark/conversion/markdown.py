"""HTML to Markdown conversion."""

from __future__ import annotations

import html as html_lib
import logging
import re
import secrets

import html2text
from bs4 import BeautifulSoup, Tag

from ..models.config import ConverterConfig

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS_RE = re.compile(r"^(?:language|lang)-(.+)$")


class HtmlToMarkdown:
    """
    Converts HTML fragments to clean Markdown.

    Uses html2text with ATX headings and no line wrapping. ``script``,
    ``style``, ``nav``, ``footer`` and ``aside`` elements are dropped with
    their content, and ``<pre>`` blocks come out as fenced code.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert("<h1>Hi</h1><p>World</p>")
        # "# Hi\\n\\nWorld"
    """

    def __init__(self, config: ConverterConfig | None = None):
        """
        Initialize the Markdown converter.

        Args:
            config: Converter settings (defaults if None)
        """
        self._config = config or ConverterConfig()
        self._elided_selector = ", ".join(self._config.elided_tags)

    def _build_converter(self) -> html2text.HTML2Text:
        # html2text keeps parser state between calls, so each conversion
        # gets its own instance.
        converter = html2text.HTML2Text()
        converter.body_width = self._config.body_width
        converter.inline_links = self._config.inline_links
        converter.wrap_links = False
        converter.protect_links = False
        converter.ignore_images = self._config.ignore_images
        converter.unicode_snob = True
        converter.escape_snob = False
        converter.default_image_alt = ""
        converter.single_line_break = False
        # Fences pick up the quote and list prefixes of their context
        converter.backquote_code_style = True
        return converter

    def _prepare(self, html: str, marker: str) -> tuple[str, list[tuple[str, str]]]:
        """Drop elided elements and reduce ``<pre>`` blocks to numbered markers."""
        soup = BeautifulSoup(html, "html.parser")

        if self._elided_selector:
            for element in soup.select(self._elided_selector):
                element.decompose()

        blocks: list[tuple[str, str]] = []
        for pre in soup.find_all("pre"):
            if not isinstance(pre, Tag):
                continue
            blocks.append((self._language(pre), pre.get_text().strip("\n")))
            placeholder = soup.new_tag("pre")
            placeholder.string = f"{marker}{len(blocks) - 1}"
            pre.replace_with(placeholder)

        return str(soup), blocks

    def _language(self, pre: Tag) -> str:
        for tag in [pre, *pre.find_all("code")]:
            for css_class in tag.get("class") or []:
                match = _LANGUAGE_CLASS_RE.match(css_class)
                if match:
                    return match.group(1)
        return ""

    def _restore_code(self, markdown: str, marker: str, blocks: list[tuple[str, str]]) -> str:
        """Put the original code back into the fences html2text laid out."""
        pattern = re.compile(rf"(^|\n)([ >]*)```\n\2{marker}(\d+)\n\2```")

        def fence(match: re.Match) -> str:
            lead, prefix, index = match.group(1), match.group(2), int(match.group(3))
            if index >= len(blocks):
                return match.group(0)

            language, code = blocks[index]
            lines = [f"```{language}", *code.split("\n"), "```"]
            fenced = "\n".join(prefix + line if line else prefix.rstrip() for line in lines)

            # Blank line between the fence and preceding text
            previous = markdown[: match.start()].rsplit("\n", 1)[-1]
            if lead and previous.strip(" >"):
                return f"{lead}{prefix.rstrip()}\n{fenced}"
            return f"{lead}{fenced}"

        return pattern.sub(fence, markdown)

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        markdown = markdown.replace("\r\n", "\n").replace("\r", "\n")

        # Remove trailing whitespace on each line
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))

        # Remove excessive blank lines
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)

        return markdown.strip()

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML fragment

        Returns:
            Markdown string (no trailing newline)
        """
        if not html or not html.strip():
            return ""

        # Random per call so page text can never collide with it
        marker = f"PAGEMARKCODE{secrets.token_hex(6)}N"

        try:
            prepared, blocks = self._prepare(html, marker)
            markdown = self._build_converter().handle(prepared)
            markdown = self._clean_output(markdown)

            # Code is restored after cleanup so its whitespace is untouched
            return self._restore_code(markdown, marker, blocks)

        except Exception as e:
            logger.error(f"Failed to convert HTML to Markdown: {e}")
            # Return plain text as fallback
            soup = BeautifulSoup(html, "html.parser")
            text: str = soup.get_text(separator="\n")
            return self._clean_output(text)

    def convert_text(self, text: str) -> str:
        """
        Convert rendered plain text to Markdown, one paragraph per line.

        Markdown control characters in the text are escaped.

        Args:
            text: Plain text, e.g. a comment thread's rendered text

        Returns:
            Markdown string
        """
        paragraphs = [f"<p>{html_lib.escape(line.strip())}</p>" for line in text.splitlines() if line.strip()]
        return self.convert("".join(paragraphs))
