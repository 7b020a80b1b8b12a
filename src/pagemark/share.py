"""Shareable links for finished Markdown documents.

This runs after extraction and is never called from the pipeline itself.
"""

import base64
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests

from .errors import ShareError

logger = logging.getLogger(__name__)

DPASTE_API_URL = "https://dpaste.org/api/"
PASTE_EE_API_URL = "https://api.paste.ee/v1/pastes"
DEFAULT_TITLE = "Web Page Content"
EXPIRY_DAYS = 30


@dataclass(frozen=True)
class ShareLink:
    """A link to a stored document and the service that stored it."""

    url: str
    service: str


def document_title(markdown: str) -> str:
    """Title from the first ``# `` heading, or a generic default."""
    match = re.search(r"^# (.+)$", markdown, re.MULTILINE)
    return match.group(1).strip() if match else DEFAULT_TITLE


def data_url(markdown: str) -> str:
    """Encode the document itself as a ``data:`` URL."""
    # Percent-encode first so the payload is plain ASCII, matching encodeURIComponent
    encoded = quote(markdown, safe="-_.!~*'()")
    return "data:text/markdown;base64," + base64.b64encode(encoded.encode("ascii")).decode("ascii")


class ShareLinkCreator:
    """
    Stores Markdown on a public paste service and returns a link to it.

    Tries dpaste.org, then paste.ee, and finally falls back to a
    ``data:`` URL so that a link is always produced.

    Example:
        creator = ShareLinkCreator()
        link = creator.create(doc.to_markdown())
        print(link.url)
    """

    def __init__(self, session: Optional[Any] = None, timeout: float = 15.0):
        """
        Initialize the share link creator.

        Args:
            session: requests-compatible session (a new Session if None)
            timeout: Per-request timeout in seconds
        """
        self._session = session or requests.Session()
        self.timeout = timeout

    def _dpaste(self, markdown: str, title: str) -> str:
        try:
            response = self._session.post(
                DPASTE_API_URL,
                data={
                    "content": markdown,
                    "title": f"{title} - Web Page Content",
                    "syntax": "markdown",
                    "expiry_days": str(EXPIRY_DAYS),
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ShareError(f"dpaste request failed: {e}") from e

        if not response.ok:
            raise ShareError(f"dpaste API error: {response.status_code}")

        reply = response.text.strip()
        if "https://dpaste.org/" not in reply:
            raise ShareError("Invalid dpaste response")

        # The API answers with the paste URL wrapped in quotes
        return reply.strip('"') + "/raw"

    def _paste_ee(self, markdown: str, title: str) -> str:
        try:
            response = self._session.post(
                PASTE_EE_API_URL,
                json={
                    "description": f"{title} - Web Page Content",
                    "sections": [{"name": "content", "syntax": "markdown", "contents": markdown}],
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ShareError(f"paste.ee request failed: {e}") from e

        if not response.ok:
            raise ShareError(f"paste.ee API error: {response.status_code}")

        try:
            link = response.json().get("link")
        except ValueError as e:
            raise ShareError(f"Invalid paste.ee response: {e}") from e
        if not link:
            raise ShareError("No link in paste.ee response")
        return str(link)

    def create(self, markdown: str) -> ShareLink:
        """
        Create a shareable link for a Markdown document.

        Args:
            markdown: Rendered document

        Returns:
            ShareLink naming the service that produced it
        """
        title = document_title(markdown)

        try:
            return ShareLink(url=self._dpaste(markdown, title), service="dpaste")
        except ShareError as e:
            logger.warning(f"Failed to create dpaste link: {e}")

        try:
            return ShareLink(url=self._paste_ee(markdown, title), service="paste.ee")
        except ShareError as e:
            logger.warning(f"Failed to create paste.ee link: {e}")

        return ShareLink(url=data_url(markdown), service="data")


def create_share_link(markdown: str, session: Optional[Any] = None) -> ShareLink:
    """Create a shareable link with a default :class:`ShareLinkCreator`."""
    return ShareLinkCreator(session=session).create(markdown)
