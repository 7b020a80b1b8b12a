"""Tests for share link creation."""

import base64
from unittest.mock import MagicMock
from urllib.parse import unquote

import requests
from pagemark.share import ShareLinkCreator, create_share_link, data_url, document_title

MARKDOWN = "**Source:** https://example.com\n\n------\n\n# Hello page\n\nBody"


def make_response(ok=True, status_code=200, text="", json_data=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    return response


class TestDocumentTitle:
    """Tests for title detection."""

    def test_first_heading(self):
        assert document_title(MARKDOWN) == "Hello page"

    def test_default_title(self):
        assert document_title("no heading here") == "Web Page Content"


class TestShareLinkCreator:
    """Tests for ShareLinkCreator."""

    def test_dpaste_link(self):
        """Test the quoted dpaste reply becomes a raw link."""
        session = MagicMock()
        session.post.return_value = make_response(text='"https://dpaste.org/AbCd"\n')

        link = ShareLinkCreator(session=session).create(MARKDOWN)

        assert link.url == "https://dpaste.org/AbCd/raw"
        assert link.service == "dpaste"
        data = session.post.call_args.kwargs["data"]
        assert data["syntax"] == "markdown"
        assert data["expiry_days"] == "30"
        assert data["title"] == "Hello page - Web Page Content"

    def test_falls_back_to_paste_ee(self):
        """Test the paste.ee fallback when dpaste fails."""
        session = MagicMock()
        session.post.side_effect = [
            make_response(ok=False, status_code=503),
            make_response(json_data={"id": "x", "link": "https://paste.ee/p/x"}),
        ]

        link = create_share_link(MARKDOWN, session=session)

        assert link.url == "https://paste.ee/p/x"
        assert link.service == "paste.ee"
        payload = session.post.call_args.kwargs["json"]
        assert payload["sections"][0]["contents"] == MARKDOWN

    def test_rejects_unexpected_dpaste_reply(self):
        """Test that a dpaste reply without a paste URL is a failure."""
        session = MagicMock()
        session.post.side_effect = [
            make_response(text="error"),
            make_response(json_data={"link": "https://paste.ee/p/y"}),
        ]

        link = ShareLinkCreator(session=session).create(MARKDOWN)

        assert link.service == "paste.ee"

    def test_falls_back_to_data_url(self):
        """Test the data URL when both services fail."""
        session = MagicMock()
        session.post.side_effect = [
            requests.ConnectionError("offline"),
            make_response(json_data={}),
        ]

        link = ShareLinkCreator(session=session).create(MARKDOWN)

        assert link.service == "data"
        assert link.url == data_url(MARKDOWN)


def test_data_url_round_trip():
    """Test that the data URL carries the whole document."""
    url = data_url("# Titre\n\nÉtat")

    assert url.startswith("data:text/markdown;base64,")
    payload = base64.b64decode(url.split(",", 1)[1]).decode("ascii")
    assert unquote(payload) == "# Titre\n\nÉtat"
