"""Tests for the pagemark command line."""

import io
import logging
from unittest.mock import MagicMock, patch

import pytest
from pagemark.cli import create_parser, download_path, main, page_title, read_html
from pagemark.share import ShareLink

PAGE_HTML = (
    "<html><head><title>T</title></head>"
    "<body><article><h1>Hi</h1><p>World</p></article></body></html>"
)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("pagemark")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(PAGE_HTML, encoding="utf-8")
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_requires_url(self):
        """Test that the URL is mandatory."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_parses_options(self):
        """Test option parsing."""
        args = create_parser().parse_args(["https://example.com", "--file", "-", "--share", "-q"])

        assert args.url == "https://example.com"
        assert args.file == "-"
        assert args.share is True
        assert args.quiet is True


class TestMain:
    """Tests for the CLI entry point."""

    def test_prints_markdown_from_file(self, page_file, capsys):
        """Test converting a saved page to stdout."""
        code = main(["https://example.com/a", "--file", str(page_file), "-q"])

        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("**Source:** https://example.com/a\n")
        assert "# T" in out
        assert "World" in out

    def test_reads_stdin(self, monkeypatch, capsys):
        """Test reading HTML from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO(PAGE_HTML))

        code = main(["https://example.com/a", "--file", "-", "-q", "--title", "Custom"])

        assert code == 0
        assert "World" in capsys.readouterr().out

    def test_fetches_url(self, capsys):
        """Test fetching the page when no file is given."""
        response = MagicMock()
        response.headers = {"Content-Type": "text/html"}
        response.content = PAGE_HTML.encode("utf-8")

        with patch("pagemark.cli.requests.get", return_value=response) as get:
            code = main(["https://example.com/a", "-q"])

        assert code == 0
        get.assert_called_once()
        assert get.call_args[0][0] == "https://example.com/a"
        assert "World" in capsys.readouterr().out

    def test_fetched_page_without_header_charset_is_utf8(self):
        """Test that pages are decoded by their own charset, not ISO-8859-1."""
        response = MagicMock()
        response.headers = {"Content-Type": "text/html"}
        response.content = "<html><body><p>Café 小红书</p></body></html>".encode("utf-8")
        args = create_parser().parse_args(["https://example.com/a"])

        with patch("pagemark.cli.requests.get", return_value=response):
            html = read_html(args)

        assert "Café 小红书" in html

    def test_fetched_page_uses_header_charset(self):
        """Test that a charset in the response header is honoured."""
        response = MagicMock()
        response.headers = {"Content-Type": "text/html; charset=utf-8"}
        response.text = "<p>Café</p>"
        args = create_parser().parse_args(["https://example.com/a"])

        with patch("pagemark.cli.requests.get", return_value=response):
            assert read_html(args) == "<p>Café</p>"

    def test_verbose_configures_logging(self, page_file):
        """Test that --verbose lowers the log level through the config."""
        code = main(["https://example.com/a", "--file", str(page_file), "-v"])

        assert code == 0
        assert logging.getLogger("pagemark").level == logging.DEBUG

    def test_writes_output_file(self, page_file, tmp_path, capsys):
        """Test --output."""
        output = tmp_path / "out.md"

        code = main(["https://example.com/a", "--file", str(page_file), "-o", str(output), "-q"])

        assert code == 0
        assert output.read_text(encoding="utf-8").startswith("**Source:** https://example.com/a")
        assert capsys.readouterr().out == ""

    def test_download(self, page_file, tmp_path, monkeypatch):
        """Test --download writes a timestamped file."""
        monkeypatch.chdir(tmp_path)

        code = main(["https://example.com/a", "--file", str(page_file), "--download", "-q"])

        assert code == 0
        assert len(list(tmp_path.glob("webpage-content-zip-*.md"))) == 1

    def test_share(self, page_file, capsys):
        """Test --share prints the link."""
        with patch("pagemark.cli.ShareLinkCreator") as creator:
            creator.return_value.create.return_value = ShareLink(url="https://dpaste.org/x/raw", service="dpaste")
            code = main(["https://example.com/a", "--file", str(page_file), "--share"])

        assert code == 0
        creator.return_value.create.assert_called_once()
        assert "https://dpaste.org/x/raw" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        """Test that an unreadable input file is reported."""
        code = main(["https://example.com/a", "--file", str(tmp_path / "missing.html"), "-q"])

        assert code == 1

    def test_bad_config(self, page_file, tmp_path):
        """Test that an invalid config file is reported."""
        config = tmp_path / "bad.yaml"
        config.write_text("unknown_section: {}\n", encoding="utf-8")

        code = main(["https://example.com/a", "--file", str(page_file), "--config", str(config), "-q"])

        assert code == 1


def test_page_title():
    assert page_title(PAGE_HTML) == "T"
    assert page_title("<p>none</p>") == ""


def test_download_path_has_no_colons():
    assert ":" not in download_path().name
