"""Command-line interface for pagemark."""

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import requests
from bs4 import BeautifulSoup
from rich.console import Console

from . import __version__
from .conversion.extractor import decode_html
from .dispatcher import DocumentBuilder
from .errors import DocumentParseError
from .logging_config import setup_logging_from_config
from .models.config import PagemarkConfig
from .share import ShareLinkCreator

USER_AGENT = f"pagemark/{__version__}"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="pagemark",
        description="Extract the readable content of a web page as Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fetch a page and print its Markdown
  pagemark https://example.com/article

  # Convert a saved page, keeping its original URL for site detection
  pagemark https://www.reddit.com/r/python/comments/abc --file page.html

  # Read HTML from stdin and save the result
  curl -s https://example.com | pagemark https://example.com --file - -o page.md

  # Create a shareable link
  pagemark https://example.com/article --share
        """,
    )

    parser.add_argument(
        "url",
        help="Page URL (fetched unless --file is given)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Input
    input_group = parser.add_argument_group("input")
    input_group.add_argument(
        "--file",
        "-f",
        type=str,
        metavar="PATH",
        help="Read HTML from PATH ('-' for stdin) instead of fetching the URL",
    )
    input_group.add_argument(
        "--title",
        "-t",
        type=str,
        default=None,
        help="Page title (default: the document's <title>)",
    )
    input_group.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="YAML",
        help="Load settings from a YAML file",
    )

    # Output
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write Markdown to this file instead of stdout",
    )
    output_group.add_argument(
        "--download",
        action="store_true",
        help="Write Markdown to webpage-content-zip-<timestamp>.md",
    )
    output_group.add_argument(
        "--share",
        action="store_true",
        help="Upload the Markdown to a paste service and print the link",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress status output",
    )

    return parser


def read_html(args: argparse.Namespace, timeout: float = 30.0) -> str:
    """Load page HTML from --file, stdin, or the network."""
    if args.file == "-":
        return sys.stdin.read()
    if args.file:
        return Path(args.file).read_text(encoding="utf-8", errors="replace")

    response = requests.get(args.url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    response.raise_for_status()
    # Without a header charset requests assumes ISO-8859-1; trust the page instead
    if "charset" in response.headers.get("Content-Type", "").lower():
        return response.text
    return decode_html(response.content)


def page_title(html: str) -> str:
    """Title the browser would show for this HTML."""
    title = BeautifulSoup(html, "html.parser").find("title")
    return title.get_text(strip=True) if title else ""


def download_path(now: Optional[datetime] = None) -> Path:
    """Timestamped file name used by --download."""
    stamp = (now or datetime.now(timezone.utc)).isoformat().replace(":", "-")
    return Path(f"webpage-content-zip-{stamp}.md")


def run(args: argparse.Namespace) -> int:
    """Extract one page according to parsed arguments."""
    console = Console(stderr=True, quiet=args.quiet)

    try:
        config = PagemarkConfig.from_yaml_file(args.config) if args.config else PagemarkConfig()
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    if args.verbose:
        config.log_level = "DEBUG"
    elif args.quiet:
        config.log_level = "ERROR"
    setup_logging_from_config(config)

    try:
        html = read_html(args)
    except (OSError, requests.RequestException) as e:
        console.print(f"[red]Error:[/red] Could not load page: {e}")
        return 1

    try:
        document = DocumentBuilder(config).build(html, args.url, args.title or page_title(html))
    except DocumentParseError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    markdown = document.to_markdown()
    console.print(f"[green]Extracted[/green] {document.site.value} page: {document.title}")

    output = download_path() if args.download else args.output
    if output:
        output.write_text(markdown, encoding="utf-8")
        console.print(f"Saved to {output}")
    else:
        sys.stdout.write(markdown + "\n")

    if args.share:
        link = ShareLinkCreator().create(markdown)
        console.print(f"[bold]Share link[/bold] ({link.service}): {link.url}", soft_wrap=True)

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
