"""Hostname classification and the ordered table of site profiles."""

from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlparse

from ..models.document import SiteKind
from .base import SiteExtractor
from .reddit import RedditExtractor
from .twitter import TwitterExtractor
from .xiaohongshu import XiaohongshuExtractor

TWITTER_HOSTS = frozenset({"x.com", "twitter.com"})


@dataclass(frozen=True)
class SiteProfile:
    """A hostname predicate paired with the extractor class for that site."""

    kind: SiteKind
    matches: Callable[[str], bool]
    extractor: type[SiteExtractor]


# Order matters: the first matching profile wins
SITE_PROFILES: tuple[SiteProfile, ...] = (
    SiteProfile(SiteKind.TWITTER, lambda host: host in TWITTER_HOSTS, TwitterExtractor),
    SiteProfile(SiteKind.REDDIT, lambda host: "reddit.com" in host, RedditExtractor),
    SiteProfile(SiteKind.XIAOHONGSHU, lambda host: "xiaohongshu.com" in host, XiaohongshuExtractor),
)


def hostname_of(url: str) -> str:
    """Lower-cased hostname of ``url``, or an empty string if it has none."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def find_profile(url: str) -> Optional[SiteProfile]:
    """Return the first site profile whose predicate accepts the URL's hostname."""
    host = hostname_of(url)
    if not host:
        return None
    for profile in SITE_PROFILES:
        if profile.matches(host):
            return profile
    return None


def classify_url(url: str) -> SiteKind:
    """
    Classify a page URL.

    Example:
        >>> classify_url("https://x.com/jack/status/20")
        <SiteKind.TWITTER: 'twitter'>
        >>> classify_url("https://example.com/")
        <SiteKind.GENERIC: 'generic'>
    """
    profile = find_profile(url)
    return profile.kind if profile else SiteKind.GENERIC
