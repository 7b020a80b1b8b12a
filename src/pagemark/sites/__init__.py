"""Platform-specific extractors and URL classification."""

from .base import ForumExtractor, SiteExtractor, format_comment_block
from .reddit import RedditExtractor
from .registry import SITE_PROFILES, SiteProfile, classify_url, find_profile, hostname_of
from .twitter import TwitterExtractor
from .xiaohongshu import XiaohongshuExtractor

__all__ = [
    # Base
    "ForumExtractor",
    "SiteExtractor",
    "format_comment_block",
    # Extractors
    "RedditExtractor",
    "TwitterExtractor",
    "XiaohongshuExtractor",
    # Registry
    "SITE_PROFILES",
    "SiteProfile",
    "classify_url",
    "find_profile",
    "hostname_of",
]
