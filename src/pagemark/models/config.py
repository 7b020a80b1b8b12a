"""Pydantic configuration models for pagemark."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

TierName = Literal["readability", "selector", "body"]

DEFAULT_CONTENT_SELECTORS = [
    "main",
    "article",
    '[role="main"]',
    ".main-content",
    ".content",
]

DEFAULT_BOILERPLATE_SELECTORS = [
    "nav",
    "header",
    "footer",
    "aside",
    ".sidebar",
    ".nav",
    ".navigation",
    ".menu",
    "script",
    "style",
]


class ExtractorConfig(BaseModel):
    """Configuration for the generic main-content extractor."""

    tiers: list[TierName] = Field(
        default_factory=lambda: ["readability", "selector", "body"],
        description="Extraction tiers to try, in order",
    )
    content_selectors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_SELECTORS),
        description="Selectors for the structural fallback (first match in document order wins)",
    )
    boilerplate_selectors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BOILERPLATE_SELECTORS),
        description="Selectors excluded from the body fallback",
    )
    readability_min_text_length: int = Field(25, ge=1, description="Minimum paragraph length scored by readability")
    readability_retry_length: int = Field(250, ge=1, description="Article length below which readability retries leniently")

    model_config = {"extra": "forbid"}

    @field_validator("tiers")
    @classmethod
    def _unique_tiers(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError(f"Duplicate extraction tiers: {value}")
        return value


class ConverterConfig(BaseModel):
    """Configuration for HTML to Markdown conversion."""

    elided_tags: list[str] = Field(
        default_factory=lambda: ["script", "style", "nav", "footer", "aside"],
        description="Elements dropped together with their content",
    )
    body_width: int = Field(0, ge=0, description="Max line width (0 = no wrapping)")
    inline_links: bool = Field(True, description="Use inline [text](url) links")
    ignore_images: bool = Field(False, description="Skip image conversion")

    model_config = {"extra": "forbid"}


class SiteConfig(BaseModel):
    """Per-platform settings for the site extractors."""

    tweet_selector: str = Field('[data-testid="tweet"]', description="Selector matching one tweet")
    no_tweets_body: str = Field("No tweets found on this page.", description="Body when a page has no tweets")
    no_tweets_excerpt: str = Field("No tweets found", description="Summary when a page has no tweets")
    tweets_title_template: str = Field("Tweets from {page_title}", description="Title for tweet pages")

    reddit_base_url: str = Field("https://www.reddit.com", description="Base URL for Reddit links")
    reddit_comment_selector: str = Field("shreddit-comment-tree", description="Reddit comment tree container")
    reddit_no_comments: str = Field("No comments found", description="Marker when Reddit has no comments")

    xhs_base_url: str = Field("https://www.xiaohongshu.com", description="Base URL for Xiaohongshu links")
    xhs_comment_selectors: list[str] = Field(
        default_factory=lambda: [".comments-container"],
        description="Candidate comment containers, tried in order",
    )
    xhs_no_comments: str = Field("未找到评论", description="Marker when Xiaohongshu has no comments")
    xhs_byline_noise: str = Field("关注", description="Follow-button label stripped from bylines")

    model_config = {"extra": "forbid"}


class PagemarkConfig(BaseModel):
    """
    Root configuration model for pagemark.

    Example:
        config = PagemarkConfig(
            extractor=ExtractorConfig(tiers=["selector", "body"]),
        )

    YAML format:
        extractor:
          tiers: [readability, body]
        sites:
          reddit_no_comments: "(no comments)"
        log_level: DEBUG
    """

    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    sites: SiteConfig = Field(default_factory=SiteConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "PagemarkConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "PagemarkConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text(encoding="utf-8"))
