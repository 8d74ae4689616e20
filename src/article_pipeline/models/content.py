"""Extraction request, feed item, and extracted content models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExtractionMethod(str, Enum):
    """Pipeline phase that produced a piece of content."""

    RSS = "rss"
    HTML = "html"
    API = "api"
    FALLBACK = "fallback"
    AI_GENERATED = "ai-generated"  # Reserved for a generative phase; nothing produces it yet
    VISUAL = "visual"
    BROWSER = "browser"


class FeedMedia(BaseModel):
    """A media:content, media:thumbnail, or enclosure entry of a feed item."""

    url: str | None = None
    type: str | None = None
    width: int | None = None
    height: int | None = None

    @field_validator("width", "height", mode="before")
    @classmethod
    def _parse_dimension(cls, value: Any) -> int | None:
        """Feeds ship dimensions as strings ("1200") or junk; keep only positive ints."""
        if value is None or isinstance(value, bool):
            return None
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return None
        return parsed if parsed > 0 else None


class FeedItem(BaseModel):
    """Caller-supplied feed metadata for an article.

    Accepts the camelCase keys emitted by common RSS parsers (contentEncoded,
    mediaContent, mediaThumbnail, pubDate) as well as the snake_case names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    link: str | None = None
    description: str | None = None
    summary: str | None = None
    content: str | None = None
    content_encoded: str | None = Field(default=None, alias="contentEncoded")
    creator: str | None = None
    author: str | None = None
    pub_date: str | None = Field(default=None, alias="pubDate")
    source: str | None = None
    enclosure: list[FeedMedia] = Field(default_factory=list)
    media_content: list[FeedMedia] = Field(default_factory=list, alias="mediaContent")
    media_thumbnail: list[FeedMedia] = Field(default_factory=list, alias="mediaThumbnail")

    @field_validator("enclosure", "media_content", "media_thumbnail", mode="before")
    @classmethod
    def _coerce_media_list(cls, value: Any) -> list:
        """A single media object (or bare URL string) becomes a one-element list.

        Scalars (numbers, booleans) carry no media and become an empty list.
        """
        if isinstance(value, (dict, str)):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return []
        return [{"url": item} if isinstance(item, str) else item for item in value]

    @field_validator("source", mode="before")
    @classmethod
    def _coerce_source(cls, value: Any) -> str | None:
        """Some parsers emit <source> as {"title": ..., "url": ...}."""
        if isinstance(value, dict):
            return value.get("title") or value.get("name") or value.get("url")
        return value

    @field_validator("pub_date", mode="before")
    @classmethod
    def _coerce_pub_date(cls, value: Any) -> str | None:
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    @property
    def body(self) -> str | None:
        """Full body when the feed carries one, else the description."""
        return self.content or self.content_encoded or self.description

    @property
    def byline(self) -> str | None:
        return self.creator or self.author


class ExtractionRequest(BaseModel):
    """One pipeline invocation: the article URL plus optional feed metadata."""

    source_url: str
    feed_item: FeedItem | None = None


class ExtractedContent(BaseModel):
    """Normalized article representation produced by a single extraction phase.

    extraction_method always names the phase that produced the content.
    """

    title: str = ""
    description: str = ""
    content: str = ""
    images: list[str] = Field(default_factory=list)
    author: str | None = None
    published_at: datetime | None = None
    source: str | None = None
    success: bool = False
    extraction_method: ExtractionMethod
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
