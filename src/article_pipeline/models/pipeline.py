"""Pipeline output models: formatted metadata, fallback blocks, results, cache entries."""

from datetime import datetime

from pydantic import BaseModel, Field

from article_pipeline.models.content import ExtractedContent, ExtractionMethod
from article_pipeline.models.quality import ContentQuality, ContentScore, FallbackStrategy


class FormattedContent(BaseModel):
    """Formatter output: cleaned content plus derived reading metadata."""

    title: str
    description: str
    content: str
    excerpt: str = ""
    word_count: int = 0
    reading_time: int = 0  # Minutes at 200 words per minute
    language: str | None = None
    has_images: bool = False
    has_links: bool = False


class FallbackContent(BaseModel):
    """Self-contained renderable block produced by the fallback generator."""

    strategy: FallbackStrategy | None = None  # None for the last-resort minimal block
    content: str  # Renderable HTML block
    title: str
    description: str
    author: str | None = None
    source: str | None = None
    published_at: datetime | None = None
    images: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    fallback_reason: str
    extraction_method: ExtractionMethod


class PipelineResult(ExtractedContent):
    """The only object handed to the rendering layer. JSON-serializable via model_dump(mode="json")."""

    score: ContentScore
    quality: ContentQuality
    fallback_reason: str | None = None
    formatted: FormattedContent | None = None
    rendered: FallbackContent | None = None


class CacheEntry(BaseModel):
    """A cached result, fresh while now - stored_at < ttl (seconds)."""

    result: PipelineResult
    stored_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.stored_at < self.ttl
