"""Data models for the extraction pipeline."""

from article_pipeline.models.content import (
    ExtractedContent,
    ExtractionMethod,
    ExtractionRequest,
    FeedItem,
    FeedMedia,
)
from article_pipeline.models.images import ImageInfo, ImageQuality, ImageSource
from article_pipeline.models.pipeline import (
    CacheEntry,
    FallbackContent,
    FormattedContent,
    PipelineResult,
)
from article_pipeline.models.quality import (
    ContentQuality,
    ContentScore,
    FallbackStrategy,
    QualityLevel,
)

__all__ = [
    "ExtractionMethod",
    "ExtractionRequest",
    "ExtractedContent",
    "FeedItem",
    "FeedMedia",
    "ImageInfo",
    "ImageQuality",
    "ImageSource",
    "ContentScore",
    "ContentQuality",
    "QualityLevel",
    "FallbackStrategy",
    "FormattedContent",
    "FallbackContent",
    "PipelineResult",
    "CacheEntry",
]
