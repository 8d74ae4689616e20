"""Adaptive article content extraction with graceful fallbacks.

Public API:
    ContentPipeline(options=None, fetcher=None, clock=None)
        await pipeline.extract(source_url, feed_item=None) -> PipelineResult
    extract_article_content(source_url, feed_item=None, options=None) -> PipelineResult
    PipelineOptions, Settings, get_settings, configure_logging
"""

from article_pipeline.config import PipelineOptions, Settings, get_settings
from article_pipeline.errors import NetworkError, ParseError, PipelineError
from article_pipeline.logging_config import configure_logging
from article_pipeline.models import (
    ContentQuality,
    ContentScore,
    ExtractedContent,
    ExtractionMethod,
    FallbackContent,
    FallbackStrategy,
    FeedItem,
    PipelineResult,
    QualityLevel,
)
from article_pipeline.pipeline import ContentPipeline, extract_article_content

__all__ = [
    "configure_logging",
    "ContentPipeline",
    "ContentQuality",
    "ContentScore",
    "extract_article_content",
    "ExtractedContent",
    "ExtractionMethod",
    "FallbackContent",
    "FallbackStrategy",
    "FeedItem",
    "get_settings",
    "NetworkError",
    "ParseError",
    "PipelineError",
    "PipelineOptions",
    "PipelineResult",
    "QualityLevel",
    "Settings",
]
