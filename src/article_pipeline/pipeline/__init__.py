"""Pipeline orchestration: ordered extraction phases, result cache, terminal fallback.

Public API:
    ContentPipeline(options, fetcher, clock).extract(source_url, feed_item) -> PipelineResult
        Never raises (except on cancellation); worst case is a minimal fallback result.
    extract_article_content(source_url, feed_item, options) -> PipelineResult
        Convenience wrapper around a process-wide ContentPipeline.
"""

from article_pipeline.pipeline.cache import ResultCache
from article_pipeline.pipeline.orchestrator import ContentPipeline, extract_article_content, get_pipeline
from article_pipeline.pipeline.strategies import ExtractionContext, ExtractionStrategy, default_strategies

__all__ = [
    "ContentPipeline",
    "default_strategies",
    "extract_article_content",
    "ExtractionContext",
    "ExtractionStrategy",
    "get_pipeline",
    "ResultCache",
]
