"""Extraction phases as interchangeable strategies.

ContentPipeline runs an ordered list of strategies. Each one decides whether
it applies to the current request (enabled) and produces at most one
candidate (extract). A strategy may raise; the pipeline isolates and logs
the failure and moves on to the next phase.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from article_pipeline.config import PipelineOptions
from article_pipeline.extraction.feed import extract_from_feed
from article_pipeline.extraction.html import HtmlExtractor
from article_pipeline.extraction.library import extract_with_library
from article_pipeline.fetcher import Fetcher
from article_pipeline.errors import NetworkError
from article_pipeline.models.content import ExtractedContent, ExtractionMethod, FeedItem

logger = logging.getLogger(__name__)


@dataclass
class ExtractionContext:
    """Per-invocation state shared by the phases of one pipeline run."""

    url: str
    feed_item: FeedItem | None = None
    html: str | None = None
    fetch_failed: bool = False


class ExtractionStrategy(Protocol):
    """One pipeline phase."""

    name: str
    method: ExtractionMethod

    def enabled(self, options: PipelineOptions, ctx: ExtractionContext) -> bool: ...

    async def extract(self, ctx: ExtractionContext) -> ExtractedContent | None: ...


def image_options(options: PipelineOptions) -> dict:
    """process_images() keyword arguments from pipeline options."""
    return {
        "max_images": options.max_images,
        "min_width": options.min_width,
        "min_height": options.min_height,
        "prefer_high_quality": options.prefer_high_quality,
    }


class HtmlStrategy:
    """Fetch the page, then run the structured/container/heuristic extractor.

    The fetched HTML is kept on the context for later phases; a failed
    fetch is recorded so no later phase fetches the same page again.
    """

    name = "html"
    method = ExtractionMethod.HTML

    def __init__(self, fetcher: Fetcher, options: PipelineOptions) -> None:
        self.fetcher = fetcher
        self.options = options
        self.extractor = HtmlExtractor(
            include_images=options.include_images,
            sanitize_content=options.sanitize_content,
            max_content_length=options.max_content_length,
            image_options=image_options(options),
        )

    def enabled(self, options: PipelineOptions, ctx: ExtractionContext) -> bool:
        return True

    async def extract(self, ctx: ExtractionContext) -> ExtractedContent | None:
        try:
            ctx.html = await self.fetcher.fetch(
                ctx.url,
                timeout_seconds=self.options.timeout_seconds,
                max_retries=self.options.max_retries,
            )
        except NetworkError:
            ctx.fetch_failed = True
            raise
        # Parsing is CPU-bound; keep it off the event loop
        return await asyncio.to_thread(self.extractor.extract, ctx.html, ctx.url)


class FeedStrategy:
    """Content from caller-supplied feed metadata. No network access."""

    name = "rss"
    method = ExtractionMethod.RSS

    def __init__(self, options: PipelineOptions) -> None:
        self.options = options

    def enabled(self, options: PipelineOptions, ctx: ExtractionContext) -> bool:
        return options.fallback_to_rss and ctx.feed_item is not None

    async def extract(self, ctx: ExtractionContext) -> ExtractedContent | None:
        return extract_from_feed(
            ctx.feed_item,
            ctx.url,
            include_images=self.options.include_images,
            sanitize_content=self.options.sanitize_content,
            max_content_length=self.options.max_content_length,
            image_options=image_options(self.options),
        )


class BrowserAutomationStrategy:
    """Extension point for headless-browser rendering. Produces no result yet."""

    name = "browser"
    method = ExtractionMethod.BROWSER

    def enabled(self, options: PipelineOptions, ctx: ExtractionContext) -> bool:
        return options.use_browser_automation

    async def extract(self, ctx: ExtractionContext) -> ExtractedContent | None:
        logger.debug("Browser automation is not available; skipping %s", ctx.url)
        return None


class LibraryExtractionStrategy:
    """trafilatura over the HTML already fetched by the HTML phase."""

    name = "api"
    method = ExtractionMethod.API

    def __init__(self, options: PipelineOptions) -> None:
        self.options = options

    def enabled(self, options: PipelineOptions, ctx: ExtractionContext) -> bool:
        return options.use_api_extraction and bool(ctx.html)

    async def extract(self, ctx: ExtractionContext) -> ExtractedContent | None:
        return await extract_with_library(
            ctx.html,
            ctx.url,
            include_images=self.options.include_images,
            max_content_length=self.options.max_content_length,
        )


class GenerativeStrategy:
    """Extension point for generated summaries ("ai-generated"). Produces no result yet."""

    name = "ai"
    method = ExtractionMethod.AI_GENERATED

    def enabled(self, options: PipelineOptions, ctx: ExtractionContext) -> bool:
        return options.use_ai_generation

    async def extract(self, ctx: ExtractionContext) -> ExtractedContent | None:
        logger.debug("No generative backend configured; skipping %s", ctx.url)
        return None


def default_strategies(fetcher: Fetcher, options: PipelineOptions) -> list[ExtractionStrategy]:
    """HTML, feed, browser, library, generative: the fixed phase order."""
    return [
        HtmlStrategy(fetcher, options),
        FeedStrategy(options),
        BrowserAutomationStrategy(),
        LibraryExtractionStrategy(options),
        GenerativeStrategy(),
    ]
