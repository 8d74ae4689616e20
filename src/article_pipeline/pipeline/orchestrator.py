"""Adaptive extraction pipeline: cache, extraction phases, fallback, cache.

Phases run strictly in order (HTML, feed, browser, library, generative).
The first candidate assessed as high quality short-circuits the run;
otherwise the best candidate goes through the fallback generator, which
always produces a usable result. extract() never raises except for
cancellation.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from article_pipeline.config import PipelineOptions, get_settings
from article_pipeline.errors import PipelineError
from article_pipeline.fallback.generator import (
    MINIMAL_CONFIDENCE,
    Summarizer,
    generate_fallback,
    minimal_block,
)
from article_pipeline.fetcher import Fetcher, HttpFetcher
from article_pipeline.formatting.formatter import format_content
from article_pipeline.formatting.sanitizer import sanitize_text
from article_pipeline.images.extractor import fallback_image, process_images, supplementary_image_candidates
from article_pipeline.models.content import ExtractedContent, ExtractionMethod, ExtractionRequest, FeedItem
from article_pipeline.models.pipeline import FallbackContent, FormattedContent, PipelineResult
from article_pipeline.models.quality import ContentQuality, ContentScore, QualityLevel
from article_pipeline.pipeline.cache import ResultCache
from article_pipeline.pipeline.strategies import (
    ExtractionContext,
    ExtractionStrategy,
    default_strategies,
    image_options,
)
from article_pipeline.quality.assessor import DEFAULT_THRESHOLDS, QualityThresholds, assess_quality
from article_pipeline.quality.validator import (
    DEFAULT_WEIGHTS,
    ConfidenceWeights,
    is_content_valid,
    score_extracted,
)
from article_pipeline.urls import normalize_url, source_from_url, title_from_url

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """One phase's output together with its score and assessment."""

    extracted: ExtractedContent
    score: ContentScore
    quality: ContentQuality

    @property
    def rank(self) -> tuple[int, float]:
        return self.quality.level.rank, self.score.overall_confidence


class ContentPipeline:
    """Turns an article URL (plus optional feed metadata) into a PipelineResult.

    Each instance owns its result cache, so two pipelines never share state.
    clock is used for cache expiry only.
    """

    def __init__(
        self,
        options: PipelineOptions | None = None,
        fetcher: Fetcher | None = None,
        clock: Callable[[], float] | None = None,
        *,
        strategies: list[ExtractionStrategy] | None = None,
        summarizer: Summarizer | None = None,
        weights: ConfidenceWeights = DEFAULT_WEIGHTS,
        thresholds: QualityThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        self.options = options or get_settings().pipeline_options()
        self.fetcher = fetcher or HttpFetcher()
        self.strategies = strategies if strategies is not None else default_strategies(self.fetcher, self.options)
        self.summarizer = summarizer
        self.weights = weights
        self.thresholds = thresholds
        self.cache = ResultCache(
            ttl=self.options.cache_timeout_seconds,
            maxsize=self.options.cache_max_entries,
            clock=clock or time.monotonic,
        )

    async def extract(
        self,
        source_url: str,
        feed_item: FeedItem | dict[str, Any] | None = None,
    ) -> PipelineResult:
        key = _cache_key(source_url)

        if self.options.enable_caching:
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("Cache hit for %s", source_url)
                return cached

        request = ExtractionRequest(source_url=source_url)
        try:
            request = ExtractionRequest(source_url=source_url, feed_item=_coerce_feed_item(feed_item, source_url))
            result = await self._run(request)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Pipeline failed for %s, returning minimal result", source_url)
            result = self._minimal_result(request)

        if self.options.enable_caching:
            self.cache.set(key, result)
        return result

    def clear_cache(self) -> None:
        self.cache.clear()

    async def _run(self, request: ExtractionRequest) -> PipelineResult:
        url, feed = request.source_url, request.feed_item
        ctx = ExtractionContext(url=url, feed_item=feed)
        best: Candidate | None = None

        for strategy in self.strategies:
            if not strategy.enabled(self.options, ctx):
                continue
            extracted = await self._run_phase(strategy, ctx)
            if extracted is None:
                continue

            candidate = self._evaluate(extracted)
            logger.info(
                "Phase %s for %s: level=%s confidence=%.2f",
                strategy.name,
                url,
                candidate.quality.level.value,
                candidate.score.overall_confidence,
            )
            if self.options.strict_mode and not is_content_valid(
                candidate.score, strict_mode=True, min_text_length=self.options.min_text_length
            ):
                logger.info("Discarding %s candidate for %s in strict mode", strategy.name, url)
                continue

            if candidate.quality.level == QualityLevel.HIGH:
                return self._accepted_result(url, feed, candidate)
            if best is None or candidate.rank > best.rank:
                best = candidate

        return await self._fallback_result(ctx, best)

    async def _run_phase(self, strategy: ExtractionStrategy, ctx: ExtractionContext) -> ExtractedContent | None:
        try:
            return await strategy.extract(ctx)
        except asyncio.CancelledError:
            raise
        except PipelineError as exc:
            logger.warning("Phase %s failed for %s: %s", strategy.name, ctx.url, exc)
        except Exception as exc:
            logger.warning("Phase %s crashed for %s: %s", strategy.name, ctx.url, exc, exc_info=True)
        return None

    def _evaluate(self, extracted: ExtractedContent) -> Candidate:
        score = score_extracted(extracted, min_text_length=self.options.min_text_length, weights=self.weights)
        return Candidate(extracted=extracted, score=score, quality=assess_quality(score, self.thresholds))

    def _format(self, content: str) -> FormattedContent:
        return format_content(
            content,
            max_length=self.options.max_content_length,
            browser_view=not self.options.sanitize_content,
        )

    def _accepted_result(
        self,
        url: str,
        feed: FeedItem | None,
        candidate: Candidate,
        *,
        images: list[str] | None = None,
        rendered: FallbackContent | None = None,
    ) -> PipelineResult:
        """Result carrying the candidate's own content and method."""
        extracted = candidate.extracted
        content = extracted.content or (rendered.content if rendered else "") or extracted.description
        fields = extracted.model_dump()
        fields.update(
            title=_display_title(url, feed, extracted),
            content=content,
            images=images if images is not None else extracted.images,
            source=extracted.source or source_from_url(url),
            success=True,
        )
        if not content:
            # Nothing renderable; show the block
            rendered = rendered or generate_fallback(
                url,
                fields["title"],
                extracted.description,
                candidate.score,
                candidate.quality,
                author=extracted.author,
                source=fields["source"],
                published_at=extracted.published_at,
                images=fields["images"],
                extraction_method=extracted.extraction_method,
                summarizer=self.summarizer,
                use_visual_fallbacks=self.options.use_visual_fallbacks,
            )
            fields["content"] = rendered.content
        return PipelineResult(
            **fields,
            score=candidate.score,
            quality=candidate.quality,
            fallback_reason=rendered.fallback_reason if rendered else None,
            formatted=self._format(fields["content"]),
            rendered=rendered,
        )

    async def _fallback_result(self, ctx: ExtractionContext, best: Candidate | None) -> PipelineResult:
        """Terminal phase: render the best candidate (or nothing) through the fallback generator."""
        url = ctx.url
        feed = ctx.feed_item
        extracted = best.extracted if best else None

        images = list(extracted.images) if extracted else []
        if not images and self.options.include_images:
            images = await self._supplementary_images(ctx, extracted)

        if best is not None:
            score, quality = best.score, best.quality
        else:
            score = ContentScore(overall_confidence=MINIMAL_CONFIDENCE)
            quality = assess_quality(score, self.thresholds)

        title = _display_title(url, feed, extracted)
        if not images and self.options.include_images and self.options.use_visual_fallbacks:
            # Attached after scoring, so it never counts toward image_count
            images = [fallback_image(title).url]
        feed_description = (feed.description or "") if feed else ""
        description = (extracted.description if extracted else "") or sanitize_text(feed_description)
        author = (extracted.author if extracted else None) or (feed.byline if feed else None)
        source = (extracted.source if extracted else None) or (feed.source if feed else None) or source_from_url(url)
        published_at = extracted.published_at if extracted else None

        block = generate_fallback(
            url,
            title,
            description,
            score,
            quality,
            author=author,
            source=source,
            published_at=published_at,
            images=images,
            extraction_method=extracted.extraction_method if extracted else ExtractionMethod.FALLBACK,
            summarizer=self.summarizer,
            use_visual_fallbacks=self.options.use_visual_fallbacks,
        )
        logger.info(
            "Fallback for %s: strategy=%s reason=%s",
            url,
            block.strategy.value if block.strategy else "minimal",
            block.fallback_reason,
        )

        if best is not None and best.quality.level != QualityLevel.MINIMAL:
            return self._accepted_result(url, feed, best, images=images, rendered=block)

        return PipelineResult(
            title=block.title,
            description=block.description,
            content=block.content,
            images=block.images,
            author=block.author,
            published_at=block.published_at,
            source=block.source,
            success=False,
            extraction_method=block.extraction_method,
            confidence=block.confidence,
            score=score,
            quality=quality,
            fallback_reason=block.fallback_reason,
            formatted=self._format(block.content),
            rendered=block,
        )

    async def _supplementary_images(self, ctx: ExtractionContext, extracted: ExtractedContent | None) -> list[str]:
        allow_fetch = self.options.enable_direct_image_fetch and ctx.html is None and not ctx.fetch_failed
        text = " ".join(
            part for part in (extracted.content if extracted else None, ctx.feed_item.body if ctx.feed_item else None) if part
        )
        candidates = await supplementary_image_candidates(
            ctx.url,
            fetcher=self.fetcher,
            text=text,
            allow_fetch=allow_fetch,
            timeout_seconds=self.options.timeout_seconds,
        )
        return [img.url for img in process_images(candidates, ctx.url, **image_options(self.options))]

    def _minimal_result(self, request: ExtractionRequest) -> PipelineResult:
        """Last-resort result when the pipeline itself failed unexpectedly."""
        url, feed = request.source_url, request.feed_item
        block = minimal_block(
            url,
            (feed.title if feed else None) or title_from_url(url),
            feed.description if feed else None,
            source=(feed.source if feed else None) or source_from_url(url),
        )
        score = ContentScore(overall_confidence=MINIMAL_CONFIDENCE)
        return PipelineResult(
            title=block.title,
            description=block.description,
            content=block.content,
            source=block.source,
            success=False,
            extraction_method=block.extraction_method,
            confidence=block.confidence,
            score=score,
            quality=assess_quality(score, self.thresholds),
            fallback_reason=block.fallback_reason,
            rendered=block,
        )


def _coerce_feed_item(feed_item: FeedItem | dict[str, Any] | None, url: str) -> FeedItem | None:
    if feed_item is None or isinstance(feed_item, FeedItem):
        return feed_item
    try:
        return FeedItem.model_validate(feed_item)
    except ValidationError as exc:
        logger.warning("Ignoring malformed feed item for %s: %s", url, exc)
        return None


def _cache_key(url: str) -> str:
    try:
        return normalize_url(url)
    except ValueError:
        return url.strip()


def _display_title(url: str, feed: FeedItem | None, extracted: ExtractedContent | None) -> str:
    return (extracted.title if extracted else "") or (feed.title if feed else "") or title_from_url(url)


_default_pipeline: ContentPipeline | None = None


def get_pipeline() -> ContentPipeline:
    """Process-wide pipeline built from Settings. Created on first use."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = ContentPipeline()
    return _default_pipeline


async def extract_article_content(
    source_url: str,
    feed_item: FeedItem | dict[str, Any] | None = None,
    options: PipelineOptions | None = None,
) -> PipelineResult:
    """Run the pipeline for one article.

    Without options the shared pipeline (and its cache) is used; explicit
    options get a dedicated pipeline with its own cache.
    """
    pipeline = ContentPipeline(options=options) if options is not None else get_pipeline()
    return await pipeline.extract(source_url, feed_item)
