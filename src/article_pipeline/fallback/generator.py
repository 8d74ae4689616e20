"""Pure functions building renderable fallback blocks for each quality tier.

generate_fallback() dispatches on the assessed fallback strategy:

    full-content      article block with a "Full Article" indicator
    enhanced-preview  summarized description, first image, outbound link
    visual-card       hero image (or a category placeholder) with overlay text
    external-link     title/description plus one call-to-action naming the source
    minimal           bare title/description/link when no title is available

All text and URLs are HTML-escaped. generate_fallback() never raises: any
failure while building a block falls through to the minimal block.
"""

import logging
from datetime import datetime
from html import escape
from typing import Protocol

from article_pipeline.images.bank import select_fallback_image
from article_pipeline.models.content import ExtractionMethod
from article_pipeline.models.pipeline import FallbackContent
from article_pipeline.models.quality import ContentQuality, ContentScore, FallbackStrategy
from article_pipeline.quality.assessor import content_quality_badge

logger = logging.getLogger(__name__)

MINIMAL_CONFIDENCE = 0.1
MINIMAL_TITLE = "Article"
UNAVAILABLE_DESCRIPTION = "Content unavailable"
SUMMARY_LENGTH = 200

REASON_FULL_CONTENT = "High confidence content"
REASON_ENHANCED_PREVIEW = "Partial content with enhanced preview"
REASON_VISUAL_CARD = "Visual content with minimal text"
REASON_EXTERNAL_LINK = "Minimal content, external link required"
REASON_MINIMAL = "Minimal fallback - last resort"

_BADGE_CLASS = {
    "Full Article": "quality-high",
    "Summary": "quality-medium",
    "Preview": "quality-low",
    "External Link": "quality-minimal",
}


class Summarizer(Protocol):
    """Produces the short text shown in an enhanced preview."""

    def summarize(self, title: str, description: str) -> str: ...


class TruncatingSummarizer:
    """Length-bounded truncation; stands in until a generative summarizer exists."""

    def __init__(self, max_length: int = SUMMARY_LENGTH) -> None:
        self.max_length = max_length

    def summarize(self, title: str, description: str) -> str:
        if len(description) > self.max_length:
            return description[: self.max_length] + "..."
        return description


def _format_date(published_at: datetime) -> str:
    return f"{published_at:%B} {published_at.day}, {published_at.year}"


def _meta_line(author: str | None, published_at: datetime | None, source: str | None) -> str:
    parts = []
    if author:
        parts.append(f'<span class="author">By {escape(author)}</span>')
    if published_at:
        parts.append(f'<span class="date">{_format_date(published_at)}</span>')
    if source:
        parts.append(f'<span class="source">{escape(source)}</span>')
    return "".join(parts)


def _quality_indicator(confidence: float) -> str:
    badge = content_quality_badge(confidence)
    return (
        '<div class="content-quality-indicator">'
        f'<span class="quality-badge {_BADGE_CLASS[badge]}">{badge}</span>'
        f'<span class="confidence-score">{round(confidence * 100)}% confidence</span>'
        "</div>"
    )


def _link(url: str, label: str, css_class: str) -> str:
    return (
        f'<a href="{escape(url, quote=True)}" target="_blank" rel="noopener noreferrer" '
        f'class="{css_class}">{escape(label)}</a>'
    )


def full_content_block(
    url: str,
    title: str,
    description: str,
    score: ContentScore,
    *,
    extraction_method: ExtractionMethod,
    author: str | None = None,
    source: str | None = None,
    published_at: datetime | None = None,
    images: list[str] | None = None,
) -> FallbackContent:
    confidence = score.overall_confidence
    html = (
        '<div class="article-content">'
        '<header class="article-header">'
        f'<h1 class="article-title">{escape(title)}</h1>'
        f'<div class="article-meta">{_meta_line(author, published_at, source)}</div>'
        "</header>"
        '<div class="article-body">'
        f'<div class="article-description"><p>{escape(description)}</p></div>'
        f"{_quality_indicator(confidence)}"
        "</div>"
        "</div>"
    )
    return FallbackContent(
        strategy=FallbackStrategy.FULL_CONTENT,
        content=html,
        title=title,
        description=description,
        author=author,
        source=source,
        published_at=published_at,
        images=list(images or []),
        confidence=confidence,
        fallback_reason=REASON_FULL_CONTENT,
        extraction_method=extraction_method,
    )


def enhanced_preview_block(
    url: str,
    title: str,
    description: str,
    score: ContentScore,
    *,
    summarizer: Summarizer | None = None,
    author: str | None = None,
    source: str | None = None,
    published_at: datetime | None = None,
    images: list[str] | None = None,
) -> FallbackContent:
    images = list(images or [])
    summary = (summarizer or TruncatingSummarizer()).summarize(title, description)
    confidence = score.overall_confidence
    image_html = ""
    if images:
        image_html = (
            '<div class="preview-images">'
            f'<img src="{escape(images[0], quote=True)}" alt="{escape(title, quote=True)}" class="preview-image" />'
            "</div>"
        )
    html = (
        '<div class="enhanced-preview">'
        '<header class="preview-header">'
        f'<h1 class="preview-title">{escape(title)}</h1>'
        f'<div class="preview-meta">{_meta_line(author, published_at, source)}</div>'
        "</header>"
        '<div class="preview-content">'
        f'<div class="preview-description"><p>{escape(summary)}</p></div>'
        f"{image_html}"
        '<div class="preview-actions">'
        f'{_link(url, "Read Full Article", "read-more-btn")}'
        f"{_quality_indicator(confidence)}"
        "</div>"
        "</div>"
        "</div>"
    )
    return FallbackContent(
        strategy=FallbackStrategy.ENHANCED_PREVIEW,
        content=html,
        title=title,
        description=summary,
        author=author,
        source=source,
        published_at=published_at,
        images=images,
        confidence=confidence,
        fallback_reason=REASON_ENHANCED_PREVIEW,
        extraction_method=ExtractionMethod.FALLBACK,
    )


def visual_card_block(
    url: str,
    title: str,
    description: str,
    score: ContentScore,
    *,
    use_fallback_images: bool = True,
    author: str | None = None,
    source: str | None = None,
    published_at: datetime | None = None,
    images: list[str] | None = None,
) -> FallbackContent:
    """Hero card. Without a real image, a title-keyed category placeholder is used."""
    images = list(images or [])
    hero = images[0] if images else (select_fallback_image(title) if use_fallback_images else None)
    confidence = score.overall_confidence
    image_html = ""
    if hero:
        image_html = f'<img src="{escape(hero, quote=True)}" alt="{escape(title, quote=True)}" class="hero-image" />'
    html = (
        '<div class="visual-card">'
        '<div class="card-image">'
        f"{image_html}"
        '<div class="image-overlay"><div class="overlay-content">'
        f'<h1 class="card-title">{escape(title)}</h1>'
        f'<p class="card-description">{escape(description)}</p>'
        "</div></div>"
        "</div>"
        '<div class="card-content">'
        f'<div class="card-meta">{_meta_line(author, published_at, source)}</div>'
        '<div class="card-actions">'
        f'{_link(url, "Read Full Story", "card-btn primary")}'
        '<button type="button" class="card-btn secondary">Save for Later</button>'
        "</div>"
        f"{_quality_indicator(confidence)}"
        "</div>"
        "</div>"
    )
    return FallbackContent(
        strategy=FallbackStrategy.VISUAL_CARD,
        content=html,
        title=title,
        description=description,
        author=author,
        source=source,
        published_at=published_at,
        images=[hero] if hero else [],
        confidence=confidence,
        fallback_reason=REASON_VISUAL_CARD,
        extraction_method=ExtractionMethod.VISUAL,
    )


def external_link_block(
    url: str,
    title: str,
    description: str,
    score: ContentScore,
    *,
    author: str | None = None,
    source: str | None = None,
    published_at: datetime | None = None,
    images: list[str] | None = None,
) -> FallbackContent:
    confidence = score.overall_confidence
    label = f"Continue reading on {source or 'original source'}"
    html = (
        '<div class="external-link-card">'
        '<div class="link-header">'
        f'<h1 class="link-title">{escape(title)}</h1>'
        f'<div class="link-meta">{_meta_line(author, published_at, source)}</div>'
        "</div>"
        '<div class="link-content">'
        f'<p class="link-description">{escape(description)}</p>'
        '<div class="link-actions">'
        f'{_link(url, label, "external-link-btn")}'
        "</div>"
        f"{_quality_indicator(confidence)}"
        "</div>"
        "</div>"
    )
    return FallbackContent(
        strategy=FallbackStrategy.EXTERNAL_LINK,
        content=html,
        title=title,
        description=description,
        author=author,
        source=source,
        published_at=published_at,
        images=list(images or []),
        confidence=confidence,
        fallback_reason=REASON_EXTERNAL_LINK,
        extraction_method=ExtractionMethod.FALLBACK,
    )


def minimal_block(
    url: str,
    title: str | None = None,
    description: str | None = None,
    *,
    author: str | None = None,
    source: str | None = None,
    published_at: datetime | None = None,
    images: list[str] | None = None,
) -> FallbackContent:
    """Last-resort block. Confidence is pinned to 0.1."""
    title = title or MINIMAL_TITLE
    description = description or UNAVAILABLE_DESCRIPTION
    html = (
        '<div class="minimal-fallback">'
        f'<h1 class="fallback-title">{escape(title)}</h1>'
        f'<p class="fallback-description">{escape(description)}</p>'
        f'{_link(url, "View Original Article", "fallback-link")}'
        f"{_quality_indicator(MINIMAL_CONFIDENCE)}"
        "</div>"
    )
    return FallbackContent(
        strategy=None,
        content=html,
        title=title,
        description=description,
        author=author,
        source=source,
        published_at=published_at,
        images=list(images or []),
        confidence=MINIMAL_CONFIDENCE,
        fallback_reason=REASON_MINIMAL,
        extraction_method=ExtractionMethod.FALLBACK,
    )


def generate_fallback(
    url: str,
    title: str | None,
    description: str | None,
    score: ContentScore,
    quality: ContentQuality,
    *,
    author: str | None = None,
    source: str | None = None,
    published_at: datetime | None = None,
    images: list[str] | None = None,
    extraction_method: ExtractionMethod = ExtractionMethod.FALLBACK,
    summarizer: Summarizer | None = None,
    use_visual_fallbacks: bool = True,
) -> FallbackContent:
    """Build the block for quality.fallback_strategy. Never raises.

    extraction_method is the producing phase, reported by the full-content block.
    Without a title the minimal block is returned.
    """
    metadata = {"author": author, "source": source, "published_at": published_at, "images": images}
    if not title:
        return minimal_block(url, title, description, **metadata)

    description = description or ""
    try:
        strategy = quality.fallback_strategy
        if strategy == FallbackStrategy.FULL_CONTENT:
            return full_content_block(
                url, title, description, score, extraction_method=extraction_method, **metadata
            )
        if strategy == FallbackStrategy.ENHANCED_PREVIEW:
            return enhanced_preview_block(url, title, description, score, summarizer=summarizer, **metadata)
        if strategy == FallbackStrategy.VISUAL_CARD:
            return visual_card_block(
                url, title, description, score, use_fallback_images=use_visual_fallbacks, **metadata
            )
        return external_link_block(url, title, description, score, **metadata)
    except Exception:
        logger.exception("Fallback block generation failed for %s, using minimal block", url)
        return minimal_block(url, title, description, **metadata)
