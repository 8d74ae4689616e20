"""Tests for fallback block generation."""

from datetime import datetime
from unittest.mock import patch

import pytest

from article_pipeline.fallback.generator import (
    MINIMAL_CONFIDENCE,
    REASON_ENHANCED_PREVIEW,
    REASON_EXTERNAL_LINK,
    REASON_FULL_CONTENT,
    REASON_MINIMAL,
    REASON_VISUAL_CARD,
    TruncatingSummarizer,
    generate_fallback,
    minimal_block,
)
from article_pipeline.images.bank import load_image_bank, select_fallback_image
from article_pipeline.models.content import ExtractionMethod
from article_pipeline.models.quality import ContentQuality, ContentScore, FallbackStrategy, QualityLevel

URL = "https://example.com/news/story"

_LEVELS = {
    FallbackStrategy.FULL_CONTENT: QualityLevel.HIGH,
    FallbackStrategy.ENHANCED_PREVIEW: QualityLevel.MEDIUM,
    FallbackStrategy.VISUAL_CARD: QualityLevel.LOW,
    FallbackStrategy.EXTERNAL_LINK: QualityLevel.MINIMAL,
}


def _assessed(strategy: FallbackStrategy, confidence: float) -> tuple[ContentScore, ContentQuality]:
    score = ContentScore(overall_confidence=confidence)
    quality = ContentQuality(level=_LEVELS[strategy], confidence=confidence, fallback_strategy=strategy)
    return score, quality


def test_full_content_block():
    score, quality = _assessed(FallbackStrategy.FULL_CONTENT, 0.87)
    block = generate_fallback(
        URL,
        "Bitcoin Climbs",
        "Funds keep buying.",
        score,
        quality,
        author="Jane Doe",
        source="Example News",
        published_at=datetime(2024, 3, 1),
        extraction_method=ExtractionMethod.HTML,
    )
    assert block.strategy == FallbackStrategy.FULL_CONTENT
    assert block.extraction_method == ExtractionMethod.HTML
    assert block.fallback_reason == REASON_FULL_CONTENT
    assert block.confidence == 0.87
    assert 'class="article-content"' in block.content
    assert "By Jane Doe" in block.content
    assert "March 1, 2024" in block.content
    assert "Full Article" in block.content
    assert "87% confidence" in block.content


def test_enhanced_preview_summarizes_and_links():
    score, quality = _assessed(FallbackStrategy.ENHANCED_PREVIEW, 0.65)
    block = generate_fallback(
        URL, "Title", "x" * 300, score, quality, images=["https://x.com/a.jpg", "https://x.com/b.jpg"]
    )
    assert block.strategy == FallbackStrategy.ENHANCED_PREVIEW
    assert block.extraction_method == ExtractionMethod.FALLBACK
    assert block.fallback_reason == REASON_ENHANCED_PREVIEW
    assert block.description == "x" * 200 + "..."
    assert 'src="https://x.com/a.jpg"' in block.content
    assert "https://x.com/b.jpg" not in block.content
    assert f'href="{URL}"' in block.content
    assert "Read Full Article" in block.content
    assert "Summary" in block.content


def test_enhanced_preview_custom_summarizer():
    class Shouting:
        def summarize(self, title, description):
            return description.upper()

    score, quality = _assessed(FallbackStrategy.ENHANCED_PREVIEW, 0.65)
    block = generate_fallback(URL, "Title", "quiet", score, quality, summarizer=Shouting())
    assert block.description == "QUIET"


def test_truncating_summarizer():
    assert TruncatingSummarizer(5).summarize("t", "abcdefgh") == "abcde..."
    assert TruncatingSummarizer(5).summarize("t", "abc") == "abc"


def test_visual_card_uses_real_image():
    score, quality = _assessed(FallbackStrategy.VISUAL_CARD, 0.4)
    block = generate_fallback(URL, "Bitcoin dips", "d", score, quality, images=["https://x.com/hero.jpg"])
    assert block.strategy == FallbackStrategy.VISUAL_CARD
    assert block.extraction_method == ExtractionMethod.VISUAL
    assert block.fallback_reason == REASON_VISUAL_CARD
    assert block.images == ["https://x.com/hero.jpg"]
    assert "Save for Later" in block.content


def test_visual_card_placeholder_is_deterministic():
    score, quality = _assessed(FallbackStrategy.VISUAL_CARD, 0.4)
    first = generate_fallback(URL, "Bitcoin dips below support", "d", score, quality)
    second = generate_fallback(URL, "Bitcoin dips below support", "d", score, quality)
    assert first.images == second.images == [select_fallback_image("Bitcoin dips below support")]
    assert first.images[0] in load_image_bank()["bitcoin"]


def test_visual_card_without_placeholders():
    score, quality = _assessed(FallbackStrategy.VISUAL_CARD, 0.4)
    block = generate_fallback(URL, "Bitcoin dips", "d", score, quality, use_visual_fallbacks=False)
    assert block.images == []
    assert "<img" not in block.content


def test_external_link_names_source():
    score, quality = _assessed(FallbackStrategy.EXTERNAL_LINK, 0.12)
    block = generate_fallback(URL, "Title", "", score, quality, source="CoinDesk")
    assert block.strategy == FallbackStrategy.EXTERNAL_LINK
    assert block.fallback_reason == REASON_EXTERNAL_LINK
    assert "Continue reading on CoinDesk" in block.content
    assert "External Link" in block.content


def test_external_link_without_source():
    score, quality = _assessed(FallbackStrategy.EXTERNAL_LINK, 0.12)
    block = generate_fallback(URL, "Title", "", score, quality)
    assert "Continue reading on original source" in block.content


@pytest.mark.parametrize("title", [None, ""])
def test_minimal_block_without_title(title):
    score, quality = _assessed(FallbackStrategy.FULL_CONTENT, 0.95)
    block = generate_fallback(URL, title, None, score, quality)
    assert block.strategy is None
    assert block.confidence == MINIMAL_CONFIDENCE
    assert block.fallback_reason == REASON_MINIMAL
    assert block.title == "Article"
    assert block.description == "Content unavailable"
    assert "View Original Article" in block.content


def test_generation_failure_falls_back_to_minimal():
    """generate_fallback never raises."""
    score, quality = _assessed(FallbackStrategy.FULL_CONTENT, 0.9)
    with patch(
        "article_pipeline.fallback.generator.full_content_block", side_effect=RuntimeError("boom")
    ):
        block = generate_fallback(URL, "Title", "Desc", score, quality)
    assert block.strategy is None
    assert block.title == "Title"
    assert block.confidence == MINIMAL_CONFIDENCE


def test_text_and_urls_are_escaped():
    score, quality = _assessed(FallbackStrategy.EXTERNAL_LINK, 0.1)
    block = generate_fallback(
        'https://example.com/a?x="><script>',
        "<script>alert(1)</script>",
        "Tom & Jerry",
        score,
        quality,
    )
    assert "<script>" not in block.content
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in block.content
    assert "Tom &amp; Jerry" in block.content
    assert block.title == "<script>alert(1)</script>"


def test_minimal_block_direct():
    block = minimal_block(URL, "Title", "Desc", source="Example")
    assert block.source == "Example"
    assert 'class="fallback-link"' in block.content
