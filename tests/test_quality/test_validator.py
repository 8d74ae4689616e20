"""Tests for content scoring."""

from datetime import datetime

import pytest

from article_pipeline.models.content import ExtractedContent, ExtractionMethod
from article_pipeline.models.quality import ContentScore
from article_pipeline.quality.validator import (
    ConfidenceWeights,
    clean_text,
    is_content_valid,
    overall_confidence,
    readability_score,
    score_extracted,
    structure_quality,
    validate_content,
)
from helpers import SENTENCE, article_body


def test_empty_content_scores_zero():
    """Missing data scores toward zero; nothing raises."""
    score = validate_content("", None, None)
    assert score.overall_confidence == 0.0
    assert score.text_length == 0
    assert score.has_title is False
    assert score.is_complete is False


def test_clean_text_strips_markup():
    assert clean_text("  <p>Hello <b>world</b></p>  ") == "Hello world"
    assert clean_text("") == ""


def test_structure_quality_markup_indicators():
    html = "<div><h2>Heading</h2><p>" + "x" * 600 + "</p><ul><li>item</li></ul></div>"
    # p .3 + h .2 + list .1 + div .1 + density (>50 chars per tag) .2 + length (>500) .05
    assert structure_quality(html, len(clean_text(html))) == pytest.approx(0.95)


def test_structure_quality_no_text():
    assert structure_quality("<div></div>", 0) == 0.0


def test_readability_rewards_moderate_sentences():
    text = article_body(10)
    # 17 words/sentence .4, ~4.9 chars/word .3, single paragraph 0, 100+ words .1
    assert readability_score(text) == pytest.approx(0.8)


def test_readability_paragraph_bonus():
    text = "\n\n".join([SENTENCE] * 3)
    # 3 paragraphs .2, fewer than 100 words
    assert readability_score(text) == pytest.approx(0.9)


def test_readability_empty():
    assert readability_score("") == 0.0
    assert readability_score("...") == 0.0


def test_overall_confidence_blend():
    confidence = overall_confidence(
        text_length=400,
        image_count=5,
        structure=1.0,
        readability=1.0,
        required_present=2,
        optional_present=4,
    )
    assert confidence == 1.0


def test_overall_confidence_custom_weights():
    weights = ConfidenceWeights(text=1.0, structure=0, readability=0, required=0, optional=0, image_bonus=0)
    confidence = overall_confidence(
        text_length=100,
        image_count=0,
        structure=0,
        readability=0,
        required_present=0,
        optional_present=0,
        min_text_length=200,
        weights=weights,
    )
    assert confidence == 0.25


def test_validate_full_article():
    """An 800+ character structured body with metadata and an image is high confidence."""
    score = validate_content(
        article_body(10),
        "Bitcoin Climbs",
        "Funds keep buying.",
        "Jane Doe",
        datetime(2024, 3, 1),
        ["https://cdn.example.com/a.jpg"],
    )
    assert score.text_length == 829
    assert score.has_title and score.has_description and score.has_author and score.has_publish_date
    assert score.image_count == 1
    assert score.overall_confidence == pytest.approx(0.8675)
    assert score.is_complete is True


def test_validate_counts_embedded_images_and_links():
    content = '<p>Text <img src="a.jpg"> and <a href="https://x.com">link</a></p>'
    score = validate_content(content, "T", None, images=["https://x.com/b.jpg"])
    assert score.image_count == 2
    assert score.has_links is True


def test_validate_confidence_in_range():
    content = "<div><h1>H</h1>" + "<p>" + article_body(30) + "</p>" * 5 + "</div>"
    score = validate_content(content, "T", "D", "A", "2024-01-01", ["u"] * 10)
    assert 0.0 <= score.overall_confidence <= 1.0


def test_score_extracted_uses_all_fields():
    extracted = ExtractedContent(
        title="T",
        description="D",
        content=article_body(3),
        author="A",
        extraction_method=ExtractionMethod.RSS,
    )
    score = score_extracted(extracted)
    assert score.has_title and score.has_description and score.has_author
    assert score.has_publish_date is False


def test_is_content_valid_modes():
    loose = ContentScore(overall_confidence=0.3, text_length=50, has_title=True)
    assert is_content_valid(loose) is True
    assert is_content_valid(loose, strict_mode=True) is False

    strict = ContentScore(overall_confidence=0.8, text_length=200, has_title=True)
    assert is_content_valid(strict, strict_mode=True) is True

    untitled = ContentScore(overall_confidence=0.95, text_length=2000, has_title=False)
    assert is_content_valid(untitled) is False
    assert is_content_valid(untitled, strict_mode=True) is False
