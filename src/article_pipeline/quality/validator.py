"""Content scoring: turns a candidate's fields into a ContentScore.

Scoring never raises. Missing or empty fields score toward zero.
"""

import re
from datetime import datetime

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict

from article_pipeline.models.content import ExtractedContent
from article_pipeline.models.quality import ContentScore

COMPLETE_THRESHOLD = 0.7


class ConfidenceWeights(BaseModel):
    """Weights of the overall-confidence blend. Override to re-tune scoring."""

    model_config = ConfigDict(frozen=True)

    text: float = 0.4
    structure: float = 0.25
    readability: float = 0.15
    required: float = 0.2
    optional: float = 0.1
    image_bonus: float = 0.05
    image_bonus_saturation: int = 5  # Image count that earns the full bonus


DEFAULT_WEIGHTS = ConfidenceWeights()

_TAG = re.compile(r"<[^>]*>")
_PARAGRAPH = re.compile(r"<p[\s>]", re.IGNORECASE)
_HEADING = re.compile(r"<h[1-6][\s>]", re.IGNORECASE)
_LIST = re.compile(r"<(ul|ol)[\s>]", re.IGNORECASE)
_DIV = re.compile(r"<div[\s>]", re.IGNORECASE)
_IMG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_LINK = re.compile(r"<a\b[^>]*href[^>]*>", re.IGNORECASE)
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


def clean_text(content: str) -> str:
    """Visible text of content with markup removed, whitespace-trimmed."""
    if not content:
        return ""
    return BeautifulSoup(content, "html.parser").get_text().strip()


def structure_quality(content: str, text_length: int) -> float:
    """Weighted markup indicators plus text density and length bonuses, capped at 1."""
    if text_length == 0:
        return 0.0

    score = 0.0
    if _PARAGRAPH.search(content):
        score += 0.3
    if _HEADING.search(content):
        score += 0.2
    if _LIST.search(content):
        score += 0.1
    if _DIV.search(content):
        score += 0.1

    # Text-to-tag density; pages full of empty wrappers score low
    ratio = text_length / max(len(_TAG.findall(content)), 1)
    if ratio > 50:
        score += 0.2
    elif ratio > 20:
        score += 0.1

    if text_length > 1000:
        score += 0.1
    elif text_length > 500:
        score += 0.05

    return min(score, 1.0)


def readability_score(text: str) -> float:
    """Rewards moderate sentence and word length, several paragraphs, and 100+ words."""
    if not text:
        return 0.0

    words = text.split()
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    paragraphs = [p for p in _PARAGRAPH_SPLIT.split(text) if p.strip()]
    if not words or not sentences:
        return 0.0

    words_per_sentence = len(words) / len(sentences)
    chars_per_word = len(text) / len(words)

    score = 0.0
    if 10 <= words_per_sentence <= 20:
        score += 0.4
    elif 5 <= words_per_sentence <= 30:
        score += 0.2

    if 4 <= chars_per_word <= 6:
        score += 0.3
    elif 3 <= chars_per_word <= 8:
        score += 0.15

    if len(paragraphs) >= 3:
        score += 0.2
    elif len(paragraphs) >= 2:
        score += 0.1

    if len(words) >= 100:
        score += 0.1

    return min(score, 1.0)


def overall_confidence(
    *,
    text_length: int,
    image_count: int,
    structure: float,
    readability: float,
    required_present: int,
    optional_present: int,
    min_text_length: int = 200,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
) -> float:
    """Blend of text, structure, readability, field-presence, and image factors, capped at 1."""
    text_factor = min(text_length / max(min_text_length, 1), 2) / 2
    confidence = (
        text_factor * weights.text
        + structure * weights.structure
        + readability * weights.readability
        + (required_present / 2) * weights.required
        + (optional_present / 4) * weights.optional
    )
    if image_count > 0:
        confidence += min(image_count / weights.image_bonus_saturation, 1) * weights.image_bonus
    return min(confidence, 1.0)


def validate_content(
    content: str,
    title: str | None,
    description: str | None,
    author: str | None = None,
    published_at: datetime | str | None = None,
    images: list[str] | None = None,
    *,
    min_text_length: int = 200,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
) -> ContentScore:
    """Score a candidate's completeness.

    image_count counts the images list plus <img> tags embedded in content.
    """
    content = content or ""
    text = clean_text(content)
    text_length = len(text)
    image_count = len(images or []) + len(_IMG.findall(content))

    has_title = bool(title)
    has_description = bool(description)
    has_author = bool(author)
    has_publish_date = published_at is not None
    has_images = image_count > 0
    has_links = bool(_LINK.search(content))

    structure = structure_quality(content, text_length)
    readability = readability_score(text)
    confidence = overall_confidence(
        text_length=text_length,
        image_count=image_count,
        structure=structure,
        readability=readability,
        required_present=sum((has_title, has_description)),
        optional_present=sum((has_author, has_publish_date, has_images, has_links)),
        min_text_length=min_text_length,
        weights=weights,
    )

    return ContentScore(
        text_length=text_length,
        image_count=image_count,
        structure_quality=structure,
        readability_score=readability,
        overall_confidence=confidence,
        has_title=has_title,
        has_description=has_description,
        has_author=has_author,
        has_publish_date=has_publish_date,
        has_images=has_images,
        has_links=has_links,
        is_complete=confidence >= COMPLETE_THRESHOLD,
    )


def score_extracted(
    extracted: ExtractedContent,
    *,
    min_text_length: int = 200,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
) -> ContentScore:
    """validate_content() over an ExtractedContent's fields."""
    return validate_content(
        extracted.content,
        extracted.title,
        extracted.description,
        extracted.author,
        extracted.published_at,
        extracted.images,
        min_text_length=min_text_length,
        weights=weights,
    )


def is_content_valid(score: ContentScore, strict_mode: bool = False, min_text_length: int = 200) -> bool:
    """Minimum acceptance check.

    Strict mode requires confidence >= 0.8, at least min_text_length characters,
    and a title. Otherwise confidence >= 0.3 and a title suffice.
    """
    if strict_mode:
        return (
            score.overall_confidence >= 0.8
            and score.text_length >= min_text_length
            and score.has_title
        )
    return score.overall_confidence >= 0.3 and score.has_title
