"""Map a ContentScore to a quality level and fallback strategy.

The mapping is a fixed threshold table evaluated top-down:

    confidence >= 0.8 and text >= 500             -> high / full-content
    confidence >= 0.6 and text >= 200             -> medium / enhanced-preview
    confidence >= 0.3 and (text >= 100 or images) -> low / visual-card
    otherwise                                     -> minimal / external-link

Issues and recommendations are diagnostics only; nothing branches on them.
"""

from pydantic import BaseModel, ConfigDict

from article_pipeline.models.quality import (
    ContentQuality,
    ContentScore,
    FallbackStrategy,
    QualityLevel,
)


class QualityThresholds(BaseModel):
    """Threshold table for assess_quality(). Override to re-tune levels."""

    model_config = ConfigDict(frozen=True)

    high_confidence: float = 0.8
    high_text_length: int = 500
    medium_confidence: float = 0.6
    medium_text_length: int = 200
    low_confidence: float = 0.3
    low_text_length: int = 100
    short_content: int = 200  # Below this a "Content too short" issue is reported


DEFAULT_THRESHOLDS = QualityThresholds()

_STRATEGY_FOR_LEVEL = {
    QualityLevel.HIGH: FallbackStrategy.FULL_CONTENT,
    QualityLevel.MEDIUM: FallbackStrategy.ENHANCED_PREVIEW,
    QualityLevel.LOW: FallbackStrategy.VISUAL_CARD,
    QualityLevel.MINIMAL: FallbackStrategy.EXTERNAL_LINK,
}


def quality_level(score: ContentScore, thresholds: QualityThresholds = DEFAULT_THRESHOLDS) -> QualityLevel:
    confidence = score.overall_confidence
    if confidence >= thresholds.high_confidence and score.text_length >= thresholds.high_text_length:
        return QualityLevel.HIGH
    if confidence >= thresholds.medium_confidence and score.text_length >= thresholds.medium_text_length:
        return QualityLevel.MEDIUM
    if confidence >= thresholds.low_confidence and (
        score.text_length >= thresholds.low_text_length or score.image_count > 0
    ):
        return QualityLevel.LOW
    return QualityLevel.MINIMAL


def _diagnostics(score: ContentScore, thresholds: QualityThresholds) -> tuple[list[str], list[str]]:
    issues: list[str] = []
    recommendations: list[str] = []
    if not score.has_title:
        issues.append("Missing title")
        recommendations.append("Extract title from HTML or use description as fallback")
    if score.text_length < thresholds.short_content:
        issues.append("Content too short")
        recommendations.append("Try browser automation or AI content generation")
    if score.image_count == 0:
        issues.append("No images found")
        recommendations.append("Add fallback images or visual elements")
    if not score.has_description:
        issues.append("No description available")
        recommendations.append("Generate description from content or use title")
    return issues, recommendations


def assess_quality(score: ContentScore, thresholds: QualityThresholds = DEFAULT_THRESHOLDS) -> ContentQuality:
    """Assess a score. Deterministic: equal scores always yield equal assessments."""
    level = quality_level(score, thresholds)
    issues, recommendations = _diagnostics(score, thresholds)
    return ContentQuality(
        level=level,
        confidence=score.overall_confidence,
        issues=issues,
        recommendations=recommendations,
        fallback_strategy=_STRATEGY_FOR_LEVEL[level],
    )


def content_quality_badge(confidence: float) -> str:
    """Display label for a confidence value."""
    if confidence >= 0.8:
        return "Full Article"
    if confidence >= 0.6:
        return "Summary"
    if confidence >= 0.3:
        return "Preview"
    return "External Link"
