"""Content quality: completeness scoring and level/strategy assessment."""

from article_pipeline.quality.assessor import (
    DEFAULT_THRESHOLDS,
    QualityThresholds,
    assess_quality,
    content_quality_badge,
    quality_level,
)
from article_pipeline.quality.validator import (
    DEFAULT_WEIGHTS,
    ConfidenceWeights,
    is_content_valid,
    score_extracted,
    validate_content,
)

__all__ = [
    "assess_quality",
    "ConfidenceWeights",
    "content_quality_badge",
    "DEFAULT_THRESHOLDS",
    "DEFAULT_WEIGHTS",
    "is_content_valid",
    "QualityThresholds",
    "quality_level",
    "score_extracted",
    "validate_content",
]
