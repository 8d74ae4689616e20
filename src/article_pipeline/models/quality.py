"""Content scoring and quality assessment models."""

from enum import Enum

from pydantic import BaseModel, Field


class QualityLevel(str, Enum):
    """Assessed quality of a candidate, best first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    MINIMAL = "minimal"

    @property
    def rank(self) -> int:
        """Ordinal used to compare candidates (higher is better)."""
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    QualityLevel.HIGH: 3,
    QualityLevel.MEDIUM: 2,
    QualityLevel.LOW: 1,
    QualityLevel.MINIMAL: 0,
}


class FallbackStrategy(str, Enum):
    """Rendering mode chosen for a given quality level."""

    FULL_CONTENT = "full-content"
    ENHANCED_PREVIEW = "enhanced-preview"
    VISUAL_CARD = "visual-card"
    EXTERNAL_LINK = "external-link"


class ContentScore(BaseModel):
    """Measured completeness of a candidate. is_complete means overall_confidence >= 0.7."""

    text_length: int = 0
    image_count: int = 0
    structure_quality: float = Field(default=0.0, ge=0.0, le=1.0)
    readability_score: float = Field(default=0.0, ge=0.0, le=1.0)
    overall_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    has_title: bool = False
    has_description: bool = False
    has_author: bool = False
    has_publish_date: bool = False
    has_images: bool = False
    has_links: bool = False
    is_complete: bool = False


class ContentQuality(BaseModel):
    """Quality level and fallback strategy derived from a ContentScore.

    issues/recommendations are diagnostics only.
    """

    level: QualityLevel
    confidence: float = Field(ge=0.0, le=1.0)
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    fallback_strategy: FallbackStrategy
