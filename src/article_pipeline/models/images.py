"""Image candidate model."""

from enum import Enum

from pydantic import BaseModel


class ImageSource(str, Enum):
    """Where an image candidate was found."""

    FEED = "feed"
    HTML = "html"
    STRUCTURED = "structured"
    FALLBACK = "fallback"


class ImageQuality(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class ImageInfo(BaseModel):
    """A validated image candidate. Identity is the URL."""

    url: str
    source: ImageSource
    quality: ImageQuality = ImageQuality.LOW
    width: int | None = None
    height: int | None = None
    alt: str | None = None
    is_valid: bool = True

    @property
    def area(self) -> int:
        """Pixel area, 0 when either dimension is unknown."""
        return (self.width or 0) * (self.height or 0)
