"""Article images: candidate gathering, ranking, and deterministic fallbacks."""

from article_pipeline.images.bank import detect_category, fnv1a_32, select_fallback_image
from article_pipeline.images.extractor import (
    create_responsive_image_set,
    feed_image_candidates,
    get_best_image,
    html_image_candidates,
    image_quality,
    is_valid_image_url,
    process_images,
    supplementary_image_candidates,
    text_image_candidates,
)

__all__ = [
    "create_responsive_image_set",
    "detect_category",
    "feed_image_candidates",
    "fnv1a_32",
    "get_best_image",
    "html_image_candidates",
    "image_quality",
    "is_valid_image_url",
    "process_images",
    "select_fallback_image",
    "supplementary_image_candidates",
    "text_image_candidates",
]
