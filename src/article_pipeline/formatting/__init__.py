"""Content formatting: boilerplate removal, text cleaning, and reading metadata."""

from article_pipeline.formatting.formatter import (
    count_words,
    create_excerpt,
    detect_language,
    format_content,
    reading_time,
)
from article_pipeline.formatting.sanitizer import (
    is_boilerplate,
    sanitize_html,
    sanitize_text,
    truncate,
)

__all__ = [
    "count_words",
    "create_excerpt",
    "detect_language",
    "format_content",
    "is_boilerplate",
    "reading_time",
    "sanitize_html",
    "sanitize_text",
    "truncate",
]
