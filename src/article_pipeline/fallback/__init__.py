"""Fallback rendering: strategy-specific blocks that always produce a usable result."""

from article_pipeline.fallback.generator import (
    MINIMAL_CONFIDENCE,
    Summarizer,
    TruncatingSummarizer,
    generate_fallback,
    minimal_block,
)

__all__ = [
    "generate_fallback",
    "MINIMAL_CONFIDENCE",
    "minimal_block",
    "Summarizer",
    "TruncatingSummarizer",
]
