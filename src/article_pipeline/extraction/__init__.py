"""Article extraction: page HTML, feed metadata, and library-based extraction.

Public API:
    HtmlExtractor(...).extract(html, url) -> ExtractedContent
        Structured data, then known containers, then heuristic block selection.
    extract_from_feed(feed_item, url) -> ExtractedContent
        Content built only from caller-supplied feed metadata.
    extract_with_library(html, url) -> ExtractedContent | None
        trafilatura over already-fetched HTML.
"""

from article_pipeline.extraction.feed import extract_from_feed
from article_pipeline.extraction.html import HtmlExtractor
from article_pipeline.extraction.library import extract_with_library
from article_pipeline.extraction.sources import get_source_config
from article_pipeline.extraction.structured import extract_structured_data

__all__ = [
    "extract_from_feed",
    "extract_structured_data",
    "extract_with_library",
    "get_source_config",
    "HtmlExtractor",
]
