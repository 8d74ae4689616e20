"""Generic content extraction via trafilatura over already-fetched HTML."""

import asyncio

from trafilatura import bare_extraction

from article_pipeline.extraction.fields import parse_date
from article_pipeline.formatting.sanitizer import truncate
from article_pipeline.models.content import ExtractedContent, ExtractionMethod

LIBRARY_CONFIDENCE = 0.75


async def extract_with_library(
    html: str,
    url: str,
    *,
    include_images: bool = True,
    max_content_length: int | None = None,
) -> ExtractedContent | None:
    """Run trafilatura's bare_extraction on page HTML.

    The sync trafilatura call is wrapped in asyncio.to_thread() to avoid
    blocking the event loop. Returns None when trafilatura finds no document.
    """
    doc = await asyncio.to_thread(bare_extraction, html, url=url, with_metadata=True)
    if doc is None:
        return None

    # Map trafilatura Document fields to ExtractedContent
    text = doc.text or ""
    image = getattr(doc, "image", None)
    return ExtractedContent(
        title=doc.title or "",
        description=doc.description or "",
        content=truncate(text, max_content_length),
        images=[image] if include_images and image else [],
        author=doc.author or None,
        published_at=parse_date(doc.date),
        source=doc.sitename or doc.hostname or None,
        success=bool(text),
        extraction_method=ExtractionMethod.API,
        confidence=LIBRARY_CONFIDENCE,
    )
