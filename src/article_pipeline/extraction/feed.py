"""Article content built purely from caller-supplied feed metadata."""

from article_pipeline.extraction.fields import clean_field, parse_date
from article_pipeline.formatting.sanitizer import sanitize_text
from article_pipeline.images.extractor import feed_image_candidates, process_images
from article_pipeline.models.content import ExtractedContent, ExtractionMethod, FeedItem

FEED_CONFIDENCE = 0.7


def extract_from_feed(
    feed_item: FeedItem,
    url: str,
    *,
    include_images: bool = True,
    sanitize_content: bool = True,
    max_content_length: int | None = None,
    image_options: dict | None = None,
) -> ExtractedContent:
    """Build ExtractedContent from a feed item. Never fetches.

    content is the feed's full body (content, then contentEncoded), else the
    description. The result is successful whenever it has a title or body.
    """
    description = feed_item.description or feed_item.summary or ""
    body = feed_item.body or feed_item.summary or ""

    if sanitize_content:
        description = sanitize_text(description)
        body = sanitize_text(body, max_content_length)

    images: list[str] = []
    if include_images:
        ranked = process_images(feed_image_candidates(feed_item), url, **(image_options or {}))
        images = [img.url for img in ranked]

    title = clean_field(feed_item.title)
    return ExtractedContent(
        title=title,
        description=description,
        content=body,
        images=images,
        author=clean_field(feed_item.byline) or None,
        published_at=parse_date(feed_item.pub_date),
        source=clean_field(feed_item.source) or None,
        success=bool(title or body),
        extraction_method=ExtractionMethod.RSS,
        confidence=FEED_CONFIDENCE,
    )
