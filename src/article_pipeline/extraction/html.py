"""Article extraction from page HTML.

Three strategies in fixed priority order, stopping at the first success:

1. Structured data (JSON-LD Article/NewsArticle or microdata)  -> confidence 0.9
2. Known content containers (outlet selectors, then generic)   -> confidence 0.8
3. Heuristic: the block element with the most text             -> confidence 0.6

Every strategy yields ExtractedContent with extraction_method=html. When
structured data exists without an article body, its metadata still fills
the fields of the container or heuristic result.
"""

import logging

from bs4 import BeautifulSoup, Tag

from article_pipeline.extraction.fields import (
    AUTHOR_RULES,
    DATE_RULES,
    DESCRIPTION_RULES,
    MAX_FIELD_LENGTH,
    SOURCE_RULES,
    TITLE_RULES,
    first_date,
    first_match,
    selector_rules,
)
from article_pipeline.extraction.sources import SourceConfig, get_source_config
from article_pipeline.extraction.structured import StructuredArticle, extract_structured_data
from article_pipeline.formatting.sanitizer import sanitize_text, strip_boilerplate
from article_pipeline.images.extractor import html_image_candidates, process_images
from article_pipeline.models.content import ExtractedContent, ExtractionMethod
from article_pipeline.models.images import ImageInfo, ImageSource

logger = logging.getLogger(__name__)

STRUCTURED_CONFIDENCE = 0.9
CONTAINER_CONFIDENCE = 0.8
HEURISTIC_CONFIDENCE = 0.6

# Generic containers, semantic elements first; the bare "content" class pattern is the loosest
CONTAINER_SELECTORS = [
    "article",
    "main",
    '[itemprop="articleBody"]',
    '[class*="article-content"]',
    '[class*="post-content"]',
    '[class*="entry-content"]',
    '[class*="story-body"]',
    '[class*="article-body"]',
    '[class*="post-body"]',
    '[class*="content"]',
]

_BLOCK_TAGS = ("p", "div", "section")


class HtmlExtractor:
    """Extracts an article from fetched HTML.

    Args:
        include_images: Collect and rank page images.
        sanitize_content: Reduce content to plain text; otherwise keep the
            container's markup.
        image_options: Keyword arguments for process_images().
    """

    def __init__(
        self,
        *,
        include_images: bool = True,
        sanitize_content: bool = True,
        max_content_length: int | None = None,
        image_options: dict | None = None,
    ) -> None:
        self.include_images = include_images
        self.sanitize_content = sanitize_content
        self.max_content_length = max_content_length
        self.image_options = image_options or {}

    def extract(self, html: str, url: str) -> ExtractedContent:
        soup = BeautifulSoup(html, "html.parser")
        source_config = get_source_config(url)
        structured = extract_structured_data(soup)

        if structured is not None and structured.content.strip():
            logger.debug("Structured data match for %s", url)
            return self._from_structured(structured, soup, url, source_config)

        # Boilerplate is stripped on a copy so field extractors still see <head> metadata
        body = strip_boilerplate(BeautifulSoup(html, "html.parser"))

        container = self._find_container(body, source_config)
        if container is not None:
            logger.debug("Container match <%s> for %s", container.name, url)
            return self._from_block(
                container, soup, url, source_config, structured, CONTAINER_CONFIDENCE
            )

        block = self._largest_block(body)
        logger.debug("Heuristic extraction for %s", url)
        return self._from_block(block, soup, url, source_config, structured, HEURISTIC_CONFIDENCE)

    def _find_container(self, soup: BeautifulSoup, config: SourceConfig | None) -> Tag | None:
        selectors = (config.content if config else []) + CONTAINER_SELECTORS
        for selector in selectors:
            for element in soup.select(selector):
                if element.get_text(strip=True):
                    return element
        return None

    def _largest_block(self, soup: BeautifulSoup) -> Tag | None:
        best = None
        best_length = 0
        for element in soup.find_all(_BLOCK_TAGS):
            length = len(element.get_text(strip=True))
            if length > best_length:
                best, best_length = element, length
        return best

    def _content_of(self, markup: str) -> str:
        if self.sanitize_content:
            return sanitize_text(markup, self.max_content_length)
        return markup.strip()

    def _images(self, candidates: list[ImageInfo], url: str) -> list[str]:
        if not self.include_images:
            return []
        return [img.url for img in process_images(candidates, url, **self.image_options)]

    def _from_structured(
        self,
        structured: StructuredArticle,
        soup: BeautifulSoup,
        url: str,
        config: SourceConfig | None,
    ) -> ExtractedContent:
        fields = self._fields(soup, soup, config)
        candidates = [ImageInfo(url=u, source=ImageSource.STRUCTURED) for u in structured.images]
        candidates += html_image_candidates(soup)
        return ExtractedContent(
            title=structured.title or fields["title"],
            description=structured.description or fields["description"],
            content=self._content_of(structured.content),
            images=self._images(candidates, url),
            author=structured.author or fields["author"],
            published_at=structured.published_at or fields["published_at"],
            source=structured.source or fields["source"],
            success=True,
            extraction_method=ExtractionMethod.HTML,
            confidence=STRUCTURED_CONFIDENCE,
        )

    def _from_block(
        self,
        block: Tag | None,
        soup: BeautifulSoup,
        url: str,
        config: SourceConfig | None,
        structured: StructuredArticle | None,
        confidence: float,
    ) -> ExtractedContent:
        structured = structured or StructuredArticle()
        content = self._content_of(block.decode_contents()) if block is not None else ""
        fields = self._fields(block if block is not None else soup, soup, config)

        candidates = [ImageInfo(url=u, source=ImageSource.STRUCTURED) for u in structured.images]
        if block is not None:
            candidates += html_image_candidates(block)
        candidates += html_image_candidates(soup)

        return ExtractedContent(
            title=structured.title or fields["title"],
            description=structured.description or fields["description"],
            content=content,
            images=self._images(candidates, url),
            author=structured.author or fields["author"],
            published_at=structured.published_at or fields["published_at"],
            source=structured.source or fields["source"],
            success=bool(content),
            extraction_method=ExtractionMethod.HTML,
            confidence=confidence,
        )

    def _fields(self, scope: BeautifulSoup | Tag, soup: BeautifulSoup, config: SourceConfig | None) -> dict:
        """Title/description/author/date/source via outlet selectors, then generic rules.

        Generic rules look inside the content container first, then the whole page.
        """
        scopes = [scope] if scope is soup else [scope, soup]

        def field(name: str, rules: list, configured: list[str]) -> str:
            limit = MAX_FIELD_LENGTH.get(name)
            value = first_match([soup], selector_rules(configured), limit) if configured else ""
            return value or first_match(scopes, rules, limit)

        published_at = None
        if config and config.published_at:
            published_at = first_date([soup], selector_rules(config.published_at, "datetime"))

        return {
            "title": field("title", TITLE_RULES, config.title if config else []),
            "description": field("description", DESCRIPTION_RULES, config.description if config else []),
            "author": field("author", AUTHOR_RULES, config.author if config else []) or None,
            "published_at": published_at or first_date(scopes, DATE_RULES),
            "source": first_match([soup], SOURCE_RULES, MAX_FIELD_LENGTH["source"])
            or (config.name if config else None),
        }
