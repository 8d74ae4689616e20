"""Structured article metadata: JSON-LD Article/NewsArticle and schema.org microdata."""

import json
import logging
from datetime import datetime
from typing import Any

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from article_pipeline.errors import ParseError
from article_pipeline.extraction.fields import clean_field, parse_date
from article_pipeline.images.extractor import json_ld_image_urls

logger = logging.getLogger(__name__)

ARTICLE_TYPES = frozenset({"Article", "NewsArticle", "ReportageNewsArticle", "AnalysisNewsArticle"})


class StructuredArticle(BaseModel):
    """Article fields recovered from embedded structured data."""

    title: str = ""
    description: str = ""
    content: str = ""
    author: str | None = None
    published_at: datetime | None = None
    source: str | None = None
    images: list[str] = Field(default_factory=list)


def decode_json_ld(raw: str) -> Any:
    """Decode one JSON-LD script body. Raises ParseError on malformed JSON."""
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ParseError(f"Malformed JSON-LD: {exc}") from exc


def _iter_nodes(data: Any):
    """Top-level objects, list members, and @graph members."""
    items = data if isinstance(data, list) else [data]
    for item in items:
        if not isinstance(item, dict):
            continue
        yield item
        graph = item.get("@graph")
        if isinstance(graph, list):
            yield from (node for node in graph if isinstance(node, dict))


def _is_article(node: dict) -> bool:
    node_type = node.get("@type")
    types = node_type if isinstance(node_type, list) else [node_type]
    return any(t in ARTICLE_TYPES for t in types if isinstance(t, str))


def _name_of(value: Any) -> str | None:
    """Name of a person/organization given as a string, an object, or a list of either."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("name")
    if not isinstance(value, str):
        return None
    return clean_field(value) or None


def _text(node: dict, *keys: str) -> str:
    for key in keys:
        value = node.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def _from_json_ld(node: dict) -> StructuredArticle:
    return StructuredArticle(
        title=clean_field(_text(node, "headline", "name")),
        description=clean_field(_text(node, "description")),
        content=_text(node, "articleBody"),
        author=_name_of(node.get("author")),
        published_at=parse_date(_text(node, "datePublished") or None),
        source=_name_of(node.get("publisher")),
        images=json_ld_image_urls(node),
    )


def _from_microdata(soup: BeautifulSoup) -> StructuredArticle | None:
    scope = soup.find(attrs={"itemtype": lambda value: bool(value) and "Article" in value})
    if scope is None:
        return None

    def prop(name: str) -> str:
        element = scope.find(attrs={"itemprop": name})
        if element is None:
            return ""
        return clean_field(element.get("content") or element.get("datetime") or element.get_text(" "))

    body = scope.find(attrs={"itemprop": "articleBody"})
    images = []
    for element in scope.find_all(attrs={"itemprop": "image"}):
        url = element.get("src") or element.get("content") or element.get("href")
        if url:
            images.append(url)

    return StructuredArticle(
        title=prop("headline") or prop("name"),
        description=prop("description"),
        content=body.decode_contents() if body else "",
        author=prop("author") or None,
        published_at=parse_date(prop("datePublished")),
        source=prop("publisher") or None,
        images=images,
    )


def extract_structured_data(soup: BeautifulSoup) -> StructuredArticle | None:
    """First JSON-LD Article/NewsArticle node, else microdata, else None.

    Malformed JSON-LD scripts are skipped.
    """
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = decode_json_ld(script.string or script.get_text())
        except ParseError as exc:
            logger.debug("Skipping JSON-LD block: %s", exc)
            continue
        for node in _iter_nodes(data):
            if _is_article(node):
                return _from_json_ld(node)
    return _from_microdata(soup)
