"""Tests for JSON-LD and microdata article recovery."""

import json

import pytest
from bs4 import BeautifulSoup

from article_pipeline.errors import ParseError
from article_pipeline.extraction.structured import decode_json_ld, extract_structured_data


def _soup_with_json_ld(*blocks: str) -> BeautifulSoup:
    scripts = "".join(f'<script type="application/ld+json">{block}</script>' for block in blocks)
    return BeautifulSoup(f"<html><head>{scripts}</head><body></body></html>", "html.parser")


def test_decode_json_ld_malformed_raises_parse_error():
    with pytest.raises(ParseError):
        decode_json_ld("{not json")


def test_news_article_fields():
    data = {
        "@type": "NewsArticle",
        "headline": "  Bitcoin   climbs ",
        "description": "Funds buy.",
        "articleBody": "Body text.",
        "author": [{"@type": "Person", "name": "Jane Doe"}, {"name": "John Roe"}],
        "datePublished": "2024-03-01T10:00:00Z",
        "publisher": {"name": "Example News"},
        "image": ["https://x.com/a.jpg", {"url": "https://x.com/b.jpg"}],
    }
    article = extract_structured_data(_soup_with_json_ld(json.dumps(data)))
    assert article.title == "Bitcoin climbs"
    assert article.description == "Funds buy."
    assert article.content == "Body text."
    assert article.author == "Jane Doe"
    assert article.published_at.year == 2024
    assert article.source == "Example News"
    assert article.images == ["https://x.com/a.jpg", "https://x.com/b.jpg"]


def test_malformed_block_is_skipped():
    """A broken JSON-LD script does not hide a later valid one."""
    good = json.dumps({"@type": "Article", "headline": "Valid"})
    article = extract_structured_data(_soup_with_json_ld("{broken", good))
    assert article.title == "Valid"


def test_graph_and_type_lists():
    data = {
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "WebPage", "name": "Page"},
            {"@type": ["Article", "NewsArticle"], "headline": "From graph", "author": "Alice"},
        ],
    }
    article = extract_structured_data(_soup_with_json_ld(json.dumps(data)))
    assert article.title == "From graph"
    assert article.author == "Alice"


def test_non_article_json_ld_ignored():
    data = {"@type": "Organization", "name": "Example"}
    assert extract_structured_data(_soup_with_json_ld(json.dumps(data))) is None


def test_microdata_article():
    html = """
    <div itemscope itemtype="https://schema.org/NewsArticle">
      <h1 itemprop="headline">Micro headline</h1>
      <span itemprop="author">Bob</span>
      <time itemprop="datePublished" datetime="2024-02-02">Feb 2</time>
      <img itemprop="image" src="https://x.com/m.jpg">
      <div itemprop="articleBody"><p>Micro body.</p></div>
    </div>
    """
    article = extract_structured_data(BeautifulSoup(html, "html.parser"))
    assert article.title == "Micro headline"
    assert article.author == "Bob"
    assert article.published_at.day == 2
    assert article.images == ["https://x.com/m.jpg"]
    assert "Micro body." in article.content


def test_invalid_date_is_none():
    data = {"@type": "Article", "headline": "T", "datePublished": "not a date"}
    article = extract_structured_data(_soup_with_json_ld(json.dumps(data)))
    assert article.published_at is None
