"""Per-field sub-extractors: ordered (selector, attribute) rules, first match wins."""

from datetime import datetime

from bs4 import BeautifulSoup, Tag
from dateutil import parser as date_parser

from article_pipeline.formatting.sanitizer import collapse_whitespace

# (css selector, attribute to read or None for element text)
FieldRule = tuple[str, str | None]

TITLE_RULES: list[FieldRule] = [
    ("h1", None),
    ('[itemprop="headline"]', "content"),
    ('[itemprop="headline"]', None),
    ('meta[property="og:title"]', "content"),
    ('meta[name="twitter:title"]', "content"),
    ('[class*="article-title"]', None),
    ('[class*="post-title"]', None),
    ('[class*="headline"]', None),
    ("title", None),
]

DESCRIPTION_RULES: list[FieldRule] = [
    ('meta[name="description"]', "content"),
    ('meta[property="og:description"]', "content"),
    ('[itemprop="description"]', "content"),
    ('[itemprop="description"]', None),
    ('[class*="description"]', None),
    ('[class*="excerpt"]', None),
    ('[class*="summary"]', None),
]

AUTHOR_RULES: list[FieldRule] = [
    ('meta[name="author"]', "content"),
    ('[itemprop="author"] [itemprop="name"]', None),
    ('[itemprop="author"]', "content"),
    ('[itemprop="author"]', None),
    ('[rel="author"]', None),
    ('[class*="author-name"]', None),
    ('[class*="byline"]', None),
    ('[class*="author"]', None),
]

DATE_RULES: list[FieldRule] = [
    ('meta[property="article:published_time"]', "content"),
    ('[itemprop="datePublished"]', "content"),
    ('[itemprop="datePublished"]', "datetime"),
    ("time[datetime]", "datetime"),
    ('[class*="published"]', None),
    ('[class*="date"]', None),
]

SOURCE_RULES: list[FieldRule] = [
    ('meta[property="og:site_name"]', "content"),
    ('[itemprop="publisher"] [itemprop="name"]', "content"),
    ('[itemprop="publisher"] [itemprop="name"]', None),
    ('[class*="site-name"]', None),
]

MAX_FIELD_LENGTH = {"title": 300, "description": 1000, "author": 120, "source": 120}


def clean_field(value: str | None, max_length: int | None = None) -> str:
    if not value:
        return ""
    cleaned = collapse_whitespace(value)
    if max_length and len(cleaned) > max_length:
        cleaned = cleaned[:max_length].rstrip()
    return cleaned


def parse_date(value: str | datetime | None) -> datetime | None:
    """Parse a date string leniently; None when it is not a date."""
    if value is None or isinstance(value, datetime):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError):
        return None


def _read(element: Tag, attribute: str | None) -> str:
    if attribute is None:
        return element.get_text(" ")
    value = element.get(attribute)
    return value if isinstance(value, str) else ""


def first_match(
    scopes: list[BeautifulSoup | Tag],
    rules: list[FieldRule],
    max_length: int | None = None,
) -> str:
    """Try every rule against each scope in order; return the first non-empty value."""
    for scope in scopes:
        for selector, attribute in rules:
            for element in scope.select(selector):
                value = clean_field(_read(element, attribute), max_length)
                if value:
                    return value
    return ""


def first_date(scopes: list[BeautifulSoup | Tag], rules: list[FieldRule]) -> datetime | None:
    for scope in scopes:
        for selector, attribute in rules:
            for element in scope.select(selector):
                parsed = parse_date(_read(element, attribute))
                if parsed is not None:
                    return parsed
    return None


def selector_rules(selectors: list[str], date_attribute: str | None = None) -> list[FieldRule]:
    """Rules for outlet-configured selectors.

    meta tags read their content attribute. With date_attribute, each selector
    tries that attribute first, then the element text.
    """
    rules: list[FieldRule] = []
    for selector in selectors:
        if selector.startswith("meta"):
            rules.append((selector, "content"))
        elif date_attribute:
            rules.append((selector, date_attribute))
            rules.append((selector, None))
        else:
            rules.append((selector, None))
    return rules
