"""Derive reading metadata from extracted content.

format_content() cleans a piece of content (plain-text or browser variant)
and derives title, description, excerpt, word count, reading time,
language, and whether the content embeds images or links.
"""

import json
import math
import re

from bs4 import BeautifulSoup

from article_pipeline.formatting.sanitizer import (
    ELLIPSIS,
    collapse_whitespace,
    sanitize_html,
    sanitize_text,
)
from article_pipeline.models.pipeline import FormattedContent

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 300
UNTITLED = "Untitled Article"

# Small fixed stop-word sets; the language with the most hits wins
_STOP_WORDS: dict[str, frozenset[str]] = {
    "en": frozenset({"the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"}),
    "es": frozenset({"el", "la", "de", "que", "y", "a", "en", "un", "es", "se", "no", "te", "lo"}),
    "fr": frozenset({"le", "de", "et", "à", "un", "il", "être", "en", "avoir", "que", "pour"}),
    "de": frozenset({"der", "die", "und", "in", "den", "von", "zu", "das", "mit", "sich", "des", "auf"}),
    "it": frozenset({"il", "di", "e", "a", "da", "in", "con", "per", "su", "dal", "della", "del"}),
}

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_NON_WORD = re.compile(r"[^\w\s]")
_BACKGROUND_IMAGE = re.compile(r"background-image\s*:\s*url\(", re.IGNORECASE)


def count_words(text: str) -> int:
    return len(_NON_WORD.sub(" ", text).split())


def reading_time(word_count: int) -> int:
    """Minutes to read at 200 words per minute, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def detect_language(text: str) -> str:
    """Guess a language code from stop-word frequency; "en" when nothing matches."""
    words = text.lower().split()
    scores = {lang: sum(1 for w in words if w in stop) for lang, stop in _STOP_WORDS.items()}
    best = max(scores, key=lambda lang: scores[lang])
    return best if scores[best] > 0 else "en"


def create_excerpt(text: str, max_length: int = EXCERPT_LENGTH) -> str:
    """Whole sentences up to max_length characters, with an ellipsis when shortened."""
    excerpt = ""
    for sentence in _SENTENCE_SPLIT.split(text):
        sentence = sentence.strip()
        if not sentence:
            continue
        if len(excerpt) + len(sentence) >= max_length:
            break
        excerpt = f"{excerpt}. {sentence}" if excerpt else sentence
    if not excerpt:
        excerpt = text[:max_length].rstrip()
    if len(excerpt) < len(text):
        excerpt += ELLIPSIS
    return excerpt


def _structured_headline(soup: BeautifulSoup) -> str | None:
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = json.loads(script.string or "")
        except ValueError:
            continue
        items = data if isinstance(data, list) else [data]
        for item in items:
            if isinstance(item, dict) and isinstance(item.get("headline"), str):
                return item["headline"]
    node = soup.find(attrs={"itemprop": "headline"})
    if node:
        return node.get("content") or node.get_text(" ")
    return None


def extract_title(soup: BeautifulSoup, text: str) -> str:
    """Primary heading, structured headline, document title, then the first plausible line."""
    h1 = soup.find("h1")
    candidates = [
        h1.get_text(" ") if h1 else None,
        _structured_headline(soup),
        soup.title.get_text(" ") if soup.title else None,
    ]
    for candidate in candidates:
        if candidate and candidate.strip():
            return collapse_whitespace(candidate)

    for line in text.splitlines():
        line = line.strip()
        if 10 < len(line) < 200:
            return line
        if line:
            break
    return UNTITLED


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag and tag.get("content", "").strip():
        return collapse_whitespace(tag["content"])
    return None


def extract_description(soup: BeautifulSoup, text: str) -> str:
    """Meta description, Open Graph description, first paragraph, then truncated body."""
    for attrs in ({"name": "description"}, {"property": "og:description"}):
        found = _meta_content(soup, **attrs)
        if found:
            return found

    paragraphs = [collapse_whitespace(p.get_text(" ")) for p in soup.find_all("p")]
    if not paragraphs:
        paragraphs = [collapse_whitespace(block) for block in re.split(r"\n\s*\n", text)]
    for paragraph in paragraphs:
        if paragraph:
            if 50 < len(paragraph) < 500:
                return paragraph
            break

    cleaned = collapse_whitespace(text)
    return cleaned[:200] + ELLIPSIS if len(cleaned) > 200 else cleaned


def format_content(
    content: str,
    *,
    max_length: int = 10_000,
    browser_view: bool = False,
) -> FormattedContent:
    """Clean content and derive its reading metadata.

    browser_view keeps structural markup in the returned content; otherwise
    the content is plain text. Metrics are always computed on plain text.
    """
    soup = BeautifulSoup(content or "", "html.parser")
    raw_text = soup.get_text("\n")

    title = extract_title(soup, raw_text)
    description = extract_description(soup, raw_text)

    plain = sanitize_text(content, max_length)
    cleaned = sanitize_html(content) if browser_view else plain
    words = count_words(plain)

    return FormattedContent(
        title=title,
        description=description,
        content=cleaned,
        excerpt=create_excerpt(plain) if plain else "",
        word_count=words,
        reading_time=reading_time(words),
        language=detect_language(plain) if plain else None,
        has_images=bool(soup.find(["img", "picture"]) or _BACKGROUND_IMAGE.search(content or "")),
        has_links=bool(soup.find("a", href=True)),
    )
