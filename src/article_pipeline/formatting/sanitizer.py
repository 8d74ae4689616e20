"""Boilerplate removal and text cleaning over a BeautifulSoup parse tree.

Two variants share one blocklist:
- sanitize_text(): tags stripped entirely, entities decoded, whitespace collapsed.
- sanitize_html(): structural tags kept, boilerplate and unsafe attributes removed.

Sanitizing already-plain text returns it unchanged; a literal "<" or ">" in
text is kept. Entities are decoded once, so "&amp;lt;" becomes "&lt;", not "<".
"""

import re

from bs4 import BeautifulSoup, Comment, Tag

# Elements that never carry article text
_STRIPPED_TAGS = ("script", "style", "noscript", "template", "iframe", "form", "svg")

# Tag names treated as page chrome
_BOILERPLATE_TAGS = frozenset({"nav", "header", "footer", "aside"})

_CONTENT_TAGS = ("article", "main")

# class/id tokens (split on - and _) marking ads, social widgets, comments,
# sidebars, newsletters, and legal/cookie notices
_BOILERPLATE_TOKENS = frozenset(
    {
        "ad",
        "ads",
        "advert",
        "advertisement",
        "banner",
        "sponsored",
        "promo",
        "promotion",
        "social",
        "share",
        "sharing",
        "comments",
        "comment",
        "discussion",
        "replies",
        "sidebar",
        "widget",
        "related",
        "recommended",
        "suggested",
        "newsletter",
        "subscribe",
        "signup",
        "cookie",
        "privacy",
        "consent",
        "legal",
        "disclaimer",
        "terms",
        "menu",
        "navigation",
        "breadcrumb",
    }
)

# Tags kept by the browser-reading variant; anything else is unwrapped
_STRUCTURAL_TAGS = frozenset(
    {
        "article", "section", "div", "span", "p", "br", "hr",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li", "blockquote", "pre", "code",
        "a", "img", "picture", "source", "figure", "figcaption",
        "strong", "em", "b", "i", "u", "sup", "sub",
        "table", "thead", "tbody", "tr", "th", "td",
    }
)
_ALLOWED_ATTRS = frozenset({"href", "src", "srcset", "alt", "title"})

_TOKEN_SPLIT = re.compile(r"[-_\s]+")

ELLIPSIS = "..."


def _tokens(tag: Tag) -> set[str]:
    values = list(tag.get("class") or [])
    tag_id = tag.get("id")
    if tag_id:
        values.append(tag_id)
    tokens: set[str] = set()
    for value in values:
        tokens.update(t for t in _TOKEN_SPLIT.split(value.lower()) if t)
    return tokens


def is_boilerplate(tag: Tag) -> bool:
    """True for navigation/header/footer/aside elements and blocklisted class/id tokens.

    Article and main elements, and wrappers around them, are never boilerplate
    regardless of their class names.
    """
    if tag.name in _BOILERPLATE_TAGS:
        return True
    if tag.name in _CONTENT_TAGS or not _tokens(tag) & _BOILERPLATE_TOKENS:
        return False
    return tag.find(_CONTENT_TAGS) is None


def strip_boilerplate(soup: BeautifulSoup) -> BeautifulSoup:
    """Remove scripts, styles, comments, and boilerplate elements in place."""
    for node in soup.find_all(string=lambda s: isinstance(s, Comment)):
        node.extract()
    for tag in soup.find_all(_STRIPPED_TAGS):
        if not tag.decomposed:
            tag.decompose()
    for tag in soup.find_all(True):
        # Children of an already removed element are gone with it
        if tag.decomposed or tag.name in ("html", "body"):
            continue
        if is_boilerplate(tag):
            tag.decompose()
    return soup


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def truncate(text: str, max_length: int | None) -> str:
    """Cut text to at most max_length characters, ending with an ellipsis marker."""
    if not max_length or len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)].rstrip() + ELLIPSIS


def sanitize_text(content: str, max_length: int | None = None) -> str:
    """Plain-text variant: boilerplate removed, tags stripped, entities decoded."""
    if not content:
        return ""
    soup = strip_boilerplate(BeautifulSoup(content, "html.parser"))
    # get_text() decodes entities exactly once; a literal "<" in text survives
    return truncate(collapse_whitespace(soup.get_text(" ")), max_length)


def sanitize_html(content: str) -> str:
    """Browser-reading variant: structural markup kept, boilerplate removed.

    Attributes other than href/src/srcset/alt/title are dropped and
    non-structural tags are unwrapped (their text is kept).
    """
    if not content:
        return ""
    soup = strip_boilerplate(BeautifulSoup(content, "html.parser"))
    for tag in soup.find_all(True):
        if tag.name not in _STRUCTURAL_TAGS:
            tag.unwrap()
            continue
        for attr in list(tag.attrs):
            if attr not in _ALLOWED_ATTRS:
                del tag[attr]
        href = tag.get("href")
        if href and href.strip().lower().startswith("javascript:"):
            del tag["href"]
    return collapse_whitespace(str(soup))
