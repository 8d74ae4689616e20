"""URL helpers: cache-key normalization, relative resolution, and display fallbacks."""

import re
from urllib.parse import parse_qs, unquote, urlencode, urljoin, urlparse, urlunparse

from url_normalize import url_normalize

_SLUG_SEPARATORS = re.compile(r"[-_+]+")
_FILE_SUFFIX = re.compile(r"\.(html?|php|aspx?)$", re.IGNORECASE)


def normalize_url(raw_url: str) -> str:
    """Normalize a URL for use as a cache key.

    Strips utm_* tracking parameters, then applies protocol, host-case and
    trailing-slash normalization via url-normalize. Other query parameters
    are kept since they can select different articles.
    """
    parsed = urlparse(raw_url.strip())
    params = parse_qs(parsed.query, keep_blank_values=True)
    filtered = {k: v for k, v in params.items() if not k.startswith("utm_")}
    clean_query = urlencode(filtered, doseq=True)
    cleaned = urlunparse(parsed._replace(query=clean_query, fragment=""))
    return url_normalize(cleaned)


def resolve_url(candidate: str, base_url: str) -> str:
    """Resolve a possibly relative URL against the article URL.

    Protocol-relative URLs (//cdn.example.com/a.jpg) become https.
    """
    candidate = candidate.strip()
    if candidate.startswith("//"):
        return "https:" + candidate
    return urljoin(base_url, candidate)


def origin_of(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def hostname_of(url: str) -> str:
    """Lowercase hostname without a leading www., or "" when unparseable."""
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    return hostname.removeprefix("www.")


def title_from_url(url: str) -> str:
    """Derive a readable title from the last path segment.

    "https://x.com/news/bitcoin-hits-new-high.html" -> "Bitcoin Hits New High".
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return "Article"
    segments = [s for s in path.split("/") if s]
    if not segments:
        return "Article"
    slug = _FILE_SUFFIX.sub("", unquote(segments[-1]))
    words = _SLUG_SEPARATORS.sub(" ", slug).split()
    if not words:
        return "Article"
    return " ".join(word.capitalize() for word in words)


def source_from_url(url: str) -> str:
    """Hostname without www., used as the source name when the page names none."""
    return hostname_of(url) or "Unknown Source"
