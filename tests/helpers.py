"""Test helpers: fake fetcher, fake clock, and article builders."""

import json

# 17 words, about 4.9 characters per word including spacing
SENTENCE = "The price of bitcoin rose as big funds and new buyers came in to the market today."


def article_body(sentences: int = 10) -> str:
    return " ".join([SENTENCE] * sentences)


def news_article_html(
    body: str | None = None,
    *,
    headline: str = "Bitcoin Climbs As Funds Buy",
    image: str | None = "https://cdn.example.com/images/hero-large.jpg",
) -> str:
    """Page whose JSON-LD NewsArticle carries the full article body."""
    data = {
        "@context": "https://schema.org",
        "@type": "NewsArticle",
        "headline": headline,
        "description": "Funds keep buying bitcoin.",
        "author": {"@type": "Person", "name": "Jane Doe"},
        "datePublished": "2024-03-01T10:00:00Z",
        "publisher": {"@type": "Organization", "name": "Example News"},
        "articleBody": article_body() if body is None else body,
    }
    if image:
        data["image"] = image
    return (
        "<html><head><title>Example</title>"
        f'<script type="application/ld+json">{json.dumps(data)}</script>'
        "</head><body><nav>Home | Markets</nav><p>Teaser</p></body></html>"
    )


class FakeFetcher:
    """Fetcher returning canned HTML (or raising) and recording every call."""

    def __init__(self, html: str | None = None, error: Exception | None = None) -> None:
        self.html = html
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, url: str, timeout_seconds: float = 15.0, max_retries: int = 3) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html or ""


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


