"""Tests for the TTL result cache."""

from article_pipeline.models.content import ExtractionMethod
from article_pipeline.models.pipeline import PipelineResult
from article_pipeline.models.quality import ContentQuality, ContentScore, FallbackStrategy, QualityLevel
from article_pipeline.pipeline.cache import ResultCache


def _result(title: str = "T") -> PipelineResult:
    return PipelineResult(
        title=title,
        content="c",
        extraction_method=ExtractionMethod.RSS,
        score=ContentScore(),
        quality=ContentQuality(
            level=QualityLevel.MINIMAL,
            confidence=0.0,
            fallback_strategy=FallbackStrategy.EXTERNAL_LINK,
        ),
    )


def test_get_returns_stored_result(clock):
    cache = ResultCache(ttl=60, clock=clock)
    result = _result()
    cache.set("k", result)
    assert cache.get("k") == result
    assert cache.get("missing") is None


def test_callers_cannot_mutate_cached_results(clock):
    cache = ResultCache(ttl=60, clock=clock)
    result = _result("original")
    cache.set("k", result)

    result.title = "changed after set"
    served = cache.get("k")
    served.images.append("https://x.com/a.jpg")

    again = cache.get("k")
    assert again.title == "original"
    assert again.images == []


def test_entries_expire_after_ttl(clock):
    cache = ResultCache(ttl=60, clock=clock)
    cache.set("k", _result())
    clock.advance(59)
    assert cache.get("k") is not None
    clock.advance(1)
    assert cache.get("k") is None


def test_last_writer_wins(clock):
    cache = ResultCache(ttl=60, clock=clock)
    cache.set("k", _result("first"))
    cache.set("k", _result("second"))
    assert cache.get("k").title == "second"


def test_stats_and_clear(clock):
    cache = ResultCache(ttl=60, clock=clock)
    cache.set("a", _result())
    clock.advance(30)
    cache.set("b", _result())
    assert cache.stats() == {"size": 2, "keys": ["a", "b"]}

    clock.advance(40)
    assert cache.stats() == {"size": 1, "keys": ["b"]}

    cache.clear()
    assert cache.stats() == {"size": 0, "keys": []}


def test_maxsize_bounds_entries(clock):
    cache = ResultCache(ttl=60, maxsize=2, clock=clock)
    for key in ("a", "b", "c"):
        cache.set(key, _result())
    assert cache.stats()["size"] == 2
