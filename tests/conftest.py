"""Shared test fixtures."""

import pytest

from article_pipeline.config import PipelineOptions
from article_pipeline.errors import NetworkError
from helpers import FakeClock


@pytest.fixture
def options() -> PipelineOptions:
    """Default options, independent of ARTICLE_PIPELINE_* environment variables."""
    return PipelineOptions()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timeout_error() -> NetworkError:
    return NetworkError("https://example.com/news/a", "timed out after 15.0s", attempts=3)
