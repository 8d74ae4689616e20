"""Page download with per-attempt timeout and exponential-backoff retry."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from article_pipeline.errors import NetworkError

logger = logging.getLogger(__name__)

# Browser-like headers; many news sites block obvious bots
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}

# Non-2xx responses surface as httpx.HTTPStatusError, a subclass of HTTPError
_RETRYABLE_ERRORS = (httpx.HTTPError, TimeoutError)


class Fetcher(Protocol):
    """Anything that can download a page's HTML."""

    async def fetch(self, url: str, timeout_seconds: float = 15.0, max_retries: int = 3) -> str: ...


class HttpFetcher:
    """httpx-based fetcher.

    Each attempt is bounded by asyncio.timeout(timeout_seconds), so a stalled
    upstream is cancelled rather than awaited. Failed attempts are retried
    after 2^attempt seconds; exhaustion raises NetworkError.

    Args:
        client: Shared AsyncClient. When omitted a client is opened per fetch.
        sleep: Backoff sleep, injectable for tests.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._sleep = sleep

    async def fetch(self, url: str, timeout_seconds: float = 15.0, max_retries: int = 3) -> str:
        attempts = 0
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(_RETRYABLE_ERRORS),
            wait=wait_exponential(multiplier=2),
            stop=stop_after_attempt(max_retries),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    attempts += 1
                    return await self._get(url, timeout_seconds)
        except httpx.HTTPStatusError as exc:
            raise NetworkError(
                url,
                f"HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
                attempts=attempts,
            ) from exc
        except TimeoutError as exc:
            raise NetworkError(url, f"timed out after {timeout_seconds:.1f}s", attempts=attempts) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(url, f"{type(exc).__name__}: {exc}", attempts=attempts) from exc
        raise NetworkError(url, "no fetch attempt was made", attempts=attempts)

    async def _get(self, url: str, timeout_seconds: float) -> str:
        async with asyncio.timeout(timeout_seconds):
            if self._client is not None:
                response = await self._client.get(url, headers=BROWSER_HEADERS)
                response.raise_for_status()
                return response.text
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(timeout_seconds), follow_redirects=True
            ) as client:
                response = await client.get(url, headers=BROWSER_HEADERS)
                response.raise_for_status()
                return response.text
