"""Rate-limited HTTP client for the Justice Laws Website.

- Minimum delay between requests, owned by a RequestScheduler instance
- User-Agent header identifying the project
- Fetches FullText.html pages (the XML endpoint 404s for most Acts)
- No auth needed (Open Government Licence - Canada)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

# HARDCODED ASSUMPTION: URL pattern for consolidated full-text pages
# Source: https://laws-lois.justice.gc.ca/eng/acts/ (follow "Full Document: HTML")
# Format: /{language}/acts/{act_path}/FullText.html, language is "eng" or "fra"
FULL_TEXT_URL_PATTERN = "{base_url}/{language}/acts/{act_path}/FullText.html"


class RequestScheduler:
    """Enforce a minimum interval between request starts.

    One scheduler is shared by every request that should be spaced out;
    independent schedulers do not coordinate.
    """

    def __init__(
        self,
        min_interval: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    async def wait(self) -> float:
        """Wait until the next request may start.

        Returns:
            Seconds slept (0.0 if no wait was needed).
        """
        async with self._lock:
            delay = 0.0
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    await self._sleep(delay)
            self._last_request = self._clock()
            return delay


@dataclass
class FetchResult:
    """Outcome of one page fetch."""

    status: int
    body: str
    content_type: str
    url: str

    @property
    def ok(self) -> bool:
        return self.status == 200


def _is_retryable(status: int) -> bool:
    return status == 429 or status >= 500


class JusticeLawsClient:
    """Client for consolidated Act pages on laws-lois.justice.gc.ca."""

    def __init__(
        self,
        base_url: str = "https://laws-lois.justice.gc.ca",
        user_agent: str = "Canadian-Law-MCP/1.0",
        timeout: float = 60.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        scheduler: RequestScheduler | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the client.

        Args:
            base_url: Site root.
            user_agent: User-Agent header value.
            timeout: HTTP request timeout in seconds.
            max_retries: Retries after the first attempt on 429/5xx.
            retry_delay: Backoff base; retry n waits retry_delay * 2**(n + 1).
            scheduler: Shared request spacing; a 0.5s scheduler if omitted.
            transport: Optional httpx transport (tests use MockTransport).
            sleep: Coroutine used for backoff waits.
        """
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.scheduler = scheduler or RequestScheduler()
        self._transport = transport
        self._sleep = sleep

    @classmethod
    def from_settings(cls) -> JusticeLawsClient:
        """Build a client from app settings (environment / .env)."""
        from app.config import settings

        return cls(
            base_url=settings.justice_base_url,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            scheduler=RequestScheduler(settings.min_request_delay),
        )

    def full_text_url(self, act_path: str, language: str = "eng") -> str:
        """URL of the FullText.html page for an Act chapter (e.g. "P-8.6")."""
        return FULL_TEXT_URL_PATTERN.format(
            base_url=self.base_url, language=language, act_path=act_path
        )

    async def fetch(self, url: str) -> FetchResult:
        """Fetch a URL, retrying 429 and 5xx responses with exponential backoff.

        The last response is returned as-is once retries are exhausted, so
        callers decide what a non-200 status means.

        Raises:
            httpx.RequestError: If the transport keeps failing after all retries.
        """
        await self.scheduler.wait()

        headers = {"User-Agent": self.user_agent, "Accept": "text/html, */*"}
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            for attempt in range(self.max_retries + 1):
                delay = self.retry_delay * (2 ** (attempt + 1))
                try:
                    response = await client.get(url)
                except httpx.RequestError as e:
                    if attempt < self.max_retries:
                        logger.warning(f"Request error for {url}: {e}, retrying in {delay}s")
                        await self._sleep(delay)
                        continue
                    raise

                if _is_retryable(response.status_code) and attempt < self.max_retries:
                    logger.warning(
                        f"HTTP {response.status_code} for {url}, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    await self._sleep(delay)
                    continue

                return FetchResult(
                    status=response.status_code,
                    body=response.text,
                    content_type=response.headers.get("content-type", ""),
                    url=url,
                )

        raise RuntimeError("Unexpected error in retry logic")

    async def fetch_act_full_text(self, act_path: str, language: str = "eng") -> FetchResult:
        """Fetch the complete consolidated text of an Act."""
        return await self.fetch(self.full_text_url(act_path, language))
