"""Utility to download a policy page by URL and extract its text content."""

import asyncio
import logging
import re
from typing import Awaitable, Callable

import httpx
from bs4 import BeautifulSoup
from playwright.async_api import async_playwright

from polai.core.config import Settings
from polai.core.errors import FetchError
from polai.utils.url_utils import normalize_url

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "max-age=0",
}

# Tried in order; the first one holding a substantial amount of text wins.
CONTENT_SELECTORS = (
    "main",
    '[role="main"]',
    ".privacy-policy",
    ".privacy-content",
    ".policy-content",
    "#privacy-policy",
    "#privacy",
    ".legal-content",
    ".terms-content",
    "article",
    ".content",
    ".main-content",
    ".page-content",
    ".container",
    "#content",
)
MIN_SECTION_CHARS = 500

_NON_CONTENT_TAGS = ["script", "style", "nav", "header", "footer", "iframe", "noscript", "svg"]


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def html_to_text(html: str) -> str:
    """
    Extract the policy body from HTML as plain text with normalized whitespace.
    Removes scripts, navigation and other non-content elements, then prefers the
    main content region over the whole body.
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()

    for selector in CONTENT_SELECTORS:
        elements = soup.select(selector)
        if not elements:
            continue
        text = _collapse(" ".join(el.get_text(separator=" ") for el in elements))
        if len(text) > MIN_SECTION_CHARS:
            return text

    root = soup.body or soup
    return _collapse(root.get_text(separator=" "))


async def fetch_page_content(url: str, *, use_browser: bool = False, timeout: float = 30.0) -> str:
    """
    Download the page at the given URL and return its text (no HTML tags).

    If use_browser is True, uses a headless Chromium browser so JavaScript-rendered
    content is included. Otherwise uses a plain HTTP request.

    Raises httpx.HTTPError on HTTP errors when use_browser is False.
    Raises playwright-specific errors when use_browser is True.
    """
    if use_browser:
        raw = await _fetch_with_browser(url, timeout)
    else:
        raw = await _fetch_with_httpx(url, timeout)
    return html_to_text(raw)


async def _fetch_with_httpx(url: str, timeout: float) -> str:
    async with httpx.AsyncClient(
        follow_redirects=True, headers=BROWSER_HEADERS, timeout=timeout
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.text


async def _fetch_with_browser(url: str, timeout: float) -> str:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            page = await browser.new_page()
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)
            try:
                await page.wait_for_load_state("networkidle", timeout=10_000)
            except Exception:
                logger.debug("networkidle timed out for %s, proceeding with current content", url)
            return await page.content()
        finally:
            await browser.close()


class PolicyFetcher:
    """Fetches policy text for a URL, retrying with linear backoff."""

    def __init__(
        self,
        *,
        retries: int = 3,
        timeout: float = 30.0,
        min_chars: int = 100,
        use_browser: bool = False,
        backoff_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.retries = retries
        self.timeout = timeout
        self.min_chars = min_chars
        self.use_browser = use_browser
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "PolicyFetcher":
        return cls(
            retries=settings.fetch_retries,
            timeout=settings.fetch_timeout_seconds,
            min_chars=settings.fetch_min_chars,
            use_browser=settings.fetch_use_browser,
        )

    async def fetch(self, url: str) -> str:
        """
        Return the policy text at *url*.
        Raises InvalidInputError for a malformed URL and FetchError once every attempt failed.
        """
        normalized_url = normalize_url(url)
        logger.info("Extracting policy from: %s", normalized_url)

        for attempt in range(1, self.retries + 1):
            try:
                text = await fetch_page_content(
                    normalized_url, use_browser=self.use_browser, timeout=self.timeout
                )
                if len(text) < self.min_chars:
                    raise FetchError("No substantial policy text found")
                logger.info("Extracted %d characters", len(text))
                return text
            except Exception as e:
                logger.warning("Attempt %d/%d failed: %s", attempt, self.retries, e)
                if attempt == self.retries:
                    raise FetchError(
                        f"Failed to extract policy after {self.retries} attempts: {e}"
                    ) from e
                await self._sleep(self.backoff_seconds * attempt)

        raise FetchError("No fetch attempts configured")
