"""Locate an Android app's privacy policy from its package name."""

import logging
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from polai.utils.fetch_page import BROWSER_HEADERS
from polai.utils.url_utils import package_to_domain

logger = logging.getLogger(__name__)

PLAY_STORE_BASE = "https://play.google.com"
PLAY_STORE_DETAILS = PLAY_STORE_BASE + "/store/apps/details?id={package}"


def _policy_link(html: str) -> str | None:
    soup = BeautifulSoup(html, "html.parser")
    for keyword in ("privacy", "policy"):
        link = soup.select_one(f'a[href*="{keyword}"]')
        if link is not None and link.get("href"):
            return urljoin(PLAY_STORE_BASE, link["href"])
    return None


def candidate_policy_urls(package_name: str) -> list[str]:
    """Common policy locations on the publisher's own domain."""
    domain = package_to_domain(package_name)
    if not domain:
        return []
    return [
        f"https://{domain}/privacy",
        f"https://{domain}/privacy-policy",
        f"https://www.{domain}/privacy",
    ]


async def find_app_privacy_policy(
    package_name: str,
    *,
    timeout: float = 10.0,
    probe_timeout: float = 3.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str | None:
    """
    Return the privacy policy URL for *package_name*, or None if none can be found.
    Checks the Play Store listing first, then probes common URLs on the publisher domain.
    """
    async with httpx.AsyncClient(
        headers=BROWSER_HEADERS, follow_redirects=True, transport=transport
    ) as client:
        try:
            response = await client.get(
                PLAY_STORE_DETAILS.format(package=package_name), timeout=timeout
            )
            response.raise_for_status()
            link = _policy_link(response.text)
            if link:
                return link
        except httpx.HTTPError as e:
            logger.warning("Play Store lookup failed for %s: %s", package_name, e)

        for url in candidate_policy_urls(package_name):
            try:
                response = await client.head(url, timeout=probe_timeout)
                response.raise_for_status()
            except httpx.HTTPError:
                continue
            return url

    logger.info("No privacy policy found for %s", package_name)
    return None
