"""URL parsing utilities."""

import re

import httpx
import tldextract

from polai.core.errors import InvalidInputError

# Bundled public-suffix snapshot only; never fetch the list at runtime.
_extract = tldextract.TLDExtract(suffix_list_urls=())

_SCHEME_PREFIX = re.compile(r"^(https?://\s*)+", re.IGNORECASE)


def normalize_url(url: str | None) -> str:
    """
    Return an absolute https URL for user input such as ``example.com/privacy``.
    Repeated or space-padded scheme prefixes collapse into a single ``https://``.
    Raises InvalidInputError when the URL is missing or cannot be parsed.
    """
    if not url or not url.strip():
        raise InvalidInputError("URL is required")

    clean_url = _SCHEME_PREFIX.sub("https://", url.strip())
    if not clean_url.startswith("http"):
        clean_url = "https://" + clean_url

    try:
        parsed = httpx.URL(clean_url)
    except httpx.InvalidURL as e:
        raise InvalidInputError(f"Invalid URL: {clean_url}") from e
    if not parsed.host or " " in parsed.host:
        raise InvalidInputError(f"Invalid URL: {clean_url}")
    return str(parsed)


def get_domain(url: str) -> str:
    """
    Return the registered (root) domain from a URL, stripping subdomains.
    Examples:
        https://example.com/path          -> example.com
        https://policies.google.com/terms -> google.com
        https://sub.example.co.uk:443/    -> example.co.uk
    """
    ext = _extract(url)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}"
    return ext.domain or ""


def package_to_domain(package_name: str) -> str:
    """
    Guess the publisher's domain from an Android package name.
    Examples:
        com.spotify.music   -> spotify.com
        uk.co.bbc.iplayer   -> bbc.co.uk
    """
    parts = [part for part in package_name.strip().split(".") if part]
    return get_domain(".".join(reversed(parts)))
