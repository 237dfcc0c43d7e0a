"""Application utilities."""

from polai.utils.app_lookup import find_app_privacy_policy
from polai.utils.fetch_page import PolicyFetcher, fetch_page_content, html_to_text
from polai.utils.url_utils import get_domain, normalize_url, package_to_domain

__all__ = [
    "PolicyFetcher",
    "fetch_page_content",
    "find_app_privacy_policy",
    "get_domain",
    "html_to_text",
    "normalize_url",
    "package_to_domain",
]
