"""Shared route dependencies."""

from functools import lru_cache
from typing import Awaitable, Callable

from fastapi import Depends

from polai.analysis.pipeline import AnalysisPipeline
from polai.core.config import Settings, get_settings
from polai.utils.app_lookup import find_app_privacy_policy
from polai.utils.fetch_page import PolicyFetcher

AppPolicyLocator = Callable[[str], Awaitable[str | None]]


@lru_cache
def get_pipeline() -> AnalysisPipeline:
    """Pipeline for the configured provider, built once per process."""
    return AnalysisPipeline.from_settings(get_settings())


def get_fetcher(settings: Settings = Depends(get_settings)) -> PolicyFetcher:
    return PolicyFetcher.from_settings(settings)


def get_app_locator() -> AppPolicyLocator:
    return find_app_privacy_policy
