"""Policy analysis routes: single URL, pasted text, batch and app scan."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from polai.analysis.pacing import PacingPolicy
from polai.analysis.pipeline import AnalysisPipeline
from polai.analysis.scoring import calculate_simple_score
from polai.api.deps import AppPolicyLocator, get_app_locator, get_fetcher, get_pipeline
from polai.core.config import Settings, get_settings
from polai.core.errors import InvalidInputError
from polai.utils.fetch_page import PolicyFetcher

router = APIRouter(tags=["analyze"])
logger = logging.getLogger(__name__)

TEXT_SOURCE = "Direct Text Input"


class AnalyzeUrlBody(BaseModel):
    """Request body for analyzing a policy by URL."""

    url: str | None = Field(None, description="Privacy policy URL")


class AnalyzeTextBody(BaseModel):
    """Request body for analyzing pasted or OCR'd policy text."""

    text: str | None = Field(None, description="Plain policy text")


class BatchAnalyzeBody(BaseModel):
    """Request body for analyzing several policy URLs in one request."""

    urls: list[str] | None = Field(None, description="Privacy policy URLs")


class ScanAppBody(BaseModel):
    """Request body for scanning a mobile app's privacy policy."""

    model_config = ConfigDict(populate_by_name=True)

    package_name: str | None = Field(None, alias="packageName", description="Android package name")
    policy_url: str | None = Field(None, alias="policyUrl", description="Known policy URL")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _failure(error: Exception | str, status_code: int = 500, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": str(error), **extra, "timestamp": _timestamp()},
    )


@router.post("/analyze")
async def analyze_url(
    body: AnalyzeUrlBody,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
    fetcher: PolicyFetcher = Depends(get_fetcher),
):
    """Fetch the policy at the given URL and return its structured analysis."""
    if not body.url:
        return _failure("URL is required", status_code=400)
    logger.info("Analysis request: %s", body.url)
    try:
        policy_text = await fetcher.fetch(body.url)
        analysis = await pipeline.analyze(policy_text, body.url)
    except InvalidInputError as e:
        return _failure(e, status_code=400)
    except Exception as e:
        logger.exception("Analysis failed for %s: %s", body.url, e)
        return _failure(e)

    logger.info("Analysis complete for %s", body.url)
    return {
        "success": True,
        "url": body.url,
        "analysis": analysis.to_response(),
        "text_length": len(policy_text),
        "timestamp": _timestamp(),
    }


@router.post("/analyze-text")
async def analyze_text(
    body: AnalyzeTextBody,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    """Analyze policy text supplied directly (e.g. OCR output)."""
    text = body.text or ""
    if len(text.strip()) < settings.min_text_length:
        return _failure(
            f"Text too short. Please provide at least {settings.min_text_length} "
            "characters of policy text.",
            status_code=400,
        )
    logger.info("Text analysis request: %d characters", len(text))
    try:
        analysis = await pipeline.analyze(text, TEXT_SOURCE)
    except Exception as e:
        logger.exception("Text analysis failed: %s", e)
        return _failure(e)

    return {
        "success": True,
        "source": "text",
        "analysis": analysis.to_response(),
        "text_length": len(text),
        "timestamp": _timestamp(),
    }


async def _analyze_batch_item(
    url: str, fetcher: PolicyFetcher, pipeline: AnalysisPipeline
) -> dict:
    try:
        policy_text = await fetcher.fetch(url)
        analysis = await pipeline.analyze(policy_text, url)
    except Exception as e:
        logger.warning("Batch item %s failed: %s", url, e)
        return {"url": url, "success": False, "error": str(e)}
    return {
        "url": url,
        "success": True,
        "analysis": analysis.to_response(),
        "text_length": len(policy_text),
    }


@router.post("/analyze/batch")
async def analyze_batch(
    body: BatchAnalyzeBody,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
    fetcher: PolicyFetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_settings),
):
    """
    Analyze each URL in turn, pausing between items to respect provider rate limits.
    A failing URL is reported in its own slot and does not stop the batch.
    """
    if body.urls is None:
        return _failure("URLs array is required", status_code=400)
    if len(body.urls) > settings.batch_max_urls:
        return _failure(f"Maximum {settings.batch_max_urls} URLs allowed per batch", status_code=400)

    logger.info("Batch analysis: %d URLs", len(body.urls))
    pacing = PacingPolicy(settings.batch_delay_seconds)
    results = []
    for url in body.urls:
        await pacing.wait()
        results.append(await _analyze_batch_item(url, fetcher, pipeline))

    logger.info("Batch analysis complete")
    return {"success": True, "results": results, "timestamp": _timestamp()}


@router.post("/scan-app")
async def scan_app(
    body: ScanAppBody,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
    fetcher: PolicyFetcher = Depends(get_fetcher),
    locate_policy: AppPolicyLocator = Depends(get_app_locator),
):
    """Find and analyze an app's privacy policy and rate it on a 0-100 scale."""
    if not body.package_name and not body.policy_url:
        return _failure("Package name or policy URL required", status_code=400)
    logger.info("App scan request: %s", body.package_name or "Unknown")

    url = body.policy_url
    if not url:
        url = await locate_policy(body.package_name)
        if not url:
            return _failure(
                "Could not find privacy policy for this app",
                status_code=404,
                packageName=body.package_name,
            )

    try:
        policy_text = await fetcher.fetch(url)
        analysis = await pipeline.analyze(policy_text, url)
    except InvalidInputError as e:
        return _failure(e, status_code=400)
    except Exception as e:
        logger.exception("App scan failed for %s: %s", url, e)
        return _failure(e)

    score = calculate_simple_score(analysis)
    logger.info("App scan complete - Score: %d/100", score)
    return {
        "success": True,
        "packageName": body.package_name,
        "url": url,
        "score": score,
        "analysis": analysis.to_response(),
        "timestamp": _timestamp(),
    }
