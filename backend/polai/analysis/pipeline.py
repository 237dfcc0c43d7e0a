"""Policy analysis pipeline: size policy, chunked analysis and rule-based fallback."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from polai.analysis.chunking import chunk_char_budget, estimate_tokens, split_text
from polai.analysis.merge import merge_chunk_analyses, synthesize_summary
from polai.analysis.models import PartialAnalysis, StructuredAnalysis
from polai.analysis.pacing import PacingPolicy
from polai.analysis.providers import AnalysisProvider, RuleBasedProvider, create_provider
from polai.core.config import Settings
from polai.core.errors import ProviderNotConfiguredError

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Analyze policy text with an LLM provider, falling back to the rule-based analyzer.

    Documents whose estimated token count fits ``max_input_tokens`` go to the provider
    in one call. Larger ones are split into chunks that are analyzed one after another,
    paced ``chunk_delay_seconds`` apart, and merged. Any failure on the provider path
    (including every chunk failing) routes the same text to the fallback, so
    ``analyze`` always returns an analysis.
    """

    def __init__(
        self,
        provider: AnalysisProvider,
        *,
        fallback: Optional[AnalysisProvider] = None,
        max_input_tokens: int = 12000,
        chunk_delay_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.provider = provider
        self.fallback = fallback or RuleBasedProvider()
        self.max_input_tokens = max_input_tokens
        self.chunk_delay_seconds = chunk_delay_seconds
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisPipeline":
        return cls(
            create_provider(settings),
            max_input_tokens=settings.max_input_tokens,
            chunk_delay_seconds=settings.chunk_delay_seconds,
        )

    async def analyze(self, text: str, source: str) -> StructuredAnalysis:
        """Return a tagged analysis of *text*; ``ai_error`` is set when the fallback ran."""
        try:
            analysis = await self.analyze_with_provider(text, source)
        except Exception as e:
            logger.warning("AI analysis failed, using enhanced fallback: %s", e)
            analysis = await self.fallback.analyze_document(text, source)
            return analysis.model_copy(
                update={"analysis_method": self.fallback.method, "ai_error": str(e)}
            )
        return analysis.model_copy(update={"analysis_method": self.provider.method})

    async def analyze_with_provider(self, text: str, source: str) -> StructuredAnalysis:
        estimated_tokens = estimate_tokens(text)
        logger.info("Estimated tokens: %d", estimated_tokens)

        if estimated_tokens <= self.max_input_tokens:
            logger.info("Policy size within limits, analyzing in single request")
            analysis = await self.provider.analyze_document(text, source)
            if not analysis.summary:
                analysis = analysis.model_copy(update={"summary": synthesize_summary(analysis, 1)})
            return analysis

        logger.info("Policy exceeds token limit, splitting into chunks...")
        return await self.analyze_in_chunks(text, source)

    async def analyze_in_chunks(self, text: str, source: str) -> StructuredAnalysis:
        """Analyze *text* chunk by chunk and merge the partial results.

        A failing chunk is recorded as ``None`` and does not stop the others. A provider
        without credentials fails every chunk the same way, so that error is raised at once.

        Raises:
            ProviderNotConfiguredError: If the provider has no API key.
            AllChunksFailedError: If no chunk could be analyzed.
        """
        chunks = split_text(text, chunk_char_budget(self.max_input_tokens))
        total = len(chunks)
        logger.info("Split into %d chunks", total)

        pacing = PacingPolicy(self.chunk_delay_seconds, sleep=self._sleep)
        results: list[Optional[PartialAnalysis]] = []
        for index, chunk in enumerate(chunks, start=1):
            await pacing.wait()
            logger.info("Analyzing chunk %d/%d...", index, total)
            try:
                results.append(await self.provider.analyze_section(chunk, source, index, total))
            except ProviderNotConfiguredError:
                raise
            except Exception as e:
                logger.warning("Chunk %d/%d failed: %s", index, total, e)
                results.append(None)

        logger.info("Merging chunk analyses...")
        return merge_chunk_analyses(results)
