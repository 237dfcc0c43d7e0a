"""Analysis providers: LLM-backed (OpenAI, Mistral) and the rule-based fallback.

All providers satisfy ``AnalysisProvider``. The pipeline picks one LLM provider at
construction time from settings and keeps a ``RuleBasedProvider`` for fallback.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.runnables import Runnable
from langchain_mistralai import ChatMistralAI
from langchain_openai import ChatOpenAI
from pydantic import SecretStr, ValidationError

from polai.analysis.models import AnalysisMethod, PartialAnalysis, StructuredAnalysis
from polai.analysis.parsing import parse_json_response
from polai.analysis.prompts import (
    DOCUMENT_ANALYSIS_PROMPT,
    DOCUMENT_SYSTEM_PROMPT,
    SECTION_ANALYSIS_PROMPT,
    SECTION_SYSTEM_PROMPT,
)
from polai.analysis.rule_based import RULE_BASED_METHOD, analyze_policy_text
from polai.core.config import Settings
from polai.core.errors import ProviderError, ProviderNotConfiguredError, ResponseParseError

logger = logging.getLogger(__name__)

ModelFactory = Callable[[], Runnable]


class AnalysisProvider(Protocol):
    """Something that can turn policy text into a structured analysis."""

    method: AnalysisMethod

    async def analyze_document(self, text: str, source: str) -> StructuredAnalysis:
        """Analyze a whole document in one call."""
        ...

    async def analyze_section(
        self, text: str, source: str, index: int, total: int
    ) -> PartialAnalysis:
        """Analyze chunk *index* (1-based) of *total* chunks."""
        ...


@dataclass(frozen=True)
class ProviderLimits:
    """Hard caps on what is actually sent to, and requested from, a model."""

    document_max_chars: int
    document_max_tokens: int
    section_max_chars: int = 14000
    section_max_tokens: int = 4000


PIPELINE_TAGS = ("analysis_method", "ai_error")

MISTRAL_LIMITS = ProviderLimits(document_max_chars=48000, document_max_tokens=6000)
OPENAI_LIMITS = ProviderLimits(document_max_chars=20000, document_max_tokens=4000)


def _message_text(message) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part) for part in content
        )
    return str(content)


class ChatModelProvider:
    """Analysis provider backed by a LangChain chat model."""

    def __init__(
        self,
        method: AnalysisMethod,
        model_factory: ModelFactory,
        limits: ProviderLimits,
        *,
        name: str,
    ) -> None:
        self.method = method
        self.limits = limits
        self.name = name
        self._model_factory = model_factory
        self._model: Runnable | None = None

    def _get_model(self) -> Runnable:
        if self._model is None:
            self._model = self._model_factory()
        return self._model

    async def complete(self, prompt: str, *, system: str, max_tokens: int) -> str:
        """Send *prompt* to the model and return the raw response text."""
        model = self._get_model()
        try:
            response = await model.ainvoke(
                [SystemMessage(content=system), HumanMessage(content=prompt)],
                max_tokens=max_tokens,
            )
        except Exception as e:
            raise ProviderError(f"{self.name} API failed: {e}") from e
        return _message_text(response)

    async def analyze_document(self, text: str, source: str) -> StructuredAnalysis:
        prompt = DOCUMENT_ANALYSIS_PROMPT.format(
            source=source, policy=text[: self.limits.document_max_chars]
        )
        logger.info("Sending single request to %s...", self.name)
        raw = await self.complete(
            prompt, system=DOCUMENT_SYSTEM_PROMPT, max_tokens=self.limits.document_max_tokens
        )
        data = parse_json_response(raw)
        # Tags are set by the pipeline; whatever the model echoes back is ignored.
        for tag in PIPELINE_TAGS:
            data.pop(tag, None)
        analysis = _validate(StructuredAnalysis, data)
        logger.info("%s analysis complete", self.name)
        return analysis

    async def analyze_section(
        self, text: str, source: str, index: int, total: int
    ) -> PartialAnalysis:
        prompt = SECTION_ANALYSIS_PROMPT.format(
            index=index, total=total, policy=text[: self.limits.section_max_chars]
        )
        raw = await self.complete(
            prompt, system=SECTION_SYSTEM_PROMPT, max_tokens=self.limits.section_max_tokens
        )
        return _validate(PartialAnalysis, parse_json_response(raw))


def _validate(model: type, data: dict):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"Provider response does not match the analysis schema: {e}") from e


class RuleBasedProvider:
    """Keyword-heuristic provider; never calls out and never fails on text input."""

    method: AnalysisMethod = RULE_BASED_METHOD

    async def analyze_document(self, text: str, source: str) -> StructuredAnalysis:
        return analyze_policy_text(text)

    async def analyze_section(
        self, text: str, source: str, index: int, total: int
    ) -> PartialAnalysis:
        return PartialAnalysis.from_structured(analyze_policy_text(text))


def _mistral_factory(settings: Settings) -> ModelFactory:
    def build() -> Runnable:
        if not settings.mistral_api_key:
            raise ProviderNotConfiguredError("Mistral API key not configured")
        return ChatMistralAI(
            model=settings.mistral_model,
            api_key=SecretStr(settings.mistral_api_key),
            temperature=settings.llm_temperature,
            timeout=int(settings.llm_timeout_seconds),
        )

    return build


def _openai_factory(settings: Settings) -> ModelFactory:
    def build() -> Runnable:
        if not settings.openai_api_key:
            raise ProviderNotConfiguredError("OpenAI client not initialized: API key not configured")
        llm = ChatOpenAI(
            model=settings.openai_model,
            api_key=SecretStr(settings.openai_api_key),
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout_seconds,
        )
        return llm.bind(response_format={"type": "json_object"})

    return build


def create_provider(settings: Settings) -> ChatModelProvider:
    """Build the LLM provider selected by ``settings.ai_provider``."""
    if settings.ai_provider == "openai":
        return ChatModelProvider("openai", _openai_factory(settings), OPENAI_LIMITS, name="OpenAI")
    return ChatModelProvider(
        "mistral_ai", _mistral_factory(settings), MISTRAL_LIMITS, name="Mistral AI"
    )
