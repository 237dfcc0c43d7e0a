"""Privacy policy analysis: rule-based scoring, chunked LLM analysis and merging."""

from polai.analysis.merge import merge_chunk_analyses
from polai.analysis.models import PartialAnalysis, StructuredAnalysis
from polai.analysis.pipeline import AnalysisPipeline
from polai.analysis.rule_based import analyze_policy_text
from polai.analysis.scoring import calculate_simple_score

__all__ = [
    "AnalysisPipeline",
    "PartialAnalysis",
    "StructuredAnalysis",
    "analyze_policy_text",
    "calculate_simple_score",
    "merge_chunk_analyses",
]
