"""Dimension scores for the rule-based analyzer and the overall 0-100 privacy score.

Every dimension score starts from a base value, adds the points of each matching
``PointRule`` and is clamped into 0-10. Inputs are case-folded policy text.
"""

from dataclasses import dataclass
from typing import Sequence

from polai.analysis.detectors import Predicate, all_of, any_of
from polai.analysis.models import MAX_SCORE, MIN_SCORE, StructuredAnalysis


@dataclass(frozen=True)
class PointRule:
    points: int
    matches: Predicate


def _clamp(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def apply_rules(text: str, base: int, rules: Sequence[PointRule]) -> int:
    """Add the points of every matching rule to *base* and clamp the result."""
    score = base + sum(rule.points for rule in rules if rule.matches(text))
    return _clamp(score)


def _shorter_than(limit: int) -> Predicate:
    return lambda text: len(text) < limit


_DURATION_UNIT = any_of("days", "months", "years")

TRANSPARENCY_RULES = (
    PointRule(2, any_of("for example", "such as")),
    PointRule(1, any_of("table of contents")),
    PointRule(1, _shorter_than(10000)),
    PointRule(1, any_of("plain language", "easy to understand")),
)

RIGHTS_RULES = (
    PointRule(2, all_of("access", "your data")),
    PointRule(3, any_of("delete", "erase")),
    PointRule(1, any_of("correct", "update")),
    PointRule(2, any_of("portability", "export")),
    PointRule(2, any_of("opt-out", "withdraw consent")),
)

# Less sharing is better, so sharing starts at the top of the scale.
SHARING_RULES = (
    PointRule(-4, all_of("sell", "data")),
    PointRule(-2, any_of("third party", "third-party")),
    PointRule(-1, all_of("advertising", "share")),
    PointRule(2, any_of("you can control", "opt-out")),
)

SECURITY_RULES = (
    PointRule(2, any_of("encrypt")),
    PointRule(1, any_of("ssl", "tls")),
    PointRule(2, any_of("two-factor", "multi-factor")),
    PointRule(1, any_of("regular audit", "security testing")),
)

COMPLIANCE_RULES = (
    PointRule(3, any_of("gdpr")),
    PointRule(3, any_of("ccpa")),
    PointRule(2, any_of("coppa")),
    PointRule(2, any_of("hipaa")),
)

TRACKING_RULES = (
    PointRule(2, all_of("opt-out", "cooki")),
    PointRule(1, any_of("do not track", "dnt")),
)

RETENTION_RULES = (
    PointRule(3, all_of("retain", _DURATION_UNIT)),
    PointRule(2, all_of("delete", "inactive")),
)


def calculate_transparency_score(text: str) -> int:
    return apply_rules(text, 5, TRANSPARENCY_RULES)


def calculate_rights_score(text: str) -> int:
    return apply_rules(text, 0, RIGHTS_RULES)


def calculate_sharing_score(text: str) -> int:
    return apply_rules(text, 10, SHARING_RULES)


def calculate_security_score(text: str, measures: Sequence[str]) -> int:
    """Two points per detected measure plus bonuses, capped at 10."""
    return apply_rules(text, 2 * len(measures), SECURITY_RULES)


def calculate_compliance_score(text: str) -> int:
    return apply_rules(text, 0, COMPLIANCE_RULES)


def calculate_tracking_score(text: str, technologies: Sequence[str]) -> int:
    """One point off per tracking technology, with credit for opt-out and DNT."""
    return apply_rules(text, 10 - len(technologies), TRACKING_RULES)


def calculate_retention_score(text: str) -> int:
    return apply_rules(text, 5, RETENTION_RULES)


def calculate_simple_score(analysis: StructuredAnalysis) -> int:
    """Collapse an analysis into a single 0-100 privacy score.

    Starts from 100 and deducts for unrestricted sharing, missing user rights,
    cookies without an opt-out, no encryption and no GDPR/CCPA coverage.
    """
    score = 100
    sharing = analysis.data_sharing
    rights = analysis.user_rights
    cookies = analysis.cookies_tracking

    if sharing.third_parties:
        score -= 15 if sharing.user_control else 25
    if not rights.deletion:
        score -= 20
    if not rights.access:
        score -= 10
    if not rights.opt_out:
        score -= 10
    if cookies.cookies_used and not cookies.opt_out_available:
        score -= 15
    if not analysis.security_measures.encryption_mentioned:
        score -= 10
    if not (analysis.compliance.gdpr_mentioned or analysis.compliance.ccpa_mentioned):
        score -= 10

    return max(0, score)
