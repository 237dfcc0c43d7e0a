"""Combine per-chunk partial analyses into one structured analysis.

Merge policy, field by field:

* label lists: union across chunks, first-seen order;
* flags: true if any chunk says true (an absent flag contributes nothing);
* ``notification_method``: first chunk with a real value wins;
* ``summary``: first chunk that supplies one, else synthesized from the merged fields;
* scores: mean of the positive values supplied, rounded; zero and absent are skipped;
* ``justification`` and ``details``: regenerated from the merged result.

``None`` entries stand for chunks whose analysis failed and are skipped.
"""

import logging
from typing import Iterable, Optional, Sequence

from polai.analysis.models import (
    NOT_SPECIFIED,
    PartialAnalysis,
    StructuredAnalysis,
    round_half_up,
)
from polai.core.errors import AllChunksFailedError

logger = logging.getLogger(__name__)

LABEL_FIELDS = (
    ("data_collection", "types"),
    ("data_collection", "purposes"),
    ("user_rights", "opt_out_methods"),
    ("data_sharing", "third_party_purposes"),
    ("data_sharing", "transfer_safeguards"),
    ("cookies_tracking", "tracking_technologies"),
    ("security_measures", "measures"),
    ("compliance", "other_regulations"),
    ("contact_info", "methods"),
)

FLAG_FIELDS = (
    ("user_rights", "access"),
    ("user_rights", "deletion"),
    ("user_rights", "correction"),
    ("user_rights", "portability"),
    ("user_rights", "opt_out"),
    ("data_sharing", "third_parties"),
    ("data_sharing", "international_transfers"),
    ("data_sharing", "law_enforcement"),
    ("data_sharing", "user_control"),
    ("cookies_tracking", "cookies_used"),
    ("cookies_tracking", "opt_out_available"),
    ("cookies_tracking", "granular_controls"),
    ("security_measures", "encryption_mentioned"),
    ("security_measures", "access_controls"),
    ("security_measures", "incident_response"),
    ("policy_updates", "frequency_mentioned"),
    ("policy_updates", "user_consent_required"),
    ("compliance", "gdpr_mentioned"),
    ("compliance", "ccpa_mentioned"),
    ("compliance", "coppa_mentioned"),
    ("contact_info", "provided"),
    ("contact_info", "dpo_mentioned"),
    ("transparency", "clear_language"),
    ("transparency", "easy_to_find"),
    ("transparency", "well_organized"),
    ("transparency", "specific_examples"),
    ("data_retention", "retention_period_specified"),
    ("data_retention", "deletion_process_clear"),
)

SCORE_FIELDS = (
    ("data_collection", "transparency_score"),
    ("user_rights", "rights_score"),
    ("data_sharing", "sharing_score"),
    ("cookies_tracking", "tracking_score"),
    ("security_measures", "security_score"),
    ("compliance", "compliance_score"),
    ("transparency", "transparency_score"),
    ("data_retention", "retention_score"),
)


def _values(partials: Iterable[PartialAnalysis], section: str, field: str) -> list:
    """Present values of ``section.field`` across *partials*, in chunk order."""
    values = []
    for partial in partials:
        record = getattr(partial, section)
        if record is None:
            continue
        value = getattr(record, field)
        if value is not None:
            values.append(value)
    return values


def _union(lists: Iterable[list[str]]) -> list[str]:
    merged: list[str] = []
    for labels in lists:
        for label in labels:
            if label not in merged:
                merged.append(label)
    return merged


def _average_positive(scores: Iterable[int]) -> int:
    positive = [score for score in scores if score > 0]
    if not positive:
        return 0
    return round_half_up(sum(positive) / len(positive))


def synthesize_summary(analysis: StructuredAnalysis, section_count: int) -> str:
    """Fallback summary built from the merged findings."""
    types = analysis.data_collection.types
    collection = (
        f"collects {len(types)} types of data" if types else "has limited data collection information"
    )
    rights = (
        "provides user deletion rights" if analysis.user_rights.deletion else "has limited user rights"
    )
    compliance = (
        "mentions major privacy regulations"
        if analysis.compliance.gdpr_mentioned or analysis.compliance.ccpa_mentioned
        else "has minimal compliance information"
    )
    return (
        f"This privacy policy was analyzed across {section_count} sections. "
        f"It {collection}, {rights}, and {compliance}."
    )


def describe_merged_collection(analysis: StructuredAnalysis, section_count: int) -> str:
    collection = analysis.data_collection
    return (
        f"Analysis merged from {section_count} policy sections. "
        f"Collects {len(collection.types)} data types for {len(collection.purposes)} purposes."
    )


def describe_merged_rights(analysis: StructuredAnalysis) -> str:
    rights = analysis.user_rights
    return (
        f"User rights analysis: {'Access granted' if rights.access else 'No access mentioned'}, "
        f"{'deletion available' if rights.deletion else 'no deletion mentioned'}, "
        f"{'opt-out available' if rights.opt_out else 'no opt-out mentioned'}."
    )


def merge_chunk_analyses(
    chunk_analyses: Sequence[Optional[PartialAnalysis]],
) -> StructuredAnalysis:
    """Merge ordered per-chunk results into a single analysis.

    Raises:
        AllChunksFailedError: If no chunk produced an analysis.
    """
    present = [partial for partial in chunk_analyses if partial is not None]
    if not present:
        raise AllChunksFailedError()

    merged: dict[str, dict] = {}

    def put(section: str, field: str, value) -> None:
        merged.setdefault(section, {})[field] = value

    for section, field in LABEL_FIELDS:
        put(section, field, _union(_values(present, section, field)))
    for section, field in FLAG_FIELDS:
        put(section, field, any(_values(present, section, field)))
    for section, field in SCORE_FIELDS:
        put(section, field, _average_positive(_values(present, section, field)))

    methods = [
        method
        for method in _values(present, "policy_updates", "notification_method")
        if method and method.lower() != NOT_SPECIFIED.lower()
    ]
    put("policy_updates", "notification_method", methods[0] if methods else NOT_SPECIFIED)

    result = StructuredAnalysis.model_validate(merged)

    section_count = len(present)
    summaries = [partial.summary for partial in present if partial.summary]
    summary = summaries[0] if summaries else synthesize_summary(result, section_count)

    result = result.model_copy(
        update={
            "summary": summary,
            "data_collection": result.data_collection.model_copy(
                update={"justification": describe_merged_collection(result, section_count)}
            ),
            "user_rights": result.user_rights.model_copy(
                update={"details": describe_merged_rights(result)}
            ),
        }
    )

    rights = result.user_rights
    logger.info(
        "Merged %d/%d chunk analyses: %d data types, %d/5 user rights, %d major regulations",
        section_count,
        len(chunk_analyses),
        len(result.data_collection.types),
        sum([rights.access, rights.deletion, rights.correction, rights.portability, rights.opt_out]),
        sum([result.compliance.gdpr_mentioned, result.compliance.ccpa_mentioned]),
    )
    return result
