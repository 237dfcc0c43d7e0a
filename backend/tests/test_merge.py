"""Tests for merging per-chunk partial analyses.

Business behaviour: chunks of one policy are analyzed independently; merging must
union their findings, OR their flags, average their meaningful scores and survive
failed chunks.
"""

import pytest
from conftest import build_full_analysis

from polai.analysis.merge import merge_chunk_analyses
from polai.analysis.models import NOT_SPECIFIED, PartialAnalysis
from polai.core.errors import AllChunksFailedError

REGENERATED = {"data_collection": {"justification"}, "user_rights": {"details"}}


def partial(**sections) -> PartialAnalysis:
    return PartialAnalysis.model_validate(sections)


class TestSingletonMerge:
    def test_merging_one_complete_analysis_returns_it(self) -> None:
        complete = build_full_analysis()
        merged = merge_chunk_analyses([PartialAnalysis.from_structured(complete)])

        assert merged.model_dump(exclude=REGENERATED) == complete.model_dump(exclude=REGENERATED)

    def test_absent_neighbours_do_not_change_the_result(self) -> None:
        only = PartialAnalysis.from_structured(build_full_analysis())
        assert merge_chunk_analyses([None, only, None]) == merge_chunk_analyses([only])


class TestAllChunksFailed:
    def test_only_absent_entries_raise(self) -> None:
        with pytest.raises(AllChunksFailedError, match="All chunk analyses failed"):
            merge_chunk_analyses([None, None, None])

    def test_empty_sequence_raises(self) -> None:
        with pytest.raises(AllChunksFailedError):
            merge_chunk_analyses([])


class TestLabelUnion:
    def test_disjoint_types_are_all_kept(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(data_collection={"types": ["Email", "Name"]}),
                partial(data_collection={"types": ["Location", "Device ID"]}),
            ]
        )
        assert len(merged.data_collection.types) == 4

    def test_overlapping_labels_are_deduplicated_in_first_seen_order(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(security_measures={"measures": ["Encryption", "Firewalls"]}),
                partial(security_measures={"measures": ["Firewalls", "SSL/TLS"]}),
            ]
        )
        assert merged.security_measures.measures == ["Encryption", "Firewalls", "SSL/TLS"]

    def test_contact_methods_and_safeguards_are_unioned(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(contact_info={"methods": ["email"]}),
                partial(
                    contact_info={"methods": ["phone", "email"]},
                    data_sharing={"transfer_safeguards": ["Privacy Shield"]},
                ),
            ]
        )
        assert merged.contact_info.methods == ["email", "phone"]
        assert merged.data_sharing.transfer_safeguards == ["Privacy Shield"]


class TestFlagOr:
    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_any_true_deletion_wins(self, position: int) -> None:
        partials = [
            partial(user_rights={"deletion": False}),
            partial(user_rights={"access": True}),
            partial(user_rights={"deletion": False}),
        ]
        partials[position] = partial(user_rights={"deletion": True})

        assert merge_chunk_analyses(partials).user_rights.deletion is True

    def test_flags_nobody_asserted_stay_false(self) -> None:
        merged = merge_chunk_analyses([partial(summary="Only a summary.")])
        assert merged.compliance.gdpr_mentioned is False
        assert merged.cookies_tracking.cookies_used is False


class TestScoreAveraging:
    def test_averages_only_positive_scores(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(user_rights={"rights_score": 8}),
                partial(user_rights={"rights_score": 0}),
                partial(user_rights={"access": True}),
                partial(user_rights={"rights_score": 5}),
            ]
        )
        assert merged.user_rights.rights_score == 7

    def test_rounds_to_nearest_integer(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(compliance={"compliance_score": 3}),
                partial(compliance={"compliance_score": 4}),
                partial(compliance={"compliance_score": 4}),
            ]
        )
        assert merged.compliance.compliance_score == 4

    def test_no_positive_score_keeps_zero(self) -> None:
        merged = merge_chunk_analyses(
            [partial(data_sharing={"sharing_score": 0}), partial(data_sharing={})]
        )
        assert merged.data_sharing.sharing_score == 0


class TestNotificationMethod:
    def test_first_real_method_wins(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(policy_updates={"notification_method": "Not specified"}),
                None,
                partial(policy_updates={"frequency_mentioned": True}),
                partial(policy_updates={"notification_method": "Email Notification"}),
                partial(policy_updates={"notification_method": "Website Posting"}),
            ]
        )
        assert merged.policy_updates.notification_method == "Email Notification"

    def test_placeholder_kept_when_nothing_specified(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(policy_updates={"notification_method": "Not Specified"}),
                partial(policy_updates={}),
            ]
        )
        assert merged.policy_updates.notification_method == NOT_SPECIFIED


class TestSummary:
    def test_first_supplied_summary_is_used_verbatim(self) -> None:
        merged = merge_chunk_analyses(
            [
                None,
                partial(data_collection={"types": ["Email"]}),
                partial(summary="Second chunk summary."),
                partial(summary="Third chunk summary."),
            ]
        )
        assert merged.summary == "Second chunk summary."

    def test_summary_is_synthesized_when_no_chunk_has_one(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(data_collection={"types": ["Email", "Name"]}),
                partial(user_rights={"deletion": True}, compliance={"ccpa_mentioned": True}),
            ]
        )
        assert merged.summary == (
            "This privacy policy was analyzed across 2 sections. It collects 2 types of data, "
            "provides user deletion rights, and mentions major privacy regulations."
        )

    def test_synthesized_summary_for_sparse_findings(self) -> None:
        merged = merge_chunk_analyses([partial(contact_info={"provided": True})])
        assert merged.summary == (
            "This privacy policy was analyzed across 1 sections. It has limited data collection "
            "information, has limited user rights, and has minimal compliance information."
        )


class TestRegeneratedText:
    def test_justification_and_details_come_from_merged_values(self) -> None:
        merged = merge_chunk_analyses(
            [
                partial(
                    data_collection={
                        "types": ["Email", "Name"],
                        "purposes": ["Advertising"],
                        "justification": "chunk text",
                    },
                    user_rights={"access": True, "details": "chunk details"},
                ),
                None,
                partial(data_collection={"types": ["Location"]}, user_rights={"opt_out": True}),
            ]
        )
        assert merged.data_collection.justification == (
            "Analysis merged from 2 policy sections. Collects 3 data types for 1 purposes."
        )
        assert merged.user_rights.details == (
            "User rights analysis: Access granted, no deletion mentioned, opt-out available."
        )
