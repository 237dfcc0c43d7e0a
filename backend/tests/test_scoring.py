"""Tests for dimension scores and the overall 0-100 privacy score."""

import pytest
from conftest import build_full_analysis

from polai.analysis import scoring
from polai.analysis.detectors import any_of
from polai.analysis.scoring import PointRule, apply_rules, calculate_simple_score


class TestApplyRules:
    def test_adds_points_of_matching_rules(self) -> None:
        rules = (PointRule(2, any_of("a")), PointRule(3, any_of("b")), PointRule(4, any_of("z")))
        assert apply_rules("ab", 1, rules) == 6

    def test_clamps_into_score_range(self) -> None:
        assert apply_rules("a", 9, (PointRule(5, any_of("a")),)) == 10
        assert apply_rules("a", 1, (PointRule(-5, any_of("a")),)) == 0


class TestSharingScore:
    def test_every_deduction_applies(self) -> None:
        text = "we sell data to any third party and share it for advertising."
        assert scoring.calculate_sharing_score(text) == 3

    def test_control_language_earns_credit(self) -> None:
        text = "we share data with a third party for advertising. you can control this."
        assert scoring.calculate_sharing_score(text) == 9

    def test_no_sharing_language_scores_top(self) -> None:
        assert scoring.calculate_sharing_score("we keep everything to ourselves.") == 10


class TestDimensionScores:
    def test_transparency_rewards_examples_and_brevity(self) -> None:
        text = "we collect data such as your name. see the table of contents."
        assert scoring.calculate_transparency_score(text) == 9

    def test_long_text_loses_brevity_point(self) -> None:
        assert scoring.calculate_transparency_score("x" * 10000) == 5

    def test_rights_score_caps_at_ten(self) -> None:
        text = "access your data, delete it, correct it, export it, opt-out any time."
        assert scoring.calculate_rights_score(text) == 10

    def test_security_counts_measures_and_bonuses(self) -> None:
        text = "we encrypt data over tls."
        assert scoring.calculate_security_score(text, ["Encryption", "SSL/TLS"]) == 7

    def test_security_caps_at_ten(self) -> None:
        measures = ["Encryption", "SSL/TLS", "Firewalls", "Access Controls", "Security Audits"]
        text = "encrypt ssl two-factor regular audit"
        assert scoring.calculate_security_score(text, measures) == 10

    def test_compliance_sums_regulations(self) -> None:
        assert scoring.calculate_compliance_score("gdpr and ccpa") == 6
        assert scoring.calculate_compliance_score("gdpr ccpa coppa hipaa") == 10
        assert scoring.calculate_compliance_score("nothing") == 0

    def test_tracking_penalizes_each_technology(self) -> None:
        text = "cookies, pixels and beacons. opt-out of cookies or use do not track."
        assert scoring.calculate_tracking_score(text, ["Cookies", "Tracking Pixels", "Web Beacons"]) == 10
        assert scoring.calculate_tracking_score("pixels", ["Tracking Pixels"]) == 9

    def test_retention(self) -> None:
        assert scoring.calculate_retention_score("we retain logs for 12 months") == 8
        assert scoring.calculate_retention_score(
            "we retain logs for 2 years and delete inactive accounts"
        ) == 10


class TestSimpleScore:
    """Tests for the 0-100 score shown when scanning an app."""

    def test_documented_deductions(self) -> None:
        analysis = build_full_analysis(
            data_sharing={"third_parties": True, "user_control": False},
            user_rights={"deletion": False, "access": True, "opt_out": True},
            cookies_tracking={"cookies_used": True, "opt_out_available": False},
            security_measures={"encryption_mentioned": False},
            compliance={"gdpr_mentioned": False, "ccpa_mentioned": False},
        )
        assert calculate_simple_score(analysis) == 20

    def test_user_control_softens_sharing_deduction(self) -> None:
        analysis = build_full_analysis(data_sharing={"third_parties": True, "user_control": True})
        assert calculate_simple_score(analysis) == 85

    def test_well_protected_policy_scores_full_marks(self) -> None:
        analysis = build_full_analysis(data_sharing={"third_parties": False})
        assert calculate_simple_score(analysis) == 100

    def test_never_negative(self) -> None:
        analysis = build_full_analysis(
            data_sharing={"third_parties": True},
            user_rights={},
            cookies_tracking={"cookies_used": True},
            security_measures={},
            compliance={},
        )
        assert calculate_simple_score(analysis) == 0

    @pytest.mark.parametrize("regulation", ["gdpr_mentioned", "ccpa_mentioned"])
    def test_either_major_regulation_avoids_deduction(self, regulation: str) -> None:
        analysis = build_full_analysis(
            data_sharing={"third_parties": False},
            compliance={"gdpr_mentioned": False, "ccpa_mentioned": False, regulation: True},
        )
        assert calculate_simple_score(analysis) == 100
