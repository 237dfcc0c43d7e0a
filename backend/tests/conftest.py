"""Shared fixtures for the policy analysis tests."""

import pytest

from polai.analysis.models import PartialAnalysis, StructuredAnalysis

SAMPLE_POLICY = (
    "We collect your email and location for advertising. You may delete your data by "
    "contacting us. We use cookies and do not sell your information. Data is encrypted with SSL."
)


def build_full_analysis(**overrides) -> StructuredAnalysis:
    """A fully populated analysis with every score positive."""
    data = {
        "summary": "Clear policy with strong user rights.",
        "data_collection": {
            "types": ["Personal Identifiers", "Location Data"],
            "purposes": ["Service Provision"],
            "transparency_score": 7,
            "justification": "Collects 2 types of data for 1 stated purposes",
        },
        "user_rights": {
            "access": True,
            "deletion": True,
            "correction": False,
            "portability": True,
            "opt_out": True,
            "opt_out_methods": ["account settings"],
            "rights_score": 8,
            "details": "Comprehensive rights provided: access, deletion, portability",
        },
        "data_sharing": {
            "third_parties": True,
            "third_party_purposes": ["analytics"],
            "international_transfers": True,
            "transfer_safeguards": ["Standard Contractual Clauses"],
            "law_enforcement": False,
            "user_control": True,
            "sharing_score": 6,
        },
        "cookies_tracking": {
            "cookies_used": True,
            "tracking_technologies": ["Cookies"],
            "opt_out_available": True,
            "granular_controls": False,
            "tracking_score": 9,
        },
        "security_measures": {
            "measures": ["Encryption", "SSL/TLS"],
            "encryption_mentioned": True,
            "access_controls": True,
            "incident_response": False,
            "security_score": 7,
        },
        "policy_updates": {
            "notification_method": "Email Notification",
            "frequency_mentioned": True,
            "user_consent_required": False,
        },
        "compliance": {
            "gdpr_mentioned": True,
            "ccpa_mentioned": False,
            "coppa_mentioned": False,
            "other_regulations": ["LGPD (Brazil)"],
            "compliance_score": 3,
        },
        "contact_info": {"provided": True, "methods": ["email"], "dpo_mentioned": True},
        "transparency": {
            "clear_language": True,
            "easy_to_find": True,
            "well_organized": False,
            "specific_examples": True,
            "transparency_score": 8,
        },
        "data_retention": {
            "retention_period_specified": True,
            "deletion_process_clear": True,
            "retention_score": 8,
        },
    }
    data.update(overrides)
    return StructuredAnalysis.model_validate(data)


class StubProvider:
    """Provider returning canned results; records the calls it receives."""

    method = "mistral_ai"

    def __init__(self, document=None, sections=None) -> None:
        self.document = document
        self.sections = list(sections or [])
        self.document_calls: list[tuple[str, str]] = []
        self.section_calls: list[tuple[int, int]] = []

    async def analyze_document(self, text: str, source: str) -> StructuredAnalysis:
        self.document_calls.append((text, source))
        if isinstance(self.document, Exception):
            raise self.document
        return self.document

    async def analyze_section(self, text: str, source: str, index: int, total: int) -> PartialAnalysis:
        self.section_calls.append((index, total))
        result = self.sections[index - 1]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def full_analysis() -> StructuredAnalysis:
    return build_full_analysis()


@pytest.fixture
def sample_policy() -> str:
    return SAMPLE_POLICY
