"""Deterministic rule-based policy analyzer.

Builds a complete ``StructuredAnalysis`` from keyword heuristics alone. It makes no
network calls and never raises for string input, which is what makes it usable as the
fallback whenever an external provider fails.
"""

import logging

from polai.analysis import detectors as d
from polai.analysis import scoring as s
from polai.analysis.models import (
    Compliance,
    ContactInfo,
    CookiesTracking,
    DataCollection,
    DataRetention,
    DataSharing,
    PolicyUpdates,
    SecurityMeasures,
    StructuredAnalysis,
    Transparency,
    UserRights,
)

logger = logging.getLogger(__name__)

RULE_BASED_METHOD = "enhanced_rule_based"

FAVORABLE_SUMMARY = (
    "This privacy policy demonstrates good transparency and user-centric practices. "
    "Clear data handling procedures and strong user rights are evident."
)
MODERATE_SUMMARY = (
    "This privacy policy shows moderate transparency with some user rights. "
    "There are areas that could benefit from clearer explanations and stronger user protections."
)
LIMITED_SUMMARY = (
    "This privacy policy has limited transparency and user control. "
    "Users should carefully review data handling practices and consider privacy implications."
)

# Boolean findings.
HAS_ACCESS = d.any_of("access", "view your data", "request access")
HAS_DELETION = d.any_of("delete", "erase", "right to be forgotten", "remove your data")
HAS_CORRECTION = d.any_of("correct", "rectif", "update your information")
HAS_PORTABILITY = d.any_of("portability", "data portability", "export your data")
HAS_OPT_OUT = d.any_of("opt", "opt-out", "unsubscribe", "withdraw consent")

SHARES_WITH_THIRD_PARTIES = d.any_of("third", "partner", "share")
TRANSFERS_INTERNATIONALLY = d.any_of("international", "transfer", "cross-border")
DISCLOSES_TO_LAW_ENFORCEMENT = d.any_of("law", "legal", "subpoena", "court order")
OFFERS_SHARING_CONTROL = d.any_of("you can control", "manage sharing", "sharing preferences")

USES_COOKIES = d.any_of("cooki", "track")
COOKIE_OPT_OUT = d.all_of(d.any_of("opt", "disable"), "cooki")
GRANULAR_COOKIE_CONTROLS = d.any_of("cookie settings", "manage cookies", "cookie preferences")

MENTIONS_ENCRYPTION = d.any_of("encrypt")
HAS_ACCESS_CONTROLS = d.any_of("access control", "authentication")
HAS_INCIDENT_RESPONSE = d.any_of("breach", "incident response", "security incident")

MENTIONS_UPDATE_FREQUENCY = d.any_of("update", "change", "revise")
REQUIRES_CONSENT_TO_CHANGES = d.any_of("notify you", "consent to changes")

MENTIONS_GDPR = d.any_of("gdpr", "general data protection regulation")
MENTIONS_CCPA = d.any_of("ccpa", "california consumer privacy act")
MENTIONS_COPPA = d.any_of("coppa", "children's online privacy")

PROVIDES_CONTACT = d.any_of("contact", "email", "@")
MENTIONS_DPO = d.any_of("data protection officer", "dpo", "privacy officer")

USES_LEGALESE = d.any_of("notwithstanding", "hereinafter")
HAS_STRUCTURE = d.any_of("table of contents")
GIVES_EXAMPLES = d.any_of("for example", "such as", "including")

SPECIFIES_RETENTION = d.all_of("retain", d.any_of("days", "months", "years"))
CLEAR_DELETION_PROCESS = d.all_of("delete", "request")

_RIGHT_MENTIONS = (
    ("access", "access"),
    ("delete", "deletion"),
    ("correct", "correction"),
    ("portability", "portability"),
    ("opt", "opt-out"),
)


def generate_summary(transparency_score: int, rights_score: int, sharing_score: int) -> str:
    """Pick the summary band from the mean of the three headline scores."""
    average = (transparency_score + rights_score + sharing_score) / 3
    if average >= 7:
        return FAVORABLE_SUMMARY
    if average >= 5:
        return MODERATE_SUMMARY
    return LIMITED_SUMMARY


def describe_user_rights(text: str) -> str:
    rights = [name for keyword, name in _RIGHT_MENTIONS if keyword in text]
    if not rights:
        return "Limited user rights information available"
    if len(rights) <= 2:
        return f"Basic rights available: {', '.join(rights)}"
    return f"Comprehensive rights provided: {', '.join(rights)}"


def analyze_policy_text(policy_text: str) -> StructuredAnalysis:
    """Analyze *policy_text* with keyword heuristics only."""
    text = policy_text.lower()
    logger.info("Performing rule-based analysis of %d characters", len(text))

    data_types = d.detect_data_types(text)
    purposes = d.detect_purposes(text)
    tracking = d.detect_tracking_technologies(text)
    measures = d.detect_security_measures(text)

    transparency_score = s.calculate_transparency_score(text)
    rights_score = s.calculate_rights_score(text)
    sharing_score = s.calculate_sharing_score(text)

    return StructuredAnalysis(
        summary=generate_summary(transparency_score, rights_score, sharing_score),
        data_collection=DataCollection(
            types=data_types,
            purposes=purposes,
            transparency_score=transparency_score,
            justification=(
                f"Collects {len(data_types)} types of data for {len(purposes)} stated purposes"
            ),
        ),
        user_rights=UserRights(
            access=HAS_ACCESS(text),
            deletion=HAS_DELETION(text),
            correction=HAS_CORRECTION(text),
            portability=HAS_PORTABILITY(text),
            opt_out=HAS_OPT_OUT(text),
            opt_out_methods=d.detect_opt_out_methods(text),
            rights_score=rights_score,
            details=describe_user_rights(text),
        ),
        data_sharing=DataSharing(
            third_parties=SHARES_WITH_THIRD_PARTIES(text),
            third_party_purposes=d.detect_sharing_purposes(text),
            international_transfers=TRANSFERS_INTERNATIONALLY(text),
            transfer_safeguards=d.detect_transfer_safeguards(text),
            law_enforcement=DISCLOSES_TO_LAW_ENFORCEMENT(text),
            user_control=OFFERS_SHARING_CONTROL(text),
            sharing_score=sharing_score,
        ),
        cookies_tracking=CookiesTracking(
            cookies_used=USES_COOKIES(text),
            tracking_technologies=tracking,
            opt_out_available=COOKIE_OPT_OUT(text),
            granular_controls=GRANULAR_COOKIE_CONTROLS(text),
            tracking_score=s.calculate_tracking_score(text, tracking),
        ),
        security_measures=SecurityMeasures(
            measures=measures,
            encryption_mentioned=MENTIONS_ENCRYPTION(text),
            access_controls=HAS_ACCESS_CONTROLS(text),
            incident_response=HAS_INCIDENT_RESPONSE(text),
            security_score=s.calculate_security_score(text, measures),
        ),
        policy_updates=PolicyUpdates(
            notification_method=d.detect_update_method(text),
            frequency_mentioned=MENTIONS_UPDATE_FREQUENCY(text),
            user_consent_required=REQUIRES_CONSENT_TO_CHANGES(text),
        ),
        compliance=Compliance(
            gdpr_mentioned=MENTIONS_GDPR(text),
            ccpa_mentioned=MENTIONS_CCPA(text),
            coppa_mentioned=MENTIONS_COPPA(text),
            other_regulations=d.detect_other_regulations(text),
            compliance_score=s.calculate_compliance_score(text),
        ),
        contact_info=ContactInfo(
            provided=PROVIDES_CONTACT(text),
            methods=d.detect_contact_methods(text),
            dpo_mentioned=MENTIONS_DPO(text),
        ),
        transparency=Transparency(
            clear_language=len(text) < 15000 and not USES_LEGALESE(text),
            easy_to_find=True,
            well_organized=HAS_STRUCTURE(text) or len(text.split("\n")) > 10,
            specific_examples=GIVES_EXAMPLES(text),
            transparency_score=transparency_score,
        ),
        data_retention=DataRetention(
            retention_period_specified=SPECIFIES_RETENTION(text),
            deletion_process_clear=CLEAR_DELETION_PROCESS(text),
            retention_score=s.calculate_retention_score(text),
        ),
        analysis_method=RULE_BASED_METHOD,
    )
