"""Keyword detectors for the rule-based analyzer.

Each detector is an ordered table of ``KeywordRule``s. A rule's label is reported when
its predicate matches the case-folded policy text; labels come out in table order.
All matching is plain substring presence, so inputs must already be lower-cased.
"""

from dataclasses import dataclass
from typing import Callable, List, Sequence

Predicate = Callable[[str], bool]


def any_of(*terms: str) -> Predicate:
    """Match when at least one of *terms* occurs in the text."""
    return lambda text: any(term in text for term in terms)


def all_of(*predicates: Predicate | str) -> Predicate:
    """Match when every predicate (or plain term) matches the text."""
    checks = [any_of(p) if isinstance(p, str) else p for p in predicates]
    return lambda text: all(check(text) for check in checks)


@dataclass(frozen=True)
class KeywordRule:
    label: str
    matches: Predicate


def detect(text: str, rules: Sequence[KeywordRule]) -> List[str]:
    """Return the label of every rule matching *text*, in table order."""
    return [rule.label for rule in rules if rule.matches(text)]


def detect_first(text: str, rules: Sequence[KeywordRule], default: str) -> str:
    """Return the label of the first matching rule, or *default*."""
    for rule in rules:
        if rule.matches(text):
            return rule.label
    return default


# ---------------------------
# Rule tables
# ---------------------------

DATA_TYPE_RULES = (
    KeywordRule("Personal Identifiers", any_of("name", "email", "personal information")),
    KeywordRule("Cookies & Similar Technologies", any_of("cooki")),
    KeywordRule("Location Data", any_of("location", "gps", "geolocation")),
    KeywordRule("Device & Technical Information", any_of("device", "ip", "browser")),
    KeywordRule("Usage & Activity Data", any_of("usage", "analytics", "behavior")),
    KeywordRule("Financial Information", any_of("payment", "credit card", "financial")),
    KeywordRule("Biometric Data", any_of("biometric")),
    KeywordRule("Health Information", any_of("health", "medical")),
)

PURPOSE_RULES = (
    KeywordRule("Service Provision", any_of("service", "provide", "operate")),
    KeywordRule("Personalization", any_of("personaliz", "custom", "tailor")),
    KeywordRule("Advertising & Marketing", any_of("advertis", "market", "promot")),
    KeywordRule("Analytics & Improvement", any_of("analytics", "improve", "research")),
    KeywordRule("Security & Fraud Prevention", any_of("security", "fraud", "protect")),
    KeywordRule("Legal Compliance", any_of("legal", "comply", "regulation")),
    KeywordRule("Communication & Support", any_of("communication", "support", "respond")),
)

TRACKING_TECHNOLOGY_RULES = (
    KeywordRule("Cookies", any_of("cooki")),
    KeywordRule("Tracking Pixels", any_of("pixel", "tracking pixel")),
    KeywordRule("Device Fingerprinting", any_of("fingerprint", "device fingerprint")),
    KeywordRule("Web Beacons", any_of("beacon", "web beacon")),
    KeywordRule("Local Storage", any_of("local storage", "session storage")),
    KeywordRule("SDKs", any_of("sdk", "software development kit")),
)

SECURITY_MEASURE_RULES = (
    KeywordRule("Encryption", any_of("encrypt")),
    KeywordRule("SSL/TLS", any_of("ssl", "tls")),
    KeywordRule("Firewalls", any_of("firewall")),
    KeywordRule("Access Controls", any_of("access control", "authentication")),
    KeywordRule("Secure Servers", all_of("secure", "server")),
    KeywordRule("Security Monitoring", any_of("monitor", "security monitoring")),
    KeywordRule("Multi-Factor Authentication", any_of("two-factor", "multi-factor")),
    KeywordRule("Security Audits", any_of("audit", "security audit")),
)

OPT_OUT_METHOD_RULES = (
    KeywordRule("email unsubscribe", any_of("unsubscribe")),
    KeywordRule("account settings", any_of("settings", "preferences")),
    KeywordRule("cookie settings", all_of("cookie", "settings")),
    KeywordRule("contact request", any_of("contact us")),
)

SHARING_PURPOSE_RULES = (
    KeywordRule("service provision", any_of("service provider")),
    KeywordRule("advertising", any_of("advertising", "marketing")),
    KeywordRule("analytics", any_of("analytics")),
    KeywordRule("legal compliance", any_of("legal", "compliance")),
)

TRANSFER_SAFEGUARD_RULES = (
    KeywordRule("Standard Contractual Clauses", any_of("standard contractual clauses", "scc")),
    KeywordRule("Privacy Shield", any_of("privacy shield")),
    KeywordRule("EU Adequacy Decision", any_of("adequacy decision")),
    KeywordRule("Binding Corporate Rules", any_of("binding corporate rules")),
)

CONTACT_METHOD_RULES = (
    KeywordRule("email", any_of("@")),
    KeywordRule("phone", any_of("phone", "call")),
    KeywordRule("contact form", any_of("form", "contact form")),
    KeywordRule("postal mail", all_of("mail", "address")),
)

OTHER_REGULATION_RULES = (
    KeywordRule("HIPAA", any_of("hipaa")),
    KeywordRule("LGPD (Brazil)", any_of("lgpd")),
    KeywordRule("PIPEDA (Canada)", any_of("pipeda")),
    KeywordRule("POPIA (South Africa)", any_of("popia")),
    KeywordRule("PDPA", any_of("pdpa")),
)

# First match wins.
UPDATE_METHOD_RULES = (
    KeywordRule("Email Notification", all_of("email", "notif")),
    KeywordRule("Website Posting", any_of("post", "website")),
    KeywordRule("In-App Notification", any_of("in-app", "notification")),
)

UPDATE_METHOD_UNKNOWN = "Not Specified"


def detect_data_types(text: str) -> List[str]:
    return detect(text, DATA_TYPE_RULES)


def detect_purposes(text: str) -> List[str]:
    return detect(text, PURPOSE_RULES)


def detect_tracking_technologies(text: str) -> List[str]:
    return detect(text, TRACKING_TECHNOLOGY_RULES)


def detect_security_measures(text: str) -> List[str]:
    return detect(text, SECURITY_MEASURE_RULES)


def detect_opt_out_methods(text: str) -> List[str]:
    return detect(text, OPT_OUT_METHOD_RULES)


def detect_sharing_purposes(text: str) -> List[str]:
    return detect(text, SHARING_PURPOSE_RULES)


def detect_transfer_safeguards(text: str) -> List[str]:
    return detect(text, TRANSFER_SAFEGUARD_RULES)


def detect_contact_methods(text: str) -> List[str]:
    return detect(text, CONTACT_METHOD_RULES)


def detect_other_regulations(text: str) -> List[str]:
    return detect(text, OTHER_REGULATION_RULES)


def detect_update_method(text: str) -> str:
    return detect_first(text, UPDATE_METHOD_RULES, UPDATE_METHOD_UNKNOWN)
