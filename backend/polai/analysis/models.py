"""Pydantic models for the structured privacy-policy analysis.

``StructuredAnalysis`` is the complete record returned to callers. ``PartialAnalysis``
mirrors it with every field optional: it is what one chunk of a large document yields,
where ``None`` means "not determined from this chunk".

Values coming back from a language model are loose (scores as floats or strings, labels
repeated, booleans spelled out), so every field type normalizes its input before
validation: scores are rounded and clamped to 0-10, label lists are de-duplicated in
first-seen order and flags accept the usual yes/no spellings.
"""

import math
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

AnalysisMethod = Literal["openai", "mistral_ai", "enhanced_rule_based"]

NOT_SPECIFIED = "Not specified"

MIN_SCORE = 0
MAX_SCORE = 10

_TRUE_WORDS = {"true", "yes", "y", "1"}
_FALSE_WORDS = {"false", "no", "n", "0"}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round *value* and clamp it into the 0-10 score range."""
    return max(MIN_SCORE, min(MAX_SCORE, round_half_up(value)))


# ---------------------------
# Input normalizers
# ---------------------------

def _optional_score(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return clamp_score(number)


def _score(value: Any) -> int:
    score = _optional_score(value)
    return MIN_SCORE if score is None else score


def _optional_labels(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        return None
    labels: List[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        label = item.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def _labels(value: Any) -> List[str]:
    return _optional_labels(value) or []


def _optional_flag(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


def _flag(value: Any) -> bool:
    return bool(_optional_flag(value))


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return " ".join(str(item) for item in value)
    return str(value)


def _text(value: Any) -> str:
    return _optional_text(value) or ""


def _notification(value: Any) -> str:
    return _optional_text(value) or NOT_SPECIFIED


Score = Annotated[int, BeforeValidator(_score)]
Labels = Annotated[List[str], BeforeValidator(_labels)]
Flag = Annotated[bool, BeforeValidator(_flag)]
Text = Annotated[str, BeforeValidator(_text)]

OptionalScore = Annotated[Optional[int], BeforeValidator(_optional_score)]
OptionalLabels = Annotated[Optional[List[str]], BeforeValidator(_optional_labels)]
OptionalFlag = Annotated[Optional[bool], BeforeValidator(_optional_flag)]
OptionalText = Annotated[Optional[str], BeforeValidator(_optional_text)]


SECTION_NAMES = (
    "data_collection",
    "user_rights",
    "data_sharing",
    "cookies_tracking",
    "security_measures",
    "policy_updates",
    "compliance",
    "contact_info",
    "transparency",
    "data_retention",
)


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class _Document(_Record):
    """Root record: sections that are not JSON objects are treated as missing."""

    @model_validator(mode="before")
    @classmethod
    def _drop_malformed_sections(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if key not in SECTION_NAMES or isinstance(value, (dict, BaseModel))
        }


# ---------------------------
# Complete analysis
# ---------------------------

class DataCollection(_Record):
    types: Labels = Field(default_factory=list, description="Categories of data collected")
    purposes: Labels = Field(default_factory=list, description="Stated purposes of collection")
    transparency_score: Score = 0
    justification: Text = ""


class UserRights(_Record):
    access: Flag = False
    deletion: Flag = False
    correction: Flag = False
    portability: Flag = False
    opt_out: Flag = False
    opt_out_methods: Labels = Field(default_factory=list)
    rights_score: Score = 0
    details: Text = ""


class DataSharing(_Record):
    third_parties: Flag = False
    third_party_purposes: Labels = Field(default_factory=list)
    international_transfers: Flag = False
    transfer_safeguards: Labels = Field(default_factory=list)
    law_enforcement: Flag = False
    user_control: Flag = False
    sharing_score: Score = 0


class CookiesTracking(_Record):
    cookies_used: Flag = False
    tracking_technologies: Labels = Field(default_factory=list)
    opt_out_available: Flag = False
    granular_controls: Flag = False
    tracking_score: Score = 0


class SecurityMeasures(_Record):
    measures: Labels = Field(default_factory=list)
    encryption_mentioned: Flag = False
    access_controls: Flag = False
    incident_response: Flag = False
    security_score: Score = 0


class PolicyUpdates(_Record):
    notification_method: Annotated[str, BeforeValidator(_notification)] = NOT_SPECIFIED
    frequency_mentioned: Flag = False
    user_consent_required: Flag = False


class Compliance(_Record):
    gdpr_mentioned: Flag = False
    ccpa_mentioned: Flag = False
    coppa_mentioned: Flag = False
    other_regulations: Labels = Field(default_factory=list)
    compliance_score: Score = 0


class ContactInfo(_Record):
    provided: Flag = False
    methods: Labels = Field(default_factory=list)
    dpo_mentioned: Flag = False


class Transparency(_Record):
    clear_language: Flag = False
    easy_to_find: Flag = False
    well_organized: Flag = False
    specific_examples: Flag = False
    transparency_score: Score = 0


class DataRetention(_Record):
    retention_period_specified: Flag = False
    deletion_process_clear: Flag = False
    retention_score: Score = 0


class StructuredAnalysis(_Document):
    """Complete, fixed-schema assessment of one privacy policy."""

    summary: Text = ""
    data_collection: DataCollection = Field(default_factory=DataCollection)
    user_rights: UserRights = Field(default_factory=UserRights)
    data_sharing: DataSharing = Field(default_factory=DataSharing)
    cookies_tracking: CookiesTracking = Field(default_factory=CookiesTracking)
    security_measures: SecurityMeasures = Field(default_factory=SecurityMeasures)
    policy_updates: PolicyUpdates = Field(default_factory=PolicyUpdates)
    compliance: Compliance = Field(default_factory=Compliance)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    transparency: Transparency = Field(default_factory=Transparency)
    data_retention: DataRetention = Field(default_factory=DataRetention)
    analysis_method: Optional[AnalysisMethod] = Field(
        None, description="Which provider produced this analysis"
    )
    ai_error: Optional[str] = Field(
        None, description="Provider failure that caused the rule-based fallback"
    )

    def to_response(self) -> dict:
        """Serialize for the HTTP boundary, leaving out unset tags."""
        return self.model_dump(exclude_none=True)


# ---------------------------
# Partial (per-chunk) analysis
# ---------------------------

class PartialDataCollection(_Record):
    types: OptionalLabels = None
    purposes: OptionalLabels = None
    transparency_score: OptionalScore = None
    justification: OptionalText = None


class PartialUserRights(_Record):
    access: OptionalFlag = None
    deletion: OptionalFlag = None
    correction: OptionalFlag = None
    portability: OptionalFlag = None
    opt_out: OptionalFlag = None
    opt_out_methods: OptionalLabels = None
    rights_score: OptionalScore = None
    details: OptionalText = None


class PartialDataSharing(_Record):
    third_parties: OptionalFlag = None
    third_party_purposes: OptionalLabels = None
    international_transfers: OptionalFlag = None
    transfer_safeguards: OptionalLabels = None
    law_enforcement: OptionalFlag = None
    user_control: OptionalFlag = None
    sharing_score: OptionalScore = None


class PartialCookiesTracking(_Record):
    cookies_used: OptionalFlag = None
    tracking_technologies: OptionalLabels = None
    opt_out_available: OptionalFlag = None
    granular_controls: OptionalFlag = None
    tracking_score: OptionalScore = None


class PartialSecurityMeasures(_Record):
    measures: OptionalLabels = None
    encryption_mentioned: OptionalFlag = None
    access_controls: OptionalFlag = None
    incident_response: OptionalFlag = None
    security_score: OptionalScore = None


class PartialPolicyUpdates(_Record):
    notification_method: OptionalText = None
    frequency_mentioned: OptionalFlag = None
    user_consent_required: OptionalFlag = None


class PartialCompliance(_Record):
    gdpr_mentioned: OptionalFlag = None
    ccpa_mentioned: OptionalFlag = None
    coppa_mentioned: OptionalFlag = None
    other_regulations: OptionalLabels = None
    compliance_score: OptionalScore = None


class PartialContactInfo(_Record):
    provided: OptionalFlag = None
    methods: OptionalLabels = None
    dpo_mentioned: OptionalFlag = None


class PartialTransparency(_Record):
    clear_language: OptionalFlag = None
    easy_to_find: OptionalFlag = None
    well_organized: OptionalFlag = None
    specific_examples: OptionalFlag = None
    transparency_score: OptionalScore = None


class PartialDataRetention(_Record):
    retention_period_specified: OptionalFlag = None
    deletion_process_clear: OptionalFlag = None
    retention_score: OptionalScore = None


class PartialAnalysis(_Document):
    """Findings extracted from a single chunk; absent fields were not determined."""

    summary: OptionalText = None
    data_collection: Optional[PartialDataCollection] = None
    user_rights: Optional[PartialUserRights] = None
    data_sharing: Optional[PartialDataSharing] = None
    cookies_tracking: Optional[PartialCookiesTracking] = None
    security_measures: Optional[PartialSecurityMeasures] = None
    policy_updates: Optional[PartialPolicyUpdates] = None
    compliance: Optional[PartialCompliance] = None
    contact_info: Optional[PartialContactInfo] = None
    transparency: Optional[PartialTransparency] = None
    data_retention: Optional[PartialDataRetention] = None

    @classmethod
    def from_structured(cls, analysis: StructuredAnalysis) -> "PartialAnalysis":
        """View a complete analysis as a partial in which every field is present."""
        return cls.model_validate(analysis.model_dump(exclude={"analysis_method", "ai_error"}))
