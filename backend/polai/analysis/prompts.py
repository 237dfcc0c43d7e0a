"""Prompts for privacy policy analysis with a language model."""

DOCUMENT_SYSTEM_PROMPT = (
    "You are an expert privacy policy analyst. Provide objective, fair, and detailed analysis. "
    "Return ONLY valid JSON with no markdown formatting."
)

SECTION_SYSTEM_PROMPT = (
    "Extract privacy policy information from the provided text section. Return ONLY valid JSON."
)

ANALYSIS_SCHEMA = """{{
  "summary": "2-3 sentence overview highlighting key points and overall privacy posture",
  "data_collection": {{
    "types": ["array of specific data types collected"],
    "purposes": ["array of specific purposes for collection"],
    "transparency_score": 0-10,
    "justification": "Brief explanation of data collection practices"
  }},
  "user_rights": {{
    "access": true/false,
    "deletion": true/false,
    "correction": true/false,
    "portability": true/false,
    "opt_out": true/false,
    "opt_out_methods": ["methods available for opting out"],
    "rights_score": 0-10,
    "details": "Explanation of how rights are implemented"
  }},
  "data_sharing": {{
    "third_parties": true/false,
    "third_party_purposes": ["purposes for sharing"],
    "international_transfers": true/false,
    "transfer_safeguards": ["safeguards mentioned"],
    "law_enforcement": true/false,
    "user_control": true/false,
    "sharing_score": 0-10
  }},
  "cookies_tracking": {{
    "cookies_used": true/false,
    "tracking_technologies": ["list of technologies"],
    "opt_out_available": true/false,
    "granular_controls": true/false,
    "tracking_score": 0-10
  }},
  "security_measures": {{
    "measures": ["specific security measures mentioned"],
    "encryption_mentioned": true/false,
    "access_controls": true/false,
    "incident_response": true/false,
    "security_score": 0-10
  }},
  "policy_updates": {{
    "notification_method": "how users are notified",
    "frequency_mentioned": true/false,
    "user_consent_required": true/false
  }},
  "compliance": {{
    "gdpr_mentioned": true/false,
    "ccpa_mentioned": true/false,
    "coppa_mentioned": true/false,
    "other_regulations": ["list"],
    "compliance_score": 0-10
  }},
  "contact_info": {{
    "provided": true/false,
    "methods": ["available contact methods"],
    "dpo_mentioned": true/false
  }},
  "transparency": {{
    "clear_language": true/false,
    "easy_to_find": true/false,
    "well_organized": true/false,
    "specific_examples": true/false,
    "transparency_score": 0-10
  }},
  "data_retention": {{
    "retention_period_specified": true/false,
    "deletion_process_clear": true/false,
    "retention_score": 0-10
  }}
}}"""

DOCUMENT_ANALYSIS_PROMPT = (
    """You are an expert privacy policy analyst. Analyze this privacy policy thoroughly and provide a detailed JSON response.

IMPORTANT SCORING GUIDELINES:
- Be objective and fair in your assessment
- Consider both positive and negative aspects
- Data collection is NOT inherently bad - evaluate HOW it's handled
- Transparency and user control are key positive indicators
- Strong user rights significantly improve the score

Required JSON Structure:
"""
    + ANALYSIS_SCHEMA
    + """

Privacy Policy URL: {source}

Policy Text:
{policy}

Respond with ONLY valid JSON. No markdown formatting. Be thorough and fair in your evaluation."""
)

SECTION_ANALYSIS_PROMPT = """You are analyzing part {index} of {total} of a privacy policy. Extract ALL relevant information from this section.

Focus on finding:
- Data types collected
- Purposes for collection
- User rights mentioned
- Third-party sharing details
- Security measures
- Tracking technologies
- Compliance regulations
- Contact information
- Any other privacy-relevant details

Return a JSON object with any fields you can determine from this section. Use the same structure as a full analysis, but only include fields where you found information. Mark boolean fields as true if mentioned, false if explicitly denied, or omit if not mentioned.

Policy Section (Part {index}/{total}):
{policy}

Respond with ONLY valid JSON. Include only fields where you found relevant information."""
