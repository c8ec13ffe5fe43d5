"""Rule-based legal content classifier.

Keyword vocabularies are matched as case-insensitive substrings. Claim types
are checked in priority order and the first hit wins; every matching key
issue is reported. This path never calls out and always reports the same
confidence.
"""

from __future__ import annotations

import re

from .models import ClassificationResult, ContentType, ExtractedLegalInfo

RULE_BASED_CONFIDENCE = 85
DEFAULT_CLAIM_TYPE = "General"
DEFAULT_KEY_ISSUE = "Case Review Needed"

CLAIM_TYPES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Workers Compensation", ("workers comp", "workers' compensation", "workers’ compensation")),
    ("Personal Injury", ("personal injury",)),
    ("Medical Malpractice", ("medical malpractice",)),
    ("Disability", ("disability",)),
    ("Employment", ("employment", "wrongful termination")),
)

KEY_ISSUES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Liability Dispute", ("liability", "negligence")),
    ("Damages Calculation", ("damages", "compensation amount")),
    ("Medical Evidence", ("medical", "injury", "diagnosis")),
    ("Settlement Negotiation", ("settlement", "offer")),
    ("Filing Deadlines", ("deadline", "statute of limitations")),
)

UNREPRESENTED_PHRASES = ("pro se", "unrepresented")
REPRESENTED_PHRASES = ("attorney", "counsel", "represented by")

_APPLICANT_RE = re.compile(r"(?i:applicant|claimant|plaintiff):?\s*([A-Z][a-z]+ [A-Z][a-z]+)")
_RESPONDENT_RE = re.compile(
    r"(?i:respondent|defendant|employer):?\s*([A-Z][a-z]+ [A-Z][a-z]+|[A-Z][A-Z ]*[A-Z])"
)
_HEARING_DATE_RE = re.compile(
    r"(?:hearing|court) date:?\s*([A-Z][a-z]+ \d{1,2},? \d{4}|\d{1,2}/\d{1,2}/\d{2,4})",
    re.IGNORECASE,
)
_CASE_NUMBER_RE = re.compile(r"(?:case|claim|docket) (?:no|number|#)\.?:?\s*([A-Z0-9-]+)", re.IGNORECASE)
# Labeled line only; "STATUS CONFERENCE" in a hearing type is not a status
_STATUS_RE = re.compile(
    r"^[ \t]*(?:hearing status|status)[ \t]*:[ \t]*([A-Za-z][A-Za-z ]*)",
    re.IGNORECASE | re.MULTILINE,
)
_HEARING_WORD_RE = re.compile(r"\bhearings?\b", re.IGNORECASE)


def _contains_any(lower_text: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in lower_text for phrase in phrases)


def detect_claim_type(text: str) -> str:
    lower_text = text.lower()
    for claim_type, phrases in CLAIM_TYPES:
        if _contains_any(lower_text, phrases):
            return claim_type
    return DEFAULT_CLAIM_TYPE


def detect_key_issues(text: str) -> list[str]:
    lower_text = text.lower()
    issues = [issue for issue, phrases in KEY_ISSUES if _contains_any(lower_text, phrases)]
    return issues or [DEFAULT_KEY_ISSUE]


def detect_representation_status(text: str) -> str:
    lower_text = text.lower()
    if _contains_any(lower_text, UNREPRESENTED_PHRASES):
        return "Unrepresented"
    if _contains_any(lower_text, REPRESENTED_PHRASES):
        return "Represented"
    return "Unknown"


def _first_group(pattern: re.Pattern, text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1).strip() if match else None


def extract_legal_info(text: str) -> ExtractedLegalInfo:
    """Best-effort names, case number and tags from free text."""
    return ExtractedLegalInfo(
        applicant_name=_first_group(_APPLICANT_RE, text) or "Unknown Applicant",
        respondent_name=_first_group(_RESPONDENT_RE, text) or "Unknown Respondent",
        case_number=_first_group(_CASE_NUMBER_RE, text) or "Unknown",
        hearing_date_text=_first_group(_HEARING_DATE_RE, text),
        hearing_status=_first_group(_STATUS_RE, text) or "Pending",
        claim_type=detect_claim_type(text),
        key_issues=detect_key_issues(text),
        representation_status=detect_representation_status(text),
    )


def _has_signal(info: ExtractedLegalInfo) -> bool:
    return (
        info.claim_type != DEFAULT_CLAIM_TYPE
        or info.key_issues != [DEFAULT_KEY_ISSUE]
        or info.representation_status != "Unknown"
        or info.case_number != "Unknown"
        or info.applicant_name != "Unknown Applicant"
        or info.hearing_date_text is not None
    )


def classify(text: str) -> ClassificationResult:
    """Classify ``text`` for legal content."""
    info = extract_legal_info(text)
    is_hearing = bool(_HEARING_WORD_RE.search(text)) or info.hearing_date_text is not None
    return ClassificationResult(
        detected_legal_content=_has_signal(info) or is_hearing,
        content_type=ContentType.HEARING_NOTES if is_hearing else ContentType.OTHER,
        confidence=RULE_BASED_CONFIDENCE,
        extracted_info=info,
        original_text=text,
    )
