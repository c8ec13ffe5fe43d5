"""Labeled-field extraction rules for hearing notice text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

log = logging.getLogger(__name__)

# OCR'd notices sometimes carry replacement characters and their mojibake form
_REPLACEMENT_CHARS_RE = re.compile("�|ï¿½")

FOOTER_MARKERS: tuple[str, ...] = (
    "NOTICE TO INJURED WORKERS:",
    "You are hereby notified",
    "WC01 Rev.",
)


class RuleKind(str, Enum):
    LINE = "line"
    BLOCK = "block"


@dataclass(frozen=True)
class FieldRule:
    """One row of the extraction table.

    LINE rules capture ``LABEL: value`` up to the end of the line. BLOCK rules
    capture everything after ``LABEL:`` until the next known label or footer
    marker.
    """

    name: str
    label: str
    kind: RuleKind = RuleKind.LINE
    value_pattern: str = r".*"
    split_list: bool = False
    trailing_marker: str | None = None

    @property
    def marker(self) -> str:
        return f"{self.label}:"


NOTICE_FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("applicant_name", "EMPLOYEE"),
    FieldRule("date_of_hearing", "DATE OF HEARING", value_pattern=r"\d{1,2}/\d{1,2}/\d{4}"),
    FieldRule("time_of_hearing", "TIME OF HEARING"),
    FieldRule("judge", "JUDGE"),
    FieldRule("case_numbers", "CASE NBR(s)", split_list=True),
    FieldRule("employers", "EMPLOYER", split_list=True),
    FieldRule("insurer", "INSURER"),
    FieldRule("type_of_hearing", "TYPE OF HEARING"),
    FieldRule("length_of_hearing", "LENGTH OF HEARING", value_pattern=r"\d+(?:\.\d+)?"),
    FieldRule("location_details", "LOCATION", kind=RuleKind.BLOCK, trailing_marker="VIDEOCONFERENCE"),
    FieldRule("notes", "SPECIAL COMMENTS/INSTRUCTIONS", kind=RuleKind.BLOCK),
)


def clean_text(text: str) -> str:
    """Strip Unicode replacement characters left behind by OCR."""
    return _REPLACEMENT_CHARS_RE.sub("", text)


def _stop_markers(rule: FieldRule, rules: tuple[FieldRule, ...]) -> list[str]:
    markers = [r.marker for r in rules if r.name != rule.name]
    if rule.kind is RuleKind.BLOCK:
        markers.extend(FOOTER_MARKERS)
    return markers


def _label_regex(rule: FieldRule) -> str:
    # Match whole labels only so EMPLOYER does not fire inside "EMPLOYERS"
    return r"(?<![A-Za-z])" + re.escape(rule.label) + r"[ \t]*:"


def _cut_at_markers(value: str, markers: list[str]) -> str:
    cut = len(value)
    for marker in markers:
        idx = value.find(marker)
        if idx != -1 and idx < cut:
            cut = idx
    return value[:cut]


def extract_field(
    text: str,
    rule: FieldRule,
    rules: tuple[FieldRule, ...] = NOTICE_FIELD_RULES,
) -> str | None:
    """Return the trimmed value captured by ``rule`` or None."""
    markers = _stop_markers(rule, rules)
    try:
        if rule.kind is RuleKind.LINE:
            # OCR often pushes the value onto the line below its label
            match = re.search(
                _label_regex(rule) + r"[ \t]*(?:\r?\n[ \t]*)?(" + rule.value_pattern + r")", text
            )
            if not match:
                return None
            value = _cut_at_markers(match.group(1), markers)
        else:
            match = re.search(_label_regex(rule) + r"\s*", text)
            if not match:
                return None
            value = _cut_at_markers(text[match.end():], markers)
            if rule.trailing_marker:
                value = re.sub(
                    r"\s*" + re.escape(rule.trailing_marker) + r"\s*$", "", value.strip()
                )
    except re.error:
        log.error("Invalid pattern for field rule %s", rule.name, exc_info=True)
        return None

    value = value.strip()
    return value or None


def extract_list(
    text: str,
    rule: FieldRule,
    rules: tuple[FieldRule, ...] = NOTICE_FIELD_RULES,
) -> tuple[str, ...]:
    """Return the comma-separated values captured by ``rule``, in text order."""
    raw = extract_field(text, rule, rules)
    if raw is None:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def extract_fields(
    text: str,
    rules: tuple[FieldRule, ...] = NOTICE_FIELD_RULES,
) -> dict[str, str | tuple[str, ...] | None]:
    """Run every rule in the table over ``text``."""
    cleaned = clean_text(text)
    fields: dict[str, str | tuple[str, ...] | None] = {}
    for rule in rules:
        if rule.split_list:
            fields[rule.name] = extract_list(cleaned, rule, rules)
        else:
            fields[rule.name] = extract_field(cleaned, rule, rules)
    return fields
