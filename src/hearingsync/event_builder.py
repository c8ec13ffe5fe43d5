"""Build calendar event text from parsed hearing notices."""

from __future__ import annotations

import re
from datetime import datetime

from .models import CalendarEvent, ParsedHearingNotice

MOVED_MARKER = "MOVED FROM PREVIOUS DATE"
RESCHEDULED_SUFFIX = " (Rescheduled)"
DEFAULT_EXCERPT_CHARS = 500

_SECTION_RE = re.compile(r"^--- (.+?) ---$")
_EXCERPT_HEADING = "Original Notice Text"
_NOTE_SECTIONS = ("Full Notes", "Current Notes", "Notes from Prior Event")


def build_summary(notice: ParsedHearingNotice, *, rescheduled: bool = False) -> str:
    """Event title like 'Hearing: JANE DOE - Case(s): ADJ1, ADJ2'."""
    summary = f"Hearing: {notice.applicant_name}"
    if notice.case_numbers:
        summary += f" - Case(s): {', '.join(notice.case_numbers)}"
    if rescheduled:
        summary += RESCHEDULED_SUFFIX
    return summary


def _details(notice: ParsedHearingNotice) -> str:
    return (
        f"Type: {notice.type_of_hearing or 'N/A'}\n"
        f"Judge: {notice.judge or 'N/A'}\n"
        f"Location: {notice.location_details or 'N/A'}"
    )


def _excerpt(notice: ParsedHearingNotice, excerpt_chars: int) -> str:
    return (
        f"{_EXCERPT_HEADING} (first {excerpt_chars} chars):\n"
        f"{notice.raw_text[:excerpt_chars]}"
    )


def build_description(
    notice: ParsedHearingNotice,
    *,
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
) -> str:
    """Description for a newly created hearing event."""
    return (
        f"{_details(notice)}\n\n"
        f"{_excerpt(notice, excerpt_chars)}\n\n"
        f"--- Full Notes ---\n{notice.notes or ''}"
    )


def build_rescheduled_description(
    notice: ParsedHearingNotice,
    prior_notes: str,
    previous_start: datetime | None = None,
    *,
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
) -> str:
    """Description for a moved hearing, carrying the prior event's notes."""
    marker = MOVED_MARKER
    if previous_start is not None:
        marker += f" ({previous_start.strftime('%m/%d/%Y %I:%M %p')})"
    return (
        f"{marker}.\n"
        f"{_details(notice)}\n\n"
        f"--- Current Notes ---\n{notice.notes or ''}\n\n"
        f"--- Notes from Prior Event ---\n{prior_notes or 'N/A'}\n\n"
        f"{_excerpt(notice, excerpt_chars)}"
    )


def extract_prior_notes(description: str | None) -> str:
    """Pull the notes sections out of an existing event description.

    Descriptions not written by this package are kept whole.
    """
    if not description or not description.strip():
        return ""

    sections: dict[str, list[str]] = {}
    current: str | None = None
    for line in description.splitlines():
        match = _SECTION_RE.match(line.strip())
        if match:
            current = match.group(1)
            sections.setdefault(current, [])
            continue
        if line.startswith(_EXCERPT_HEADING):
            current = None
            continue
        if current is not None:
            sections[current].append(line)

    if not sections:
        return description.strip()

    parts: list[str] = []
    for name in _NOTE_SECTIONS:
        text = "\n".join(sections.get(name, [])).strip()
        if text and text != "N/A" and text not in parts:
            parts.append(text)
    return "\n\n".join(parts)


def build_event(
    notice: ParsedHearingNotice,
    time_zone: str,
    *,
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
) -> CalendarEvent:
    """Event payload for a notice that has no calendar entry yet."""
    return CalendarEvent(
        summary=build_summary(notice),
        description=build_description(notice, excerpt_chars=excerpt_chars),
        start=notice.hearing_date,
        end=notice.end_date,
        location=notice.location_line,
        time_zone=time_zone,
    )


def build_rescheduled_event(
    notice: ParsedHearingNotice,
    existing: CalendarEvent,
    time_zone: str,
    *,
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
) -> tuple[CalendarEvent, str]:
    """Updated payload for ``existing`` and the prior notes it carries over."""
    prior_notes = extract_prior_notes(existing.description)
    event = CalendarEvent(
        id=existing.id,
        summary=build_summary(notice, rescheduled=True),
        description=build_rescheduled_description(
            notice, prior_notes, existing.start, excerpt_chars=excerpt_chars,
        ),
        start=notice.hearing_date,
        end=notice.end_date,
        location=notice.location_line,
        time_zone=time_zone,
    )
    return event, prior_notes
