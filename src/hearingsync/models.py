"""Data models for hearing notices, classifications and calendar outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


class HearingStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONTINUED = "continued"
    VACATED = "vacated"
    COMPLETED = "completed"


class ContentType(str, Enum):
    HEARING_NOTES = "hearing-notes"
    OTHER = "other"


class SkipCode(str, Enum):
    NO_DATE = "no_date"
    ALREADY_SCHEDULED = "already_scheduled"
    AMBIGUOUS_MATCH = "ambiguous_match"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class ParsedHearingNotice:
    """Structured hearing record produced from one notice."""

    raw_text: str
    applicant_name: str
    hearing_date: datetime | None = None
    hearing_status: HearingStatus = HearingStatus.SCHEDULED
    judge: str | None = None
    case_numbers: tuple[str, ...] = ()
    employers: tuple[str, ...] = ()
    insurer: str | None = None
    type_of_hearing: str | None = None
    time_of_hearing_raw: str | None = None
    location_details: str | None = None
    notes: str | None = None
    length_of_hearing_hours: float = 1

    @property
    def needs_manual_date(self) -> bool:
        return self.hearing_date is None

    @property
    def location_line(self) -> str | None:
        """First non-empty line of the location block."""
        if not self.location_details:
            return None
        for line in self.location_details.splitlines():
            if line.strip():
                return line.strip()
        return None

    @property
    def end_date(self) -> datetime | None:
        if self.hearing_date is None:
            return None
        hours = self.length_of_hearing_hours if self.length_of_hearing_hours > 0 else 1
        return self.hearing_date + timedelta(hours=hours)


@dataclass
class ExtractedLegalInfo:
    applicant_name: str = "Unknown Applicant"
    respondent_name: str = "Unknown Respondent"
    case_number: str = "Unknown"
    hearing_date_text: str | None = None
    hearing_status: str = "Pending"
    claim_type: str = "General"
    key_issues: list[str] = field(default_factory=lambda: ["Case Review Needed"])
    representation_status: str = "Unknown"


@dataclass
class ClassificationResult:
    detected_legal_content: bool
    content_type: ContentType
    confidence: int
    extracted_info: ExtractedLegalInfo
    original_text: str = ""


@dataclass
class CalendarEvent:
    """Calendar entry as exchanged with the gateway."""

    summary: str = ""
    description: str = ""
    start: datetime | None = None
    end: datetime | None = None
    location: str | None = None
    time_zone: str | None = None
    id: str | None = None

    @property
    def searchable_text(self) -> str:
        return f"{self.summary} {self.description}".lower()


@dataclass(frozen=True)
class Created:
    event: CalendarEvent

    needs_attention = False


@dataclass(frozen=True)
class Updated:
    event: CalendarEvent
    previous_notes: str = ""

    needs_attention = False


@dataclass(frozen=True)
class Skipped:
    reason: str
    code: SkipCode

    @property
    def needs_attention(self) -> bool:
        return self.code in (SkipCode.NO_DATE, SkipCode.AMBIGUOUS_MATCH)


@dataclass(frozen=True)
class Failed:
    reason: str
    retryable: bool = True

    needs_attention = True


ReconcileOutcome = Created | Updated | Skipped | Failed
