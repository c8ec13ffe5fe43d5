"""Turn raw hearing notice text into a ParsedHearingNotice."""

from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from .datetime_normalizer import DEFAULT_TIME_ZONE, normalize_hearing_datetime, resolve_zone
from .errors import MissingRequiredField
from .field_extractor import NOTICE_FIELD_RULES, FieldRule, extract_fields
from .models import ParsedHearingNotice

log = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("applicant_name", "date_of_hearing", "time_of_hearing")


def _hours(value: str | None) -> float:
    if not value:
        return 1
    try:
        hours = float(value)
    except ValueError:
        return 1
    return hours if hours > 0 else 1


class HearingNoticeParser:
    """Parser bound to a rule table and a time zone."""

    def __init__(
        self,
        rules: tuple[FieldRule, ...] = NOTICE_FIELD_RULES,
        time_zone: str | ZoneInfo = DEFAULT_TIME_ZONE,
    ):
        self.rules = rules
        self.zone = resolve_zone(time_zone)

    def check_required(self, fields: dict) -> None:
        missing = [name for name in _REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            raise MissingRequiredField(missing)

    def parse(self, raw_text: str) -> ParsedHearingNotice | None:
        """Parse one notice. Returns None when a required field is missing."""
        fields = extract_fields(raw_text, self.rules)
        try:
            self.check_required(fields)
        except MissingRequiredField as e:
            log.warning("Cannot parse hearing notice: %s", e)
            return None

        date_str = fields["date_of_hearing"]
        time_str = fields["time_of_hearing"]
        hearing_date = normalize_hearing_datetime(date_str, time_str, self.zone)
        if hearing_date is None:
            log.warning(
                "Hearing for %s needs manual date entry (date=%r, time=%r)",
                fields["applicant_name"], date_str, time_str,
            )

        return ParsedHearingNotice(
            raw_text=raw_text,
            applicant_name=fields["applicant_name"],
            hearing_date=hearing_date,
            judge=fields.get("judge"),
            case_numbers=fields.get("case_numbers") or (),
            employers=fields.get("employers") or (),
            insurer=fields.get("insurer"),
            type_of_hearing=fields.get("type_of_hearing"),
            time_of_hearing_raw=time_str,
            location_details=fields.get("location_details"),
            notes=fields.get("notes"),
            length_of_hearing_hours=_hours(fields.get("length_of_hearing")),
        )


def parse_notice(
    raw_text: str,
    time_zone: str | ZoneInfo = DEFAULT_TIME_ZONE,
) -> ParsedHearingNotice | None:
    """Parse ``raw_text`` with the default rule table."""
    return HearingNoticeParser(time_zone=time_zone).parse(raw_text)
