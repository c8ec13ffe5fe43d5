"""Shared fixtures for hearingsync tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from hearingsync.calendar_gateway import TimeWindow
from hearingsync.config import Config
from hearingsync.errors import GatewayRejected, GatewayUnavailable
from hearingsync.models import CalendarEvent, ParsedHearingNotice

LA = ZoneInfo("America/Los_Angeles")

SAMPLE_NOTICE = """\
WORKERS' COMPENSATION APPEALS BOARD
NOTICE OF HEARING

EMPLOYEE: JANE DOE
CASE NBR(s): ADJ1234567, ADJ7654321
EMPLOYER: ACME CORP, ACME HOLDINGS
INSURER: STATE COMPENSATION INSURANCE FUND
DATE OF HEARING: 06/26/2025
TIME OF HEARING: 08:30 A.M.
TYPE OF HEARING: MANDATORY SETTLEMENT CONFERENCE
LOCATION: OAKLAND DISTRICT OFFICE
1515 CLAY STREET, 6TH FLOOR
OAKLAND, CA 94612
VIDEOCONFERENCE
JUDGE: HON. JOHN SMITH
SPECIAL COMMENTS/INSTRUCTIONS: Bring all medical reports.
Interpreter requested: Spanish.
NOTICE TO INJURED WORKERS: If you do not have an attorney, an Information
and Assistance officer can answer your questions.
WC01 Rev. 03/2019
"""


def make_notice_text(
    applicant: str = "JANE DOE",
    date: str = "06/26/2025",
    time: str = "08:30 A.M.",
    cases: str = "ADJ1234567, ADJ7654321",
    comments: str = "Bring all medical reports.",
) -> str:
    return (
        f"EMPLOYEE: {applicant}\n"
        f"CASE NBR(s): {cases}\n"
        f"DATE OF HEARING: {date}\n"
        f"TIME OF HEARING: {time}\n"
        "TYPE OF HEARING: STATUS CONFERENCE\n"
        "LOCATION: OAKLAND DISTRICT OFFICE\n"
        "JUDGE: HON. JOHN SMITH\n"
        f"SPECIAL COMMENTS/INSTRUCTIONS: {comments}\n"
        "WC01 Rev. 03/2019\n"
    )


class InMemoryCalendarGateway:
    """CalendarGateway double backed by a dict, with call recording."""

    def __init__(self, events: list[CalendarEvent] | None = None):
        self.events: dict[str, CalendarEvent] = {}
        self.deleted: set[str] = set()
        self.calls: list[tuple] = []
        self._next_id = 1
        for event in events or []:
            self.add(event)

    def add(self, event: CalendarEvent) -> CalendarEvent:
        return self._store(event)

    def _store(self, event: CalendarEvent) -> CalendarEvent:
        if event.id is None:
            event = replace(event, id=f"evt-{self._next_id}")
            self._next_id += 1
        self.events[event.id] = event
        return replace(event)

    async def find_events(
        self,
        calendar_id: str,
        text_query: str,
        time_window: TimeWindow | None = None,
    ) -> list[CalendarEvent]:
        self.calls.append(("find", calendar_id, text_query, time_window))
        found = []
        for event in self.events.values():
            if event.id in self.deleted:
                continue
            if text_query and text_query.lower() not in event.searchable_text:
                continue
            if time_window is not None and (event.start is None or not time_window.contains(event.start)):
                continue
            found.append(replace(event))
        return found

    async def create_event(self, calendar_id: str, event: CalendarEvent) -> CalendarEvent:
        self.calls.append(("create", calendar_id, event))
        return self._store(replace(event, id=None))

    async def update_event(self, calendar_id: str, event_id: str, event: CalendarEvent) -> CalendarEvent:
        self.calls.append(("update", calendar_id, event_id, event))
        if event_id not in self.events or event_id in self.deleted:
            raise GatewayRejected(f"event {event_id} not found", status_code=404)
        return self._store(replace(event, id=event_id))

    async def delete_event(self, calendar_id: str, event_id: str) -> bool:
        self.calls.append(("delete", calendar_id, event_id))
        if event_id not in self.events or event_id in self.deleted:
            return False
        self.deleted.add(event_id)
        return True

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


class UnreachableCalendarGateway(InMemoryCalendarGateway):
    """Every call fails as if the provider were down."""

    async def find_events(self, calendar_id, text_query, time_window=None):
        self.calls.append(("find", calendar_id, text_query, time_window))
        raise GatewayUnavailable("findEvents failed: connection refused")


@pytest.fixture
def sample_notice_text() -> str:
    return SAMPLE_NOTICE


@pytest.fixture
def hearing_start() -> datetime:
    return datetime(2025, 6, 26, 8, 30, tzinfo=LA)


@pytest.fixture
def sample_notice(hearing_start: datetime) -> ParsedHearingNotice:
    return ParsedHearingNotice(
        raw_text=SAMPLE_NOTICE,
        applicant_name="JANE DOE",
        hearing_date=hearing_start,
        judge="HON. JOHN SMITH",
        case_numbers=("ADJ1234567", "ADJ7654321"),
        employers=("ACME CORP", "ACME HOLDINGS"),
        insurer="STATE COMPENSATION INSURANCE FUND",
        type_of_hearing="MANDATORY SETTLEMENT CONFERENCE",
        time_of_hearing_raw="08:30 A.M.",
        location_details="OAKLAND DISTRICT OFFICE\n1515 CLAY STREET, 6TH FLOOR\nOAKLAND, CA 94612",
        notes="Bring all medical reports.",
    )


@pytest.fixture
def gateway() -> InMemoryCalendarGateway:
    return InMemoryCalendarGateway()


@pytest.fixture
def sample_config(tmp_path: Path) -> Config:
    return Config(
        calendar_id="primary",
        inbox_dir=tmp_path / "inbox",
        state_path=tmp_path / "state.json",
        access_token="test-token",
    )


@pytest.fixture
def notice_text():
    """Factory for minimal notices with overridable fields."""
    return make_notice_text


@pytest.fixture
def unreachable_gateway() -> UnreachableCalendarGateway:
    return UnreachableCalendarGateway()
