"""Tests for hearingsync.event_builder — summaries, descriptions, prior notes."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta

from hearingsync.event_builder import (
    MOVED_MARKER,
    build_description,
    build_event,
    build_rescheduled_description,
    build_rescheduled_event,
    build_summary,
    extract_prior_notes,
)
from hearingsync.models import CalendarEvent


class TestBuildSummary:
    def test_with_case_numbers(self, sample_notice):
        assert build_summary(sample_notice) == "Hearing: JANE DOE - Case(s): ADJ1234567, ADJ7654321"

    def test_without_case_numbers(self, sample_notice):
        assert build_summary(replace(sample_notice, case_numbers=())) == "Hearing: JANE DOE"

    def test_rescheduled_suffix(self, sample_notice):
        assert build_summary(sample_notice, rescheduled=True).endswith(" (Rescheduled)")


class TestBuildDescription:
    def test_contains_details_and_notes(self, sample_notice):
        desc = build_description(sample_notice)
        assert "Type: MANDATORY SETTLEMENT CONFERENCE" in desc
        assert "Judge: HON. JOHN SMITH" in desc
        assert "Location: OAKLAND DISTRICT OFFICE" in desc
        assert desc.endswith("--- Full Notes ---\nBring all medical reports.")

    def test_excerpt_truncated(self, sample_notice):
        notice = replace(sample_notice, raw_text="x" * 800)
        desc = build_description(notice, excerpt_chars=500)
        assert "x" * 500 in desc
        assert "x" * 501 not in desc

    def test_missing_fields_na(self, sample_notice):
        notice = replace(sample_notice, judge=None, type_of_hearing=None, location_details=None, notes=None)
        desc = build_description(notice)
        assert "Judge: N/A" in desc
        assert "Type: N/A" in desc
        assert "Location: N/A" in desc


class TestRescheduledDescription:
    def test_marker_first_and_both_notes(self, sample_notice):
        desc = build_rescheduled_description(sample_notice, "Old instructions.")
        assert desc.startswith(MOVED_MARKER)
        assert "--- Current Notes ---\nBring all medical reports." in desc
        assert "--- Notes from Prior Event ---\nOld instructions." in desc

    def test_previous_start_shown(self, sample_notice):
        desc = build_rescheduled_description(sample_notice, "", datetime(2025, 6, 20, 9, 0))
        assert desc.startswith(f"{MOVED_MARKER} (06/20/2025 09:00 AM).")
        assert "--- Notes from Prior Event ---\nN/A" in desc


class TestExtractPriorNotes:
    def test_from_created_description(self, sample_notice):
        assert extract_prior_notes(build_description(sample_notice)) == "Bring all medical reports."

    def test_from_rescheduled_description_keeps_history(self, sample_notice):
        desc = build_rescheduled_description(
            replace(sample_notice, notes="Second notice."), "First notice.",
        )
        assert extract_prior_notes(desc) == "Second notice.\n\nFirst notice."

    def test_handwritten_description_kept_whole(self):
        assert extract_prior_notes("  call the client first  ") == "call the client first"

    def test_empty(self):
        assert extract_prior_notes(None) == ""
        assert extract_prior_notes("   ") == ""

    def test_empty_notes_section(self, sample_notice):
        assert extract_prior_notes(build_description(replace(sample_notice, notes=None))) == ""


class TestBuildEvent:
    def test_times_and_location(self, sample_notice, hearing_start):
        event = build_event(sample_notice, "America/Los_Angeles")
        assert event.id is None
        assert event.start == hearing_start
        assert event.end == hearing_start + timedelta(hours=1)
        assert event.location == "OAKLAND DISTRICT OFFICE"
        assert event.time_zone == "America/Los_Angeles"

    def test_length_of_hearing_used(self, sample_notice, hearing_start):
        event = build_event(replace(sample_notice, length_of_hearing_hours=3), "UTC")
        assert event.end - event.start == timedelta(hours=3)

    def test_rescheduled_event_keeps_id_and_notes(self, sample_notice, hearing_start):
        existing = CalendarEvent(
            id="evt-9",
            summary="Hearing: JANE DOE",
            description="Type: X\n\n--- Full Notes ---\nParking in lot B.",
            start=hearing_start - timedelta(days=3),
        )
        event, prior = build_rescheduled_event(sample_notice, existing, "UTC")
        assert event.id == "evt-9"
        assert prior == "Parking in lot B."
        assert "Parking in lot B." in event.description
        assert "Bring all medical reports." in event.description
        assert event.start == hearing_start
