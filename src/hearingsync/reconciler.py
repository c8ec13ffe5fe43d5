"""Match a parsed hearing against the calendar and create, move or skip it."""

from __future__ import annotations

import logging

from .calendar_gateway import CalendarGateway, TimeWindow
from .errors import GatewayError
from .event_builder import DEFAULT_EXCERPT_CHARS, build_event, build_rescheduled_event
from .models import (
    CalendarEvent,
    Created,
    Failed,
    ParsedHearingNotice,
    ReconcileOutcome,
    Skipped,
    SkipCode,
    Updated,
)

log = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7


def filter_by_case_numbers(
    events: list[CalendarEvent], case_numbers: tuple[str, ...]
) -> list[CalendarEvent]:
    """Keep events whose summary or description mentions any case number."""
    if not case_numbers:
        return list(events)
    needles = [cn.lower() for cn in case_numbers]
    return [e for e in events if any(n in e.searchable_text for n in needles)]


async def find_matching_events(
    notice: ParsedHearingNotice,
    gateway: CalendarGateway,
    calendar_id: str,
    *,
    first_ingestion: bool = False,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> list[CalendarEvent]:
    """Free-text search on the applicant, then a client-side case-number filter."""
    window = None
    if not first_ingestion and notice.hearing_date is not None:
        window = TimeWindow.around(notice.hearing_date, window_days)
    candidates = await gateway.find_events(calendar_id, notice.applicant_name, window)
    return filter_by_case_numbers(candidates, notice.case_numbers)


async def reconcile(
    notice: ParsedHearingNotice,
    gateway: CalendarGateway,
    calendar_id: str,
    time_zone: str,
    *,
    first_ingestion: bool = False,
    window_days: int = DEFAULT_WINDOW_DAYS,
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
    dry_run: bool = False,
) -> ReconcileOutcome:
    """Bring the calendar in line with ``notice``. Never raises on gateway errors.

    Re-running with the same inputs is safe: the search is repeated from
    scratch and an event already at the hearing time is left alone.
    """
    if notice.hearing_date is None:
        log.info("Skipping %s: no hearing date", notice.applicant_name)
        return Skipped("no date", SkipCode.NO_DATE)

    try:
        matches = await find_matching_events(
            notice, gateway, calendar_id,
            first_ingestion=first_ingestion, window_days=window_days,
        )

        if not matches:
            event = build_event(notice, time_zone, excerpt_chars=excerpt_chars)
            if dry_run:
                log.info("[DRY RUN] Would create %r", event.summary)
                return Skipped(f"dry run: would create {event.summary!r}", SkipCode.DRY_RUN)
            created = await gateway.create_event(calendar_id, event)
            log.info("Created event %s for %s", created.id, notice.applicant_name)
            return Created(created)

        if len(matches) > 1:
            ids = ", ".join(str(m.id) for m in matches)
            log.warning(
                "Ambiguous match for %s: %d events (%s)", notice.applicant_name, len(matches), ids,
            )
            return Skipped(
                f"ambiguous match: {len(matches)} events ({ids})", SkipCode.AMBIGUOUS_MATCH,
            )

        existing = matches[0]
        if existing.start == notice.hearing_date:
            log.debug("Event %s already at %s", existing.id, notice.hearing_date)
            return Skipped(f"event {existing.id} already scheduled", SkipCode.ALREADY_SCHEDULED)

        event, prior_notes = build_rescheduled_event(
            notice, existing, time_zone, excerpt_chars=excerpt_chars,
        )
        if dry_run:
            log.info("[DRY RUN] Would move event %s to %s", existing.id, notice.hearing_date)
            return Skipped(f"dry run: would move event {existing.id}", SkipCode.DRY_RUN)
        updated = await gateway.update_event(calendar_id, existing.id, event)
        log.info(
            "Moved event %s for %s from %s to %s",
            updated.id, notice.applicant_name, existing.start, notice.hearing_date,
        )
        return Updated(updated, prior_notes)

    except GatewayError as e:
        log.warning("Calendar gateway failed for %s: %s", notice.applicant_name, e)
        return Failed(str(e))
    except Exception as e:
        log.error("Reconciliation failed for %s", notice.applicant_name, exc_info=True)
        return Failed(f"unexpected error: {e}")
