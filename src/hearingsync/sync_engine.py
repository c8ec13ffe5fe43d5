"""Orchestrator: read notices -> parse -> classify -> reconcile."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from .calendar_gateway import CalendarGateway, GoogleCalendarGateway
from .classifier import classify
from .config import Config
from .ingest_state import IngestState
from .models import ClassificationResult, Failed, ParsedHearingNotice, ReconcileOutcome
from .notice_parser import HearingNoticeParser
from .reconciler import reconcile

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoticeSource:
    name: str
    text: str


@dataclass
class IngestionResult:
    source: str
    notice: ParsedHearingNotice | None
    classification: ClassificationResult
    outcome: ReconcileOutcome | None = None

    @property
    def needs_attention(self) -> bool:
        if self.notice is None:
            return True
        return self.outcome is not None and self.outcome.needs_attention


def hearing_key(notice: ParsedHearingNotice) -> str:
    """Serialization key for one hearing: applicant plus sorted case numbers."""
    cases = ",".join(sorted(cn.upper() for cn in notice.case_numbers))
    return f"{notice.applicant_name.strip().upper()}|{cases}"


def read_notice_files(paths: list[Path]) -> list[NoticeSource]:
    """Read plain-text notices, skipping unreadable files."""
    sources: list[NoticeSource] = []
    for path in paths:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            log.error("Failed to read notice %s", path, exc_info=True)
            continue
        sources.append(NoticeSource(name=str(path), text=text))
    return sources


def inbox_notices(inbox_dir: Path) -> list[Path]:
    if not inbox_dir.is_dir():
        log.warning("Inbox directory not found at %s", inbox_dir)
        return []
    return sorted(inbox_dir.glob("*.txt"))


async def ingest_notices(
    sources: list[NoticeSource],
    config: Config,
    gateway: CalendarGateway,
    state: IngestState,
    *,
    dry_run: bool = False,
) -> list[IngestionResult]:
    """Ingest a batch. One notice's failure never stops the others."""
    parser = HearingNoticeParser(time_zone=config.time_zone)
    locks: dict[str, asyncio.Lock] = {}

    async def _reconcile(notice: ParsedHearingNotice) -> ReconcileOutcome:
        key = hearing_key(notice)
        lock = locks.setdefault(key, asyncio.Lock())
        # Search-then-act is not atomic remotely; one hearing at a time
        async with lock:
            call = reconcile(
                notice,
                gateway,
                config.calendar_id,
                config.time_zone,
                first_ingestion=state.is_first_ingestion(key),
                window_days=config.search_window_days,
                excerpt_chars=config.description_excerpt_chars,
                dry_run=dry_run,
            )
            try:
                if config.reconcile_timeout:
                    outcome = await asyncio.wait_for(call, config.reconcile_timeout)
                else:
                    outcome = await call
            except asyncio.TimeoutError:
                log.warning("Reconciliation for %s timed out", notice.applicant_name)
                outcome = Failed(f"timed out after {config.reconcile_timeout}s")
            if not dry_run:
                state.record(key, outcome, notice.hearing_date)
            return outcome

    results: list[IngestionResult] = []
    pending: list[tuple[IngestionResult, ParsedHearingNotice]] = []
    for source in sources:
        notice = parser.parse(source.text)
        result = IngestionResult(source=source.name, notice=notice, classification=classify(source.text))
        if notice is None:
            log.warning("Notice %s needs attention: missing required fields", source.name)
        else:
            pending.append((result, notice))
        results.append(result)

    outcomes = await asyncio.gather(*(_reconcile(notice) for _, notice in pending))
    for (result, _), outcome in zip(pending, outcomes):
        result.outcome = outcome

    attention = sum(1 for r in results if r.needs_attention)
    log.info("Ingestion complete: %d notice(s), %d need attention", len(results), attention)
    return results


def run_ingestion(
    config: Config,
    state: IngestState,
    paths: list[Path],
    *,
    dry_run: bool = False,
    gateway: CalendarGateway | None = None,
) -> list[IngestionResult]:
    """Run a single ingestion pass over ``paths``."""
    sources = read_notice_files(paths)
    if not sources:
        log.debug("No notices to ingest")
        return []

    if gateway is None:
        gateway = GoogleCalendarGateway(
            config.resolve_access_token(),
            base_url=config.api_base_url,
            timeout=config.request_timeout,
        )
    return asyncio.run(ingest_notices(sources, config, gateway, state, dry_run=dry_run))
