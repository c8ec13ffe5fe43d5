"""Command-line interface for hearingsync."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .ingest_state import IngestState
from .models import Created, Failed, Skipped, Updated
from .sync_engine import IngestionResult, inbox_notices, run_ingestion
from .watcher import watch


def _describe(result: IngestionResult) -> str:
    if result.notice is None:
        return "not parsed (missing applicant, date or time)"
    match result.outcome:
        case Created(event=event):
            return f"created event {event.id}"
        case Updated(event=event):
            return f"rescheduled event {event.id}"
        case Skipped(reason=reason):
            return f"skipped: {reason}"
        case Failed(reason=reason):
            return f"failed: {reason}"
    return "not reconciled"


def _report(results: list[IngestionResult]) -> None:
    if not results:
        print("No notices to ingest")
        return
    for result in results:
        flag = "!" if result.needs_attention else " "
        claim = result.classification.extracted_info.claim_type
        print(f"{flag} {Path(result.source).name}: {_describe(result)} [{claim}]")
    attention = sum(1 for r in results if r.needs_attention)
    print(f"Ingested {len(results)} notice(s), {attention} need attention")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="hearingsync",
        description="Ingest hearing notices and keep them in sync with a calendar",
    )
    parser.add_argument(
        "notices",
        nargs="*",
        type=Path,
        help="Notice text files to ingest once (default: the configured inbox)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to config YAML (default: ~/.config/hearingsync/config.yaml)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Ingest the inbox once and exit (no daemon)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Search the calendar but do not create or move events",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Forget previous ingestions and search without date windows",
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from None

    state = IngestState(config.state_path)
    if args.force:
        state.clear()

    if args.notices:
        _report(run_ingestion(config, state, args.notices, dry_run=args.dry_run))
    elif args.once:
        _report(run_ingestion(config, state, inbox_notices(config.inbox_dir), dry_run=args.dry_run))
    else:
        watch(config, state, dry_run=args.dry_run)
