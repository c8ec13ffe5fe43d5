"""Remember which hearings have been reconciled before."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from .models import Created, ReconcileOutcome, Skipped, SkipCode, Updated

log = logging.getLogger(__name__)

_DEFAULT_STATE_DIR = Path.home() / ".local" / "share" / "hearingsync"
_DEFAULT_STATE_PATH = _DEFAULT_STATE_DIR / "ingest_state.json"


class IngestState:
    """Persistent record of hearings that reached the calendar.

    A hearing with no entry here is on its first ingestion, which makes the
    reconciler search without a date window.
    """

    def __init__(self, state_path: Path | None = None):
        self.path = state_path or _DEFAULT_STATE_PATH
        self._state: dict[str, dict] = {}
        self._load()

    def _load(self) -> None:
        if self.path.exists():
            try:
                self._state = json.loads(self.path.read_text(encoding="utf-8"))
                log.debug("Loaded ingest state with %d entries", len(self._state))
            except (json.JSONDecodeError, OSError):
                log.warning("Failed to load ingest state, starting fresh")
                self._state = {}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self._state, indent=2, default=str),
            encoding="utf-8",
        )

    def is_first_ingestion(self, key: str) -> bool:
        return key not in self._state

    def record(self, key: str, outcome: ReconcileOutcome, hearing_date: datetime | None) -> None:
        """Record a reconciliation that left the hearing on the calendar."""
        match outcome:
            case Created(event=event) | Updated(event=event):
                event_id = event.id
            case Skipped(code=SkipCode.ALREADY_SCHEDULED):
                event_id = self._state.get(key, {}).get("event_id")
            case _:
                return

        self._state[key] = {
            "event_id": event_id,
            "hearing_date": hearing_date.isoformat() if hearing_date else None,
            "outcome": type(outcome).__name__.lower(),
            "reconciled_at": datetime.now(tz=timezone.utc).isoformat(),
        }
        self._save()

    def get_event_id(self, key: str) -> str | None:
        entry = self._state.get(key)
        if entry:
            return entry.get("event_id")
        return None

    def clear(self) -> None:
        """Forget every hearing so the next run searches without windows."""
        self._state = {}
        self._save()
