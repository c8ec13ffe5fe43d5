"""Watchdog-based daemon that ingests notices dropped into the inbox."""

from __future__ import annotations

import logging
import signal
import threading
import time
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import Config
from .ingest_state import IngestState
from .sync_engine import inbox_notices, run_ingestion

log = logging.getLogger(__name__)

_DEBOUNCE_SECONDS = 2.0
_NOTICE_SUFFIX = ".txt"


class _InboxEventHandler(FileSystemEventHandler):
    """Collects new or changed notice files and ingests them after a pause."""

    def __init__(self, config: Config, state: IngestState, *, dry_run: bool = False):
        super().__init__()
        self._config = config
        self._state = state
        self._dry_run = dry_run
        self._pending: set[Path] = set()
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def _handle(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        path = Path(str(event.src_path))
        if path.suffix.lower() != _NOTICE_SUFFIX:
            return

        log.debug("Notice %s changed, scheduling ingestion in %.1fs", path.name, _DEBOUNCE_SECONDS)
        with self._lock:
            self._pending.add(path)
        self._schedule_ingest()

    def _schedule_ingest(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(_DEBOUNCE_SECONDS, self._do_ingest)
            self._timer.daemon = True
            self._timer.start()

    def _do_ingest(self) -> None:
        with self._lock:
            paths = sorted(self._pending)
            self._pending.clear()
        if not paths:
            return
        try:
            run_ingestion(self._config, self._state, paths, dry_run=self._dry_run)
        except Exception:
            log.error("Ingestion failed", exc_info=True)


def watch(config: Config, state: IngestState, *, dry_run: bool = False) -> None:
    """Start watching the inbox directory. Blocks until interrupted."""
    inbox_dir = config.inbox_dir

    if not inbox_dir.exists():
        log.error("Inbox directory does not exist: %s", inbox_dir)
        raise SystemExit(1)

    # Initial pass over notices already waiting
    log.info("Running initial ingestion...")
    run_ingestion(config, state, inbox_notices(inbox_dir), dry_run=dry_run)

    handler = _InboxEventHandler(config, state, dry_run=dry_run)
    observer = Observer()
    observer.schedule(handler, str(inbox_dir), recursive=False)

    stop_event = threading.Event()

    def _shutdown(signum: int, frame: object) -> None:
        sig_name = signal.Signals(signum).name
        log.info("Received %s, shutting down...", sig_name)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    observer.start()
    log.info("Watching %s for notices (Ctrl+C to stop)", inbox_dir)

    try:
        while not stop_event.is_set():
            time.sleep(1)
    finally:
        observer.stop()
        observer.join()
        log.info("Watcher stopped")
