"""Configuration loading and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .calendar_gateway import GOOGLE_CALENDAR_API_BASE
from .datetime_normalizer import DEFAULT_TIME_ZONE, resolve_zone

_DEFAULT_INBOX_DIR = Path.home() / "HearingNotices"
_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "hearingsync"
_DEFAULT_CONFIG_PATH = _DEFAULT_CONFIG_DIR / "config.yaml"
_DEFAULT_TOKEN_ENV = "GOOGLE_CALENDAR_ACCESS_TOKEN"


@dataclass
class Config:
    calendar_id: str
    time_zone: str = DEFAULT_TIME_ZONE
    access_token: str | None = None
    access_token_env: str = _DEFAULT_TOKEN_ENV
    inbox_dir: Path = field(default_factory=lambda: _DEFAULT_INBOX_DIR)
    api_base_url: str = GOOGLE_CALENDAR_API_BASE
    search_window_days: int = 7
    description_excerpt_chars: int = 500
    request_timeout: float = 10.0
    reconcile_timeout: float | None = None
    state_path: Path | None = None

    def resolve_access_token(self) -> str:
        """Explicit token first, then the configured environment variable."""
        if self.access_token:
            return self.access_token
        return os.environ.get(self.access_token_env, "")


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file, falling back to defaults where possible."""
    path = config_path or _DEFAULT_CONFIG_PATH
    path = Path(path).expanduser()

    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Create one at {_DEFAULT_CONFIG_PATH} or pass --config.\n"
            f"See config.example.yaml for reference."
        )

    raw = yaml.safe_load(path.read_text())
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"Invalid config file: {path}")

    if not raw.get("calendar_id"):
        raise ValueError("'calendar_id' is required in config")

    kwargs: dict = {"calendar_id": str(raw["calendar_id"])}
    if "time_zone" in raw:
        resolve_zone(raw["time_zone"])
        kwargs["time_zone"] = raw["time_zone"]
    for key in ("inbox_dir", "state_path"):
        if raw.get(key):
            kwargs[key] = Path(raw[key]).expanduser()
    for key in ("access_token", "access_token_env", "api_base_url"):
        if key in raw:
            kwargs[key] = raw[key]
    for key, cast in (
        ("search_window_days", int),
        ("description_excerpt_chars", int),
        ("request_timeout", float),
        ("reconcile_timeout", float),
    ):
        if raw.get(key) is not None:
            try:
                kwargs[key] = cast(raw[key])
            except (TypeError, ValueError):
                raise ValueError(f"'{key}' must be a number, got {raw[key]!r}") from None

    return Config(**kwargs)
