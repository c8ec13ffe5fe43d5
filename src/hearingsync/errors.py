"""Error kinds raised inside the ingestion pipeline."""

from __future__ import annotations


class HearingSyncError(Exception):
    """Base class for all hearingsync errors."""


class MissingRequiredField(HearingSyncError):
    """A notice lacks one of applicant, date or time."""

    def __init__(self, field_names: list[str]):
        self.field_names = list(field_names)
        super().__init__(f"Missing required field(s): {', '.join(self.field_names)}")


class DateNormalizationFailure(HearingSyncError):
    """Date and time strings were present but could not be combined."""

    def __init__(self, date_str: str, time_str: str, detail: str = ""):
        self.date_str = date_str
        self.time_str = time_str
        message = f"Cannot combine date {date_str!r} and time {time_str!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class GatewayError(HearingSyncError):
    """A calendar gateway call failed."""


class GatewayUnavailable(GatewayError):
    """The calendar provider could not be reached or is temporarily failing."""


class GatewayRejected(GatewayError):
    """The calendar provider refused the request."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
