"""Calendar gateway interface and a Google Calendar v3 client over httpx."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol
from urllib.parse import quote

import httpx

from .errors import GatewayRejected, GatewayUnavailable
from .models import CalendarEvent

log = logging.getLogger(__name__)

GOOGLE_CALENDAR_API_BASE = "https://www.googleapis.com/calendar/v3"
_RETRYABLE_STATUS = {429, 500, 502, 503, 504}


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    @classmethod
    def around(cls, moment: datetime, days: int) -> TimeWindow:
        delta = timedelta(days=days)
        return cls(start=moment - delta, end=moment + delta)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class CalendarGateway(Protocol):
    """Operations the reconciler needs from a calendar provider.

    Implementations report failures as GatewayError subclasses and never
    return soft-deleted events from ``find_events``.
    """

    async def find_events(
        self,
        calendar_id: str,
        text_query: str,
        time_window: TimeWindow | None = None,
    ) -> list[CalendarEvent]: ...

    async def create_event(self, calendar_id: str, event: CalendarEvent) -> CalendarEvent: ...

    async def update_event(
        self, calendar_id: str, event_id: str, event: CalendarEvent
    ) -> CalendarEvent: ...

    async def delete_event(self, calendar_id: str, event_id: str) -> bool: ...


def _to_utc_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_when(when: dict | None) -> datetime | None:
    if not when:
        return None
    value = when.get("dateTime")
    if value:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    # All-day events only carry a date
    day = when.get("date")
    if day:
        return datetime.fromisoformat(day).replace(tzinfo=timezone.utc)
    return None


def event_to_payload(event: CalendarEvent) -> dict:
    """Serialize an event into the Google Calendar JSON body."""
    payload: dict = {"summary": event.summary, "description": event.description}
    if event.location:
        payload["location"] = event.location
    for key, value in (("start", event.start), ("end", event.end)):
        if value is not None:
            when = {"dateTime": value.isoformat()}
            if event.time_zone:
                when["timeZone"] = event.time_zone
            payload[key] = when
    return payload


def event_from_payload(data: dict) -> CalendarEvent:
    """Build an event from a Google Calendar JSON resource."""
    start = data.get("start") or {}
    return CalendarEvent(
        id=data.get("id"),
        summary=data.get("summary", "") or "",
        description=data.get("description", "") or "",
        start=_parse_when(start),
        end=_parse_when(data.get("end")),
        location=data.get("location"),
        time_zone=start.get("timeZone"),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.reason_phrase or f"HTTP {response.status_code}"


class GoogleCalendarGateway:
    """Google Calendar REST client using a pre-acquired OAuth access token."""

    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = GOOGLE_CALENDAR_API_BASE,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    def _events_url(self, calendar_id: str, event_id: str | None = None) -> str:
        url = f"{self.base_url}/calendars/{quote(calendar_id, safe='')}/events"
        if event_id:
            url += f"/{quote(event_id, safe='')}"
        return url

    async def _request(self, operation: str, method: str, url: str, **kwargs) -> httpx.Response:
        if not self.access_token:
            raise GatewayRejected("Google Calendar access token not available", status_code=401)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as e:
            raise GatewayUnavailable(f"{operation} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise GatewayUnavailable(f"{operation} failed: {e}") from e

        if response.is_success:
            return response

        message = f"Google API error ({operation}): {_error_message(response)}"
        log.error("%s [HTTP %d]", message, response.status_code)
        if response.status_code in _RETRYABLE_STATUS:
            raise GatewayUnavailable(message)
        raise GatewayRejected(message, status_code=response.status_code)

    async def find_events(
        self,
        calendar_id: str,
        text_query: str,
        time_window: TimeWindow | None = None,
    ) -> list[CalendarEvent]:
        params: dict[str, str] = {"showDeleted": "false", "singleEvents": "true"}
        if text_query:
            params["q"] = text_query
        if time_window is not None:
            params["timeMin"] = _to_utc_iso(time_window.start)
            params["timeMax"] = _to_utc_iso(time_window.end)

        events: list[CalendarEvent] = []
        page_token: str | None = None
        while True:
            if page_token:
                params["pageToken"] = page_token
            response = await self._request("findEvents", "GET", self._events_url(calendar_id), params=params)
            data = response.json()
            for item in data.get("items", []):
                if item.get("status") == "cancelled":
                    continue
                events.append(event_from_payload(item))
            page_token = data.get("nextPageToken")
            if not page_token:
                break

        log.debug("Found %d event(s) for query %r", len(events), text_query)
        return events

    async def create_event(self, calendar_id: str, event: CalendarEvent) -> CalendarEvent:
        response = await self._request(
            "createEvent", "POST", self._events_url(calendar_id), json=event_to_payload(event),
        )
        return event_from_payload(response.json())

    async def update_event(self, calendar_id: str, event_id: str, event: CalendarEvent) -> CalendarEvent:
        response = await self._request(
            "updateEvent", "PUT", self._events_url(calendar_id, event_id), json=event_to_payload(event),
        )
        return event_from_payload(response.json())

    async def delete_event(self, calendar_id: str, event_id: str) -> bool:
        try:
            await self._request("deleteEvent", "DELETE", self._events_url(calendar_id, event_id))
        except GatewayRejected as e:
            if e.status_code in (404, 410):
                log.info("Event %s already gone", event_id)
                return False
            raise
        return True
