"""Event persistence: a local SQLite key and a hosted PostgREST ``bookings`` table.

Both stores expose the same small surface used by the controller:

- ``load()`` returns every stored CalendarEvent, read once per session.
- ``append(event, current)`` persists one new event and returns the stored
  version; ``current`` is the list held in memory before the add.

Rows of the remote table are owned by another system; ``booking_to_event``
is the only place that knows their shape.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from datetime import date, datetime, tzinfo
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

import requests

import db as DB
from calendar_grid import format_date
from events import KINDS, CalendarEvent

LOG = logging.getLogger(__name__)

LOCAL_KEY = "calendarEvents"

# Postgres trims trailing zeros from fractional seconds
_FRACTION = re.compile(r"\.(\d+)")


class BackendError(RuntimeError):
    """A store operation failed; ``kind`` is a coarse cause used for user messages."""

    def __init__(self, message: str, kind: str = "unknown", status: Optional[int] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status = status


def classify_status(status: int, body: str = "") -> str:
    # PostgREST reports row-level-security denials as 42501, often with a 401
    if status == 403 or "42501" in body:
        return "permission"
    if status == 401:
        return "auth"
    if status == 404:
        return "not_found"
    return "unknown"


class LocalEventStore:
    """All events under one JSON key, rewritten in full on every change."""

    name = "local"
    supports_team_members = False

    def __init__(self, db_path: str = DB.DB_PATH, key: str = LOCAL_KEY) -> None:
        self.db_path = db_path
        self.key = key
        DB.init_db(db_path)

    def load(self) -> List[CalendarEvent]:
        raw = DB.read_state(self.key, default=[], db_path=self.db_path)
        return [CalendarEvent.from_dict(d) for d in raw]

    def append(self, event: CalendarEvent, current: List[CalendarEvent]) -> CalendarEvent:
        DB.write_state(self.key, [e.to_dict() for e in [*current, event]], db_path=self.db_path)
        LOG.debug("wrote %d events to %s", len(current) + 1, self.db_path)
        return event

    def has_team_member(self, name: str) -> bool:
        return False


def _resolve_tz(name: Optional[str]) -> Optional[tzinfo]:
    return ZoneInfo(name) if name else None


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def booking_to_event(row: Dict[str, Any], tz: Optional[tzinfo] = None) -> Optional[CalendarEvent]:
    """Map one ``bookings`` row to a CalendarEvent, or None when it has no usable timestamp.

    Aware timestamps are moved into ``tz`` (the host's local zone when None)
    before the day is taken, so a booking is shown on the day it happens
    locally rather than on its UTC day.
    """
    stamp = _parse_timestamp(row.get("timestamp"))
    if stamp is None or row.get("id") is None:
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone(tz)
    link = row.get("meeting_link") or None
    kind = row.get("kind")
    if kind not in KINDS:
        kind = "appointment" if link else "event"
    return CalendarEvent(
        id=str(row["id"]),
        title=str(row.get("product") or "Untitled"),
        description=str(row.get("summary") or ""),
        date=format_date(stamp),
        kind=kind,
        meeting_link=link,
        team_member=row.get("team_member") or None,
    )


def event_to_booking(event: CalendarEvent, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    y, m, d = (int(p) for p in event.date.split("-"))
    if tz is None:
        stamp = datetime(y, m, d).astimezone()
    else:
        stamp = datetime(y, m, d, tzinfo=tz)
    row = {
        "product": event.title,
        "summary": event.description,
        "timestamp": stamp.isoformat(),
        "meeting_link": event.meeting_link,
        "kind": event.kind,
    }
    if event.team_member:
        row["team_member"] = event.team_member
    return row


class RemoteBookingStore:
    """Thin PostgREST client for the hosted ``bookings`` table."""

    name = "remote"
    supports_team_members = True

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        table: str = "bookings",
        timeout: float = 10.0,
        tz_name: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout
        self.tz = _resolve_tz(tz_name)
        self.session = session or requests.Session()

    def _make_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request(
        self,
        method: str,
        params: Optional[Dict[str, object]] = None,
        json_body: Optional[object] = None,
        prefer: Optional[str] = None,
    ) -> Any:
        url = self._make_url()
        headers = self._headers()
        if prefer:
            headers["Prefer"] = prefer
        method = method.upper()
        LOG.debug("%s %s %s", method, url, params or "")
        try:
            resp = self.session.request(
                method, url, headers=headers, params=params, json=json_body, timeout=self.timeout
            )
        except requests.RequestException as exc:
            LOG.error("%s %s failed: %s", method, url, exc)
            raise BackendError(f"Network error talking to {self.base_url}: {exc}", kind="network") from exc
        if resp.status_code >= 400:
            kind = classify_status(resp.status_code, resp.text)
            LOG.error("%s %s returned %s: %s", method, url, resp.status_code, resp.text)
            raise BackendError(f"{resp.status_code} from backend: {resp.text}", kind=kind, status=resp.status_code)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise BackendError(f"Invalid JSON from backend: {resp.text}") from exc

    def load(self) -> List[CalendarEvent]:
        rows = self._request("GET", params={"select": "*", "order": "timestamp.asc"}) or []
        events = []
        for row in rows:
            event = booking_to_event(row, self.tz)
            if event is None:
                LOG.warning("skipping booking without usable id/timestamp: %r", row.get("id"))
                continue
            events.append(event)
        return events

    def append(self, event: CalendarEvent, current: List[CalendarEvent]) -> CalendarEvent:
        rows = self._request("POST", json_body=event_to_booking(event, self.tz), prefer="return=representation")
        if not rows or not isinstance(rows, list):
            return event
        # the stored row is what a reload will show; the table assigns its own identifier
        stored = booking_to_event(rows[0], self.tz)
        if stored is not None:
            return stored
        if rows[0].get("id") is not None:
            return dataclasses.replace(event, id=str(rows[0]["id"]))
        return event

    def has_team_member(self, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            return False
        rows = self._request(
            "GET", params={"select": "team_member", "team_member": f"eq.{name}", "limit": 1}
        )
        return bool(rows)


def make_store(settings):
    if settings.backend == "remote":
        return RemoteBookingStore(
            settings.backend_url,
            api_key=settings.backend_key,
            table=settings.bookings_table,
            timeout=settings.timeout,
            tz_name=settings.timezone,
        )
    return LocalEventStore(settings.db_path)
