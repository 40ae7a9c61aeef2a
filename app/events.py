# app/events.py
import uuid
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from calendar_grid import format_date

KINDS = ("event", "task", "appointment")


class ValidationError(ValueError):
    """A creation form was submitted with a missing or invalid field."""


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    title: str
    description: str
    date: str  # YYYY-MM-DD, local day
    kind: str = "event"
    meeting_link: Optional[str] = None
    team_member: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CalendarEvent":
        return cls(
            id=str(d["id"]),
            title=d.get("title") or "",
            description=d.get("description") or "",
            date=d["date"],
            kind=d.get("kind") or "event",
            meeting_link=d.get("meeting_link") or None,
            team_member=d.get("team_member") or None,
        )


def new_event(title: str, description: str, selected_date: Optional[date], kind: str = "event",
              meeting_link: Optional[str] = None, team_member: Optional[str] = None) -> CalendarEvent:
    """Validate a creation form and build the record for `selected_date`."""
    if selected_date is None:
        raise ValidationError("No date selected")
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    if kind not in KINDS:
        raise ValidationError(f"Unknown kind: {kind}")
    link = (meeting_link or "").strip() or None
    if kind != "appointment":
        link = None
    return CalendarEvent(
        id=uuid.uuid4().hex,
        title=title,
        description=(description or "").strip(),
        date=format_date(selected_date),
        kind=kind,
        meeting_link=link,
        team_member=team_member,
    )


def events_for_date(events: Iterable[CalendarEvent], day: date) -> List[CalendarEvent]:
    # string equality on both sides, never date objects
    key = format_date(day)
    return [e for e in events if e.date == key]


def group_by_date(events: Iterable[CalendarEvent]) -> Dict[str, List[CalendarEvent]]:
    grouped = {}
    for e in events:
        grouped.setdefault(e.date, []).append(e)
    return grouped


def filter_kinds(events: Iterable[CalendarEvent], kinds: Optional[Iterable[str]]) -> List[CalendarEvent]:
    if not kinds:
        return list(events)
    wanted = set(kinds)
    return [e for e in events if e.kind in wanted]
