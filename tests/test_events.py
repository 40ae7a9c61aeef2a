from datetime import date, timedelta

import pytest

from events import (
    CalendarEvent,
    ValidationError,
    events_for_date,
    filter_kinds,
    group_by_date,
    new_event,
)


def make(title, day, kind="event", id=None):
    return CalendarEvent(id=id or title, title=title, description="", date=day, kind=kind)


def test_new_event_formats_selected_date():
    e = new_event("  Standup ", "daily", date(2024, 3, 10))
    assert e.title == "Standup"
    assert e.date == "2024-03-10"
    assert e.kind == "event"
    assert e.id


def test_new_event_ids_are_unique():
    a = new_event("A", "", date(2024, 3, 10))
    b = new_event("A", "", date(2024, 3, 10))
    assert a.id != b.id


def test_new_event_requires_date_and_title():
    with pytest.raises(ValidationError):
        new_event("Standup", "", None)
    with pytest.raises(ValidationError):
        new_event("   ", "", date(2024, 3, 10))


def test_new_event_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        new_event("x", "", date(2024, 3, 10), kind="meeting")


def test_meeting_link_only_kept_for_appointments():
    appt = new_event("Call", "", date(2024, 3, 10), "appointment", meeting_link=" https://meet/x ")
    task = new_event("Todo", "", date(2024, 3, 10), "task", meeting_link="https://meet/x")
    assert appt.meeting_link == "https://meet/x"
    assert task.meeting_link is None


def test_events_for_date_matches_exact_day_only():
    d = date(2024, 3, 10)
    e = new_event("Standup", "", d)
    events = [e, make("Other", "2024-03-11")]
    assert events_for_date(events, d) == [e]
    assert events_for_date(events, d - timedelta(days=1)) == []
    assert e not in events_for_date(events, d + timedelta(days=1))


def test_events_for_date_keeps_insertion_order():
    events = [make("b", "2024-03-10"), make("x", "2024-03-09"), make("a", "2024-03-10")]
    assert [e.title for e in events_for_date(events, date(2024, 3, 10))] == ["b", "a"]


def test_standup_scenario():
    events = [new_event("Standup", "", date(2024, 3, 10))]
    found = events_for_date(events, date(2024, 3, 10))
    assert len(found) == 1
    assert found[0].title == "Standup"


def test_group_by_date():
    events = [make("a", "2024-03-10"), make("b", "2024-03-11"), make("c", "2024-03-10")]
    grouped = group_by_date(events)
    assert [e.title for e in grouped["2024-03-10"]] == ["a", "c"]
    assert list(grouped) == ["2024-03-10", "2024-03-11"]


def test_filter_kinds():
    events = [make("a", "2024-03-10", "task"), make("b", "2024-03-10", "appointment")]
    assert filter_kinds(events, []) == events
    assert [e.title for e in filter_kinds(events, ["task"])] == ["a"]


def test_dict_round_trip_fills_defaults():
    e = CalendarEvent.from_dict({"id": 5, "title": "t", "date": "2024-03-10"})
    assert e.id == "5"
    assert e.kind == "event"
    assert e.description == ""
    assert CalendarEvent.from_dict(e.to_dict()) == e
