# app/seed_data.py
from datetime import date, timedelta

from events import new_event


def seed(store, today=None):
    """Put a few demo items into an empty local store. Returns how many were added."""
    if store.name != "local":
        return 0
    current = store.load()
    if current:
        return 0
    today = today or date.today()
    demo = [
        new_event("Standup", "Daily sync", today, "event"),
        new_event("Send weekly report", "", today + timedelta(days=2), "task"),
        new_event("Client call", "Quarterly review", today + timedelta(days=5), "appointment",
                  meeting_link="https://meet.example.com/review"),
    ]
    for e in demo:
        current.append(store.append(e, current))
    return len(demo)
