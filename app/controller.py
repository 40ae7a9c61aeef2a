# app/controller.py
import logging
from datetime import date
from typing import List, Optional

from calendar_grid import CalendarCell, build_month_grid, month_title, shift_month
from events import CalendarEvent, events_for_date, filter_kinds, new_event
from notify import Notifier, describe_failure

logger = logging.getLogger(__name__)


class CalendarController:
    """Owns the calendar's state; the UI reads it and calls the operations below."""

    def __init__(self, store, notifier: Optional[Notifier] = None, today: Optional[date] = None,
                 user: Optional[str] = None):
        self.store = store
        self.notifier = notifier or Notifier()
        self.user = user
        start = today or date.today()
        self.year = start.year
        self.month = start.month - 1  # zero-based
        self.selected_date: Optional[date] = None
        self.selected_event: Optional[CalendarEvent] = None
        self.kind_filter: List[str] = []
        self.events: List[CalendarEvent] = []
        self.loaded = False

    # --- persistence ---
    def reload(self) -> bool:
        try:
            self.events = self.store.load()
        except Exception as e:
            logger.error("Failed to load events: %s", e)
            self.notifier.error(*describe_failure(e, "Could not load events"))
            return False
        self.loaded = True
        logger.info("Loaded %d events from %s store", len(self.events), getattr(self.store, "name", "?"))
        return True

    def ensure_loaded(self):
        if not self.loaded:
            self.reload()

    # --- navigation ---
    def prev_month(self):
        self.year, self.month = shift_month(self.year, self.month, -1)

    def next_month(self):
        self.year, self.month = shift_month(self.year, self.month, 1)

    def go_to_today(self, today: Optional[date] = None):
        today = today or date.today()
        self.year, self.month = today.year, today.month - 1

    @property
    def title(self) -> str:
        return month_title(self.year, self.month)

    def grid(self, today: Optional[date] = None) -> List[CalendarCell]:
        return build_month_grid(self.year, self.month, today)

    # --- selection / dialogs ---
    def select_date(self, day: date):
        self.selected_date = day

    def clear_selection(self):
        self.selected_date = None

    def open_event(self, event: CalendarEvent):
        self.selected_event = event

    def close_event(self):
        self.selected_event = None

    # --- queries ---
    def visible_events(self) -> List[CalendarEvent]:
        return filter_kinds(self.events, self.kind_filter)

    def events_on(self, day: date) -> List[CalendarEvent]:
        return events_for_date(self.visible_events(), day)

    def month_events(self) -> List[CalendarEvent]:
        prefix = f"{self.year:04d}-{self.month + 1:02d}-"
        return [e for e in self.visible_events() if e.date.startswith(prefix)]

    # --- updates ---
    def add_event(self, title: str, description: str, kind: str = "event",
                  meeting_link: Optional[str] = None) -> Optional[CalendarEvent]:
        """Create an item on the selected date.

        Raises ValidationError for a bad form (nothing changes). Store failures
        are reported through the notifier and leave the event list untouched.
        """
        event = new_event(title, description, self.selected_date, kind, meeting_link, team_member=self.user)
        try:
            saved = self.store.append(event, list(self.events))
        except Exception as e:
            logger.error("Failed to save %s %r on %s: %s", event.kind, event.title, event.date, e)
            self.notifier.error(*describe_failure(e))
            return None
        self.events = [*self.events, saved]
        self.selected_date = None
        logger.info("Added %s %r on %s", saved.kind, saved.title, saved.date)
        self.notifier.success(f"{saved.kind.capitalize()} added", saved.title)
        return saved
