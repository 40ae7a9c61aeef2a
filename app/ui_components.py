# app/ui_components.py
import pandas as pd
import streamlit as st

from calendar_grid import WEEKDAYS, parse_date, weeks
from events import group_by_date

KIND_LABELS = {"event": "Event", "task": "Task", "appointment": "Appointment"}
KIND_ICONS = {"event": "📅", "task": "✅", "appointment": "🤝"}


def events_frame(events):
    """Tabular view of items, sorted by day, for the sidebar agenda."""
    by_day = group_by_date(events)
    rows = [{
        "Date": parse_date(day),
        "Kind": KIND_LABELS.get(e.kind, e.kind),
        "Title": e.title,
        "Link": e.meeting_link or "",
    } for day in sorted(by_day) for e in by_day[day]]
    return pd.DataFrame(rows, columns=["Date", "Kind", "Title", "Link"])


def header(controller, on_prev, on_next, on_today):
    left, mid, right = st.columns([6, 1, 2])
    left.markdown(f"## {controller.title}")
    with mid:
        c1, c2 = st.columns(2)
        c1.button("‹", key="prev_month", on_click=on_prev, help="Previous month")
        c2.button("›", key="next_month", on_click=on_next, help="Next month")
    right.button("Today", key="today", on_click=on_today)


def day_cell(cell, events_for_day, on_add, on_open):
    # greyed when outside the displayed month, highlighted when today
    label = str(cell.date.day)
    if cell.is_today:
        st.markdown(f"<span style='background:#1a73e8;color:#fff;border-radius:50%;padding:2px 7px'>"
                    f"{label}</span>", unsafe_allow_html=True)
    elif cell.is_current_month:
        st.markdown(f"**{label}**")
    else:
        st.markdown(f"<span style='color:#999'>{label}</span>", unsafe_allow_html=True)
    for e in events_for_day:
        st.button(f"{KIND_ICONS.get(e.kind, '')} {e.title}", key=f"ev_{e.id}", on_click=on_open, args=(e,))
    st.button("+", key=f"add_{cell.date.isoformat()}", on_click=on_add, args=(cell.date,), help="Add")


def month_grid(controller, on_add, on_open, today=None):
    cols = st.columns(7)
    for i, c in enumerate(cols):
        c.markdown(f"**{WEEKDAYS[i]}**")
    for week in weeks(controller.grid(today)):
        cols = st.columns(7)
        for i, cell in enumerate(week):
            with cols[i]:
                day_cell(cell, controller.events_on(cell.date), on_add, on_open)
