# app/main.py
import logging

import streamlit as st

from auth import LoginRejected, authenticate, ensure_default_users
from controller import CalendarController
from db import init_db
from events import KINDS, ValidationError
from notify import describe_failure
from seed_data import seed
from stores import make_store
from config import load_settings
from ui_components import KIND_LABELS, events_frame, header, month_grid

st.set_page_config(page_title="Team Calendar", layout="wide", initial_sidebar_state="expanded")

settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@st.cache_resource
def bootstrap():
    # Init DB, default account and store (once per process)
    init_db(settings.db_path)
    ensure_default_users(settings)
    store = make_store(settings)
    if settings.seed_demo:
        added = seed(store)
        if added:
            logger.info("Seeded %d demo items", added)
    return store


store = bootstrap()

# --- Authentication ---
if "user" not in st.session_state:
    st.session_state.user = None


def login_form():
    st.sidebar.header("Login")
    username = st.sidebar.text_input("Team member")
    pwd = st.sidebar.text_input("Password", type="password")
    if st.sidebar.button("Login"):
        try:
            user = authenticate(username, pwd, settings, store)
        except LoginRejected as e:
            st.sidebar.error(str(e))
            return
        except Exception as e:
            logger.error("Login check failed for %s: %s", username, e)
            title, description = describe_failure(e, "Login failed")
            st.sidebar.error(f"{title}: {description}")
            return
        st.session_state.user = user
        st.session_state.controller = None
        st.rerun()


def logout():
    st.session_state.user = None
    st.session_state.controller = None


if not st.session_state.user:
    login_form()
    st.stop()

# --- Controller: single owner of the calendar state ---
if not st.session_state.get("controller"):
    st.session_state.controller = CalendarController(store, user=st.session_state.user)
ctrl = st.session_state.controller
ctrl.ensure_loaded()


def open_add(day):
    ctrl.select_date(day)
    st.session_state.dialog = "add"


def open_details(event):
    ctrl.open_event(event)
    st.session_state.dialog = "details"


@st.dialog("New item")
def add_dialog():
    day = ctrl.selected_date
    if day is None:
        st.warning("No date selected")
        return
    st.caption(day.strftime("%A, %d %B %Y"))
    kind = st.radio("Type", options=list(KINDS), format_func=KIND_LABELS.get, horizontal=True)
    with st.form("create_item"):
        title = st.text_input("Title")
        description = st.text_area("Description")
        link = st.text_input("Meeting link") if kind == "appointment" else None
        submitted = st.form_submit_button("Add")
    if submitted:
        try:
            ctrl.add_event(title, description, kind, link)
        except ValidationError as e:
            st.error(str(e))
            return
        st.rerun()
    if st.button("Cancel"):
        ctrl.clear_selection()
        st.rerun()


@st.dialog("Details")
def details_dialog():
    e = ctrl.selected_event
    if e is None:
        return
    st.subheader(e.title)
    st.caption(f"{KIND_LABELS.get(e.kind, e.kind)} · {e.date}")
    if e.team_member:
        st.write(f"Owner: {e.team_member}")
    st.write(e.description or "_No description_")
    if e.meeting_link:
        st.link_button("Join meeting", e.meeting_link)
    if st.button("Close"):
        ctrl.close_event()
        st.rerun()


# --- Sidebar ---
st.sidebar.write(f"Signed in as **{st.session_state.user}**")
st.sidebar.button("Logout", on_click=logout)
st.sidebar.header("Filters")
ctrl.kind_filter = st.sidebar.multiselect("Show", options=list(KINDS), format_func=KIND_LABELS.get)
st.sidebar.caption(f"Storage: {store.name}")
if st.sidebar.button("Reload"):
    ctrl.reload()
st.sidebar.header("This month")
month_items = ctrl.month_events()
if month_items:
    st.sidebar.dataframe(events_frame(month_items), hide_index=True)
else:
    st.sidebar.caption("Nothing scheduled")

# --- Notifications (one-shot) ---
for n in ctrl.notifier.drain():
    icon = "✅" if n.level == "success" else "⚠️"
    st.toast(f"**{n.title}**" + (f"\n\n{n.description}" if n.description else ""), icon=icon)

# --- Calendar ---
header(ctrl, ctrl.prev_month, ctrl.next_month, ctrl.go_to_today)
month_grid(ctrl, open_add, open_details)

dialog = st.session_state.pop("dialog", None)
if dialog == "add":
    add_dialog()
elif dialog == "details":
    details_dialog()
if dialog != "details":
    # a dismissed details dialog does not survive the next full run
    ctrl.close_event()
