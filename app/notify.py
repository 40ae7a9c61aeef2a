# app/notify.py
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "error"
    title: str
    description: Optional[str] = None


class Notifier:
    """One-shot message queue; the UI drains it once per run."""

    def __init__(self):
        self._pending: List[Notification] = []

    def success(self, title: str, description: Optional[str] = None):
        self._pending.append(Notification("success", title, description))

    def error(self, title: str, description: Optional[str] = None):
        self._pending.append(Notification("error", title, description))

    def drain(self) -> List[Notification]:
        pending, self._pending = self._pending, []
        return pending

    def __len__(self):
        return len(self._pending)


_CAUSES = {
    "permission": "You do not have permission to do that.",
    "auth": "Your session is not authorized. Sign in again.",
    "network": "Could not reach the server. Check your connection.",
    "not_found": "The calendar table could not be found.",
}


def describe_failure(exc: BaseException, title: str = "Save failed") -> Tuple[str, str]:
    """Best-effort human-readable (title, description) for a failed operation."""
    kind = getattr(exc, "kind", None)
    if kind in _CAUSES:
        return title, _CAUSES[kind]
    return title, str(exc) or "An unexpected error occurred."
