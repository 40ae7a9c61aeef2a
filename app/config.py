# app/config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

BACKENDS = ("local", "remote")


class ConfigError(ValueError):
    """Raised when the environment describes an unusable configuration."""


@dataclass(frozen=True)
class Settings:
    backend: str = "local"
    db_path: str = "db/calendar.db"
    backend_url: Optional[str] = None
    backend_key: Optional[str] = None
    bookings_table: str = "bookings"
    timeout: float = 10.0
    timezone: Optional[str] = None
    admin_user: str = "admin"
    admin_password: str = "12345"
    team_password: Optional[str] = None
    seed_demo: bool = False
    log_level: str = "INFO"


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_settings(env=None) -> Settings:
    """Build Settings from the environment (and a .env file, when reading os.environ)."""
    if env is None:
        load_dotenv()
        env = os.environ

    backend = env.get("CALENDAR_BACKEND", "local").strip().lower()
    if backend not in BACKENDS:
        raise ConfigError(f"CALENDAR_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}")

    raw_timeout = env.get("CALENDAR_TIMEOUT", "10")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"CALENDAR_TIMEOUT is not a number: {raw_timeout!r}")
    if timeout <= 0:
        raise ConfigError("CALENDAR_TIMEOUT must be positive")

    url = env.get("CALENDAR_BACKEND_URL") or None
    if backend == "remote" and not url:
        raise ConfigError("CALENDAR_BACKEND_URL is required for the remote backend")

    return Settings(
        backend=backend,
        db_path=env.get("CALENDAR_DB_PATH", "db/calendar.db"),
        backend_url=url,
        backend_key=env.get("CALENDAR_BACKEND_KEY") or None,
        bookings_table=env.get("CALENDAR_BOOKINGS_TABLE", "bookings"),
        timeout=timeout,
        timezone=env.get("CALENDAR_TIMEZONE") or None,
        admin_user=env.get("CALENDAR_ADMIN_USER", "admin"),
        admin_password=env.get("CALENDAR_ADMIN_PASSWORD", "12345"),
        team_password=env.get("CALENDAR_TEAM_PASSWORD") or None,
        seed_demo=_flag(env.get("CALENDAR_SEED_DEMO")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
