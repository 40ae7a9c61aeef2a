# app/auth.py
import logging

from passlib.hash import bcrypt

import db as DB

logger = logging.getLogger(__name__)


class LoginRejected(ValueError):
    """The credentials were checked and refused; the message is shown to the user."""


def hash_password(password: str) -> str:
    return bcrypt.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.verify(password, hashed)


def ensure_default_users(settings):
    # creates the admin account (only if missing)
    admin = DB.get_user(settings.admin_user, db_path=settings.db_path)
    if not admin:
        DB.create_user(settings.admin_user, hash_password(settings.admin_password), name="Admin",
                       db_path=settings.db_path)
        logger.info("Created default user %s", settings.admin_user)


def authenticate(username: str, password: str, settings, store=None) -> str:
    """Return the signed-in name or raise LoginRejected.

    Local accounts are checked first, ignoring case, and sign in under their
    stored name. On stores that know team members, any existing member may sign
    in; if a team password is configured it must match. Backend failures
    propagate to the caller.
    """
    username = (username or "").strip()
    if not username or not password:
        raise LoginRejected("Enter a team member name and a password")

    user = DB.get_user(username, db_path=settings.db_path)
    if user:
        if verify_password(password, user["password_hash"]):
            return user["username"]
        raise LoginRejected("Invalid credentials")

    if store is None or not store.supports_team_members:
        raise LoginRejected("Invalid credentials")
    if settings.team_password is not None and password != settings.team_password:
        raise LoginRejected("Invalid credentials")
    if not store.has_team_member(username):
        raise LoginRejected("Team member not found")
    return username
