"""The e-mail PIN session: loading, refreshing, checking and the time-out page."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

__all__ = [
    "SESSION_TIMEOUT",
    "SessionRecord",
    "load_session",
    "touch_session",
    "session_valid",
    "timeout_page",
]

SESSION_TIMEOUT = 60


@dataclass(frozen=True)
class SessionRecord:
    """The stored session: e-mail PIN, user id, login phase and last-activity time."""

    pin: str
    user_id: str
    phase: str
    time: int


def load_session(conn: sqlite3.Connection) -> SessionRecord | None:
    """Return the last row of the emailPin table, or None when it is empty."""
    record = None
    for _id, pin, user_id, phase, saved_time in conn.execute(
        "SELECT id, pin, userID, phase, time FROM emailPin"
    ):
        record = SessionRecord(pin=pin, user_id=user_id, phase=phase, time=int(saved_time))
    return record


def touch_session(conn: sqlite3.Connection, now: int) -> None:
    """Record ``now`` as the session's last-activity time."""
    with conn:
        conn.execute("UPDATE emailPin SET time = ? WHERE id = 1", (int(now),))


def session_valid(record: SessionRecord | None, pin_cookie: str, now: int) -> bool:
    """Return True when the cookie PIN matches and the session has not timed out."""
    if record is None:
        return False
    return pin_cookie == record.pin and now - record.time <= SESSION_TIMEOUT


def timeout_page() -> str:
    """Return the HTML shown when the login is missing or has timed out."""
    return (
        "<html><head><title>Login Time Out</title></head>\n"
        "<head>\n"
        "<title> Login Time Out </title>\n"
        "</head>\n"
        "<body>\n"
        '<div align="center">\n'
        '<h1 align="center">Login Time Out</h1>\n'
        '<a href="./logOut.cgi" rel="external" title="Login Failure">'
        " Login Failure Retry </a>"
    )