"""The token-login page and the lecturer and module selection pages."""

from __future__ import annotations

import sqlite3
import time
from collections.abc import Mapping
from html import escape

from markbook.database import MODULES
from markbook.session import load_session, session_valid, timeout_page, touch_session

__all__ = [
    "CONTENT_HEADER",
    "PHASE_COOKIE_HEADER",
    "token_login_page",
    "select_lecturer_page",
    "select_module_page",
]

CONTENT_HEADER = "Content-Type: text/html; charset=utf-8\n\n"
PHASE_COOKIE_HEADER = "Set-Cookie:phase=2;\n"

_REENTRY_PHASE = "2"
_ADMIN_NAME = "admin"


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else int(now)


def _page_start(window_title: str, inner_title: str, heading: str) -> list[str]:
    return [
        f"<html><head><title>{window_title}</title></head>\n",
        "<head>\n",
        f"<title> {inner_title} </title>\n",
        "</head>\n",
        "<body>\n",
        '<div align="center">\n',
        f'<h1 align="center">{heading}</h1>\n',
    ]


def _form_button(action: str, value: str, style: str) -> list[str]:
    return [
        f'<form method="post" action="{action}">\n',
        f'<input type=submit value="{value}" style="{style}">',
        "\n",
    ]


def token_login_page(
    conn: sqlite3.Connection,
    form: Mapping[str, str],
    cookies: Mapping[str, str],
    now: int | None = None,
) -> str:
    """Return the CGI response asking for the authorisation code.

    The entered PIN, the PIN cookie and the stored PIN must all agree and the
    session must not have timed out; otherwise the time-out page is returned.
    When the stored phase is already 2 the stored PIN stands in for the
    entered one, so the page can be reloaded.
    """
    response = PHASE_COOKIE_HEADER + CONTENT_HEADER
    current = _now(now)

    entered_pin = form.get("emailPin")
    if entered_pin is None:
        return response + timeout_page()

    record = load_session(conn)
    if record is not None and record.phase == _REENTRY_PHASE:
        entered_pin = record.pin

    pin_cookie = cookies.get("emailPin", "")
    if not session_valid(record, pin_cookie, current) or record.pin != entered_pin:
        return response + timeout_page()

    parts = _page_start("Authorisation Login", "Authorisation Login", "Token Login")
    parts += [
        '<form method="post" action="checkToken.cgi">\n',
        '<p style="black:white; margin-left:-120px; margin-top:-0px">'
        "Authorisation Code</p>\n",
        '<input type=text size=10 name="code" style="margin-left:60px; margin-top:-60px">',
        "\n",
        '<input type=submit value="Authorisation Login" '
        'style="margin-left:-260px; margin-top:-18px">',
        "\n",
        "</form>\n",
        "</form>\n",
    ]
    parts += _form_button("logOut.cgi", "Log Out", "margin-left:-150px; margin-top:00px")
    parts += ["</form>\n", "</body></html>"]
    return response + "".join(parts)


def select_lecturer_page(
    conn: sqlite3.Connection,
    cookies: Mapping[str, str],
    now: int | None = None,
) -> str:
    """Return the CGI response listing every lecturer other than the administrator."""
    current = _now(now)
    record = load_session(conn)
    if not session_valid(record, cookies.get("emailPin", ""), current):
        return CONTENT_HEADER + timeout_page()

    touch_session(conn, current)

    parts = _page_start("Select Lecturer", "Select Lecturer ", "Select Lecturer")
    parts += [
        '<form method="post" action="assignModule.cgi">\n',
        '<p style="margin-left:-180px; margin-top:0px">Lecturer:</p>\n',
        '<select name="lecturer" style="margin-left:80px; margin-top:-42px">\n',
    ]
    for (name,) in conn.execute("SELECT name FROM users"):
        if name != _ADMIN_NAME:
            shown = escape(str(name))
            parts.append(f"<option value={shown} selected> {shown} </option>")
    parts += [
        "</select> <br>\n",
        '<input type=submit value="Select Lecturer" '
        'style="position:absolute;margin-left:-130px; margin-top:00px">',
        "</form>\n",
    ]
    parts += _form_button(
        "lecturer.cgi",
        "Back To Lecturer Modules",
        "position:absolute;margin-left:-190px; margin-top:50px",
    )
    parts += [
        '<form method="post" action="logOut.cgi">\n',
        '<input type=submit value="Log Out" style="margin-left:-190px; margin-top:20px">\n',
        "\n",
        "</form>\n",
    ]
    return CONTENT_HEADER + "".join(parts)


def select_module_page(
    conn: sqlite3.Connection,
    cookies: Mapping[str, str],
    now: int | None = None,
) -> str:
    """Return the CGI response listing every module a student can be added to."""
    current = _now(now)
    record = load_session(conn)
    if not session_valid(record, cookies.get("emailPin", ""), current):
        return CONTENT_HEADER + timeout_page()

    touch_session(conn, current)

    parts = _page_start("Select Module", "Select Module", "Select Module")
    parts += [
        '<form method="post" action="addStudent.cgi">\n',
        '<p style="margin-left:-180px; margin-top:0px">Lecturer:</p>\n',
        '<select name="module" style="margin-left:80px; margin-top:-42px">\n',
    ]
    parts += [f"<option value={module} selected > {module} </option>" for module in MODULES]
    parts += [
        "</select> <br>\n",
        '<input type=submit value="Select Module" '
        'style="position:absolute;margin-left:-130px; margin-top:00px">',
        "</form>\n",
    ]
    parts += _form_button(
        "lecturer.cgi",
        "Back To Lecturer Options",
        "position:absolute;margin-left:-135px; margin-top:30px",
    )
    parts.append("</form>\n")
    parts += _form_button(
        "logOut.cgi",
        "Log Out",
        "position:absolute;margin-left:-135px; margin-top:80px",
    )
    parts.append("</form>\n")
    return CONTENT_HEADER + "".join(parts)