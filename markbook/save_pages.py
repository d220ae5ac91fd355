"""The pages that save module marks and add a student to a module."""

from __future__ import annotations

import sqlite3
import time
from collections.abc import Mapping
from html import escape

from markbook.database import MODULES
from markbook.select_pages import CONTENT_HEADER
from markbook.session import load_session, session_valid, timeout_page, touch_session
from markbook.validation import is_in_range

__all__ = [
    "MIN_NAME_LENGTH",
    "save_module_page",
    "save_student_page",
]

MIN_NAME_LENGTH = 4

_MODULE_FIELD = "module1"
_QUERY_ERROR = "[-] Query Input Error!<br>"


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
        "</form>\n",
    ]


def _back_and_logout_buttons() -> list[str]:
    return [
        *_form_button(
            "lecturer.cgi",
            "Back To Lecturer Modules",
            "position:absolute;margin-left:-330px; margin-top:210px",
        ),
        *_form_button(
            "logOut.cgi",
            "Log Out",
            "position:absolute;margin-left:-330px; margin-top:250px",
        ),
    ]


def _module_rows(conn: sqlite3.Connection, module: str) -> list[tuple[str, str]]:
    """Return the (name, mark) rows of a module table; none for an unknown module."""
    if module not in MODULES:
        return []
    try:
        return [(str(name), str(mark)) for name, mark in conn.execute(f'SELECT name, mark FROM "{module}"')]
    except sqlite3.Error:
        return []


def _update_mark(conn: sqlite3.Connection, module: str, student: str, mark: str) -> bool:
    if module not in MODULES:
        return False
    try:
        with conn:
            conn.execute(f'UPDATE "{module}" SET mark = ? WHERE name = ?', (mark, student))
    except sqlite3.Error:
        return False
    return True


def _insert_student(conn: sqlite3.Connection, module: str, student: str, mark: str) -> bool:
    if module not in MODULES:
        return False
    try:
        with conn:
            conn.execute(f'INSERT INTO "{module}" VALUES (?, ?)', (student, mark))
    except sqlite3.Error:
        return False
    return True


def save_module_page(
    conn: sqlite3.Connection,
    form: Mapping[str, str],
    cookies: Mapping[str, str],
    now: int | None = None,
) -> str:
    """Return the CGI response that saves the marks posted for a module.

    The ``module1`` field names the module; every other field maps a student
    to a mark. A blank mark leaves the student unchanged. If any mark is not
    a whole number from 0 to 100, nothing is saved.
    """
    current = _now(now)
    record = load_session(conn)
    if not session_valid(record, cookies.get("emailPin", ""), current):
        return CONTENT_HEADER + timeout_page()

    touch_session(conn, current)

    parts = _page_start("Save Module", "Save Module", "Save Module")

    module = ""
    for field, value in form.items():
        if field == _MODULE_FIELD:
            module = value
    marks = [(field, value) for field, value in form.items() if field != _MODULE_FIELD]

    invalid = [field for field, value in marks if value and not is_in_range(value)]
    parts += [f"{escape(field)} " for field in invalid]
    valid = not invalid

    if valid:
        parts += [
            "</body></html>",
            '<table style="position:absolute;margin-top:-00px; margin-left:0px;">',
            '<table border="1" cellpadding="10" >',
            "<tr>",
            "<th>Student</th>",
            "<th>Mark</th>",
            "</tr>",
            "<tr>",
        ]
        for student, mark in marks:
            parts.append(f"<tr><td>{escape(student)}</td>")
            if mark:
                if not _update_mark(conn, module, student, mark):
                    parts.append(_QUERY_ERROR)
                parts.append(f"<td>{escape(mark)}</td></tr>\n")
        parts.append("The following changes have been made to the  ")
    else:
        parts.append("</body></html> have  invalid entry in the ")

    parts.append(f"{escape(module)} Module.<br>")
    if valid:
        parts.append("Blank means no change to students mark.")
    else:
        parts.append("No changes have been made to the module ")
    parts += _back_and_logout_buttons()
    return CONTENT_HEADER + "".join(parts)


def save_student_page(
    conn: sqlite3.Connection,
    form: Mapping[str, str],
    cookies: Mapping[str, str],
    now: int | None = None,
) -> str:
    """Return the CGI response that adds a student and mark to a module.

    The student's name must have at least four characters and be new to the
    module; the mark may be blank or a whole number from 0 to 100.
    """
    current = _now(now)
    module = form.get(_MODULE_FIELD)
    student = form.get("name")
    mark = form.get("mark")
    if module is None or student is None or mark is None:
        return CONTENT_HEADER + timeout_page()

    parts = _page_start(
        "Save Student to Module",
        "Save Student to Module",
        f"Add Student to Module {escape(module)}",
    )

    valid = len(student) >= MIN_NAME_LENGTH and (not mark or is_in_range(mark))
    if not valid:
        parts.append(
            '<a href="./lecturer.cgi" rel="external" title="Invalid entry">'
            " Invalid entry </a>"
        )
        return CONTENT_HEADER + "".join(parts)

    record = load_session(conn)
    if not session_valid(record, cookies.get("emailPin", ""), current):
        parts.append(timeout_page())
        return CONTENT_HEADER + "".join(parts)

    touch_session(conn, current)

    if any(existing == student for existing, _mark in _module_rows(conn, module)):
        parts.append(
            '<a href="./lecturer.cgi" rel="external" title="Duplicate database entry">'
            " Duplicate database entry </a>"
        )
        return CONTENT_HEADER + "".join(parts)

    if not _insert_student(conn, module, student, mark):
        parts.append(_QUERY_ERROR)

    parts += [
        '<table style="margin-top:-0px; margin-left:0px;">',
        '<table border="1" cellpadding="10" >',
        "<tr>",
        "<th>Name</th>",
        "<th>Mark</th>",
        "</tr>",
        "<tr>",
    ]
    parts += [
        f"<td>{escape(row_name)}</td><td>{escape(row_mark)}</td></td></tr>"
        for row_name, row_mark in _module_rows(conn, module)
    ]
    parts += _back_and_logout_buttons()
    return CONTENT_HEADER + "".join(parts)