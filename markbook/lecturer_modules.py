"""The page that saves which modules a lecturer teaches."""

from __future__ import annotations

import sqlite3
import time
from collections.abc import Mapping
from html import escape

from markbook.database import MODULES
from markbook.select_pages import CONTENT_HEADER
from markbook.session import load_session, session_valid, timeout_page

__all__ = [
    "module_assignment",
    "save_lecturer_modules_page",
]

_CHECKED = "on"


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else int(now)


def _column(index: int) -> str:
    return f"module{index}"


def module_assignment(form: Mapping[str, str]) -> dict[str, int]:
    """Map each users-table module column to 1 or 0 from the posted checkboxes.

    A module counts as chosen when its checkbox field is present with the
    value ``on`` (in any case).
    """
    return {
        _column(index): int(form.get(module, "").lower() == _CHECKED)
        for index, module in enumerate(MODULES, start=1)
    }


def _page_start() -> list[str]:
    return [
        "<html><head><title>Save Lecturer Modules</title></head>\n",
        "<head>\n",
        "<title> Save Lecturer Modules </title>\n",
        "</head>\n",
        "<body>\n",
        '<div align="center">\n',
        '<h1 align="center">Save Lecturer Modules</h1>\n',
    ]


def _form_button(action: str, value: str, margin_top: int) -> list[str]:
    return [
        f'<form method="post" action="{action}">\n',
        f'<input type=submit value="{value}" '
        f'style="position:absolute;margin-left:-335px; margin-top:{margin_top}px">',
        "\n",
        "</form>\n",
    ]


def _save_assignment(
    conn: sqlite3.Connection, lecturer: str, assignment: Mapping[str, int]
) -> None:
    columns = ", ".join(f"{column} = ?" for column in assignment)
    with conn:
        conn.execute(
            f"UPDATE users SET {columns} WHERE name = ?",
            (*assignment.values(), lecturer),
        )


def _lecturer_rows(conn: sqlite3.Connection, lecturer: str) -> list[str]:
    columns = ", ".join(_column(index) for index in range(1, len(MODULES) + 1))
    rows = []
    for user_id, name, *flags, email in conn.execute(
        f"SELECT id, name, {columns}, email FROM users"
    ):
        if str(name) != lecturer:
            continue
        cells = [f"<td>{escape(str(user_id))}</td>", f"<td>{escape(str(name))}</td>"]
        cells += [
            f"<td>{module if str(flag) == '1' else ''}</td>"
            for module, flag in zip(MODULES, flags)
        ]
        cells.append(f"<td>{escape(str(email))}</td>")
        cells.append("</td></tr>")
        rows.append("".join(cells))
    return rows


def save_lecturer_modules_page(
    conn: sqlite3.Connection,
    form: Mapping[str, str],
    cookies: Mapping[str, str],
    now: int | None = None,
) -> str:
    """Return the CGI response that saves a lecturer's modules and shows the result.

    The ``lecturer`` field names the lecturer; a checkbox for each module
    says whether the lecturer teaches it. A missing lecturer, a PIN cookie
    that does not match or a timed-out session gives the time-out page.
    """
    current = _now(now)
    parts = _page_start()
    assignment = module_assignment(form)

    lecturer = form.get("lecturer")
    if lecturer is None:
        return CONTENT_HEADER + "".join(parts) + timeout_page()

    record = load_session(conn)
    if not session_valid(record, cookies.get("emailPin", ""), current):
        return CONTENT_HEADER + "".join(parts) + timeout_page()

    parts += [
        '<table style="margin-top:-0px; margin-left:0px;">',
        '<table border="1" cellpadding="10" >',
        "<tr>",
        "<th>ID</th>",
        "<th>User</th>",
        *(f"<th>{module}</th>" for module in MODULES),
        "<th>Email</th>",
        "</tr>",
        "<tr>",
    ]

    _save_assignment(conn, lecturer, assignment)
    parts += _lecturer_rows(conn, lecturer)

    parts += _form_button("selectLecturer.cgi", "Back To Select Lecturer", 120)
    parts += _form_button("lecturer.cgi", "Back To Lecturer Options", 150)
    parts += _form_button("logOut.cgi", "Log Out", 180)
    parts += ["<br/>\n", "</body>\n", "</html>\n"]
    return CONTENT_HEADER + "".join(parts)