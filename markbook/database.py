"""Database connection and the reset routines for the e-mail PIN, module and user tables."""

from __future__ import annotations

import argparse
import sqlite3
from contextlib import closing

from markbook.validation import shift_encrypt

__all__ = [
    "DEFAULT_DATABASE",
    "MODULES",
    "connect",
    "reset_email_pin",
    "reset_modules",
    "reset_users",
    "main",
]

DEFAULT_DATABASE = "markbook.db"

MODULES: tuple[str, ...] = ("maths", "physics", "chem", "english", "history")

_STUDENTS = ("smith", "jones", "wiliams")

_SEED_MARKS: dict[str, tuple[str, str, str]] = {
    "maths": ("10", "20", "30"),
    "physics": ("40", "50", "60"),
    "chem": ("70", "80", "90"),
    "english": ("15", "25", "35"),
    "history": ("45", "55", "65"),
}

_SEED_PASSWORD = "password"

# id, name, module1..module5, email
_SEED_USERS = (
    (1, "admin", (0, 0, 0, 0, 0), "admin@example.com"),
    (2, "andy", (1, 1, 0, 0, 0), "andy@example.com"),
    (3, "bob", (1, 0, 1, 0, 0), "bob@example.com"),
)


def connect(path: str = DEFAULT_DATABASE) -> sqlite3.Connection:
    """Open the markbook database at ``path``."""
    return sqlite3.connect(path)


def reset_email_pin(conn: sqlite3.Connection) -> None:
    """Recreate the emailPin table holding a single blank session row."""
    with conn:
        conn.execute("DROP TABLE IF EXISTS emailPin")
        conn.execute(
            "CREATE TABLE emailPin ("
            "id INTEGER, pin VARCHAR(20), userID VARCHAR(2), "
            "phase VARCHAR(2), time BIGINT)"
        )
        conn.execute("INSERT INTO emailPin VALUES (1, 'xxx', '0', '0', 0)")


def reset_modules(conn: sqlite3.Connection) -> None:
    """Recreate every module table with its three sample students."""
    with conn:
        for module in MODULES:
            conn.execute(f'DROP TABLE IF EXISTS "{module}"')
            conn.execute(f'CREATE TABLE "{module}" (name VARCHAR(20), mark VARCHAR(20))')
            conn.executemany(
                f'INSERT INTO "{module}" VALUES (?, ?)',
                zip(_STUDENTS, _SEED_MARKS[module]),
            )


def reset_users(conn: sqlite3.Connection) -> None:
    """Recreate the users table with the administrator and two lecturers."""
    stored_password = shift_encrypt(_SEED_PASSWORD)
    with conn:
        conn.execute("DROP TABLE IF EXISTS users")
        conn.execute(
            "CREATE TABLE users ("
            "id INTEGER, name VARCHAR(20), password VARCHAR(20), "
            "module1 BOOLEAN, module2 BOOLEAN, module3 BOOLEAN, "
            "module4 BOOLEAN, module5 BOOLEAN, email VARCHAR(40))"
        )
        conn.executemany(
            "INSERT INTO users VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                (user_id, name, stored_password, *flags, email)
                for user_id, name, flags, email in _SEED_USERS
            ),
        )


_RESETS = {
    "email-pin": (reset_email_pin, "Emailpin Database Reset"),
    "modules": (reset_modules, "Modules Database Reset"),
    "users": (reset_users, "Users Database Reset"),
}


def main(argv: list[str] | None = None) -> int:
    """Reset one or all of the markbook tables."""
    parser = argparse.ArgumentParser(description="Reset markbook database tables.")
    parser.add_argument(
        "table",
        nargs="?",
        default="all",
        choices=[*_RESETS, "all"],
        help="table to reset (default: all)",
    )
    parser.add_argument("--database", default=DEFAULT_DATABASE, help="database file")
    args = parser.parse_args(argv)

    chosen = list(_RESETS) if args.table == "all" else [args.table]
    try:
        with closing(connect(args.database)) as conn:
            for name in chosen:
                reset, message = _RESETS[name]
                reset(conn)
                print(message)
    except sqlite3.Error:
        print("Connection Failed")
        return 1
    return 0