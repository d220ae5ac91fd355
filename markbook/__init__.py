"""Lecturer mark book: HTML pages, session checks, SQLite records, base64 and authorisation codes."""

__version__ = "0.1.0"