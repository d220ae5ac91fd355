import sqlite3

import pytest

from markbook.database import MODULES, reset_email_pin, reset_users
from markbook.lecturer_modules import module_assignment, save_lecturer_modules_page
from markbook.session import load_session, timeout_page

PIN = "4321"
SAVED_TIME = 1_000_000


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    reset_email_pin(connection)
    reset_users(connection)
    with connection:
        connection.execute(
            "UPDATE emailPin SET pin = ?, time = ? WHERE id = 1", (PIN, SAVED_TIME)
        )
    yield connection
    connection.close()


def _flags(connection, name):
    return connection.execute(
        "SELECT module1, module2, module3, module4, module5 FROM users WHERE name = ?",
        (name,),
    ).fetchone()


def test_module_assignment_all_checked():
    form = {module: "on" for module in MODULES}
    assert module_assignment(form) == {f"module{i}": 1 for i in range(1, 6)}


def test_module_assignment_none_checked():
    assert module_assignment({}) == {f"module{i}": 0 for i in range(1, 6)}


def test_module_assignment_only_on_counts():
    result = module_assignment({"maths": "off", "chem": "ON", "history": ""})
    assert result["module1"] == 0
    assert result["module3"] == 1
    assert result["module5"] == 0


def test_valid_session_updates_lecturer(conn):
    form = {"lecturer": "andy", "chem": "on", "history": "on"}
    page = save_lecturer_modules_page(conn, form, {"emailPin": PIN}, SAVED_TIME + 10)
    assert _flags(conn, "andy") == (0, 0, 1, 0, 1)
    assert "<td>andy</td>" in page
    assert "<td>chem</td>" in page
    assert "<td>maths</td>" not in page
    assert "<td>bob</td>" not in page
    assert timeout_page() not in page


def test_other_users_untouched(conn):
    before = _flags(conn, "bob")
    save_lecturer_modules_page(conn, {"lecturer": "andy"}, {"emailPin": PIN}, SAVED_TIME)
    assert _flags(conn, "bob") == before
    assert _flags(conn, "andy") == (0, 0, 0, 0, 0)


def test_page_has_headers_and_buttons(conn):
    page = save_lecturer_modules_page(
        conn, {"lecturer": "bob"}, {"emailPin": PIN}, SAVED_TIME
    )
    for module in MODULES:
        assert f"<th>{module}</th>" in page
    assert 'action="selectLecturer.cgi"' in page
    assert 'action="logOut.cgi"' in page
    assert page.endswith("</html>\n")


def test_wrong_cookie_gives_timeout(conn):
    page = save_lecturer_modules_page(
        conn, {"lecturer": "andy", "physics": "on"}, {"emailPin": "token"}, SAVED_TIME
    )
    assert timeout_page() in page
    assert _flags(conn, "andy") == (1, 1, 0, 0, 0)


def test_missing_cookie_gives_timeout(conn):
    page = save_lecturer_modules_page(conn, {"lecturer": "andy"}, {}, SAVED_TIME)
    assert timeout_page() in page


def test_timeout_boundary(conn):
    late = save_lecturer_modules_page(
        conn, {"lecturer": "andy"}, {"emailPin": PIN}, SAVED_TIME + 61
    )
    assert timeout_page() in late
    assert _flags(conn, "andy") == (1, 1, 0, 0, 0)
    in_time = save_lecturer_modules_page(
        conn, {"lecturer": "andy"}, {"emailPin": PIN}, SAVED_TIME + 60
    )
    assert timeout_page() not in in_time
    assert _flags(conn, "andy") == (0, 0, 0, 0, 0)


def test_missing_lecturer_gives_timeout(conn):
    page = save_lecturer_modules_page(conn, {"maths": "on"}, {"emailPin": PIN}, SAVED_TIME)
    assert timeout_page() in page
    assert "Save Lecturer Modules" in page


def test_session_time_not_refreshed(conn):
    save_lecturer_modules_page(conn, {"lecturer": "andy"}, {"emailPin": PIN}, SAVED_TIME + 5)
    assert load_session(conn).time == SAVED_TIME