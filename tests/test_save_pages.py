import pytest

from markbook.database import connect, reset_email_pin, reset_modules, reset_users
from markbook.save_pages import save_module_page, save_student_page
from markbook.session import load_session

PIN = "4321"
SAVED_AT = 1000
NOW = 1030
COOKIES = {"emailPin": PIN}


@pytest.fixture
def conn():
    connection = connect(":memory:")
    reset_email_pin(connection)
    reset_modules(connection)
    reset_users(connection)
    with connection:
        connection.execute("UPDATE emailPin SET pin = ?, time = ? WHERE id = 1", (PIN, SAVED_AT))
    yield connection
    connection.close()


def _mark(conn, module, name):
    rows = conn.execute(f'SELECT mark FROM "{module}" WHERE name = ?', (name,)).fetchall()
    return [mark for (mark,) in rows]


# save_module_page


def test_save_module_wrong_cookie_times_out(conn):
    page = save_module_page(conn, {"module1": "maths", "smith": "77"}, {"emailPin": "0"}, NOW)
    assert "Login Time Out" in page
    assert _mark(conn, "maths", "smith") == ["10"]


def test_save_module_expired_session_times_out(conn):
    page = save_module_page(conn, {"module1": "maths", "smith": "77"}, COOKIES, SAVED_AT + 61)
    assert "Login Time Out" in page
    assert _mark(conn, "maths", "smith") == ["10"]


def test_save_module_at_limit_is_still_valid(conn):
    page = save_module_page(conn, {"module1": "maths", "smith": "77"}, COOKIES, SAVED_AT + 60)
    assert "Login Time Out" not in page
    assert _mark(conn, "maths", "smith") == ["77"]


def test_save_module_updates_marks(conn):
    page = save_module_page(
        conn, {"module1": "physics", "smith": "77", "jones": "100"}, COOKIES, NOW
    )
    assert page.startswith("Content-Type: text/html; charset=utf-8")
    assert _mark(conn, "physics", "smith") == ["77"]
    assert _mark(conn, "physics", "jones") == ["100"]
    assert "The following changes have been made to the  physics Module.<br>" in page
    assert "<td>77</td></tr>" in page


def test_save_module_refreshes_session_time(conn):
    save_module_page(conn, {"module1": "maths"}, COOKIES, NOW)
    assert load_session(conn).time == NOW


def test_save_module_blank_mark_leaves_student_unchanged(conn):
    page = save_module_page(conn, {"module1": "chem", "smith": "", "jones": "5"}, COOKIES, NOW)
    assert _mark(conn, "chem", "smith") == ["70"]
    assert _mark(conn, "chem", "jones") == ["5"]
    assert "Blank means no change to students mark." in page


@pytest.mark.parametrize("bad", ["101", "-1", "abc", "1.5"])
def test_save_module_invalid_mark_saves_nothing(conn, bad):
    page = save_module_page(
        conn, {"module1": "english", "smith": "50", "jones": bad}, COOKIES, NOW
    )
    assert _mark(conn, "english", "smith") == ["15"]
    assert _mark(conn, "english", "jones") == ["25"]
    assert "jones  have  invalid entry in the " in page
    assert "No changes have been made to the module " in page


def test_save_module_unknown_module_reports_query_error(conn):
    page = save_module_page(conn, {"module1": "art", "smith": "50"}, COOKIES, NOW)
    assert "[-] Query Input Error!<br>" in page


# save_student_page


def test_save_student_adds_row(conn):
    page = save_student_page(conn, {"module1": "history", "name": "taylor", "mark": "88"}, COOKIES, NOW)
    assert _mark(conn, "history", "taylor") == ["88"]
    assert '<h1 align="center">Add Student to Module history</h1>' in page
    assert "<td>taylor</td><td>88</td>" in page
    assert load_session(conn).time == NOW


def test_save_student_blank_mark_allowed(conn):
    save_student_page(conn, {"module1": "maths", "name": "taylor", "mark": ""}, COOKIES, NOW)
    assert _mark(conn, "maths", "taylor") == [""]


def test_save_student_duplicate_rejected(conn):
    page = save_student_page(conn, {"module1": "maths", "name": "smith", "mark": "50"}, COOKIES, NOW)
    assert "Duplicate database entry" in page
    assert _mark(conn, "maths", "smith") == ["10"]


def test_save_student_short_name_rejected(conn):
    page = save_student_page(conn, {"module1": "maths", "name": "abc", "mark": "50"}, COOKIES, NOW)
    assert "Invalid entry" in page
    assert _mark(conn, "maths", "abc") == []


@pytest.mark.parametrize("bad", ["101", "x1", "-5"])
def test_save_student_bad_mark_rejected(conn, bad):
    page = save_student_page(conn, {"module1": "maths", "name": "taylor", "mark": bad}, COOKIES, NOW)
    assert "Invalid entry" in page
    assert _mark(conn, "maths", "taylor") == []


def test_save_student_timed_out(conn):
    page = save_student_page(
        conn, {"module1": "maths", "name": "taylor", "mark": "50"}, COOKIES, SAVED_AT + 61
    )
    assert "Login Time Out" in page
    assert _mark(conn, "maths", "taylor") == []


def test_save_student_missing_field_times_out(conn):
    page = save_student_page(conn, {"module1": "maths", "name": "taylor"}, COOKIES, NOW)
    assert "Login Time Out" in page
    assert _mark(conn, "maths", "taylor") == []


def test_save_student_unknown_module_reports_query_error(conn):
    page = save_student_page(conn, {"module1": "art", "name": "taylor", "mark": "50"}, COOKIES, NOW)
    assert "[-] Query Input Error!<br>" in page