# markbook

A small mark book for lecturers. It builds the HTML pages behind the mark
book site and keeps its records in an SQLite database file. It has these
parts:

- `markbook.session`: the session check against a stored e-mail pin, with a
  60 second time-out, and the "Login Time Out" page
- `markbook.select_pages`: the token-login page and the pages to pick a
  lecturer or a module
- `markbook.save_pages`: pages to save module marks and to add a student to
  a module
- `markbook.lecturer_modules`: the page that assigns modules to a lecturer
- `markbook.database`: opening the database and resetting its tables
- `markbook.validation`: mark checks and the character-shift scheme used for
  stored passwords
- `markbook.authcode`: AES-256-GCM helpers and authorisation codes made from
  a pin
- `markbook.b64`: base64 encoding and lenient decoding

## Installing

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Commands

`markbook-authcode` prints the authorisation code for an e-mail pin. The pin
may be given as an argument; otherwise the first word read from standard
input is used:

    $ markbook-authcode 1234
    Type your email pin: Authorisation Code:...

`markbook-reset-db` puts the database back to its starting state. With no
argument it rebuilds every table; `email-pin`, `modules` or `users` picks
one. `--database` names the file (default `markbook.db`):

    $ markbook-reset-db
    Emailpin Database Reset
    Modules Database Reset
    Users Database Reset

The e-mail pin table gets one blank session row. The five module tables
(maths, physics, chem, english, history) each get three sample students.
The users table gets an administrator and two lecturers.

## Using the library

```python
import time

from markbook.database import connect, reset_email_pin, reset_modules, reset_users
from markbook.select_pages import select_module_page

conn = connect("markbook.db")
reset_email_pin(conn)
reset_modules(conn)
reset_users(conn)

html = select_module_page(conn, {"emailPin": "token"}, time.time())
```

Each page function takes the database connection, the request's form fields
and cookies as mappings where it needs them, and an optional current time.
It returns the whole response as text, starting with the `Content-Type`
header. The token-login page also sets a `phase=2` cookie.

A session is valid only when the `emailPin` cookie matches the stored pin
and no more than 60 seconds have passed since the stored time. Otherwise the
page is the "Login Time Out" page from `markbook.session.timeout_page()`.
The select pages and save pages refresh the stored time when the session is
valid. The lecturer-modules page does not.

Marks must be whole numbers from 0 to 100. A blank mark leaves the mark as
it was. If any posted mark is invalid, `save_module_page` saves nothing. A
new student's name must be at least four characters long and must not
already be in the module.

`markbook.b64.decode` accepts either base64 alphabet and `=`, `.` or no
padding. It raises `InvalidBase64Error` on input that is not base64.
`markbook.authcode.gcm_decrypt` raises `cryptography.exceptions.InvalidTag`
when the tag does not verify.

## What it does not do

The package only builds page text. It does not run a web server and has no
CGI entry points, so you must wire the page functions to requests yourself.
The pages link to other pages that the package does not provide: the
e-mail pin login, the lecturer menu, the add-student and assign-module forms,
the authorisation-code check and log-out. It does not send e-mail pins or
create sessions. The session row changes only through `reset_email_pin` and
the time refresh.