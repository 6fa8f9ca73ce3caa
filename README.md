# portal

The backend logic of a small membership portal. Members have accounts with
e-mail verification. Contributions are set up and paid. Announcements and
event photos are shared. Records are kept in SQLite. Request handlers turn
parsed payloads into JSON-ready HTTP responses.

## What is in the package

- **Configuration** (`portal.config`). `AppConfig.from_env(environ)` reads
  the settings from a mapping, `os.environ` by default. It returns frozen
  `AppConfig`, `DatabaseConfig` and `ServerConfig` values. A missing or
  invalid setting raises `ConfigError`.
- **Storage** (`portal.database`). `create_pool(config)` opens a `Database`
  for `config.url`. `run_migrations(db)` creates the tables `users`,
  `announcements`, `contributions`, `payments` and `photos` if they are
  missing. `Database` offers `execute`, `fetch_one`, `fetch_all` and
  `close`, and can be used as a context manager. Rows come back as
  dictionaries. Failures raise `DatabaseError`.
- **Models** (`portal.models`):
  - `user`: `User`, `CreateUser`, `UserRole` and `generate_verification_code()`.
    `User` has `create` (bcrypt-hashed password, 24-hour verification code),
    `find_by_id`, `find_by_email`, `find_by_verification_code`,
    `verify_email`, `resend_verification_code`, `find_all`,
    `verify_password`, `authenticate` and `toggle_active`. Errors derive
    from `UserError`: `UserNotFound`, `UserNotFoundByEmail`,
    `EmailAlreadyExists`, `InvalidVerificationCode`,
    `VerificationCodeExpired` and `PasswordHashError`.
  - `announcement`: `Announcement`, `CreateAnnouncement`, `UpdateAnnouncement`.
  - `contribution`: `Contribution`, `CreateContribution`,
    `UpdateContribution`. It also has `find_by_creator` and
    `find_due_before`.
  - `payment`: `Payment`, `CreatePayment`, `UpdatePayment` and
    `PaymentStatus` (`pending` / `verified`). `find_by_user` returns the
    first payment of a user, or `None`.
  - `photo`: `Photo`, `CreatePhoto`, `UpdatePhoto`. In an `UpdatePhoto`,
    `caption` and `event_id` left at `UNSET` are cleared, and a `url` of
    `None` keeps the stored one.

  Each record class has `create`, `find_by_id`, `find_all`, `update`,
  `delete` and `to_dict`. Each family raises its own `...NotFound` and
  `...NoUpdateFields` errors.
- **Authentication types** (`portal.auth`). This module holds
  `LoginRequest`, `UserInfo`, `AuthResponse` and `Claims`.
  `Claims.new(...)` issues claims valid for 24 hours. `AuthenticatedUser`
  is the caller passed to handlers, and its `is_admin()` is true for
  `UserRole.ADMIN` and `UserRole.SUPER_ADMIN`.
- **Request payloads** (`portal.payloads`). Each request class has a
  `from_json(data)` constructor that checks a decoded JSON object. A
  malformed object raises `PayloadError`, a `ValueError`. Payment statuses
  in payloads are written `"Pending"` / `"Verified"`.
- **Responses** (`portal.responses`). `ApiResponse.success`,
  `success_with_message` and `error` build the envelope.
  `to_response(status)` gives an `HttpResponse`, whose `json()` is the
  encoded body.
- **Handlers** (`portal.handlers`):
  - `users`: `index` and `toggle_user_active`. Only admins may toggle, and
    not their own account.
  - `announcements`: `create`, `get_announcement`, `list_all`, `update` and
    `delete`. Only the poster or an admin may change or delete one.
  - `contributions`: `create`, `get_contribution`, `get_user_contributions`,
    `list_all`, `update` and `delete`. Only the creator may change or
    delete one. `create` raises `PayloadError` when the payload has no
    `due_date`.

## Configuration

| Variable | Meaning |
| --- | --- |
| `APP_ENV` | `development` or `production`; any other value is rejected |
| `LOCAL_DATABASE_URL` | database used when `APP_ENV=development` |
| `PROD_DATABASE_URL` | database used when `APP_ENV=production` |
| `APP_SERVER__HOST`, `APP_SERVER__PORT` | listen address, default `127.0.0.1:8080` |
| `APP_DATABASE__MAX_CONNECTIONS` | default 20 |
| `APP_DATABASE__MIN_CONNECTIONS` | default 5; may not exceed the maximum |
| `APP_DATABASE__CONNECTION_TIMEOUT` | seconds, default 30; used as the SQLite lock timeout |
| `APP_DATABASE__IDLE_TIMEOUT` | seconds, default 600 |

The database URL may be a file path, `sqlite:<path>`, `sqlite://<path>`
or `:memory:`. Any other URL scheme raises `DatabaseError`.

## Usage

```python
from uuid import uuid4

from portal.auth import AuthenticatedUser
from portal.config import AppConfig
from portal.database import create_pool, run_migrations
from portal.handlers import announcements
from portal.models.user import UserRole
from portal.payloads import CreateAnnouncementRequest

config = AppConfig.from_env(
    {"APP_ENV": "development", "LOCAL_DATABASE_URL": ":memory:"}
)
db = create_pool(config.database)
run_migrations(db)

current_user = AuthenticatedUser(
    user_id=uuid4(), email="member@example.com", user_role=UserRole.MEMBER
)
payload = CreateAnnouncementRequest.from_json(
    {"title": "General meeting", "body": "Saturday at noon."}
)
response = announcements.create(db, payload, current_user)
print(response.status, response.json())
```

Users are created through the model:

```python
from portal.models.user import CreateUser, User

password = "password"
user = User.create(
    db, CreateUser(fullname="Ada", email="ada@example.com", password=password)
)
assert User.authenticate(db, "ada@example.com", password) is not None
```

## Response shape

A successful call returns a body like this:

```json
{"success": true, "data": {"...": "..."}}
```

A success with a message attached also carries a `message` field. A
deletion returns `"data": null`. A failure returns a body like this:

```json
{"success": false, "error": "Announcement not found"}
```

| Status | Meaning |
| --- | --- |
| 201 | created |
| 200 | success |
| 400 | bad input, or no fields given for an update |
| 403 | access denied |
| 404 | not found |
| 500 | storage failure |

## What the package does not do

- It runs no HTTP server and has no routing or command. The handlers are
  plain functions that you call with a `Database`, a parsed payload and
  an `AuthenticatedUser`.
- It does not sign, issue or validate tokens. `Claims` only describes
  their contents, and the caller must build the `AuthenticatedUser`.
- It sends no e-mail. Verification codes are generated and stored, but
  delivering them is left to the caller.
- It has no handlers for registration, login, e-mail verification,
  payments or photos. For those, use the models directly.