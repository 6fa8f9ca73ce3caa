from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

import portal.models.user as user_module
from portal.config import DatabaseConfig
from portal.database import create_pool, run_migrations
from portal.models.user import (
    CreateUser,
    EmailAlreadyExists,
    InvalidVerificationCode,
    User,
    UserNotFound,
    UserNotFoundByEmail,
    UserRole,
    VerificationCodeExpired,
    generate_verification_code,
)


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(user_module, "BCRYPT_COST", 4)


@pytest.fixture
def db():
    database = create_pool(DatabaseConfig(url=":memory:"))
    run_migrations(database)
    yield database
    database.close()


def _create(db, email="alice@example.com", **kwargs):
    password = "password"
    return User.create(db, CreateUser(fullname="Alice", email=email, password=password, **kwargs))


def test_role_parse():
    assert UserRole.parse("super_admin") is UserRole.SUPER_ADMIN
    assert UserRole.parse("treasurer") is UserRole.TREASURER
    with pytest.raises(ValueError):
        UserRole.parse("owner")


def test_verification_code_shape():
    code = generate_verification_code()
    assert len(code) == 32
    assert code.isalnum() and code.isascii()


def test_create_hashes_password_and_sets_code(db):
    user = _create(db, user_role=UserRole.ADMIN, is_active=True)
    assert user.password_hash != "password"
    assert user.verify_password("password") is True
    assert user.verify_password("secret") is False
    assert user.user_role is UserRole.ADMIN
    assert user.is_active is True
    assert user.is_email_verified is False
    assert len(user.email_verification_code) == 32
    assert user.email_verification_expires_at - user.created_at == timedelta(hours=24)


def test_duplicate_email_raises(db):
    _create(db)
    with pytest.raises(EmailAlreadyExists) as info:
        _create(db)
    assert info.value.email == "alice@example.com"


def test_find_by_id_and_email(db):
    user = _create(db)
    assert User.find_by_id(db, user.id) == user
    assert User.find_by_email(db, "alice@example.com") == user
    assert User.find_by_id(db, uuid4()) is None


def test_verify_email_clears_code(db):
    user = _create(db)
    verified = User.verify_email(db, user.email_verification_code)
    assert verified.is_email_verified is True
    assert verified.email_verification_code is None
    assert verified.email_verification_expires_at is None


def test_verify_email_invalid_code(db):
    with pytest.raises(InvalidVerificationCode):
        User.verify_email(db, "token")


def test_verify_email_expired(db):
    user = _create(db)
    db.execute(
        "UPDATE users SET email_verification_expires_at = ? WHERE id = ?",
        (datetime.now(timezone.utc) - timedelta(hours=1), user.id),
    )
    with pytest.raises(VerificationCodeExpired):
        User.verify_email(db, user.email_verification_code)


def test_resend_replaces_code(db):
    user = _create(db)
    resent = User.resend_verification_code(db, user.email)
    assert resent.email_verification_code != user.email_verification_code
    assert User.find_by_verification_code(db, resent.email_verification_code).id == user.id


def test_resend_for_verified_user_is_unchanged(db):
    user = _create(db)
    verified = User.verify_email(db, user.email_verification_code)
    assert User.resend_verification_code(db, user.email) == verified


def test_resend_unknown_email(db):
    with pytest.raises(UserNotFoundByEmail):
        User.resend_verification_code(db, "nobody@example.com")


def test_authenticate(db):
    user = _create(db)
    password = "password"
    assert User.authenticate(db, user.email, password=password).id == user.id
    assert User.authenticate(db, user.email, "secret") is None
    assert User.authenticate(db, "nobody@example.com", password=password) is None


def test_toggle_active(db):
    user = _create(db)
    toggled = User.toggle_active(db, user.id)
    assert toggled.is_active is (not user.is_active)
    assert User.toggle_active(db, user.id).is_active is user.is_active
    with pytest.raises(UserNotFound):
        User.toggle_active(db, uuid4())


def test_find_all_newest_first(db):
    _create(db, email="a@example.com")
    _create(db, email="b@example.com")
    users = User.find_all(db)
    assert {u.email for u in users} == {"a@example.com", "b@example.com"}
    stamps = [u.created_at for u in users]
    assert stamps == sorted(stamps, reverse=True)


def test_to_dict(db):
    user = _create(db)
    data = user.to_dict()
    assert data["id"] == str(user.id)
    assert data["user_role"] == "member"
    assert datetime.fromisoformat(data["created_at"]) == user.created_at