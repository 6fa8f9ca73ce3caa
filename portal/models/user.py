"""Portal members, their credentials and e-mail verification."""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

import bcrypt

from portal.database import Database, DatabaseError

BCRYPT_COST = 12
VERIFICATION_CODE_LENGTH = 32
VERIFICATION_CODE_LIFETIME = timedelta(hours=24)

_ALPHANUMERIC = string.ascii_letters + string.digits


class UserError(Exception):
    """Base class for user errors."""


class UserNotFound(UserError):
    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"User with ID {user_id} not found")
        self.id = user_id


class UserNotFoundByEmail(UserError):
    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} not found")
        self.email = email


class EmailAlreadyExists(UserError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email already exists: {email}")
        self.email = email


class InvalidVerificationCode(UserError):
    def __init__(self) -> None:
        super().__init__("Invalid verification code")


class VerificationCodeExpired(UserError):
    def __init__(self) -> None:
        super().__init__("Verification code expired")


class PasswordHashError(UserError):
    def __init__(self) -> None:
        super().__init__("Password hashing error")


class UserRole(str, Enum):
    SUPER_ADMIN = "superadmin"
    ADMIN = "admin"
    MEMBER = "member"
    TREASURER = "treasurer"

    @classmethod
    def parse(cls, value: str) -> UserRole:
        """Parse a role name such as ``super_admin`` or ``member``."""
        names = {
            "super_admin": cls.SUPER_ADMIN,
            "admin": cls.ADMIN,
            "member": cls.MEMBER,
            "treasurer": cls.TREASURER,
        }
        try:
            return names[value]
        except KeyError:
            raise ValueError(f"unknown user role: {value!r}") from None


def generate_verification_code() -> str:
    """Return a random 32-character alphanumeric code."""
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(VERIFICATION_CODE_LENGTH))


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp(value: str | None) -> datetime | None:
    return None if value is None else datetime.fromisoformat(value)


def _iso(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


@dataclass
class CreateUser:
    fullname: str
    email: str
    password: str
    user_role: UserRole = UserRole.MEMBER
    is_active: bool = False


@dataclass
class User:
    id: UUID
    fullname: str
    email: str
    password_hash: str
    phone: str | None
    dob: datetime | None
    photo_url: str | None
    user_role: UserRole
    email_verification_code: str | None
    email_verification_expires_at: datetime | None
    is_email_verified: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def _from_row(cls, row: dict[str, Any]) -> User:
        return cls(
            id=UUID(row["id"]),
            fullname=row["fullname"],
            email=row["email"],
            password_hash=row["password_hash"],
            phone=row["phone"],
            dob=_timestamp(row["dob"]),
            photo_url=row["photo_url"],
            user_role=UserRole(row["user_role"]),
            email_verification_code=row["email_verification_code"],
            email_verification_expires_at=_timestamp(row["email_verification_expires_at"]),
            is_email_verified=bool(row["is_email_verified"]),
            is_active=bool(row["is_active"]),
            created_at=_timestamp(row["created_at"]),
            updated_at=_timestamp(row["updated_at"]),
        )

    @classmethod
    def _fetch(cls, db: Database, user_id: UUID) -> User:
        row = db.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        if row is None:
            raise UserNotFound(user_id)
        return cls._from_row(row)

    @classmethod
    def create(cls, db: Database, data: CreateUser) -> User:
        try:
            existing = cls.find_by_email(db, data.email)
        except DatabaseError:
            existing = None
        if existing is not None:
            raise EmailAlreadyExists(data.email)

        try:
            hashed = bcrypt.hashpw(data.password.encode(), bcrypt.gensalt(BCRYPT_COST))
        except ValueError:
            raise PasswordHashError() from None

        now = _now()
        user_id = uuid4()
        db.execute(
            "INSERT INTO users (id, fullname, email, password_hash, user_role,"
            " email_verification_code, email_verification_expires_at,"
            " is_email_verified, is_active, created_at, updated_at)"
            " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                user_id,
                data.fullname,
                data.email,
                hashed.decode(),
                data.user_role,
                generate_verification_code(),
                now + VERIFICATION_CODE_LIFETIME,
                False,
                data.is_active,
                now,
                now,
            ),
        )
        return cls._fetch(db, user_id)

    @classmethod
    def find_by_id(cls, db: Database, user_id: UUID) -> User | None:
        row = db.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def find_by_email(cls, db: Database, email: str) -> User | None:
        row = db.fetch_one("SELECT * FROM users WHERE email = ?", (email,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def find_by_verification_code(cls, db: Database, code: str) -> User | None:
        row = db.fetch_one("SELECT * FROM users WHERE email_verification_code = ?", (code,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def verify_email(cls, db: Database, verification_code: str) -> User:
        user = cls.find_by_verification_code(db, verification_code)
        if user is None:
            raise InvalidVerificationCode()
        expires_at = user.email_verification_expires_at
        if expires_at is not None and _now() > expires_at:
            raise VerificationCodeExpired()
        db.execute(
            "UPDATE users SET is_email_verified = 1, email_verification_code = NULL,"
            " email_verification_expires_at = NULL, updated_at = ? WHERE id = ?",
            (_now(), user.id),
        )
        return cls._fetch(db, user.id)

    @classmethod
    def resend_verification_code(cls, db: Database, email: str) -> User:
        user = cls.find_by_email(db, email)
        if user is None:
            raise UserNotFoundByEmail(email)
        if user.is_email_verified:
            return user
        now = _now()
        db.execute(
            "UPDATE users SET email_verification_code = ?, email_verification_expires_at = ?,"
            " updated_at = ? WHERE id = ?",
            (generate_verification_code(), now + VERIFICATION_CODE_LIFETIME, now, user.id),
        )
        return cls._fetch(db, user.id)

    @classmethod
    def find_all(cls, db: Database) -> list[User]:
        rows = db.fetch_all("SELECT * FROM users ORDER BY created_at DESC")
        return [cls._from_row(row) for row in rows]

    def verify_password(self, password: str) -> bool:
        """Check ``password`` against the stored hash."""
        try:
            return bcrypt.checkpw(password.encode(), self.password_hash.encode())
        except ValueError:
            raise PasswordHashError() from None

    @classmethod
    def authenticate(cls, db: Database, email: str, password: str) -> User | None:
        user = cls.find_by_email(db, email)
        if user is None:
            return None
        try:
            matches = user.verify_password(password)
        except PasswordHashError:
            matches = False
        return user if matches else None

    @classmethod
    def toggle_active(cls, db: Database, user_id: UUID) -> User:
        user = cls.find_by_id(db, user_id)
        if user is None:
            raise UserNotFound(user_id)
        db.execute(
            "UPDATE users SET is_active = ?, updated_at = ? WHERE id = ?",
            (not user.is_active, _now(), user.id),
        )
        return cls._fetch(db, user.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "fullname": self.fullname,
            "email": self.email,
            "password_hash": self.password_hash,
            "phone": self.phone,
            "dob": _iso(self.dob),
            "photo_url": self.photo_url,
            "user_role": self.user_role.value,
            "email_verification_code": self.email_verification_code,
            "email_verification_expires_at": _iso(self.email_verification_expires_at),
            "is_email_verified": self.is_email_verified,
            "is_active": self.is_active,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }