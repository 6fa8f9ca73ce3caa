"""Authentication payloads, token claims and the authenticated caller."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from portal.models.user import UserRole

TOKEN_LIFETIME_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str


@dataclass(frozen=True)
class UserInfo:
    id: UUID
    fullname: str
    email: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": str(self.id), "fullname": self.fullname, "email": self.email}


@dataclass(frozen=True)
class AuthResponse:
    token: str
    user: UserInfo

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "user": self.user.to_dict()}


@dataclass(frozen=True)
class Claims:
    sub: UUID
    email: str
    user_role: UserRole
    exp: int
    iat: int

    @classmethod
    def new(cls, user_id: UUID, email: str, user_role: UserRole) -> Claims:
        """Claims issued now and valid for 24 hours."""
        now = int(time.time())
        return cls(
            sub=user_id,
            email=email,
            user_role=user_role,
            exp=now + TOKEN_LIFETIME_SECONDS,
            iat=now,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sub": str(self.sub),
            "email": self.email,
            "user_role": self.user_role.value,
            "exp": self.exp,
            "iat": self.iat,
        }


@dataclass(frozen=True)
class AuthenticatedUser:
    """The caller identified by a validated bearer token."""

    user_id: UUID
    email: str
    user_role: UserRole

    def is_admin(self) -> bool:
        return self.user_role in (UserRole.ADMIN, UserRole.SUPER_ADMIN)