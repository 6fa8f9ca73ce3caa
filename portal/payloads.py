"""Request bodies accepted by the API, parsed from decoded JSON."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar
from uuid import UUID

from portal.models.payment import PaymentStatus

T = TypeVar("T")

_STATUS_NAMES = {
    "Pending": PaymentStatus.PENDING,
    "Verified": PaymentStatus.VERIFIED,
}


class PayloadError(ValueError):
    """Raised when a request body does not have the expected shape."""


def _object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise PayloadError(f"invalid type: expected a JSON object, got {type(data).__name__}")
    return data


def _string(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise PayloadError(f"invalid type for field `{name}`: expected a string")
    return value


def _boolean(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise PayloadError(f"invalid type for field `{name}`: expected a boolean")
    return value


def _uuid(name: str, value: Any) -> UUID:
    try:
        return UUID(_string(name, value))
    except ValueError:
        raise PayloadError(f"invalid UUID for field `{name}`: {value!r}") from None


def _decimal(name: str, value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise PayloadError(f"invalid type for field `{name}`: expected a decimal")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise PayloadError(f"invalid decimal for field `{name}`: {value!r}") from None
    if not number.is_finite():
        raise PayloadError(f"invalid decimal for field `{name}`: {value!r}")
    return number


def _date(name: str, value: Any) -> date:
    try:
        return date.fromisoformat(_string(name, value))
    except ValueError:
        raise PayloadError(f"invalid date for field `{name}`: {value!r}") from None


def _status(name: str, value: Any) -> PaymentStatus:
    try:
        return _STATUS_NAMES[_string(name, value)]
    except KeyError:
        raise PayloadError(
            f"unknown variant {value!r} for field `{name}`, expected `Pending` or `Verified`"
        ) from None


def _required(data: Mapping[str, Any], name: str, parse: Callable[[str, Any], T]) -> T:
    if name not in data:
        raise PayloadError(f"missing field `{name}`")
    value = data[name]
    if value is None:
        raise PayloadError(f"invalid type: null for field `{name}`")
    return parse(name, value)


def _optional(data: Mapping[str, Any], name: str, parse: Callable[[str, Any], T]) -> T | None:
    value = data.get(name)
    return None if value is None else parse(name, value)


@dataclass(frozen=True)
class CreateAnnouncementRequest:
    title: str
    body: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> CreateAnnouncementRequest:
        obj = _object(data)
        return cls(title=_required(obj, "title", _string), body=_optional(obj, "body", _string))


@dataclass(frozen=True)
class UpdateAnnouncementRequest:
    title: str | None = None
    body: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpdateAnnouncementRequest:
        obj = _object(data)
        return cls(title=_optional(obj, "title", _string), body=_optional(obj, "body", _string))


@dataclass(frozen=True)
class ContributionRequest:
    title: str
    description: str | None = None
    amount: Decimal | None = None
    due_date: date | None = None

    @classmethod
    def from_json(cls, data: Any) -> ContributionRequest:
        obj = _object(data)
        return cls(
            title=_required(obj, "title", _string),
            description=_optional(obj, "description", _string),
            amount=_optional(obj, "amount", _decimal),
            due_date=_optional(obj, "due_date", _date),
        )


@dataclass(frozen=True)
class UpdateContributionRequest:
    title: str | None = None
    description: str | None = None
    amount: Decimal | None = None
    due_date: date | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpdateContributionRequest:
        obj = _object(data)
        return cls(
            title=_optional(obj, "title", _string),
            description=_optional(obj, "description", _string),
            amount=_optional(obj, "amount", _decimal),
            due_date=_optional(obj, "due_date", _date),
        )


@dataclass(frozen=True)
class PaymentRequest:
    user_id: UUID
    contribution_id: UUID
    status: PaymentStatus
    amount: Decimal | None = None
    receipt_url: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> PaymentRequest:
        obj = _object(data)
        return cls(
            user_id=_required(obj, "user_id", _uuid),
            contribution_id=_required(obj, "contribution_id", _uuid),
            status=_required(obj, "status", _status),
            amount=_optional(obj, "amount", _decimal),
            receipt_url=_optional(obj, "receipt_url", _string),
        )


@dataclass(frozen=True)
class UpdatePaymentRequest:
    user_id: UUID | None = None
    contribution_id: UUID | None = None
    amount: Decimal | None = None
    receipt_url: str | None = None
    status: PaymentStatus | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpdatePaymentRequest:
        obj = _object(data)
        return cls(
            user_id=_optional(obj, "user_id", _uuid),
            contribution_id=_optional(obj, "contribution_id", _uuid),
            amount=_optional(obj, "amount", _decimal),
            receipt_url=_optional(obj, "receipt_url", _string),
            status=_optional(obj, "status", _status),
        )


@dataclass(frozen=True)
class CreatePhotoRequest:
    url: str
    event_id: UUID | None = None
    caption: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> CreatePhotoRequest:
        obj = _object(data)
        return cls(
            url=_required(obj, "url", _string),
            event_id=_optional(obj, "event_id", _uuid),
            caption=_optional(obj, "caption", _string),
        )


@dataclass(frozen=True)
class UpdatePhotoRequest:
    event_id: UUID | None = None
    url: str | None = None
    caption: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpdatePhotoRequest:
        obj = _object(data)
        return cls(
            event_id=_optional(obj, "event_id", _uuid),
            url=_optional(obj, "url", _string),
            caption=_optional(obj, "caption", _string),
        )


@dataclass(frozen=True)
class RegisterRequest:
    fullname: str
    email: str
    password: str
    user_role: str | None = None
    is_active: bool | None = None

    @classmethod
    def from_json(cls, data: Any) -> RegisterRequest:
        obj = _object(data)
        return cls(
            fullname=_required(obj, "fullname", _string),
            email=_required(obj, "email", _string),
            password=_required(obj, "password", _string),
            user_role=_optional(obj, "user_role", _string),
            is_active=_optional(obj, "is_active", _boolean),
        )


@dataclass(frozen=True)
class ResendVerificationRequest:
    email: str

    @classmethod
    def from_json(cls, data: Any) -> ResendVerificationRequest:
        return cls(email=_required(_object(data), "email", _string))


@dataclass(frozen=True)
class VerifyEmailRequest:
    code: str

    @classmethod
    def from_json(cls, data: Any) -> VerifyEmailRequest:
        return cls(code=_required(_object(data), "code", _string))