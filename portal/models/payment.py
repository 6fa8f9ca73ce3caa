"""Payments made by members towards contributions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from portal.database import Database


class PaymentError(Exception):
    """Base class for payment errors."""


class PaymentNotFound(PaymentError):
    def __init__(self, payment_id: UUID) -> None:
        super().__init__(f"Payment with ID {payment_id} not found")
        self.id = payment_id


class PaymentNoUpdateFields(PaymentError):
    def __init__(self) -> None:
        super().__init__("No fields provided for update")


class PaymentStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"

    @classmethod
    def parse(cls, value: str) -> PaymentStatus:
        """Parse ``pending`` or ``verified``."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown payment status: {value!r}") from None


@dataclass
class CreatePayment:
    user_id: UUID
    contribution_id: UUID
    status: PaymentStatus
    amount: Decimal | None = None
    receipt_url: str | None = None


@dataclass
class UpdatePayment:
    user_id: UUID | None = None
    contribution_id: UUID | None = None
    amount: Decimal | None = None
    receipt_url: str | None = None
    status: PaymentStatus | None = None


@dataclass
class Payment:
    id: UUID
    user_id: UUID
    contribution_id: UUID
    amount: Decimal | None
    receipt_url: str | None
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def _from_row(cls, row: dict[str, Any]) -> Payment:
        amount = row["amount"]
        return cls(
            id=UUID(row["id"]),
            user_id=UUID(row["user_id"]),
            contribution_id=UUID(row["contribution_id"]),
            amount=None if amount is None else Decimal(amount),
            receipt_url=row["receipt_url"],
            status=PaymentStatus(row["status"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @classmethod
    def create(cls, db: Database, data: CreatePayment) -> Payment:
        now = datetime.now(timezone.utc)
        payment_id = uuid4()
        db.execute(
            "INSERT INTO payments (id, user_id, contribution_id, amount, receipt_url,"
            " status, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                payment_id,
                data.user_id,
                data.contribution_id,
                data.amount,
                data.receipt_url,
                data.status,
                now,
                now,
            ),
        )
        created = cls.find_by_id(db, payment_id)
        if created is None:
            raise PaymentNotFound(payment_id)
        return created

    @classmethod
    def find_by_id(cls, db: Database, payment_id: UUID) -> Payment | None:
        row = db.fetch_one("SELECT * FROM payments WHERE id = ?", (payment_id,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def find_by_user(cls, db: Database, user_id: UUID) -> Payment | None:
        """Return the first payment made by ``user_id``, if any."""
        row = db.fetch_one("SELECT * FROM payments WHERE user_id = ?", (user_id,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def find_all(cls, db: Database) -> list[Payment]:
        rows = db.fetch_all("SELECT * FROM payments ORDER BY created_at DESC")
        return [cls._from_row(row) for row in rows]

    @classmethod
    def update(cls, db: Database, payment_id: UUID, data: UpdatePayment) -> Payment | None:
        """Apply the given fields; a missing receipt URL keeps the stored one."""
        if (
            data.user_id is None
            and data.contribution_id is None
            and data.amount is None
            and data.status is None
            and data.receipt_url is None
        ):
            raise PaymentNoUpdateFields()
        existing = cls.find_by_id(db, payment_id)
        if existing is None:
            raise PaymentNotFound(payment_id)
        db.execute(
            "UPDATE payments SET"
            " user_id = COALESCE(?, user_id),"
            " contribution_id = COALESCE(?, contribution_id),"
            " amount = COALESCE(?, amount),"
            " status = COALESCE(?, status),"
            " receipt_url = COALESCE(?, receipt_url),"
            " updated_at = ?"
            " WHERE id = ?",
            (
                existing.user_id if data.user_id is None else data.user_id,
                existing.contribution_id if data.contribution_id is None else data.contribution_id,
                existing.amount if data.amount is None else data.amount,
                existing.status if data.status is None else data.status,
                data.receipt_url,
                datetime.now(timezone.utc),
                payment_id,
            ),
        )
        return cls.find_by_id(db, payment_id)

    @classmethod
    def delete(cls, db: Database, payment_id: UUID) -> None:
        if db.execute("DELETE FROM payments WHERE id = ?", (payment_id,)) == 0:
            raise PaymentNotFound(payment_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "contribution_id": str(self.contribution_id),
            "amount": None if self.amount is None else str(self.amount),
            "receipt_url": self.receipt_url,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }