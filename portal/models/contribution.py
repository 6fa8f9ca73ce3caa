"""Contributions that members are asked to pay."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from portal.database import Database


class ContributionError(Exception):
    """Base class for contribution errors."""


class ContributionNotFound(ContributionError):
    def __init__(self, contribution_id: UUID) -> None:
        super().__init__(f"Contribution with ID {contribution_id} not found")
        self.id = contribution_id


class ContributionNoUpdateFields(ContributionError):
    def __init__(self) -> None:
        super().__init__("No fields provided for update")


@dataclass
class CreateContribution:
    created_by: UUID
    title: str
    due_date: date
    description: str | None = None
    amount: Decimal | None = None


@dataclass
class UpdateContribution:
    title: str | None = None
    description: str | None = None
    amount: Decimal | None = None
    due_date: date | None = None


@dataclass
class Contribution:
    id: UUID
    created_by: UUID
    title: str
    description: str | None
    amount: Decimal | None
    due_date: date
    created_at: datetime
    updated_at: datetime

    @classmethod
    def _from_row(cls, row: dict[str, Any]) -> Contribution:
        amount = row["amount"]
        return cls(
            id=UUID(row["id"]),
            created_by=UUID(row["created_by"]),
            title=row["title"],
            description=row["description"],
            amount=None if amount is None else Decimal(amount),
            due_date=date.fromisoformat(row["due_date"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @classmethod
    def create(cls, db: Database, data: CreateContribution) -> Contribution:
        now = datetime.now(timezone.utc)
        contribution_id = uuid4()
        db.execute(
            "INSERT INTO contributions (id, title, description, amount, due_date,"
            " created_by, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                contribution_id,
                data.title,
                data.description,
                data.amount,
                data.due_date,
                data.created_by,
                now,
                now,
            ),
        )
        created = cls.find_by_id(db, contribution_id)
        if created is None:
            raise ContributionNotFound(contribution_id)
        return created

    @classmethod
    def find_by_id(cls, db: Database, contribution_id: UUID) -> Contribution | None:
        row = db.fetch_one("SELECT * FROM contributions WHERE id = ?", (contribution_id,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def find_all(cls, db: Database) -> list[Contribution]:
        rows = db.fetch_all("SELECT * FROM contributions ORDER BY created_at DESC")
        return [cls._from_row(row) for row in rows]

    @classmethod
    def update(
        cls, db: Database, contribution_id: UUID, data: UpdateContribution
    ) -> Contribution | None:
        """Apply the given fields; missing ones keep their stored value."""
        if (
            data.title is None
            and data.description is None
            and data.amount is None
            and data.due_date is None
        ):
            raise ContributionNoUpdateFields()
        existing = cls.find_by_id(db, contribution_id)
        if existing is None:
            raise ContributionNotFound(contribution_id)
        db.execute(
            "UPDATE contributions SET title = ?, description = ?, amount = ?,"
            " due_date = ?, updated_at = ? WHERE id = ?",
            (
                existing.title if data.title is None else data.title,
                existing.description if data.description is None else data.description,
                existing.amount if data.amount is None else data.amount,
                existing.due_date if data.due_date is None else data.due_date,
                datetime.now(timezone.utc),
                contribution_id,
            ),
        )
        return cls.find_by_id(db, contribution_id)

    @classmethod
    def delete(cls, db: Database, contribution_id: UUID) -> None:
        if db.execute("DELETE FROM contributions WHERE id = ?", (contribution_id,)) == 0:
            raise ContributionNotFound(contribution_id)

    @classmethod
    def find_by_creator(cls, db: Database, created_by: UUID) -> list[Contribution]:
        rows = db.fetch_all(
            "SELECT * FROM contributions WHERE created_by = ? ORDER BY created_at DESC",
            (created_by,),
        )
        return [cls._from_row(row) for row in rows]

    @classmethod
    def find_due_before(cls, db: Database, before_date: datetime | date) -> list[Contribution]:
        """Contributions due on or before ``before_date``, earliest first."""
        rows = db.fetch_all(
            "SELECT * FROM contributions WHERE due_date <= ? ORDER BY due_date ASC",
            (before_date,),
        )
        return [cls._from_row(row) for row in rows]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "created_by": str(self.created_by),
            "title": self.title,
            "description": self.description,
            "amount": None if self.amount is None else str(self.amount),
            "due_date": self.due_date.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }