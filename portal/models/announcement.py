"""Announcements posted to the portal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from portal.database import Database


class AnnouncementError(Exception):
    """Base class for announcement errors."""


class AnnouncementNotFound(AnnouncementError):
    def __init__(self, announcement_id: UUID) -> None:
        super().__init__(f"Announcement with ID {announcement_id} not found")
        self.id = announcement_id


class AnnouncementNoUpdateFields(AnnouncementError):
    def __init__(self) -> None:
        super().__init__("No fields provided for update")


@dataclass
class CreateAnnouncement:
    posted_by: UUID
    title: str
    body: str | None = None


@dataclass
class UpdateAnnouncement:
    title: str | None = None
    body: str | None = None


@dataclass
class Announcement:
    id: UUID
    posted_by: UUID
    title: str
    body: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def _from_row(cls, row: dict[str, Any]) -> Announcement:
        return cls(
            id=UUID(row["id"]),
            posted_by=UUID(row["posted_by"]),
            title=row["title"],
            body=row["body"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @classmethod
    def create(cls, db: Database, data: CreateAnnouncement) -> Announcement:
        now = datetime.now(timezone.utc)
        announcement_id = uuid4()
        db.execute(
            "INSERT INTO announcements (id, title, body, posted_by, created_at, updated_at)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            (announcement_id, data.title, data.body, data.posted_by, now, now),
        )
        created = cls.find_by_id(db, announcement_id)
        if created is None:
            raise AnnouncementNotFound(announcement_id)
        return created

    @classmethod
    def find_by_id(cls, db: Database, announcement_id: UUID) -> Announcement | None:
        row = db.fetch_one("SELECT * FROM announcements WHERE id = ?", (announcement_id,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def find_all(cls, db: Database) -> list[Announcement]:
        rows = db.fetch_all("SELECT * FROM announcements ORDER BY created_at DESC")
        return [cls._from_row(row) for row in rows]

    @classmethod
    def update(
        cls, db: Database, announcement_id: UUID, data: UpdateAnnouncement
    ) -> Announcement | None:
        """Apply the given fields; missing ones keep their stored value."""
        if data.title is None and data.body is None:
            raise AnnouncementNoUpdateFields()
        existing = cls.find_by_id(db, announcement_id)
        if existing is None:
            raise AnnouncementNotFound(announcement_id)
        db.execute(
            "UPDATE announcements SET title = ?, body = ?, updated_at = ? WHERE id = ?",
            (
                existing.title if data.title is None else data.title,
                existing.body if data.body is None else data.body,
                datetime.now(timezone.utc),
                announcement_id,
            ),
        )
        return cls.find_by_id(db, announcement_id)

    @classmethod
    def delete(cls, db: Database, announcement_id: UUID) -> None:
        if db.execute("DELETE FROM announcements WHERE id = ?", (announcement_id,)) == 0:
            raise AnnouncementNotFound(announcement_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "posted_by": str(self.posted_by),
            "title": self.title,
            "body": self.body,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }