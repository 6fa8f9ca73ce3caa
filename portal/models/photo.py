"""Photos shared on the portal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from portal.database import Database


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()
"""Marks an update field that was not given at all."""


class PhotoError(Exception):
    """Base class for photo errors."""


class PhotoNotFound(PhotoError):
    def __init__(self, photo_id: UUID) -> None:
        super().__init__(f"Photo with ID {photo_id} not found")
        self.id = photo_id


class PhotoNoUpdateFields(PhotoError):
    def __init__(self) -> None:
        super().__init__("No fields provided for update")


@dataclass
class CreatePhoto:
    posted_by: UUID
    url: str
    event_id: UUID | None = None
    caption: str | None = None


@dataclass
class UpdatePhoto:
    """Changes to a photo.

    ``caption`` and ``event_id`` are written as given; left ``UNSET`` they are
    cleared. ``url`` keeps its stored value when ``None``.
    """

    event_id: Any = UNSET
    url: str | None = None
    caption: Any = UNSET


@dataclass
class Photo:
    id: UUID
    posted_by: UUID
    event_id: UUID | None
    url: str
    caption: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def _from_row(cls, row: dict[str, Any]) -> Photo:
        event_id = row["event_id"]
        return cls(
            id=UUID(row["id"]),
            posted_by=UUID(row["posted_by"]),
            event_id=None if event_id is None else UUID(event_id),
            url=row["url"],
            caption=row["caption"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @classmethod
    def create(cls, db: Database, data: CreatePhoto) -> Photo:
        now = datetime.now(timezone.utc)
        photo_id = uuid4()
        db.execute(
            "INSERT INTO photos (id, caption, event_id, url, posted_by, created_at, updated_at)"
            " VALUES (?, ?, ?, ?, ?, ?, ?)",
            (photo_id, data.caption, data.event_id, data.url, data.posted_by, now, now),
        )
        created = cls.find_by_id(db, photo_id)
        if created is None:
            raise PhotoNotFound(photo_id)
        return created

    @classmethod
    def find_by_id(cls, db: Database, photo_id: UUID) -> Photo | None:
        row = db.fetch_one("SELECT * FROM photos WHERE id = ?", (photo_id,))
        return None if row is None else cls._from_row(row)

    @classmethod
    def find_all(cls, db: Database) -> list[Photo]:
        rows = db.fetch_all("SELECT * FROM photos ORDER BY created_at DESC")
        return [cls._from_row(row) for row in rows]

    @classmethod
    def update(cls, db: Database, photo_id: UUID, data: UpdatePhoto) -> Photo | None:
        if data.caption is UNSET and data.event_id is UNSET and data.url is None:
            raise PhotoNoUpdateFields()
        existing = cls.find_by_id(db, photo_id)
        if existing is None:
            raise PhotoNotFound(photo_id)
        db.execute(
            "UPDATE photos SET caption = ?, url = ?, event_id = ?, updated_at = ? WHERE id = ?",
            (
                None if data.caption is UNSET else data.caption,
                existing.url if data.url is None else data.url,
                None if data.event_id is UNSET else data.event_id,
                datetime.now(timezone.utc),
                photo_id,
            ),
        )
        return cls.find_by_id(db, photo_id)

    @classmethod
    def delete(cls, db: Database, photo_id: UUID) -> None:
        if db.execute("DELETE FROM photos WHERE id = ?", (photo_id,)) == 0:
            raise PhotoNotFound(photo_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "posted_by": str(self.posted_by),
            "event_id": None if self.event_id is None else str(self.event_id),
            "url": self.url,
            "caption": self.caption,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }