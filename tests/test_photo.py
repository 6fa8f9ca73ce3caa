from uuid import uuid4

import pytest

from portal.database import Database, run_migrations
from portal.models.photo import (
    CreatePhoto,
    Photo,
    PhotoNotFound,
    PhotoNoUpdateFields,
    UpdatePhoto,
)


@pytest.fixture
def db():
    database = Database()
    run_migrations(database)
    yield database
    database.close()


def _make(db, event_id=None):
    return Photo.create(
        db,
        CreatePhoto(
            posted_by=uuid4(),
            url="https://example.com/a.jpg",
            event_id=event_id,
            caption="Picnic",
        ),
    )


def test_create_and_find_round_trip(db):
    event_id = uuid4()
    created = _make(db, event_id=event_id)
    found = Photo.find_by_id(db, created.id)
    assert found == created
    assert found.event_id == event_id
    assert found.caption == "Picnic"


def test_find_by_id_unknown_returns_none(db):
    assert Photo.find_by_id(db, uuid4()) is None


def test_find_all_newest_first(db):
    photos = [_make(db), _make(db)]
    found = Photo.find_all(db)
    assert {p.id for p in found} == {p.id for p in photos}
    stamps = [p.created_at for p in found]
    assert stamps == sorted(stamps, reverse=True)


def test_update_without_fields_raises(db):
    created = _make(db)
    with pytest.raises(PhotoNoUpdateFields):
        Photo.update(db, created.id, UpdatePhoto())


def test_update_unknown_raises(db):
    missing = uuid4()
    with pytest.raises(PhotoNotFound) as info:
        Photo.update(db, missing, UpdatePhoto(url="https://example.com/b.jpg"))
    assert info.value.id == missing
    assert str(info.value) == f"Photo with ID {missing} not found"


def test_update_url_only_clears_caption_and_event(db):
    created = _make(db, event_id=uuid4())
    updated = Photo.update(db, created.id, UpdatePhoto(url="https://example.com/b.jpg"))
    assert updated.url == "https://example.com/b.jpg"
    assert updated.caption is None
    assert updated.event_id is None


def test_update_caption_keeps_url(db):
    created = _make(db)
    event_id = uuid4()
    updated = Photo.update(db, created.id, UpdatePhoto(caption="Lunch", event_id=event_id))
    assert updated.caption == "Lunch"
    assert updated.event_id == event_id
    assert updated.url == created.url


def test_update_explicit_none_counts_as_field(db):
    created = _make(db)
    updated = Photo.update(db, created.id, UpdatePhoto(caption=None))
    assert updated.caption is None
    assert updated.url == created.url


def test_delete(db):
    created = _make(db)
    Photo.delete(db, created.id)
    assert Photo.find_by_id(db, created.id) is None
    with pytest.raises(PhotoNotFound):
        Photo.delete(db, created.id)


def test_to_dict(db):
    created = _make(db)
    data = created.to_dict()
    assert data["event_id"] is None
    assert data["url"] == "https://example.com/a.jpg"
    assert data["posted_by"] == str(created.posted_by)