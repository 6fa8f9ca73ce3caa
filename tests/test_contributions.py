from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from portal.auth import AuthenticatedUser
from portal.database import Database, run_migrations
from portal.handlers import contributions
from portal.models.contribution import Contribution
from portal.models.user import UserRole
from portal.payloads import ContributionRequest, PayloadError, UpdateContributionRequest

DUE = date(2025, 1, 31)


@pytest.fixture
def db():
    database = Database(":memory:")
    run_migrations(database)
    yield database


def _user(role=UserRole.MEMBER):
    return AuthenticatedUser(user_id=uuid4(), email="member@example.com", user_role=role)


def _create(db, user, title="Dues"):
    request = ContributionRequest(
        title=title, description="Yearly", amount=Decimal("10.50"), due_date=DUE
    )
    resp = contributions.create(db, request, user)
    return UUID(resp.body["data"]["id"])


def test_create_returns_created_contribution(db):
    user = _user()
    request = ContributionRequest(title="Dues", amount=Decimal("10.50"), due_date=DUE)
    resp = contributions.create(db, request, user)
    assert resp.status == 201
    data = resp.body["data"]
    assert data["title"] == "Dues"
    assert data["amount"] == "10.50"
    assert data["due_date"] == DUE.isoformat()
    assert data["created_by"] == str(user.user_id)


def test_create_without_due_date_raises(db):
    with pytest.raises(PayloadError):
        contributions.create(db, ContributionRequest(title="Dues"), _user())
    assert Contribution.find_all(db) == []


def test_get_contribution_found_and_missing(db):
    contribution_id = _create(db, _user())
    found = contributions.get_contribution(db, contribution_id)
    assert found.status == 200
    assert found.body["data"]["id"] == str(contribution_id)
    missing = contributions.get_contribution(db, uuid4())
    assert missing.status == 404
    assert missing.body == {"success": False, "error": "Contribution not found"}


def test_get_user_contributions_only_returns_own(db):
    owner = _user()
    other = _user()
    mine = _create(db, owner, title="Mine")
    _create(db, other, title="Theirs")
    resp = contributions.get_user_contributions(db, owner)
    assert resp.status == 200
    assert [item["id"] for item in resp.body["data"]] == [str(mine)]


def test_list_all_returns_every_contribution(db):
    first = _create(db, _user())
    second = _create(db, _user())
    resp = contributions.list_all(db)
    assert resp.status == 200
    assert {item["id"] for item in resp.body["data"]} == {str(first), str(second)}


def test_update_by_creator(db):
    user = _user()
    contribution_id = _create(db, user)
    new_due = date(2025, 6, 30)
    resp = contributions.update(
        db, contribution_id, UpdateContributionRequest(due_date=new_due), user
    )
    assert resp.status == 200
    assert resp.body["data"]["due_date"] == new_due.isoformat()
    assert resp.body["data"]["title"] == "Dues"
    assert resp.body["data"]["amount"] == "10.50"


def test_update_by_admin_who_is_not_creator_is_forbidden(db):
    contribution_id = _create(db, _user())
    resp = contributions.update(
        db, contribution_id, UpdateContributionRequest(title="x"), _user(UserRole.ADMIN)
    )
    assert resp.status == 403
    assert resp.body["error"] == "Access denied"
    assert Contribution.find_by_id(db, contribution_id).title == "Dues"


def test_update_without_fields(db):
    user = _user()
    contribution_id = _create(db, user)
    resp = contributions.update(db, contribution_id, UpdateContributionRequest(), user)
    assert resp.status == 400
    assert resp.body["error"] == "No fields provided for update"


def test_update_missing(db):
    resp = contributions.update(db, uuid4(), UpdateContributionRequest(title="x"), _user())
    assert resp.status == 404
    assert resp.body["error"] == "Contribution not found"


def test_delete_by_creator(db):
    user = _user()
    contribution_id = _create(db, user)
    resp = contributions.delete(db, contribution_id, user)
    assert resp.status == 200
    assert resp.body == {"success": True, "data": None}
    assert Contribution.find_by_id(db, contribution_id) is None


def test_delete_by_other_user_is_forbidden(db):
    contribution_id = _create(db, _user())
    resp = contributions.delete(db, contribution_id, _user(UserRole.SUPER_ADMIN))
    assert resp.status == 403
    assert Contribution.find_by_id(db, contribution_id) is not None


def test_database_failures_give_server_errors(db):
    user = _user()
    db.close()
    created = contributions.create(db, ContributionRequest(title="t", due_date=DUE), user)
    assert created.status == 500
    assert created.body["error"] == "Failed to create contribution"
    mine = contributions.get_user_contributions(db, user)
    assert mine.status == 500
    assert mine.body["error"] == "Failed to retrieve contributions"
    deleted = contributions.delete(db, uuid4(), user)
    assert deleted.status == 500
    assert deleted.body["error"] == "Failed to verify contribution"