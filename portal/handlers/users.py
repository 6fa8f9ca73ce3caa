"""Handlers for listing users and switching their active flag."""

from __future__ import annotations

import logging
from http import HTTPStatus
from uuid import UUID

from portal.auth import AuthenticatedUser
from portal.database import Database, DatabaseError
from portal.models.user import User, UserError, UserNotFound
from portal.responses import ApiResponse, HttpResponse

logger = logging.getLogger(__name__)


def index(db: Database) -> HttpResponse:
    try:
        users = User.find_all(db)
    except (UserError, DatabaseError) as exc:
        logger.error("Failed to fetch users: %s", exc)
        return HttpResponse(int(HTTPStatus.INTERNAL_SERVER_ERROR), "Failed to fetch users")
    return ApiResponse.success(users).to_response(HTTPStatus.OK)


def toggle_user_active(
    db: Database, target_user_id: UUID, user: AuthenticatedUser
) -> HttpResponse:
    logger.info("Toggling active status for user: %s", target_user_id)

    if not user.is_admin():
        return ApiResponse.error(
            "You don't have permission to perform this action"
        ).to_response(HTTPStatus.FORBIDDEN)

    if target_user_id == user.user_id:
        return ApiResponse.error("You cannot deactivate your own account").to_response(
            HTTPStatus.BAD_REQUEST
        )

    try:
        updated = User.toggle_active(db, target_user_id)
    except UserNotFound as exc:
        return ApiResponse.error(f"User {exc.id} not found").to_response(HTTPStatus.NOT_FOUND)
    except (UserError, DatabaseError) as exc:
        logger.error("Failed to toggle active status: %s", exc)
        return ApiResponse.error("Failed to update user status").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )

    logger.info(
        "User %s active status toggled to %s by %s",
        target_user_id,
        updated.is_active,
        user.user_id,
    )
    return ApiResponse.success(updated).to_response(HTTPStatus.OK)