"""Handlers for creating, reading, changing and removing announcements."""

from __future__ import annotations

import logging
from http import HTTPStatus
from uuid import UUID

from portal.auth import AuthenticatedUser
from portal.database import Database, DatabaseError
from portal.models.announcement import (
    Announcement,
    AnnouncementError,
    AnnouncementNoUpdateFields,
    AnnouncementNotFound,
    CreateAnnouncement,
    UpdateAnnouncement,
)
from portal.payloads import CreateAnnouncementRequest, UpdateAnnouncementRequest
from portal.responses import ApiResponse, HttpResponse

logger = logging.getLogger(__name__)


def _check_access(
    db: Database, announcement_id: UUID, user: AuthenticatedUser
) -> HttpResponse | None:
    """Return an error response unless ``user`` may change the announcement."""
    try:
        existing = Announcement.find_by_id(db, announcement_id)
    except (AnnouncementError, DatabaseError) as exc:
        logger.error("Error checking announcement ownership: %s", exc)
        return ApiResponse.error("Failed to verify announcement").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    if existing is None:
        return ApiResponse.error("Announcement not found").to_response(HTTPStatus.NOT_FOUND)
    if existing.posted_by != user.user_id and not user.is_admin():
        return ApiResponse.error("Access denied").to_response(HTTPStatus.FORBIDDEN)
    return None


def create(
    db: Database, payload: CreateAnnouncementRequest, user: AuthenticatedUser
) -> HttpResponse:
    logger.info("Creating announcement for user: %s", user.user_id)
    data = CreateAnnouncement(posted_by=user.user_id, title=payload.title, body=payload.body)
    try:
        announcement = Announcement.create(db, data)
    except DatabaseError as exc:
        logger.error("Database error creating announcement: %s", exc)
        return ApiResponse.error("Failed to create announcement").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except AnnouncementError as exc:
        logger.error("Error creating announcement: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    logger.info("Successfully created announcement with ID: %s", announcement.id)
    return ApiResponse.success(announcement).to_response(HTTPStatus.CREATED)


def get_announcement(db: Database, announcement_id: UUID) -> HttpResponse:
    logger.info("Getting announcement %s", announcement_id)
    try:
        announcement = Announcement.find_by_id(db, announcement_id)
    except DatabaseError as exc:
        logger.error("Database error getting announcement: %s", exc)
        return ApiResponse.error("Failed to retrieve announcement").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except AnnouncementError as exc:
        logger.error("Error getting announcement: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    if announcement is None:
        return ApiResponse.error("Announcement not found").to_response(HTTPStatus.NOT_FOUND)
    return ApiResponse.success(announcement).to_response(HTTPStatus.OK)


def list_all(db: Database) -> HttpResponse:
    logger.info("Getting all announcements")
    try:
        announcements = Announcement.find_all(db)
    except DatabaseError as exc:
        logger.error("Database error getting all announcements: %s", exc)
        return ApiResponse.error("Failed to retrieve announcements").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except AnnouncementError as exc:
        logger.error("Error getting all announcements: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    return ApiResponse.success(announcements).to_response(HTTPStatus.OK)


def update(
    db: Database,
    announcement_id: UUID,
    payload: UpdateAnnouncementRequest,
    user: AuthenticatedUser,
) -> HttpResponse:
    logger.info("Updating announcement %s for user: %s", announcement_id, user.user_id)
    denied = _check_access(db, announcement_id, user)
    if denied is not None:
        return denied

    data = UpdateAnnouncement(title=payload.title, body=payload.body)
    try:
        announcement = Announcement.update(db, announcement_id, data)
    except AnnouncementNotFound as exc:
        return ApiResponse.error(f"Announcement {exc.id} not found").to_response(
            HTTPStatus.NOT_FOUND
        )
    except AnnouncementNoUpdateFields:
        return ApiResponse.error("No fields provided for update").to_response(
            HTTPStatus.BAD_REQUEST
        )
    except DatabaseError as exc:
        logger.error("Database error updating announcement: %s", exc)
        return ApiResponse.error("Failed to update announcement").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except AnnouncementError as exc:
        logger.error("Error updating announcement: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    logger.info("Successfully updated announcement: %s", announcement_id)
    return ApiResponse.success(announcement).to_response(HTTPStatus.OK)


def delete(db: Database, announcement_id: UUID, user: AuthenticatedUser) -> HttpResponse:
    logger.info("Deleting announcement %s for user: %s", announcement_id, user.user_id)
    denied = _check_access(db, announcement_id, user)
    if denied is not None:
        return denied

    try:
        Announcement.delete(db, announcement_id)
    except AnnouncementNotFound as exc:
        return ApiResponse.error(f"Announcement {exc.id} not found").to_response(
            HTTPStatus.NOT_FOUND
        )
    except DatabaseError as exc:
        logger.error("Database error deleting announcement: %s", exc)
        return ApiResponse.error("Failed to delete announcement").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except AnnouncementError as exc:
        logger.error("Error deleting announcement: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    logger.info("Successfully deleted announcement: %s", announcement_id)
    return ApiResponse.success(None).to_response(HTTPStatus.OK)