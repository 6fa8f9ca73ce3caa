"""Handlers for creating, reading, changing and removing contributions."""

from __future__ import annotations

import logging
from http import HTTPStatus
from uuid import UUID

from portal.auth import AuthenticatedUser
from portal.database import Database, DatabaseError
from portal.models.contribution import (
    Contribution,
    ContributionError,
    ContributionNotFound,
    ContributionNoUpdateFields,
    CreateContribution,
    UpdateContribution,
)
from portal.payloads import ContributionRequest, PayloadError, UpdateContributionRequest
from portal.responses import ApiResponse, HttpResponse

logger = logging.getLogger(__name__)


def _check_access(
    db: Database, contribution_id: UUID, user: AuthenticatedUser
) -> HttpResponse | None:
    """Return an error response unless ``user`` created the contribution."""
    try:
        existing = Contribution.find_by_id(db, contribution_id)
    except (ContributionError, DatabaseError) as exc:
        logger.error("Error checking contribution ownership: %s", exc)
        return ApiResponse.error("Failed to verify contribution").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    if existing is None:
        return ApiResponse.error("Contribution not found").to_response(HTTPStatus.NOT_FOUND)
    if existing.created_by != user.user_id:
        return ApiResponse.error("Access denied").to_response(HTTPStatus.FORBIDDEN)
    return None


def create(db: Database, payload: ContributionRequest, user: AuthenticatedUser) -> HttpResponse:
    """Create a contribution; raises PayloadError when no due date is given."""
    logger.info("Creating contribution for user: %s", user.user_id)
    if payload.due_date is None:
        raise PayloadError("missing field `due_date`")
    data = CreateContribution(
        created_by=user.user_id,
        title=payload.title,
        due_date=payload.due_date,
        description=payload.description,
        amount=payload.amount,
    )
    try:
        contribution = Contribution.create(db, data)
    except DatabaseError as exc:
        logger.error("Database error creating contribution: %s", exc)
        return ApiResponse.error("Failed to create contribution").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except ContributionError as exc:
        logger.error("Error creating contribution: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    logger.info("Successfully created contribution with ID: %s", contribution.id)
    return ApiResponse.success(contribution).to_response(HTTPStatus.CREATED)


def get_contribution(db: Database, contribution_id: UUID) -> HttpResponse:
    logger.info("Getting contribution %s", contribution_id)
    try:
        contribution = Contribution.find_by_id(db, contribution_id)
    except DatabaseError as exc:
        logger.error("Database error getting contribution: %s", exc)
        return ApiResponse.error("Failed to retrieve contribution").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except ContributionError as exc:
        logger.error("Error getting contribution: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    if contribution is None:
        return ApiResponse.error("Contribution not found").to_response(HTTPStatus.NOT_FOUND)
    return ApiResponse.success(contribution).to_response(HTTPStatus.OK)


def get_user_contributions(db: Database, user: AuthenticatedUser) -> HttpResponse:
    logger.info("Getting all contributions for user: %s", user.user_id)
    logger.debug("%r", user)
    try:
        contributions = Contribution.find_by_creator(db, user.user_id)
    except DatabaseError as exc:
        logger.error("Database error getting user contributions: %s", exc)
        return ApiResponse.error("Failed to retrieve contributions").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except ContributionError as exc:
        logger.error("Error getting user contributions: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    return ApiResponse.success(contributions).to_response(HTTPStatus.OK)


def list_all(db: Database) -> HttpResponse:
    logger.info("Getting all contributions")
    try:
        contributions = Contribution.find_all(db)
    except DatabaseError as exc:
        logger.error("Database error getting all contributions: %s", exc)
        return ApiResponse.error("Failed to retrieve contributions").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except ContributionError as exc:
        logger.error("Error getting all contributions: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    return ApiResponse.success(contributions).to_response(HTTPStatus.OK)


def update(
    db: Database,
    contribution_id: UUID,
    payload: UpdateContributionRequest,
    user: AuthenticatedUser,
) -> HttpResponse:
    logger.info("Updating contribution %s for user: %s", contribution_id, user.user_id)
    denied = _check_access(db, contribution_id, user)
    if denied is not None:
        return denied

    data = UpdateContribution(
        title=payload.title,
        description=payload.description,
        amount=payload.amount,
        due_date=payload.due_date,
    )
    try:
        contribution = Contribution.update(db, contribution_id, data)
    except ContributionNotFound as exc:
        return ApiResponse.error(f"Contribution {exc.id} not found").to_response(
            HTTPStatus.NOT_FOUND
        )
    except ContributionNoUpdateFields:
        return ApiResponse.error("No fields provided for update").to_response(
            HTTPStatus.BAD_REQUEST
        )
    except DatabaseError as exc:
        logger.error("Database error updating contribution: %s", exc)
        return ApiResponse.error("Failed to update contribution").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except ContributionError as exc:
        logger.error("Error updating contribution: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    logger.info("Successfully updated contribution: %s", contribution_id)
    return ApiResponse.success(contribution).to_response(HTTPStatus.OK)


def delete(db: Database, contribution_id: UUID, user: AuthenticatedUser) -> HttpResponse:
    logger.info("Deleting contribution %s for user: %s", contribution_id, user.user_id)
    denied = _check_access(db, contribution_id, user)
    if denied is not None:
        return denied

    try:
        Contribution.delete(db, contribution_id)
    except ContributionNotFound as exc:
        return ApiResponse.error(f"Contribution {exc.id} not found").to_response(
            HTTPStatus.NOT_FOUND
        )
    except DatabaseError as exc:
        logger.error("Database error deleting contribution: %s", exc)
        return ApiResponse.error("Failed to delete contribution").to_response(
            HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except ContributionError as exc:
        logger.error("Error deleting contribution: %s", exc)
        return ApiResponse.error(str(exc)).to_response(HTTPStatus.BAD_REQUEST)
    logger.info("Successfully deleted contribution: %s", contribution_id)
    return ApiResponse.success(None).to_response(HTTPStatus.OK)