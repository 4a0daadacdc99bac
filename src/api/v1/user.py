# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Visitor settings API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.api.deps import get_db, get_visitor_id
from src.schemas.user_settings import UserSettingsResponse, UserSettingsUpdate
from src.services import user_settings_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/user", response_model=UserSettingsResponse)
def get_user_settings(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_visitor_id),
) -> UserSettingsResponse:
    """Get the current visitor's settings, creating defaults on first access."""
    try:
        user_settings = user_settings_service.get_or_create_settings(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load settings for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Database error") from e
    return UserSettingsResponse.model_validate(user_settings)


@router.post("/user", response_model=UserSettingsResponse)
def update_user_settings(
    data: UserSettingsUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_visitor_id),
) -> UserSettingsResponse:
    """Update the current visitor's settings (or create them).

    At least one of base_currency or favorites must be given.
    """
    try:
        user_settings = user_settings_service.update_settings(
            db,
            user_id,
            base_currency=data.base_currency,
            favorites=data.favorites,
        )
    except ValueError as e:
        logger.error(f"Rejected settings update for {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except SQLAlchemyError as e:
        logger.error(f"Failed to update settings for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Database error") from e
    return UserSettingsResponse.model_validate(user_settings)
