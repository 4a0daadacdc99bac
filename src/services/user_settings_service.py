# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Visitor currency preference service."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from src.config import settings
from src.models import UserSettings

logger = logging.getLogger(__name__)


def get_settings(db: Session, user_id: str) -> UserSettings | None:
    """Get a visitor's settings, or None if they have none yet."""
    return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()


def create_settings(
    db: Session,
    user_id: str,
    base_currency: str | None = None,
    favorites: list[str] | None = None,
) -> UserSettings:
    """Create settings for a visitor, filling in defaults."""
    user_settings = UserSettings(
        user_id=user_id,
        base_currency=base_currency or settings.default_base_currency,
        favorites=list(favorites) if favorites is not None else [],
    )
    db.add(user_settings)
    db.commit()
    db.refresh(user_settings)
    logger.info(f"Created settings for visitor {user_id}")
    return user_settings


def get_or_create_settings(db: Session, user_id: str) -> UserSettings:
    """Get a visitor's settings, creating the defaults on first access."""
    user_settings = get_settings(db, user_id)
    if user_settings is None:
        user_settings = create_settings(db, user_id)
    return user_settings


def update_settings(
    db: Session,
    user_id: str,
    base_currency: str | None = None,
    favorites: list[str] | None = None,
) -> UserSettings:
    """Update a visitor's settings, creating them if they don't exist.

    Only the fields given are changed.

    Raises:
        ValueError: If neither base_currency nor favorites is given.
    """
    if base_currency is None and favorites is None:
        raise ValueError("Provide base_currency or favorites")

    user_settings = get_settings(db, user_id)
    if user_settings is None:
        return create_settings(db, user_id, base_currency, favorites)

    if base_currency is not None:
        user_settings.base_currency = base_currency
    if favorites is not None:
        user_settings.favorites = list(favorites)
    user_settings.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(user_settings)
    return user_settings
