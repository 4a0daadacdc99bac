# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Per-visitor currency preferences."""

import uuid as uuid_lib

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.config import settings
from src.models.base import Base, TimestampMixin


def default_base_currency() -> str:
    """Configured base currency for new visitors."""
    return settings.default_base_currency


class UserSettings(Base, TimestampMixin):
    """Currency preferences of an anonymous visitor.

    Visitors are identified by the opaque token stored in their cookie.
    Records are created on first access and never deleted.
    """

    __tablename__ = "user_settings"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )
    base_currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default=default_base_currency
    )
    favorites: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
