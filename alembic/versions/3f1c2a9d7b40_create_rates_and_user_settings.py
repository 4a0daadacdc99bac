# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""create_rates_and_user_settings

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-19 10:12:41.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # Visitor preferences
    op.create_table(
        "user_settings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("base_currency", sa.String(length=3), nullable=False),
        sa.Column("favorites", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_user_settings_user_id"),
        "user_settings",
        ["user_id"],
        unique=True,
    )

    # Persisted 24h rate cache
    op.create_table(
        "rates_cache",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("base_currency", sa.String(length=3), nullable=False),
        sa.Column("target_currency", sa.String(length=3), nullable=False),
        sa.Column("rate", sa.Numeric(precision=38, scale=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "base_currency", "target_currency", name="uq_rates_cache_pair"
        ),
    )
    op.create_index(
        op.f("ix_rates_cache_base_currency"),
        "rates_cache",
        ["base_currency"],
        unique=False,
    )
    op.create_index(
        op.f("ix_rates_cache_target_currency"),
        "rates_cache",
        ["target_currency"],
        unique=False,
    )
    op.create_index(
        op.f("ix_rates_cache_created_at"),
        "rates_cache",
        ["created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_rates_cache_created_at"), table_name="rates_cache")
    op.drop_index(op.f("ix_rates_cache_target_currency"), table_name="rates_cache")
    op.drop_index(op.f("ix_rates_cache_base_currency"), table_name="rates_cache")
    op.drop_table("rates_cache")

    op.drop_index(op.f("ix_user_settings_user_id"), table_name="user_settings")
    op.drop_table("user_settings")
