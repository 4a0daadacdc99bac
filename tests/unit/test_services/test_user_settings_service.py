# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for user_settings_service."""

from datetime import datetime, timedelta

import pytest

from src.config import settings
from src.models import UserSettings
from src.services import user_settings_service


def test_get_settings_missing(db_session):
    assert user_settings_service.get_settings(db_session, "nobody") is None


def test_get_or_create_creates_defaults_once(db_session):
    created = user_settings_service.get_or_create_settings(db_session, "visitor-1")
    assert created.base_currency == "USD"
    assert created.favorites == []

    again = user_settings_service.get_or_create_settings(db_session, "visitor-1")
    assert again.id == created.id
    assert db_session.query(UserSettings).count() == 1


def test_update_requires_a_field(db_session):
    with pytest.raises(ValueError):
        user_settings_service.update_settings(db_session, "visitor-1")
    assert db_session.query(UserSettings).count() == 0


def test_update_creates_missing_settings(db_session):
    updated = user_settings_service.update_settings(
        db_session, "visitor-1", favorites=["EUR", "GBP"]
    )
    assert updated.base_currency == "USD"
    assert updated.favorites == ["EUR", "GBP"]


def test_update_changes_only_given_fields(db_session):
    user_settings_service.update_settings(
        db_session, "visitor-1", base_currency="EUR", favorites=["GBP"]
    )

    updated = user_settings_service.update_settings(
        db_session, "visitor-1", base_currency="JPY"
    )
    assert updated.base_currency == "JPY"
    assert updated.favorites == ["GBP"]


def test_update_can_clear_favorites(db_session):
    user_settings_service.update_settings(db_session, "visitor-1", favorites=["GBP"])
    updated = user_settings_service.update_settings(
        db_session, "visitor-1", favorites=[]
    )
    assert updated.favorites == []


def test_update_bumps_updated_at(db_session):
    user_settings = user_settings_service.get_or_create_settings(
        db_session, "visitor-1"
    )
    long_ago = datetime.utcnow() - timedelta(days=3)
    user_settings.created_at = long_ago
    user_settings.updated_at = long_ago
    db_session.commit()

    updated = user_settings_service.update_settings(
        db_session, "visitor-1", base_currency="EUR"
    )
    assert updated.updated_at > long_ago
    assert updated.created_at == long_ago


def test_new_settings_use_configured_base_currency(db_session, monkeypatch):
    monkeypatch.setattr(settings, "default_base_currency", "EUR")

    created = user_settings_service.get_or_create_settings(db_session, "visitor-1")
    db_session.add(UserSettings(user_id="visitor-2", favorites=[]))
    db_session.commit()
    direct = user_settings_service.get_settings(db_session, "visitor-2")

    assert created.base_currency == "EUR"
    assert direct.base_currency == "EUR"
