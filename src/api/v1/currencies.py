# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Currency API endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.deps import get_db
from src.api.errors import http_error_for
from src.services.currency_service import CurrencyService, CurrencyServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/currencies", response_model=list[str])
async def list_currencies(db: Session = Depends(get_db)) -> list[str]:
    """Get list of supported currency codes (ISO 4217)."""
    service = CurrencyService(db)
    try:
        return await service.get_supported_currencies()
    except CurrencyServiceError as e:
        logger.error(f"Failed to list currencies: {e}")
        raise http_error_for(e, "Failed to fetch the list of currencies") from e
    finally:
        await service.close()
