# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Exchange rate API endpoints."""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.api.deps import get_db, get_visitor_id
from src.api.errors import http_error_for
from src.schemas.rates import ConversionResponse, RatesResponse
from src.services.currency_service import CurrencyService, CurrencyServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/rates", response_model=RatesResponse)
async def get_rates(
    targets: str | None = Query(
        None,
        description="Comma separated target currencies",
        examples=["EUR,GBP,JPY"],
    ),
    base: str | None = Query(
        None,
        description="Base currency; defaults to the visitor's preferred base",
        examples=["USD"],
    ),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_visitor_id),
) -> RatesResponse:
    """Get exchange rates from base to each target currency."""
    service = CurrencyService(db)
    try:
        result = await service.get_rates(user_id, targets, base)
        return RatesResponse(
            base=result.base,
            rates={code: float(rate) for code, rate in result.rates.items()},
        )
    except CurrencyServiceError as e:
        logger.error(f"Failed to get rates: {e}")
        raise http_error_for(e, "Failed to fetch exchange rates") from e
    except SQLAlchemyError as e:
        logger.error(f"Database error while getting rates: {e}")
        raise HTTPException(status_code=500, detail="Database error") from e
    finally:
        await service.close()


@router.get("/rates/convert", response_model=ConversionResponse)
async def convert_amount(
    amount: Decimal = Query(..., ge=0),
    to_currency: str = Query(..., min_length=3, max_length=3, alias="to"),
    from_currency: str | None = Query(
        None, min_length=3, max_length=3, alias="from"
    ),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_visitor_id),
) -> ConversionResponse:
    """Convert an amount between two currencies.

    The source currency defaults to the visitor's preferred base.
    """
    service = CurrencyService(db)
    try:
        result = await service.convert(user_id, amount, to_currency, from_currency)
        return ConversionResponse(
            original_amount=str(result.original_amount),
            original_currency=result.original_currency,
            converted_amount=str(result.converted_amount),
            target_currency=result.target_currency,
            exchange_rate=str(result.exchange_rate),
        )
    except CurrencyServiceError as e:
        logger.error(f"Failed to convert amount: {e}")
        raise http_error_for(e, "Failed to convert amount") from e
    except SQLAlchemyError as e:
        logger.error(f"Database error while converting: {e}")
        raise HTTPException(status_code=500, detail="Database error") from e
    finally:
        await service.close()
