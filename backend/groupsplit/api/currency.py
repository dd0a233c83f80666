from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query

from groupsplit.core.auth import get_current_user
from groupsplit.core.errors import ExchangeRateError
from groupsplit.models.user import User
from groupsplit.schemas.balance import ConversionResponse
from groupsplit.services.exchange_rate_service import ExchangeRateService, get_exchange_rate_service

router = APIRouter(tags=["currency"])


@router.get("/api/convert", response_model=ConversionResponse)
async def convert(
    from_currency: str = Query(alias="from", min_length=3, max_length=3),
    to_currency: str = Query(alias="to", min_length=3, max_length=3),
    amount: Decimal = Query(),
    user: User = Depends(get_current_user),
    rates: ExchangeRateService = Depends(get_exchange_rate_service),
):
    try:
        converted = await rates.convert(amount, from_currency, to_currency)
    except ExchangeRateError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ConversionResponse(
        from_currency=from_currency.upper(),
        to_currency=to_currency.upper(),
        amount=amount,
        converted_amount=converted,
    )
