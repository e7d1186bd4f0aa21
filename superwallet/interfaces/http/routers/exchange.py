"""KWAN exchange rates and conversion."""
from fastapi import APIRouter

from superwallet.modules.exchange import KWAN_RATES, convert
from superwallet.schemas import ConversionResponse, ConvertRequest, ExchangeRateResponse, ExchangeRatesResponse

router = APIRouter()


@router.get("/rates", response_model=ExchangeRatesResponse, summary="Published KWAN rates")
async def list_rates() -> ExchangeRatesResponse:
    return ExchangeRatesResponse(rates=[ExchangeRateResponse.model_validate(rate) for rate in KWAN_RATES])


@router.post("/convert", response_model=ConversionResponse, summary="Quote a currency conversion")
async def convert_currency(payload: ConvertRequest) -> ConversionResponse:
    return ConversionResponse.model_validate(convert(payload.amount, payload.from_currency, payload.to_currency))
