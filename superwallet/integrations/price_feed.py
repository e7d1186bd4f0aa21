"""Asset price quotes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Protocol

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PriceQuote:
    symbol: str
    price_usd: Decimal
    price_krw: Decimal
    change_24h: Decimal
    source: str


class PriceFeed(Protocol):
    def quote(self, symbol: str) -> PriceQuote:
        ...


class StaticPriceFeed:
    """Fixed USD price converted to KRW at a configured rate."""

    def __init__(self, price_usd: Decimal = Decimal("0.001"), usd_krw_rate: Decimal = Decimal("1300")) -> None:
        self.price_usd = price_usd
        self.usd_krw_rate = usd_krw_rate

    def quote(self, symbol: str) -> PriceQuote:
        return PriceQuote(
            symbol=symbol.upper(),
            price_usd=self.price_usd,
            price_krw=self.price_usd * self.usd_krw_rate,
            change_24h=Decimal(0),
            source="static",
        )


class CoinMarketCapPriceFeed:
    """CoinMarketCap latest quotes; falls back to another feed when the API fails."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        url: str,
        usd_krw_rate: Decimal,
        fallback: PriceFeed,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.usd_krw_rate = usd_krw_rate
        self.fallback = fallback
        self.timeout = timeout
        self.session = session or requests.Session()

    def quote(self, symbol: str) -> PriceQuote:
        symbol = symbol.upper()
        try:
            response = self.session.get(
                self.url,
                params={"symbol": symbol},
                headers={"X-CMC_PRO_API_KEY": self.api_key or "", "Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            usd = response.json()["data"][symbol]["quote"]["USD"]
            price = Decimal(str(usd["price"]))
            change = Decimal(str(usd.get("percent_change_24h") or 0))
        except requests.exceptions.RequestException as exc:
            logger.warning("CoinMarketCap request for %s failed: %s", symbol, exc)
            return self.fallback.quote(symbol)
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            logger.warning("Unexpected CoinMarketCap payload for %s: %s", symbol, exc)
            return self.fallback.quote(symbol)

        return PriceQuote(
            symbol=symbol,
            price_usd=price,
            price_krw=price * self.usd_krw_rate,
            change_24h=change,
            source="coinmarketcap",
        )


__all__ = ["PriceQuote", "PriceFeed", "StaticPriceFeed", "CoinMarketCapPriceFeed"]
