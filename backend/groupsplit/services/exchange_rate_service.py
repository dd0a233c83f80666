import logging
import time
from decimal import Decimal
from typing import Callable

import httpx

from groupsplit.core.config import settings
from groupsplit.core.errors import ExchangeRateError
from groupsplit.services.ledger import round_money, to_decimal

logger = logging.getLogger(__name__)


class RateCache:
    """Per-base-currency rate tables, each expiring ``ttl`` seconds after it was stored."""

    def __init__(self, ttl: float = 3600, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[dict[str, float], float]] = {}

    def get(self, base: str) -> dict[str, float] | None:
        entry = self._entries.get(base)
        if entry and self._clock() - entry[1] < self.ttl:
            return entry[0]
        return None

    def put(self, base: str, rates: dict[str, float]) -> None:
        self._entries[base] = (rates, self._clock())

    def clear(self) -> None:
        self._entries.clear()


class ExchangeRateService:
    def __init__(
        self,
        cache: RateCache,
        base_url: str = settings.exchange_rate_api_url,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cache = cache
        self.base_url = base_url
        self._transport = transport

    async def get_rates(self, base: str) -> dict[str, float]:
        base = base.upper()
        rates = self.cache.get(base)
        if rates is not None:
            return rates

        try:
            async with httpx.AsyncClient(timeout=10, transport=self._transport) as client:
                resp = await client.get(f"{self.base_url}{base}")
                resp.raise_for_status()
                rates = resp.json().get("rates")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to fetch exchange rates for {base}: {e}")
            raise ExchangeRateError("Failed to fetch exchange rates") from e

        if not rates:
            raise ExchangeRateError("Invalid response from exchange rate API")
        logger.info(f"Fetched {len(rates)} exchange rates for {base}")
        self.cache.put(base, rates)
        return rates

    async def get_exchange_rate(self, from_currency: str, to_currency: str) -> Decimal:
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()
        if from_currency == to_currency:
            return Decimal("1")

        rates = await self.get_rates(from_currency)
        rate = rates.get(to_currency)
        if rate is None:
            raise ExchangeRateError(f"Exchange rate not found for {to_currency}")
        return Decimal(str(rate)).quantize(Decimal("0.000001"))

    async def convert(self, amount, from_currency: str, to_currency: str) -> Decimal:
        rate = await self.get_exchange_rate(from_currency, to_currency)
        return round_money(to_decimal(amount) * rate)


_service: ExchangeRateService | None = None


def get_exchange_rate_service() -> ExchangeRateService:
    global _service
    if _service is None:
        _service = ExchangeRateService(RateCache(ttl=settings.exchange_rate_cache_ttl))
    return _service
