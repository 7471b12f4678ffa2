"""
Infrastructure adapter: Alpha Vantage REST API → IMarketDataProvider.
All Alpha Vantage details (query functions, response envelope keys, the
"Error Message" / "Note" / "Information" conventions) are confined here.

Every call opens its own httpx.AsyncClient: handlers are stateless and no
connection is shared across requests.
"""

import logging
from typing import Any, Optional

import httpx

from stock_analyzer.domain.entities.market_data import TimeSeries, TimeSeriesPoint
from stock_analyzer.domain.errors import (
    InvalidSymbolError,
    MarketDataUnavailableError,
    RateLimitError,
)
from stock_analyzer.domain.ports.market_data_port import IMarketDataProvider

logger = logging.getLogger(__name__)

USER_AGENT = "onntix-market-analyzer/1.0"
MAX_SERIES_POINTS = 100

_SERIES_KEYS = {
    "TIME_SERIES_DAILY": "Time Series (Daily)",
    "TIME_SERIES_INTRADAY": "Time Series (5min)",
}


class AlphaVantageMarketDataProvider(IMarketDataProvider):
    """Fetches quotes, OHLCV series and news sentiment from Alpha Vantage."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://www.alphavantage.co/query",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def get_global_quote(self, symbol: str) -> Optional[dict[str, Any]]:
        data = await self._query({"function": "GLOBAL_QUOTE", "symbol": symbol})
        return data.get("Global Quote") or None

    async def get_time_series(self, symbol: str, function: str) -> TimeSeries:
        if function not in _SERIES_KEYS:
            raise ValueError(f"Unsupported time series function: {function!r}")
        params = {"function": function, "symbol": symbol, "outputsize": "compact"}
        if function == "TIME_SERIES_INTRADAY":
            params["interval"] = "5min"

        data = await self._query(params)
        raw_series = data.get(_SERIES_KEYS[function]) or {}
        points = [
            TimeSeriesPoint(
                time=time,
                open=float(values["1. open"]),
                high=float(values["2. high"]),
                low=float(values["3. low"]),
                close=float(values["4. close"]),
                volume=int(float(values["5. volume"])),
            )
            for time, values in list(raw_series.items())[:MAX_SERIES_POINTS]
        ]
        return TimeSeries(points=points, metadata=data.get("Meta Data"))

    async def get_news(self, symbol: str, limit: int = 5) -> list[dict[str, Any]]:
        data = await self._query(
            {"function": "NEWS_SENTIMENT", "tickers": symbol, "limit": str(limit)}
        )
        return list(data.get("feed") or [])

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _query(self, params: dict[str, str]) -> dict[str, Any]:
        logger.info(
            "Alpha Vantage %s for %s",
            params.get("function"),
            params.get("symbol") or params.get("tickers"),
        )
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    self._base_url,
                    params={**params, "apikey": self._api_key},
                    headers={"User-Agent": USER_AGENT},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise MarketDataUnavailableError(details=str(exc)) from exc
        except ValueError as exc:
            raise MarketDataUnavailableError(details=f"Malformed response: {exc}") from exc

        self._raise_for_envelope(data)
        return data

    @staticmethod
    def _raise_for_envelope(data: Any) -> None:
        if not isinstance(data, dict):
            raise MarketDataUnavailableError(details="Unexpected response shape")
        if data.get("Error Message"):
            logger.error("API Error Message: %s", data["Error Message"])
            raise InvalidSymbolError(details=data["Error Message"])
        for key in ("Note", "Information"):
            if data.get(key):
                logger.error("API rate limit (%s): %s", key, data[key])
                raise RateLimitError(details=data[key])
