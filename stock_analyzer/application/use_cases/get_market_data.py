"""
Use-case: quote or OHLCV series for a symbol, with a single Global Quote fallback.
Depends only on Domain ports and entities: no infrastructure imports.

Fallback rules for series functions:
  - provider rejects the symbol → try GLOBAL_QUOTE once; 400 if that fails too.
  - provider returns an empty series → try GLOBAL_QUOTE once; 404 if still nothing.
Rate-limit replies are never retried. Network and HTTP failures on the series
call are not retried either: only a rejected symbol or an empty series triggers
the fallback, so a broken upstream surfaces as a 500 instead of a stale quote.
"""

import logging
from typing import Optional

from stock_analyzer.domain.entities.market_data import MarketDataResult
from stock_analyzer.domain.errors import (
    InvalidInputError,
    InvalidSymbolError,
    NoMarketDataError,
    StockAnalyzerError,
)
from stock_analyzer.domain.ports.market_data_port import IMarketDataProvider

logger = logging.getLogger(__name__)

GLOBAL_QUOTE = "GLOBAL_QUOTE"
TIME_SERIES_DAILY = "TIME_SERIES_DAILY"
TIME_SERIES_INTRADAY = "TIME_SERIES_INTRADAY"
SUPPORTED_FUNCTIONS = (GLOBAL_QUOTE, TIME_SERIES_DAILY, TIME_SERIES_INTRADAY)


class GetMarketDataUseCase:
    def __init__(self, provider: IMarketDataProvider) -> None:
        self._provider = provider

    async def execute(
        self, symbol: Optional[str], function: Optional[str] = None
    ) -> MarketDataResult:
        """Fetch market data for *symbol*.

        Args:
            symbol:   Ticker symbol (case-insensitive).
            function: One of SUPPORTED_FUNCTIONS; defaults to GLOBAL_QUOTE.

        Raises:
            InvalidInputError:          blank symbol or unsupported function.
            InvalidSymbolError:         provider rejected the symbol.
            RateLimitError:             provider throttled the request.
            NoMarketDataError:          nothing came back, even after the fallback.
            MarketDataUnavailableError: network or HTTP failure.
        """
        if not symbol or not symbol.strip():
            raise InvalidInputError("Symbol is required")
        symbol = symbol.strip().upper()
        function = (function or GLOBAL_QUOTE).strip().upper()
        if function not in SUPPORTED_FUNCTIONS:
            raise InvalidInputError(f"Unsupported function: {function}")

        if function == GLOBAL_QUOTE:
            quote = await self._provider.get_global_quote(symbol)
            if not quote:
                raise NoMarketDataError()
            return MarketDataResult(symbol=symbol, global_quote=quote)

        try:
            series = await self._provider.get_time_series(symbol, function)
        except InvalidSymbolError:
            logger.warning("%s rejected %s, trying Global Quote fallback", function, symbol)
            quote = await self._fallback_quote(symbol)
            if not quote:
                raise
            return MarketDataResult(symbol=symbol, global_quote=quote, fallback=True)

        if series.points:
            return MarketDataResult(
                symbol=symbol, time_series=series.points, metadata=series.metadata
            )

        logger.info("No %s data for %s, trying Global Quote fallback", function, symbol)
        quote = await self._fallback_quote(symbol)
        if not quote:
            raise NoMarketDataError()
        return MarketDataResult(
            symbol=symbol, global_quote=quote, metadata=series.metadata, fallback=True
        )

    async def _fallback_quote(self, symbol: str) -> Optional[dict]:
        try:
            return await self._provider.get_global_quote(symbol)
        except StockAnalyzerError as exc:
            logger.warning("Global Quote fallback failed for %s: %s", symbol, exc)
            return None
