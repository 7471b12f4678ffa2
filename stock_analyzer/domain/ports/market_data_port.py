"""
Port (interface) for market-data providers.
Infrastructure adapters (e.g. AlphaVantageMarketDataProvider) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from stock_analyzer.domain.entities.market_data import TimeSeries


class IMarketDataProvider(ABC):
    @abstractmethod
    async def get_global_quote(self, symbol: str) -> Optional[dict[str, Any]]:
        """Return the raw Global Quote record, or None when the provider has none.

        Raises:
            InvalidSymbolError:         the provider rejected the symbol.
            RateLimitError:             the provider throttled the request.
            MarketDataUnavailableError: network or HTTP failure.
        """
        ...

    @abstractmethod
    async def get_time_series(self, symbol: str, function: str) -> TimeSeries:
        """Return daily or intraday OHLCV points for *symbol*, newest first.

        Raises the same errors as get_global_quote().
        """
        ...

    @abstractmethod
    async def get_news(self, symbol: str, limit: int = 5) -> list[dict[str, Any]]:
        """Return raw news-sentiment feed items for *symbol* (possibly empty)."""
        ...
