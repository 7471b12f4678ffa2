"""
Domain entities for market data and AI research results.
Zero external dependencies: pure Python dataclasses only.

Upstream records (Global Quote, news feed items, series metadata) are kept as
plain dicts so they reach the client with the provider's own keys.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class TimeSeriesPoint:
    time: str
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class TimeSeries:
    points: list[TimeSeriesPoint]
    metadata: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class MarketDataResult:
    symbol: str
    time_series: list[TimeSeriesPoint] = field(default_factory=list)
    global_quote: Optional[dict[str, Any]] = None
    metadata: Optional[dict[str, Any]] = None
    success: bool = True
    fallback: bool = False


@dataclass(frozen=True)
class TradingSignal:
    type: str
    confidence: str
    timeframe: str
    reason: str
    target: Optional[str] = None
    stop_loss: Optional[str] = None
    entry_price: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TradingSignal":
        """Build a signal from a loosely-typed dict produced by a language model."""

        def _text(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            type=str(data.get("type", "HOLD")).upper(),
            confidence=str(data.get("confidence", "MEDIUM")).upper(),
            timeframe=str(data.get("timeframe", "SHORT")).upper(),
            reason=str(data.get("reason", "")),
            target=_text("target"),
            stop_loss=_text("stopLoss"),
            entry_price=_text("entryPrice"),
        )


@dataclass(frozen=True)
class QuoteIndicators:
    support: str
    resistance: str
    volatility: str
    momentum: str
    rsi: str


@dataclass(frozen=True)
class ResearchReport:
    symbol: Optional[str]
    analysis: str
    signals: list[TradingSignal]
    market_data: Optional[dict[str, Any]]
    news_data: Optional[list[dict[str, Any]]]
    technical_indicators: Optional[QuoteIndicators]
    timestamp: str
    type: str
    query: str
