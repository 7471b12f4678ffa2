"""
Domain entities for the stock analysis pipeline.
Zero external dependencies: pure Python dataclasses only.

Every entity is request-scoped. Price, volume and ratio fields are carried as
display strings (e.g. "248.50", "89,543,210") and are never parsed back into
floats outside the chart synthesizer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Sentiment(str, Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


@dataclass(frozen=True)
class AnalysisRequest:
    raw_query: Optional[str] = None
    explicit_symbol: Optional[str] = None

    @property
    def user_input(self) -> str:
        """The text handed to the validator and resolver: query first, then symbol."""
        return (self.raw_query or "").strip() or (self.explicit_symbol or "").strip()


@dataclass(frozen=True)
class ResolvedSymbol:
    ticker: str
    company_name: str
    resolved: bool = True
    source: str = "model"


@dataclass(frozen=True)
class KeyMetrics:
    pe_ratio: str
    eps: str
    dividend: str
    beta: str
    roe: str
    debt_to_equity: str


@dataclass(frozen=True)
class TechnicalIndicators:
    support: str
    resistance: str
    rsi: str
    sma50: str
    sma200: str
    trend: str


@dataclass(frozen=True)
class PriceTargets:
    short_term: str
    medium_term: str
    long_term: str


@dataclass(frozen=True)
class RiskAnalysis:
    risk_level: str
    risk_factors: tuple[str, ...]
    risk_mitigation: tuple[str, ...]


@dataclass(frozen=True)
class Recommendation:
    action: str
    reasoning: str
    time_horizon: str
    position_size: str


@dataclass(frozen=True)
class MarketContext:
    economic_factors: str
    sector_performance: str
    competitive_position: str


@dataclass(frozen=True)
class StockProfile:
    symbol: str
    company_name: str
    current_price: str
    change: str
    change_percent: str
    volume: str
    market_cap: str
    day_high: str
    day_low: str
    previous_close: str
    open: str
    sector: str
    sentiment: Sentiment
    confidence: int
    key_metrics: Optional[KeyMetrics] = None
    technical_indicators: Optional[TechnicalIndicators] = None
    price_targets: Optional[PriceTargets] = None
    risk_analysis: Optional[RiskAnalysis] = None
    opportunities: tuple[str, ...] = ()
    recommendation: Optional[Recommendation] = None
    market_context: Optional[MarketContext] = None
    analysis: str = ""


@dataclass(frozen=True)
class ChartPoint:
    date: str
    price: float
    volume: int


@dataclass(frozen=True)
class AnalysisResponse:
    profile: StockProfile
    chart_data: list[ChartPoint] = field(default_factory=list)
    timestamp: str = ""
    source: str = ""
    disclaimer: str = ""
    data_freshness: str = ""
