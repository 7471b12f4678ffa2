"""
LangGraph state definitions for the request pipelines.
langgraph is the orchestration framework and is allowed in the application layer.
"""

from typing import Any, Optional, TypedDict

from stock_analyzer.domain.entities.market_data import TradingSignal
from stock_analyzer.domain.entities.stock_profile import (
    ChartPoint,
    ResolvedSymbol,
    StockProfile,
)


class AnalysisState(TypedDict, total=False):
    """State threaded through validate → resolve → profile → chart.

    Each node writes exactly one key; nothing is shared across requests.
    """

    user_input: str
    resolved: ResolvedSymbol
    profile: StockProfile
    chart_data: list[ChartPoint]


class ResearchState(TypedDict, total=False):
    symbol: Optional[str]
    query: Optional[str]
    asset_type: str
    market_data: Optional[dict[str, Any]]
    news_data: Optional[list[dict[str, Any]]]
    context: str
    analysis: str
    signals: list[TradingSignal]
