"""
Use-case: AI research report for a stock or crypto symbol and/or free-text query.
Depends only on Domain ports/entities and the compiled research graph.
"""

from typing import Any, Callable, Optional

from stock_analyzer.application.services.research_context import quote_indicators
from stock_analyzer.application.use_cases.analyze_stock import utc_timestamp
from stock_analyzer.application.use_cases.tracing import graph_config
from stock_analyzer.domain.entities.market_data import ResearchReport
from stock_analyzer.domain.errors import InvalidInputError
from stock_analyzer.domain.ports.observability_port import IObservabilityHandler

ASSET_TYPES = ("stock", "crypto")


def require_research_input(symbol: Optional[str], query: Optional[str]) -> None:
    if not (symbol or "").strip() and not (query or "").strip():
        raise InvalidInputError("Symbol or query is required")


class ResearchAssetUseCase:
    def __init__(
        self,
        graph: Any,
        observability: IObservabilityHandler,
        clock: Optional[Callable[[], str]] = None,
    ) -> None:
        self._graph = graph
        self._observability = observability
        self._clock = clock or utc_timestamp

    async def execute(
        self,
        symbol: Optional[str],
        query: Optional[str],
        asset_type: str = "stock",
    ) -> ResearchReport:
        """Run the research graph and assemble the report.

        Raises:
            InvalidInputError: both *symbol* and *query* are blank, or *asset_type*
                               is not one of ASSET_TYPES.
            LanguageModelError: either generation call failed.
        """
        require_research_input(symbol, query)
        if asset_type not in ASSET_TYPES:
            raise InvalidInputError(f"Unsupported research type: {asset_type!r}")

        symbol = (symbol or "").strip() or None
        query = (query or "").strip() or None
        state = await self._graph.ainvoke(
            {"symbol": symbol, "query": query, "asset_type": asset_type},
            config=graph_config(self._observability, "ai-research"),
        )
        quote = state.get("market_data")
        return ResearchReport(
            symbol=symbol.upper() if symbol else None,
            analysis=state["analysis"],
            signals=state["signals"],
            market_data=quote,
            news_data=state.get("news_data"),
            technical_indicators=quote_indicators(quote) if quote else None,
            timestamp=self._clock(),
            type=asset_type,
            query=query or f"Analysis for {symbol}",
        )
