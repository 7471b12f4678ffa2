"""
Use-case: full stock analysis for a free-text query or explicit symbol.
Depends only on Domain ports/entities and the compiled analysis graph.

Stamps the response with a timestamp and the fixed source, disclaimer and
data-freshness labels. There is no partial response: any pipeline error
propagates unchanged.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from stock_analyzer.application.use_cases.tracing import graph_config
from stock_analyzer.domain.entities.stock_profile import AnalysisRequest, AnalysisResponse
from stock_analyzer.domain.errors import InvalidInputError
from stock_analyzer.domain.ports.observability_port import IObservabilityHandler

SOURCE_LABEL = "AI Real-time Analysis"
DISCLAIMER = (
    "This analysis is AI-generated based on available data and should not be considered "
    "as financial advice. Always conduct your own research before making investment "
    "decisions."
)
DATA_FRESHNESS = "Based on latest available market data and AI knowledge"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def require_user_input(request: AnalysisRequest) -> str:
    """Return the text to analyse, or raise InvalidInputError when both fields are blank."""
    user_input = request.user_input
    if not user_input:
        raise InvalidInputError("Symbol or query is required")
    return user_input


class AnalyzeStockUseCase:
    def __init__(
        self,
        graph: Any,
        observability: IObservabilityHandler,
        clock: Optional[Callable[[], str]] = None,
    ) -> None:
        """
        Args:
            graph:         Compiled graph returned by build_analysis_graph().
            observability: IObservabilityHandler implementation (e.g. Langfuse adapter).
            clock:         Timestamp factory, overridable in tests.
        """
        self._graph = graph
        self._observability = observability
        self._clock = clock or utc_timestamp

    async def execute(self, request: AnalysisRequest) -> AnalysisResponse:
        user_input = require_user_input(request)
        state = await self._graph.ainvoke(
            {"user_input": user_input},
            config=graph_config(self._observability, "stock-analysis"),
        )
        return AnalysisResponse(
            profile=state["profile"],
            chart_data=state["chart_data"],
            timestamp=self._clock(),
            source=SOURCE_LABEL,
            disclaimer=DISCLAIMER,
            data_freshness=DATA_FRESHNESS,
        )
