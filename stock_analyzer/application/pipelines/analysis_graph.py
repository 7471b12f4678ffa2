"""
LangGraph pipeline for the stock analysis request.

Dependency-injection contract:
  - Receives the application services already bound to an ILanguageModel.
  - Never imports an LLM SDK, httpx, or langfuse directly.

Nodes run strictly in series. Any exception raised by a node aborts the run
and reaches the caller unchanged.
"""

from typing import Callable

from langgraph.graph import END, START, StateGraph

from stock_analyzer.application.pipelines.state import AnalysisState
from stock_analyzer.application.services.chart_synthesizer import synthesize
from stock_analyzer.application.services.input_validator import InputValidator
from stock_analyzer.application.services.stock_profiles import StockProfileProvider
from stock_analyzer.application.services.symbol_resolver import SymbolResolver
from stock_analyzer.domain.entities.stock_profile import ChartPoint
from stock_analyzer.domain.errors import InvalidInputError


def build_analysis_graph(
    validator: InputValidator,
    resolver: SymbolResolver,
    profiles: StockProfileProvider,
    chart: Callable[[float, float, str], list[ChartPoint]] = synthesize,
):
    """Build and compile the analysis graph.

    Returns:
        Compiled LangGraph CompiledStateGraph; call ainvoke({"user_input": ...}).
    """

    async def validate_input(state: AnalysisState) -> dict:
        result = await validator.validate(state["user_input"])
        if not result.valid:
            raise InvalidInputError()
        return {}

    async def resolve_symbol(state: AnalysisState) -> dict:
        return {"resolved": await resolver.resolve(state["user_input"])}

    async def load_profile(state: AnalysisState) -> dict:
        resolved = state["resolved"]
        profile = await profiles.get_profile(resolved.ticker, resolved.company_name)
        return {"profile": profile}

    def synthesize_chart(state: AnalysisState) -> dict:
        profile = state["profile"]
        points = chart(
            float(profile.current_price),
            float(profile.change or "0"),
            profile.symbol,
        )
        return {"chart_data": points}

    workflow = StateGraph(AnalysisState)
    workflow.add_node("validate_input", validate_input)
    workflow.add_node("resolve_symbol", resolve_symbol)
    workflow.add_node("load_profile", load_profile)
    workflow.add_node("synthesize_chart", synthesize_chart)
    workflow.add_edge(START, "validate_input")
    workflow.add_edge("validate_input", "resolve_symbol")
    workflow.add_edge("resolve_symbol", "load_profile")
    workflow.add_edge("load_profile", "synthesize_chart")
    workflow.add_edge("synthesize_chart", END)
    return workflow.compile()
