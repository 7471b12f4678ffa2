"""
LangGraph pipeline for the AI research request.

fetch_market_data → fetch_news → write_analysis → generate_signals.
Market-data and news failures degrade to "no data" with a warning; language
model failures abort the run.
"""

import logging
from typing import Optional

from langgraph.graph import END, START, StateGraph

from stock_analyzer.application.pipelines.state import ResearchState
from stock_analyzer.application.prompts import (
    CRYPTO_GUIDANCE,
    RESEARCH_PROMPT,
    SIGNALS_PROMPT,
    STOCK_GUIDANCE,
)
from stock_analyzer.application.services.research_context import (
    MAX_NEWS_ITEMS,
    build_context,
    fallback_signal,
    parse_signals,
    quote_change,
    quote_price,
)
from stock_analyzer.domain.errors import StockAnalyzerError
from stock_analyzer.domain.ports.llm_port import ILanguageModel
from stock_analyzer.domain.ports.market_data_port import IMarketDataProvider

logger = logging.getLogger(__name__)

ANALYSIS_TEMPERATURE = 0.7
ANALYSIS_MAX_TOKENS = 1000
SIGNALS_TEMPERATURE = 0.3
SIGNALS_MAX_TOKENS = 400


def build_research_graph(
    llm: ILanguageModel,
    market_data: IMarketDataProvider,
    signal_model: Optional[str] = None,
):
    """Build and compile the research graph.

    Args:
        llm:          ILanguageModel used for both generation calls.
        market_data:  IMarketDataProvider for the quote and news lookups.
        signal_model: Optional model override for the trading-signal call.
    """

    async def fetch_market_data(state: ResearchState) -> dict:
        symbol = state.get("symbol")
        if not symbol:
            return {"market_data": None}
        try:
            quote = await market_data.get_global_quote(symbol)
        except StockAnalyzerError as exc:
            logger.warning("Failed to fetch market data for %s: %s", symbol, exc)
            quote = None
        return {"market_data": quote or None}

    async def fetch_news(state: ResearchState) -> dict:
        symbol = state.get("symbol")
        if not symbol:
            return {"news_data": None}
        try:
            feed = await market_data.get_news(symbol)
        except StockAnalyzerError as exc:
            logger.warning("News data not available for %s: %s", symbol, exc)
            feed = []
        return {"news_data": feed[:MAX_NEWS_ITEMS] or None}

    async def write_analysis(state: ResearchState) -> dict:
        symbol = state.get("symbol")
        asset_type = state.get("asset_type", "stock")
        context = build_context(symbol, state.get("market_data"), state.get("news_data"))
        prompt = RESEARCH_PROMPT.format(
            context=context,
            user_query=state.get("query")
            or f"Provide comprehensive analysis for {symbol} {asset_type}",
            guidance=CRYPTO_GUIDANCE if asset_type == "crypto" else STOCK_GUIDANCE,
        )
        text = await llm.generate(
            prompt, temperature=ANALYSIS_TEMPERATURE, max_tokens=ANALYSIS_MAX_TOKENS
        )
        return {"context": context, "analysis": text}

    async def generate_signals(state: ResearchState) -> dict:
        quote = state.get("market_data")
        prompt = SIGNALS_PROMPT.format(
            symbol=state.get("symbol"),
            context=state.get("context", ""),
            current_price=f"{quote_price(quote):.2f}" if quote else "N/A",
        )
        text = await llm.generate(
            prompt,
            temperature=SIGNALS_TEMPERATURE,
            max_tokens=SIGNALS_MAX_TOKENS,
            model=signal_model,
        )
        try:
            signals = parse_signals(text)
        except ValueError as exc:
            logger.warning("Failed to parse signals: %s", exc)
            signals = (
                [fallback_signal(quote_price(quote), quote_change(quote))] if quote else []
            )
        return {"signals": signals}

    workflow = StateGraph(ResearchState)
    workflow.add_node("fetch_market_data", fetch_market_data)
    workflow.add_node("fetch_news", fetch_news)
    workflow.add_node("write_analysis", write_analysis)
    workflow.add_node("generate_signals", generate_signals)
    workflow.add_edge(START, "fetch_market_data")
    workflow.add_edge("fetch_market_data", "fetch_news")
    workflow.add_edge("fetch_news", "write_analysis")
    workflow.add_edge("write_analysis", "generate_signals")
    workflow.add_edge("generate_signals", END)
    return workflow.compile()
