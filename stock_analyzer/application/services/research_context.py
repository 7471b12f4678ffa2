"""
Application service: helpers for the AI research flow.

Turns a raw Global Quote plus news items into the textual context block fed
to the language model, parses the model's trading-signal JSON, and derives
the rule-based fallback signal and quote indicators when needed.
"""

from typing import Any, Mapping, Optional, Sequence

from stock_analyzer.application.services.json_extraction import extract_json_object
from stock_analyzer.domain.entities.market_data import QuoteIndicators, TradingSignal

MAX_NEWS_ITEMS = 3


def _number(quote: Mapping[str, Any], key: str) -> float:
    try:
        return float(str(quote.get(key, "0")).replace(",", "").rstrip("%"))
    except ValueError:
        return 0.0


def quote_price(quote: Mapping[str, Any]) -> float:
    return _number(quote, "05. price")


def quote_change(quote: Mapping[str, Any]) -> float:
    return _number(quote, "09. change")


def build_context(
    symbol: Optional[str],
    quote: Optional[Mapping[str, Any]],
    news: Optional[Sequence[Mapping[str, Any]]],
) -> str:
    context = ""
    if quote:
        price = quote_price(quote)
        change = quote_change(quote)
        volume = int(_number(quote, "06. volume"))
        sign = "+" if change > 0 else ""
        sentiment = "Positive (Green)" if change > 0 else "Negative (Red)"
        context = (
            f"\nCurrent market data for {symbol}:\n"
            f"- Current Price: ${price:.2f}\n"
            f"- Daily Change: {sign}{change:.2f} ({quote.get('10. change percent', 'N/A')})\n"
            f"- Volume: {volume:,}\n"
            f"- Day High: ${_number(quote, '03. high'):.2f}\n"
            f"- Day Low: ${_number(quote, '04. low'):.2f}\n"
            f"- Previous Close: ${_number(quote, '08. previous close'):.2f}\n"
            f"\nMarket Sentiment: {sentiment}\n"
        )
    if news:
        context += "\nRecent News Headlines:\n"
        for index, item in enumerate(news, start=1):
            context += (
                f"{index}. {item.get('title', '')} "
                f"(Sentiment: {item.get('overall_sentiment_label', 'Unknown')})\n"
            )
    return context


def parse_signals(text: str) -> list[TradingSignal]:
    """Parse `{"signals": [...]}` out of model output.

    Raises:
        ValueError: if the text holds no parseable JSON object.
    """
    payload = extract_json_object(text)
    raw_signals = payload.get("signals") or []
    if not isinstance(raw_signals, list):
        raise ValueError("'signals' is not a list")
    return [TradingSignal.from_mapping(item) for item in raw_signals if isinstance(item, dict)]


def fallback_signal(current_price: float, change: float) -> TradingSignal:
    """Single rule-based signal derived from the day's price change."""
    if change > 0:
        signal_type = "BUY"
    elif change < -2:
        signal_type = "SELL"
    else:
        signal_type = "HOLD"
    direction = "positive" if change > 0 else "negative"
    target_factor = 1.05 if change > 0 else 0.95
    return TradingSignal(
        type=signal_type,
        confidence="HIGH" if abs(change) > 3 else "MEDIUM",
        timeframe="SHORT",
        reason=f"Based on current {direction} momentum",
        target=f"${current_price * target_factor:.2f}",
        entry_price=f"${current_price * 0.99:.2f} - ${current_price * 1.01:.2f}",
    )


def quote_indicators(quote: Mapping[str, Any]) -> QuoteIndicators:
    price = quote_price(quote)
    change = quote_change(quote)
    high = _number(quote, "03. high")
    low = _number(quote, "04. low")
    volatility = (high - low) / price * 100 if price else 0.0
    if change > 0:
        momentum = "Bullish"
    elif change < 0:
        momentum = "Bearish"
    else:
        momentum = "Neutral"
    return QuoteIndicators(
        support=f"{price * 0.97:.2f}",
        resistance=f"{price * 1.03:.2f}",
        volatility=f"{volatility:.1f}%",
        momentum=momentum,
        rsi="Potentially Overbought" if change > 0 else "Potentially Oversold",
    )
