"""Tests for research context building, signal parsing and the rule-based fallback."""

from __future__ import annotations

import pytest

from stock_analyzer.application.services.research_context import (
    build_context,
    fallback_signal,
    parse_signals,
    quote_indicators,
)
from tests.helpers.fakes import SAMPLE_NEWS, SAMPLE_QUOTE


class TestFallbackSignal:

    def test_sharp_drop_is_high_confidence_sell(self) -> None:
        signal = fallback_signal(current_price=100.0, change=-3.5)
        assert signal.type == "SELL"
        assert signal.confidence == "HIGH"
        assert signal.timeframe == "SHORT"
        assert signal.target == "$95.00"
        assert signal.entry_price == "$99.00 - $101.00"
        assert signal.reason == "Based on current negative momentum"

    @pytest.mark.parametrize(
        ("change", "expected_type", "expected_confidence"),
        [
            (1.2, "BUY", "MEDIUM"),
            (4.0, "BUY", "HIGH"),
            (0.0, "HOLD", "MEDIUM"),
            (-1.5, "HOLD", "MEDIUM"),
            (-2.5, "SELL", "MEDIUM"),
        ],
    )
    def test_rules(self, change: float, expected_type: str, expected_confidence: str) -> None:
        signal = fallback_signal(50.0, change)
        assert (signal.type, signal.confidence) == (expected_type, expected_confidence)

    def test_positive_target_is_five_percent_up(self) -> None:
        assert fallback_signal(200.0, 1.0).target == "$210.00"


class TestParseSignals:

    def test_signals_in_prose(self) -> None:
        text = (
            'Here are the signals:\n{"signals": [{"type": "buy", "confidence": "HIGH", '
            '"timeframe": "MEDIUM", "reason": "Breakout", "target": "$210", '
            '"stopLoss": "$180", "entryPrice": "$188-$190"}]}'
        )
        [signal] = parse_signals(text)
        assert signal.type == "BUY"
        assert signal.stop_loss == "$180"
        assert signal.entry_price == "$188-$190"

    def test_missing_signals_key_is_empty(self) -> None:
        assert parse_signals('{"note": "none"}') == []

    def test_not_json_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_signals("BUY at 190, target 210")


class TestContextAndIndicators:

    def test_context_block(self) -> None:
        context = build_context("AAPL", SAMPLE_QUOTE, SAMPLE_NEWS[:3])
        assert "Current market data for AAPL:" in context
        assert "- Current Price: $190.00" in context
        assert "- Daily Change: +1.61 (0.8546%)" in context
        assert "- Volume: 47,325,180" in context
        assert "- Previous Close: $188.39" in context
        assert "Market Sentiment: Positive (Green)" in context
        assert "1. Apple unveils new AI features (Sentiment: Bullish)" in context
        assert "3. Regulators eye App Store fees (Sentiment: Bearish)" in context

    def test_empty_context_without_data(self) -> None:
        assert build_context(None, None, None) == ""

    def test_quote_indicators(self) -> None:
        indicators = quote_indicators(SAMPLE_QUOTE)
        assert indicators.support == "184.30"
        assert indicators.resistance == "195.70"
        assert indicators.volatility == "1.4%"
        assert indicators.momentum == "Bullish"
        assert indicators.rsi == "Potentially Overbought"
