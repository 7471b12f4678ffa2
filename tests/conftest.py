"""Shared fixtures for the stock analyzer test suite."""

from __future__ import annotations

import pytest

from stock_analyzer.domain.entities.market_data import TimeSeries, TimeSeriesPoint
from tests.helpers.fakes import (
    SAMPLE_NEWS,
    SAMPLE_QUOTE,
    FakeMarketDataProvider,
    ScriptedLanguageModel,
    analysis_replies,
)


@pytest.fixture
def nvidia_llm() -> ScriptedLanguageModel:
    return ScriptedLanguageModel(
        analysis_replies(
            'Sure! {"symbol":"NVDA","companyName":"NVIDIA Corporation","identified":true}',
            narrative="  NVIDIA dominates AI accelerators.\n\nSecond paragraph.  ",
        )
    )


@pytest.fixture
def sample_series() -> TimeSeries:
    return TimeSeries(
        points=[
            TimeSeriesPoint("2024-06-14", 189.1, 191.2, 188.5, 190.0, 47325180),
            TimeSeriesPoint("2024-06-13", 187.0, 189.5, 186.8, 188.39, 41200000),
        ],
        metadata={"2. Symbol": "AAPL"},
    )


@pytest.fixture
def market_data() -> FakeMarketDataProvider:
    return FakeMarketDataProvider(quote=dict(SAMPLE_QUOTE), news=list(SAMPLE_NEWS))
