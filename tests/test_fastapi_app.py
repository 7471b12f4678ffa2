"""HTTP-level tests for the FastAPI entrypoint."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from stock_analyzer.domain.errors import (
    InvalidSymbolError,
    LanguageModelError,
    MarketDataUnavailableError,
    RateLimitError,
)
from stock_analyzer.infrastructure.config import Settings
from stock_analyzer.infrastructure.entrypoints.fastapi_app import create_app
from stock_analyzer.infrastructure.llm import factory
from stock_analyzer.infrastructure.observability.langfuse_adapter import NullObservabilityHandler
from tests.helpers.fakes import (
    NARRATIVE,
    RESEARCH,
    SAMPLE_QUOTE,
    SIGNALS,
    VALIDATION,
    FakeMarketDataProvider,
    ScriptedLanguageModel,
)


def _client(llm=None, market_data=None, settings=None) -> TestClient:
    app = create_app(
        settings or Settings(openai_api_key="test-key"),
        llm=llm or ScriptedLanguageModel(),
        market_data=market_data or FakeMarketDataProvider(),
        observability=NullObservabilityHandler(),
    )
    return TestClient(app)


class TestAnalysisRoute:

    @pytest.mark.parametrize("path", ["/analysis", "/api/stock-analysis"])
    def test_nvidia(self, nvidia_llm, path: str) -> None:
        response = _client(nvidia_llm).post(path, json={"query": "NVIDIA"})
        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "NVDA"
        assert body["companyName"] == "NVIDIA Corporation"
        assert body["currentPrice"] == "465.20"
        assert body["sentiment"] == "BULLISH"
        assert body["keyMetrics"]["peRatio"]
        assert body["riskAnalysis"]["riskFactors"]
        assert body["analysis"].startswith("NVIDIA dominates")
        assert body["chartData"][-1]["price"] == 465.2
        assert set(body["chartData"][0]) == {"date", "price", "volume"}
        assert body["source"] == "AI Real-time Analysis"
        assert body["timestamp"].endswith("Z")
        assert "dataFreshness" in body and "disclaimer" in body

    def test_missing_input(self) -> None:
        llm = ScriptedLanguageModel()
        response = _client(llm).post("/analysis", json={"symbol": "  "})
        assert response.status_code == 400
        assert response.json() == {"error": "Symbol or query is required"}
        assert llm.calls == []

    def test_irrelevant_input(self) -> None:
        llm = ScriptedLanguageModel({VALIDATION: "INVALID"})
        response = _client(llm).post("/analysis", json={"query": "hello"})
        assert response.status_code == 400
        assert response.json() == {
            "error": "Please enter a valid stock name or company for analysis."
        }

    def test_missing_credentials(self) -> None:
        app = create_app(
            Settings(),
            market_data=FakeMarketDataProvider(),
            observability=NullObservabilityHandler(),
        )
        response = TestClient(app).post("/analysis", json={"query": "Apple"})
        assert response.status_code == 500
        assert response.json() == {"error": "Language model API key not configured"}

    def test_blank_input_checked_before_credentials(self) -> None:
        app = create_app(
            Settings(),
            market_data=FakeMarketDataProvider(),
            observability=NullObservabilityHandler(),
        )
        response = TestClient(app).post("/analysis", json={})
        assert response.status_code == 400

    def test_generation_failure(self) -> None:
        llm = ScriptedLanguageModel(
            {
                VALIDATION: "VALID",
                "Identify the stock symbol": '{"symbol":"AAPL","companyName":"Apple Inc","identified":true}',
                NARRATIVE: LanguageModelError("upstream down"),
            }
        )
        response = _client(llm).post("/analysis", json={"query": "Apple"})
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to generate analysis. Please try again."
        assert "upstream down" in body["details"]

    def test_malformed_body(self) -> None:
        response = _client().post("/analysis", json={"query": ["not", "a", "string"]})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"


class TestResearchRoute:

    @pytest.mark.parametrize("path", ["/research", "/api/ai-research"])
    def test_report(self, market_data, path: str) -> None:
        llm = ScriptedLanguageModel({SIGNALS: "no json here", RESEARCH: "Research text."})
        response = _client(llm, market_data).post(path, json={"symbol": "aapl"})
        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "AAPL"
        assert body["analysis"] == "Research text."
        assert body["signals"] == [
            {
                "type": "BUY",
                "confidence": "MEDIUM",
                "timeframe": "SHORT",
                "reason": "Based on current positive momentum",
                "target": "$199.50",
                "entryPrice": "$188.10 - $191.90",
            }
        ]
        assert body["marketData"]["05. price"] == "190.00"
        assert len(body["newsData"]) == 3
        assert body["technicalIndicators"]["support"] == "184.30"
        assert body["type"] == "stock"

    def test_missing_input(self) -> None:
        response = _client().post("/research", json={"type": "stock"})
        assert response.status_code == 400
        assert response.json() == {"error": "Symbol or query is required"}

    def test_unknown_type(self) -> None:
        response = _client().post("/research", json={"symbol": "AAPL", "type": "bond"})
        assert response.status_code == 400

    def test_generation_failure(self, market_data) -> None:
        llm = ScriptedLanguageModel({RESEARCH: LanguageModelError("boom")})
        response = _client(llm, market_data).post("/research", json={"symbol": "AAPL"})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate research. Please try again."


class TestMarketDataRoute:

    @pytest.mark.parametrize("path", ["/market-data", "/api/stock-data"])
    def test_global_quote(self, path: str) -> None:
        provider = FakeMarketDataProvider(quote=dict(SAMPLE_QUOTE))
        response = _client(market_data=provider).get(path, params={"symbol": "aapl"})
        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "AAPL"
        assert body["globalQuote"]["01. symbol"] == "AAPL"
        assert body["success"] is True
        assert body["fallback"] is False

    def test_missing_symbol(self) -> None:
        response = _client().get("/market-data")
        assert response.status_code == 400
        assert response.json() == {"error": "Symbol is required"}

    def test_series(self, sample_series) -> None:
        provider = FakeMarketDataProvider(series=sample_series)
        response = _client(market_data=provider).get(
            "/market-data", params={"symbol": "AAPL", "function": "TIME_SERIES_DAILY"}
        )
        assert response.status_code == 200
        first = response.json()["timeSeries"][0]
        assert first == {
            "time": "2024-06-14",
            "open": 189.1,
            "high": 191.2,
            "low": 188.5,
            "close": 190.0,
            "volume": 47325180,
        }

    def test_fallback_to_quote(self) -> None:
        provider = FakeMarketDataProvider(
            quote=dict(SAMPLE_QUOTE), series=InvalidSymbolError()
        )
        response = _client(market_data=provider).get(
            "/market-data", params={"symbol": "AAPL", "function": "TIME_SERIES_DAILY"}
        )
        assert response.status_code == 200
        assert response.json()["fallback"] is True

    def test_invalid_symbol(self) -> None:
        provider = FakeMarketDataProvider(quote=None, series=InvalidSymbolError(details="x"))
        response = _client(market_data=provider).get(
            "/market-data", params={"symbol": "NOPE", "function": "TIME_SERIES_DAILY"}
        )
        assert response.status_code == 400
        assert "details" not in response.json()

    def test_not_found(self) -> None:
        response = _client(market_data=FakeMarketDataProvider(quote={})).get(
            "/market-data", params={"symbol": "ZZZZ"}
        )
        assert response.status_code == 404

    def test_rate_limit(self) -> None:
        provider = FakeMarketDataProvider(quote=RateLimitError(details="Note"))
        response = _client(market_data=provider).get("/market-data", params={"symbol": "AAPL"})
        assert response.status_code == 429
        assert response.json() == {
            "error": "API rate limit reached. Please wait a moment and try again.",
            "isRateLimit": True,
        }

    def test_network_failure(self) -> None:
        provider = FakeMarketDataProvider(quote=MarketDataUnavailableError(details="timed out"))
        response = _client(market_data=provider).get("/market-data", params={"symbol": "AAPL"})
        assert response.status_code == 500
        body = response.json()
        assert body["error"].startswith("Failed to fetch stock data.")
        assert body["details"] == "timed out"

    def test_unexpected_failure(self) -> None:
        provider = FakeMarketDataProvider(quote=RuntimeError("kaboom"))
        response = _client(market_data=provider).get("/market-data", params={"symbol": "AAPL"})
        assert response.status_code == 500
        assert response.json()["details"] == "kaboom"


def test_health() -> None:
    assert _client().get("/health").json() == {"status": "ok"}


class CountingSession:
    """Stands in for boto3.Session and counts credential-chain lookups."""

    created = 0
    credentials = object()

    def __init__(self, region_name=None) -> None:
        type(self).created += 1

    def get_credentials(self):
        return self.credentials


class TestBedrockCredentials:

    @pytest.fixture(autouse=True)
    def counting_session(self, monkeypatch):
        monkeypatch.setattr(factory.boto3, "Session", CountingSession)
        monkeypatch.setattr(CountingSession, "created", 0)
        return CountingSession

    def test_credential_chain_resolved_once(self, nvidia_llm, counting_session) -> None:
        client = _client(nvidia_llm, settings=Settings(llm_provider="bedrock"))
        for _ in range(3):
            response = client.post("/analysis", json={"query": "NVIDIA"})
            assert response.status_code == 200
        client.post("/research", json={"query": "chip outlook"})
        assert counting_session.created == 1

    def test_missing_credentials_remembered(self, monkeypatch, counting_session) -> None:
        monkeypatch.setattr(CountingSession, "credentials", None)
        client = _client(settings=Settings(llm_provider="bedrock"))
        for _ in range(2):
            response = client.post("/analysis", json={"query": "Apple"})
            assert response.status_code == 500
            assert response.json() == {"error": "Language model API key not configured"}
        assert counting_session.created == 1
