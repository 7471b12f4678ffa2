"""
FastAPI entry point.

This module is the Composition Root: it wires the infrastructure adapters
(language model, Alpha Vantage, Langfuse) into the application use-cases.
The language model is only built once a request has passed input checks, so
a missing credential answers 500 before any upstream call is made.

Run locally:
    uvicorn stock_analyzer.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from stock_analyzer.application.pipelines.analysis_graph import build_analysis_graph
from stock_analyzer.application.pipelines.research_graph import build_research_graph
from stock_analyzer.application.services.input_validator import InputValidator
from stock_analyzer.application.services.stock_profiles import StockProfileProvider
from stock_analyzer.application.services.symbol_resolver import SymbolResolver
from stock_analyzer.application.use_cases.analyze_stock import (
    AnalyzeStockUseCase,
    require_user_input,
)
from stock_analyzer.application.use_cases.get_market_data import GetMarketDataUseCase
from stock_analyzer.application.use_cases.research_asset import (
    ResearchAssetUseCase,
    require_research_input,
)
from stock_analyzer.domain.entities.stock_profile import AnalysisRequest
from stock_analyzer.domain.errors import ConfigurationError, StockAnalyzerError
from stock_analyzer.domain.ports.llm_port import ILanguageModel
from stock_analyzer.domain.ports.market_data_port import IMarketDataProvider
from stock_analyzer.domain.ports.observability_port import IObservabilityHandler
from stock_analyzer.infrastructure.config import Settings
from stock_analyzer.infrastructure.entrypoints.serialization import (
    analysis_payload,
    to_payload,
)
from stock_analyzer.infrastructure.llm.factory import build_language_model, has_credentials
from stock_analyzer.infrastructure.logging_config import configure_logging
from stock_analyzer.infrastructure.market_data.alpha_vantage_adapter import (
    AlphaVantageMarketDataProvider,
)
from stock_analyzer.infrastructure.observability.langfuse_adapter import (
    LangfuseObservabilityHandler,
    NullObservabilityHandler,
)

logger = logging.getLogger(__name__)


def bootstrap_environment() -> None:
    """Load .env and, when SECRETS_ARN is set, the AWS Secrets Manager secret."""
    load_dotenv()
    secret_arn = os.environ.get("SECRETS_ARN")
    if secret_arn:
        from stock_analyzer.infrastructure.secrets.secrets_manager_adapter import (
            SecretsManagerAdapter,
        )

        SecretsManagerAdapter().load_into_env(secret_arn)


class ServiceContainer:
    """Builds adapters and use-cases on first use; holds no per-request state."""

    def __init__(
        self,
        settings: Settings,
        llm: Optional[ILanguageModel] = None,
        market_data: Optional[IMarketDataProvider] = None,
        observability: Optional[IObservabilityHandler] = None,
    ) -> None:
        self.settings = settings
        self._llm = llm
        self._credentials_ok: Optional[bool] = None
        self.market_data = market_data or AlphaVantageMarketDataProvider(
            api_key=settings.alpha_vantage_api_key,
            base_url=settings.alpha_vantage_base_url,
            timeout=settings.market_data_timeout,
        )
        if observability is None:
            observability = (
                LangfuseObservabilityHandler()
                if settings.tracing_enabled
                else NullObservabilityHandler()
            )
        self.observability = observability
        self._analyze: Optional[AnalyzeStockUseCase] = None
        self._research: Optional[ResearchAssetUseCase] = None
        self._market = GetMarketDataUseCase(self.market_data)

    def language_model(self) -> ILanguageModel:
        """Return the language model, failing fast when credentials are missing.

        The credential lookup runs once per container; the Bedrock chain may block
        on the instance metadata endpoint.
        """
        if self._credentials_ok is None:
            self._credentials_ok = has_credentials(self.settings)
        if not self._credentials_ok:
            raise ConfigurationError()
        if self._llm is None:
            self._llm = build_language_model(self.settings)
        return self._llm

    def analyze_stock(self) -> AnalyzeStockUseCase:
        llm = self.language_model()
        if self._analyze is None:
            graph = build_analysis_graph(
                InputValidator(llm), SymbolResolver(llm), StockProfileProvider(llm)
            )
            self._analyze = AnalyzeStockUseCase(graph, self.observability)
        return self._analyze

    def research_asset(self) -> ResearchAssetUseCase:
        llm = self.language_model()
        if self._research is None:
            signal_model = (
                self.settings.llm_signal_model if self.settings.llm_provider == "openai" else None
            )
            graph = build_research_graph(llm, self.market_data, signal_model=signal_model)
            self._research = ResearchAssetUseCase(graph, self.observability)
        return self._research

    def market(self) -> GetMarketDataUseCase:
        return self._market


class AnalysisBody(BaseModel):
    symbol: Optional[str] = None
    query: Optional[str] = None


class ResearchBody(AnalysisBody):
    type: str = "stock"


def _error_response(exc: StockAnalyzerError) -> JSONResponse:
    body: dict = {"error": exc.message}
    if exc.is_rate_limit:
        body["isRateLimit"] = True
    if exc.details and exc.status_code >= 500:
        body["details"] = exc.details
    return JSONResponse(body, status_code=exc.status_code)


def _unexpected_error(message: str, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": message, "details": str(exc)}, status_code=500)


def create_app(
    settings: Optional[Settings] = None,
    llm: Optional[ILanguageModel] = None,
    market_data: Optional[IMarketDataProvider] = None,
    observability: Optional[IObservabilityHandler] = None,
) -> FastAPI:
    """Build the FastAPI app.

    Args:
        settings:      Explicit settings; when omitted the environment is
                       bootstrapped and read via Settings.from_env().
        llm:           Optional ILanguageModel (credentials are still checked).
        market_data:   Optional IMarketDataProvider; defaults to Alpha Vantage.
        observability: Optional IObservabilityHandler; defaults from settings.
    """
    if settings is None:
        bootstrap_environment()
        settings = Settings.from_env()
        configure_logging(settings.log_level)

    container = ServiceContainer(settings, llm, market_data, observability)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        container.observability.flush()

    app = FastAPI(title="AI Stock Analyzer API", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            {"error": "Invalid request body", "details": str(exc.errors())},
            status_code=400,
        )

    @app.post("/analysis")
    @app.post("/api/stock-analysis")
    async def analyze_stock(body: AnalysisBody):
        """Validate, identify and profile a stock; answer with the full analysis payload."""
        try:
            request = AnalysisRequest(raw_query=body.query, explicit_symbol=body.symbol)
            require_user_input(request)
            response = await container.analyze_stock().execute(request)
        except StockAnalyzerError as exc:
            return _error_response(exc)
        except Exception as exc:
            logger.exception("Stock analysis error")
            return _unexpected_error("Failed to generate analysis. Please try again.", exc)
        return analysis_payload(response)

    @app.post("/research")
    @app.post("/api/ai-research")
    async def research_asset(body: ResearchBody):
        """Market data + news + two generation calls → research report with signals."""
        try:
            require_research_input(body.symbol, body.query)
            report = await container.research_asset().execute(
                body.symbol, body.query, body.type
            )
        except StockAnalyzerError as exc:
            return _error_response(exc)
        except Exception as exc:
            logger.exception("AI Research error")
            return _unexpected_error("Failed to generate research. Please try again.", exc)
        return to_payload(report)

    @app.get("/market-data")
    @app.get("/api/stock-data")
    async def market_data_route(symbol: Optional[str] = None, function: str = "GLOBAL_QUOTE"):
        try:
            result = await container.market().execute(symbol, function)
        except StockAnalyzerError as exc:
            return _error_response(exc)
        except Exception as exc:
            logger.exception("Error fetching stock data")
            return _unexpected_error(
                "Failed to fetch stock data. Please check your internet connection and try again.",
                exc,
            )
        return to_payload(result)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def main() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))


app = create_app()


if __name__ == "__main__":
    main()
