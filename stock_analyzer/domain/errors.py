"""
Domain error taxonomy.
Zero external dependencies.

Each error carries the HTTP status the entrypoint should answer with and a
user-readable message. Anything that is not a StockAnalyzerError is treated as
unexpected by the entrypoint and reported as a generic 500.
"""


class StockAnalyzerError(Exception):
    status_code: int = 500
    default_message: str = "Unexpected error."
    is_rate_limit: bool = False

    def __init__(self, message: str | None = None, details: str | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message if details is None else f"{self.message} ({details})")


class ConfigurationError(StockAnalyzerError):
    status_code = 500
    default_message = "Language model API key not configured"


class InvalidInputError(StockAnalyzerError):
    status_code = 400
    default_message = "Please enter a valid stock name or company for analysis."


class SymbolNotIdentifiedError(InvalidInputError):
    default_message = (
        "Could not identify the stock. Please enter a valid stock symbol or company name."
    )


class InvalidSymbolError(StockAnalyzerError):
    status_code = 400
    default_message = (
        "Invalid symbol or API error. Please check the stock symbol and try again."
    )


class NoMarketDataError(StockAnalyzerError):
    status_code = 404
    default_message = (
        "No data available for this symbol. Please check the symbol and try again."
    )


class RateLimitError(StockAnalyzerError):
    status_code = 429
    default_message = "API rate limit reached. Please wait a moment and try again."
    is_rate_limit = True


class MarketDataUnavailableError(StockAnalyzerError):
    status_code = 500
    default_message = (
        "Failed to fetch stock data. Please check your internet connection and try again."
    )


class LanguageModelError(Exception):
    """Raised by language model adapters when the upstream generation call fails."""
