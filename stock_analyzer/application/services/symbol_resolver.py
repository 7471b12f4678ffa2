"""
Application service: map free-text input to a ticker and company name.

Primary path asks the language model for strict JSON. When that call fails,
returns something unparseable, or reports the input as unidentified, the
static lookup table below is consulted by uppercase substring containment in
table order.
"""

import logging
from types import MappingProxyType
from typing import Optional

from stock_analyzer.application.prompts import IDENTIFICATION_PROMPT
from stock_analyzer.application.services.json_extraction import extract_json_object
from stock_analyzer.domain.entities.stock_profile import ResolvedSymbol
from stock_analyzer.domain.errors import LanguageModelError, SymbolNotIdentifiedError
from stock_analyzer.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)

# Insertion order is the match order.
FALLBACK_SYMBOLS = MappingProxyType(
    {
        "TESLA": ("TSLA", "Tesla Inc"),
        "TSLA": ("TSLA", "Tesla Inc"),
        "APPLE": ("AAPL", "Apple Inc"),
        "AAPL": ("AAPL", "Apple Inc"),
        "MICROSOFT": ("MSFT", "Microsoft Corporation"),
        "MSFT": ("MSFT", "Microsoft Corporation"),
        "GOOGLE": ("GOOGL", "Alphabet Inc"),
        "GOOGL": ("GOOGL", "Alphabet Inc"),
        "ALPHABET": ("GOOGL", "Alphabet Inc"),
        "NVIDIA": ("NVDA", "NVIDIA Corporation"),
        "NVDA": ("NVDA", "NVIDIA Corporation"),
        "AMAZON": ("AMZN", "Amazon.com Inc"),
        "AMZN": ("AMZN", "Amazon.com Inc"),
        "META": ("META", "Meta Platforms Inc"),
        "FACEBOOK": ("META", "Meta Platforms Inc"),
        "NETFLIX": ("NFLX", "Netflix Inc"),
        "NFLX": ("NFLX", "Netflix Inc"),
    }
)


def lookup_fallback(raw_query: str) -> Optional[ResolvedSymbol]:
    """Return the first table entry whose key occurs in the uppercased query."""
    upper = raw_query.upper()
    for key, (ticker, company_name) in FALLBACK_SYMBOLS.items():
        if key in upper:
            return ResolvedSymbol(
                ticker=ticker, company_name=company_name, resolved=True, source="lookup"
            )
    return None


class SymbolResolver:
    TEMPERATURE: float = 0.1
    MAX_TOKENS: int = 100

    def __init__(self, llm: ILanguageModel) -> None:
        self._llm = llm

    async def resolve(self, raw_query: str) -> ResolvedSymbol:
        """Identify the security named in *raw_query*.

        Raises:
            SymbolNotIdentifiedError: neither the model nor the lookup table
                                      recognised a security.
        """
        resolved = await self._ask_model(raw_query)
        if resolved is None:
            resolved = lookup_fallback(raw_query)
            if resolved is not None:
                logger.info("Used fallback identification: %s", resolved)
        if resolved is None:
            raise SymbolNotIdentifiedError()
        return resolved

    async def _ask_model(self, raw_query: str) -> Optional[ResolvedSymbol]:
        try:
            text = await self._llm.generate(
                IDENTIFICATION_PROMPT.format(user_input=raw_query),
                temperature=self.TEMPERATURE,
                max_tokens=self.MAX_TOKENS,
            )
        except LanguageModelError as exc:
            logger.warning("Symbol identification call failed: %s", exc)
            return None

        logger.debug("Raw identification response: %s", text)
        try:
            payload = extract_json_object(text)
        except ValueError as exc:
            logger.warning("Failed to parse identification response %r: %s", text, exc)
            return None

        symbol = str(payload.get("symbol") or "").strip().upper()
        if payload.get("identified") is not True or not symbol or symbol == "UNKNOWN":
            return None
        company_name = str(payload.get("companyName") or symbol).strip()
        return ResolvedSymbol(ticker=symbol, company_name=company_name, resolved=True)
