"""
Application service: decide whether free-text input is worth analysing.

Classification is delegated to the language model with a deliberately
permissive prompt; only an exact "INVALID" reply rejects the input. There is
no local fallback, so upstream failures propagate to the caller.
"""

import logging
from dataclasses import dataclass

from stock_analyzer.application.prompts import VALIDATION_PROMPT
from stock_analyzer.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    label: str


class InputValidator:
    TEMPERATURE: float = 0.1
    MAX_TOKENS: int = 10

    def __init__(self, llm: ILanguageModel) -> None:
        self._llm = llm

    async def validate(self, raw_query: str) -> ValidationResult:
        reply = await self._llm.generate(
            VALIDATION_PROMPT.format(user_input=raw_query),
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        label = reply.strip().upper()
        logger.info("Validation for %r: %s", raw_query, label)
        return ValidationResult(valid=label != "INVALID", label=label)
