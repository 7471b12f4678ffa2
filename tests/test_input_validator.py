"""Tests for the language-model backed input validator."""

from __future__ import annotations

import pytest

from stock_analyzer.application.services.input_validator import InputValidator
from stock_analyzer.domain.errors import LanguageModelError
from tests.helpers.fakes import VALIDATION, ScriptedLanguageModel


class TestInputValidator:

    @pytest.mark.asyncio
    async def test_greeting_is_invalid(self) -> None:
        llm = ScriptedLanguageModel({VALIDATION: "INVALID"})
        result = await InputValidator(llm).validate("hello")
        assert result.valid is False
        assert result.label == "INVALID"

    @pytest.mark.asyncio
    async def test_company_question_is_valid(self) -> None:
        llm = ScriptedLanguageModel({VALIDATION: "VALID"})
        result = await InputValidator(llm).validate("analyze Apple stock")
        assert result.valid is True

    @pytest.mark.asyncio
    async def test_label_is_trimmed_and_uppercased(self) -> None:
        llm = ScriptedLanguageModel({VALIDATION: "  invalid\n"})
        result = await InputValidator(llm).validate("how are you")
        assert result.valid is False

    @pytest.mark.asyncio
    async def test_anything_but_invalid_passes(self) -> None:
        llm = ScriptedLanguageModel({VALIDATION: "Probably VALID"})
        result = await InputValidator(llm).validate("TSLA")
        assert result.valid is True

    @pytest.mark.asyncio
    async def test_prompt_and_parameters(self) -> None:
        llm = ScriptedLanguageModel({VALIDATION: "VALID"})
        await InputValidator(llm).validate("Tesla stock")
        call = llm.calls[0]
        assert 'Input: "Tesla stock"' in call["prompt"]
        assert call["temperature"] == 0.1
        assert call["max_tokens"] == 10

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(self) -> None:
        llm = ScriptedLanguageModel({VALIDATION: LanguageModelError("timeout")})
        with pytest.raises(LanguageModelError):
            await InputValidator(llm).validate("Apple")
