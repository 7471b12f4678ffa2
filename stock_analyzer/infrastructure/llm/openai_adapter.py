"""
Infrastructure adapter: OpenAI chat models (ChatOpenAI) → ILanguageModel.
All langchain_openai details are confined here.
"""

from typing import Any, Optional

from langchain_openai import ChatOpenAI

from stock_analyzer.infrastructure.llm.langchain_adapter import LangChainChatAdapter


class OpenAIChatAdapter(LangChainChatAdapter):
    """Wraps ChatOpenAI and exposes the ILanguageModel interface."""

    provider_name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "gpt-4",
        _runnable: Any = None,
    ) -> None:
        super().__init__(default_model=default_model, _runnable=_runnable)
        self._api_key = api_key

    def _build_chat_model(self, model: str, temperature: float, max_tokens: int) -> Any:
        return ChatOpenAI(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=self._api_key,
        )
