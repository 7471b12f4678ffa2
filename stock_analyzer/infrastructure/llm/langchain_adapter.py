"""
Infrastructure adapter base: LangChain chat model → ILanguageModel.

Subclasses only decide how to construct the provider's chat model for a given
(model, temperature, max_tokens) triple. Constructed models are cached per
triple; they hold connection pools, not request state.
"""

from abc import abstractmethod
from typing import Any, Optional

from langchain_core.messages import HumanMessage

from stock_analyzer.domain.errors import LanguageModelError
from stock_analyzer.domain.ports.llm_port import ILanguageModel


def message_text(message: Any) -> str:
    """Flatten an AIMessage's content (plain string or list of content blocks)."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class LangChainChatAdapter(ILanguageModel):
    provider_name: str = "langchain"

    def __init__(self, default_model: str, _runnable: Any = None) -> None:
        """
        Args:
            default_model: Model used when generate() gets no override.
            _runnable:     Optional pre-configured Runnable used for every call
                           regardless of parameters (tests, custom chains).
        """
        self._default_model = default_model
        self._runnable = _runnable
        self._models: dict[tuple[str, float, int], Any] = {}

    @abstractmethod
    def _build_chat_model(self, model: str, temperature: float, max_tokens: int) -> Any: ...

    def _chat_model(self, model: str, temperature: float, max_tokens: int) -> Any:
        if self._runnable is not None:
            return self._runnable
        key = (model, temperature, max_tokens)
        if key not in self._models:
            self._models[key] = self._build_chat_model(model, temperature, max_tokens)
        return self._models[key]

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        model: Optional[str] = None,
    ) -> str:
        chat_model = self._chat_model(model or self._default_model, temperature, max_tokens)
        try:
            response = await chat_model.ainvoke([HumanMessage(content=prompt)])
        except Exception as exc:
            raise LanguageModelError(f"{self.provider_name} generation failed: {exc}") from exc
        return message_text(response)
