"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) → ILanguageModel.
All ChatBedrock / langchain_aws details are confined here.
"""

from typing import Any

from langchain_aws import ChatBedrock

from stock_analyzer.infrastructure.llm.langchain_adapter import LangChainChatAdapter


class BedrockChatAdapter(LangChainChatAdapter):
    """Wraps ChatBedrock and exposes the ILanguageModel interface."""

    provider_name = "bedrock"
    MODEL_ID = "us.amazon.nova-pro-v1:0"

    def __init__(
        self,
        region_name: str = "us-east-1",
        default_model: str = MODEL_ID,
        _runnable: Any = None,
    ) -> None:
        super().__init__(default_model=default_model, _runnable=_runnable)
        self._region_name = region_name

    def _build_chat_model(self, model: str, temperature: float, max_tokens: int) -> Any:
        return ChatBedrock(
            model=model,
            model_kwargs={"temperature": temperature, "max_tokens": max_tokens},
            region_name=self._region_name,
        )
