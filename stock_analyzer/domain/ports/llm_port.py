"""
Port (interface) for text-generation providers.
Infrastructure adapters (e.g. OpenAIChatAdapter, BedrockChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ILanguageModel(ABC):
    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        model: Optional[str] = None,
    ) -> str:
        """Send a single user prompt and return the generated text.

        Args:
            prompt:      Complete prompt text.
            temperature: Sampling temperature for this call.
            max_tokens:  Upper bound on generated tokens.
            model:       Optional model override; the adapter default is used otherwise.

        Raises:
            LanguageModelError: if the upstream call fails.
        """
        ...
