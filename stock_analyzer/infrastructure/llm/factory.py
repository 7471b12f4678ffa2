"""
Language model factory: Settings → ILanguageModel.

has_credentials() is checked by the entrypoint before any upstream call so a
missing key fails fast with a configuration error instead of a provider error.
For Bedrock it walks the boto3 credential chain, which may hit the network, so
callers on the request path should check once and keep the result.
"""

import boto3

from stock_analyzer.domain.ports.llm_port import ILanguageModel
from stock_analyzer.infrastructure.config import Settings


def has_credentials(settings: Settings) -> bool:
    if settings.llm_provider == "bedrock":
        return boto3.Session(region_name=settings.aws_region).get_credentials() is not None
    return bool(settings.openai_api_key)


def build_language_model(settings: Settings) -> ILanguageModel:
    """Build the configured adapter without checking credentials."""
    if settings.llm_provider == "bedrock":
        from stock_analyzer.infrastructure.llm.bedrock_adapter import BedrockChatAdapter

        return BedrockChatAdapter(
            region_name=settings.aws_region, default_model=settings.bedrock_model_id
        )

    from stock_analyzer.infrastructure.llm.openai_adapter import OpenAIChatAdapter

    return OpenAIChatAdapter(api_key=settings.openai_api_key, default_model=settings.llm_model)

