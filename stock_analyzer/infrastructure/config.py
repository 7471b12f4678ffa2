"""
Process configuration read from environment variables.

The entrypoint calls load_dotenv() (and, when SECRETS_ARN is set, loads the
secret into os.environ) before Settings.from_env() runs, so values may come
from the shell, a local .env file, or AWS Secrets Manager.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

LLM_PROVIDERS = ("openai", "bedrock")


def _float(value: Optional[str], default: float) -> float:
    return float(value) if value else default


@dataclass(frozen=True)
class Settings:
    llm_provider: str = "openai"
    openai_api_key: Optional[str] = None
    llm_model: str = "gpt-4"
    llm_signal_model: str = "gpt-3.5-turbo"
    bedrock_model_id: str = "us.amazon.nova-pro-v1:0"
    aws_region: str = "us-east-1"
    alpha_vantage_api_key: str = "demo"
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"
    market_data_timeout: float = 10.0
    langfuse_public_key: Optional[str] = None
    langfuse_secret_key: Optional[str] = None
    secrets_arn: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls(
            llm_provider=env.get("LLM_PROVIDER", "openai").strip().lower(),
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            llm_model=env.get("LLM_MODEL", cls.llm_model),
            llm_signal_model=env.get("LLM_SIGNAL_MODEL", cls.llm_signal_model),
            bedrock_model_id=env.get("BEDROCK_MODEL_ID", cls.bedrock_model_id),
            aws_region=env.get("AWS_DEFAULT_REGION", cls.aws_region),
            alpha_vantage_api_key=env.get("ALPHA_VANTAGE_API_KEY") or cls.alpha_vantage_api_key,
            alpha_vantage_base_url=env.get("ALPHA_VANTAGE_BASE_URL", cls.alpha_vantage_base_url),
            market_data_timeout=_float(env.get("MARKET_DATA_TIMEOUT"), cls.market_data_timeout),
            langfuse_public_key=env.get("LANGFUSE_PUBLIC_KEY") or None,
            langfuse_secret_key=env.get("LANGFUSE_SECRET_KEY") or None,
            secrets_arn=env.get("SECRETS_ARN") or None,
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise ``ValueError`` on settings that can never work."""
        if self.llm_provider not in LLM_PROVIDERS:
            raise ValueError(
                f"LLM_PROVIDER must be one of {LLM_PROVIDERS}, got {self.llm_provider!r}"
            )
        if self.market_data_timeout <= 0:
            raise ValueError(
                f"MARKET_DATA_TIMEOUT must be > 0, got {self.market_data_timeout}"
            )

    @property
    def tracing_enabled(self) -> bool:
        return bool(self.langfuse_public_key and self.langfuse_secret_key)
