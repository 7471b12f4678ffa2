"""Tests for loading a JSON secret into the process environment."""

from __future__ import annotations

import json
import os

from stock_analyzer.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter


class StubSecretsClient:
    def __init__(self, secret: dict) -> None:
        self.secret = secret
        self.requested: list[str] = []

    def get_secret_value(self, SecretId: str) -> dict:
        self.requested.append(SecretId)
        return {"SecretString": json.dumps(self.secret)}


def test_get_secret() -> None:
    client = StubSecretsClient({"OPENAI_API_KEY": "sk-secret"})
    adapter = SecretsManagerAdapter(client=client)
    assert adapter.get_secret("arn:secret") == {"OPENAI_API_KEY": "sk-secret"}
    assert client.requested == ["arn:secret"]


def test_load_into_env_keeps_existing_values(monkeypatch) -> None:
    monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "from-shell")
    monkeypatch.delenv("LANGFUSE_PUBLIC_KEY", raising=False)
    client = StubSecretsClient({"ALPHA_VANTAGE_API_KEY": "from-secret", "LANGFUSE_PUBLIC_KEY": "pk"})
    SecretsManagerAdapter(client=client).load_into_env("arn:secret")

    assert os.environ["ALPHA_VANTAGE_API_KEY"] == "from-shell"
    assert os.environ["LANGFUSE_PUBLIC_KEY"] == "pk"
