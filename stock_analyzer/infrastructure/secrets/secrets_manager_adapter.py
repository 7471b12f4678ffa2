"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() runs once at process startup, before Settings.from_env() and
before any SDK that reads LANGFUSE_* or OPENAI_API_KEY, so one JSON secret can
carry every credential the service needs.
"""

import json
import logging
import os

import boto3

from stock_analyzer.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_arn: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN."""
        response = self._client.get_secret_value(SecretId=secret_arn)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_arn: str) -> None:
        """Inject all key-value pairs of a JSON secret into os.environ.

        Variables already set in the environment are left untouched.
        """
        secrets = self.get_secret(secret_arn)
        for key, value in secrets.items():
            os.environ.setdefault(key, str(value))
        logger.info("Loaded %d secret value(s) into the environment", len(secrets))
