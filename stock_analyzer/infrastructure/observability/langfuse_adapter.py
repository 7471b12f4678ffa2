"""
Infrastructure adapters → IObservabilityHandler.

Langfuse is imported lazily so the module loads even when LANGFUSE_* variables
are absent (local runs, tests). The entrypoint picks NullObservabilityHandler
unless both Langfuse keys are configured; secrets loaded from AWS Secrets
Manager must already be in os.environ when LangfuseObservabilityHandler is built.
"""

from typing import Any, Optional

from stock_analyzer.domain.ports.observability_port import IObservabilityHandler


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Wraps the Langfuse LangChain CallbackHandler."""

    def __init__(self) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()

    def as_callback(self) -> Any:
        """Return the Langfuse CallbackHandler for use in LangGraph run configs."""
        return self._handler

    def flush(self) -> None:
        """Flush pending traces to the Langfuse backend before the process exits."""
        from langfuse import get_client
        get_client().flush()


class NullObservabilityHandler(IObservabilityHandler):
    """Tracing disabled: no callback, nothing to flush."""

    def as_callback(self) -> Optional[Any]:
        return None

    def flush(self) -> None:
        pass
