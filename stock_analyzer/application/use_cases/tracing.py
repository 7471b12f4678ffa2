"""
Shared run-config builder for the LangGraph pipelines.
"""

from stock_analyzer.domain.ports.observability_port import IObservabilityHandler


def graph_config(observability: IObservabilityHandler, tag: str) -> dict:
    callback = observability.as_callback()
    return {
        "callbacks": [callback] if callback is not None else [],
        "metadata": {"langfuse_tags": [tag]},
    }
