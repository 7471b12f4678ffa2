"""
Domain dataclasses → JSON-ready dicts with camelCase keys.

Only dataclass field names are converted; plain dicts (raw provider records
such as the Global Quote) keep their upstream keys.
Trading signals leave out unset optional fields (a rule-based signal has no
stop loss) instead of sending null.
"""

import dataclasses
from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel

from stock_analyzer.domain.entities.market_data import TradingSignal
from stock_analyzer.domain.entities.stock_profile import AnalysisResponse

# None-valued fields of these types are omitted from the payload.
SPARSE_TYPES = (TradingSignal,)


def to_payload(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        sparse = isinstance(value, SPARSE_TYPES)
        return {
            to_camel(f.name): to_payload(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if not (sparse and getattr(value, f.name) is None)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    if isinstance(value, dict):
        return {key: to_payload(item) for key, item in value.items()}
    return value


def analysis_payload(response: AnalysisResponse) -> dict[str, Any]:
    """Flatten the profile into the top level alongside the response extras."""
    payload = to_payload(response.profile)
    payload.update(
        chartData=to_payload(response.chart_data),
        timestamp=response.timestamp,
        source=response.source,
        disclaimer=response.disclaimer,
        dataFreshness=response.data_freshness,
    )
    return payload
