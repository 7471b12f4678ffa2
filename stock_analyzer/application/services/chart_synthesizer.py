"""
Application service: synthetic 20-day price/volume series for the chart widget.

A bounded random walk over the business days of the last 20 calendar days,
starting from the implied previous close and pinned to the headline price on
the final point.
"""

import math
import random
from datetime import date, timedelta
from types import MappingProxyType
from typing import Optional

from stock_analyzer.domain.entities.stock_profile import ChartPoint

WINDOW_DAYS = 20

HIGH_VOLATILITY = frozenset({"TSLA", "NVDA", "AMD", "COIN", "PLTR", "SNOW"})
LOW_VOLATILITY = frozenset({"AAPL", "MSFT", "GOOGL", "JNJ", "PG", "KO"})

BASE_VOLUMES = MappingProxyType(
    {
        "AAPL": 50_000_000,
        "TSLA": 80_000_000,
        "NVDA": 45_000_000,
        "MSFT": 30_000_000,
        "GOOGL": 25_000_000,
        "AMZN": 35_000_000,
        "META": 40_000_000,
        "AMD": 60_000_000,
        "NFLX": 15_000_000,
        "COIN": 25_000_000,
    }
)
DEFAULT_BASE_VOLUME = 20_000_000

TREND_BIAS = 0.001
PRICE_FLOOR = 0.7
PRICE_CEILING = 1.3


def volatility_for(ticker: str) -> float:
    if ticker in HIGH_VOLATILITY:
        return 0.035
    if ticker in LOW_VOLATILITY:
        return 0.015
    return 0.025


def base_volume_for(ticker: str) -> int:
    return BASE_VOLUMES.get(ticker, DEFAULT_BASE_VOLUME)


def _to_cents(price: float, floor: float, ceiling: float) -> float:
    """Round to cents without leaving the clamp band."""
    return min(
        max(round(price, 2), math.ceil(floor * 100) / 100),
        math.floor(ceiling * 100) / 100,
    )


def synthesize(
    current_price: float,
    daily_change: float,
    ticker: str,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> list[ChartPoint]:
    """Generate chronologically ascending business-day chart points.

    Args:
        current_price: Authoritative headline price; the last point equals it exactly.
        daily_change:  Today's absolute change, used to back out yesterday's close.
        ticker:        Selects the volatility class and the base volume.
        today:         Last calendar day of the window (defaults to date.today()).
        rng:           Random source; pass a seeded random.Random for reproducible output.
    """
    today = today or date.today()
    rng = rng or random.Random()
    volatility = volatility_for(ticker)
    base_volume = base_volume_for(ticker)
    floor = current_price * PRICE_FLOOR
    ceiling = current_price * PRICE_CEILING

    price = current_price - daily_change
    points: list[ChartPoint] = []
    for days_back in range(WINDOW_DAYS - 1, -1, -1):
        day = today - timedelta(days=days_back)
        if day.weekday() >= 5:
            continue

        # older half drifts up, recent half drifts down
        trend = TREND_BIAS if days_back >= WINDOW_DAYS // 2 else -TREND_BIAS
        price += rng.uniform(-0.5, 0.5) * volatility * price + price * trend
        price = min(max(price, floor), ceiling)

        points.append(
            ChartPoint(
                date=day.isoformat(),
                price=_to_cents(price, floor, ceiling),
                volume=math.floor(base_volume * rng.uniform(0.5, 1.5)),
            )
        )

    if points:
        last = points[-1]
        points[-1] = ChartPoint(date=last.date, price=current_price, volume=last.volume)
    return points
