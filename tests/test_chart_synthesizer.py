"""Tests for the synthetic chart series."""

from __future__ import annotations

import random
from datetime import date

import pytest

from stock_analyzer.application.services.chart_synthesizer import (
    base_volume_for,
    synthesize,
    volatility_for,
)

FRIDAY = date(2024, 6, 14)


class TestVolatilityAndVolume:

    @pytest.mark.parametrize(
        ("ticker", "expected"),
        [("TSLA", 0.035), ("COIN", 0.035), ("AAPL", 0.015), ("KO", 0.015), ("IBM", 0.025)],
    )
    def test_volatility_classes(self, ticker: str, expected: float) -> None:
        assert volatility_for(ticker) == expected

    def test_base_volume_default(self) -> None:
        assert base_volume_for("TSLA") == 80_000_000
        assert base_volume_for("XYZ") == 20_000_000


class TestSynthesize:

    def test_business_days_only_in_ascending_order(self) -> None:
        points = synthesize(248.5, 3.25, "TSLA", today=FRIDAY, rng=random.Random(1))
        dates = [date.fromisoformat(p.date) for p in points]
        assert dates == sorted(dates)
        assert len(set(dates)) == len(dates)
        assert all(d.weekday() < 5 for d in dates)
        # 2024-05-26 .. 2024-06-14 holds 15 weekdays
        assert len(points) == 15
        assert dates[0] == date(2024, 5, 27)
        assert dates[-1] == FRIDAY

    def test_window_never_exceeds_twenty_points(self) -> None:
        for offset in range(7):
            today = date(2024, 6, 10 + offset)
            assert len(synthesize(100.0, 1.0, "IBM", today=today)) <= 20

    def test_last_price_equals_current_price(self) -> None:
        for seed in range(25):
            points = synthesize(465.2, 8.75, "NVDA", today=FRIDAY, rng=random.Random(seed))
            assert points[-1].price == 465.2

    def test_last_point_on_weekend_run(self) -> None:
        sunday = date(2024, 6, 16)
        points = synthesize(189.84, 1.45, "AAPL", today=sunday, rng=random.Random(3))
        assert points[-1].date == "2024-06-14"
        assert points[-1].price == 189.84

    def test_prices_stay_within_band(self) -> None:
        current = 100.0
        for seed in range(50):
            # a huge daily change starts the walk far outside the band
            points = synthesize(current, -80.0, "TSLA", today=FRIDAY, rng=random.Random(seed))
            for point in points:
                assert 0.7 * current <= point.price <= 1.3 * current

    def test_volumes_are_integers_in_range(self) -> None:
        points = synthesize(415.26, 2.89, "MSFT", today=FRIDAY, rng=random.Random(7))
        for point in points:
            assert isinstance(point.volume, int)
            assert 15_000_000 <= point.volume <= 45_000_000

    def test_seeded_output_is_reproducible(self) -> None:
        first = synthesize(150.0, 1.25, "IBM", today=FRIDAY, rng=random.Random(42))
        second = synthesize(150.0, 1.25, "IBM", today=FRIDAY, rng=random.Random(42))
        assert first == second
