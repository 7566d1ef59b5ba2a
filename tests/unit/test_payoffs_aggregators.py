"""
Tests for payoff and aggregator strategies.

Payoffs: options/payoffs/base.py
Aggregators: options/payoffs/aggregators.py
"""

import math

import numpy as np
import pytest

from path_pricing.errors import InvalidArgumentError
from path_pricing.options.payoffs.aggregators import (
    AggregatorType,
    ArithmeticMean,
    BaseAggregator,
    GeometricMean,
    RunningMax,
    RunningMin,
    get_aggregator,
)
from path_pricing.options.payoffs.base import (
    PayoffType,
    get_payoff,
    payoff_call,
    payoff_digital_call,
    payoff_digital_put,
    payoff_put,
)


# =============================================================================
# Payoffs
# =============================================================================

@pytest.mark.unit
class TestPayoffValues:
    """[T1] Payoff formulas with the aggregate as strike."""

    @pytest.mark.parametrize(
        "func, spot, strike, expected",
        [
            (payoff_call, 110.0, 100.0, 10.0),
            (payoff_call, 90.0, 100.0, 0.0),
            (payoff_put, 90.0, 100.0, 10.0),
            (payoff_put, 110.0, 100.0, 0.0),
            (payoff_digital_call, 100.5, 100.0, 1.0),
            (payoff_digital_call, 100.0, 100.0, 0.0),
            (payoff_digital_put, 99.5, 100.0, 1.0),
            (payoff_digital_put, 100.0, 100.0, 0.0),
        ],
    )
    def test_payoff(self, func, spot: float, strike: float, expected: float) -> None:
        assert func(spot, strike) == expected

    def test_zero_strike_allowed(self) -> None:
        assert payoff_call(5.0, 0.0) == 5.0

    @pytest.mark.parametrize(
        "func", [payoff_call, payoff_put, payoff_digital_call, payoff_digital_put]
    )
    def test_negative_strike_raises(self, func) -> None:
        with pytest.raises(InvalidArgumentError, match="strike must be >= 0"):
            func(100.0, -1.0)


@pytest.mark.unit
class TestGetPayoff:
    """Payoff resolution from enum, string or callable."""

    def test_from_enum(self) -> None:
        assert get_payoff(PayoffType.CALL) is payoff_call

    def test_from_string(self) -> None:
        assert get_payoff("digital_put") is payoff_digital_put

    def test_callable_passthrough(self) -> None:
        def custom(spot: float, strike: float) -> float:
            return spot - strike

        assert get_payoff(custom) is custom

    def test_unknown_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Available"):
            get_payoff("straddle")


# =============================================================================
# Aggregators
# =============================================================================

@pytest.mark.unit
class TestAggregatorUpdates:
    """[T1] Running-statistic updates with 1-based step index."""

    def test_arithmetic_update(self) -> None:
        # mean of (100, 110) after step 1
        assert ArithmeticMean().update(100.0, 110.0, 1.0) == pytest.approx(105.0)
        # mean of (100, 110, 120) after step 2
        assert ArithmeticMean().update(105.0, 120.0, 2.0) == pytest.approx(110.0)

    def test_geometric_update(self) -> None:
        assert GeometricMean().update(100.0, 400.0, 1.0) == pytest.approx(200.0)

    def test_max_min_update(self) -> None:
        assert RunningMax().update(100.0, 90.0, 1.0) == 100.0
        assert RunningMax().update(100.0, 120.0, 1.0) == 120.0
        assert RunningMin().update(100.0, 90.0, 1.0) == 90.0
        assert RunningMin().update(100.0, 120.0, 1.0) == 100.0

    def test_means_include_initial_spot(self) -> None:
        prices = np.array([110.0, 120.0])

        assert ArithmeticMean().reduce_path(100.0, prices) == pytest.approx(110.0)
        assert GeometricMean().reduce_path(100.0, prices) == pytest.approx(
            (100.0 * 110.0 * 120.0) ** (1.0 / 3.0)
        )

    def test_extrema_include_initial_spot(self) -> None:
        prices = np.array([110.0, 120.0])

        assert RunningMin().reduce_path(100.0, prices) == 100.0
        assert RunningMax().reduce_path(130.0, prices) == 130.0

    def test_geometric_long_path_does_not_overflow(self) -> None:
        prices = np.full(10_000, 1e5)
        result = GeometricMean().reduce_path(1e5, prices)

        assert math.isfinite(result)
        assert result == pytest.approx(1e5)

    def test_lookback_flags(self) -> None:
        assert RunningMax.is_lookback and RunningMin.is_lookback
        assert not ArithmeticMean.is_lookback and not GeometricMean.is_lookback


@pytest.mark.unit
class TestDefaultReducePath:
    """A subclass that only implements update() gets the scalar fold."""

    def test_fold_passes_one_based_steps(self) -> None:
        seen = []

        class Recorder(BaseAggregator):
            def update(self, aggregate: float, price: float, step: float) -> float:
                seen.append(step)
                return aggregate + price

        result = Recorder().reduce_path(1.0, np.array([2.0, 3.0, 4.0]))

        assert result == 10.0
        assert seen == [1.0, 2.0, 3.0]

    def test_fold_passes_explicit_schedule(self) -> None:
        seen = []

        class Recorder(BaseAggregator):
            def update(self, aggregate: float, price: float, step: float) -> float:
                seen.append(step)
                return aggregate + price

        Recorder().reduce_path(0.0, np.array([1.0, 1.0, 1.0]), np.array([0.5, 0.5, 1.0]))

        assert seen == [0.5, 0.5, 1.0]

    def test_schedule_length_mismatch_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="steps length"):
            BaseAggregator.reduce_path(
                RunningMax(), 100.0, np.array([1.0, 2.0]), np.array([1.0])
            )

    @pytest.mark.parametrize("aggregator", [ArithmeticMean(), GeometricMean()])
    def test_mean_with_schedule_uses_fold(self, aggregator) -> None:
        prices = np.array([110.0, 120.0])
        steps = np.array([1.0, 2.0])

        assert aggregator.reduce_path(100.0, prices, steps) == pytest.approx(
            aggregator.reduce_path(100.0, prices)
        )


@pytest.mark.unit
class TestGetAggregator:
    """Aggregator resolution."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            (AggregatorType.ARITHMETIC, ArithmeticMean),
            ("geometric", GeometricMean),
            ("maximum", RunningMax),
            (AggregatorType.MINIMUM, RunningMin),
        ],
    )
    def test_resolves(self, name, expected) -> None:
        assert isinstance(get_aggregator(name), expected)

    def test_instance_passthrough(self) -> None:
        agg = RunningMin()
        assert get_aggregator(agg) is agg

    def test_unknown_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="unknown aggregator"):
            get_aggregator("median")
