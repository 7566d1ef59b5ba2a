"""
Validation: reference scenarios for the lookback Monte Carlo estimators.

Standard market: S0=100, R=5%, σ=20%, T0=0, T=1, 10,000 paths, 50 steps,
seed 42.

[T1] Floating-strike lookbacks have no put-call parity, so none is asserted.
"""

import math

import pytest

from path_pricing.config.tolerances import ANTITHETIC_AGREEMENT_SIGMAS
from path_pricing.errors import InvalidArgumentError
from path_pricing.options.payoffs.aggregators import RunningMax
from path_pricing.options.payoffs.base import payoff_put
from path_pricing.options.simulation.brownian_bridge import price_bridge_asymptotic

N_PATHS = 10_000
N_STEPS = 50
SEED = 42


@pytest.mark.validation
class TestLookbackCallScenarios:
    """Scenarios on the lookback call (call payoff on running minimum)."""

    def test_plain_price_positive_in_ci(self, lookback_call) -> None:
        result = lookback_call.price_mc(N_PATHS, N_STEPS, SEED, antithetic=False)

        assert result.estimate > 0
        assert result.ci_low <= result.estimate <= result.ci_high

    def test_antithetic_close_with_smaller_se(self, lookback_call) -> None:
        plain = lookback_call.price_mc(N_PATHS, N_STEPS, SEED, antithetic=False)
        anti = lookback_call.price_mc(N_PATHS, N_STEPS, SEED, antithetic=True)

        assert abs(anti.estimate - plain.estimate) <= (
            ANTITHETIC_AGREEMENT_SIGMAS * plain.standard_error
        )
        assert anti.standard_error <= plain.standard_error

    def test_delta_finite_positive(self, lookback_call) -> None:
        result = lookback_call.delta_mc(N_PATHS, N_STEPS, SEED, rel_bump=1e-4)

        assert math.isfinite(result.estimate)
        assert result.estimate > 0

    def test_theta_bump_past_maturity_raises(self, lookback_call) -> None:
        with pytest.raises(InvalidArgumentError):
            lookback_call.theta_mc(N_PATHS, N_STEPS, SEED, bump=1.5)

    def test_zero_paths_raises(self, lookback_call) -> None:
        with pytest.raises(InvalidArgumentError):
            lookback_call.price_mc(0, N_STEPS, SEED)

    def test_single_path_se_undefined(self, lookback_call) -> None:
        result = lookback_call.price_mc(1, N_STEPS, SEED, antithetic=False)
        assert math.isnan(result.standard_error)


@pytest.mark.validation
class TestBridgeAsymptoticScenario:
    """Bridge reference on running-extremum lookbacks."""

    def test_lookback_put_on_running_max(self, market) -> None:
        value = price_bridge_asymptotic(market, payoff_put, RunningMax())

        assert math.isfinite(value)
        assert 0.0 < value < 2.0 * market.spot * market.discount_factor

    def test_lookback_call_on_running_min(self, lookback_call) -> None:
        value = lookback_call.price_bridge_asymptotic()

        assert math.isfinite(value)
        assert 0.0 < value < 2.0 * lookback_call.market.spot


@pytest.mark.validation
class TestVarianceReduction:
    """Antithetic SE <= plain SE for monotone lookback payoffs."""

    @pytest.mark.parametrize("fixture_name", ["lookback_call", "lookback_put"])
    def test_antithetic_reduces_se(self, request, fixture_name: str) -> None:
        option = request.getfixturevalue(fixture_name)

        plain = option.price_mc(N_PATHS, N_STEPS, SEED, antithetic=False)
        anti = option.price_mc(N_PATHS, N_STEPS, SEED, antithetic=True)

        assert anti.standard_error <= plain.standard_error
