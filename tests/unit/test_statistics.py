"""
Tests for streaming statistics - options/simulation/statistics.py.

Verifies the Welford accumulator, the parallel combine() and the MCStats
confidence interval.

[T1] Welford (1962), Chan, Golub & LeVeque (1979)
"""

import math

import numpy as np
import pytest

from path_pricing.config.tolerances import CI_Z_SCORE_95
from path_pricing.options.simulation.statistics import MCStats, RunningStats


# =============================================================================
# RunningStats
# =============================================================================

@pytest.mark.unit
class TestRunningStatsPush:
    """Welford push matches batch statistics."""

    def test_small_sample(self) -> None:
        stats = RunningStats()
        stats.push_many([1.0, 2.0, 3.0, 4.0])

        assert stats.count == 4
        assert stats.mean == pytest.approx(2.5)
        assert stats.sample_variance == pytest.approx(np.var([1, 2, 3, 4], ddof=1))
        assert stats.standard_error == pytest.approx(math.sqrt(stats.sample_variance / 4))

    def test_matches_numpy_on_random_sample(self, reproducible_rng) -> None:
        values = reproducible_rng.normal(10.0, 3.0, size=5_000)
        stats = RunningStats()
        stats.push_many(values)

        assert stats.mean == pytest.approx(values.mean(), rel=1e-12)
        assert stats.sample_variance == pytest.approx(values.var(ddof=1), rel=1e-10)

    def test_large_offset_is_stable(self) -> None:
        """Variance of values around 1e9 must not be lost to cancellation."""
        stats = RunningStats()
        stats.push_many([1e9 + 4.0, 1e9 + 7.0, 1e9 + 13.0, 1e9 + 16.0])

        assert stats.sample_variance == pytest.approx(30.0, rel=1e-6)

    def test_constant_samples_have_zero_se(self) -> None:
        stats = RunningStats()
        stats.push_many([5.0] * 10)

        assert stats.standard_error == 0.0


@pytest.mark.unit
class TestRunningStatsSmallCounts:
    """Edge cases with zero or one sample."""

    def test_empty_estimate_is_nan(self) -> None:
        result = RunningStats().to_stats()

        assert math.isnan(result.estimate)
        assert math.isnan(result.standard_error)
        assert result.n_samples == 0

    def test_single_sample_se_is_nan(self) -> None:
        stats = RunningStats()
        stats.push(3.5)
        result = stats.to_stats()

        assert result.estimate == 3.5
        assert math.isnan(result.standard_error)
        assert math.isnan(result.ci_low)
        assert math.isnan(result.ci_high)


@pytest.mark.unit
class TestRunningStatsCombine:
    """combine() equals sequential accumulation up to rounding."""

    def test_combine_matches_sequential(self, reproducible_rng) -> None:
        values = reproducible_rng.exponential(2.0, size=1_001)

        left, right, whole = RunningStats(), RunningStats(), RunningStats()
        left.push_many(values[:400])
        right.push_many(values[400:])
        whole.push_many(values)

        merged = left.combine(right)

        assert merged.count == whole.count
        assert merged.mean == pytest.approx(whole.mean, rel=1e-12)
        assert merged.m2 == pytest.approx(whole.m2, rel=1e-10)

    def test_combine_does_not_mutate_inputs(self) -> None:
        left, right = RunningStats(), RunningStats()
        left.push_many([1.0, 2.0])
        right.push_many([10.0])

        left.combine(right)

        assert (left.count, left.mean) == (2, 1.5)
        assert (right.count, right.mean) == (1, 10.0)

    @pytest.mark.parametrize("empty_side", ["left", "right"])
    def test_combine_with_empty(self, empty_side: str) -> None:
        full = RunningStats()
        full.push_many([1.0, 4.0, 9.0])
        empty = RunningStats()

        merged = empty.combine(full) if empty_side == "left" else full.combine(empty)

        assert merged == full
        assert merged is not full

    def test_combine_is_order_independent(self) -> None:
        a, b, c = RunningStats(), RunningStats(), RunningStats()
        a.push_many([1.0, 2.0])
        b.push_many([3.0, 5.0, 8.0])
        c.push_many([13.0])

        ab_c = a.combine(b).combine(c)
        a_bc = a.combine(b.combine(c))

        assert ab_c.mean == pytest.approx(a_bc.mean, rel=1e-14)
        assert ab_c.m2 == pytest.approx(a_bc.m2, rel=1e-12)


# =============================================================================
# MCStats
# =============================================================================

@pytest.mark.unit
class TestMCStats:
    """Immutable result bundle."""

    def test_from_mean_interval(self) -> None:
        result = MCStats.from_mean(10.0, 0.5, n_samples=100)

        assert result.ci_low == pytest.approx(10.0 - CI_Z_SCORE_95 * 0.5)
        assert result.ci_high == pytest.approx(10.0 + CI_Z_SCORE_95 * 0.5)
        assert result.confidence_interval == (result.ci_low, result.ci_high)
        assert result.ci_width == pytest.approx(2 * CI_Z_SCORE_95 * 0.5)

    def test_relative_error(self) -> None:
        assert MCStats.from_mean(-4.0, 0.2).relative_error == pytest.approx(0.05)
        assert MCStats.from_mean(0.0, 0.2).relative_error == float("inf")

    def test_custom_z(self) -> None:
        stats = RunningStats()
        stats.push_many([0.0, 2.0])
        result = stats.to_stats(z=3.0)

        assert result.ci_high - result.estimate == pytest.approx(3.0 * result.standard_error)

    def test_is_frozen(self) -> None:
        result = MCStats.from_mean(1.0, 0.1)
        with pytest.raises(AttributeError):
            result.estimate = 2.0  # type: ignore[misc]
