"""
Streaming statistics for Monte Carlo estimators.

Implements:
- RunningStats: Welford's online mean/variance accumulator with a pure
  combine() for merging partial accumulators (Chan et al. parallel formula)
- MCStats: the immutable four-number result (estimate, SE, 95% CI)

[T1] Welford (1962): numerically stable single-pass variance
[T1] Chan, Golub & LeVeque (1979): pairwise combination of partial moments
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from path_pricing.config.tolerances import CI_Z_SCORE_95


@dataclass(frozen=True)
class MCStats:
    """
    Monte Carlo estimation result.

    Attributes
    ----------
    estimate : float
        Sample mean of the per-path samples
    standard_error : float
        Standard error of the mean (NaN when fewer than two samples)
    ci_low : float
        Lower bound of the 95% confidence interval
    ci_high : float
        Upper bound of the 95% confidence interval
    n_samples : int
        Number of samples pushed (antithetic pairs count once)
    """

    estimate: float
    standard_error: float
    ci_low: float
    ci_high: float
    n_samples: int = 0

    @classmethod
    def from_mean(
        cls,
        mean: float,
        standard_error: float,
        n_samples: int = 0,
        z: float = CI_Z_SCORE_95,
    ) -> "MCStats":
        """
        Build a result with a symmetric confidence interval.

        [T1] CI = mean ± z * SE
        """
        return cls(
            estimate=mean,
            standard_error=standard_error,
            ci_low=mean - z * standard_error,
            ci_high=mean + z * standard_error,
            n_samples=n_samples,
        )

    @property
    def confidence_interval(self) -> tuple[float, float]:
        """95% confidence interval as (low, high)."""
        return (self.ci_low, self.ci_high)

    @property
    def ci_width(self) -> float:
        """Width of 95% confidence interval."""
        return self.ci_high - self.ci_low

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / |estimate|)."""
        if abs(self.estimate) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.estimate)


@dataclass
class RunningStats:
    """
    Online accumulator of count, mean and sum of squared deviations.

    Attributes
    ----------
    count : int
        Number of samples pushed
    mean : float
        Running mean
    m2 : float
        Sum of squared deviations from the running mean

    Examples
    --------
    >>> stats = RunningStats()
    >>> stats.push_many([1.0, 2.0, 3.0])
    >>> stats.mean, stats.sample_variance
    (2.0, 1.0)
    """

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0

    def push(self, value: float) -> None:
        """Add one sample (Welford update)."""
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        delta2 = value - self.mean
        self.m2 += delta * delta2

    def push_many(self, values: Iterable[float]) -> None:
        """Add samples in order."""
        for value in values:
            self.push(value)

    def combine(self, other: "RunningStats") -> "RunningStats":
        """
        Merge two partial accumulators into a new one.

        Neither input is modified. Equivalent to pushing both sample sets
        into one accumulator, up to floating-point rounding.

        [T1] δ = mean_b - mean_a
             M2 = M2_a + M2_b + δ² n_a n_b / n
        """
        if self.count == 0:
            return RunningStats(other.count, other.mean, other.m2)
        if other.count == 0:
            return RunningStats(self.count, self.mean, self.m2)

        n = self.count + other.count
        delta = other.mean - self.mean
        mean = self.mean + delta * other.count / n
        m2 = self.m2 + other.m2 + delta * delta * self.count * other.count / n
        return RunningStats(n, mean, m2)

    @property
    def sample_variance(self) -> float:
        """Unbiased (n-1) sample variance; NaN with fewer than two samples."""
        if self.count < 2:
            return float("nan")
        return self.m2 / (self.count - 1)

    @property
    def standard_error(self) -> float:
        """
        Standard error of the mean: sqrt(s² / n).

        NaN with fewer than two samples. Conventions that treat a single
        sample as zero-variance would report SE = 0 here; NaN is returned
        instead so that one sample never reports a zero-width interval.
        """
        if self.count < 2:
            return float("nan")
        return math.sqrt(self.sample_variance / self.count)

    def to_stats(self, z: float = CI_Z_SCORE_95) -> MCStats:
        """
        Convert the accumulator into the final result.

        Returns
        -------
        MCStats
            Estimate (NaN if no samples), SE and symmetric confidence interval
        """
        mean = self.mean if self.count > 0 else float("nan")
        return MCStats.from_mean(mean, self.standard_error, self.count, z)
