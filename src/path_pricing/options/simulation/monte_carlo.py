"""
Monte Carlo simulation kernel for path-dependent options.

Implements:
- run_monte_carlo: generic kernel driving normal draws, antithetic pairing
  and streaming statistics around a pluggable per-path sample function
- price_mc: discounted-payoff price estimator built on the kernel
- convergence_analysis: MC price vs a reference across path counts

Every estimator (price and each Greek) is a different sample function fed
into the same kernel, so antithetic variates and the statistics are shared.

[T1] MC converges to the true price at rate 1/√N

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

import logging
import math
from collections.abc import Callable, Sequence
from typing import Optional

import numpy as np
import pandas as pd

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import InvalidArgumentError, SimulationError
from path_pricing.options.payoffs.aggregators import BaseAggregator
from path_pricing.options.payoffs.base import PayoffFunc
from path_pricing.options.simulation.gbm import MarketParameters, discounted_payoff_from_draws
from path_pricing.options.simulation.statistics import MCStats, RunningStats

logger = logging.getLogger(__name__)

#: Function(draws, flip) -> one scalar sample
SampleFn = Callable[[np.ndarray, bool], float]


def validate_run_arguments(n_paths: int, n_steps: int, seed: int) -> None:
    """
    Check simulation-call arguments.

    Raises
    ------
    InvalidArgumentError
        If n_paths or n_steps is not positive, or seed is negative
    """
    if n_paths <= 0:
        raise InvalidArgumentError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
    if n_steps <= 0:
        raise InvalidArgumentError(f"CRITICAL: n_steps must be > 0, got {n_steps}")
    if seed < 0:
        raise InvalidArgumentError(f"CRITICAL: seed must be >= 0, got {seed}")


def _checked(sample: float) -> float:
    if not math.isfinite(sample):
        raise SimulationError(f"CRITICAL: non-finite sample produced: {sample}")
    return sample


def run_monte_carlo(
    n_paths: int,
    n_steps: int,
    seed: int,
    antithetic: bool,
    sample_fn: SampleFn,
    z: float = SETTINGS.simulation.confidence_z,
) -> MCStats:
    """
    Run the generic Monte Carlo kernel.

    Parameters
    ----------
    n_paths : int
        Nominal number of paths
    n_steps : int
        Number of normal draws per path
    seed : int
        Random seed; identical arguments give bit-identical results
    antithetic : bool
        Pair each draw sequence with its negation
    sample_fn : Callable[[np.ndarray, bool], float]
        Function(draws, flip) -> scalar sample
    z : float
        Confidence interval z-score

    Returns
    -------
    MCStats
        Mean, standard error and confidence interval of the samples

    Notes
    -----
    Antithetic variates: ceil(n_paths / 2) draw sequences are generated and
    each pushes the average of sample_fn(Z, False) and sample_fn(Z, True) as
    ONE sample, so the SE reflects the negative correlation within a pair.
    """
    validate_run_arguments(n_paths, n_steps, seed)

    rng = np.random.default_rng(seed)
    stats = RunningStats()

    if antithetic:
        n_pairs = (n_paths + 1) // 2
        logger.debug(
            "MC run: %d antithetic pairs, %d steps, seed=%d", n_pairs, n_steps, seed
        )
        for _ in range(n_pairs):
            draws = rng.standard_normal(n_steps)
            s1 = _checked(sample_fn(draws, False))
            s2 = _checked(sample_fn(draws, True))
            stats.push(0.5 * (s1 + s2))
    else:
        logger.debug("MC run: %d paths, %d steps, seed=%d", n_paths, n_steps, seed)
        for _ in range(n_paths):
            draws = rng.standard_normal(n_steps)
            stats.push(_checked(sample_fn(draws, False)))

    return stats.to_stats(z)


def price_mc(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    n_paths: int = SETTINGS.simulation.n_paths,
    n_steps: int = SETTINGS.simulation.n_steps,
    seed: int = SETTINGS.simulation.seed,
    antithetic: bool = SETTINGS.simulation.antithetic,
) -> MCStats:
    """
    Price a path-dependent option by direct simulation.

    [T1] Price = E[exp(-r(T - T0)) * payoff(S_T, A)]

    No bias correction: the aggregate only sees the discrete path points.
    See brownian_bridge.price_bridge_mc for the continuous-extremum version.

    Parameters
    ----------
    market : MarketParameters
        Validated market parameters
    payoff : Callable[[float, float], float]
        Function(terminal_price, aggregate) -> payoff
    aggregator : BaseAggregator
        Path aggregator
    n_paths, n_steps, seed, antithetic
        Kernel arguments, see run_monte_carlo

    Returns
    -------
    MCStats
        Price estimate with standard error and 95% CI
    """

    def sample_price(draws: np.ndarray, flip: bool) -> float:
        return discounted_payoff_from_draws(
            market.spot,
            market.rate,
            market.volatility,
            market.valuation_time,
            market.maturity,
            payoff,
            aggregator,
            draws,
            flip,
        )

    return run_monte_carlo(n_paths, n_steps, seed, antithetic, sample_price)


def convergence_analysis(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    path_counts: Sequence[int] = (1_000, 2_000, 5_000, 10_000, 20_000),
    n_steps: int = SETTINGS.simulation.n_steps,
    seed: int = SETTINGS.simulation.seed,
    antithetic: bool = SETTINGS.simulation.antithetic,
    reference: Optional[float] = None,
) -> pd.DataFrame:
    """
    Analyze MC convergence towards a reference price.

    [T1] MC error should converge at rate 1/√N (plus discretization bias).

    Parameters
    ----------
    market : MarketParameters
        Validated market parameters
    payoff : Callable[[float, float], float]
        Payoff function
    aggregator : BaseAggregator
        Path aggregator
    path_counts : Sequence[int]
        Number of paths to test
    n_steps, seed, antithetic
        Kernel arguments held fixed across path counts
    reference : float, optional
        Reference price. Defaults to the Brownian-bridge asymptotic price,
        which requires a lookback aggregator.

    Returns
    -------
    pd.DataFrame
        One row per path count with columns n_paths, estimate,
        standard_error, ci_low, ci_high, reference, absolute_error, within_ci
    """
    if reference is None:
        from path_pricing.options.simulation.brownian_bridge import price_bridge_asymptotic

        reference = price_bridge_asymptotic(market, payoff, aggregator)

    rows = []
    for n in path_counts:
        stats = price_mc(market, payoff, aggregator, n, n_steps, seed, antithetic)
        rows.append(
            {
                "n_paths": n,
                "estimate": stats.estimate,
                "standard_error": stats.standard_error,
                "ci_low": stats.ci_low,
                "ci_high": stats.ci_high,
                "reference": reference,
                "absolute_error": abs(stats.estimate - reference),
                "within_ci": stats.ci_low <= reference <= stats.ci_high,
            }
        )

    return pd.DataFrame(rows)


def estimate_convergence_rate(frame: pd.DataFrame) -> float:
    """
    Estimate convergence rate from a convergence_analysis table.

    [T1] Theory predicts rate = -0.5 (error ~ 1/√N) once the
    discretization bias is small relative to the SE.

    Returns
    -------
    float
        Log-log slope of absolute error against path count
    """
    log_n = np.log(frame["n_paths"].to_numpy(dtype=float))
    log_error = np.log(frame["absolute_error"].to_numpy(dtype=float) + 1e-10)

    slope, _intercept = np.polyfit(log_n, log_error, 1)
    return float(slope)
