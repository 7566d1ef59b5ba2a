"""
Brownian-bridge corrected Monte Carlo for lookback payoffs.

A discretely simulated path only observes its extremum at the grid points,
which biases lookback prices (the discrete minimum sits above the
continuous one). Conditional on the two endpoints of a step, the log-price
is a Brownian bridge whose maximum has a closed-form distribution, so the
continuous extremum within each step can be sampled exactly:

[T1] For m >= max(a, b):
     P(M <= m | a, b) = 1 - exp(-2 (m - a)(m - b) / (σ² dt))

Inverting with V ~ U(0, 1):
     m = 0.5 * (a + b + sqrt((a - b)² + 4K)),  K = -0.5 σ² dt ln(V)

The conditional minimum follows by symmetry: min(X) = -max(-X).

Valid ONLY for lookback aggregators (running max / min); other aggregators
are rejected.

See: Glasserman (2003) Sec. 6.4 - Brownian bridge for extremes
See: Beaglehole, Dybvig & Zhou (1997) "Going to extremes"
"""

import logging
import math

import numpy as np

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import InvalidArgumentError
from path_pricing.options.payoffs.aggregators import BaseAggregator
from path_pricing.options.payoffs.base import PayoffFunc
from path_pricing.options.simulation.gbm import MarketParameters
from path_pricing.options.simulation.monte_carlo import _checked, validate_run_arguments
from path_pricing.options.simulation.statistics import MCStats, RunningStats

logger = logging.getLogger(__name__)

_BRIDGE = SETTINGS.bridge


def bridge_max_log(a, b, s2dt: float, v):
    """
    Sample the maximum of a Brownian bridge from a to b.

    Works element-wise on arrays.

    Parameters
    ----------
    a, b : float or np.ndarray
        Log-price at the start and end of the step
    s2dt : float
        Variance of the step, σ² dt
    v : float or np.ndarray
        Uniform draw(s) in (0, 1), already clamped away from 0 and 1

    Returns
    -------
    float or np.ndarray
        Sampled maximum log-price, >= max(a, b)
    """
    k = -0.5 * s2dt * np.log(v)
    return 0.5 * (a + b + np.sqrt((a - b) ** 2 + 4.0 * k))


def bridge_min_log(a, b, s2dt: float, v):
    """Sample the minimum of a Brownian bridge from a to b: -max(-a, -b)."""
    return -bridge_max_log(-a, -b, s2dt, v)


def _require_lookback(aggregator: BaseAggregator) -> None:
    if not aggregator.is_lookback:
        raise InvalidArgumentError(
            f"CRITICAL: Brownian-bridge pricing requires a running max/min aggregator, "
            f"got {type(aggregator).__name__}"
        )


def price_bridge_mc(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    n_paths: int = _BRIDGE.n_paths,
    n_steps: int = _BRIDGE.n_steps,
    seed: int = _BRIDGE.seed,
    antithetic: bool = _BRIDGE.antithetic,
    uniform_clamp: float = _BRIDGE.uniform_clamp,
) -> MCStats:
    """
    Price a lookback option with Brownian-bridge extremum correction.

    Each step j feeds the aggregator, in temporal order, the sampled bridge
    maximum and the sampled bridge minimum (both at step index j + 0.5),
    then the discrete endpoint (at j + 1). For a max aggregator the minimum
    is a no-op, and vice versa.

    Parameters
    ----------
    market : MarketParameters
        Validated market parameters
    payoff : Callable[[float, float], float]
        Payoff function
    aggregator : BaseAggregator
        Running max or min aggregator
    n_paths : int
        Number of paths; with antithetic variates n_paths // 2 pairs
    n_steps : int
        Number of steps
    seed : int
        Random seed
    antithetic : bool
        Pair each path with its sign-flipped partner
    uniform_clamp : float
        Uniforms are clamped to [clamp, 1 - clamp]

    Returns
    -------
    MCStats
        Discounted price estimate with standard error and 95% CI

    Raises
    ------
    InvalidArgumentError
        On invalid run arguments or a non-lookback aggregator

    Notes
    -----
    The antithetic partner reuses the SAME normals AND the SAME uniforms as
    the original path, so the bridge correction stays correlated with the
    flipped path instead of being resampled independently.
    """
    validate_run_arguments(n_paths, n_steps, seed)
    _require_lookback(aggregator)

    tau = market.time_to_maturity
    dt = tau / n_steps
    disc = market.discount_factor
    s2dt = market.volatility**2 * dt
    drift_per_step = market.drift * dt
    vol_per_step = market.volatility * math.sqrt(dt)
    log_spot = math.log(market.spot)

    j = np.arange(n_steps, dtype=float)
    schedule = np.column_stack((j + 0.5, j + 0.5, j + 1.0)).ravel()

    def sample_bridge(draws: np.ndarray, uniforms: np.ndarray, flip: bool) -> float:
        z = -draws if flip else draws
        log_end = log_spot + np.cumsum(drift_per_step + vol_per_step * z)
        log_start = np.concatenate(([log_spot], log_end[:-1]))

        log_max = bridge_max_log(log_start, log_end, s2dt, uniforms[:, 0])
        log_min = bridge_min_log(log_start, log_end, s2dt, uniforms[:, 1])

        # (max_j, min_j, S_{j+1}) per step, in temporal order
        observed = np.exp(np.column_stack((log_max, log_min, log_end)).ravel())
        aggregate = aggregator.reduce_path(market.spot, observed, schedule)

        return disc * payoff(float(math.exp(log_end[-1])), aggregate)

    rng = np.random.default_rng(seed)
    stats = RunningStats()

    def draw() -> tuple[np.ndarray, np.ndarray]:
        draws = rng.standard_normal(n_steps)
        # (u_max_j, u_min_j) interleaved per step
        uniforms = np.clip(rng.random((n_steps, 2)), uniform_clamp, 1.0 - uniform_clamp)
        return draws, uniforms

    if antithetic:
        n_pairs = max(n_paths // 2, 1)
        for _ in range(n_pairs):
            draws, uniforms = draw()
            p1 = _checked(sample_bridge(draws, uniforms, False))
            p2 = _checked(sample_bridge(draws, uniforms, True))
            stats.push(0.5 * (p1 + p2))
    else:
        for _ in range(n_paths):
            draws, uniforms = draw()
            stats.push(_checked(sample_bridge(draws, uniforms, False)))

    return stats.to_stats(SETTINGS.simulation.confidence_z)


def price_bridge_asymptotic(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
) -> float:
    """
    Asymptotic reference price with Brownian-bridge correction (LOOKBACK ONLY).

    Runs price_bridge_mc at the fixed SETTINGS.bridge configuration
    (1000 paths, 1000 steps, antithetic, seed 42) and returns the estimate
    only. This is a deterministic reference value for convergence studies,
    not a confidence-bounded estimate.

    Returns
    -------
    float
        Discounted mean payoff
    """
    logger.info(
        "Bridge reference: %d paths, %d steps, antithetic=%s, seed=%d",
        _BRIDGE.n_paths,
        _BRIDGE.n_steps,
        _BRIDGE.antithetic,
        _BRIDGE.seed,
    )
    stats = price_bridge_mc(
        market,
        payoff,
        aggregator,
        n_paths=_BRIDGE.n_paths,
        n_steps=_BRIDGE.n_steps,
        seed=_BRIDGE.seed,
        antithetic=_BRIDGE.antithetic,
        uniform_clamp=_BRIDGE.uniform_clamp,
    )
    return stats.estimate
