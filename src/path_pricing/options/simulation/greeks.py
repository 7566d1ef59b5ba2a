"""
Finite-difference Greeks for path-dependent options.

Each Greek is a centered bump-and-revalue estimator run through the same
Monte Carlo kernel as the price. Within one path the bumped revaluations
reuse the SAME normal draws (common random numbers), so the simulation
noise largely cancels in the difference quotient.

| Greek | Bumped parameter | Formula                               |
|-------|------------------|---------------------------------------|
| delta | S0               | (P(S0+ε) - P(S0-ε)) / 2ε              |
| gamma | S0               | (P(S0+ε) - 2P(S0) + P(S0-ε)) / ε²     |
| theta | T0               | (P(T0+ε) - P(T0-ε)) / 2ε              |
| rho   | r                | (P(r+ε) - P(r-ε)) / 2ε                |
| vega  | σ                | (P(σ+ε) - P(σ-ε)) / 2ε                |

Theta is the derivative with respect to the valuation time T0 (time
passing), not with respect to maturity.

See: Glasserman (2003) Ch. 7 - Estimating Sensitivities
"""

import math
from collections.abc import Callable

import numpy as np

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import InvalidArgumentError
from path_pricing.options.payoffs.aggregators import BaseAggregator
from path_pricing.options.payoffs.base import PayoffFunc
from path_pricing.options.simulation.gbm import MarketParameters, discounted_payoff_from_draws
from path_pricing.options.simulation.monte_carlo import run_monte_carlo
from path_pricing.options.simulation.statistics import MCStats

_SIM = SETTINGS.simulation
_BUMPS = SETTINGS.greeks


def _check_bump(name: str, bump: float) -> None:
    if not (math.isfinite(bump) and bump > 0):
        raise InvalidArgumentError(f"CRITICAL: {name} must be finite and > 0, got {bump}")


def _revaluer(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
) -> Callable[..., float]:
    """Discounted payoff for one draw sequence with optional parameter overrides."""

    def value(draws: np.ndarray, flip: bool, **bumped: float) -> float:
        return discounted_payoff_from_draws(
            bumped.get("spot", market.spot),
            bumped.get("rate", market.rate),
            bumped.get("volatility", market.volatility),
            bumped.get("valuation_time", market.valuation_time),
            market.maturity,
            payoff,
            aggregator,
            draws,
            flip,
        )

    return value


def delta_mc(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    n_paths: int = _SIM.n_paths,
    n_steps: int = _SIM.n_steps,
    seed: int = _SIM.seed,
    antithetic: bool = _SIM.antithetic,
    rel_bump: float = _BUMPS.delta_rel_bump,
) -> MCStats:
    """
    Delta (dP/dS0) by centered difference.

    Parameters
    ----------
    market : MarketParameters
        Validated market parameters
    payoff : Callable[[float, float], float]
        Payoff function
    aggregator : BaseAggregator
        Path aggregator
    n_paths, n_steps, seed, antithetic
        Kernel arguments, see run_monte_carlo
    rel_bump : float, default 1e-4
        Spot bump relative to spot: ε = rel_bump * S0

    Returns
    -------
    MCStats
        Delta estimate with standard error and 95% CI
    """
    _check_bump("rel_bump", rel_bump)
    eps = rel_bump * market.spot
    value = _revaluer(market, payoff, aggregator)

    def sample_delta(draws: np.ndarray, flip: bool) -> float:
        up = value(draws, flip, spot=market.spot + eps)
        down = value(draws, flip, spot=market.spot - eps)
        return (up - down) / (2.0 * eps)

    return run_monte_carlo(n_paths, n_steps, seed, antithetic, sample_delta)


def gamma_mc(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    n_paths: int = _SIM.n_paths,
    n_steps: int = _SIM.n_steps,
    seed: int = _SIM.seed,
    antithetic: bool = _SIM.antithetic,
    rel_bump: float = _BUMPS.gamma_rel_bump,
) -> MCStats:
    """
    Gamma (d²P/dS0²) by centered second difference.

    Larger default bump than delta (1e-3): the second difference divides by
    ε², which amplifies payoff kinks and rounding.
    """
    _check_bump("rel_bump", rel_bump)
    eps = rel_bump * market.spot
    value = _revaluer(market, payoff, aggregator)

    def sample_gamma(draws: np.ndarray, flip: bool) -> float:
        up = value(draws, flip, spot=market.spot + eps)
        mid = value(draws, flip)
        down = value(draws, flip, spot=market.spot - eps)
        return (up - 2.0 * mid + down) / (eps * eps)

    return run_monte_carlo(n_paths, n_steps, seed, antithetic, sample_gamma)


def theta_mc(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    n_paths: int = _SIM.n_paths,
    n_steps: int = _SIM.n_steps,
    seed: int = _SIM.seed,
    antithetic: bool = _SIM.antithetic,
    bump: float = _BUMPS.theta_bump,
) -> MCStats:
    """
    Theta (dP/dT0) by centered difference on the valuation time.

    Raises
    ------
    InvalidArgumentError
        If either bumped valuation time reaches maturity
    """
    _check_bump("bump", bump)
    t0 = market.valuation_time
    if not (t0 + bump < market.maturity and t0 - bump < market.maturity):
        raise InvalidArgumentError(
            f"CRITICAL: theta bump {bump} pushes valuation_time {t0} "
            f"past maturity {market.maturity}"
        )
    value = _revaluer(market, payoff, aggregator)

    def sample_theta(draws: np.ndarray, flip: bool) -> float:
        up = value(draws, flip, valuation_time=t0 + bump)
        down = value(draws, flip, valuation_time=t0 - bump)
        return (up - down) / (2.0 * bump)

    return run_monte_carlo(n_paths, n_steps, seed, antithetic, sample_theta)


def rho_mc(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    n_paths: int = _SIM.n_paths,
    n_steps: int = _SIM.n_steps,
    seed: int = _SIM.seed,
    antithetic: bool = _SIM.antithetic,
    bump: float = _BUMPS.rho_bump,
) -> MCStats:
    """Rho (dP/dr) by centered difference. Bumps both drift and discounting."""
    _check_bump("bump", bump)
    value = _revaluer(market, payoff, aggregator)

    def sample_rho(draws: np.ndarray, flip: bool) -> float:
        up = value(draws, flip, rate=market.rate + bump)
        down = value(draws, flip, rate=market.rate - bump)
        return (up - down) / (2.0 * bump)

    return run_monte_carlo(n_paths, n_steps, seed, antithetic, sample_rho)


def vega_mc(
    market: MarketParameters,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    n_paths: int = _SIM.n_paths,
    n_steps: int = _SIM.n_steps,
    seed: int = _SIM.seed,
    antithetic: bool = _SIM.antithetic,
    bump: float = _BUMPS.vega_bump,
) -> MCStats:
    """
    Vega (dP/dσ) by centered difference.

    At σ < ε the down-bumped volatility is negative; the path law only
    depends on σ² and the sign of the diffusion term, so the difference
    quotient remains well defined.
    """
    _check_bump("bump", bump)
    value = _revaluer(market, payoff, aggregator)

    def sample_vega(draws: np.ndarray, flip: bool) -> float:
        up = value(draws, flip, volatility=market.volatility + bump)
        down = value(draws, flip, volatility=market.volatility - bump)
        return (up - down) / (2.0 * bump)

    return run_monte_carlo(n_paths, n_steps, seed, antithetic, sample_vega)
