"""
Geometric Brownian Motion (GBM) market model and path stepping.

Implements the lognormal path evolution used by every Monte Carlo estimator:
- Market parameter container with construction-time validation
- Exact lognormal discretization driven by a supplied normal draw sequence
- Discounted path-dependent payoff for one draw sequence (optionally sign-flipped)

[T1] GBM SDE: dS = rS dt + σS dW

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

import math
from dataclasses import dataclass

import numpy as np

from path_pricing.errors import InvalidConfigurationError
from path_pricing.options.payoffs.aggregators import BaseAggregator
from path_pricing.options.payoffs.base import PayoffFunc


@dataclass(frozen=True)
class MarketParameters:
    """
    Black-Scholes market parameters for one pricing request.

    Validated once at construction; downstream components do not re-validate.

    Attributes
    ----------
    spot : float
        Spot price at valuation time (S0)
    rate : float
        Continuously compounded risk-free rate (decimal)
    volatility : float
        Constant volatility (annualized, decimal)
    valuation_time : float
        Valuation time T0 in years
    maturity : float
        Maturity T in years, strictly after valuation_time
    """

    spot: float
    rate: float
    volatility: float
    valuation_time: float
    maturity: float

    def __post_init__(self) -> None:
        """Validate parameters."""
        values = (self.spot, self.rate, self.volatility, self.valuation_time, self.maturity)
        if not all(math.isfinite(v) for v in values):
            raise InvalidConfigurationError(
                f"CRITICAL: market parameters must be finite, got "
                f"spot={self.spot}, rate={self.rate}, volatility={self.volatility}, "
                f"valuation_time={self.valuation_time}, maturity={self.maturity}"
            )
        if self.spot <= 0:
            raise InvalidConfigurationError(f"CRITICAL: spot must be > 0, got {self.spot}")
        if self.volatility < 0:
            raise InvalidConfigurationError(
                f"CRITICAL: volatility must be >= 0, got {self.volatility}"
            )
        if self.maturity <= self.valuation_time:
            raise InvalidConfigurationError(
                f"CRITICAL: maturity must be > valuation_time, got "
                f"maturity={self.maturity}, valuation_time={self.valuation_time}"
            )

    @property
    def time_to_maturity(self) -> float:
        """Remaining life T - T0 in years."""
        return self.maturity - self.valuation_time

    @property
    def drift(self) -> float:
        """Risk-neutral log drift: r - σ²/2."""
        return self.rate - 0.5 * self.volatility**2

    @property
    def discount_factor(self) -> float:
        """Discount factor exp(-r(T - T0))."""
        return math.exp(-self.rate * self.time_to_maturity)

    @property
    def forward(self) -> float:
        """Forward price: S * exp(r(T - T0))."""
        return self.spot * math.exp(self.rate * self.time_to_maturity)


def simulate_prices(
    spot: float,
    rate: float,
    volatility: float,
    time_to_maturity: float,
    draws: np.ndarray,
    flip: bool = False,
) -> np.ndarray:
    """
    Step one GBM path from a sequence of standard normal draws.

    [T1] Uses exact log-normal simulation:
    S(t+dt) = S(t) * exp((r - σ²/2)dt + σ√dt * Z)

    Parameters
    ----------
    spot : float
        Initial price
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal)
    time_to_maturity : float
        Simulated horizon in years
    draws : np.ndarray
        Standard normal draws, one per step, shape (n_steps,)
    flip : bool, default False
        Negate every draw (antithetic partner path)

    Returns
    -------
    np.ndarray
        Prices after each step, shape (n_steps,); the spot is not included
    """
    n_steps = len(draws)
    dt = time_to_maturity / n_steps
    z = -draws if flip else draws

    log_returns = (rate - 0.5 * volatility * volatility) * dt + volatility * math.sqrt(dt) * z

    return spot * np.exp(np.cumsum(log_returns))


def discounted_payoff_from_draws(
    spot: float,
    rate: float,
    volatility: float,
    valuation_time: float,
    maturity: float,
    payoff: PayoffFunc,
    aggregator: BaseAggregator,
    draws: np.ndarray,
    flip: bool = False,
) -> float:
    """
    Discounted path-dependent payoff for one draw sequence.

    Takes raw scalars rather than MarketParameters so that finite-difference
    estimators can evaluate bumped parameter sets without re-validation.

    Parameters
    ----------
    spot, rate, volatility, valuation_time, maturity : float
        (Possibly bumped) market parameters
    payoff : Callable[[float, float], float]
        Function(terminal_price, aggregate) -> payoff
    aggregator : BaseAggregator
        Path aggregator, started from the spot
    draws : np.ndarray
        Standard normal draws, shape (n_steps,)
    flip : bool, default False
        Negate every draw

    Returns
    -------
    float
        exp(-r(T - T0)) * payoff(S_T, aggregate)
    """
    tau = maturity - valuation_time
    prices = simulate_prices(spot, rate, volatility, tau, draws, flip)

    aggregate = aggregator.reduce_path(spot, prices)

    return math.exp(-rate * tau) * payoff(float(prices[-1]), aggregate)
