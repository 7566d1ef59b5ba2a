"""
Path-dependent option instance.

Binds validated market parameters to a payoff and an aggregator, and
exposes every estimator as a method. Market parameters are validated once
at construction; the estimators never re-validate them.
"""

from typing import Optional

import pandas as pd

from path_pricing.config.settings import SETTINGS
from path_pricing.options.payoffs.aggregators import (
    AggregatorType,
    BaseAggregator,
    get_aggregator,
)
from path_pricing.options.payoffs.base import PayoffFunc, PayoffType, get_payoff
from path_pricing.options.simulation import brownian_bridge, greeks, monte_carlo
from path_pricing.options.simulation.gbm import MarketParameters
from path_pricing.options.simulation.statistics import MCStats

_SIM = SETTINGS.simulation
_BRIDGE = SETTINGS.bridge
_BUMPS = SETTINGS.greeks


class PathDependentOption:
    """
    Path-dependent option on a single GBM underlying.

    Parameters
    ----------
    market : MarketParameters
        Validated market parameters
    payoff : PayoffType, str or callable
        Payoff(terminal_price, aggregate); the aggregate acts as the strike
    aggregator : AggregatorType, str or BaseAggregator
        Path aggregator

    Examples
    --------
    >>> option = PathDependentOption.from_scalars(
    ...     100.0, 0.05, 0.2, 0.0, 1.0, PayoffType.CALL, AggregatorType.MINIMUM
    ... )
    >>> result = option.price_mc(n_paths=1000, n_steps=50, seed=42)
    >>> result.estimate > 0
    True
    """

    def __init__(
        self,
        market: MarketParameters,
        payoff: "PayoffType | str | PayoffFunc",
        aggregator: "AggregatorType | str | BaseAggregator",
    ):
        self.market = market
        self.payoff = get_payoff(payoff)
        self.aggregator = get_aggregator(aggregator)

    @classmethod
    def from_scalars(
        cls,
        spot: float,
        rate: float,
        volatility: float,
        valuation_time: float,
        maturity: float,
        payoff: "PayoffType | str | PayoffFunc",
        aggregator: "AggregatorType | str | BaseAggregator",
    ) -> "PathDependentOption":
        """
        Build an option from flat scalars.

        Raises
        ------
        InvalidConfigurationError
            If the market parameters fail validation
        """
        market = MarketParameters(
            spot=spot,
            rate=rate,
            volatility=volatility,
            valuation_time=valuation_time,
            maturity=maturity,
        )
        return cls(market, payoff, aggregator)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(market={self.market!r}, "
            f"payoff={getattr(self.payoff, '__name__', self.payoff)}, "
            f"aggregator={type(self.aggregator).__name__})"
        )

    # =========================================================================
    # Price
    # =========================================================================

    def price_mc(
        self,
        n_paths: int = _SIM.n_paths,
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
    ) -> MCStats:
        """Discrete-monitoring Monte Carlo price."""
        return monte_carlo.price_mc(
            self.market, self.payoff, self.aggregator, n_paths, n_steps, seed, antithetic
        )

    def price_bridge_mc(
        self,
        n_paths: int = _BRIDGE.n_paths,
        n_steps: int = _BRIDGE.n_steps,
        seed: int = _BRIDGE.seed,
        antithetic: bool = _BRIDGE.antithetic,
    ) -> MCStats:
        """Brownian-bridge corrected price (lookback aggregators only)."""
        return brownian_bridge.price_bridge_mc(
            self.market, self.payoff, self.aggregator, n_paths, n_steps, seed, antithetic
        )

    def price_bridge_asymptotic(self) -> float:
        """Bridge reference price at the fixed configuration."""
        return brownian_bridge.price_bridge_asymptotic(
            self.market, self.payoff, self.aggregator
        )

    def convergence_analysis(
        self,
        path_counts: tuple[int, ...] = (1_000, 2_000, 5_000, 10_000, 20_000),
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
        reference: Optional[float] = None,
    ) -> pd.DataFrame:
        """Convergence table against a reference price."""
        return monte_carlo.convergence_analysis(
            self.market,
            self.payoff,
            self.aggregator,
            path_counts=path_counts,
            n_steps=n_steps,
            seed=seed,
            antithetic=antithetic,
            reference=reference,
        )

    # =========================================================================
    # Greeks
    # =========================================================================

    def delta_mc(
        self,
        n_paths: int = _SIM.n_paths,
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
        rel_bump: float = _BUMPS.delta_rel_bump,
    ) -> MCStats:
        return greeks.delta_mc(
            self.market, self.payoff, self.aggregator,
            n_paths, n_steps, seed, antithetic, rel_bump,
        )

    def gamma_mc(
        self,
        n_paths: int = _SIM.n_paths,
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
        rel_bump: float = _BUMPS.gamma_rel_bump,
    ) -> MCStats:
        return greeks.gamma_mc(
            self.market, self.payoff, self.aggregator,
            n_paths, n_steps, seed, antithetic, rel_bump,
        )

    def theta_mc(
        self,
        n_paths: int = _SIM.n_paths,
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
        bump: float = _BUMPS.theta_bump,
    ) -> MCStats:
        return greeks.theta_mc(
            self.market, self.payoff, self.aggregator,
            n_paths, n_steps, seed, antithetic, bump,
        )

    def rho_mc(
        self,
        n_paths: int = _SIM.n_paths,
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
        bump: float = _BUMPS.rho_bump,
    ) -> MCStats:
        return greeks.rho_mc(
            self.market, self.payoff, self.aggregator,
            n_paths, n_steps, seed, antithetic, bump,
        )

    def vega_mc(
        self,
        n_paths: int = _SIM.n_paths,
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
        bump: float = _BUMPS.vega_bump,
    ) -> MCStats:
        return greeks.vega_mc(
            self.market, self.payoff, self.aggregator,
            n_paths, n_steps, seed, antithetic, bump,
        )


def make_lookback_call(
    spot: float,
    rate: float,
    volatility: float,
    valuation_time: float,
    maturity: float,
) -> PathDependentOption:
    """
    Floating-strike lookback call: payoff max(S_T - min(S), 0).

    Vanilla call payoff with the running minimum as strike.
    """
    return PathDependentOption.from_scalars(
        spot, rate, volatility, valuation_time, maturity,
        PayoffType.CALL, AggregatorType.MINIMUM,
    )


def make_lookback_put(
    spot: float,
    rate: float,
    volatility: float,
    valuation_time: float,
    maturity: float,
) -> PathDependentOption:
    """
    Floating-strike lookback put: payoff max(max(S) - S_T, 0).

    Vanilla put payoff with the running maximum as strike.
    """
    return PathDependentOption.from_scalars(
        spot, rate, volatility, valuation_time, maturity,
        PayoffType.PUT, AggregatorType.MAXIMUM,
    )
