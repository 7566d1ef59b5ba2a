"""
Monte Carlo simulation for path-dependent options.

Provides:
- Lognormal path stepping and market-parameter validation
- Streaming statistics (Welford) and the MCStats result
- Generic simulation kernel with antithetic variates
- Finite-difference Greeks with common random numbers
- Brownian-bridge extremum correction for lookbacks
- Convergence analysis tools
"""

from path_pricing.options.simulation.brownian_bridge import (
    bridge_max_log,
    bridge_min_log,
    price_bridge_asymptotic,
    price_bridge_mc,
)
from path_pricing.options.simulation.gbm import (
    MarketParameters,
    discounted_payoff_from_draws,
    simulate_prices,
)
from path_pricing.options.simulation.greeks import (
    delta_mc,
    gamma_mc,
    rho_mc,
    theta_mc,
    vega_mc,
)
from path_pricing.options.simulation.monte_carlo import (
    convergence_analysis,
    estimate_convergence_rate,
    price_mc,
    run_monte_carlo,
    validate_run_arguments,
)
from path_pricing.options.simulation.statistics import MCStats, RunningStats

__all__ = [
    # Market / paths
    "MarketParameters",
    "simulate_prices",
    "discounted_payoff_from_draws",
    # Statistics
    "MCStats",
    "RunningStats",
    # Kernel
    "run_monte_carlo",
    "validate_run_arguments",
    "price_mc",
    "convergence_analysis",
    "estimate_convergence_rate",
    # Greeks
    "delta_mc",
    "gamma_mc",
    "theta_mc",
    "rho_mc",
    "vega_mc",
    # Brownian bridge
    "bridge_max_log",
    "bridge_min_log",
    "price_bridge_mc",
    "price_bridge_asymptotic",
]
