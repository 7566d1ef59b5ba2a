"""
path-pricing: Monte Carlo pricing of path-dependent options under GBM.

Asian and lookback options with finite-difference Greeks, antithetic
variates and a Brownian-bridge corrected lookback reference price.

Quick Start
-----------
>>> from path_pricing import make_lookback_call
>>> option = make_lookback_call(100.0, 0.05, 0.2, 0.0, 1.0)
>>> result = option.price_mc(n_paths=10_000, n_steps=50, seed=42)
>>> result.ci_low <= result.estimate <= result.ci_high
True

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Errors
# =============================================================================
from path_pricing.errors import (
    InvalidArgumentError,
    InvalidConfigurationError,
    PricingError,
    SimulationError,
)

# =============================================================================
# Strategies
# =============================================================================
from path_pricing.options.payoffs.aggregators import (
    AggregatorType,
    ArithmeticMean,
    BaseAggregator,
    GeometricMean,
    RunningMax,
    RunningMin,
    get_aggregator,
)
from path_pricing.options.payoffs.base import PayoffType, get_payoff

# =============================================================================
# Simulation
# =============================================================================
from path_pricing.options.simulation import (
    MarketParameters,
    MCStats,
    RunningStats,
    convergence_analysis,
    delta_mc,
    gamma_mc,
    price_bridge_asymptotic,
    price_bridge_mc,
    price_mc,
    rho_mc,
    run_monte_carlo,
    theta_mc,
    vega_mc,
)
from path_pricing.options.pricing import lookback_call_floating, lookback_put_floating

# =============================================================================
# Products and Validation
# =============================================================================
from path_pricing.products import (
    PathDependentOption,
    ProductRegistry,
    make_lookback_call,
    make_lookback_put,
)
from path_pricing.validation import ValidationEngine, ValidationReport

__all__ = [
    "__version__",
    # Errors
    "PricingError",
    "InvalidConfigurationError",
    "InvalidArgumentError",
    "SimulationError",
    # Strategies
    "PayoffType",
    "get_payoff",
    "AggregatorType",
    "BaseAggregator",
    "ArithmeticMean",
    "GeometricMean",
    "RunningMax",
    "RunningMin",
    "get_aggregator",
    # Simulation
    "MarketParameters",
    "MCStats",
    "RunningStats",
    "run_monte_carlo",
    "price_mc",
    "delta_mc",
    "gamma_mc",
    "theta_mc",
    "rho_mc",
    "vega_mc",
    "price_bridge_mc",
    "price_bridge_asymptotic",
    "convergence_analysis",
    # Analytic
    "lookback_call_floating",
    "lookback_put_floating",
    # Products
    "PathDependentOption",
    "ProductRegistry",
    "make_lookback_call",
    "make_lookback_put",
    # Validation
    "ValidationEngine",
    "ValidationReport",
]
