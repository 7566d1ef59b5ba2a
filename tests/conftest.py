"""
Centralized pytest fixtures for the path-pricing test suite.

This module provides shared fixtures used across all test categories:
- anti_patterns/
- unit/
- properties/
- validation/
- smoke/

Fixture Categories:
1. Tolerance Tiers - Test precision levels
2. Market Parameters - Standard market conditions
3. Options - Lookback and Asian instances built on the standard market
4. Logging - Clean one-shot latch for export-boundary tests
"""

from dataclasses import dataclass

import numpy as np
import pytest

from path_pricing.exports import reset_error_flag
from path_pricing.options.payoffs.aggregators import AggregatorType
from path_pricing.options.payoffs.base import PayoffType
from path_pricing.options.simulation.gbm import MarketParameters
from path_pricing.products.path_dependent import (
    PathDependentOption,
    make_lookback_call,
    make_lookback_put,
)

# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    Derived from precision requirements, not ad hoc.
    """

    # Anti-pattern tests: Very tight (fundamental violations)
    anti_pattern: float = 1e-10

    # Validation tests: Analytic identities
    validation: float = 1e-6

    # Monte Carlo vs reference: in units of the reported SE
    mc_sigmas: float = 4.0


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# MARKET PARAMETERS
# =============================================================================

#: S0=100, r=5%, σ=20%, T0=0, T=1
STANDARD_MARKET = MarketParameters(
    spot=100.0,
    rate=0.05,
    volatility=0.20,
    valuation_time=0.0,
    maturity=1.0,
)


@pytest.fixture
def market() -> MarketParameters:
    """Standard ATM market parameters."""
    return STANDARD_MARKET


@pytest.fixture
def market_dict() -> dict[str, float]:
    """Standard market parameters as keyword arguments."""
    return {
        "spot": 100.0,
        "rate": 0.05,
        "volatility": 0.20,
        "valuation_time": 0.0,
        "maturity": 1.0,
    }


@pytest.fixture
def zero_vol_market() -> MarketParameters:
    """Deterministic market: σ = 0."""
    return MarketParameters(
        spot=100.0, rate=0.05, volatility=0.0, valuation_time=0.0, maturity=1.0
    )


# =============================================================================
# OPTIONS
# =============================================================================

@pytest.fixture
def lookback_call(market_dict) -> PathDependentOption:
    """Floating-strike lookback call (call payoff on running minimum)."""
    return make_lookback_call(**market_dict)


@pytest.fixture
def lookback_put(market_dict) -> PathDependentOption:
    """Floating-strike lookback put (put payoff on running maximum)."""
    return make_lookback_put(**market_dict)


@pytest.fixture
def asian_call(market) -> PathDependentOption:
    """Floating-strike arithmetic Asian call."""
    return PathDependentOption(market, PayoffType.CALL, AggregatorType.ARITHMETIC)


# =============================================================================
# NUMPY RANDOM SEED
# =============================================================================

@pytest.fixture
def reproducible_rng():
    """Provide a reproducible numpy random generator."""
    return np.random.default_rng(seed=42)


# =============================================================================
# EXPORT BOUNDARY
# =============================================================================

@pytest.fixture
def clean_error_flag():
    """Reset the export boundary's one-shot error latch around a test."""
    reset_error_flag()
    yield
    reset_error_flag()
