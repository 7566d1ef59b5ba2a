"""
Centralized numeric constants and tolerances for Monte Carlo pricing.

Tolerance Tiers:
    Tier 1 (Analytical): Machine-precision achievable, deterministic results
    Tier 3 (Stochastic): CLT-derived, Monte Carlo estimates

References:
    [T1] Higham (2002) "Accuracy and Stability of Numerical Algorithms"
    [T1] Glasserman (2003) Ch. 3-4 - Monte Carlo error bounds
"""

from typing import Final

import numpy as np

# =============================================================================
# Confidence Interval
# =============================================================================

#: Two-sided 95% normal quantile used for every reported interval
CI_Z_SCORE_95: Final[float] = 1.96


# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================

#: No-arbitrage bounds and sign checks on prices
ANTI_PATTERN_TOLERANCE: Final[float] = 1e-10

#: Symmetry of the confidence interval around the estimate
#: (ci_high - estimate) vs (estimate - ci_low), scaled by max(1, |estimate|)
CI_SYMMETRY_TOLERANCE: Final[float] = 1e-9

#: Vectorized aggregator reduction vs scalar fold along a path
AGGREGATOR_CONSISTENCY_TOLERANCE: Final[float] = 1e-10

#: Zero-volatility price vs deterministic riskless-path payoff
ZERO_VOL_TOLERANCE: Final[float] = 1e-8


# =============================================================================
# Tier 3: Stochastic Tolerances (CLT-Derived)
# =============================================================================


def mc_tolerance(n_paths: int, sigma: float = 0.20, confidence: float = 3.0) -> float:
    """
    Calculate CLT-derived Monte Carlo tolerance.

    [T1] Standard error of MC estimate is σ/√N.
    3σ gives 99.7% confidence interval.

    Parameters
    ----------
    n_paths : int
        Number of Monte Carlo paths
    sigma : float
        Estimated standard deviation of the per-path sample
    confidence : float
        Number of standard deviations (default 3 for 99.7% CI)

    Returns
    -------
    float
        Tolerance for MC vs reference comparison
    """
    return confidence * sigma / np.sqrt(n_paths)


#: Relative SE above which the RelativeErrorGate warns
RELATIVE_ERROR_WARN_THRESHOLD: Final[float] = 0.05

#: Bridge reference vs continuous-monitoring closed form (relative)
#: 500 antithetic pairs give roughly 2% relative SE on a lookback price
BRIDGE_ANALYTIC_RELATIVE_TOLERANCE: Final[float] = 0.10

#: Antithetic vs plain estimate, in units of the plain SE
ANTITHETIC_AGREEMENT_SIGMAS: Final[float] = 4.0


# =============================================================================
# Tolerance Registry (For Dynamic Access)
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    "ci_z_95": CI_Z_SCORE_95,
    "anti_pattern": ANTI_PATTERN_TOLERANCE,
    "ci_symmetry": CI_SYMMETRY_TOLERANCE,
    "aggregator_consistency": AGGREGATOR_CONSISTENCY_TOLERANCE,
    "zero_vol": ZERO_VOL_TOLERANCE,
    "relative_error_warn": RELATIVE_ERROR_WARN_THRESHOLD,
    "bridge_analytic_relative": BRIDGE_ANALYTIC_RELATIVE_TOLERANCE,
    "antithetic_agreement_sigmas": ANTITHETIC_AGREEMENT_SIGMAS,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Parameters
    ----------
    name : str
        Tolerance name (see TOLERANCE_REGISTRY keys)

    Returns
    -------
    float
        Tolerance value

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
