"""
Frozen configuration settings for Monte Carlo pricing.

All configuration is immutable (frozen dataclasses) to ensure reproducibility.
Estimator defaults (path counts, seeds, finite-difference bumps) and the fixed
Brownian-bridge reference configuration live here.
"""

from dataclasses import dataclass, field

from path_pricing.config.tolerances import CI_Z_SCORE_95


# =============================================================================
# Simulation Configuration
# =============================================================================

@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable Monte Carlo simulation defaults.

    Attributes
    ----------
    n_paths : int
        Number of simulated paths
    n_steps : int
        Number of discretization steps between valuation time and maturity
    seed : int
        Random seed for reproducibility
    antithetic : bool
        Whether antithetic variates are used by default
    confidence_z : float
        Two-sided z-score of the reported confidence interval
    """

    n_paths: int = 10_000
    n_steps: int = 50
    seed: int = 42  # Reproducibility
    antithetic: bool = False
    confidence_z: float = CI_Z_SCORE_95


# =============================================================================
# Greek Configuration
# =============================================================================

@dataclass(frozen=True)
class GreekConfig:
    """
    Immutable finite-difference bump sizes.

    Spot bumps are relative (multiplied by spot); the others are absolute.

    Attributes
    ----------
    delta_rel_bump : float
        Relative spot bump for delta
    gamma_rel_bump : float
        Relative spot bump for gamma
    theta_bump : float
        Valuation-time bump in years (one calendar day)
    rho_bump : float
        Rate bump (decimal)
    vega_bump : float
        Volatility bump (decimal)
    """

    delta_rel_bump: float = 1e-4
    gamma_rel_bump: float = 1e-3
    theta_bump: float = 1.0 / 365.0
    rho_bump: float = 1e-4
    vega_bump: float = 1e-4


# =============================================================================
# Brownian Bridge Configuration
# =============================================================================

@dataclass(frozen=True)
class BridgeConfig:
    """
    Fixed configuration of the Brownian-bridge asymptotic estimator.

    Not caller-tunable: the asymptotic price is a reference value and must be
    identical across calls for the same market parameters.

    Attributes
    ----------
    n_paths : int
        Number of paths (antithetic pairs = n_paths // 2)
    n_steps : int
        Fine discretization used for the reference
    antithetic : bool
        Always on for the reference price
    seed : int
        Fixed seed
    uniform_clamp : float
        Uniforms are clamped to [clamp, 1 - clamp] to avoid log(0)
    """

    n_paths: int = 1_000
    n_steps: int = 1_000
    antithetic: bool = True
    seed: int = 42
    uniform_clamp: float = 1e-16


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from path_pricing.config.settings import SETTINGS
    >>> SETTINGS.simulation.n_paths
    10000
    """

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    greeks: GreekConfig = field(default_factory=GreekConfig)
    bridge: BridgeConfig = field(default_factory=BridgeConfig)


# Singleton instance - import this
SETTINGS = Settings()
