"""
Tests for configuration - config/settings.py and config/tolerances.py.

Verifies estimator defaults, immutability, the CLT tolerance helper and
the tolerance registry.
"""

import dataclasses
import math

import pytest

from path_pricing.config.settings import (
    SETTINGS,
    BridgeConfig,
    GreekConfig,
    Settings,
    SimulationConfig,
)
from path_pricing.config.tolerances import (
    ANTI_PATTERN_TOLERANCE,
    CI_Z_SCORE_95,
    TOLERANCE_REGISTRY,
    get_tolerance,
    mc_tolerance,
)


@pytest.mark.unit
class TestSettingsDefaults:
    """Estimator defaults."""

    def test_simulation(self) -> None:
        sim = SETTINGS.simulation
        assert (sim.n_paths, sim.n_steps, sim.seed, sim.antithetic) == (10_000, 50, 42, False)
        assert sim.confidence_z == CI_Z_SCORE_95

    def test_greek_bumps(self) -> None:
        bumps = SETTINGS.greeks
        assert bumps.delta_rel_bump == 1e-4
        assert bumps.gamma_rel_bump == 1e-3
        assert bumps.theta_bump == pytest.approx(1.0 / 365.0)
        assert bumps.rho_bump == 1e-4
        assert bumps.vega_bump == 1e-4

    def test_bridge(self) -> None:
        bridge = SETTINGS.bridge
        assert (bridge.n_paths, bridge.n_steps, bridge.antithetic, bridge.seed) == (
            1_000, 1_000, True, 42,
        )
        assert 0 < bridge.uniform_clamp < 1e-10

    def test_settings_groups(self) -> None:
        assert Settings() == SETTINGS
        assert isinstance(SETTINGS.simulation, SimulationConfig)
        assert isinstance(SETTINGS.greeks, GreekConfig)
        assert isinstance(SETTINGS.bridge, BridgeConfig)


@pytest.mark.unit
class TestSettingsImmutable:
    """Frozen dataclasses."""

    @pytest.mark.parametrize(
        "config, attr",
        [
            (SETTINGS, "simulation"),
            (SETTINGS.simulation, "n_paths"),
            (SETTINGS.greeks, "theta_bump"),
            (SETTINGS.bridge, "seed"),
        ],
    )
    def test_frozen(self, config, attr: str) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            setattr(config, attr, None)


@pytest.mark.unit
class TestMCTolerance:
    """[T1] CLT tolerance: confidence * σ / √N."""

    def test_formula(self) -> None:
        assert mc_tolerance(10_000, sigma=0.2, confidence=3.0) == pytest.approx(0.006)

    def test_shrinks_with_paths(self) -> None:
        assert mc_tolerance(40_000) == pytest.approx(mc_tolerance(10_000) / 2.0)


@pytest.mark.unit
class TestToleranceRegistry:
    """Dynamic access by name."""

    def test_lookup(self) -> None:
        assert get_tolerance("anti_pattern") == ANTI_PATTERN_TOLERANCE

    def test_all_positive_and_finite(self) -> None:
        for name, value in TOLERANCE_REGISTRY.items():
            assert value > 0 and math.isfinite(value), name

    def test_unknown_lists_available(self) -> None:
        with pytest.raises(KeyError, match="Available"):
            get_tolerance("does_not_exist")
