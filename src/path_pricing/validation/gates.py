"""
Validation Gates - HALT/WARN/PASS framework for Monte Carlo results.

Checks an MCStats result for sanity before it is handed on. Gates can HALT
(reject with diagnostics), WARN (accept but flag) or PASS.

Default gates:
- FiniteEstimateGate: estimate must be finite
- SymmetricIntervalGate: ci_low <= estimate <= ci_high, symmetric interval
- RelativeErrorGate: warn when SE / |estimate| is large
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from path_pricing.config.tolerances import (
    CI_SYMMETRY_TOLERANCE,
    RELATIVE_ERROR_WARN_THRESHOLD,
)
from path_pricing.errors import SimulationError
from path_pricing.options.simulation.statistics import MCStats

logger = logging.getLogger(__name__)


class GateStatus(Enum):
    """Status of a validation gate."""
    PASS = "pass"
    HALT = "halt"
    WARN = "warn"


@dataclass(frozen=True)
class GateResult:
    """
    Result of a validation gate check.

    Attributes
    ----------
    status : GateStatus
        PASS, HALT, or WARN
    gate_name : str
        Name of the gate that was checked
    message : str
        Explanation of the result
    value : Any, optional
        The value that was checked
    threshold : Any, optional
        The threshold that was applied
    """

    status: GateStatus
    gate_name: str
    message: str
    value: Any | None = None
    threshold: Any | None = None

    @property
    def passed(self) -> bool:
        """Check if gate passed (PASS or WARN)."""
        return self.status != GateStatus.HALT


@dataclass(frozen=True)
class ValidationReport:
    """
    Complete validation report from all gates.

    Attributes
    ----------
    results : tuple[GateResult, ...]
        Results from all gates
    """

    results: tuple[GateResult, ...]

    @property
    def overall_status(self) -> GateStatus:
        """Get worst status across all gates."""
        if any(r.status == GateStatus.HALT for r in self.results):
            return GateStatus.HALT
        elif any(r.status == GateStatus.WARN for r in self.results):
            return GateStatus.WARN
        return GateStatus.PASS

    @property
    def passed(self) -> bool:
        """Check if all gates passed (no HALTs)."""
        return self.overall_status != GateStatus.HALT

    @property
    def halted_gates(self) -> list[GateResult]:
        return [r for r in self.results if r.status == GateStatus.HALT]

    @property
    def warned_gates(self) -> list[GateResult]:
        return [r for r in self.results if r.status == GateStatus.WARN]

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "overall_status": self.overall_status.value,
            "passed": self.passed,
            "n_halted": len(self.halted_gates),
            "n_warned": len(self.warned_gates),
            "results": [
                {
                    "gate": r.gate_name,
                    "status": r.status.value,
                    "message": r.message,
                    "value": r.value,
                    "threshold": r.threshold,
                }
                for r in self.results
            ],
        }


# =============================================================================
# Gate Implementations
# =============================================================================

class ValidationGate:
    """
    Base class for validation gates.

    Subclasses implement check() to validate an MCStats result.
    """

    name: str = "base_gate"

    def check(self, stats: MCStats, **context: Any) -> GateResult:
        """
        Check the Monte Carlo result.

        Parameters
        ----------
        stats : MCStats
            Result to validate
        **context : Any
            Additional context (e.g. quantity="delta")

        Returns
        -------
        GateResult
            Validation result
        """
        raise NotImplementedError


class FiniteEstimateGate(ValidationGate):
    """HALT on a NaN or infinite estimate."""

    name = "finite_estimate"

    def check(self, stats: MCStats, **context: Any) -> GateResult:
        if not math.isfinite(stats.estimate):
            return GateResult(
                status=GateStatus.HALT,
                gate_name=self.name,
                message=f"Estimate {stats.estimate} is not finite",
                value=stats.estimate,
            )
        return GateResult(
            status=GateStatus.PASS,
            gate_name=self.name,
            message=f"Estimate {stats.estimate:.6f} is finite",
            value=stats.estimate,
        )


class SymmetricIntervalGate(ValidationGate):
    """
    Check the confidence interval brackets the estimate symmetrically.

    [T1] CI = estimate ± z * SE, so ci_high - estimate == estimate - ci_low.

    A NaN SE (fewer than two samples) leaves the interval undefined: WARN.
    """

    name = "symmetric_interval"

    def __init__(self, tolerance: float = CI_SYMMETRY_TOLERANCE):
        self.tolerance = tolerance

    def check(self, stats: MCStats, **context: Any) -> GateResult:
        if math.isnan(stats.standard_error):
            return GateResult(
                status=GateStatus.WARN,
                gate_name=self.name,
                message=f"Standard error undefined with {stats.n_samples} sample(s)",
                value=stats.standard_error,
            )

        if not stats.ci_low <= stats.estimate <= stats.ci_high:
            return GateResult(
                status=GateStatus.HALT,
                gate_name=self.name,
                message=(
                    f"Estimate {stats.estimate:.6f} outside "
                    f"[{stats.ci_low:.6f}, {stats.ci_high:.6f}]"
                ),
                value=stats.estimate,
                threshold=stats.confidence_interval,
            )

        asymmetry = abs((stats.ci_high - stats.estimate) - (stats.estimate - stats.ci_low))
        threshold = self.tolerance * max(1.0, abs(stats.estimate))
        if asymmetry > threshold:
            return GateResult(
                status=GateStatus.HALT,
                gate_name=self.name,
                message=f"Confidence interval asymmetric by {asymmetry:.3e}",
                value=asymmetry,
                threshold=threshold,
            )

        return GateResult(
            status=GateStatus.PASS,
            gate_name=self.name,
            message="Confidence interval symmetric around estimate",
            value=asymmetry,
            threshold=threshold,
        )


class RelativeErrorGate(ValidationGate):
    """WARN when the relative standard error exceeds a threshold."""

    name = "relative_error"

    def __init__(self, max_relative_error: float = RELATIVE_ERROR_WARN_THRESHOLD):
        self.max_relative_error = max_relative_error

    def check(self, stats: MCStats, **context: Any) -> GateResult:
        rel = stats.relative_error
        # NaN compares False, so an undefined SE lands here as PASS; the
        # interval gate already flags it.
        if rel > self.max_relative_error:
            return GateResult(
                status=GateStatus.WARN,
                gate_name=self.name,
                message=(
                    f"Relative SE {rel:.2%} exceeds {self.max_relative_error:.2%}; "
                    f"consider more paths"
                ),
                value=rel,
                threshold=self.max_relative_error,
            )
        return GateResult(
            status=GateStatus.PASS,
            gate_name=self.name,
            message=f"Relative SE {rel:.2%} acceptable",
            value=rel,
            threshold=self.max_relative_error,
        )


# =============================================================================
# Validation Engine
# =============================================================================

class ValidationEngine:
    """
    Engine for running validation gates on Monte Carlo results.

    Parameters
    ----------
    gates : list[ValidationGate], optional
        Custom gates to use. If None, uses default gates.

    Examples
    --------
    >>> engine = ValidationEngine()
    >>> report = engine.validate(option.price_mc())
    >>> report.passed
    True
    """

    def __init__(
        self,
        gates: list[ValidationGate] | None = None,
    ):
        if gates is None:
            gates = self._default_gates()
        self.gates = gates

    def _default_gates(self) -> list[ValidationGate]:
        """Create default set of validation gates."""
        return [
            FiniteEstimateGate(),
            SymmetricIntervalGate(),
            RelativeErrorGate(),
        ]

    def validate(self, stats: MCStats, **context: Any) -> ValidationReport:
        """
        Run all validation gates on a result.

        Returns
        -------
        ValidationReport
            Complete validation report
        """
        results = tuple(gate.check(stats, **context) for gate in self.gates)
        report = ValidationReport(results=results)

        for halted in report.halted_gates:
            logger.warning("Gate %s HALT: %s", halted.gate_name, halted.message)

        return report

    def validate_and_raise(self, stats: MCStats, **context: Any) -> MCStats:
        """
        Validate and raise exception on HALT.

        Returns
        -------
        MCStats
            The same result if validation passes

        Raises
        ------
        SimulationError
            If any gate HALTs
        """
        report = self.validate(stats, **context)

        if not report.passed:
            halt_messages = [g.message for g in report.halted_gates]
            raise SimulationError(
                "CRITICAL: Validation failed. HALTs:\n" +
                "\n".join(f"  - {m}" for m in halt_messages)
            )

        return stats


def ensure_valid(stats: MCStats, **context: Any) -> MCStats:
    """
    Validate with the default gates and raise if invalid.

    Raises
    ------
    SimulationError
        If validation fails
    """
    return ValidationEngine().validate_and_raise(stats, **context)
