"""
Validation framework for Monte Carlo results.

Provides HALT/WARN/PASS gates for MCStats:
- FiniteEstimateGate: Estimate is finite
- SymmetricIntervalGate: CI brackets the estimate symmetrically
- RelativeErrorGate: Relative SE within threshold
"""

from path_pricing.validation.gates import (
    FiniteEstimateGate,
    GateResult,
    # Enums and Results
    GateStatus,
    RelativeErrorGate,
    SymmetricIntervalGate,
    # Engine
    ValidationEngine,
    # Base Gate
    ValidationGate,
    ValidationReport,
    ensure_valid,
)

__all__ = [
    # Enums and Results
    "GateStatus",
    "GateResult",
    "ValidationReport",
    # Base Gate
    "ValidationGate",
    # Specific Gates
    "FiniteEstimateGate",
    "SymmetricIntervalGate",
    "RelativeErrorGate",
    # Engine
    "ValidationEngine",
    "ensure_valid",
]
