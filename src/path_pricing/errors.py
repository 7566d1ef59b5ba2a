"""
Exception taxonomy for path-dependent option pricing.

All failures are raised where they are detected and propagate unchanged
through construction -> kernel -> estimator. Only the export boundary
(path_pricing.exports) turns them into a NaN sentinel.

NEVER fails silently - all errors are explicit.
"""


class PricingError(Exception):
    """Base class for all pricing failures."""

    pass


class InvalidConfigurationError(PricingError, ValueError):
    """Raised when market parameters fail validation at construction."""

    pass


class InvalidArgumentError(PricingError, ValueError):
    """Raised when a simulation-call argument is out of domain."""

    pass


class SimulationError(PricingError, RuntimeError):
    """Raised when a numeric routine fails on otherwise valid inputs."""

    pass
