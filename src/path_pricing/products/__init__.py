"""
Path-dependent option products.

Provides:
- PathDependentOption: market parameters bound to a payoff and aggregator
- make_lookback_call / make_lookback_put: floating-strike lookbacks
- ProductRegistry: named catalogue (lookbacks, Asians)
"""

from path_pricing.products.path_dependent import (
    PathDependentOption,
    make_lookback_call,
    make_lookback_put,
)
from path_pricing.products.registry import ProductRegistry

__all__ = [
    "PathDependentOption",
    "make_lookback_call",
    "make_lookback_put",
    "ProductRegistry",
]
