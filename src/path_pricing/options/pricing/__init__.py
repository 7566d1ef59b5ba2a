"""
Analytic option pricing.

Provides:
- Continuous floating-strike lookback call/put (Goldman-Sosin-Gatto),
  used as the closed-form reference for the Monte Carlo estimators
"""

from path_pricing.options.pricing.lookback import (
    lookback_call_floating,
    lookback_put_floating,
)

__all__ = [
    "lookback_call_floating",
    "lookback_put_floating",
]
