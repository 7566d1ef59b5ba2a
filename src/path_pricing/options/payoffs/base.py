"""
Payoff strategies for path-dependent options.

A payoff maps (terminal price, strike) to an amount. Payoffs here are
strikeless in the product sense: the strike handed in by the simulation is
always the path's own aggregate (running mean, minimum or maximum), which
makes them floating-strike Asian / lookback payoffs.

All payoffs are stateless pure functions and safe to share between runs.
"""

from collections.abc import Callable
from enum import Enum

from path_pricing.errors import InvalidArgumentError

PayoffFunc = Callable[[float, float], float]


class PayoffType(Enum):
    """Payoff type enumeration."""

    CALL = "call"
    PUT = "put"
    DIGITAL_CALL = "digital_call"
    DIGITAL_PUT = "digital_put"


def _check_strike(strike: float) -> None:
    if strike < 0.0:
        raise InvalidArgumentError(f"CRITICAL: strike must be >= 0, got {strike}")


def payoff_call(spot: float, strike: float) -> float:
    """
    Vanilla call payoff.

    [T1] Call payoff: max(S - K, 0)
    """
    _check_strike(strike)
    return max(spot - strike, 0.0)


def payoff_put(spot: float, strike: float) -> float:
    """
    Vanilla put payoff.

    [T1] Put payoff: max(K - S, 0)
    """
    _check_strike(strike)
    return max(strike - spot, 0.0)


def payoff_digital_call(spot: float, strike: float) -> float:
    """Cash-or-nothing call: 1 if S > K else 0."""
    _check_strike(strike)
    return 1.0 if spot > strike else 0.0


def payoff_digital_put(spot: float, strike: float) -> float:
    """Cash-or-nothing put: 1 if S < K else 0."""
    _check_strike(strike)
    return 1.0 if spot < strike else 0.0


_PAYOFFS: dict[PayoffType, PayoffFunc] = {
    PayoffType.CALL: payoff_call,
    PayoffType.PUT: payoff_put,
    PayoffType.DIGITAL_CALL: payoff_digital_call,
    PayoffType.DIGITAL_PUT: payoff_digital_put,
}


def get_payoff(payoff_type: "PayoffType | str | PayoffFunc") -> PayoffFunc:
    """
    Resolve a payoff type to its function.

    Parameters
    ----------
    payoff_type : PayoffType, str or callable
        Enum member, its string value (e.g. "call"), or a payoff function
        (returned unchanged)

    Returns
    -------
    Callable[[float, float], float]
        Function(terminal_price, strike) -> payoff

    Raises
    ------
    InvalidArgumentError
        If the payoff type is unknown
    """
    if callable(payoff_type):
        return payoff_type
    try:
        return _PAYOFFS[PayoffType(payoff_type)]
    except ValueError:
        available = ", ".join(p.value for p in PayoffType)
        raise InvalidArgumentError(
            f"CRITICAL: unknown payoff '{payoff_type}'. Available: {available}"
        ) from None
