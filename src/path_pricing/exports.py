"""
Flat numeric boundary for spreadsheet-style hosts.

Every export takes plain scalars and returns ONE float. Failures never
propagate to the host: any exception becomes NaN, and the first failure
since the last reset is logged at ERROR (later ones at DEBUG) so that a
sheet with thousands of failing cells does not flood the log.

Naming:
    lb_{call|put}_{price|delta|gamma|theta|rho|vega}_mc[_vr][_se|_ci_low|_ci_high]

- ``_vr`` selects antithetic variates
- the suffix picks the MCStats field (default: the estimate)

Plus ``lb_call_price_bb_asymptotic`` / ``lb_put_price_bb_asymptotic`` taking
only the five market scalars.

Examples
--------
>>> from path_pricing.exports import get_export
>>> price = get_export("lb_call_price_mc_vr")
>>> price(100.0, 0.05, 0.2, 0.0, 1.0, 1000, 50, 42) > 0
True
"""

import logging
from collections.abc import Callable

from path_pricing.products.path_dependent import (
    PathDependentOption,
    make_lookback_call,
    make_lookback_put,
)

logger = logging.getLogger(__name__)

OptionFactory = Callable[[float, float, float, float, float], PathDependentOption]

_FACTORIES: dict[str, OptionFactory] = {
    "call": make_lookback_call,
    "put": make_lookback_put,
}

_QUANTITIES = ("price", "delta", "gamma", "theta", "rho", "vega")

#: Export-name suffix -> MCStats attribute
_FIELDS = {
    "": "estimate",
    "_se": "standard_error",
    "_ci_low": "ci_low",
    "_ci_high": "ci_high",
}


class ErrorReporter:
    """
    One-shot diagnostic latch owned by the export boundary.

    The first reported failure is logged at ERROR and latches; later
    failures are logged at DEBUG until reset() is called.
    """

    def __init__(self) -> None:
        self._latched = False

    @property
    def latched(self) -> bool:
        return self._latched

    def report(self, export_name: str, error: Exception) -> None:
        if not self._latched:
            self._latched = True
            logger.error(
                "%s failed: %s: %s (further errors logged at DEBUG until reset)",
                export_name,
                type(error).__name__,
                error,
            )
        else:
            logger.debug("%s failed: %s: %s", export_name, type(error).__name__, error)

    def reset(self) -> None:
        self._latched = False


_REPORTER = ErrorReporter()


def reset_error_flag() -> None:
    """Re-arm the one-shot ERROR diagnostic."""
    _REPORTER.reset()


def _make_mc_export(
    name: str,
    factory: OptionFactory,
    quantity: str,
    antithetic: bool,
    field: str,
) -> Callable[..., float]:
    method = f"{quantity}_mc"

    def export(
        spot: float,
        rate: float,
        volatility: float,
        valuation_time: float,
        maturity: float,
        n_paths: int,
        n_steps: int,
        seed: int,
    ) -> float:
        try:
            option = factory(spot, rate, volatility, valuation_time, maturity)
            stats = getattr(option, method)(
                n_paths=int(n_paths),
                n_steps=int(n_steps),
                seed=int(seed),
                antithetic=antithetic,
            )
            return float(getattr(stats, field))
        except Exception as error:
            _REPORTER.report(name, error)
            return float("nan")

    export.__name__ = name
    export.__qualname__ = name
    export.__doc__ = (
        f"Lookback {quantity} ({'antithetic' if antithetic else 'plain'} MC), "
        f"returns the {field}; NaN on failure."
    )
    return export


def _make_bridge_export(name: str, factory: OptionFactory) -> Callable[..., float]:
    def export(
        spot: float,
        rate: float,
        volatility: float,
        valuation_time: float,
        maturity: float,
    ) -> float:
        try:
            option = factory(spot, rate, volatility, valuation_time, maturity)
            return float(option.price_bridge_asymptotic())
        except Exception as error:
            _REPORTER.report(name, error)
            return float("nan")

    export.__name__ = name
    export.__qualname__ = name
    export.__doc__ = "Brownian-bridge reference price; NaN on failure."
    return export


def _build_exports() -> dict[str, Callable[..., float]]:
    table: dict[str, Callable[..., float]] = {}
    for kind, factory in _FACTORIES.items():
        for quantity in _QUANTITIES:
            for vr_suffix, antithetic in (("", False), ("_vr", True)):
                for field_suffix, field in _FIELDS.items():
                    name = f"lb_{kind}_{quantity}_mc{vr_suffix}{field_suffix}"
                    table[name] = _make_mc_export(name, factory, quantity, antithetic, field)
        name = f"lb_{kind}_price_bb_asymptotic"
        table[name] = _make_bridge_export(name, factory)
    return table


EXPORTS: dict[str, Callable[..., float]] = _build_exports()


def get_export(name: str) -> Callable[..., float]:
    """
    Look up an export by name.

    Raises
    ------
    KeyError
        If the name is not exported
    """
    if name not in EXPORTS:
        raise KeyError(f"Unknown export '{name}'. {len(EXPORTS)} exports available")
    return EXPORTS[name]
