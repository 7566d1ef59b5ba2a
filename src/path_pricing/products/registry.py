"""
Product Registry - named catalogue of path-dependent options.

Maps product names to (payoff, aggregator) pairs so that callers can build
and price an option from a name plus market parameters.
"""

import logging
from typing import Optional

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import InvalidArgumentError
from path_pricing.options.payoffs.aggregators import AggregatorType
from path_pricing.options.payoffs.base import PayoffType
from path_pricing.options.simulation.gbm import MarketParameters
from path_pricing.options.simulation.statistics import MCStats
from path_pricing.products.path_dependent import PathDependentOption
from path_pricing.validation.gates import ValidationEngine

logger = logging.getLogger(__name__)

_SIM = SETTINGS.simulation


class ProductRegistry:
    """
    Registry of named path-dependent products.

    Parameters
    ----------
    validation_engine : ValidationEngine, optional
        Gates applied by price(). Uses the default gates if not provided.

    Examples
    --------
    >>> market = MarketParameters(100.0, 0.05, 0.2, 0.0, 1.0)
    >>> registry = ProductRegistry()
    >>> option = registry.create("lookback_call", market)
    >>> type(option.aggregator).__name__
    'RunningMin'
    """

    PRODUCTS: dict[str, tuple[PayoffType, AggregatorType]] = {
        # Floating-strike lookbacks: the extremum is the strike
        "lookback_call": (PayoffType.CALL, AggregatorType.MINIMUM),
        "lookback_put": (PayoffType.PUT, AggregatorType.MAXIMUM),
        "digital_lookback_call": (PayoffType.DIGITAL_CALL, AggregatorType.MINIMUM),
        "digital_lookback_put": (PayoffType.DIGITAL_PUT, AggregatorType.MAXIMUM),
        # Floating-strike Asians: the running average is the strike
        "asian_arithmetic_call": (PayoffType.CALL, AggregatorType.ARITHMETIC),
        "asian_arithmetic_put": (PayoffType.PUT, AggregatorType.ARITHMETIC),
        "asian_geometric_call": (PayoffType.CALL, AggregatorType.GEOMETRIC),
        "asian_geometric_put": (PayoffType.PUT, AggregatorType.GEOMETRIC),
    }

    def __init__(self, validation_engine: Optional[ValidationEngine] = None):
        self._validation_engine = validation_engine or ValidationEngine()

    @classmethod
    def available_products(cls) -> list[str]:
        """Sorted product names."""
        return sorted(cls.PRODUCTS)

    def create(self, name: str, market: MarketParameters) -> PathDependentOption:
        """
        Build the named option.

        Raises
        ------
        InvalidArgumentError
            If the product name is unknown
        """
        if name not in self.PRODUCTS:
            available = ", ".join(self.available_products())
            raise InvalidArgumentError(
                f"CRITICAL: unknown product '{name}'. Available: {available}"
            )
        payoff_type, aggregator_type = self.PRODUCTS[name]
        return PathDependentOption(market, payoff_type, aggregator_type)

    def price(
        self,
        name: str,
        market: MarketParameters,
        n_paths: int = _SIM.n_paths,
        n_steps: int = _SIM.n_steps,
        seed: int = _SIM.seed,
        antithetic: bool = _SIM.antithetic,
        validate: bool = True,
    ) -> MCStats:
        """
        Price the named option by Monte Carlo.

        Runs the validation gates by default; raises SimulationError on HALT.
        """
        stats = self.create(name, market).price_mc(n_paths, n_steps, seed, antithetic)
        logger.debug("Priced %s: %.6f (SE %.6f)", name, stats.estimate, stats.standard_error)

        if validate:
            return self._validation_engine.validate_and_raise(stats, product=name)
        return stats
