"""
Path aggregators for path-dependent options.

An aggregator folds the simulated prices of one path into a single
statistic (running mean, maximum or minimum). The fold starts from the
initial spot and is updated once per discretization step with a 1-based
step index, so averages include the starting price.

Each aggregator provides:
- update(): scalar fold, called once per step
- reduce_path(): vectorized reduction of a whole path, which must match
  folding update() along the same path and step schedule (see anti_patterns tests)
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

import numpy as np

from path_pricing.errors import InvalidArgumentError


class AggregatorType(Enum):
    """Aggregator type enumeration."""

    ARITHMETIC = "arithmetic"
    GEOMETRIC = "geometric"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"


class BaseAggregator(ABC):
    """
    Abstract base class for path aggregators.

    Subclasses must implement update(). Overriding reduce_path() with a
    vectorized reduction is optional but gives large speedups in the
    simulation loop.
    """

    #: Whether the aggregate is a path extremum (lookback style)
    is_lookback: bool = False

    @abstractmethod
    def update(self, aggregate: float, price: float, step: float) -> float:
        """
        Fold one more price into the aggregate.

        Parameters
        ----------
        aggregate : float
            Aggregate up to the previous step
        price : float
            Current price
        step : float
            1-based step index (fractional for intra-step observations)

        Returns
        -------
        float
            Updated aggregate
        """
        pass

    def reduce_path(
        self,
        initial: float,
        prices: np.ndarray,
        steps: Optional[np.ndarray] = None,
    ) -> float:
        """
        Aggregate a whole path.

        Default implementation folds update() along the path.

        Parameters
        ----------
        initial : float
            Starting aggregate (the spot)
        prices : np.ndarray
            Observed prices in temporal order, shape (n_obs,)
        steps : np.ndarray, optional
            Step index handed to update() with each price, shape (n_obs,).
            Defaults to 1, 2, ..., n_obs. Fractional indices mark
            intra-step observations.

        Returns
        -------
        float
            Final aggregate
        """
        if steps is None:
            steps = np.arange(1, len(prices) + 1, dtype=float)
        elif len(steps) != len(prices):
            raise InvalidArgumentError(
                f"CRITICAL: steps length {len(steps)} != prices length {len(prices)}"
            )
        aggregate = initial
        for price, step in zip(prices, steps):
            aggregate = self.update(aggregate, float(price), float(step))
        return aggregate


class ArithmeticMean(BaseAggregator):
    """
    Running arithmetic mean.

    [T1] A_k = (A_{k-1} * k + S_k) / (k + 1)
    """

    def update(self, aggregate: float, price: float, step: float) -> float:
        return (aggregate * step + price) / (step + 1.0)

    def reduce_path(self, initial, prices, steps=None) -> float:
        if steps is not None:
            return super().reduce_path(initial, prices, steps)
        return float((initial + prices.sum()) / (len(prices) + 1))


class GeometricMean(BaseAggregator):
    """
    Running geometric mean.

    [T1] G_k = (G_{k-1}^k * S_k)^(1/(k+1)), evaluated in log space so that
    G^k does not overflow on long paths.
    """

    def update(self, aggregate: float, price: float, step: float) -> float:
        return float(np.exp((step * np.log(aggregate) + np.log(price)) / (step + 1.0)))

    def reduce_path(self, initial, prices, steps=None) -> float:
        if steps is not None:
            return super().reduce_path(initial, prices, steps)
        log_sum = np.log(initial) + np.log(prices).sum()
        return float(np.exp(log_sum / (len(prices) + 1)))


class RunningMax(BaseAggregator):
    """Running maximum (lookback on the high)."""

    is_lookback = True

    def update(self, aggregate: float, price: float, step: float) -> float:
        return max(aggregate, price)

    def reduce_path(self, initial, prices, steps=None) -> float:
        # index-free: the max ignores the step schedule
        if len(prices) == 0:
            return initial
        return max(initial, float(prices.max()))


class RunningMin(BaseAggregator):
    """Running minimum (lookback on the low)."""

    is_lookback = True

    def update(self, aggregate: float, price: float, step: float) -> float:
        return min(aggregate, price)

    def reduce_path(self, initial, prices, steps=None) -> float:
        if len(prices) == 0:
            return initial
        return min(initial, float(prices.min()))


_AGGREGATORS: dict[AggregatorType, type[BaseAggregator]] = {
    AggregatorType.ARITHMETIC: ArithmeticMean,
    AggregatorType.GEOMETRIC: GeometricMean,
    AggregatorType.MAXIMUM: RunningMax,
    AggregatorType.MINIMUM: RunningMin,
}


def get_aggregator(aggregator: "AggregatorType | str | BaseAggregator") -> BaseAggregator:
    """
    Resolve an aggregator enum member or name to an instance.

    Parameters
    ----------
    aggregator : AggregatorType, str or BaseAggregator
        Enum member, its string value (e.g. "minimum"), or an instance
        (returned unchanged)

    Returns
    -------
    BaseAggregator
        Aggregator instance

    Raises
    ------
    InvalidArgumentError
        If the aggregator type is unknown
    """
    if isinstance(aggregator, BaseAggregator):
        return aggregator
    try:
        return _AGGREGATORS[AggregatorType(aggregator)]()
    except ValueError:
        available = ", ".join(a.value for a in AggregatorType)
        raise InvalidArgumentError(
            f"CRITICAL: unknown aggregator '{aggregator}'. Available: {available}"
        ) from None
