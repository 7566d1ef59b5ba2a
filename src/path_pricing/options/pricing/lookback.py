"""
Closed-form prices for continuously monitored floating-strike lookbacks.

Implements the Goldman-Sosin-Gatto formulas without dividends. These serve
as an analytic reference for the Monte Carlo estimators: a discretely
monitored MC lookback sees a coarser extremum than the continuous one, so
its call-on-min price sits BELOW the closed form, while the Brownian-bridge
estimator should land close to it.

References
----------
[T1] Goldman, M. B., Sosin, H. B., & Gatto, M. A. (1979). Path dependent
     options: "Buy at the low, sell at the high". Journal of Finance.
[T1] Hull, J. C. (2018). Options, Futures, and Other Derivatives (10th ed.), Ch. 26.
"""

import numpy as np
from scipy import stats


def _validate_inputs(
    spot: float,
    extremum: float,
    rate: float,
    volatility: float,
    time_to_maturity: float,
) -> None:
    """Validate lookback inputs."""
    if spot <= 0:
        raise ValueError(f"CRITICAL: spot must be > 0, got {spot}")
    if extremum <= 0:
        raise ValueError(f"CRITICAL: running extremum must be > 0, got {extremum}")
    if rate == 0:
        raise ValueError("CRITICAL: rate must be non-zero (formula divides by 2r)")
    if volatility <= 0:
        raise ValueError(f"CRITICAL: volatility must be > 0, got {volatility}")
    if time_to_maturity <= 0:
        raise ValueError(f"CRITICAL: time_to_maturity must be > 0, got {time_to_maturity}")


def lookback_call_floating(
    spot: float,
    running_min: float,
    rate: float,
    volatility: float,
    time_to_maturity: float,
) -> float:
    """
    Price a floating-strike lookback call, payoff S_T - min(S).

    [T1] c = S N(a1) - S σ²/(2r) N(-a1)
             - S_min e^(-rT) [N(a2) - σ²/(2r) e^(Y1) N(-a3)]

    where
        a1 = (ln(S/S_min) + (r + σ²/2)T) / (σ√T)
        a2 = a1 - σ√T
        a3 = (ln(S/S_min) + (-r + σ²/2)T) / (σ√T)
        Y1 = -2 (r - σ²/2) ln(S/S_min) / σ²

    Parameters
    ----------
    spot : float
        Current spot price
    running_min : float
        Minimum observed so far (equal to spot at inception), <= spot
    rate : float
        Risk-free rate (decimal), non-zero
    volatility : float
        Volatility (decimal)
    time_to_maturity : float
        Time to maturity (years)

    Returns
    -------
    float
        Call price

    Examples
    --------
    >>> round(lookback_call_floating(100, 100, 0.05, 0.20, 1.0), 1)
    17.2
    """
    _validate_inputs(spot, running_min, rate, volatility, time_to_maturity)
    if running_min > spot:
        raise ValueError(
            f"CRITICAL: running_min must be <= spot, got {running_min} > {spot}"
        )

    sigma2 = volatility**2
    vol_sqrt_t = volatility * np.sqrt(time_to_maturity)
    log_ratio = np.log(spot / running_min)
    ratio = sigma2 / (2.0 * rate)

    a1 = (log_ratio + (rate + 0.5 * sigma2) * time_to_maturity) / vol_sqrt_t
    a2 = a1 - vol_sqrt_t
    a3 = (log_ratio + (-rate + 0.5 * sigma2) * time_to_maturity) / vol_sqrt_t
    y1 = -2.0 * (rate - 0.5 * sigma2) * log_ratio / sigma2

    price = (
        spot * stats.norm.cdf(a1)
        - spot * ratio * stats.norm.cdf(-a1)
        - running_min
        * np.exp(-rate * time_to_maturity)
        * (stats.norm.cdf(a2) - ratio * np.exp(y1) * stats.norm.cdf(-a3))
    )

    return float(price)


def lookback_put_floating(
    spot: float,
    running_max: float,
    rate: float,
    volatility: float,
    time_to_maturity: float,
) -> float:
    """
    Price a floating-strike lookback put, payoff max(S) - S_T.

    [T1] p = S_max e^(-rT) [N(b1) - σ²/(2r) e^(Y2) N(-b3)]
             + S σ²/(2r) N(-b2) - S N(b2)

    where
        b1 = (ln(S_max/S) + (-r + σ²/2)T) / (σ√T)
        b2 = b1 - σ√T
        b3 = (ln(S_max/S) + (r - σ²/2)T) / (σ√T)
        Y2 = 2 (r - σ²/2) ln(S_max/S) / σ²

    Examples
    --------
    >>> round(lookback_put_floating(100, 100, 0.05, 0.20, 1.0), 1)
    14.3
    """
    _validate_inputs(spot, running_max, rate, volatility, time_to_maturity)
    if running_max < spot:
        raise ValueError(
            f"CRITICAL: running_max must be >= spot, got {running_max} < {spot}"
        )

    sigma2 = volatility**2
    vol_sqrt_t = volatility * np.sqrt(time_to_maturity)
    log_ratio = np.log(running_max / spot)
    ratio = sigma2 / (2.0 * rate)

    b1 = (log_ratio + (-rate + 0.5 * sigma2) * time_to_maturity) / vol_sqrt_t
    b2 = b1 - vol_sqrt_t
    b3 = (log_ratio + (rate - 0.5 * sigma2) * time_to_maturity) / vol_sqrt_t
    y2 = 2.0 * (rate - 0.5 * sigma2) * log_ratio / sigma2

    price = (
        running_max
        * np.exp(-rate * time_to_maturity)
        * (stats.norm.cdf(b1) - ratio * np.exp(y2) * stats.norm.cdf(-b3))
        + spot * ratio * stats.norm.cdf(-b2)
        - spot * stats.norm.cdf(b2)
    )

    return float(price)
