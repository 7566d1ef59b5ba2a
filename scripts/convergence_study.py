#!/usr/bin/env python3
"""
Convergence study for a path-dependent product.

Prices a registry product at increasing path counts and compares each
estimate with a reference price (by default the Brownian-bridge reference,
which requires a lookback product; pass --reference for Asians).

Usage:
    python scripts/convergence_study.py --product lookback_call --antithetic
    python scripts/convergence_study.py --product asian_arithmetic_call \\
        --reference 5.8 --paths 1000 4000 16000 --csv out.csv
"""

import argparse
import logging
import sys

import pandas as pd

from path_pricing.errors import PricingError
from path_pricing.options.simulation.gbm import MarketParameters
from path_pricing.options.simulation.monte_carlo import estimate_convergence_rate
from path_pricing.products.registry import ProductRegistry


def main():
    parser = argparse.ArgumentParser(description="Monte Carlo convergence study")
    parser.add_argument(
        "--product",
        default="lookback_call",
        choices=ProductRegistry.available_products(),
        help="Registry product name",
    )
    parser.add_argument("--spot", type=float, default=100.0)
    parser.add_argument("--rate", type=float, default=0.05)
    parser.add_argument("--volatility", type=float, default=0.20)
    parser.add_argument("--valuation-time", type=float, default=0.0)
    parser.add_argument("--maturity", type=float, default=1.0)
    parser.add_argument(
        "--paths",
        type=int,
        nargs="+",
        default=[1_000, 2_000, 5_000, 10_000, 20_000],
        help="Path counts to test",
    )
    parser.add_argument("--steps", type=int, default=50)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--antithetic", action="store_true", help="Use antithetic variates")
    parser.add_argument("--reference", type=float, default=None, help="Reference price")
    parser.add_argument("--csv", default=None, help="Write the table to this CSV path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        market = MarketParameters(
            spot=args.spot,
            rate=args.rate,
            volatility=args.volatility,
            valuation_time=args.valuation_time,
            maturity=args.maturity,
        )
        option = ProductRegistry().create(args.product, market)
        frame = option.convergence_analysis(
            path_counts=tuple(args.paths),
            n_steps=args.steps,
            seed=args.seed,
            antithetic=args.antithetic,
            reference=args.reference,
        )
    except PricingError as error:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)

    with pd.option_context("display.float_format", "{:.6f}".format):
        print(frame.to_string(index=False))

    if len(frame) >= 2:
        print(f"\nLog-log convergence rate: {estimate_convergence_rate(frame):.3f} (theory -0.5)")

    if args.csv:
        frame.to_csv(args.csv, index=False)
        print(f"Wrote: {args.csv}")


if __name__ == "__main__":
    main()
