"""
Property-based testing using Hypothesis.

These tests verify estimator invariants across randomly generated inputs:
Welford/combine agreement, determinism under a fixed seed, CI symmetry and
extremum ordering.

Modules:
    test_estimator_properties: Monte Carlo estimator and statistics properties
"""
