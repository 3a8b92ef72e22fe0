"""
quantdash - Quantitative analytics core for a financial dashboard

Generates synthetic price series, annotates them with technical indicators,
prices illustrative options, runs Monte Carlo simulations, weights toy
portfolios and backtests a moving-average crossover strategy. Uploaded CSV
files drive the same analytics as "custom" data.
"""

__version__ = "0.1.0"
__author__ = "quantdash Team"
