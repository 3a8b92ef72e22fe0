"""Monte Carlo simulation"""

from .monte_carlo import simulate, simulate_terminal_price

__all__ = ["simulate", "simulate_terminal_price"]
