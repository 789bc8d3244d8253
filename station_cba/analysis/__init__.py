"""Batch analyses built on engine.evaluate(): Monte Carlo risk and portfolio comparison."""

from station_cba.analysis.monte_carlo import MonteCarloResult, run_monte_carlo
from station_cba.analysis.portfolio import PortfolioComparison, compare_stations

__all__ = [
    'MonteCarloResult',
    'run_monte_carlo',
    'PortfolioComparison',
    'compare_stations',
]
