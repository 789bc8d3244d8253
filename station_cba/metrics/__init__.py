"""Scalar financial metrics computed from a cash-flow series."""

from station_cba.metrics.ratios import net_present_value, return_on_investment, benefit_cost_ratio
from station_cba.metrics.irr import IRRResult, IRRStatus, npv_at_rate, npv_derivative, solve_irr
from station_cba.metrics.payback import payback_period, discounted_payback_period

__all__ = [
    'net_present_value',
    'return_on_investment',
    'benefit_cost_ratio',
    'IRRResult',
    'IRRStatus',
    'npv_at_rate',
    'npv_derivative',
    'solve_irr',
    'payback_period',
    'discounted_payback_period',
]
