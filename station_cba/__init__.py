"""
Fire Station Cost-Benefit Engine.

This package evaluates proposed fire stations as capital investments: it turns
a station's cost/savings profile and a set of economic assumptions into an
escalated, discounted cash-flow series and derives NPV, IRR, payback period,
ROI and benefit-cost ratio from it.

Architecture:
    - core.profiles: Input records (StationProfile, EconomicAssumptions)
    - core.cash_flows: Cash-flow generator (CashFlowSeries)
    - metrics: Scalar calculators (NPV/ROI/BCR, IRR solver, payback)
    - engine: evaluate() orchestration and FinancialMetrics result
    - analysis: Batch callers (Monte Carlo risk, portfolio comparison)

Quick start:
    from station_cba import evaluate
    from station_cba.data import reference_stations, reference_assumptions

    assumptions = reference_assumptions()
    for station in reference_stations():
        metrics = evaluate(station, assumptions)
        print(f"{station.station_id}: NPV = {metrics.npv:.0f} M, IRR = {metrics.irr_percent:.2f}%")
"""

from station_cba.core.errors import InvalidAssumptions, UndefinedRatio
from station_cba.core.profiles import StationProfile, EconomicAssumptions
from station_cba.core.cash_flows import CashFlowSeries, generate_cash_flows
from station_cba.metrics.irr import IRRResult, IRRStatus, solve_irr
from station_cba.engine import FinancialMetrics, MetricIssue, evaluate, evaluate_stations

__version__ = "0.1.0"

__all__ = [
    'InvalidAssumptions',
    'UndefinedRatio',
    'StationProfile',
    'EconomicAssumptions',
    'CashFlowSeries',
    'generate_cash_flows',
    'IRRResult',
    'IRRStatus',
    'solve_irr',
    'FinancialMetrics',
    'MetricIssue',
    'evaluate',
    'evaluate_stations',
]
