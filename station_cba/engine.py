"""
Station evaluation: StationProfile + EconomicAssumptions -> FinancialMetrics.

evaluate() is the single entry point used by reports, dashboards and risk
analyses. It runs the pipeline

    generate_cash_flows -> NPV / ROI / BCR -> IRR solver -> payback

and never aborts on a pathological station. Undefined outcomes are returned
as values and listed in FinancialMetrics.issues:

    NON_CONVERGENT_IRR   irr.status is not CONVERGED
    UNDEFINED_ROI        setup cost is zero; roi holds +inf/-inf/nan
    UNDEFINED_RATIO      no discounted costs; benefit_cost_ratio holds +inf/nan
    NO_PAYBACK           payback_period is inf

Sentinels follow IEEE division: x / 0 is +inf or -inf by the sign of x, and
0 / 0 is nan.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from station_cba.core.cash_flows import CashFlowSeries, generate_cash_flows
from station_cba.core.errors import UndefinedRatio
from station_cba.core.profiles import StationProfile, EconomicAssumptions
from station_cba.metrics.irr import IRRResult, solve_irr
from station_cba.metrics.payback import payback_period, discounted_payback_period
from station_cba.metrics.ratios import net_present_value, return_on_investment, benefit_cost_ratio

logger = logging.getLogger(__name__)


class MetricIssue(Enum):
    """Metric that could not be computed as a finite, well-defined value."""

    NON_CONVERGENT_IRR = 'non_convergent_irr'
    UNDEFINED_ROI = 'undefined_roi'
    UNDEFINED_RATIO = 'undefined_ratio'
    NO_PAYBACK = 'no_payback'


@dataclass(frozen=True)
class FinancialMetrics:
    """
    Financial metrics of one station under one set of assumptions.

    Attributes:
        station_id: Identifier of the evaluated station.
        npv: Net present value, sum of discounted cash flows [M].
        irr: IRR solver result (rate in percent plus status).
        payback_period: Undiscounted payback [years]; inf if never reached.
        discounted_payback_period: Payback on discounted flows [years].
        roi: Undiscounted return on investment [%].
        benefit_cost_ratio: Discounted benefits / discounted costs [-].
        cash_flows: The series the metrics were derived from.
        issues: Undefined or non-convergent outcomes, empty if none.
    """

    station_id: str
    npv: float
    irr: IRRResult
    payback_period: float
    discounted_payback_period: float
    roi: float
    benefit_cost_ratio: float
    cash_flows: CashFlowSeries
    issues: Tuple[MetricIssue, ...] = ()

    @property
    def irr_percent(self) -> float:
        return self.irr.rate

    @property
    def irr_converged(self) -> bool:
        return self.irr.converged

    @property
    def ok(self) -> bool:
        """True if every metric is defined and the IRR converged."""
        return not self.issues

    def as_dict(self) -> Dict[str, Any]:
        """
        Flatten the scalar metrics for reporting callers.

        Returns:
            {
                'station_id': str,
                'npv': float,                        # [M]
                'irr': float,                        # [%]
                'irr_status': str,
                'irr_iterations': int,
                'payback_period': float,             # [years]
                'discounted_payback_period': float,  # [years]
                'roi': float,                        # [%]
                'benefit_cost_ratio': float,
                'issues': [str, ...],
            }
        """
        return {
            'station_id': self.station_id,
            'npv': self.npv,
            'irr': self.irr.rate,
            'irr_status': self.irr.status.value,
            'irr_iterations': self.irr.iterations,
            'payback_period': self.payback_period,
            'discounted_payback_period': self.discounted_payback_period,
            'roi': self.roi,
            'benefit_cost_ratio': self.benefit_cost_ratio,
            'issues': [issue.value for issue in self.issues],
        }


def _unbounded(numerator: float) -> float:
    if numerator == 0:
        return math.nan
    return math.copysign(math.inf, numerator)


def evaluate(station: StationProfile, assumptions: EconomicAssumptions) -> FinancialMetrics:
    """
    Evaluate one station.

    Args:
        station: Station cost/savings profile.
        assumptions: Economic assumptions of the run.

    Returns:
        FinancialMetrics. Never raises for undefined ratios or a
        non-convergent IRR; see the module docstring for how these are reported.
    """
    cash_flows = generate_cash_flows(station, assumptions)
    issues: List[MetricIssue] = []

    npv = net_present_value(cash_flows.discounted)

    try:
        roi = return_on_investment(cash_flows.nominal)
    except UndefinedRatio as exc:
        logger.warning("%s: %s", station.station_id, exc)
        roi = _unbounded(exc.numerator)
        issues.append(MetricIssue.UNDEFINED_ROI)

    try:
        bcr = benefit_cost_ratio(cash_flows.discounted)
    except UndefinedRatio as exc:
        logger.warning("%s: %s", station.station_id, exc)
        bcr = _unbounded(exc.numerator)
        issues.append(MetricIssue.UNDEFINED_RATIO)

    irr = solve_irr(cash_flows.nominal)
    if not irr.converged:
        issues.append(MetricIssue.NON_CONVERGENT_IRR)

    payback = payback_period(cash_flows.nominal)
    if math.isinf(payback):
        issues.append(MetricIssue.NO_PAYBACK)

    logger.debug(
        "%s: NPV=%.2f IRR=%.2f%% (%s) payback=%.2f",
        station.station_id, npv, irr.rate, irr.status.value, payback,
    )

    return FinancialMetrics(
        station_id=station.station_id,
        npv=npv,
        irr=irr,
        payback_period=payback,
        discounted_payback_period=discounted_payback_period(cash_flows.discounted),
        roi=roi,
        benefit_cost_ratio=bcr,
        cash_flows=cash_flows,
        issues=tuple(issues),
    )


def evaluate_stations(
    stations: Iterable[StationProfile],
    assumptions: EconomicAssumptions,
) -> List[FinancialMetrics]:
    """Evaluate several stations under the same assumptions, in input order."""
    return [evaluate(station, assumptions) for station in stations]
