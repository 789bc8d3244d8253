"""
Comparative analysis across a portfolio of stations.

Combines per-station FinancialMetrics (and optionally a MonteCarloResult) into
efficiency metrics, rankings and portfolio totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from station_cba.analysis.monte_carlo import MonteCarloResult
from station_cba.core.profiles import StationProfile
from station_cba.engine import FinancialMetrics
from station_cba.settings import CURRENCY_UNIT


@dataclass(frozen=True)
class PortfolioComparison:
    """
    Rankings and totals of a station portfolio.

    Rankings list station ids from best to worst.

    Attributes:
        station_ids: Stations in input order.
        npv_per_capita: NPV per person served, in currency units.
        risk_adjusted_return: NPV / Monte Carlo NPV std; None without Monte Carlo.
        npv_ranking: By NPV, descending.
        irr_ranking: By IRR, descending (non-convergent IRRs last).
        efficiency_ranking: By NPV per capita, descending.
        risk_ranking: By risk-adjusted return, descending; None without Monte Carlo.
        total_investment: Sum of setup costs [M].
        total_npv: Sum of NPVs [M].
        portfolio_irr: Mean IRR of the stations [%].
        total_population_served: Sum of service populations.
    """

    station_ids: Tuple[str, ...]
    npv_per_capita: Tuple[float, ...]
    risk_adjusted_return: Optional[Tuple[float, ...]]
    npv_ranking: Tuple[str, ...]
    irr_ranking: Tuple[str, ...]
    efficiency_ranking: Tuple[str, ...]
    risk_ranking: Optional[Tuple[str, ...]]
    total_investment: float
    total_npv: float
    portfolio_irr: float
    total_population_served: int

    @property
    def portfolio_roi(self) -> float:
        """Total NPV relative to total investment [%]."""
        if self.total_investment == 0:
            return float('nan')
        return self.total_npv / self.total_investment * 100

    def as_dict(self) -> Dict[str, Any]:
        return {
            'station_ids': list(self.station_ids),
            'npv_per_capita': list(self.npv_per_capita),
            'risk_adjusted_return': None if self.risk_adjusted_return is None else list(self.risk_adjusted_return),
            'npv_ranking': list(self.npv_ranking),
            'irr_ranking': list(self.irr_ranking),
            'efficiency_ranking': list(self.efficiency_ranking),
            'risk_ranking': None if self.risk_ranking is None else list(self.risk_ranking),
            'total_investment': self.total_investment,
            'total_npv': self.total_npv,
            'portfolio_irr': self.portfolio_irr,
            'portfolio_roi': self.portfolio_roi,
            'total_population_served': self.total_population_served,
        }


def _rank(station_ids: Sequence[str], values: np.ndarray) -> Tuple[str, ...]:
    # Stable descending sort; nan sorts last
    keys = np.where(np.isnan(values), -np.inf, values)
    order = np.argsort(-keys, kind='stable')
    return tuple(station_ids[i] for i in order)


def compare_stations(
    stations: Sequence[StationProfile],
    metrics: Sequence[FinancialMetrics],
    monte_carlo: Optional[MonteCarloResult] = None,
) -> PortfolioComparison:
    """
    Compare evaluated stations.

    Args:
        stations:
            Station profiles, same order as metrics.

        metrics:
            evaluate() results, one per station.

        monte_carlo:
            Optional risk analysis over the same stations (same column order).
            Enables risk_adjusted_return and risk_ranking.

    Returns:
        PortfolioComparison.

    Raises:
        ValueError: If the inputs disagree in length or station order.
    """
    if len(stations) != len(metrics):
        raise ValueError(f"Length mismatch: stations={len(stations)}, metrics={len(metrics)}")
    station_ids = tuple(station.station_id for station in stations)
    if tuple(m.station_id for m in metrics) != station_ids:
        raise ValueError("Metrics are not in the same station order as the profiles")
    if monte_carlo is not None and monte_carlo.station_ids != station_ids:
        raise ValueError(
            f"Monte Carlo stations {monte_carlo.station_ids} do not match {station_ids}"
        )

    npv = np.array([m.npv for m in metrics], dtype=float)
    irr = np.array([m.irr.rate if m.irr.converged else np.nan for m in metrics], dtype=float)
    population = np.array([s.service_population for s in stations], dtype=float)
    npv_per_capita = npv * CURRENCY_UNIT / population

    risk_adjusted = None
    risk_ranking = None
    if monte_carlo is not None:
        with np.errstate(divide='ignore', invalid='ignore'):
            risk_adjusted = npv / monte_carlo.npv_std
        risk_ranking = _rank(station_ids, risk_adjusted)
        risk_adjusted = tuple(risk_adjusted.tolist())

    return PortfolioComparison(
        station_ids=station_ids,
        npv_per_capita=tuple(npv_per_capita.tolist()),
        risk_adjusted_return=risk_adjusted,
        npv_ranking=_rank(station_ids, npv),
        irr_ranking=_rank(station_ids, irr),
        efficiency_ranking=_rank(station_ids, npv_per_capita),
        risk_ranking=risk_ranking,
        total_investment=float(sum(s.setup_cost for s in stations)),
        total_npv=float(npv.sum()),
        portfolio_irr=float(np.nanmean(irr)) if not np.all(np.isnan(irr)) else float('nan'),
        total_population_served=int(sum(s.service_population for s in stations)),
    )
