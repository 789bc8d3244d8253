"""
Monte Carlo risk analysis over uncertain economic assumptions and setup costs.

Each run samples one economic scenario shared by all stations:

    inflation_rate ~ U[inflation - inflation_std, inflation + inflation_std]
    discount_rate  ~ U[discount - discount_spread, discount + discount_spread]

and, per station, a setup-cost multiplier 1 + cost_uncertainty * N(0, 1).
Every (run, station) pair is evaluated independently with engine.evaluate().

All randomness comes from the numpy Generator passed in by the caller, so a
given seed always reproduces the same trials:

    rng = np.random.default_rng(42)
    mc = run_monte_carlo(stations, assumptions, n_runs=1000, rng=rng)
    print(mc.probability_positive_npv)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from station_cba.core.profiles import StationProfile, EconomicAssumptions
from station_cba.engine import evaluate
from station_cba.settings import (
    DISCOUNT_RATE_SPREAD,
    INFLATION_STD,
    MONTE_CARLO_PERCENTILES,
    MONTE_CARLO_PROGRESS_INTERVAL,
    MONTE_CARLO_RUNS,
    SETUP_COST_UNCERTAINTY,
    VALUE_AT_RISK_PERCENTILE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonteCarloResult:
    """
    Sampled outcomes of a Monte Carlo run.

    Arrays have shape (n_runs, n_stations); column j belongs to station_ids[j].

    Attributes:
        station_ids: Station identifiers in column order.
        npv: Sampled NPV [M].
        irr: Sampled IRR [%] (best estimate when not converged, nan if undefined).
        irr_converged: Whether each IRR solve converged.
    """

    station_ids: Tuple[str, ...]
    npv: np.ndarray
    irr: np.ndarray
    irr_converged: np.ndarray

    @property
    def n_runs(self) -> int:
        return self.npv.shape[0]

    # ------------------------------------------------------------------
    # NPV statistics (per station)
    # ------------------------------------------------------------------

    @property
    def npv_mean(self) -> np.ndarray:
        return self.npv.mean(axis=0)

    @property
    def npv_std(self) -> np.ndarray:
        """Sample standard deviation (ddof=1); zero for a single run."""
        if self.n_runs < 2:
            return np.zeros(self.npv.shape[1])
        return self.npv.std(axis=0, ddof=1)

    def npv_percentiles(self, percentiles: Sequence[float] = MONTE_CARLO_PERCENTILES) -> np.ndarray:
        """NPV percentiles, shape (len(percentiles), n_stations)."""
        return np.percentile(self.npv, percentiles, axis=0)

    @property
    def probability_positive_npv(self) -> np.ndarray:
        """Share of runs with NPV > 0 [%]."""
        return np.mean(self.npv > 0, axis=0) * 100

    def value_at_risk(self, percentile: float = VALUE_AT_RISK_PERCENTILE) -> np.ndarray:
        """NPV at the given lower percentile [M]."""
        return np.percentile(self.npv, percentile, axis=0)

    def expected_shortfall(self, percentile: float = VALUE_AT_RISK_PERCENTILE) -> np.ndarray:
        """Mean NPV of the runs at or below the value at risk [M]."""
        var = self.value_at_risk(percentile)
        shortfall = np.empty(self.npv.shape[1])
        for j in range(self.npv.shape[1]):
            tail = self.npv[:, j][self.npv[:, j] <= var[j]]
            shortfall[j] = tail.mean()
        return shortfall

    # ------------------------------------------------------------------
    # IRR statistics (converged trials only)
    # ------------------------------------------------------------------

    @property
    def non_convergent_irr_count(self) -> np.ndarray:
        """Number of runs per station whose IRR did not converge."""
        return np.sum(~self.irr_converged, axis=0)

    def _converged_irr(self, j: int) -> np.ndarray:
        return self.irr[:, j][self.irr_converged[:, j]]

    @property
    def irr_mean(self) -> np.ndarray:
        """Mean IRR over converged runs [%]; nan where no run converged."""
        mean = np.full(self.irr.shape[1], np.nan)
        for j in range(self.irr.shape[1]):
            values = self._converged_irr(j)
            if values.size:
                mean[j] = values.mean()
        return mean

    @property
    def irr_std(self) -> np.ndarray:
        """Sample standard deviation over converged runs; zero for a single one, nan for none."""
        std = np.full(self.irr.shape[1], np.nan)
        for j in range(self.irr.shape[1]):
            values = self._converged_irr(j)
            if values.size == 1:
                std[j] = 0.0
            elif values.size > 1:
                std[j] = values.std(ddof=1)
        return std

    def irr_percentiles(self, percentiles: Sequence[float] = MONTE_CARLO_PERCENTILES) -> np.ndarray:
        """IRR percentiles over converged runs, shape (len(percentiles), n_stations)."""
        result = np.full((len(percentiles), self.irr.shape[1]), np.nan)
        for j in range(self.irr.shape[1]):
            values = self._converged_irr(j)
            if values.size:
                result[:, j] = np.percentile(values, percentiles)
        return result

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """
        Per-station risk summary.

        Returns:
            {station_id: {'npv_mean', 'npv_std', 'npv_percentiles',
                          'probability_positive_npv', 'value_at_risk_5',
                          'expected_shortfall', 'irr_mean', 'irr_std',
                          'non_convergent_irr'}}
        """
        npv_mean, npv_std = self.npv_mean, self.npv_std
        npv_pct = self.npv_percentiles()
        prob = self.probability_positive_npv
        var, shortfall = self.value_at_risk(), self.expected_shortfall()
        irr_mean, irr_std = self.irr_mean, self.irr_std
        failures = self.non_convergent_irr_count

        return {
            station_id: {
                'npv_mean': float(npv_mean[j]),
                'npv_std': float(npv_std[j]),
                'npv_percentiles': dict(zip(MONTE_CARLO_PERCENTILES, npv_pct[:, j].tolist())),
                'probability_positive_npv': float(prob[j]),
                'value_at_risk_5': float(var[j]),
                'expected_shortfall': float(shortfall[j]),
                'irr_mean': float(irr_mean[j]),
                'irr_std': float(irr_std[j]),
                'non_convergent_irr': int(failures[j]),
            }
            for j, station_id in enumerate(self.station_ids)
        }

    def to_frame(self):
        """
        Long-format table of all trials.

        Returns:
            pandas.DataFrame with columns 'run', 'station_id', 'npv', 'irr',
            'irr_converged'.

        Raises:
            ImportError: If pandas is not installed (pip install -e .[tables]).
        """
        import pandas as pd

        n_runs, n_stations = self.npv.shape
        return pd.DataFrame({
            'run': np.repeat(np.arange(n_runs), n_stations),
            'station_id': np.tile(np.array(self.station_ids, dtype=object), n_runs),
            'npv': self.npv.ravel(),
            'irr': self.irr.ravel(),
            'irr_converged': self.irr_converged.ravel(),
        })


def run_monte_carlo(
    stations: Sequence[StationProfile],
    assumptions: EconomicAssumptions,
    n_runs: int = MONTE_CARLO_RUNS,
    rng: Optional[np.random.Generator] = None,
    inflation_std: float = INFLATION_STD,
    discount_spread: float = DISCOUNT_RATE_SPREAD,
    cost_uncertainty: float = SETUP_COST_UNCERTAINTY,
) -> MonteCarloResult:
    """
    Sample NPV and IRR distributions for a set of stations.

    Args:
        stations:
            Stations to evaluate (at least one).

        assumptions:
            Base economic assumptions; inflation_rate and discount_rate are
            the centres of the sampling bands.

        n_runs:
            Number of trials. Default: 1000.

        rng:
            Random generator. Default: np.random.default_rng() (unseeded).
            Pass a seeded generator for reproducible results.

        inflation_std:
            Half-width of the uniform inflation band. Default: 0.01.

        discount_spread:
            Half-width of the uniform discount-rate band. Default: 0.015.

        cost_uncertainty:
            Standard deviation of the relative setup-cost error. Default: 0.10.

    Returns:
        MonteCarloResult with (n_runs, n_stations) arrays.

    Raises:
        ValueError: If n_runs < 1 or no stations are given.
        InvalidAssumptions: If a sampled discount rate is <= -1.
    """
    if n_runs < 1:
        raise ValueError(f"n_runs must be >= 1, got {n_runs}")
    stations = list(stations)
    if not stations:
        raise ValueError("At least one station is required")
    if rng is None:
        rng = np.random.default_rng()

    n_stations = len(stations)
    npv = np.zeros((n_runs, n_stations))
    irr = np.zeros((n_runs, n_stations))
    irr_converged = np.zeros((n_runs, n_stations), dtype=bool)

    logger.info("Running %d Monte Carlo simulations for %d stations", n_runs, n_stations)

    for run in range(n_runs):
        trial_assumptions = assumptions.replace(
            inflation_rate=rng.uniform(
                assumptions.inflation_rate - inflation_std,
                assumptions.inflation_rate + inflation_std,
            ),
            discount_rate=rng.uniform(
                assumptions.discount_rate - discount_spread,
                assumptions.discount_rate + discount_spread,
            ),
        )

        for j, station in enumerate(stations):
            cost_multiplier = 1 + cost_uncertainty * rng.standard_normal()
            metrics = evaluate(station.with_setup_cost(station.setup_cost * cost_multiplier), trial_assumptions)
            npv[run, j] = metrics.npv
            irr[run, j] = metrics.irr.rate
            irr_converged[run, j] = metrics.irr.converged

        if (run + 1) % MONTE_CARLO_PROGRESS_INTERVAL == 0:
            logger.info("Completed %d simulations", run + 1)

    failures = int(np.sum(~irr_converged))
    if failures:
        logger.warning("IRR did not converge in %d of %d trials", failures, irr_converged.size)

    return MonteCarloResult(
        station_ids=tuple(station.station_id for station in stations),
        npv=npv,
        irr=irr,
        irr_converged=irr_converged,
    )
