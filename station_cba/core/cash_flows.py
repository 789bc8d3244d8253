"""
Cash-flow generator: StationProfile + EconomicAssumptions -> CashFlowSeries.

Year 0 carries the setup cost as a negative outlay. Every following year
carries the station's net annual savings, escalated by population growth,
demand escalation and inflation, and scaled by a decaying utilization factor:

    escalation(t)  = (1 + g_pop)^t * (1 + g_demand)^t * (1 + i)^t
    utilization(t) = capacity_factor * CAPACITY_DECAY^t
    nominal[t]     = net_annual_savings * escalation(t) * utilization(t)
    discounted[t]  = nominal[t] / (1 + r)^t
    cumulative[t]  = discounted[0] + ... + discounted[t]

The generator is a pure function: the same inputs always yield the same
series, and nothing outside the returned object is touched.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from station_cba.core.profiles import StationProfile, EconomicAssumptions
from station_cba.settings import CAPACITY_DECAY


def _read_only(values: np.ndarray) -> np.ndarray:
    values = np.array(values, dtype=float)
    values.setflags(write=False)
    return values


@dataclass(frozen=True)
class CashFlowSeries:
    """
    Year-indexed cash flows of one station evaluation.

    All three arrays have length analysis_period + 1 and are read-only.

    Attributes:
        nominal: Undiscounted cash flows; nominal[0] = -setup_cost [M].
        discounted: Present values nominal[t] / (1 + discount_rate)^t [M].
        cumulative: Running sum of discounted [M].
        discount_rate: Rate used to build `discounted`.
    """

    nominal: np.ndarray
    discounted: np.ndarray
    cumulative: np.ndarray
    discount_rate: float

    def __post_init__(self) -> None:
        lengths = {len(self.nominal), len(self.discounted), len(self.cumulative)}
        if len(lengths) != 1:
            raise ValueError(
                f"Length mismatch: nominal={len(self.nominal)}, "
                f"discounted={len(self.discounted)}, "
                f"cumulative={len(self.cumulative)}"
            )
        object.__setattr__(self, 'nominal', _read_only(self.nominal))
        object.__setattr__(self, 'discounted', _read_only(self.discounted))
        object.__setattr__(self, 'cumulative', _read_only(self.cumulative))

    @property
    def analysis_period(self) -> int:
        """Number of years after year 0."""
        return len(self.nominal) - 1

    @property
    def years(self) -> np.ndarray:
        """Year indices [0, 1, ..., analysis_period]."""
        return np.arange(len(self.nominal))

    def to_frame(self):
        """
        Export the series as a table for reporting callers.

        Returns:
            pandas.DataFrame indexed by year with columns 'nominal',
            'discounted', 'cumulative' and 'cumulative_nominal'.

        Raises:
            ImportError: If pandas is not installed (pip install -e .[tables]).
        """
        import pandas as pd

        return pd.DataFrame(
            {
                'nominal': self.nominal,
                'discounted': self.discounted,
                'cumulative': self.cumulative,
                'cumulative_nominal': np.cumsum(self.nominal),
            },
            index=pd.Index(self.years, name='year'),
        )


def generate_cash_flows(
    station: StationProfile,
    assumptions: EconomicAssumptions,
    capacity_decay: float = CAPACITY_DECAY,
) -> CashFlowSeries:
    """
    Build the nominal, discounted and cumulative cash flows of a station.

    Args:
        station:
            Station cost/savings profile. capacity_factor is expected in [0, 1];
            this is the caller's responsibility and is not checked here.

        assumptions:
            Economic assumptions (validated on construction, so discount_rate > -1
            and analysis_period >= 1 hold here).

        capacity_decay:
            Annual retention of effective capacity. Default: settings.CAPACITY_DECAY.
            Pass 1.0 to model a station without capacity degradation.

    Returns:
        CashFlowSeries with analysis_period + 1 entries per array.
    """
    n_years = assumptions.analysis_period
    years = np.arange(1, n_years + 1, dtype=float)

    population_factor = (1 + assumptions.population_growth) ** years
    demand_factor = (1 + assumptions.demand_escalation) ** years
    inflation_factor = (1 + assumptions.inflation_rate) ** years
    escalated_savings = station.net_annual_savings * population_factor * demand_factor * inflation_factor

    utilization_factor = station.capacity_factor * capacity_decay ** years

    nominal = np.empty(n_years + 1)
    nominal[0] = -station.setup_cost
    nominal[1:] = escalated_savings * utilization_factor

    discounted = np.empty(n_years + 1)
    discounted[0] = nominal[0]
    discounted[1:] = nominal[1:] / (1 + assumptions.discount_rate) ** years

    return CashFlowSeries(
        nominal=nominal,
        discounted=discounted,
        cumulative=np.cumsum(discounted),
        discount_rate=assumptions.discount_rate,
    )
