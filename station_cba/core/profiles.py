"""
Input records for a station evaluation.

StationProfile describes one proposed station (one-time setup cost, annual
savings streams, recurring operational cost, utilization). EconomicAssumptions
describes the economic environment shared by all stations in one run.

Both records are immutable. Variants (e.g. Monte Carlo trials with a perturbed
setup cost or inflation rate) are created as copies:

    trial_station = station.with_setup_cost(station.setup_cost * 1.1)
    trial_assumptions = assumptions.replace(inflation_rate=0.04)

Monetary values are in millions of the currency unit (see settings.CURRENCY_UNIT).
"""

from __future__ import annotations

import dataclasses
import numbers
from dataclasses import dataclass

from station_cba.core.errors import InvalidAssumptions
from station_cba.settings import CURRENCY_UNIT, DEFAULT_ANALYSIS_PERIOD, DEFAULT_DISCOUNT_RATE


@dataclass(frozen=True)
class StationProfile:
    """
    Cost and savings profile of one proposed fire station.

    Preconditions (documented, not enforced):
        - setup_cost, savings and operational_cost are positive
        - capacity_factor lies in [0, 1]
        - service_population is a positive integer

    Attributes:
        station_id: Short identifier, e.g. 'FS-Alpha'.
        name: Human-readable station name.
        setup_cost: One-time initial outlay at year 0 [M].
        annual_fuel_savings: Annual fuel savings [M/a].
        annual_maintenance_savings: Annual maintenance savings [M/a].
        annual_personnel_savings: Annual personnel savings [M/a].
        operational_cost: Annual recurring operational cost [M/a].
        capacity_factor: Utilization multiplier [0-1].
        service_population: People served; used by reporting only.
        setup_cost_std: Standard deviation of the setup cost estimate [M].
            Informational; Monte Carlo uses a relative uncertainty instead.
    """

    station_id: str
    name: str
    setup_cost: float
    annual_fuel_savings: float
    annual_maintenance_savings: float
    annual_personnel_savings: float
    operational_cost: float
    capacity_factor: float
    service_population: int
    setup_cost_std: float = 0.0

    @property
    def gross_annual_savings(self) -> float:
        """Sum of fuel, maintenance and personnel savings [M/a]."""
        return self.annual_fuel_savings + self.annual_maintenance_savings + self.annual_personnel_savings

    @property
    def net_annual_savings(self) -> float:
        """Gross annual savings minus operational cost [M/a]."""
        return self.gross_annual_savings - self.operational_cost

    @property
    def cost_per_capita(self) -> float:
        """Setup cost per person served, in currency units (not millions)."""
        return self.setup_cost * CURRENCY_UNIT / self.service_population

    def with_setup_cost(self, setup_cost: float) -> StationProfile:
        """Return a copy of this profile with a different setup cost."""
        return dataclasses.replace(self, setup_cost=setup_cost)


@dataclass(frozen=True)
class EconomicAssumptions:
    """
    Economic environment of an evaluation run.

    All rates are annual and compound yearly.

    Attributes:
        inflation_rate: Annual inflation, typically in [0, 0.1].
        population_growth: Annual growth of the served population.
        demand_escalation: Annual growth of service demand.
        discount_rate: Rate used for present-value discounting. Must be > -1.
        analysis_period: Horizon length [years]. Must be an integer >= 1.

    Raises:
        InvalidAssumptions: On construction, if discount_rate <= -1 or
            analysis_period is not a positive integer.
    """

    inflation_rate: float
    population_growth: float
    demand_escalation: float
    discount_rate: float = DEFAULT_DISCOUNT_RATE
    analysis_period: int = DEFAULT_ANALYSIS_PERIOD

    def __post_init__(self) -> None:
        if self.discount_rate <= -1:
            raise InvalidAssumptions(f"Discount rate must be > -1, got {self.discount_rate}")
        if isinstance(self.analysis_period, bool) or not isinstance(self.analysis_period, numbers.Integral):
            raise InvalidAssumptions(
                f"Analysis period must be an integer number of years, got {self.analysis_period!r}"
            )
        if self.analysis_period < 1:
            raise InvalidAssumptions(f"Analysis period must be >= 1 year, got {self.analysis_period}")

    def replace(self, **changes) -> EconomicAssumptions:
        """Return a validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes)
