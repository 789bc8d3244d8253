"""
Reference data set: two proposed stations and the base economic scenario.

Monetary values are in millions of the currency unit.
"""

from typing import List

from station_cba.core.profiles import StationProfile, EconomicAssumptions
from station_cba.settings import DEFAULT_ANALYSIS_PERIOD, DEFAULT_DISCOUNT_RATE


def reference_stations() -> List[StationProfile]:
    """Return the FS-Alpha (urban) and FS-Beta (suburban) station profiles."""
    return [
        StationProfile(
            station_id='FS-Alpha',
            name='Fire Station Alpha (Urban)',
            setup_cost=1650,
            setup_cost_std=165,
            annual_fuel_savings=85,
            annual_maintenance_savings=65,
            annual_personnel_savings=105,
            operational_cost=45,
            capacity_factor=0.85,
            service_population=75000,
        ),
        StationProfile(
            station_id='FS-Beta',
            name='Fire Station Beta (Suburban)',
            setup_cost=1950,
            setup_cost_std=195,
            annual_fuel_savings=100,
            annual_maintenance_savings=75,
            annual_personnel_savings=115,
            operational_cost=52,
            capacity_factor=0.80,
            service_population=95000,
        ),
    ]


def reference_assumptions() -> EconomicAssumptions:
    """Return the base scenario: 3.5 % inflation, 2.5 % population growth, 2 % demand escalation."""
    return EconomicAssumptions(
        inflation_rate=0.035,
        population_growth=0.025,
        demand_escalation=0.02,
        discount_rate=DEFAULT_DISCOUNT_RATE,
        analysis_period=DEFAULT_ANALYSIS_PERIOD,
    )
