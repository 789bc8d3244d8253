"""Shared fixtures for the cost-benefit engine tests."""

import pytest

from station_cba.core.profiles import StationProfile, EconomicAssumptions
from station_cba.data import reference_stations, reference_assumptions


@pytest.fixture
def stations():
    return reference_stations()


@pytest.fixture
def assumptions():
    return reference_assumptions()


@pytest.fixture
def alpha_205():
    """Urban station with 205 M/a net savings, as in the base appraisal scenario."""
    return StationProfile(
        station_id='FS-205',
        name='Scenario station',
        setup_cost=1650,
        annual_fuel_savings=85,
        annual_maintenance_savings=65,
        annual_personnel_savings=100,
        operational_cost=45,
        capacity_factor=0.85,
        service_population=75000,
    )


@pytest.fixture
def flat_assumptions():
    """No escalation at all: savings form a pure annuity (with capacity decay disabled)."""
    return EconomicAssumptions(
        inflation_rate=0.0,
        population_growth=0.0,
        demand_escalation=0.0,
        discount_rate=0.05,
        analysis_period=20,
    )
