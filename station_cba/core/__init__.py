"""Core input records and the cash-flow generator."""

from station_cba.core.errors import InvalidAssumptions, UndefinedRatio
from station_cba.core.profiles import StationProfile, EconomicAssumptions
from station_cba.core.cash_flows import CashFlowSeries, generate_cash_flows

__all__ = [
    'InvalidAssumptions',
    'UndefinedRatio',
    'StationProfile',
    'EconomicAssumptions',
    'CashFlowSeries',
    'generate_cash_flows',
]
