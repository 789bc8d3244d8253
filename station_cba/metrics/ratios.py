"""
NPV, ROI and benefit-cost ratio of a cash-flow series.

ROI and benefit-cost ratio raise UndefinedRatio when their denominator is zero;
the engine turns that into a sentinel value plus an issue flag.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from station_cba.core.errors import UndefinedRatio


def net_present_value(discounted: Sequence[float]) -> float:
    """Sum of discounted cash flows [M]."""
    return float(np.sum(discounted))


def return_on_investment(nominal: Sequence[float]) -> float:
    """
    Undiscounted return on the year-0 investment as a percentage.

    Formula:
        ROI = sum(nominal[1:]) / |nominal[0]| * 100

    Args:
        nominal: Undiscounted cash flows, nominal[0] being the investment.

    Returns:
        ROI [%].

    Raises:
        UndefinedRatio: If nominal[0] == 0 (no investment to relate to).
    """
    nominal = np.asarray(nominal, dtype=float)
    returns = float(np.sum(nominal[1:]))
    investment = abs(float(nominal[0]))
    if investment == 0:
        raise UndefinedRatio('roi', returns)
    return returns / investment * 100


def benefit_cost_ratio(discounted: Sequence[float]) -> float:
    """
    Ratio of discounted benefits to discounted costs.

    Formula:
        BCR = sum(positive discounted entries) / sum(|negative discounted entries|)

    Raises:
        UndefinedRatio: If no discounted entry is negative (no costs).
    """
    discounted = np.asarray(discounted, dtype=float)
    benefits = float(np.sum(discounted[discounted > 0]))
    costs = float(np.sum(np.abs(discounted[discounted < 0])))
    if costs == 0:
        raise UndefinedRatio('benefit_cost_ratio', benefits)
    return benefits / costs
