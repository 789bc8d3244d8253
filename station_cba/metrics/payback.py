"""
Payback period with linear interpolation inside the crossing year.

The default payback_period() works on UNDISCOUNTED cash flows, while NPV uses
discounted ones. discounted_payback_period() applies the same rule to the
discounted stream and is offered as an alternative; it is not used as the
default metric.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def _interpolated_crossing(flows: np.ndarray) -> float:
    cumulative = np.cumsum(flows)
    positive = np.flatnonzero(cumulative > 0)

    if positive.size == 0:
        return math.inf  # never pays back within the horizon

    k = int(positive[0])
    if k == 0:
        return 0.0  # no negative investment to recoup

    inflow = flows[k]
    if inflow == 0:
        return math.inf

    # Last fully-negative year plus the fraction of year k's inflow needed to reach zero
    return float((k - 1) + abs(cumulative[k - 1]) / inflow)


def payback_period(nominal: Sequence[float]) -> float:
    """
    Fractional year at which the cumulative undiscounted cash flow turns positive.

    Args:
        nominal: Undiscounted cash flows, index = year.

    Returns:
        Payback period [years]. 0.0 if already positive at year 0,
        inf if the cumulative flow never turns positive.

    Note:
        If the cumulative flow is exactly zero at the end of year k - 1 and
        positive at year k, the result is the whole number k - 1. There
        cumulative[floor(p)] == cumulative[ceil(p)] == 0, so the crossing is
        not strictly bracketed:

        >>> payback_period([-100.0, 100.0, 50.0])
        1.0

    Example:
        >>> payback_period([-100.0, 40.0, 40.0, 40.0])
        2.5
    """
    return _interpolated_crossing(np.asarray(nominal, dtype=float))


def discounted_payback_period(discounted: Sequence[float]) -> float:
    """Payback period computed on discounted cash flows. See payback_period()."""
    return _interpolated_crossing(np.asarray(discounted, dtype=float))
