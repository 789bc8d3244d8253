"""
Internal rate of return via Newton-Raphson root finding.

The IRR is the rate r at which the net present value of the undiscounted cash
flows vanishes:

    NPV(r)  = sum_t  nominal[t] / (1 + r)^t
    NPV'(r) = sum_t -t * nominal[t] / (1 + r)^(t + 1)      (t >= 1)

Starting from IRR_INITIAL_GUESS, each iteration applies the Newton step
r <- r - NPV(r) / NPV'(r) and clamps r to IRR_RATE_BOUNDS, which keeps
(1 + r) away from zero and negative bases.

The solver never raises for finite input. Instead, IRRResult carries a status:

    CONVERGED        |NPV(r)| < tolerance
    FLAT_DERIVATIVE  |NPV'(r)| <= tolerance, stopped at the current estimate
    MAX_ITERATIONS   iteration budget exhausted, best estimate returned
    NO_SIGN_CHANGE   cash flows never change sign, so no IRR exists (rate = nan)

so batch callers can count non-convergent trials separately from a converged
0 % IRR.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

import numpy as np

from station_cba.settings import (
    IRR_INITIAL_GUESS,
    IRR_MAX_ITERATIONS,
    IRR_RATE_BOUNDS,
    IRR_TOLERANCE,
)

logger = logging.getLogger(__name__)


class IRRStatus(Enum):
    """How solve_irr() terminated. Only CONVERGED carries a true root."""

    CONVERGED = 'converged'
    FLAT_DERIVATIVE = 'flat_derivative'
    MAX_ITERATIONS = 'max_iterations'
    NO_SIGN_CHANGE = 'no_sign_change'


@dataclass(frozen=True)
class IRRResult:
    """
    Outcome of an IRR solve.

    Attributes:
        rate: IRR as a percentage (e.g. 12.5 means 12.5 %). Best available
            estimate when not converged; nan when no IRR exists.
        status: How the solver terminated.
        iterations: Number of NPV evaluations performed.
    """

    rate: float
    status: IRRStatus
    iterations: int

    @property
    def converged(self) -> bool:
        return self.status is IRRStatus.CONVERGED

    @property
    def fraction(self) -> float:
        """IRR as a fraction (e.g. 0.125)."""
        return self.rate / 100


def npv_at_rate(nominal: Sequence[float], rate: float) -> float:
    """Net present value of undiscounted cash flows at the given rate."""
    nominal = np.asarray(nominal, dtype=float)
    years = np.arange(len(nominal))
    return float(np.sum(nominal / (1 + rate) ** years))


def npv_derivative(nominal: Sequence[float], rate: float) -> float:
    """Derivative of npv_at_rate with respect to the rate."""
    nominal = np.asarray(nominal, dtype=float)
    years = np.arange(1, len(nominal))
    return float(np.sum(-years * nominal[1:] / (1 + rate) ** (years + 1)))


def _has_sign_change(nominal: np.ndarray) -> bool:
    return bool(np.any(nominal > 0) and np.any(nominal < 0))


def solve_irr(
    nominal: Sequence[float],
    initial_guess: float = IRR_INITIAL_GUESS,
    tolerance: float = IRR_TOLERANCE,
    max_iterations: int = IRR_MAX_ITERATIONS,
    bounds: Tuple[float, float] = IRR_RATE_BOUNDS,
) -> IRRResult:
    """
    Find the internal rate of return of a cash-flow series.

    Args:
        nominal:
            Undiscounted cash flows, index = year (nominal[0] at year 0).

        initial_guess:
            Starting rate as a fraction. Default: 0.10.

        tolerance:
            Convergence threshold on |NPV(r)|; also the threshold below which
            |NPV'(r)| counts as flat. Default: 1e-6.

        max_iterations:
            Iteration budget. Default: 100.

        bounds:
            (lower, upper) clamp applied to the rate after every update.
            Default: (-0.5, 2.0).

    Returns:
        IRRResult with the rate in percent and the termination status.

    Example:
        >>> result = solve_irr([-100.0, 60.0, 60.0])
        >>> result.converged, round(result.rate, 2)
        (True, 13.07)
    """
    nominal = np.asarray(nominal, dtype=float)
    if not _has_sign_change(nominal):
        logger.debug("IRR undefined: cash flows have no sign change")
        return IRRResult(rate=math.nan, status=IRRStatus.NO_SIGN_CHANGE, iterations=0)

    lower, upper = bounds
    rate = initial_guess
    status = IRRStatus.MAX_ITERATIONS
    iterations = 0

    for iterations in range(1, max_iterations + 1):
        npv = npv_at_rate(nominal, rate)
        if abs(npv) < tolerance:
            status = IRRStatus.CONVERGED
            break

        derivative = npv_derivative(nominal, rate)
        if abs(derivative) <= tolerance:
            status = IRRStatus.FLAT_DERIVATIVE
            break

        rate = max(lower, min(rate - npv / derivative, upper))
        logger.debug("IRR iteration %d: rate=%.8f npv=%.6g", iterations, rate, npv)

    if status is not IRRStatus.CONVERGED:
        logger.debug(
            "IRR did not converge (%s) after %d iterations; best estimate %.4f%%",
            status.value, iterations, rate * 100,
        )

    return IRRResult(rate=rate * 100, status=status, iterations=iterations)
