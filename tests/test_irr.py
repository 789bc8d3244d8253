"""
Unit tests for the Newton-Raphson IRR solver.

Tests cover:
    1. Convergence for cash flows with a single sign change
    2. Non-convergence states: no sign change, flat derivative, iteration budget
    3. Rate clamping and percentage output

Run tests with: pytest tests/test_irr.py -v
"""

import logging
import math

import pytest

from station_cba.core.cash_flows import generate_cash_flows
from station_cba.metrics.irr import IRRStatus, npv_at_rate, npv_derivative, solve_irr


SINGLE_SIGN_CHANGE = [
    [-100.0, 60.0, 60.0],
    [-1000.0, 100.0, 200.0, 300.0, 400.0, 500.0],
    [-1650.0] + [174.25] * 25,
    [-50.0, 10.0, 10.0, 10.0, 10.0],           # negative IRR
    [-100.0, 250.0],                           # high IRR
    [-1.0e6, 2.0e5, 2.0e5, 2.0e5, 2.0e5, 2.0e5, 2.0e5],
]


class TestNPVFunctions:
    """Tests for the NPV and derivative helpers used by the solver."""

    def test_npv_at_zero_rate(self):
        """At r = 0 the NPV is the plain sum."""
        assert npv_at_rate([-100.0, 60.0, 60.0], 0.0) == pytest.approx(20.0)

    def test_npv_at_rate(self):
        """Each flow is discounted by (1 + r)^t."""
        assert npv_at_rate([-100.0, 110.0], 0.10) == pytest.approx(0.0, abs=1e-12)

    def test_derivative_matches_finite_difference(self):
        """Analytic derivative agrees with a central difference."""
        flows = [-1000.0, 100.0, 200.0, 300.0, 400.0, 500.0]
        rate, h = 0.08, 1e-6

        numeric = (npv_at_rate(flows, rate + h) - npv_at_rate(flows, rate - h)) / (2 * h)

        assert npv_derivative(flows, rate) == pytest.approx(numeric, rel=1e-6)

    def test_derivative_ignores_year_zero(self):
        """The year-0 flow does not depend on the rate."""
        assert npv_derivative([-100.0, 0.0], 0.1) == 0.0
        assert npv_derivative([-5.0, 0.0], 0.1) == npv_derivative([-500.0, 0.0], 0.1)


class TestConvergence:
    """Tests for cash flows that have an IRR."""

    def test_known_root(self):
        """[-100, 60, 60] has IRR 1/x - 1 with x = (sqrt(69) - 3) / 6, about 13.07 %."""
        result = solve_irr([-100.0, 60.0, 60.0])

        x = (math.sqrt(69) - 3) / 6
        assert result.converged
        assert result.status is IRRStatus.CONVERGED
        assert result.rate == pytest.approx((1 / x - 1) * 100, abs=1e-4)
        assert result.fraction == pytest.approx(result.rate / 100)

    @pytest.mark.parametrize("flows", SINGLE_SIGN_CHANGE)
    def test_single_sign_change_converges(self, flows):
        """One sign change: the solver reaches |NPV| < 1e-4 within 100 iterations."""
        result = solve_irr(flows)

        assert result.converged
        assert result.iterations <= 100
        assert abs(npv_at_rate(flows, result.rate / 100)) < 1e-4

    @pytest.mark.parametrize("flows", SINGLE_SIGN_CHANGE)
    def test_matches_bracketing_root_finder(self, flows):
        """Newton-Raphson agrees with an independent bracketing solver."""
        optimize = pytest.importorskip("scipy.optimize")

        root = optimize.brentq(lambda r: npv_at_rate(flows, r), -0.49, 1.99, xtol=1e-12)

        assert solve_irr(flows).rate == pytest.approx(root * 100, abs=1e-5)

    def test_zero_irr_is_converged(self):
        """A true 0 % IRR is reported as converged, not as a failure."""
        result = solve_irr([-100.0, 50.0, 50.0])

        assert result.converged
        assert result.rate == pytest.approx(0.0, abs=1e-4)

    def test_station_cash_flows(self, alpha_205, assumptions):
        """The base appraisal station converges to an IRR above the discount rate."""
        cf = generate_cash_flows(alpha_205, assumptions)

        result = solve_irr(cf.nominal)

        assert result.converged
        assert result.rate > assumptions.discount_rate * 100


class TestNonConvergence:
    """Tests for the documented non-convergence states."""

    @pytest.mark.parametrize("flows", [
        [100.0, 50.0, 50.0],
        [-100.0, -50.0, -50.0],
        [0.0, 0.0, 0.0],
    ])
    def test_no_sign_change(self, flows):
        """Without a sign change no IRR exists; the result says so."""
        result = solve_irr(flows)

        assert not result.converged
        assert result.status is IRRStatus.NO_SIGN_CHANGE
        assert math.isnan(result.rate)
        assert result.iterations == 0

    def test_flat_derivative(self):
        """A negligible derivative stops the solver at the current estimate."""
        result = solve_irr([-1.0, 1e-9])

        assert result.status is IRRStatus.FLAT_DERIVATIVE
        assert not result.converged
        assert result.rate == pytest.approx(10.0)
        assert result.iterations == 1

    def test_root_below_lower_bound(self):
        """A root at -99 % is unreachable: the rate stays clamped at -50 %."""
        result = solve_irr([-100.0, 1.0])

        assert result.status is IRRStatus.MAX_ITERATIONS
        assert result.rate == pytest.approx(-50.0)
        assert result.iterations == 100

    def test_root_above_upper_bound(self):
        """A root at 9900 % is unreachable: the rate stays clamped at 200 %."""
        result = solve_irr([-1.0, 100.0])

        assert result.status is IRRStatus.MAX_ITERATIONS
        assert result.rate == pytest.approx(200.0)

    def test_custom_iteration_budget(self):
        """The iteration budget can be overridden."""
        result = solve_irr([-100.0, 1.0], max_iterations=5)

        assert result.status is IRRStatus.MAX_ITERATIONS
        assert result.iterations == 5

    @pytest.mark.parametrize("flows", [[100.0, 50.0], [-100.0, 1.0], [-1.0, 1e-9]])
    def test_failures_log_below_warning(self, flows, caplog):
        """Non-convergent solves log at DEBUG; batch callers decide what to warn about."""
        with caplog.at_level(logging.DEBUG, logger="station_cba.metrics.irr"):
            result = solve_irr(flows)

        assert not result.converged
        assert caplog.records
        assert all(record.levelno < logging.WARNING for record in caplog.records)

    def test_custom_bounds(self):
        """Custom bounds clamp the estimate."""
        result = solve_irr([-1.0, 100.0], bounds=(-0.5, 1.0))

        assert result.rate == pytest.approx(100.0)
        assert not result.converged

    def test_status_enum_is_documented(self):
        """IRRStatus describes what its members mean."""
        assert IRRStatus.__doc__.startswith("How solve_irr() terminated")
