"""
Tests for the evaluate() entry point and FinancialMetrics.

Tests cover:
    1. Base appraisal scenario (positive NPV, IRR above the discount rate)
    2. Consistency between metrics and the underlying cash-flow series
    3. Pathological stations: issues are reported, evaluation never aborts

Run tests with: pytest tests/test_engine.py -v
"""

import dataclasses
import math

import pytest

from station_cba import FinancialMetrics, MetricIssue, evaluate, evaluate_stations
from station_cba.metrics.irr import IRRStatus, npv_at_rate


class TestBaseScenario:
    """Tests for the 25-year base appraisal scenario."""

    def test_positive_npv(self, alpha_205, assumptions):
        """Escalating savings outgrow capacity decay: NPV is finite and positive."""
        metrics = evaluate(alpha_205, assumptions)

        assert math.isfinite(metrics.npv)
        assert metrics.npv > 0

    def test_irr_above_discount_rate(self, alpha_205, assumptions):
        """NPV > 0 at the discount rate implies IRR > discount rate."""
        metrics = evaluate(alpha_205, assumptions)

        assert metrics.irr_converged
        assert metrics.irr_percent > assumptions.discount_rate * 100
        assert abs(npv_at_rate(metrics.cash_flows.nominal, metrics.irr.fraction)) < 1e-4

    def test_all_metrics_defined(self, alpha_205, assumptions):
        """A regular station reports no issues."""
        metrics = evaluate(alpha_205, assumptions)

        assert metrics.ok
        assert metrics.issues == ()
        assert 0 < metrics.payback_period < assumptions.analysis_period
        assert metrics.payback_period < metrics.discounted_payback_period
        assert metrics.benefit_cost_ratio > 1
        assert metrics.roi > 0

    def test_npv_equals_sum_of_discounted(self, alpha_205, assumptions):
        """npv is exactly the sum of the discounted series."""
        metrics = evaluate(alpha_205, assumptions)

        assert metrics.npv == pytest.approx(metrics.cash_flows.discounted.sum(), abs=1e-9)

    def test_roi_from_nominal(self, alpha_205, assumptions):
        """roi = sum(nominal[1:]) / |nominal[0]| * 100."""
        metrics = evaluate(alpha_205, assumptions)
        nominal = metrics.cash_flows.nominal

        assert metrics.roi == pytest.approx(nominal[1:].sum() / 1650 * 100)

    def test_higher_discount_rate_lowers_npv(self, alpha_205, assumptions):
        """Only the discount rate changes: NPV falls as it rises."""
        low = evaluate(alpha_205, assumptions.replace(discount_rate=0.04))
        high = evaluate(alpha_205, assumptions.replace(discount_rate=0.07))

        assert high.npv < low.npv
        assert high.irr_percent == pytest.approx(low.irr_percent)

    def test_metrics_are_immutable(self, alpha_205, assumptions):
        """Results cannot be modified after being handed out."""
        metrics = evaluate(alpha_205, assumptions)

        with pytest.raises(dataclasses.FrozenInstanceError):
            metrics.npv = 0.0

    def test_as_dict(self, alpha_205, assumptions):
        """as_dict flattens the scalar metrics."""
        data = evaluate(alpha_205, assumptions).as_dict()

        assert data['station_id'] == 'FS-205'
        assert data['irr_status'] == 'converged'
        assert data['issues'] == []
        assert set(data) == {
            'station_id', 'npv', 'irr', 'irr_status', 'irr_iterations', 'payback_period',
            'discounted_payback_period', 'roi', 'benefit_cost_ratio', 'issues',
        }


class TestPathologicalStations:
    """Tests for stations whose metrics are partly undefined."""

    def test_zero_setup_cost(self, alpha_205, assumptions):
        """No investment: ROI and BCR are unbounded and IRR does not exist."""
        metrics = evaluate(alpha_205.with_setup_cost(0.0), assumptions)

        assert metrics.roi == math.inf
        assert metrics.benefit_cost_ratio == math.inf
        assert metrics.irr.status is IRRStatus.NO_SIGN_CHANGE
        assert MetricIssue.UNDEFINED_ROI in metrics.issues
        assert MetricIssue.UNDEFINED_RATIO in metrics.issues
        assert MetricIssue.NON_CONVERGENT_IRR in metrics.issues
        assert not metrics.ok
        assert math.isfinite(metrics.npv)

    def test_operational_cost_exceeds_savings(self, alpha_205, assumptions):
        """Negative net savings: never pays back, no IRR, BCR of zero."""
        station = dataclasses.replace(alpha_205, operational_cost=400.0)

        metrics = evaluate(station, assumptions)

        assert metrics.npv < 0
        assert metrics.payback_period == math.inf
        assert metrics.benefit_cost_ratio == 0.0
        assert metrics.roi < 0
        assert MetricIssue.NO_PAYBACK in metrics.issues
        assert MetricIssue.NON_CONVERGENT_IRR in metrics.issues
        assert MetricIssue.UNDEFINED_RATIO not in metrics.issues

    def test_zero_capacity(self, alpha_205, assumptions):
        """An unused station earns nothing back."""
        station = dataclasses.replace(alpha_205, capacity_factor=0.0)

        metrics = evaluate(station, assumptions)

        assert metrics.npv == pytest.approx(-1650.0)
        assert metrics.roi == pytest.approx(0.0)
        assert metrics.payback_period == math.inf
        assert not metrics.irr_converged

    def test_non_convergent_irr_is_distinct_from_zero(self, alpha_205, assumptions):
        """A failed IRR is flagged, so it cannot be mistaken for a converged 0 %."""
        station = dataclasses.replace(alpha_205, operational_cost=400.0)

        metrics = evaluate(station, assumptions)

        assert not metrics.irr_converged
        assert metrics.as_dict()['irr_status'] == 'no_sign_change'


class TestEvaluateStations:
    """Tests for batch evaluation."""

    def test_preserves_order(self, stations, assumptions):
        """One result per station, in input order."""
        results = evaluate_stations(stations, assumptions)

        assert [m.station_id for m in results] == ['FS-Alpha', 'FS-Beta']
        assert all(isinstance(m, FinancialMetrics) for m in results)

    def test_matches_single_evaluation(self, stations, assumptions):
        """Batch evaluation equals evaluating each station alone."""
        results = evaluate_stations(stations, assumptions)

        for station, batch in zip(stations, results):
            single = evaluate(station, assumptions)
            assert batch.npv == single.npv
            assert batch.irr == single.irr

    def test_batch_continues_past_bad_station(self, stations, assumptions):
        """A pathological station does not stop the batch."""
        bad = stations[0].with_setup_cost(0.0)

        results = evaluate_stations([bad] + stations, assumptions)

        assert len(results) == 3
        assert not results[0].ok
        assert results[1].ok and results[2].ok

    def test_issue_enum_is_documented(self):
        """MetricIssue describes what its members mean."""
        assert MetricIssue.__doc__.startswith("Metric that could not be computed")
