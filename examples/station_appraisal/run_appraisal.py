"""
Appraisal Example: Fire Station Cost-Benefit Analysis.

This script evaluates the reference stations and prints:
    - Per-station financial metrics (NPV, IRR, payback, ROI, BCR)
    - Monte Carlo risk summary (seeded, reproducible)
    - Portfolio comparison and rankings

Optionally writes the cash-flow tables to CSV when pandas is installed.
"""

from pathlib import Path
import logging
import sys

import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from station_cba import evaluate_stations
from station_cba.analysis import run_monte_carlo, compare_stations
from station_cba.data import reference_stations, reference_assumptions
from station_cba.settings import MONTE_CARLO_RUNS

CURRENCY = 'IRR'


def run_appraisal(seed: int = 42, n_runs: int = MONTE_CARLO_RUNS):
    """Run the full appraisal and print a console summary."""

    stations = reference_stations()
    assumptions = reference_assumptions()

    print("=" * 80)
    print("FIRE STATION COST-BENEFIT ANALYSIS")
    print("=" * 80)

    # ========================================================================
    # 1. Deterministic evaluation
    # ========================================================================
    print("\n[1/3] Performing financial analysis...")
    metrics = evaluate_stations(stations, assumptions)

    for station, m in zip(stations, metrics):
        irr_note = "" if m.irr_converged else f" ({m.irr.status.value})"
        print(
            f"  {station.station_id}: NPV = {m.npv:.0f} M {CURRENCY}, "
            f"IRR = {m.irr_percent:.2f}%{irr_note}, "
            f"Payback = {m.payback_period:.1f} years, "
            f"BCR = {m.benefit_cost_ratio:.2f}, ROI = {m.roi:.2f}%"
        )

    # ========================================================================
    # 2. Monte Carlo risk analysis
    # ========================================================================
    print(f"\n[2/3] Running {n_runs} Monte Carlo simulations (seed={seed})...")
    mc = run_monte_carlo(stations, assumptions, n_runs=n_runs, rng=np.random.default_rng(seed))

    for station_id, stats in mc.summary().items():
        print(f"  {station_id}:")
        print(f"    NPV mean / std:         {stats['npv_mean']:.0f} / {stats['npv_std']:.0f} M {CURRENCY}")
        print(f"    P(NPV > 0):             {stats['probability_positive_npv']:.1f}%")
        print(f"    Value at Risk (5%):     {stats['value_at_risk_5']:.0f} M {CURRENCY}")
        print(f"    Expected shortfall:     {stats['expected_shortfall']:.0f} M {CURRENCY}")
        print(f"    Non-convergent IRR:     {stats['non_convergent_irr']}")

    # ========================================================================
    # 3. Portfolio comparison
    # ========================================================================
    print("\n[3/3] Comparing stations...")
    comparison = compare_stations(stations, metrics, monte_carlo=mc)

    print(f"  Total investment:        {comparison.total_investment:.0f} M {CURRENCY}")
    print(f"  Total NPV:               {comparison.total_npv:.0f} M {CURRENCY}")
    print(f"  Portfolio IRR (mean):    {comparison.portfolio_irr:.2f}%")
    print(f"  Population served:       {comparison.total_population_served:,}")
    print(f"  Ranking by NPV:          {', '.join(comparison.npv_ranking)}")
    print(f"  Ranking by risk:         {', '.join(comparison.risk_ranking)}")

    try:
        output_dir = Path(__file__).parent / 'output'
        output_dir.mkdir(exist_ok=True)
        for m in metrics:
            m.cash_flows.to_frame().to_csv(output_dir / f"cash_flows_{m.station_id}.csv")
        print(f"\nCash-flow tables written to {output_dir}")
    except ImportError:
        print("\nInstall pandas to export cash-flow tables: pip install -e .[tables]")

    return metrics, mc, comparison


if __name__ == '__main__':
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s %(name)s: %(message)s')
    run_appraisal()
