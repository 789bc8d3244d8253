"""
Global analysis settings for the fire station cost-benefit engine.

These settings define parameters that should be consistent across all station
evaluations, solvers and risk analyses in one run.
"""

# Monetary inputs (setup cost, savings, operational cost) are expressed in
# millions of the currency unit.
CURRENCY_UNIT = 1e6

# Annual retention of effective station capacity.
#   utilization_factor(t) = capacity_factor * CAPACITY_DECAY ** t
CAPACITY_DECAY = 0.98  # 2 % degradation per year

# Reference analysis horizon and discounting
DEFAULT_ANALYSIS_PERIOD = 25  # [years]
DEFAULT_DISCOUNT_RATE = 0.055

# Newton-Raphson IRR solver
IRR_INITIAL_GUESS = 0.10
IRR_TOLERANCE = 1e-6  # on |NPV(r)| and on |NPV'(r)|
IRR_MAX_ITERATIONS = 100
IRR_RATE_BOUNDS = (-0.5, 2.0)

# Monte Carlo risk analysis
MONTE_CARLO_RUNS = 1000
MONTE_CARLO_PERCENTILES = (5, 25, 50, 75, 95)
MONTE_CARLO_PROGRESS_INTERVAL = 200  # runs between progress log records
INFLATION_STD = 0.01  # half-width of the uniform inflation band
DISCOUNT_RATE_SPREAD = 0.015  # half-width of the uniform discount band
SETUP_COST_UNCERTAINTY = 0.10  # std of the normal setup-cost multiplier
VALUE_AT_RISK_PERCENTILE = 5
