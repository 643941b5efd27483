"""
Core constants and limits.

Defines the fixed parameters of the cost models, the risk gate and the
performance metrics.
"""

# Risk Management
MAX_SINGLE_TRADE_RISK_PERCENT = 5.0  # Hard cap, independent of RiskParameters

# Slippage Models (fraction of expected profit)
FIXED_SLIPPAGE_RATE = 0.001  # 0.1%
DYNAMIC_SLIPPAGE_MIN_RATE = 0.0005  # 0.05%
DYNAMIC_SLIPPAGE_MAX_RATE = 0.0025  # 0.25%
VOLATILITY_SLIPPAGE_DIVISOR = 1000.0  # realistic: volatility / 1000

# Fee Models (fraction of expected profit)
ACTUAL_FEE_RATE = 0.003  # 0.3%
ESTIMATED_FEE_RATE = 0.0025  # 0.25%

# Latency Models (milliseconds)
REALISTIC_LATENCY_MS = (500.0, 2500.0)
PESSIMISTIC_LATENCY_MS = (1000.0, 6000.0)

# Execution Simulation
BASE_EXECUTION_FAILURE_RATE = 0.1  # 90% base success
LATENCY_PENALTY_DIVISOR_MS = 10000.0  # +1% failure per 100ms

# Progress Reporting
PROGRESS_INTERVAL_TRADES = 100

# Performance Metrics
RISK_FREE_RATE_ANNUAL = 0.02
DAYS_PER_YEAR = 365
RISK_FREE_RATE_DAILY = RISK_FREE_RATE_ANNUAL / DAYS_PER_YEAR
MIN_RETURN_SAMPLES = 2

# Benchmark fallback when no return series is supplied
DEFAULT_BENCHMARK_BETA = 1.0
DEFAULT_BENCHMARK_CORRELATION = 0.0
TRACKING_ERROR_ALPHA_FACTOR = 0.1

# Data Quality (trade count thresholds -> score)
DATA_QUALITY_STEPS = ((100, 50.0), (500, 70.0), (1000, 85.0))
DATA_QUALITY_MAX = 95.0

# Confidence Scoring
CONFIDENCE_BASE = 50.0
CONFIDENCE_CAP = 95.0
CONFIDENCE_HIGH_TRADE_COUNT = 1000
CONFIDENCE_MEDIUM_TRADE_COUNT = 500
CONFIDENCE_LONG_SPAN_DAYS = 90
CONFIDENCE_MEDIUM_SPAN_DAYS = 30
CONFIDENCE_MIN_STRATEGIES = 3
CONFIDENCE_MIN_NETWORKS = 5
