"""
Historical arbitrage trade backtesting and performance analytics.
"""

__version__ = "0.1.0"
