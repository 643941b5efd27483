"""
Custom exception hierarchy for the backtesting engine.

This module defines domain-specific exceptions for better error handling.
Trade rejections and emergency stops are simulation outcomes, not errors,
so they have no exception type here.
"""


class BacktestException(Exception):
    """Base exception for all backtesting-related errors."""

    pass


class ValidationError(BacktestException):
    """Raised when input validation fails."""

    pass


class DataError(BacktestException):
    """Raised when data access or processing fails."""

    pass


class CalculationError(BacktestException):
    """Raised when mathematical calculations fail."""

    pass


class ConfigurationError(BacktestException):
    """Raised when configuration is invalid."""

    pass


class ConcurrencyError(BacktestException):
    """Raised when an operation conflicts with one already in progress."""

    pass


class BacktestAlreadyRunningError(ConcurrencyError):
    """Raised when a backtest is started while another run is in flight."""

    def __init__(self, operation: str = "run_backtest"):
        self.operation = operation
        super().__init__(f"Backtest already running: {operation} rejected")


class UnknownModelError(ConfigurationError):
    """Raised when a cost model name has no registered implementation."""

    def __init__(self, kind: str, name: str, available: list[str]):
        self.kind = kind
        self.name = name
        self.available = available
        super().__init__(f"Unknown {kind} model '{name}' (available: {', '.join(available)})")
