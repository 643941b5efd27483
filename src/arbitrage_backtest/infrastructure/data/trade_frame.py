"""
Trade record DataFrame validation and conversion.

Provides validation for tabular trade exports (structure, data types, value
ranges) and conversion of validated rows into HistoricalTrade objects.
"""

import pandas as pd
from loguru import logger

from arbitrage_backtest.core.exceptions.backtest import DataError, ValidationError
from arbitrage_backtest.core.models.trade import HistoricalTrade

REQUIRED_COLUMNS = [
    "id",
    "timestamp",
    "network",
    "strategy",
    "entry_price",
    "exit_price",
    "expected_profit",
    "gas_cost",
    "execution_time",
    "success",
    "volatility",
    "liquidity",
    "gas_price",
]

NUMERIC_COLUMNS = [
    "entry_price",
    "exit_price",
    "expected_profit",
    "gas_cost",
    "execution_time",
    "volatility",
    "liquidity",
    "gas_price",
]

NON_NEGATIVE_COLUMNS = ["gas_cost", "execution_time", "volatility", "liquidity", "gas_price"]


class TradeFrameValidator:
    """
    Trade record validator.

    Features:
    - Data structure validation (required columns, duplicate ids)
    - Data type validation for numeric columns
    - Value range validation (non-negative costs and market conditions)
    - Data quality checks with warnings
    """

    def validate_data(self, data: pd.DataFrame) -> bool:
        """
        Validate trade data integrity.

        Args:
            data: DataFrame with one trade per row

        Returns:
            True if data is valid

        Raises:
            ValidationError: If data has integrity issues
        """
        if data.empty:
            return True  # Empty data is valid

        self._validate_data_structure(data)
        self._validate_data_types(data)
        self._validate_data_values(data)
        self._validate_data_quality(data)

        return True

    def _validate_data_structure(self, data: pd.DataFrame) -> None:
        """Validate basic data structure requirements."""
        missing_columns = set(REQUIRED_COLUMNS) - set(data.columns)
        if missing_columns:
            raise ValidationError(f"Missing required columns: {sorted(missing_columns)}")

        if data["id"].duplicated().any():
            raise ValidationError("Duplicate trade ids found in data")

    def _validate_data_types(self, data: pd.DataFrame) -> None:
        """Validate data types for numeric columns."""
        for col in NUMERIC_COLUMNS:
            if not pd.api.types.is_numeric_dtype(data[col]):
                raise ValidationError(f"Column {col} must be numeric")

        for col in REQUIRED_COLUMNS:
            if data[col].isna().any():
                raise ValidationError(f"Column {col} contains NaN values")

    def _validate_data_values(self, data: pd.DataFrame) -> None:
        """Validate value ranges for costs and market conditions."""
        for col in NON_NEGATIVE_COLUMNS:
            if (data[col] < 0).any():
                raise ValidationError(f"Column {col} contains negative values")

    def _validate_data_quality(self, data: pd.DataFrame) -> None:
        """Log warnings for suspicious but admissible data."""
        non_positive_prices = ((data["entry_price"] <= 0) | (data["exit_price"] <= 0)).sum()
        if non_positive_prices:
            logger.warning(f"Found {non_positive_prices} trades with non-positive prices")

        zero_liquidity = (data["liquidity"] == 0).sum()
        if zero_liquidity:
            logger.warning(f"Found {zero_liquidity} trades recorded with zero liquidity")


def _parse_timestamps(column: pd.Series) -> pd.Series:
    """Parse epoch milliseconds or datetime-like values into UTC timestamps."""
    if pd.api.types.is_numeric_dtype(column):
        return pd.to_datetime(column, unit="ms", utc=True)
    return pd.to_datetime(column, utc=True)


def trades_from_frame(
    data: pd.DataFrame, validator: TradeFrameValidator | None = None
) -> list[HistoricalTrade]:
    """Validate a trade DataFrame and convert its rows to HistoricalTrade.

    Args:
        data: DataFrame with REQUIRED_COLUMNS; timestamps as epoch
            milliseconds or datetime-like values
        validator: Validator override

    Returns:
        Trades in row order

    Raises:
        ValidationError: If the frame fails validation
        DataError: If timestamps cannot be parsed
    """
    (validator or TradeFrameValidator()).validate_data(data)
    if data.empty:
        return []

    try:
        timestamps = _parse_timestamps(data["timestamp"])
    except (ValueError, TypeError) as e:
        raise DataError(f"Unparseable trade timestamps: {e}") from e

    trades = [
        HistoricalTrade(
            id=str(row.id),
            timestamp=ts.to_pydatetime(),
            network=str(row.network),
            strategy=str(row.strategy),
            entry_price=float(row.entry_price),
            exit_price=float(row.exit_price),
            expected_profit=float(row.expected_profit),
            gas_cost=float(row.gas_cost),
            execution_time=float(row.execution_time),
            success=bool(row.success),
            volatility=float(row.volatility),
            liquidity=float(row.liquidity),
            gas_price=float(row.gas_price),
        )
        for row, ts in zip(data.itertuples(index=False), timestamps, strict=True)
    ]
    logger.debug(f"Converted {len(trades)} trade rows")
    return trades


def trades_to_frame(trades: list[HistoricalTrade]) -> pd.DataFrame:
    """Convert trades to a DataFrame with REQUIRED_COLUMNS."""
    return pd.DataFrame(
        [{col: getattr(t, col) for col in REQUIRED_COLUMNS} for t in trades],
        columns=REQUIRED_COLUMNS,
    )
