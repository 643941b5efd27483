"""
Utility decorators for operation logging.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any

from loguru import logger


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if hasattr(value, "value"):
        return str(value.value)  # Handle enum values
    elif isinstance(value, frozenset | set):
        return sorted(value)
    else:
        return value


def _extract_run_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract the backtest configuration summary from function arguments."""
    context: dict[str, Any] = {}
    config = bound_args.arguments.get("config")
    if config is None:
        return context
    for attr in ("initial_capital", "strategies", "networks", "slippage_model", "latency_model"):
        if hasattr(config, attr):
            context[attr] = _serialize_parameter_value(getattr(config, attr))
    return context


def _create_success_context(
    base_context: dict[str, Any], execution_time_ms: float, result: Any
) -> dict[str, Any]:
    """Create success logging context."""
    success_context = {
        **base_context,
        "success": True,
        "execution_time_ms": round(execution_time_ms, 2),
        "result_type": type(result).__name__,
    }

    for attr in ("total_trades", "roi"):
        if hasattr(result, attr):
            success_context[attr] = getattr(result, attr)

    return success_context


def _create_error_context(
    base_context: dict[str, Any], execution_time_ms: float, error: Exception
) -> dict[str, Any]:
    """Create error logging context."""
    return {
        **base_context,
        "success": False,
        "execution_time_ms": round(execution_time_ms, 2),
        "error_type": type(error).__name__,
        "error_message": str(error),
    }


def _setup_logging_context(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Setup logging context for a backtest operation."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    return {
        "correlation_id": str(uuid.uuid4())[:8],
        **_extract_run_context(bound_args),
    }


def log_operation[F: Callable[..., Any]](func: F) -> F:
    """Decorator to log backtest operations with correlation IDs and timing."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _setup_logging_context(func, args, kwargs)
        func_name = func.__name__

        logger.info(f"Backtest operation started: {func_name}", extra=context)
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Backtest operation failed: {func_name}",
                extra=_create_error_context(context, execution_time_ms, e),
            )
            raise

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        logger.success(
            f"Backtest operation completed: {func_name}",
            extra=_create_success_context(context, execution_time_ms, result),
        )
        return result

    return wrapper  # type: ignore
