"""
Decorators for automatic logging of proving operations.

These decorators enable traceability without cluttering the provers.
"""

import functools
import time
from datetime import datetime
from typing import Any, Callable

from .logger import get_bellproof_logger


def track_proof(operation_type: str) -> Callable:
    """
    Decorator to track proving operations.

    Logs the start, completion and failure of the wrapped call. Errors are
    logged and re-raised.

    Args:
        operation_type: Type of operation (e.g., "prove_touch", "full_prove")

    Example:
        >>> @track_proof("prove_touch")
        ... def prove(touch):
        ...     return prover.is_true(touch)
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = get_bellproof_logger("proving")

            operation_id = datetime.now().timestamp()
            log.debug(
                f"Proving operation: {operation_type}",
                operation=operation_type,
                operation_id=operation_id,
                function=func.__name__,
            )

            try:
                result = func(*args, **kwargs)

                log.debug(
                    f"Proving operation: {operation_type}_complete",
                    operation=f"{operation_type}_complete",
                    operation_id=operation_id,
                    function=func.__name__,
                    success=True,
                )

                return result

            except Exception as e:
                log.warning(
                    f"Proving operation: {operation_type}_error",
                    operation=f"{operation_type}_error",
                    operation_id=operation_id,
                    function=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                    success=False,
                )
                raise

        return wrapper

    return decorator


def performance_monitor(threshold_ms: float = 1000.0) -> Callable:
    """
    Decorator to monitor function performance.

    Logs warning if execution exceeds threshold.

    Args:
        threshold_ms: Warning threshold in milliseconds

    Example:
        >>> @performance_monitor(threshold_ms=500)
        ... def prove_extent():
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = get_bellproof_logger("system")

            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
                elapsed_ms = (time.perf_counter() - start_time) * 1000

                if elapsed_ms > threshold_ms:
                    log.warning(
                        f"Performance threshold exceeded: {func.__name__}",
                        function=func.__name__,
                        elapsed_ms=elapsed_ms,
                        threshold_ms=threshold_ms,
                    )
                else:
                    log.debug(
                        f"Function executed: {func.__name__}",
                        function=func.__name__,
                        elapsed_ms=elapsed_ms,
                    )

                return result

            except Exception:
                elapsed_ms = (time.perf_counter() - start_time) * 1000
                log.debug(
                    f"Function failed: {func.__name__}",
                    function=func.__name__,
                    elapsed_ms=elapsed_ms,
                )
                raise

        return wrapper

    return decorator
