"""
Logging infrastructure for bellproof.

Provides structured logging with:
- Component-bound loggers ("proving", "touch", "cli", ...)
- A single configurable console handler
- Helpers for logging proof results with consistent fields
"""

import sys
from typing import Any, Optional

from loguru import logger

from bellproof.config import LogConfig


class BellproofLogger:
    """
    Logger setup for bellproof.

    Replaces loguru's default handler with a console handler whose format
    includes the bound component name.
    """

    def __init__(
        self,
        level: str = "INFO",
        format_string: Optional[str] = None,
        enable_console_logging: bool = True,
    ):
        """
        Initialize the logger.

        Args:
            level: Minimum level for the console handler
            format_string: Custom loguru format string
            enable_console_logging: Whether to log to stderr
        """
        self.level = level
        self.format_string = format_string or LogConfig().format
        self.handler_ids = []

        logger.remove()
        logger.configure(extra={"component": "system"})

        if enable_console_logging:
            self.handler_ids.append(
                logger.add(
                    sys.stderr,
                    format=self.format_string,
                    level=level,
                    colorize=True,
                )
            )

        self.logger = logger.bind(component="system")

    def get_logger(self, component: str) -> Any:
        """Get a logger bound to a specific component."""
        return logger.bind(component=component)


def get_bellproof_logger(component: str = "system") -> Any:
    """
    Get a component-specific logger.

    Example:
        >>> log = get_bellproof_logger("proving")
        >>> log.debug("Proved touch", rows=5040)
    """
    return logger.bind(component=component)


def log_proof_result(
    logger_instance: Any,
    prover: str,
    length: int,
    is_true: bool,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of one proving call.

    Args:
        logger_instance: Logger to use
        prover: Prover class name
        length: Number of rows in the proved touch
        is_true: Whether the touch was true
        **kwargs: Additional context (stage, groups, canon, ...)
    """
    logger_instance.debug(
        f"{prover}: {length} rows, {'true' if is_true else 'false'}",
        prover=prover,
        length=length,
        is_true=is_true,
        **kwargs,
    )


_bellproof_logger: Optional[BellproofLogger] = None


def initialize_logging(
    level: Optional[str] = None, config: Optional[LogConfig] = None, **kwargs: Any
) -> BellproofLogger:
    """
    Initialize the bellproof logging system.

    This should be called once at application startup.

    Args:
        level: Log level, overriding the configured one
        config: Logging configuration; the global configuration if omitted
        **kwargs: Additional configuration for BellproofLogger
    """
    global _bellproof_logger

    if config is None:
        from bellproof.config import config as global_config

        config = global_config.logging

    kwargs.setdefault("format_string", config.format)
    kwargs.setdefault("enable_console_logging", config.enable_console_logging)
    _bellproof_logger = BellproofLogger(level=level or config.level, **kwargs)
    return _bellproof_logger


def get_logger_instance() -> Optional[BellproofLogger]:
    """Get the global logger instance."""
    return _bellproof_logger
