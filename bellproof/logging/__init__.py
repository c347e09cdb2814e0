"""
Logging infrastructure for bellproof.

Provides component-bound loguru loggers and decorators for tracking proofs.
"""

from .logger import (
    BellproofLogger,
    get_bellproof_logger,
    initialize_logging,
    get_logger_instance,
    log_proof_result,
)

from .decorators import (
    track_proof,
    performance_monitor,
)

__all__ = [
    # Logger
    "BellproofLogger",
    "get_bellproof_logger",
    "initialize_logging",
    "get_logger_instance",
    "log_proof_result",
    # Decorators
    "track_proof",
    "performance_monitor",
]
