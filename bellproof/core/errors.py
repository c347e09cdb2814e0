"""
Exception hierarchy for bellproof.

Violations of the algebra's preconditions are programmer errors and are
raised immediately rather than returned as results.
"""


class BellproofError(Exception):
    """Base exception for all bellproof errors."""

    pass


class StageMismatchError(BellproofError, ValueError):
    """Raised when changes or row sources of different stages are combined."""

    def __init__(self, expected: int, actual: int, context: str = ""):
        self.expected = expected
        self.actual = actual
        message = f"Stage mismatch: expected {expected}, got {actual}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class StageTooLargeError(BellproofError, ValueError):
    """Raised when a prover cannot allocate its table for the requested stage."""

    def __init__(self, stage: int, max_stage: int, prover: str):
        self.stage = stage
        self.max_stage = max_stage
        self.prover = prover
        super().__init__(
            f"{prover} supports stages up to {max_stage}, got stage {stage}"
        )


class InvalidBellError(BellproofError, ValueError):
    """Raised when a bell name cannot be parsed."""

    pass


class TouchFormatError(BellproofError, ValueError):
    """Raised when a touch cannot be built from its input."""

    pass
