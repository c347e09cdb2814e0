"""
Bell naming conventions.

Bells are plain integers in ``[0, stage)``. They are written using the
conventional single-character bell names, so bell 0 prints as ``1`` and
bell 9 prints as ``0``.
"""

from enum import Enum

from bellproof.core.errors import InvalidBellError

BELL_NAMES = "1234567890ETABCDFGHJKLMNPRSUVWXYZ"
MAX_STAGE = len(BELL_NAMES)


class Parity(Enum):
    """Parity of a permutation."""

    EVEN = 0
    ODD = 1

    def opposite(self) -> "Parity":
        return Parity.ODD if self is Parity.EVEN else Parity.EVEN


def is_bell_name(c: str) -> bool:
    """Check whether a character is a valid bell name."""
    return len(c) == 1 and c in BELL_NAMES


def name_to_number(name: str) -> int:
    """
    Convert a bell name to its bell number.

    Raises:
        InvalidBellError: If ``name`` is not a bell name
    """
    index = BELL_NAMES.find(name) if len(name) == 1 else -1
    if index < 0:
        raise InvalidBellError(f"Unknown bell name {name!r}")
    return index


def number_to_name(bell: int) -> str:
    """Convert a bell number to its single-character name."""
    if not 0 <= bell < MAX_STAGE:
        raise InvalidBellError(f"Bell {bell} has no name (max stage is {MAX_STAGE})")
    return BELL_NAMES[bell]
