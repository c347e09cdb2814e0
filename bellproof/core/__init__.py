"""
Permutation algebra core.

- bells: bell naming and parity
- change: the Change value type, accumulation and hashing
- errors: exception hierarchy
"""

from bellproof.core.bells import (
    BELL_NAMES,
    MAX_STAGE,
    Parity,
    is_bell_name,
    name_to_number,
    number_to_name,
)
from bellproof.core.change import (
    FACTORIALS,
    Change,
    ChangeAccumulator,
    destructive_hash,
    inverse,
    lehmer_hash_in_place,
    multiply,
    naive_hash,
)
from bellproof.core.errors import (
    BellproofError,
    InvalidBellError,
    StageMismatchError,
    StageTooLargeError,
    TouchFormatError,
)

__all__ = [
    # Bells
    "BELL_NAMES",
    "MAX_STAGE",
    "Parity",
    "is_bell_name",
    "name_to_number",
    "number_to_name",
    # Changes
    "FACTORIALS",
    "Change",
    "ChangeAccumulator",
    "destructive_hash",
    "inverse",
    "lehmer_hash_in_place",
    "multiply",
    "naive_hash",
    # Errors
    "BellproofError",
    "InvalidBellError",
    "StageMismatchError",
    "StageTooLargeError",
    "TouchFormatError",
]
