"""
bellproof - truth proving for bell-ringing touches

Permutation algebra on changes, lazy composable row sources, and provers
that decide whether a touch repeats any row and which rows it repeats.
"""

__version__ = "0.1.0"

# Configuration is available at top level for convenience
from bellproof.config import config

from bellproof.core import Change, ChangeAccumulator
from bellproof.touch import Touch, TouchIterator
from bellproof.proving import (
    CompactHashProver,
    HashProver,
    NaiveProver,
    prove_touch,
    prover_for_stage,
)

__all__ = [
    "config",
    "__version__",
    "Change",
    "ChangeAccumulator",
    "Touch",
    "TouchIterator",
    "CompactHashProver",
    "HashProver",
    "NaiveProver",
    "prove_touch",
    "prover_for_stage",
]
