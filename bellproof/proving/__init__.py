"""
Truth proving for touches.

## Components

- **canon**: Canonicalization policies deciding when two rows are "the same"
- **provers**: NaiveProver, HashProver and CompactHashProver
- **grouping**: Merging pairwise collisions into falseness groups
- **report**: ProofReport and the ``prove_touch`` entry point
- **generators**: Deterministic fixtures and hypothesis strategies

## Example Usage

```python
from bellproof.proving import CompactHashProver, canon_copy
from bellproof.touch import Touch

touch = Touch.from_str("123456\\n214365\\n123456\\n123456")
prover = CompactHashProver(touch.stage())

prover.is_true(touch)      # False
prover.full_prove(touch)   # [[0, 2]]
```
"""

from .canon import (
    CANONS,
    Canon,
    canon_copy,
    canon_fixed_treble_cyclic,
    canon_full_cyclic,
    canon_full_dihedral,
    get_canon,
)

from .grouping import group_falseness

from .provers import (
    HASH_PROVER_MAX_STAGE,
    CompactHashProver,
    FullProvingContext,
    HashProver,
    NaiveProver,
    ProvingContext,
    prover_for_stage,
)

from .report import ProofReport, prove_touch

__all__ = [
    # Canon
    "CANONS",
    "Canon",
    "canon_copy",
    "canon_fixed_treble_cyclic",
    "canon_full_cyclic",
    "canon_full_dihedral",
    "get_canon",
    # Grouping
    "group_falseness",
    # Provers
    "HASH_PROVER_MAX_STAGE",
    "CompactHashProver",
    "FullProvingContext",
    "HashProver",
    "NaiveProver",
    "ProvingContext",
    "prover_for_stage",
    # Reports
    "ProofReport",
    "prove_touch",
]
