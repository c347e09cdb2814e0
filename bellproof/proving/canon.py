"""
Canonicalization policies.

A canon decides when two rows count as "the same row". It is any callable

    canon(row, scratch) -> None

that overwrites ``scratch`` (a Change of the row's stage) with a canonical
representative of ``row``. Two rows are treated as equal by a prover exactly
when their canonical representatives are equal.

Policies provided here:

- canon_copy: rows are compared as they are
- canon_full_cyclic: rows equal up to a cyclic relabelling of all bells
  (left-multiplication by a full cyclic change)
- canon_fixed_treble_cyclic: rows equal up to a cyclic relabelling of all
  bells but the treble
- canon_full_dihedral: rows equal up to a cyclic relabelling, optionally
  reflected
"""

from typing import Callable, Dict, Sequence

from bellproof.core.change import Change

Canon = Callable[[Sequence[int], Change], None]


def canon_copy(row: Sequence[int], scratch: Change) -> None:
    """Identity canon: copy the row."""
    scratch.overwrite_from(row)


def canon_full_cyclic(row: Sequence[int], scratch: Change) -> None:
    """Shift every bell by the same amount (mod stage) so the row starts with the treble."""
    stage = len(row)
    if stage == 0:
        return
    seq = scratch.seq
    shift = stage - row[0]
    for i, bell in enumerate(row):
        seq[i] = (bell + shift) % stage


def canon_fixed_treble_cyclic(row: Sequence[int], scratch: Change) -> None:
    """
    Keep the treble, and shift the other bells cyclically among themselves
    so that the first of them in the row becomes bell 2.
    """
    stage = len(row)
    if stage <= 2:
        scratch.overwrite_from(row)
        return

    seq = scratch.seq
    working = stage - 1
    first = row[0] if row[0] != 0 else row[1]
    for i, bell in enumerate(row):
        seq[i] = 0 if bell == 0 else (bell - first) % working + 1


def canon_full_dihedral(row: Sequence[int], scratch: Change) -> None:
    """
    Like ``canon_full_cyclic``, but also identifies a row with its reflected
    labelling (bell ``b`` relabelled as ``-b``). The lexicographically
    smaller of the two cyclic canons is kept.
    """
    stage = len(row)
    if stage == 0:
        return

    first = row[0]
    reflect = False
    for bell in row:
        forward = (bell - first) % stage
        backward = (first - bell) % stage
        if forward != backward:
            reflect = backward < forward
            break

    seq = scratch.seq
    if reflect:
        for i, bell in enumerate(row):
            seq[i] = (first - bell) % stage
    else:
        for i, bell in enumerate(row):
            seq[i] = (bell - first) % stage


CANONS: Dict[str, Canon] = {
    "copy": canon_copy,
    "full-cyclic": canon_full_cyclic,
    "fixed-treble-cyclic": canon_fixed_treble_cyclic,
    "full-dihedral": canon_full_dihedral,
}


def get_canon(name: str) -> Canon:
    """
    Look up a canon by name.

    Raises:
        KeyError: If no canon has that name
    """
    try:
        return CANONS[name]
    except KeyError:
        raise KeyError(
            f"Unknown canon {name!r}; expected one of {', '.join(CANONS)}"
        ) from None
