"""
Permutation algebra for bell-ringing changes.

A Change is a permutation of the bells ``[0, stage)``. Composition follows
the right action convention used throughout bellproof:

    (a * b)[i] == a[b[i]]

so a row ``r`` transfigured by ``t`` is ``t * r``.

The hashing helpers map rows to dense integer spaces:

- ``naive_hash``: positional base-``stage`` value in ``[0, stage**stage)``.
  Cheap to compute but not a bijection.
- ``lehmer_hash_in_place``: the Lehmer code, a bijection onto
  ``[0, stage!)``. It permutes its argument while it works, so it must only
  ever be given a scratch buffer.

Example:
-------
    >>> a = Change.from_str("18765432")
    >>> (a ** 2).is_rounds()
    True
    >>> Change.from_str("2143").destructive_hash()
    16
"""

import functools
import math
from typing import Iterable, Iterator, List, MutableSequence, Sequence

from bellproof.core.bells import MAX_STAGE, Parity, name_to_number, number_to_name
from bellproof.core.errors import StageMismatchError

# FACTORIALS[i] == i!
FACTORIALS: List[int] = [math.factorial(i) for i in range(MAX_STAGE + 1)]


def naive_hash(row: Sequence[int]) -> int:
    """Positional hash of a row, treating it as a base-``stage`` number."""
    stage = len(row)
    value = 0
    for bell in row:
        value = value * stage + bell
    return value


def lehmer_hash_in_place(bells: MutableSequence[int]) -> int:
    """
    Compute the Lehmer code of a permutation, destroying it in the process.

    For ``i`` from ``stage - 1`` down to 1, the position ``j`` of bell ``i``
    within the unprocessed prefix ``[0, i]`` is the ``i``-th factorial digit.
    Bell ``i`` is then swapped into place ``i``, shrinking the prefix by one.

    Args:
        bells: Mutable permutation of ``[0, len(bells))``. Left permuted
            (sorted into rounds) on return.

    Returns:
        Integer in ``[0, len(bells)!)``, unique to the permutation
    """
    total = 0
    for i in range(len(bells) - 1, 0, -1):
        j = 0
        while bells[j] != i:
            j += 1
        total += j * FACTORIALS[i]
        bells[j] = bells[i]
        bells[i] = i
    return total


@functools.total_ordering
class Change:
    """
    A permutation of bells.

    Changes compare, sort and hash by their bell sequence. They are cheap to
    copy, and most operations return new changes. The exceptions are
    ``overwrite_from`` and ``destructive_hash``, which exist so that provers
    can reuse a single scratch change for every row.
    """

    __slots__ = ("seq",)

    def __init__(self, seq: Iterable[int]):
        self.seq: List[int] = list(seq)

    @classmethod
    def rounds(cls, stage: int) -> "Change":
        """The identity change on ``stage`` bells."""
        return cls(range(stage))

    @classmethod
    def from_str(cls, names: str) -> "Change":
        """
        Parse a change from bell names, e.g. ``"2143"``.

        Raises:
            InvalidBellError: If any character is not a bell name
        """
        return cls(name_to_number(c) for c in names)

    # Sequence protocol

    def stage(self) -> int:
        return len(self.seq)

    def __len__(self) -> int:
        return len(self.seq)

    def __iter__(self) -> Iterator[int]:
        return iter(self.seq)

    def __getitem__(self, place: int) -> int:
        return self.seq[place]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Change):
            return NotImplemented
        return self.seq == other.seq

    def __lt__(self, other: "Change") -> bool:
        if not isinstance(other, Change):
            return NotImplemented
        return self.seq < other.seq

    def __hash__(self) -> int:
        return hash(tuple(self.seq))

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        return f"Change({self.to_str()!r})"

    def to_str(self) -> str:
        return "".join(number_to_name(b) for b in self.seq)

    def copy(self) -> "Change":
        return Change(self.seq)

    def overwrite_from(self, row: Sequence[int]) -> None:
        """Copy ``row`` into this change in place."""
        self.seq[:] = row

    # Algebra

    def multiply(self, rhs: Sequence[int]) -> "Change":
        """
        Compose with ``rhs``: ``result[i] = self[rhs[i]]``.

        Raises:
            StageMismatchError: If the stages differ
        """
        if len(self.seq) != len(rhs):
            raise StageMismatchError(len(self.seq), len(rhs), "multiply")
        seq = self.seq
        return Change(seq[b] for b in rhs)

    def __mul__(self, rhs: "Change") -> "Change":
        if not isinstance(rhs, Change):
            return NotImplemented
        return self.multiply(rhs)

    def inverse(self) -> "Change":
        """The inverse change: ``result[self[i]] = i``."""
        seq = [0] * len(self.seq)
        for i, bell in enumerate(self.seq):
            seq[bell] = i
        return Change(seq)

    def __invert__(self) -> "Change":
        return self.inverse()

    def pow(self, exponent: int) -> "Change":
        """
        Raise the change to an integer power.

        Negative exponents accumulate the inverse composition. The result is
        built up in a double-buffered accumulator so no intermediate change
        is allocated per step.
        """
        accumulator = ChangeAccumulator(len(self.seq))
        if exponent > 0:
            for _ in range(exponent):
                accumulator.accumulate(self.seq)
        else:
            for _ in range(-exponent):
                accumulator.accumulate_inverse(self.seq)
        return accumulator.total()

    def __pow__(self, exponent: int) -> "Change":
        return self.pow(exponent)

    def parity(self) -> Parity:
        """Parity of the change, found from its cycle decomposition."""
        stage = len(self.seq)
        seen = [False] * stage
        cycles = 0
        for start in range(stage):
            if seen[start]:
                continue
            cycles += 1
            bell = start
            while not seen[bell]:
                seen[bell] = True
                bell = self.seq[bell]
        return Parity((stage - cycles) & 1)

    # Hashing

    def naive_hash(self) -> int:
        return naive_hash(self.seq)

    def destructive_hash(self) -> int:
        """
        Lehmer code of this change, in ``[0, stage!)``.

        This consumes the change: its bells are left in an unspecified order.
        Only call it on a scratch change that will be overwritten before it
        is read again.
        """
        return lehmer_hash_in_place(self.seq)

    # Queries

    def bell_at(self, place: int) -> int:
        return self.seq[place]

    def place_of(self, bell: int) -> int:
        try:
            return self.seq.index(bell)
        except ValueError:
            raise ValueError(f"Bell {bell} not found in <{self.to_str()}>") from None

    def is_rounds(self) -> bool:
        return all(bell == i for i, bell in enumerate(self.seq))

    def is_backrounds(self) -> bool:
        stage = len(self.seq)
        return all(bell == stage - 1 - i for i, bell in enumerate(self.seq))

    def is_full_cyclic(self) -> bool:
        stage = len(self.seq)
        if stage == 0:
            return False
        start = self.seq[0]
        return all(bell == (start + i) % stage for i, bell in enumerate(self.seq))

    def is_reverse_full_cyclic(self) -> bool:
        stage = len(self.seq)
        if stage == 0:
            return False
        start = self.seq[0] + stage
        return all(bell == (start - i) % stage for i, bell in enumerate(self.seq))

    def is_fixed_treble_cyclic(self) -> bool:
        """Treble leading, the other bells in cyclic order among themselves."""
        stage = len(self.seq)
        if stage <= 2 or self.seq[0] != 0:
            return False
        start = self.seq[1]
        for i in range(stage - 1):
            expected = start + i if start + i < stage else start + i - stage + 1
            if self.seq[i + 1] != expected:
                return False
        return True

    def inverted(self) -> "Change":
        """Reverse the row and complement every bell (the row seen upside down)."""
        top = len(self.seq) - 1
        return Change(top - b for b in reversed(self.seq))


class ChangeAccumulator:
    """
    Running product of changes held in two swapped buffers.

    Each step writes ``total * rhs`` into the spare buffer and swaps, so a
    long product allocates nothing after construction.
    """

    def __init__(self, stage: int):
        self._total: List[int] = list(range(stage))
        self._spare: List[int] = list(range(stage))

    def stage(self) -> int:
        return len(self._total)

    def reset(self) -> None:
        self._total[:] = range(len(self._total))

    def accumulate(self, rhs: Sequence[int]) -> None:
        """Replace the total with ``total * rhs``."""
        if len(rhs) != len(self._total):
            raise StageMismatchError(len(self._total), len(rhs), "accumulate")
        total, spare = self._total, self._spare
        for i, bell in enumerate(rhs):
            spare[i] = total[bell]
        self._total, self._spare = spare, total

    def accumulate_inverse(self, rhs: Sequence[int]) -> None:
        """Replace the total with ``total * ~rhs`` without building ``~rhs``."""
        if len(rhs) != len(self._total):
            raise StageMismatchError(len(self._total), len(rhs), "accumulate")
        total, spare = self._total, self._spare
        for i, bell in enumerate(rhs):
            spare[bell] = total[i]
        self._total, self._spare = spare, total

    def total(self) -> Change:
        return Change(self._total)


def multiply(a: Change, b: Change) -> Change:
    """Compose two changes: ``result[i] = a[b[i]]``."""
    return a.multiply(b)


def inverse(a: Change) -> Change:
    return a.inverse()


def destructive_hash(a: Change) -> int:
    """Lehmer code of ``a``. Consumes ``a``; see ``Change.destructive_hash``."""
    return a.destructive_hash()
