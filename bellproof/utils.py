"""
Group-theoretic helpers on changes.
"""

import itertools
from typing import Iterator, List

from bellproof.core.change import Change, ChangeAccumulator


def closure(change: Change) -> List[Change]:
    """
    Every power of ``change`` before it returns to rounds.

    The list starts with rounds, so its length is the order of ``change``.

    Example:
        >>> closure(Change.from_str("13425678"))
        [Change('12345678'), Change('13425678'), Change('14235678')]
    """
    powers = [Change.rounds(change.stage())]
    accumulator = ChangeAccumulator(change.stage())
    accumulator.accumulate(change.seq)

    while not accumulator.total().is_rounds():
        powers.append(accumulator.total())
        accumulator.accumulate(change.seq)

    return powers


def extent(stage: int) -> Iterator[Change]:
    """Every change of ``stage`` bells, in lexicographic order."""
    for perm in itertools.permutations(range(stage)):
        yield Change(perm)
