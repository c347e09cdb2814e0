"""
Test data generators for proving.

Provides both deterministic fixtures and property-based generators
using hypothesis for generating changes and touches.
"""

from typing import List, Optional, Sequence

from hypothesis import strategies as st

from bellproof.core.change import Change
from bellproof.touch.touch import Touch
from bellproof.utils import extent


# Hypothesis strategies for generating test data


@st.composite
def stage_strategy(draw, min_stage: int = 1, max_stage: int = 8) -> int:  # type: ignore[no-untyped-def]
    """Generate a stage."""
    return draw(st.integers(min_value=min_stage, max_value=max_stage))  # type: ignore[no-any-return]


@st.composite
def change_strategy(draw, stage: Optional[int] = None) -> Change:  # type: ignore[no-untyped-def]
    """Generate a random change, of ``stage`` bells if given."""
    if stage is None:
        stage = draw(stage_strategy())
    return Change(draw(st.permutations(list(range(stage)))))


@st.composite
def touch_strategy(  # type: ignore[no-untyped-def, misc]
    draw,
    min_stage: int = 1,
    max_stage: int = 6,
    max_rows: int = 40,
    stage: Optional[int] = None,
) -> Touch:
    """
    Generate a random touch.

    Rows are drawn from a small pool of changes so that repeated rows (and
    groups of three or more identical rows) turn up often.

    Args:
        min_stage: Smallest stage to draw
        max_stage: Largest stage to draw
        max_rows: Maximum number of rows
        stage: Fixed stage, overriding the bounds
    """
    if stage is None:
        stage = draw(stage_strategy(min_stage, max_stage))

    pool = draw(st.lists(change_strategy(stage), min_size=1, max_size=12))
    rows = draw(st.lists(st.sampled_from(pool), max_size=max_rows))
    leftover = draw(change_strategy(stage))

    touch = Touch(stage, leftover)
    for row in rows:
        touch.append_row(row.seq)
    return touch


class TouchFixtures:
    """Deterministic touches for tests."""

    @staticmethod
    def from_changes(start: Change, changes: Sequence[Change]) -> Touch:
        """
        Ring ``changes`` one after another starting from ``start``.

        Each change permutes places: the row after ``r`` is ``r * change``.
        The product after the last change becomes the leftover change.
        """
        touch = Touch(start.stage())
        row = start.copy()
        for change in changes:
            touch.append_row(row.seq)
            row = row * change
        touch.set_leftover_change(row)
        return touch

    @staticmethod
    def plain_hunt(stage: int) -> Touch:
        """Plain hunt on an even number of bells: ``2 * stage`` rows, comes round."""
        if stage < 4 or stage % 2:
            raise ValueError(f"Plain hunt needs an even stage of at least 4, got {stage}")
        cross = Change(i ^ 1 for i in range(stage))
        places = Change([0] + [((i - 1) ^ 1) + 1 for i in range(1, stage - 1)] + [stage - 1])
        return TouchFixtures.from_changes(
            Change.rounds(stage), [cross, places] * stage
        )

    @staticmethod
    def plain_bob_minimus_lead() -> Touch:
        """One lead of Plain Bob Minimus (x14x14x14x12); lead head 1342."""
        cross = Change.from_str("2143")
        fourteen = Change.from_str("1324")
        twelve = Change.from_str("1243")
        return TouchFixtures.from_changes(
            Change.rounds(4),
            [cross, fourteen, cross, fourteen, cross, fourteen, cross, twelve],
        )

    @staticmethod
    def extent_touch(stage: int) -> Touch:
        """Every row of the stage exactly once (true)."""
        return Touch.from_rows(list(extent(stage)), Change.rounds(stage))

    @staticmethod
    def repeated_rows(stage: int, pattern: List[int]) -> Touch:
        """
        A touch whose ``i``-th row is the ``pattern[i]``-th row of the extent.

        Equal entries in ``pattern`` give identical rows.
        """
        rows = list(extent(stage))
        return Touch.from_rows([rows[p] for p in pattern], Change.rounds(stage))
