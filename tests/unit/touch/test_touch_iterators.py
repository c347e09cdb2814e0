"""
Unit tests for composed row sources.

Tests chaining, transfiguration and multi-chaining, including the re-basing
of annotation indices and the buffer reuse of row_iter.
"""

from typing import Iterator, Tuple

import pytest

from bellproof.core import Change, StageMismatchError, TouchFormatError
from bellproof.touch import (
    ChainedTouchIterator,
    MultiChainTouchIterator,
    Touch,
    TouchIterator,
    TransfiguredTouchIterator,
)
from bellproof.touch.iterators import fill_from_iterator


# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def first() -> Touch:
    touch = Touch.from_rows(["1234", "2143"], leftover_change="2413")
    touch.add_ruleoff(1)
    touch.add_call(0, "-")
    return touch


@pytest.fixture
def second() -> Touch:
    touch = Touch.from_rows(["2413", "4231", "4321"], leftover_change="3412")
    touch.add_ruleoff(0)
    touch.add_call(2, "s")
    touch.add_method_name(0, "Little Bob")
    return touch


class ShortStream(TouchIterator):
    """A source that claims more rows than its bell stream holds."""

    def bell_iter(self) -> Iterator[int]:
        return iter([0, 1, 2])

    def ruleoff_iter(self) -> Iterator[int]:
        return iter([])

    def call_iter(self) -> Iterator[Tuple[int, str]]:
        return iter([])

    def method_name_iter(self) -> Iterator[Tuple[int, str]]:
        return iter([])

    def leftover_change_iter(self) -> Iterator[int]:
        return iter([0, 1, 2])

    def stage(self) -> int:
        return 3

    def length(self) -> int:
        return 2


# ============================================================================
# Base interface
# ============================================================================


class TestTouchIteratorBase:
    """Tests for helpers shared by every row source."""

    def test_fill_from_iterator(self) -> None:
        buffer = [0, 0, 0]
        bells = iter([2, 0, 1, 1])
        assert fill_from_iterator(bells, buffer)
        assert buffer == [2, 0, 1]
        assert not fill_from_iterator(bells, buffer)

    def test_row_iter_reuses_buffer(self, second: Touch) -> None:
        """Every yielded row is the same list object."""
        buffer = [0, 0, 0, 0]
        seen = []
        for row in second.row_iter(buffer):
            assert row is buffer
            seen.append(list(row))
        assert seen == [[1, 3, 0, 2], [3, 1, 2, 0], [3, 2, 1, 0]]

    def test_row_iter_short_stream(self) -> None:
        with pytest.raises(TouchFormatError):
            list(ShortStream().row_iter())

    def test_sources_are_rewalkable(self, first: Touch, second: Touch) -> None:
        chained = first.chain(second)
        assert list(chained.bell_iter()) == list(chained.bell_iter())

    def test_abstract_interface(self) -> None:
        with pytest.raises(TypeError):
            TouchIterator()


# ============================================================================
# Chaining
# ============================================================================


class TestChainedTouchIterator:
    """Tests for ChainedTouchIterator."""

    def test_rows_and_length(self, first: Touch, second: Touch) -> None:
        chained = first.chain(second)

        assert isinstance(chained, ChainedTouchIterator)
        assert chained.length() == 5
        assert chained.stage() == 4
        rows = [r.to_str() for r in chained.collect().rows()]
        assert rows == ["1234", "2143", "2413", "4231", "4321"]

    def test_leftover_from_second(self, first: Touch, second: Touch) -> None:
        assert first.chain(second).leftover_change() == Change.from_str("3412")

    def test_annotations_rebased(self, first: Touch, second: Touch) -> None:
        chained = first.chain(second)

        assert list(chained.ruleoff_iter()) == [1, 2]
        assert list(chained.call_iter()) == [(0, "-"), (4, "s")]
        assert list(chained.method_name_iter()) == [(2, "Little Bob")]

    def test_stage_mismatch(self, first: Touch) -> None:
        with pytest.raises(StageMismatchError):
            first.chain(Touch.from_rows(["12345"]))

    def test_collect_matches_append(self, first: Touch, second: Touch) -> None:
        """Collecting a chain equals appending onto a copy."""
        expected = Touch.from_iterator(first)
        expected.append_iterator(second)
        assert first.chain(second).collect() == expected


# ============================================================================
# Transfiguration
# ============================================================================


class TestTransfiguredTouchIterator:
    """Tests for TransfiguredTouchIterator."""

    def test_rows_left_multiplied(self, second: Touch) -> None:
        transposition = Change.from_str("2341")
        transfigured = second.transfigure(transposition)

        assert isinstance(transfigured, TransfiguredTouchIterator)
        for original, row in zip(second.rows(), transfigured.collect().rows()):
            assert row == transposition * original

    def test_leftover_transfigured(self, second: Touch) -> None:
        transposition = Change.from_str("2341")
        transfigured = second.transfigure(transposition)
        assert transfigured.leftover_change() == transposition * Change.from_str("3412")

    def test_annotations_unchanged(self, second: Touch) -> None:
        transfigured = second.transfigure(Change.from_str("4321"))
        assert list(transfigured.ruleoff_iter()) == [0]
        assert list(transfigured.call_iter()) == [(2, "s")]
        assert list(transfigured.method_name_iter()) == [(0, "Little Bob")]

    def test_accepts_plain_sequence(self, first: Touch) -> None:
        transfigured = TransfiguredTouchIterator(first, [3, 2, 1, 0])
        assert transfigured.collect().row_at(0) == Change.from_str("4321")

    def test_stage_mismatch(self, first: Touch) -> None:
        with pytest.raises(StageMismatchError):
            first.transfigure(Change.rounds(5))


# ============================================================================
# Multi-chaining
# ============================================================================


class TestMultiChainTouchIterator:
    """Tests for MultiChainTouchIterator."""

    def test_offsets(self, first: Touch, second: Touch) -> None:
        multi = MultiChainTouchIterator([first, second, first])

        assert multi.offsets == [0, 2, 5]
        assert multi.length() == 7
        assert list(multi.ruleoff_iter()) == [1, 2, 6]
        assert list(multi.call_iter()) == [(0, "-"), (4, "s"), (5, "-")]
        assert multi.leftover_change() == Change.from_str("2413")

    def test_matches_nested_chains(self, first: Touch, second: Touch) -> None:
        multi = MultiChainTouchIterator([first, second, first])
        nested = first.chain(second).chain(first)
        assert multi.collect() == nested.collect()

    def test_single_source(self, second: Touch) -> None:
        assert MultiChainTouchIterator([second]).collect() == second

    def test_empty_rejected(self) -> None:
        with pytest.raises(TouchFormatError):
            MultiChainTouchIterator([])

    def test_stage_mismatch(self, first: Touch) -> None:
        with pytest.raises(StageMismatchError):
            MultiChainTouchIterator([first, Touch.from_rows(["12345"])])
