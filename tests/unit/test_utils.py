"""Unit tests for closure and extent."""

import math

from bellproof.core import Change
from bellproof.utils import closure, extent


class TestClosure:
    """Tests for closure."""

    def test_closure_of_order_six(self) -> None:
        powers = closure(Change.from_str("4321675"))
        assert [p.to_str() for p in powers] == [
            "1234567",
            "4321675",
            "1234756",
            "4321567",
            "1234675",
            "4321756",
        ]

    def test_closure_of_rounds(self) -> None:
        assert closure(Change.rounds(5)) == [Change.rounds(5)]

    def test_closure_of_empty_change(self) -> None:
        assert closure(Change([])) == [Change([])]

    def test_closure_of_single_bell(self) -> None:
        assert closure(Change.from_str("1")) == [Change.from_str("1")]

    def test_closure_is_a_group(self) -> None:
        powers = closure(Change.from_str("1342"))
        assert len(powers) == 3
        for a in powers:
            for b in powers:
                assert a * b in powers


class TestExtent:
    """Tests for extent."""

    def test_size(self) -> None:
        for stage in range(6):
            assert len(list(extent(stage))) == math.factorial(stage)

    def test_lexicographic(self) -> None:
        rows = list(extent(4))
        assert rows == sorted(rows)
        assert rows[0] == Change.rounds(4)
        assert rows[-1] == Change.from_str("4321")

    def test_distinct(self) -> None:
        assert len(set(extent(5))) == 120
