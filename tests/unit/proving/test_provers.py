"""
Unit tests for the truth provers.

Every prover is run against the same scenarios: the three must agree on
truth and on falseness groups. The hash provers are also checked for stage
limits and for leaving their scratch table empty between calls.
"""

from typing import Callable

import pytest

from bellproof.config import Config, ProvingConfig
from bellproof.core import Change, StageMismatchError, StageTooLargeError
from bellproof.proving import (
    CompactHashProver,
    FullProvingContext,
    HashProver,
    NaiveProver,
    canon_copy,
    canon_full_cyclic,
    prover_for_stage,
)
from bellproof.proving.generators import TouchFixtures
from bellproof.touch import Touch


# ============================================================================
# Test Fixtures
# ============================================================================

PROVER_NAMES = ["naive", "hash", "compact"]


def make_prover(name: str, stage: int, canon=canon_copy) -> FullProvingContext:
    if name == "naive":
        return NaiveProver(canon)
    if name == "hash":
        return HashProver(stage, canon)
    return CompactHashProver(stage, canon, max_stage=10)


@pytest.fixture(params=PROVER_NAMES)
def prover_factory(request: pytest.FixtureRequest) -> Callable[..., FullProvingContext]:
    """Build a prover of each kind for a given stage."""
    return lambda stage, canon=canon_copy: make_prover(request.param, stage, canon)


def failing_canon(fail_on_call: int):
    """A canon that copies rows but raises on its ``fail_on_call``-th call."""
    calls = {"count": 0}

    def canon(row, scratch: Change) -> None:
        calls["count"] += 1
        if calls["count"] == fail_on_call:
            raise RuntimeError("canon failed")
        scratch.overwrite_from(row)

    return canon


# ============================================================================
# Scenarios shared by every prover
# ============================================================================


class TestProverScenarios:
    """Scenarios every prover must agree on."""

    def test_repeated_row_three_bells(self, prover_factory) -> None:
        touch = Touch.from_str("123\n132\n123\n123")
        prover = prover_factory(3)

        assert not prover.is_true(touch)
        assert prover.full_prove(touch) == [[0, 2]]

    def test_true_touch(self, prover_factory) -> None:
        touch = Touch.from_str("123456\n214365\n123456")
        prover = prover_factory(6)

        assert prover.is_true(touch)
        assert prover.full_prove(touch) == []

    def test_false_touch(self, prover_factory) -> None:
        touch = Touch.from_str("123456\n214365\n123456\n123456")
        prover = prover_factory(6)

        assert not prover.is_true(touch)
        assert prover.full_prove(touch) == [[0, 2]]

    def test_empty_touch_is_true(self, prover_factory) -> None:
        touch = Touch.from_str("1234")
        prover = prover_factory(4)

        assert prover.is_true(touch)
        assert prover.full_prove(touch) == []

    def test_groups_of_three(self, prover_factory) -> None:
        touch = TouchFixtures.repeated_rows(4, [0, 1, 0, 2, 0, 1])
        prover = prover_factory(4)

        assert not prover.is_true(touch)
        assert prover.full_prove(touch) == [[0, 2, 4], [1, 5]]

    def test_extent_is_true(self, prover_factory) -> None:
        touch = TouchFixtures.extent_touch(5)
        assert prover_factory(5).full_prove(touch) == []

    def test_extent_twice(self, prover_factory) -> None:
        extent = TouchFixtures.extent_touch(4)
        touch = extent.chain(extent)

        groups = prover_factory(4).full_prove(touch)

        assert groups == [[i, i + 24] for i in range(24)]

    def test_plain_hunt_is_true(self, prover_factory) -> None:
        touch = TouchFixtures.plain_hunt(6)
        assert touch.comes_round()
        assert touch.length() == 12
        assert prover_factory(6).is_true(touch)

    def test_canon_passed_per_call(self, prover_factory) -> None:
        """A canon given to the call overrides the prover's default."""
        touch = Touch.from_rows(["1234", "2341"])
        prover = prover_factory(4)

        assert prover.is_true(touch)
        assert not prover.is_true(touch, canon_full_cyclic)
        assert prover.full_prove(touch, canon_full_cyclic) == [[0, 1]]

    def test_canon_given_at_construction(self, prover_factory) -> None:
        touch = Touch.from_rows(["1234", "2341"])
        prover = prover_factory(4, canon_full_cyclic)
        assert prover.full_prove(touch) == [[0, 1]]

    def test_prove_alias(self, prover_factory) -> None:
        touch = Touch.from_str("12\n21\n12")
        assert prover_factory(2).prove(touch)

    def test_lazy_source(self, prover_factory) -> None:
        """Composed iterators prove the same as their collected touch."""
        lead = TouchFixtures.plain_bob_minimus_lead()
        source = lead.chain(lead)
        prover = prover_factory(4)

        assert prover.full_prove(source) == prover.full_prove(source.collect())

    def test_stage_eight(self, prover_factory) -> None:
        touch = Touch.from_rows(["12345678", "18765432", "13425678", "18765432"])
        assert prover_factory(8).full_prove(touch) == [[1, 3]]


# ============================================================================
# Scratch table reuse
# ============================================================================


class TestTableProvers:
    """Tests specific to HashProver and CompactHashProver."""

    @pytest.mark.parametrize("name", ["hash", "compact"])
    def test_table_clear_after_calls(self, name: str) -> None:
        prover = make_prover(name, 4)
        false_touch = TouchFixtures.repeated_rows(4, [3, 1, 3, 7, 1])

        assert prover.is_clear()
        assert not prover.is_true(false_touch)
        assert prover.is_clear()
        prover.full_prove(false_touch)
        assert prover.is_clear()

    @pytest.mark.parametrize("name", ["hash", "compact"])
    def test_reuse_matches_fresh(self, name: str) -> None:
        """Results of a reused prover don't depend on earlier calls."""
        first = TouchFixtures.repeated_rows(4, [0, 1, 2, 1, 0])
        second = TouchFixtures.repeated_rows(4, [0, 2, 4, 6, 1, 3])
        prover = make_prover(name, 4)

        prover.full_prove(first)
        prover.is_true(first)

        assert prover.is_true(second)
        assert prover.full_prove(second) == make_prover(name, 4).full_prove(second)

    @pytest.mark.parametrize("name", ["hash", "compact"])
    def test_table_cleared_when_canon_raises(self, name: str) -> None:
        touch = TouchFixtures.repeated_rows(4, [0, 1, 2, 3, 4])
        prover = make_prover(name, 4)

        with pytest.raises(RuntimeError):
            prover.is_true(touch, failing_canon(3))
        assert prover.is_clear()

        with pytest.raises(RuntimeError):
            prover.full_prove(touch, failing_canon(4))
        assert prover.is_clear()

        assert prover.is_true(touch)

    @pytest.mark.parametrize("name", ["hash", "compact"])
    def test_stage_mismatch(self, name: str) -> None:
        prover = make_prover(name, 4)
        with pytest.raises(StageMismatchError):
            prover.is_true(Touch.from_str("12345\n12345"))

    def test_naive_any_stage(self) -> None:
        prover = NaiveProver()
        assert prover.is_true(Touch.from_str("123\n123"))
        assert prover.is_true(Touch.from_str("1234567890ET\n1234567890ET"))

    def test_hash_prover_stage_limit(self) -> None:
        HashProver(8)
        with pytest.raises(StageTooLargeError):
            HashProver(9)

    def test_hash_prover_lower_limit(self) -> None:
        with pytest.raises(StageTooLargeError):
            HashProver(6, max_stage=5)

    def test_compact_prover_stage_limit(self) -> None:
        with pytest.raises(StageTooLargeError):
            CompactHashProver(11, max_stage=10)
        with pytest.raises(StageTooLargeError):
            CompactHashProver(6, max_stage=5)

    def test_table_sizes(self) -> None:
        assert HashProver(5).table.size == 5**5
        assert CompactHashProver(5, max_stage=10).table.size == 120


# ============================================================================
# prover_for_stage
# ============================================================================


class TestProverForStage:
    """Tests for automatic prover selection."""

    def test_auto_compact(self) -> None:
        assert isinstance(prover_for_stage(6, config=Config()), CompactHashProver)

    def test_auto_naive_above_bound(self) -> None:
        assert isinstance(prover_for_stage(11, config=Config()), NaiveProver)

    def test_bound_from_config(self) -> None:
        cfg = Config(proving=ProvingConfig(compact_hash_max_stage=5))
        assert isinstance(prover_for_stage(6, config=cfg), NaiveProver)
        assert isinstance(prover_for_stage(5, config=cfg), CompactHashProver)

    def test_explicit_choices(self) -> None:
        cfg = Config()
        assert isinstance(prover_for_stage(6, prover="naive", config=cfg), NaiveProver)
        assert isinstance(prover_for_stage(6, prover="hash", config=cfg), HashProver)
        assert isinstance(
            prover_for_stage(6, prover="compact", config=cfg), CompactHashProver
        )

    def test_preferred_prover_from_config(self) -> None:
        cfg = Config(proving=ProvingConfig(preferred_prover="naive"))
        assert isinstance(prover_for_stage(4, config=cfg), NaiveProver)

    def test_hash_falls_back(self) -> None:
        """A hash prover that can't be built falls back to the automatic choice."""
        cfg = Config()
        assert isinstance(prover_for_stage(9, prover="hash", config=cfg), CompactHashProver)
        assert isinstance(prover_for_stage(12, prover="compact", config=cfg), NaiveProver)

    def test_unknown_prover(self) -> None:
        with pytest.raises(ValueError):
            prover_for_stage(6, prover="bogus", config=Config())

    def test_canon_defaults_from_config(self) -> None:
        cfg = Config(proving=ProvingConfig(default_canon="full-cyclic"))
        assert prover_for_stage(4, config=cfg).canon is canon_full_cyclic
        assert prover_for_stage(4, canon=canon_copy, config=cfg).canon is canon_copy
