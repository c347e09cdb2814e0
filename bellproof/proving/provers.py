"""
Truth provers.

A touch is true when no two of its rows have the same canonical form. Three
interchangeable provers decide this:

- NaiveProver: sorts canonical rows and compares neighbours. Works at any
  stage and serves as the reference for the other two.
- HashProver: marks each row's positional hash in a ``stage**stage``
  bitmap. Restricted to stages up to 8.
- CompactHashProver: stores the index of each row under its Lehmer code in a
  ``stage!`` table, so colliding rows are paired directly.

Every prover answers ``is_true`` (may stop at the first repeated row) and
``full_prove`` (scans everything and returns the falseness groups).

The two hash provers own a scratch table that is empty between calls. Each
call replays the rows it marked and clears them again on the way out, even
when the call raises. A prover instance may be reused for any number of
calls but must not be shared between threads.
"""

import itertools
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from bellproof.config import Config, config as global_config
from bellproof.core.change import FACTORIALS, Change, lehmer_hash_in_place, naive_hash
from bellproof.core.errors import StageMismatchError, StageTooLargeError
from bellproof.logging import get_bellproof_logger, log_proof_result
from bellproof.proving.canon import Canon, canon_copy, get_canon
from bellproof.proving.grouping import group_falseness
from bellproof.touch.iterators import TouchIterator

HASH_PROVER_MAX_STAGE = 8


class ProvingContext(ABC):
    """
    Anything that can decide whether a touch is true.

    Args:
        canon: Canonicalization policy used when a call doesn't pass one
    """

    def __init__(self, canon: Canon = canon_copy):
        self.canon = canon
        self._log = get_bellproof_logger("proving")

    @abstractmethod
    def is_true(self, touch: TouchIterator, canon: Optional[Canon] = None) -> bool:
        """Return True if no two rows of ``touch`` share a canonical form."""
        pass

    def _log_result(
        self, touch: TouchIterator, is_true: bool, mode: str, **kwargs: object
    ) -> None:
        log_proof_result(
            self._log,
            type(self).__name__,
            touch.length(),
            is_true,
            stage=touch.stage(),
            mode=mode,
            **kwargs,
        )


class FullProvingContext(ProvingContext):
    """A prover that can also report which rows are false."""

    @abstractmethod
    def full_prove(
        self, touch: TouchIterator, canon: Optional[Canon] = None
    ) -> List[List[int]]:
        """
        Find every falseness group of ``touch``.

        Returns:
            Disjoint groups of at least two row indices with identical
            canonical rows; each group ascending, groups ordered by their
            first index. Empty when the touch is true.
        """
        pass

    def prove(self, touch: TouchIterator, canon: Optional[Canon] = None) -> bool:
        return self.is_true(touch, canon)


class NaiveProver(FullProvingContext):
    """
    Prove by sorting.

    ``O(m log m * stage)`` time and ``O(m * stage)`` memory for ``m`` rows.
    """

    def _sorted_rows(
        self, touch: TouchIterator, canon: Canon
    ) -> List[Tuple[Tuple[int, ...], int]]:
        scratch = Change.rounds(touch.stage())
        keyed = []
        for index, row in enumerate(touch.row_iter()):
            canon(row, scratch)
            keyed.append((tuple(scratch.seq), index))
        keyed.sort()
        return keyed

    def is_true(self, touch: TouchIterator, canon: Optional[Canon] = None) -> bool:
        keyed = self._sorted_rows(touch, canon or self.canon)
        result = all(keyed[i - 1][0] != keyed[i][0] for i in range(1, len(keyed)))
        self._log_result(touch, result, "is_true")
        return result

    def full_prove(
        self, touch: TouchIterator, canon: Optional[Canon] = None
    ) -> List[List[int]]:
        keyed = self._sorted_rows(touch, canon or self.canon)

        groups = []
        start = 0
        while start < len(keyed):
            end = start + 1
            while end < len(keyed) and keyed[end][0] == keyed[start][0]:
                end += 1
            if end - start >= 2:
                # Ties sort by index, so each run is already ascending
                groups.append([index for _, index in keyed[start:end]])
            start = end

        groups.sort(key=lambda group: group[0])
        self._log_result(touch, not groups, "full_prove", groups=len(groups))
        return groups


class _TableProver(FullProvingContext):
    """
    Shared machinery for provers that own a scratch table indexed by row key.

    Subclasses define how a row is keyed and what an occupied slot holds.
    """

    def __init__(
        self, stage: int, canon: Canon, size: int, dtype: type, empty: object
    ):
        super().__init__(canon)
        self.stage = stage
        self.empty = empty
        self.table = np.full(size, empty, dtype=dtype)
        self._row: List[int] = [0] * stage
        self._scratch = Change.rounds(stage)

    @abstractmethod
    def _key(self, row: List[int], canon: Canon) -> int:
        pass

    def _check_stage(self, touch: TouchIterator) -> None:
        if touch.stage() != self.stage:
            raise StageMismatchError(
                self.stage, touch.stage(), f"{type(self).__name__} proving"
            )

    def _reset(self, touch: TouchIterator, canon: Canon, rows: int) -> None:
        """Clear the slots of the first ``rows`` rows by keying them again."""
        for row in itertools.islice(touch.row_iter(self._row), rows):
            self.table[self._key(row, canon)] = self.empty

    def is_clear(self) -> bool:
        """Whether the scratch table is back in its empty state."""
        return bool(np.all(self.table == self.empty))


class HashProver(_TableProver):
    """
    Prove with a bitmap over positional row hashes.

    The positional hash is not minimal, so the bitmap has ``stage**stage``
    entries; construction is refused above stage 8.

    Args:
        stage: Stage of every touch this prover will see
        canon: Default canonicalization policy
        max_stage: Lower bound than 8 to enforce, if any

    Raises:
        StageTooLargeError: If ``stage`` exceeds the bound
    """

    def __init__(
        self,
        stage: int,
        canon: Canon = canon_copy,
        max_stage: Optional[int] = None,
    ):
        limit = HASH_PROVER_MAX_STAGE
        if max_stage is not None:
            limit = min(limit, max_stage)
        if stage > limit:
            raise StageTooLargeError(stage, limit, "HashProver")
        super().__init__(stage, canon, stage**stage, np.bool_, False)

    def _key(self, row: List[int], canon: Canon) -> int:
        canon(row, self._scratch)
        return naive_hash(self._scratch.seq)

    def is_true(self, touch: TouchIterator, canon: Optional[Canon] = None) -> bool:
        canon = canon or self.canon
        self._check_stage(touch)

        bitmap = self.table
        processed = 0
        result = True
        try:
            for row in touch.row_iter(self._row):
                key = self._key(row, canon)
                processed += 1
                if bitmap[key]:
                    result = False
                    break
                bitmap[key] = True
        finally:
            self._reset(touch, canon, processed)

        self._log_result(touch, result, "is_true")
        return result

    def full_prove(
        self, touch: TouchIterator, canon: Optional[Canon] = None
    ) -> List[List[int]]:
        canon = canon or self.canon
        self._check_stage(touch)

        # First pass: which hashes are seen more than once
        bitmap = self.table
        repeated: Set[int] = set()
        processed = 0
        try:
            for row in touch.row_iter(self._row):
                key = self._key(row, canon)
                processed += 1
                if bitmap[key]:
                    repeated.add(key)
                else:
                    bitmap[key] = True
        finally:
            self._reset(touch, canon, processed)

        # Second pass: which rows carry those hashes
        edges: List[Tuple[int, int]] = []
        if repeated:
            last_seen: Dict[int, int] = {}
            for index, row in enumerate(touch.row_iter(self._row)):
                key = self._key(row, canon)
                if key in repeated:
                    if key in last_seen:
                        edges.append((last_seen[key], index))
                    last_seen[key] = index

        groups = group_falseness(edges)
        self._log_result(touch, not groups, "full_prove", groups=len(groups))
        return groups


class CompactHashProver(_TableProver):
    """
    Prove with a perfect hash: one table slot per permutation of the stage.

    Each row's Lehmer code indexes a ``stage!`` table holding the index of
    the first row seen with that code (``-1`` when unseen). The table
    needs ``8 * stage!`` bytes, so construction is refused above the
    configured stage bound.

    Args:
        stage: Stage of every touch this prover will see
        canon: Default canonicalization policy
        max_stage: Stage bound; ``config.proving.compact_hash_max_stage`` if omitted

    Raises:
        StageTooLargeError: If ``stage`` exceeds the bound
    """

    EMPTY = -1

    def __init__(
        self,
        stage: int,
        canon: Canon = canon_copy,
        max_stage: Optional[int] = None,
    ):
        if max_stage is None:
            max_stage = global_config.proving.compact_hash_max_stage
        if stage > max_stage:
            raise StageTooLargeError(stage, max_stage, "CompactHashProver")
        super().__init__(stage, canon, FACTORIALS[stage], np.int64, self.EMPTY)

    def _key(self, row: List[int], canon: Canon) -> int:
        # The canon repopulates the scratch that the previous hash consumed
        canon(row, self._scratch)
        return lehmer_hash_in_place(self._scratch.seq)

    def _collisions(
        self, touch: TouchIterator, canon: Canon, stop_at_first: bool
    ) -> List[Tuple[int, int]]:
        self._check_stage(touch)

        table = self.table
        edges: List[Tuple[int, int]] = []
        processed = 0
        try:
            for index, row in enumerate(touch.row_iter(self._row)):
                key = self._key(row, canon)
                processed += 1
                previous = int(table[key])
                if previous == self.EMPTY:
                    table[key] = index
                else:
                    edges.append((previous, index))
                    if stop_at_first:
                        break
        finally:
            self._reset(touch, canon, processed)

        return edges

    def is_true(self, touch: TouchIterator, canon: Optional[Canon] = None) -> bool:
        result = not self._collisions(touch, canon or self.canon, stop_at_first=True)
        self._log_result(touch, result, "is_true")
        return result

    def full_prove(
        self, touch: TouchIterator, canon: Optional[Canon] = None
    ) -> List[List[int]]:
        edges = self._collisions(touch, canon or self.canon, stop_at_first=False)
        groups = group_falseness(edges)
        self._log_result(touch, not groups, "full_prove", groups=len(groups))
        return groups


def prover_for_stage(
    stage: int,
    canon: Optional[Canon] = None,
    prover: Optional[str] = None,
    config: Optional[Config] = None,
) -> FullProvingContext:
    """
    Choose a prover for touches of ``stage``.

    ``"auto"`` uses CompactHashProver up to ``compact_hash_max_stage`` and
    NaiveProver beyond it. An explicitly requested hash prover that can't be
    built for ``stage`` falls back to the automatic choice with a warning.

    Args:
        stage: Stage of the touches to prove
        canon: Canonicalization policy; ``config.proving.default_canon`` if omitted
        prover: "auto", "naive", "hash" or "compact"; the configured
            preference if omitted
        config: Configuration to use; the global configuration if omitted
    """
    cfg = (config or global_config).proving
    if canon is None:
        canon = get_canon(cfg.default_canon)
    choice = prover or cfg.preferred_prover
    log = get_bellproof_logger("proving")

    if choice == "naive":
        return NaiveProver(canon)

    if choice == "hash":
        try:
            return HashProver(stage, canon, max_stage=cfg.hash_max_stage)
        except StageTooLargeError as e:
            log.warning(f"{e}; choosing a prover automatically")

    if choice == "compact":
        try:
            return CompactHashProver(stage, canon, max_stage=cfg.compact_hash_max_stage)
        except StageTooLargeError as e:
            log.warning(f"{e}; choosing a prover automatically")

    if choice not in ("auto", "hash", "compact"):
        raise ValueError(f"Unknown prover {choice!r}")

    if stage <= cfg.compact_hash_max_stage:
        return CompactHashProver(stage, canon, max_stage=cfg.compact_hash_max_stage)

    log.debug(
        f"Stage {stage} exceeds compact_hash_max_stage "
        f"({cfg.compact_hash_max_stage}); using NaiveProver"
    )
    return NaiveProver(canon)
