"""
Materialized touches.

A Touch stores its rows as one flat list of bells, together with rule-off,
call and method-name annotations and the leftover change (the row that
would follow the last row; rounds when the touch comes round).

Text format: one row per line written with bell names. The final line is the
leftover change, not a row of the touch:

    12345678
    21436587
    12345678      <- leftover change

is a touch of two rows that comes round.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from bellproof.core.change import Change
from bellproof.core.errors import StageMismatchError, TouchFormatError
from bellproof.touch.iterators import TouchIterator

RowLike = Union[Change, Sequence[int], str]


def _as_change(row: RowLike) -> Change:
    if isinstance(row, Change):
        return row
    if isinstance(row, str):
        return Change.from_str(row)
    return Change(row)


class Touch(TouchIterator):
    """
    An append-only sequence of rows of one stage.

    Touch is itself a TouchIterator, so it can be proved, chained and
    transfigured exactly like a lazily composed source.
    """

    def __init__(self, stage: int, leftover_change: Optional[Change] = None):
        self._stage = stage
        self._length = 0
        self.bells: List[int] = []
        self.ruleoffs: List[int] = []
        self.calls: List[Tuple[int, str]] = []
        self.method_names: List[Tuple[int, str]] = []
        self.leftover_change_: Change = (
            leftover_change if leftover_change is not None else Change.rounds(stage)
        )
        if len(self.leftover_change_) != stage:
            raise StageMismatchError(stage, len(self.leftover_change_), "leftover change")

    # Construction

    @classmethod
    def from_rows(
        cls, rows: Iterable[RowLike], leftover_change: Optional[RowLike] = None
    ) -> "Touch":
        """
        Build a touch from explicit rows.

        Args:
            rows: Rows as changes, bell sequences or bell-name strings
            leftover_change: Row following the touch; rounds if omitted

        Raises:
            TouchFormatError: If there are no rows and no leftover change
            StageMismatchError: If rows have different lengths
        """
        changes = [_as_change(r) for r in rows]
        leftover = _as_change(leftover_change) if leftover_change is not None else None

        if changes:
            stage = len(changes[0])
        elif leftover is not None:
            stage = len(leftover)
        else:
            raise TouchFormatError("Can't infer the stage of a touch with no rows")

        touch = cls(stage, leftover)
        for change in changes:
            touch.append_row(change)
        return touch

    @classmethod
    def from_str(cls, text: str) -> "Touch":
        """
        Parse the text format: one row per line, last line is the leftover change.

        Blank lines and surrounding whitespace are ignored.

        Raises:
            TouchFormatError: If the text contains no rows at all
            InvalidBellError: If a line contains something other than bell names
        """
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]
        if not lines:
            raise TouchFormatError("Touch text is empty")
        return cls.from_rows(lines[:-1], lines[-1])

    @classmethod
    def from_iterator(cls, source: TouchIterator) -> "Touch":
        touch = cls(source.stage())
        touch.append_iterator(source)
        return touch

    # Mutation

    def append_row(self, row: Sequence[int]) -> None:
        if len(row) != self._stage:
            raise StageMismatchError(self._stage, len(row), f"row {self._length}")
        self.bells.extend(row)
        self._length += 1

    def append_iterator(self, source: TouchIterator) -> None:
        """
        Append every row and annotation of ``source``.

        The leftover change becomes the leftover change of ``source``.
        """
        if source.stage() != self._stage:
            raise StageMismatchError(self._stage, source.stage(), "append")

        shift = self._length
        self.bells.extend(source.bell_iter())
        self.ruleoffs.extend(i + shift for i in source.ruleoff_iter())
        self.calls.extend((i + shift, c) for i, c in source.call_iter())
        self.method_names.extend((i + shift, n) for i, n in source.method_name_iter())
        self.leftover_change_ = source.leftover_change()
        self._length += source.length()

    def add_ruleoff(self, index: int) -> None:
        self.ruleoffs.append(index)

    def add_call(self, index: int, call: str) -> None:
        self.calls.append((index, call))

    def add_method_name(self, index: int, name: str) -> None:
        self.method_names.append((index, name))

    def set_leftover_change(self, change: Change) -> None:
        if len(change) != self._stage:
            raise StageMismatchError(self._stage, len(change), "leftover change")
        self.leftover_change_ = change.copy()

    # Access

    def row_at(self, index: int) -> Change:
        if not 0 <= index < self._length:
            raise IndexError(f"Row {index} out of range for touch of {self._length} rows")
        start = index * self._stage
        return Change(self.bells[start : start + self._stage])

    def rows(self) -> Iterator[Change]:
        for i in range(self._length):
            yield self.row_at(i)

    def comes_round(self) -> bool:
        return self.leftover_change_.is_rounds()

    def to_str(self) -> str:
        """Serialize to the text format (rows, then the leftover change)."""
        lines = [row.to_str() for row in self.rows()]
        lines.append(self.leftover_change_.to_str())
        return "\n".join(lines)

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Touch):
            return NotImplemented
        return (
            self._stage == other._stage
            and self._length == other._length
            and self.bells == other.bells
            and self.ruleoffs == other.ruleoffs
            and self.calls == other.calls
            and self.method_names == other.method_names
            and self.leftover_change_ == other.leftover_change_
        )

    def __repr__(self) -> str:
        return f"Touch(stage={self._stage}, length={self._length})"

    # TouchIterator interface

    def bell_iter(self) -> Iterator[int]:
        return iter(self.bells)

    def ruleoff_iter(self) -> Iterator[int]:
        return iter(self.ruleoffs)

    def call_iter(self) -> Iterator[Tuple[int, str]]:
        return iter(self.calls)

    def method_name_iter(self) -> Iterator[Tuple[int, str]]:
        return iter(self.method_names)

    def leftover_change_iter(self) -> Iterator[int]:
        return iter(self.leftover_change_.seq)

    def leftover_change(self) -> Change:
        return self.leftover_change_.copy()

    def stage(self) -> int:
        return self._stage

    def length(self) -> int:
        return self._length
