"""
Lazy, composable row sources.

A TouchIterator describes a sequence of rows without necessarily storing
them. Every ``*_iter`` method returns a fresh generator, so a source can be
walked any number of times, and the composition operators below never
materialize the rows of the sources they wrap:

- ChainedTouchIterator: one source followed by another
- TransfiguredTouchIterator: every row left-multiplied by a fixed change
- MultiChainTouchIterator: any number of sources one after another

Annotations (rule-offs, calls and method names) are row indices. When sources
are concatenated, the indices of later sources are re-based by the lengths of
the sources before them.

Example:
-------
    >>> lead = Touch.from_str("1234\\n2143\\n2413")
    >>> course = lead.chain(lead.transfigure(lead.leftover_change()))
    >>> course.length()
    4
"""

import itertools
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple

from bellproof.core.change import Change
from bellproof.core.errors import StageMismatchError, TouchFormatError

if TYPE_CHECKING:
    from bellproof.touch.touch import Touch


def fill_from_iterator(bells: Iterator[int], buffer: List[int]) -> bool:
    """
    Fill ``buffer`` with the next ``len(buffer)`` bells from ``bells``.

    Returns:
        True if the whole buffer was filled, False if ``bells`` ran out
    """
    for i in range(len(buffer)):
        bell = next(bells, None)
        if bell is None:
            return False
        buffer[i] = bell
    return True


def _shift_indices(indices: Iterator[int], shift: int) -> Iterator[int]:
    return (i + shift for i in indices)


def _shift_annotations(
    annotations: Iterator[Tuple[int, str]], shift: int
) -> Iterator[Tuple[int, str]]:
    return ((i + shift, value) for i, value in annotations)


class TouchIterator(ABC):
    """
    Abstract row source.

    Subclasses provide the bell stream (rows flattened in order), the
    annotation streams, the stage and the number of rows. Provers only ever
    use this interface, so a materialized Touch and a composed iterator are
    interchangeable.
    """

    @abstractmethod
    def bell_iter(self) -> Iterator[int]:
        """Bells of every row, row after row."""
        pass

    @abstractmethod
    def ruleoff_iter(self) -> Iterator[int]:
        """Row indices after which a rule-off is drawn."""
        pass

    @abstractmethod
    def call_iter(self) -> Iterator[Tuple[int, str]]:
        """``(row_index, call_char)`` annotations."""
        pass

    @abstractmethod
    def method_name_iter(self) -> Iterator[Tuple[int, str]]:
        """``(row_index, method_name)`` annotations."""
        pass

    @abstractmethod
    def leftover_change_iter(self) -> Iterator[int]:
        """Bells of the row that would follow the last row."""
        pass

    @abstractmethod
    def stage(self) -> int:
        pass

    @abstractmethod
    def length(self) -> int:
        """Number of rows."""
        pass

    def leftover_change(self) -> Change:
        return Change(self.leftover_change_iter())

    def row_iter(self, buffer: Optional[List[int]] = None) -> Iterator[List[int]]:
        """
        Yield every row in order, reusing a single buffer.

        The yielded list is overwritten by the next row, so callers that keep
        rows must copy them.

        Args:
            buffer: Optional list of length ``stage`` to fill

        Raises:
            TouchFormatError: If the bell stream is shorter than ``length`` rows
        """
        row = buffer if buffer is not None else [0] * self.stage()
        bells = self.bell_iter()
        for index in range(self.length()):
            if not fill_from_iterator(bells, row):
                raise TouchFormatError(
                    f"Bell stream ended at row {index} of {self.length()}"
                )
            yield row

    def transfigure(self, transposition: Sequence[int]) -> "TransfiguredTouchIterator":
        return TransfiguredTouchIterator(self, transposition)

    def chain(self, other: "TouchIterator") -> "ChainedTouchIterator":
        return ChainedTouchIterator(self, other)

    def collect(self) -> "Touch":
        """Materialize this source into a Touch."""
        from bellproof.touch.touch import Touch

        return Touch.from_iterator(self)


class ChainedTouchIterator(TouchIterator):
    """Rows of ``first`` followed by rows of ``second``."""

    def __init__(self, first: TouchIterator, second: TouchIterator):
        if first.stage() != second.stage():
            raise StageMismatchError(first.stage(), second.stage(), "chain")
        self.first = first
        self.second = second
        self.first_len = first.length()

    def bell_iter(self) -> Iterator[int]:
        return itertools.chain(self.first.bell_iter(), self.second.bell_iter())

    def ruleoff_iter(self) -> Iterator[int]:
        return itertools.chain(
            self.first.ruleoff_iter(),
            _shift_indices(self.second.ruleoff_iter(), self.first_len),
        )

    def call_iter(self) -> Iterator[Tuple[int, str]]:
        return itertools.chain(
            self.first.call_iter(),
            _shift_annotations(self.second.call_iter(), self.first_len),
        )

    def method_name_iter(self) -> Iterator[Tuple[int, str]]:
        return itertools.chain(
            self.first.method_name_iter(),
            _shift_annotations(self.second.method_name_iter(), self.first_len),
        )

    def leftover_change_iter(self) -> Iterator[int]:
        return self.second.leftover_change_iter()

    def stage(self) -> int:
        return self.first.stage()

    def length(self) -> int:
        return self.first_len + self.second.length()


class TransfiguredTouchIterator(TouchIterator):
    """
    Rows of ``iterator`` left-multiplied by ``transposition``.

    Every bell ``b`` of every row (and of the leftover change) is replaced by
    ``transposition[b]``. Annotations pass through unchanged.
    """

    def __init__(self, iterator: TouchIterator, transposition: Sequence[int]):
        if len(transposition) != iterator.stage():
            raise StageMismatchError(
                iterator.stage(), len(transposition), "transfigure"
            )
        self.iterator = iterator
        self.transposition: List[int] = list(transposition)

    def bell_iter(self) -> Iterator[int]:
        lhs = self.transposition
        return (lhs[b] for b in self.iterator.bell_iter())

    def ruleoff_iter(self) -> Iterator[int]:
        return self.iterator.ruleoff_iter()

    def call_iter(self) -> Iterator[Tuple[int, str]]:
        return self.iterator.call_iter()

    def method_name_iter(self) -> Iterator[Tuple[int, str]]:
        return self.iterator.method_name_iter()

    def leftover_change_iter(self) -> Iterator[int]:
        lhs = self.transposition
        return (lhs[b] for b in self.iterator.leftover_change_iter())

    def stage(self) -> int:
        return self.iterator.stage()

    def length(self) -> int:
        return self.iterator.length()


class MultiChainTouchIterator(TouchIterator):
    """
    Rows of every source in ``sources``, one after another.

    Raises:
        TouchFormatError: If ``sources`` is empty
        StageMismatchError: If the sources have different stages
    """

    def __init__(self, sources: Sequence[TouchIterator]):
        if not sources:
            raise TouchFormatError("Can't chain an empty list of row sources")

        stage = sources[0].stage()
        for source in sources[1:]:
            if source.stage() != stage:
                raise StageMismatchError(stage, source.stage(), "multi-chain")

        self.sources: List[TouchIterator] = list(sources)

        # offsets[i] is the number of rows before sources[i]
        self.offsets: List[int] = []
        total = 0
        for source in self.sources:
            self.offsets.append(total)
            total += source.length()
        self._length = total

    def bell_iter(self) -> Iterator[int]:
        return itertools.chain.from_iterable(s.bell_iter() for s in self.sources)

    def ruleoff_iter(self) -> Iterator[int]:
        return itertools.chain.from_iterable(
            _shift_indices(s.ruleoff_iter(), offset)
            for s, offset in zip(self.sources, self.offsets)
        )

    def call_iter(self) -> Iterator[Tuple[int, str]]:
        return itertools.chain.from_iterable(
            _shift_annotations(s.call_iter(), offset)
            for s, offset in zip(self.sources, self.offsets)
        )

    def method_name_iter(self) -> Iterator[Tuple[int, str]]:
        return itertools.chain.from_iterable(
            _shift_annotations(s.method_name_iter(), offset)
            for s, offset in zip(self.sources, self.offsets)
        )

    def leftover_change_iter(self) -> Iterator[int]:
        return self.sources[-1].leftover_change_iter()

    def stage(self) -> int:
        return self.sources[0].stage()

    def length(self) -> int:
        return self._length
