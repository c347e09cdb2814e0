"""
Row sources.

- touch: the materialized Touch and its text format
- iterators: the TouchIterator interface and lazy composition operators
- generation: plain courses built by transfiguring a lead
"""

from bellproof.touch.iterators import (
    ChainedTouchIterator,
    MultiChainTouchIterator,
    TouchIterator,
    TransfiguredTouchIterator,
    fill_from_iterator,
)
from bellproof.touch.touch import Touch
from bellproof.touch.generation import plain_course

__all__ = [
    "TouchIterator",
    "ChainedTouchIterator",
    "TransfiguredTouchIterator",
    "MultiChainTouchIterator",
    "fill_from_iterator",
    "Touch",
    "plain_course",
]
