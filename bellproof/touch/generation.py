"""
Course generation by transfiguration.

A plain course is one lead repeated under each power of its lead head. The
course is described as a chain of transfigured views of the same lead, so no
lead other than the original is ever stored.
"""

from bellproof.touch.iterators import MultiChainTouchIterator, TouchIterator
from bellproof.utils import closure


def plain_course(lead: TouchIterator) -> MultiChainTouchIterator:
    """
    The course generated by repeating ``lead`` until it comes round.

    ``lead`` must start from rounds; its leftover change is its lead head.
    A lead whose lead head is rounds is its own course.
    """
    lead_heads = closure(lead.leftover_change())
    return MultiChainTouchIterator([lead.transfigure(head) for head in lead_heads])
