"""
Falseness grouping.

Provers report falseness as pairwise collisions: an edge ``(i, j)`` means
rows ``i`` and ``j`` have the same canonical row. More than two rows can
coincide, and a prover only sees some of the pairs, so the groups are the
connected components of the collision graph.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple


def group_falseness(edges: Iterable[Tuple[int, int]]) -> List[List[int]]:
    """
    Partition the rows named in ``edges`` into falseness groups.

    Args:
        edges: Pairs of row indices known to be identical

    Returns:
        Maximal groups of mutually identical rows. Each group is sorted
        ascending and the groups are ordered by their first index. Rows that
        appear in no edge are not reported.

    Example:
        >>> group_falseness([(0, 4), (7, 2), (4, 9)])
        [[0, 4, 9], [2, 7]]
    """
    adjacency: Dict[int, List[int]] = defaultdict(list)
    for a, b in edges:
        adjacency[a].append(b)
        adjacency[b].append(a)

    visited: Set[int] = set()
    groups: List[List[int]] = []

    for start in adjacency:
        if start in visited:
            continue

        # Iterative depth-first search
        component = []
        visited.add(start)
        stack = [start]
        while stack:
            vertex = stack.pop()
            component.append(vertex)
            for neighbour in adjacency[vertex]:
                if neighbour not in visited:
                    visited.add(neighbour)
                    stack.append(neighbour)

        component.sort()
        groups.append(component)

    groups.sort(key=lambda group: group[0])
    return groups
