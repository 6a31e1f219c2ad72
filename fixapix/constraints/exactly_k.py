"""
Exactly-k cardinality encoding.

Given cell variables N = <v_1, ..., v_n> and a count k, emit clauses that
hold iff exactly k of the v_i are true.

Trivial counts need no search:
  - k = 0: unit clauses (-v_i) for every v_i
  - k = n: unit clauses (v_i) for every v_i

Otherwise each k-subset S of N (a "selector") gets one witness a_S:

    a_S -> l          for every literal l of S         (binary clauses)
    a_S1 or a_S2 or ... over all C(n, k) selectors      (one clause)

where the literals of S are v for v in S and -v for v in N \\ S. At least
one witness must be true, and a true witness pins the whole neighborhood
to its selector. A painted set of size k matches exactly one selector, so
the converse implications are not needed.

Clause count for a non-trivial clue is C(n, k) * n + 1, with C(n, k)
auxiliaries. The largest case, n = 9 and k = 4 or 5, gives 126 witnesses
and 1135 clauses.
"""

from itertools import combinations
from math import comb
from typing import Iterator, List, Sequence, Tuple

from fixapix.constraints.builder import CNFBuilder


def iter_selectors(cells: Sequence[int], k: int) -> Iterator[Tuple[int, ...]]:
    """
    Yield the k-subsets of cells in lexicographic order.

    cells must be in ascending order (neighborhoods are row-major, so they are).
    """
    return combinations(cells, k)


def selector_literals(cells: Sequence[int], members: Sequence[int]) -> List[int]:
    """
    Literals that hold exactly when `members` are the painted cells.

    Members come first in neighborhood order, then the negated non-members
    in neighborhood order.

    Example:
        >>> selector_literals([1, 2, 3, 4], (2, 4))
        [2, 4, -1, -3]
    """
    chosen = set(members)
    return [v for v in cells if v in chosen] + [-v for v in cells if v not in chosen]


def count_selectors(n: int, k: int) -> int:
    """Number of selectors for a non-trivial clue, C(n, k)."""
    return comb(n, k)


def expected_clause_count(n: int, k: int) -> int:
    """Clauses emitted by encode_exactly_k for a neighborhood of size n."""
    if k == 0 or k == n:
        return n
    return count_selectors(n, k) * n + 1


def encode_exactly_k(builder: CNFBuilder, cells: Sequence[int], k: int) -> List[int]:
    """
    Push clauses asserting that exactly k of `cells` are true.

    Args:
        builder: CNFBuilder receiving the clauses; its allocator supplies
                 the witness variables
        cells: Cell variables, ascending, no duplicates
        k: Required number of true cells, 0 <= k <= len(cells)

    Returns:
        The auxiliary variables allocated, in selector order (empty for the
        trivial cases k = 0 and k = n)

    Raises:
        ValueError: if k is outside 0..len(cells) or cells is empty

    Example:
        >>> from fixapix.constraints.indexing import VariableAllocator
        >>> b = CNFBuilder(VariableAllocator(1, 2))
        >>> encode_exactly_k(b, [1, 2], 1)
        [3, 4]
        >>> b.clauses
        [(-3, 1), (-3, -2), (-4, 2), (-4, -1), (3, 4)]
    """
    n = len(cells)
    if n == 0:
        raise ValueError("Cannot encode a cardinality constraint over no variables")
    if not 0 <= k <= n:
        raise ValueError(f"Count k={k} outside 0..{n}")

    # Trivial short-circuits: only unit clauses, no auxiliaries
    if k == 0:
        for v in cells:
            builder.push_unit(-v)
        return []
    if k == n:
        for v in cells:
            builder.push_unit(v)
        return []

    allocator = builder.allocator
    witnesses: List[int] = []

    for members in iter_selectors(cells, k):
        a = allocator.fresh()
        witnesses.append(a)
        for lit in selector_literals(cells, members):
            builder.push((-a, lit))

    builder.push(witnesses)
    return witnesses
