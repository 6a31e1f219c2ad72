"""
Clue neighborhood enumeration.

For each clue cell of a ClueGrid this module yields a ClueSite: the clue's
position, its count k, and the ordered cell variables of its 3x3 window.
Unspecified cells produce nothing.

Iteration order is row-major over clue cells, and neighborhoods are
row-major within the window. Both orders are fixed so that clause output
is deterministic.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from fixapix.core.grid_types import ClueGrid


@dataclass(frozen=True)
class ClueSite:
    """
    One clue together with its neighborhood.

    Attributes:
        r: Clue row (0-based)
        c: Clue column (0-based)
        k: Number of painted cells required
        cells: Cell variables of the neighborhood, row-major
    """
    r: int
    c: int
    k: int
    cells: Tuple[int, ...]

    @property
    def n(self) -> int:
        """Neighborhood size."""
        return len(self.cells)

    @property
    def is_trivial(self) -> bool:
        """True when k = 0 or k = n: every cell is forced and no search is needed."""
        return self.k == 0 or self.k == self.n


def iter_clue_sites(grid: ClueGrid) -> Iterator[ClueSite]:
    """
    Yield a ClueSite for every clue in row-major order.

    Example:
        >>> g = ClueGrid.from_rows([[1, -1], [-1, -1]])
        >>> list(iter_clue_sites(g))
        [ClueSite(r=0, c=0, k=1, cells=(1, 2, 3, 4))]
    """
    for r, c in grid.clue_cells():
        yield ClueSite(
            r=r,
            c=c,
            k=grid.clue(r, c),
            cells=tuple(grid.neighborhood(r, c)),
        )


def clue_sites(grid: ClueGrid) -> List[ClueSite]:
    """List form of iter_clue_sites."""
    return list(iter_clue_sites(grid))
