"""
Puzzle-to-CNF encoder.

This module wires the clue grid, the variable allocator, the neighborhood
enumerator and the exactly-k encoder into one pass:

  1. Validate every clue (k <= |N|) before any auxiliary is allocated
  2. Walk clues in row-major order
  3. Encode each clue's exactly-k constraint into a shared CNFBuilder
  4. Freeze the formula

The result is a deterministic function of the grid: encoding the same grid
twice yields identical clause sequences and identical auxiliary numbering.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from fixapix.constraints.builder import CNFBuilder, FrozenCNF
from fixapix.constraints.exactly_k import encode_exactly_k
from fixapix.constraints.indexing import VariableAllocator
from fixapix.constraints.neighborhoods import ClueSite, iter_clue_sites
from fixapix.core.grid_types import ClueGrid


logger = logging.getLogger(__name__)


@dataclass
class ClueEncoding:
    """
    Per-clue encoding record.

    Attributes:
        site: The clue and its neighborhood
        num_clauses: Clauses contributed by this clue
        aux_vars: Witness variables allocated for this clue (empty if trivial)
    """
    site: ClueSite
    num_clauses: int
    aux_vars: List[int] = field(default_factory=list)

    @property
    def num_aux(self) -> int:
        return len(self.aux_vars)


@dataclass
class EncodedPuzzle:
    """
    Output of encode_puzzle.

    Attributes:
        grid: The source clue grid
        cnf: Frozen formula over cell and auxiliary variables
        clue_encodings: One record per clue, row-major
    """
    grid: ClueGrid
    cnf: FrozenCNF
    clue_encodings: List[ClueEncoding]

    @property
    def num_clauses(self) -> int:
        return self.cnf.size()

    @property
    def num_variables(self) -> int:
        return self.cnf.num_vars

    @property
    def num_aux_variables(self) -> int:
        return self.cnf.num_aux

    @property
    def num_clues(self) -> int:
        return len(self.clue_encodings)

    @property
    def num_trivial_clues(self) -> int:
        return sum(1 for enc in self.clue_encodings if enc.site.is_trivial)


def encode_puzzle(grid: ClueGrid) -> EncodedPuzzle:
    """
    Encode every clue of `grid` into a single CNF formula.

    Cell (r, c) maps to variable r * C + c + 1; auxiliaries start at R*C + 1.

    Args:
        grid: Clue grid to encode

    Returns:
        EncodedPuzzle with the frozen CNF and per-clue statistics

    Raises:
        InvalidClueError: if some clue asks for more cells than its
                          neighborhood has (raised before encoding starts)

    Example:
        >>> enc = encode_puzzle(ClueGrid.from_rows([[0]]))
        >>> enc.cnf.clauses
        ((-1,),)
    """
    grid.validate()

    R, C = grid.dims()
    allocator = VariableAllocator(R, C)
    builder = CNFBuilder(allocator)
    clue_encodings: List[ClueEncoding] = []

    for site in iter_clue_sites(grid):
        before = builder.size()
        aux_vars = encode_exactly_k(builder, site.cells, site.k)
        clue_encodings.append(ClueEncoding(
            site=site,
            num_clauses=builder.size() - before,
            aux_vars=aux_vars,
        ))

    cnf = builder.freeze()

    logger.debug(
        "Encoded %dx%d grid: %d clues, %d clauses, %d variables (%d auxiliary)",
        R, C, len(clue_encodings), cnf.size(), cnf.num_vars, cnf.num_aux,
    )

    return EncodedPuzzle(grid=grid, cnf=cnf, clue_encodings=clue_encodings)
