"""
CNF clause builder for the constraint system.

This module defines the data structures that collect clauses over the
propositional variables handed out by VariableAllocator.

A clause is a tuple of signed nonzero integers interpreted as their
disjunction; the formula is the conjunction of all clauses:

    (l_1 or l_2 or ...) and (l_k or ...) and ...

Positive literal v means "variable v is true", -v means "v is false".
For cell variables, true means painted.

This is the generic clause plumbing used by the encoder. No solver logic
or puzzle-specific code here.
"""

from dataclasses import dataclass, field
from typing import IO, Iterable, Iterator, List, Optional, Sequence, Tuple

from pysat.formula import CNF

from fixapix.constraints.indexing import VariableAllocator


Clause = Tuple[int, ...]


@dataclass(frozen=True)
class FrozenCNF:
    """
    Read-only CNF formula, ready to be handed to a solver.

    Attributes:
        clauses: Clauses in emission order
        num_vars: Largest variable identifier allocated (cells + auxiliaries)
        num_cells: Size of the cell-variable prefix [1 .. num_cells]
    """
    clauses: Tuple[Clause, ...]
    num_vars: int
    num_cells: int

    def size(self) -> int:
        """Clause count."""
        return len(self.clauses)

    @property
    def num_aux(self) -> int:
        return self.num_vars - self.num_cells

    def __len__(self) -> int:
        return len(self.clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def to_pysat(self) -> CNF:
        """Convert to a pysat CNF object with nv pinned to num_vars."""
        cnf = CNF(from_clauses=[list(cl) for cl in self.clauses])
        cnf.nv = self.num_vars
        return cnf

    def to_dimacs(self, fp: IO[str], comments: Optional[Sequence[str]] = None) -> None:
        """
        Write the formula in DIMACS CNF text form.

        Args:
            fp: Text stream to write to
            comments: Optional comment lines, each starting with "c "
        """
        self.to_pysat().to_fp(fp, comments=list(comments) if comments else None)


@dataclass
class CNFBuilder:
    """
    Collects clauses for one encoding run.

    The builder checks every literal against the allocator so that no clause
    can reference a variable that was never handed out.

    Attributes:
        allocator: VariableAllocator owning the variable counter
        clauses: Clauses pushed so far, in order
    """
    allocator: VariableAllocator
    clauses: List[Clause] = field(default_factory=list)
    _frozen: bool = field(default=False, repr=False)

    def push(self, clause: Iterable[int]) -> None:
        """
        Append a clause.

        Raises:
            ValueError: if the clause is empty, contains 0, or references a
                        variable above the allocator's current top
            RuntimeError: if the builder was already frozen
        """
        if self._frozen:
            raise RuntimeError("Cannot push clauses after freeze()")

        cl = tuple(int(lit) for lit in clause)
        if not cl:
            raise ValueError("Empty clause")

        top = self.allocator.top
        for lit in cl:
            if lit == 0 or abs(lit) > top:
                raise ValueError(f"Literal {lit} out of range 1..{top} in clause {cl}")

        self.clauses.append(cl)

    def push_unit(self, lit: int) -> None:
        """Append the unit clause (lit)."""
        self.push((lit,))

    def size(self) -> int:
        """Clause count."""
        return len(self.clauses)

    def freeze(self) -> FrozenCNF:
        """Stop accepting clauses and return a read-only view."""
        self._frozen = True
        return FrozenCNF(
            clauses=tuple(self.clauses),
            num_vars=self.allocator.top,
            num_cells=self.allocator.num_cells,
        )


if __name__ == "__main__":
    # Simple sanity checks on a 1x2 grid
    print("Testing CNFBuilder...")
    b = CNFBuilder(VariableAllocator(1, 2))
    b.push([1, -2])
    b.push_unit(2)
    assert b.size() == 2, f"Expected 2 clauses, got {b.size()}"

    try:
        b.push([3])
        raise AssertionError("Literal 3 should be rejected before allocation")
    except ValueError:
        pass
    print("  ✓ Unallocated literal rejected")

    cnf = b.freeze()
    assert cnf.clauses == ((1, -2), (2,))
    assert cnf.num_vars == 2
    print("  ✓ Freeze returns the clauses in order")

    print("\n✓ builder.py sanity checks passed.")
