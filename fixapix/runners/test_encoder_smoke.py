"""
Smoke tests for the CNF encoding pipeline.

This test verifies the encoder components bottom-up:
  - VariableAllocator: cell prefix and fresh auxiliaries
  - CNFBuilder: literal range checks and freeze
  - encode_exactly_k: trivial short-circuits, selector order, clause shape
  - encode_puzzle: clue validation before allocation, row-major concatenation

No solver involved; only the emitted clauses are inspected.
"""

from math import comb

from fixapix.constraints.builder import CNFBuilder
from fixapix.constraints.encoder import encode_puzzle
from fixapix.constraints.exactly_k import (
    count_selectors,
    encode_exactly_k,
    expected_clause_count,
    selector_literals,
)
from fixapix.constraints.indexing import VariableAllocator, cell_var, var_to_cell
from fixapix.constraints.neighborhoods import clue_sites
from fixapix.core.grid_types import ClueGrid, InvalidClueError


def test_cell_var_roundtrip():
    """cell_var / var_to_cell are inverse and 1-based row-major."""
    W = 4
    assert cell_var(0, 0, W) == 1
    assert cell_var(1, 2, W) == 7
    for v in range(1, 13):
        r, c = var_to_cell(v, W)
        assert cell_var(r, c, W) == v, f"Roundtrip failed at v={v}"


def test_allocator_prefix():
    """Auxiliaries start right after R*C and never repeat."""
    alloc = VariableAllocator(2, 3)

    assert alloc.cell_var(1, 2) == 6
    assert alloc.num_aux == 0

    fresh = [alloc.fresh() for _ in range(5)]
    assert fresh == [7, 8, 9, 10, 11], f"Unexpected aux ids {fresh}"
    assert alloc.top == 11
    assert alloc.num_aux == 5
    assert alloc.is_cell_var(6) and not alloc.is_cell_var(7)

    # cell_var is pure
    alloc.cell_var(0, 0)
    assert alloc.top == 11


def test_builder_rejects_bad_literals():
    """Empty clauses, zero literals and unallocated variables are rejected."""
    b = CNFBuilder(VariableAllocator(1, 2))

    for bad in ([], [0], [3], [1, -3]):
        try:
            b.push(bad)
            raise AssertionError(f"Clause {bad} should have been rejected")
        except ValueError:
            pass

    b.push([1, -2])
    cnf = b.freeze()
    assert cnf.clauses == ((1, -2),)

    try:
        b.push([1])
        raise AssertionError("push after freeze should fail")
    except RuntimeError:
        pass


def test_trivial_clues_emit_units_only():
    """k = 0 and k = n emit n unit clauses and allocate nothing."""
    print("\n" + "=" * 70)
    print("TEST: Trivial clue short-circuits")
    print("=" * 70)

    cells = [1, 2, 3, 4]

    b0 = CNFBuilder(VariableAllocator(2, 2))
    aux0 = encode_exactly_k(b0, cells, 0)
    assert aux0 == []
    assert b0.clauses == [(-1,), (-2,), (-3,), (-4,)], f"Got {b0.clauses}"
    assert b0.allocator.num_aux == 0

    bn = CNFBuilder(VariableAllocator(2, 2))
    auxn = encode_exactly_k(bn, cells, 4)
    assert auxn == []
    assert bn.clauses == [(1,), (2,), (3,), (4,)], f"Got {bn.clauses}"
    assert bn.allocator.num_aux == 0

    print("  ✓ test_trivial_clues_emit_units_only: PASSED")


def test_exactly_k_clause_shape():
    """
    Non-trivial clue over 4 cells with k = 2:
      - C(4,2) = 6 witnesses, allocated 5..10
      - each witness a gets 4 binary clauses (-a, lit)
      - one final clause listing all witnesses
    """
    print("\n" + "=" * 70)
    print("TEST: Exactly-2-of-4 clause shape")
    print("=" * 70)

    b = CNFBuilder(VariableAllocator(2, 2))
    witnesses = encode_exactly_k(b, [1, 2, 3, 4], 2)

    print(f"  Witnesses: {witnesses}")
    print(f"  Clauses: {len(b.clauses)}")

    assert witnesses == [5, 6, 7, 8, 9, 10]
    assert len(witnesses) == count_selectors(4, 2) == 6
    assert b.size() == expected_clause_count(4, 2) == 6 * 4 + 1

    # First selector is (1, 2): members then negated non-members
    assert b.clauses[0:4] == [(-5, 1), (-5, 2), (-5, -3), (-5, -4)], f"Got {b.clauses[0:4]}"
    # Last selector is (3, 4)
    assert b.clauses[20:24] == [(-10, 3), (-10, 4), (-10, -1), (-10, -2)], f"Got {b.clauses[20:24]}"
    assert b.clauses[-1] == (5, 6, 7, 8, 9, 10)

    for clause in b.clauses[:-1]:
        assert len(clause) == 2 and clause[0] < 0, f"Bad implication clause {clause}"

    print("  ✓ test_exactly_k_clause_shape: PASSED")


def test_selector_literals_order():
    """Members first in neighborhood order, then negated non-members."""
    assert selector_literals([1, 2, 3, 4], (2, 4)) == [2, 4, -1, -3]
    assert selector_literals([3, 7, 9], (9,)) == [9, -3, -7]


def test_exactly_k_rejects_out_of_range():
    """k outside 0..n is a programming error."""
    b = CNFBuilder(VariableAllocator(1, 2))
    for k in (-1, 3):
        try:
            encode_exactly_k(b, [1, 2], k)
            raise AssertionError(f"k={k} should be rejected")
        except ValueError:
            pass
    assert b.size() == 0


def test_clue_sites_row_major():
    """Clue sites come out row-major with row-major neighborhoods."""
    grid = ClueGrid.from_rows([
        [-1, 2, -1],
        [-1, -1, -1],
        [0, -1, 5],
    ])

    sites = clue_sites(grid)

    assert [(s.r, s.c, s.k) for s in sites] == [(0, 1, 2), (2, 0, 0), (2, 2, 5)]
    assert sites[0].cells == (1, 2, 3, 4, 5, 6)
    assert sites[1].cells == (4, 5, 7, 8)
    assert sites[2].cells == (5, 6, 8, 9)
    assert [s.is_trivial for s in sites] == [False, True, False]


def test_encode_puzzle_center_one():
    """
    3x3 grid with a single central clue 1:
      9 selectors, 9 auxiliaries, 81 binary clauses, one 9-literal clause.
    """
    print("\n" + "=" * 70)
    print("TEST: encode_puzzle on 3x3 center exactly-one")
    print("=" * 70)

    grid = ClueGrid.from_rows([[-1, -1, -1], [-1, 1, -1], [-1, -1, -1]])
    enc = encode_puzzle(grid)

    print(f"  Clauses: {enc.num_clauses}, variables: {enc.num_variables}, "
          f"aux: {enc.num_aux_variables}")

    assert enc.num_aux_variables == 9
    assert enc.num_variables == 18
    assert enc.num_clauses == 82
    binary = [cl for cl in enc.cnf.clauses if len(cl) == 2]
    assert len(binary) == 81
    assert enc.cnf.clauses[-1] == tuple(range(10, 19))
    assert enc.clue_encodings[0].aux_vars == list(range(10, 19))
    assert enc.clue_encodings[0].num_clauses == 82

    print("  ✓ test_encode_puzzle_center_one: PASSED")


def test_encode_puzzle_invalid_clue_before_encoding():
    """
    An oversize clue anywhere in the grid is reported with its position and
    neighborhood size, even when earlier clues are fine.
    """
    grid = ClueGrid.from_rows([[1, -1], [-1, 5]])

    try:
        encode_puzzle(grid)
        raise AssertionError("Expected InvalidClueError")
    except InvalidClueError as e:
        assert (e.r, e.c, e.k, e.n) == (1, 1, 5, 4), f"Got {(e.r, e.c, e.k, e.n)}"
        print(f"  ✓ Caught expected error: {e}")


def test_encode_puzzle_is_deterministic():
    """Encoding the same grid twice gives identical clause sequences."""
    rows = [
        [2, -1, 3, -1],
        [-1, 4, -1, -1],
        [1, -1, -1, 2],
    ]

    first = encode_puzzle(ClueGrid.from_rows(rows))
    second = encode_puzzle(ClueGrid.from_rows(rows))

    assert first.cnf.clauses == second.cnf.clauses
    assert first.num_variables == second.num_variables


def test_encode_puzzle_concatenates_in_row_major_order():
    """Per-clue clause counts add up and follow clue order."""
    grid = ClueGrid.from_rows([[0, -1, 2], [-1, -1, -1]])
    enc = encode_puzzle(grid)

    counts = [e.num_clauses for e in enc.clue_encodings]
    assert counts == [4, comb(4, 2) * 4 + 1], f"Got {counts}"
    assert sum(counts) == enc.num_clauses
    assert enc.cnf.clauses[:4] == ((-1,), (-2,), (-4,), (-5,))
    assert enc.num_trivial_clues == 1


if __name__ == "__main__":
    test_cell_var_roundtrip()
    test_allocator_prefix()
    test_builder_rejects_bad_literals()
    test_trivial_clues_emit_units_only()
    test_exactly_k_clause_shape()
    test_selector_literals_order()
    test_exactly_k_rejects_out_of_range()
    test_clue_sites_row_major()
    test_encode_puzzle_center_one()
    test_encode_puzzle_invalid_clue_before_encoding()
    test_encode_puzzle_is_deterministic()
    test_encode_puzzle_concatenates_in_row_major_order()
    print("\n✓ All encoder smoke tests passed")
