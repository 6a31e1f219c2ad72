"""
Solution decoding from a solver assignment to a painted matrix.

Given:
  - assignment: boolean array indexed by variable identifier (index 0 unused)
  - R, C: grid dimensions

Returns:
  - (R, C) boolean array, True = painted

Cell variables occupy the prefix [1 .. R*C] in row-major order, so decoding
is a slice and a reshape. Auxiliary variables (above R*C) are discarded.
"""

import numpy as np


def assignment_to_grid(assignment: np.ndarray, R: int, C: int) -> np.ndarray:
    """
    Project an assignment onto the cell variables.

    Args:
        assignment: 1D array of length >= R*C + 1; assignment[v] is the
                    truth value of variable v
        R: grid height
        C: grid width

    Returns:
        painted: boolean array of shape (R, C), painted[r, c] = assignment[r*C + c + 1]

    Raises:
        ValueError: if the assignment is not 1D or does not cover every cell

    Example:
        >>> a = np.array([False, True, False, False, True, True])  # v5 is an aux
        >>> assignment_to_grid(a, 2, 2)
        array([[ True, False],
               [False,  True]])
    """
    assignment = np.asarray(assignment)

    if assignment.ndim != 1:
        raise ValueError(f"Assignment must be 1D, got ndim={assignment.ndim}")

    num_cells = R * C
    if assignment.size < num_cells + 1:
        raise ValueError(
            f"Assignment length {assignment.size} does not cover {num_cells} cell variables"
        )

    return assignment[1:num_cells + 1].astype(bool).reshape(R, C)
