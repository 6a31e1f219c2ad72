"""
Fix-a-Pix puzzle IO utilities.

This module loads clue grids from text or JSON files and converts them
into our ClueGrid representation.

Text format (one row per line, blank lines ignored):

    . . 3 . 1
    2 . . . .
    -1 4 . . 0

  - "." or "-1" marks an unspecified cell
  - a single digit 0-9 is a clue
  - cells are separated by whitespace; rows written without separators
    ("..3.1") are read one character per cell

JSON format:

    [[-1, -1, 3, -1, 1], [2, -1, -1, -1, -1], ...]
"""

from pathlib import Path
from typing import List
import json

from fixapix.core.grid_types import ClueGrid, UNSPECIFIED


class PuzzleFormatError(ValueError):
    """Raised when a puzzle file cannot be parsed."""

    def __init__(self, message: str, line_no: int | None = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


def _parse_token(token: str, line_no: int) -> int:
    if token in (".", str(UNSPECIFIED)):
        return UNSPECIFIED
    if len(token) == 1 and token.isdigit():
        return int(token)
    raise PuzzleFormatError(
        f"unexpected cell {token!r}; use '.' or '-1' for empty cells and 0-9 for clues",
        line_no,
    )


def parse_puzzle_rows(text: str) -> List[List[int]]:
    """
    Parse puzzle text into rows of ints (UNSPECIFIED for empty cells).

    Raises:
        PuzzleFormatError: on unknown tokens, ragged rows, or empty input

    Example:
        >>> parse_puzzle_rows(". 1\\n-1 0\\n")
        [[-1, 1], [-1, 0]]
        >>> parse_puzzle_rows("..3\\n1..")
        [[-1, -1, 3], [1, -1, -1]]
    """
    rows: List[List[int]] = []
    width = None

    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue

        tokens = line.split() if any(ch.isspace() for ch in line) else list(line)
        row = [_parse_token(tok, line_no) for tok in tokens]

        if width is None:
            width = len(row)
        elif len(row) != width:
            raise PuzzleFormatError(
                f"row has {len(row)} cells, expected {width}", line_no
            )
        rows.append(row)

    if not rows:
        raise PuzzleFormatError("puzzle has no rows")

    return rows


def parse_puzzle(text: str) -> ClueGrid:
    """Parse puzzle text into a ClueGrid."""
    return ClueGrid.from_rows(parse_puzzle_rows(text))


def load_puzzle_json(path: Path) -> ClueGrid:
    """
    Load a puzzle stored as a JSON list of lists of ints.

    Raises:
        PuzzleFormatError: if the JSON is not a non-empty rectangular list of int rows
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw_data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PuzzleFormatError(f"{path}: {e}") from e

    if not isinstance(raw_data, list) or not raw_data:
        raise PuzzleFormatError(f"{path}: expected a non-empty list of rows")

    for i, row in enumerate(raw_data):
        if not isinstance(row, list) or not all(
            isinstance(v, int) and not isinstance(v, bool) for v in row
        ):
            raise PuzzleFormatError(f"{path}: row {i} is not a list of integers")

    widths = {len(row) for row in raw_data}
    if len(widths) != 1:
        raise PuzzleFormatError(f"{path}: rows have different lengths {sorted(widths)}")

    return ClueGrid.from_rows(raw_data)


def load_puzzle(path: Path) -> ClueGrid:
    """
    Load a puzzle from a text or JSON file (chosen by the .json suffix).

    Args:
        path: Path to the puzzle file

    Returns:
        ClueGrid (clues are range-checked, not yet validated against neighborhoods)
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_puzzle_json(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise PuzzleFormatError(f"{path}: {e}") from e

    return parse_puzzle(text)


if __name__ == "__main__":
    # Self-test: parse a small puzzle from text
    from fixapix.core.grid_types import print_grid

    grid = parse_puzzle("1 . .\n. . .\n. . 4\n")
    print(f"Loaded {grid!r}")
    print_grid(grid)
