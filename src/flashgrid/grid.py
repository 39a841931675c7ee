"""8x8 block puzzle grid: fit tests, placement, line clearing and game over.

Grids are lists of rows. An empty cell is None; an occupied cell holds the
colour tag of the block that filled it. `place` never mutates its input: it
returns a new grid inside a PlacementResult.
"""
import logging

from flashgrid.models import PlacementResult
from flashgrid.shapes import filled_cells, shape_size

logger = logging.getLogger(__name__)

GRID_SIZE = 8
LINE_CLEAR_BONUS = 20
DEFAULT_COLOR = "green"


def new_grid(size: int = GRID_SIZE) -> list:
    return [[None] * size for _ in range(size)]


def copy_grid(grid: list) -> list:
    return [list(row) for row in grid]


def fits_at(grid: list, shape, row: int, col: int) -> bool:
    """True if the shape lies inside the grid at (row, col) without collisions."""
    height, width = shape_size(shape)
    if row < 0 or col < 0 or row + height > len(grid) or col + width > len(grid[0]):
        return False
    return all(grid[row + r][col + c] is None for r, c in filled_cells(shape))


def can_place(grid: list, shape) -> bool:
    """True if the shape fits somewhere on the grid."""
    height, width = shape_size(shape)
    for row in range(len(grid) - height + 1):
        for col in range(len(grid[0]) - width + 1):
            if fits_at(grid, shape, row, col):
                return True
    return False


def is_full(grid: list) -> bool:
    return all(cell is not None for row in grid for cell in row)


def full_rows(grid: list) -> list[int]:
    return [r for r, row in enumerate(grid) if all(cell is not None for cell in row)]


def full_cols(grid: list) -> list[int]:
    return [
        c for c in range(len(grid[0]))
        if all(row[c] is not None for row in grid)
    ]


def line_clear_bonus(rows_cleared: int, cols_cleared: int) -> int:
    return (rows_cleared + cols_cleared) * LINE_CLEAR_BONUS


def place(grid: list, shape, row: int, col: int, color: str = DEFAULT_COLOR) -> PlacementResult:
    """Place a shape with its top-left corner at (row, col) and clear full lines.

    Rows and columns are both checked against the grid as it stands right
    after placement, then cleared together, so a cell shared by a full row
    and a full column counts toward both.
    """
    if not fits_at(grid, shape, row, col):
        return PlacementResult(placed=False, grid=grid)

    updated = copy_grid(grid)
    for r, c in filled_cells(shape):
        updated[row + r][col + c] = color

    rows = full_rows(updated)
    cols = full_cols(updated)
    for r in rows:
        updated[r] = [None] * len(updated[r])
    for c in cols:
        for grid_row in updated:
            grid_row[c] = None

    if rows or cols:
        logger.debug("Cleared %d rows and %d columns", len(rows), len(cols))
    return PlacementResult(
        placed=True, grid=updated, rows_cleared=len(rows), cols_cleared=len(cols),
    )


def is_terminal(grid: list, remaining_shapes: list) -> bool:
    """Game over when the grid is full, or no remaining shape fits anywhere.

    An empty pool of remaining shapes is not terminal: the next correct
    answer brings a fresh batch.
    """
    if is_full(grid):
        return True
    if remaining_shapes:
        return not any(can_place(grid, shape) for shape in remaining_shapes)
    return False
