# tests/test_grid.py
from flashgrid.grid import (
    GRID_SIZE, can_place, fits_at, full_cols, full_rows, is_full, is_terminal,
    line_clear_bonus, new_grid, place,
)

DOMINO = ((1, 1),)
SINGLE = ((1,),)
SQUARE = ((1, 1), (1, 1))


def filled_grid(except_cells=()):
    grid = [["green"] * GRID_SIZE for _ in range(GRID_SIZE)]
    for r, c in except_cells:
        grid[r][c] = None
    return grid


def test_new_grid_is_empty():
    grid = new_grid()
    assert len(grid) == 8 and all(len(row) == 8 for row in grid)
    assert all(cell is None for row in grid for cell in row)


def test_place_on_empty_grid():
    grid = new_grid()
    result = place(grid, DOMINO, 0, 0)
    assert result.placed
    assert result.grid[0][0] == "green" and result.grid[0][1] == "green"
    assert result.bonus == 0


def test_place_does_not_mutate_input():
    grid = new_grid()
    place(grid, DOMINO, 0, 0)
    assert grid[0][0] is None


def test_collision_rejected_without_mutation():
    first = place(new_grid(), DOMINO, 0, 0).grid
    snapshot = [list(row) for row in first]
    result = place(first, DOMINO, 0, 0)
    assert not result.placed
    assert result.grid is first
    assert first == snapshot


def test_out_of_bounds_rejected():
    grid = new_grid()
    assert not place(grid, DOMINO, 0, 7).placed
    assert not place(grid, SQUARE, 7, 0).placed
    assert not place(grid, SINGLE, -1, 0).placed


def test_empty_shape_cells_may_overlap_occupied():
    """Only filled cells of a shape need empty grid cells."""
    grid = new_grid()
    grid[0][0] = "green"
    t_shape = ((0, 1, 0), (1, 1, 1))
    assert fits_at(grid, t_shape, 0, 0)


def test_row_clear_awards_twenty():
    grid = new_grid()
    for c in range(7):
        grid[0][c] = "green"
    result = place(grid, SINGLE, 0, 7)
    assert result.placed
    assert result.rows_cleared == 1
    assert result.cols_cleared == 0
    assert all(cell is None for cell in result.grid[0])
    assert result.bonus == 20


def test_column_clear():
    grid = new_grid()
    for r in range(1, 8):
        grid[r][3] = "green"
    result = place(grid, SINGLE, 0, 3)
    assert result.cols_cleared == 1
    assert all(row[3] is None for row in result.grid)


def test_row_and_column_cleared_together():
    """A cell shared by a full row and a full column counts for both."""
    grid = new_grid()
    for c in range(8):
        if c != 4:
            grid[2][c] = "green"
    for r in range(8):
        if r != 2:
            grid[r][4] = "green"
    result = place(grid, SINGLE, 2, 4)
    assert result.rows_cleared == 1
    assert result.cols_cleared == 1
    assert result.bonus == 40
    assert not any(cell for row in result.grid for cell in row)


def test_column_full_only_through_row_cells_still_clears():
    """Columns are judged on the grid before any row is cleared."""
    grid = new_grid()
    # rows 0 and 1 full except column 0; column 0 filled in rows 2-7
    for r in (0, 1):
        for c in range(1, 8):
            grid[r][c] = "green"
    for r in range(2, 8):
        grid[r][0] = "green"
    vertical = ((1,), (1,))
    result = place(grid, vertical, 0, 0)
    assert result.rows_cleared == 2
    assert result.cols_cleared == 1
    assert result.bonus == 60


def test_survivors_outside_cleared_lines_remain():
    grid = new_grid()
    for c in range(7):
        grid[5][c] = "green"
    grid[3][3] = "green"
    result = place(grid, SINGLE, 5, 7)
    assert result.grid[3][3] == "green"


def test_full_rows_and_cols_helpers():
    grid = filled_grid(except_cells=[(0, 0)])
    assert full_rows(grid) == list(range(1, 8))
    assert full_cols(grid) == list(range(1, 8))


def test_can_place_finds_last_gap():
    grid = filled_grid(except_cells=[(7, 7)])
    assert can_place(grid, SINGLE)
    assert not can_place(grid, DOMINO)


def test_can_place_shape_larger_than_gaps():
    grid = filled_grid(except_cells=[(0, 0), (0, 1), (1, 0)])
    assert can_place(grid, DOMINO)
    assert not can_place(grid, SQUARE)


def test_is_full():
    assert is_full(filled_grid())
    assert not is_full(filled_grid(except_cells=[(4, 4)]))


def test_terminal_when_grid_full():
    assert is_terminal(filled_grid(), [])


def test_terminal_when_nothing_fits():
    grid = filled_grid(except_cells=[(3, 3)])
    assert is_terminal(grid, [DOMINO, SQUARE])


def test_not_terminal_when_one_block_fits():
    grid = filled_grid(except_cells=[(3, 3)])
    assert not is_terminal(grid, [DOMINO, SINGLE])


def test_empty_pool_is_not_terminal():
    grid = filled_grid(except_cells=[(3, 3)])
    assert not is_terminal(grid, [])


def test_line_clear_bonus():
    assert line_clear_bonus(0, 0) == 0
    assert line_clear_bonus(2, 1) == 60
