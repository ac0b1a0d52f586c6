# sliding.py
# Sliding-block puzzle on a rectangular grid. 0 marks the empty cell.

from state_search.models import Move, PuzzleSpecification

Grid = tuple[tuple[int, ...], ...]

# (row offset of the tile relative to the blank, column offset, direction the tile slides)
_NEIGHBOURS = (
    (1, 0, "up"),
    (-1, 0, "down"),
    (0, 1, "left"),
    (0, -1, "right"),
)

DEFAULT_START: Grid = (
    (0, 1, 3),
    (4, 2, 5),
    (7, 8, 6),
)


def solved_grid(rows: int, cols: int) -> Grid:
    cells = list(range(1, rows * cols)) + [0]
    return tuple(tuple(cells[r * cols:(r + 1) * cols]) for r in range(rows))


def _blank(grid: Grid) -> tuple[int, int]:
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell == 0:
                return r, c
    raise ValueError("Grid has no empty cell.")


def successors_of(grid: Grid) -> list[Move]:
    br, bc = _blank(grid)
    moves = []
    for dr, dc, direction in _NEIGHBOURS:
        tr, tc = br + dr, bc + dc
        if not (0 <= tr < len(grid) and 0 <= tc < len(grid[0])):
            continue
        tile = grid[tr][tc]
        cells = [list(row) for row in grid]
        cells[br][bc], cells[tr][tc] = tile, 0
        moves.append(Move(f"Slide the {tile} tile {direction}.", tuple(tuple(row) for row in cells)))
    return moves


def build(start: Grid = DEFAULT_START) -> PuzzleSpecification:
    if not start or not start[0]:
        raise ValueError("Grid must have at least one row and one column.")
    rows, cols = len(start), len(start[0])
    if any(len(row) != cols for row in start):
        raise ValueError("Grid rows must all have the same length.")
    if sorted(cell for row in start for cell in row) != list(range(rows * cols)):
        raise ValueError(f"Grid must hold each of 0..{rows * cols - 1} exactly once.")
    goal = solved_grid(rows, cols)
    return PuzzleSpecification(
        name=f"sliding blocks ({rows}x{cols})",
        initial_state=start,
        initial_description="The tiles are scrambled: " + " / ".join(" ".join(map(str, row)) for row in start),
        successors_of=successors_of,
        is_goal=lambda grid: grid == goal,
        goal_description="The tiles are in order.",
    )
