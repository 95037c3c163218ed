"""Perfect-maze generation and conversion to wall rectangles.

A maze is carved with a randomized depth-first walk (recursive backtracker
with an explicit stack), giving a spanning tree over the grid: exactly one
path between any two cells. The grid is then mapped onto a screen rectangle
and every remaining wall flag becomes a thin `Wall`.

Boards are seeded from the depth number, so regenerating depth N always
produces the same wall list for the same window size.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Tuple

from board.state import Hole, Wall
from core.rng import Mulberry32
from config import (
    MAZE_MARGIN,
    MAZE_CELL_SIZE,
    MAZE_MIN_COLS,
    MAZE_MIN_ROWS,
    MAZE_WALL_THICKNESS,
)

TOP, RIGHT, BOTTOM, LEFT = range(4)
# (dx, dy) per direction, in neighbour scan order
_STEPS = ((0, -1), (1, 0), (0, 1), (-1, 0))

RandomFn = Callable[[], float]


@dataclass
class MazeCell:
    visited: bool = False
    walls: List[bool] = field(default_factory=lambda: [True, True, True, True])


@dataclass
class GeneratedBoard:
    walls: List[Wall]
    holes: List[Hole]
    maze_rect: Wall


def opposite(direction: int) -> int:
    return (direction + 2) % 4


def generate_maze_grid(cols: int, rows: int, rand: RandomFn) -> List[List[MazeCell]]:
    """Carve a perfect maze; returns cells indexed as cells[row][col]."""
    cells = [[MazeCell() for _ in range(cols)] for _ in range(rows)]

    def unvisited_neighbors(x: int, y: int) -> List[Tuple[int, int, int]]:
        out = []
        for direction, (dx, dy) in enumerate(_STEPS):
            nx, ny = x + dx, y + dy
            if 0 <= nx < cols and 0 <= ny < rows and not cells[ny][nx].visited:
                out.append((nx, ny, direction))
        return out

    cx, cy = 0, 0
    cells[cy][cx].visited = True
    stack: List[Tuple[int, int]] = []

    while True:
        neighbors = unvisited_neighbors(cx, cy)
        if neighbors:
            nx, ny, direction = neighbors[int(math.floor(rand() * len(neighbors)))]
            stack.append((cx, cy))
            cells[cy][cx].walls[direction] = False
            cells[ny][nx].walls[opposite(direction)] = False
            cx, cy = nx, ny
            cells[cy][cx].visited = True
        elif stack:
            cx, cy = stack.pop()
        else:
            break

    return cells


def open_passages(cells: List[List[MazeCell]]) -> Iterator[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Yield each carved passage once as ((col, row), (col, row)).

    Only right and bottom flags are inspected so shared walls are not counted
    twice.
    """
    rows = len(cells)
    cols = len(cells[0]) if rows else 0
    for r in range(rows):
        for c in range(cols):
            if c + 1 < cols and not cells[r][c].walls[RIGHT]:
                yield (c, r), (c + 1, r)
            if r + 1 < rows and not cells[r][c].walls[BOTTOM]:
                yield (c, r), (c, r + 1)


def maze_walls_to_rects(cells: List[List[MazeCell]], rect: Wall, thickness: float) -> List[Wall]:
    rows = len(cells)
    cols = len(cells[0])
    cell_w = rect.w / cols
    cell_h = rect.h / rows
    t = thickness

    # Outer boundary: top, bottom, left, right
    out = [
        Wall(rect.x, rect.y, rect.w, t),
        Wall(rect.x, rect.y + rect.h - t, rect.w, t),
        Wall(rect.x, rect.y, t, rect.h),
        Wall(rect.x + rect.w - t, rect.y, t, rect.h),
    ]

    for r in range(rows):
        for c in range(cols):
            flags = cells[r][c].walls
            x0 = rect.x + c * cell_w
            y0 = rect.y + r * cell_h
            if flags[TOP]:
                out.append(Wall(x0, y0, cell_w, t))
            if flags[RIGHT]:
                out.append(Wall(x0 + cell_w - t, y0, t, cell_h))
            if flags[BOTTOM]:
                out.append(Wall(x0, y0 + cell_h - t, cell_w, t))
            if flags[LEFT]:
                out.append(Wall(x0, y0, t, cell_h))
    return out


def grid_size(rect: Wall, cell_size: float = MAZE_CELL_SIZE) -> Tuple[int, int]:
    """Columns and rows for `rect`, never below the configured minimums."""
    cols = max(MAZE_MIN_COLS, int(rect.w // cell_size))
    rows = max(MAZE_MIN_ROWS, int(rect.h // cell_size))
    return cols, rows


def maze_rect_for(width: float, height: float, margin: float = MAZE_MARGIN) -> Wall:
    return Wall(margin, margin, width - margin * 2, height - margin * 2)


def generate_board(depth: int, width: float, height: float) -> GeneratedBoard:
    """Build the wall layout for `depth`. The hole list always starts empty."""
    maze_rect = maze_rect_for(width, height)
    rand = Mulberry32.from_key(f"depth:{depth}")
    cols, rows = grid_size(maze_rect)
    cells = generate_maze_grid(cols, rows, rand)
    walls = maze_walls_to_rects(cells, maze_rect, MAZE_WALL_THICKNESS)
    return GeneratedBoard(walls=walls, holes=[], maze_rect=maze_rect)
