"""Board package: session state, maze generation, physics, holes, levels.

Public types can be imported from `board` directly, e.g.:

    from board import Session, LevelController, generate_board

Nothing here touches OpenGL, so the whole package is usable headless.
"""

from .state import Session, Marble, Wall, Hole, BoardSnapshot, LevelState
from .maze import MazeCell, GeneratedBoard, generate_maze_grid, maze_walls_to_rects, generate_board
from .physics import integrate, collide_with_walls, clamp_to_bounds
from .holes import update_growth, click, find_fall, find_valid_hole_position, spawn_hole
from .level import LevelController

__all__ = [
    "Session",
    "Marble",
    "Wall",
    "Hole",
    "BoardSnapshot",
    "LevelState",
    "MazeCell",
    "GeneratedBoard",
    "generate_maze_grid",
    "maze_walls_to_rects",
    "generate_board",
    "integrate",
    "collide_with_walls",
    "clamp_to_bounds",
    "update_growth",
    "click",
    "find_fall",
    "find_valid_hole_position",
    "spawn_hole",
    "LevelController",
]
