"""Session state shared by the physics, hole and level modules.

Everything mutable about a running game lives in one `Session` object that is
handed to each component explicitly. The level controller is the only code
that replaces `walls`, `holes` or `depth`; physics and the hole engine mutate
the marble and `Hole.growth` in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pygame.math import Vector2

from config import (
    WIDTH,
    HEIGHT,
    MARBLE_RADIUS,
    SPAWN_POINT,
    FADE_MAX,
    HOLE_MAX_GROWTH,
    STARTING_WALLS,
)


class LevelState(Enum):
    ROLLING = "rolling"
    FALLING = "falling"
    TRANSITIONING = "transitioning"


@dataclass
class Marble:
    pos: Vector2 = field(default_factory=lambda: Vector2(SPAWN_POINT))
    vel: Vector2 = field(default_factory=Vector2)
    radius: float = MARBLE_RADIUS
    fade_alpha: float = FADE_MAX

    def reset(self, x: float, y: float) -> None:
        self.pos = Vector2(x, y)
        self.vel = Vector2(0, 0)
        self.fade_alpha = FADE_MAX


@dataclass(frozen=True)
class Wall:
    x: float
    y: float
    w: float
    h: float

    def closest_point(self, p: Vector2) -> Vector2:
        """Point of this rectangle nearest to `p` (p itself when inside)."""
        return Vector2(
            max(self.x, min(p.x, self.x + self.w)),
            max(self.y, min(p.y, self.y + self.h)),
        )

    def inflated_contains(self, x: float, y: float, margin: float) -> bool:
        """True if (x, y) lies strictly inside the rectangle grown by `margin`."""
        return (
            self.x - margin < x < self.x + self.w + margin
            and self.y - margin < y < self.y + self.h + margin
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)


@dataclass
class Hole:
    pos: Vector2
    base_radius: float
    label: str
    color: Tuple[int, int, int] = (255, 255, 255)
    growth: float = 0.0
    max_growth: float = HOLE_MAX_GROWTH

    @property
    def radius(self) -> float:
        """Effective radius: base radius plus current growth."""
        return self.base_radius + self.growth

    @property
    def alpha(self) -> float:
        """Display opacity in [0.3, 1.0]; stronger as the hole grows."""
        max_radius = self.base_radius + self.max_growth
        return 0.3 + (self.radius / max_radius) * 0.7

    def grow(self, amount: float) -> None:
        self.growth = max(0.0, min(self.growth + amount, self.max_growth))


@dataclass(frozen=True)
class BoardSnapshot:
    walls: Tuple[Wall, ...]
    holes: Tuple[Hole, ...]
    depth: int


def starting_walls() -> List[Wall]:
    return [Wall(*rect) for rect in STARTING_WALLS]


@dataclass
class Session:
    width: float = WIDTH
    height: float = HEIGHT
    marble: Marble = field(default_factory=Marble)
    walls: List[Wall] = field(default_factory=starting_walls)
    holes: List[Hole] = field(default_factory=list)
    depth: int = 0
    boards: List[BoardSnapshot] = field(default_factory=list)
    state: LevelState = LevelState.ROLLING
    fade_timer: float = 0.0
    last_fallen_hole: Optional[Hole] = None

    @property
    def is_falling(self) -> bool:
        return self.state is LevelState.FALLING

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(tuple(self.walls), tuple(self.holes), self.depth)
