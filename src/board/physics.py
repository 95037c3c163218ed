"""Marble physics: tilt integration, circle-vs-rectangle walls, bounds.

Steps are per frame rather than per second; the game runs at a fixed target
FPS and the feel is tuned for that.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from pygame.math import Vector2

from board.state import Marble, Wall
from config import ACCELERATION, FRICTION, MAX_VELOCITY, RESTITUTION

Tilt = Tuple[int, int]


def integrate(marble: Marble, tilt: Tilt) -> None:
    """Accelerate from tilt, clamp speed, apply friction, then move."""
    marble.vel.x += tilt[0] * ACCELERATION
    marble.vel.y += tilt[1] * ACCELERATION

    if marble.vel.length() > MAX_VELOCITY:
        marble.vel.scale_to_length(MAX_VELOCITY)

    marble.vel *= FRICTION
    marble.pos += marble.vel


def wall_contact_normal(marble: Marble, wall: Wall) -> Optional[Tuple[Vector2, float]]:
    """Return (normal, overlap) if the marble overlaps `wall`, else None.

    The normal points from the closest point on the wall to the marble
    centre. A centre exactly on/inside the wall yields a zero normal.
    """
    closest = wall.closest_point(marble.pos)
    offset = marble.pos - closest
    distance = offset.length()
    if distance >= marble.radius:
        return None
    normal = offset / distance if distance > 0 else Vector2(0, 0)
    return normal, marble.radius - distance


def collide_with_wall(marble: Marble, wall: Wall) -> bool:
    contact = wall_contact_normal(marble, wall)
    if contact is None:
        return False
    n, overlap = contact
    marble.pos += n * overlap
    # v' = v - 2(v.n)n, damped
    dot = marble.vel.dot(n)
    marble.vel = (marble.vel - n * (2 * dot)) * RESTITUTION
    return True


def collide_with_walls(marble: Marble, walls: Iterable[Wall]) -> int:
    """Resolve each wall in order, independently. Returns the contact count."""
    hits = 0
    for wall in walls:
        if collide_with_wall(marble, wall):
            hits += 1
    return hits


def clamp_to_bounds(marble: Marble, width: float, height: float) -> None:
    """Keep the marble inside the play area; zero velocity on the clamped axis."""
    r = marble.radius
    if marble.pos.x - r < 0:
        marble.pos.x = r
        marble.vel.x = 0
    if marble.pos.x + r > width:
        marble.pos.x = width - r
        marble.vel.x = 0
    if marble.pos.y - r < 0:
        marble.pos.y = r
        marble.vel.y = 0
    if marble.pos.y + r > height:
        marble.pos.y = height - r
        marble.vel.y = 0
