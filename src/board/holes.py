"""Thought holes: growth/decay, click growth, fall detection and placement.

Holes grow while the marble is within `HOLE_PROXIMITY_RANGE` and decay
otherwise; a click gives a stronger bump. Growth always stays within
[0, max_growth].

Placement is best effort: a bounded number of random candidates is checked
against existing holes (using their *current* grown radius), wall rectangles
and the safe screen margins. When every candidate fails, the last one is used
anyway rather than refusing to spawn.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import pygame
from pygame.math import Vector2

from board.state import Hole, Marble, Wall
from config import (
    FALL_K,
    HOLE_GROWTH_RATE,
    HOLE_DECAY_RATE,
    HOLE_STRONG_GROWTH_RATE,
    HOLE_PROXIMITY_RANGE,
    HOLE_MIN_RADIUS,
    HOLE_RADIUS_JITTER,
    HOLE_SPACING,
    HOLE_PLACEMENT_ATTEMPTS,
    HOLE_MARGIN_SIDE,
    HOLE_MARGIN_TOP,
    HOLE_MARGIN_BOTTOM,
)


@dataclass
class Placement:
    x: float
    y: float
    base_radius: float
    valid: bool = True


# ---------------------------------------------------------------------------
# Growth
# ---------------------------------------------------------------------------
def update_growth(holes: Iterable[Hole], marble: Marble, *, falling: bool = False) -> None:
    for hole in holes:
        distance = marble.pos.distance_to(hole.pos)
        if distance < HOLE_PROXIMITY_RANGE and not falling:
            hole.grow(HOLE_GROWTH_RATE)
        else:
            hole.grow(-HOLE_DECAY_RATE)


def click(holes: Iterable[Hole], x: float, y: float) -> Optional[Hole]:
    """Strong-grow the first hole whose current circle contains (x, y)."""
    point = Vector2(x, y)
    for hole in holes:
        if point.distance_to(hole.pos) < hole.radius:
            hole.grow(HOLE_STRONG_GROWTH_RATE)
            return hole
    return None


# ---------------------------------------------------------------------------
# Falling
# ---------------------------------------------------------------------------
def fall_threshold(hole: Hole, marble: Marble) -> float:
    """Centre distance below which the marble drops into `hole`."""
    return hole.radius - marble.radius * FALL_K


def find_fall(holes: Iterable[Hole], marble: Marble) -> Optional[Hole]:
    for hole in holes:
        if marble.pos.distance_to(hole.pos) < fall_threshold(hole, marble):
            return hole
    return None


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------
def is_valid_hole_position(
    x: float,
    y: float,
    radius: float,
    holes: Sequence[Hole],
    walls: Sequence[Wall],
    width: float,
    height: float,
) -> bool:
    point = Vector2(x, y)
    for hole in holes:
        if point.distance_to(hole.pos) < radius + hole.radius + HOLE_SPACING:
            return False

    for wall in walls:
        if wall.inflated_contains(x, y, radius):
            return False

    if (
        x - radius < HOLE_MARGIN_SIDE
        or x + radius > width - HOLE_MARGIN_SIDE
        or y - radius < HOLE_MARGIN_TOP
        or y + radius > height - HOLE_MARGIN_BOTTOM
    ):
        return False
    return True


def find_valid_hole_position(
    holes: Sequence[Hole],
    walls: Sequence[Wall],
    width: float,
    height: float,
    *,
    max_attempts: int = HOLE_PLACEMENT_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> Placement:
    rng = rng or random
    base_radius = HOLE_MIN_RADIUS + rng.random() * HOLE_RADIUS_JITTER
    x = y = 0.0
    for _ in range(max(1, max_attempts)):
        x = 50 + rng.random() * (width - 100)
        y = 120 + rng.random() * (height - 150)
        if is_valid_hole_position(x, y, base_radius, holes, walls, width, height):
            return Placement(x, y, base_radius)
    # Every attempt failed: keep the last candidate
    return Placement(x, y, base_radius, valid=False)


def random_hole_color(rng: Optional[random.Random] = None) -> Tuple[int, int, int]:
    """A vivid colour: any hue, saturation 70-100%, lightness 50-70%."""
    rng = rng or random
    color = pygame.Color(0, 0, 0)
    color.hsla = (
        rng.random() * 360,
        70 + rng.random() * 30,
        50 + rng.random() * 20,
        100,
    )
    return (color.r, color.g, color.b)


def spawn_hole(
    label: str,
    holes: List[Hole],
    walls: Sequence[Wall],
    width: float,
    height: float,
    *,
    rng: Optional[random.Random] = None,
) -> Optional[Hole]:
    """Append a new hole labelled `label`; blank labels are ignored."""
    label = label.strip()
    if not label:
        return None
    placement = find_valid_hole_position(holes, walls, width, height, rng=rng)
    hole = Hole(
        pos=Vector2(placement.x, placement.y),
        base_radius=placement.base_radius,
        label=label,
        color=random_hole_color(rng),
    )
    holes.append(hole)
    return hole
