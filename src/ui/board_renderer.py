"""OpenGL drawing of the board: walls, holes, marble and HUD.

Uses the fixed-function pipeline with an orthographic projection in window
pixels (origin top-left, y down) so board coordinates map 1:1 to the screen.

- Walls are packed into one numpy vertex array and uploaded to a VBO only
  when the wall list object changes (i.e. on level transitions).
- Circles are triangle fans built from a precomputed numpy unit circle.
- Labels go through `TextRenderer`.

Nothing here mutates the session.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
from OpenGL.GL import (
    glGenBuffers,
    glDeleteBuffers,
    glBindBuffer,
    glBufferData,
    glEnableClientState,
    glDisableClientState,
    glVertexPointer,
    glColorPointer,
    glDrawArrays,
    glColor4f,
    glLineWidth,
    glClear,
    glClearColor,
    glViewport,
    glMatrixMode,
    glLoadIdentity,
    glOrtho,
    glTranslatef,
    glPushMatrix,
    glPopMatrix,
    glEnable,
    glDisable,
    glBlendFunc,
    GL_ARRAY_BUFFER,
    GL_STATIC_DRAW,
    GL_FLOAT,
    GL_TRIANGLES,
    GL_TRIANGLE_FAN,
    GL_LINE_LOOP,
    GL_VERTEX_ARRAY,
    GL_COLOR_ARRAY,
    GL_COLOR_BUFFER_BIT,
    GL_PROJECTION,
    GL_MODELVIEW,
    GL_BLEND,
    GL_DEPTH_TEST,
    GL_SRC_ALPHA,
    GL_ONE_MINUS_SRC_ALPHA,
)

from board.state import Hole, Session, Wall
from ui.input import ThoughtInput
from ui.text_renderer import TextRenderer
from config import BACKGROUND, HUD_FONT_SIZE, HOLE_LABEL_SIZE, INPUT_FONT_SIZE, FADE_MAX

CIRCLE_SEGMENTS = 48
_ANGLES = np.linspace(0.0, 2.0 * np.pi, CIRCLE_SEGMENTS + 1, dtype=np.float32)
_UNIT_CIRCLE = np.column_stack((np.cos(_ANGLES), np.sin(_ANGLES))).astype(np.float32)

MARBLE_INNER = (255 / 255.0, 107 / 255.0, 157 / 255.0)
MARBLE_OUTER = (139 / 255.0, 45 / 255.0, 95 / 255.0)


def wall_vertices(walls: Sequence[Wall]) -> np.ndarray:
    """Two triangles per wall, as an (n*6, 2) float32 array."""
    if not walls:
        return np.zeros((0, 2), dtype=np.float32)
    rects = np.array([w.as_tuple() for w in walls], dtype=np.float32)
    x0, y0 = rects[:, 0], rects[:, 1]
    x1, y1 = x0 + rects[:, 2], y0 + rects[:, 3]
    corners = np.stack(
        [
            np.column_stack((x0, y0)),
            np.column_stack((x1, y0)),
            np.column_stack((x1, y1)),
            np.column_stack((x0, y0)),
            np.column_stack((x1, y1)),
            np.column_stack((x0, y1)),
        ],
        axis=1,
    )
    return corners.reshape(-1, 2)


def circle_fan(cx: float, cy: float, radius: float, sx: float = 1.0, sy: float = 1.0) -> np.ndarray:
    """Triangle-fan vertices (centre first) for a circle or axis-aligned ellipse."""
    ring = _UNIT_CIRCLE * np.array([radius * sx, radius * sy], dtype=np.float32)
    ring += np.array([cx, cy], dtype=np.float32)
    return np.vstack((np.array([[cx, cy]], dtype=np.float32), ring))


class BoardRenderer:
    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.hud_text = TextRenderer(size=HUD_FONT_SIZE, bold=True)
        self.label_text = TextRenderer(size=HOLE_LABEL_SIZE, bold=True)
        self.input_text = TextRenderer(size=INPUT_FONT_SIZE)

        self._wall_vbo: Optional[int] = None
        self._wall_count = 0
        self._walls_source: Optional[list] = None
        self.resize(width, height)

    # ------------------------------------------------------------------
    def resize(self, width: int, height: int) -> None:  # pragma: no cover - visual
        self.width = width
        self.height = height
        glViewport(0, 0, width, height)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, width, height, 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

    def _sync_walls(self, walls: list) -> None:  # pragma: no cover - visual
        if walls is self._walls_source:
            return
        verts = wall_vertices(walls)
        if self._wall_vbo is None:
            self._wall_vbo = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self._wall_vbo)
        glBufferData(GL_ARRAY_BUFFER, verts.nbytes, verts, GL_STATIC_DRAW)
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        self._wall_count = len(verts)
        self._walls_source = walls

    # ------------------------------------------------------------------
    def _fill(self, verts: np.ndarray, mode=GL_TRIANGLE_FAN) -> None:  # pragma: no cover - visual
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(2, GL_FLOAT, 0, verts)
        glDrawArrays(mode, 0, len(verts))
        glDisableClientState(GL_VERTEX_ARRAY)

    def _draw_walls(self) -> None:  # pragma: no cover - visual
        if not self._wall_count:
            return
        glBindBuffer(GL_ARRAY_BUFFER, self._wall_vbo)
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(2, GL_FLOAT, 0, None)

        glPushMatrix()
        glTranslatef(3.0, 3.0, 0.0)
        glColor4f(0.0, 0.0, 0.0, 0.3)
        glDrawArrays(GL_TRIANGLES, 0, self._wall_count)
        glPopMatrix()

        glColor4f(1.0, 1.0, 1.0, 0.2)
        glDrawArrays(GL_TRIANGLES, 0, self._wall_count)

        glDisableClientState(GL_VERTEX_ARRAY)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

    def _draw_hole(self, hole: Hole) -> None:  # pragma: no cover - visual
        x, y = hole.pos.x, hole.pos.y
        radius = hole.radius
        alpha = hole.alpha
        fan = circle_fan(x, y, radius)

        glColor4f(0.0, 0.0, 0.0, 0.5 * alpha)
        self._fill(fan)

        r, g, b = hole.color
        glColor4f(r / 255.0, g / 255.0, b / 255.0, 1.0)
        glLineWidth(4.0)
        self._fill(fan[1:], GL_LINE_LOOP)

        self.label_text.draw_text(hole.label, x, y, alpha=alpha, align="center")

    def _draw_marble(self, session: Session) -> None:  # pragma: no cover - visual
        m = session.marble
        x, y, r = m.pos.x, m.pos.y, m.radius
        fade = m.fade_alpha / FADE_MAX

        glColor4f(0.0, 0.0, 0.0, 0.3)
        self._fill(circle_fan(x, y + r + 10, r, 1.2, 0.3))

        # Radial gradient: bright centre offset toward the light, dark rim
        fan = circle_fan(x, y, r)
        fan[0] = (x - r * 0.3, y - r * 0.3)
        colors = np.empty((len(fan), 4), dtype=np.float32)
        colors[0] = (*MARBLE_INNER, fade)
        colors[1:] = (*MARBLE_OUTER, fade)
        glEnableClientState(GL_COLOR_ARRAY)
        glColorPointer(4, GL_FLOAT, 0, colors)
        self._fill(fan)
        glDisableClientState(GL_COLOR_ARRAY)

        glColor4f(1.0, 1.0, 1.0, 0.4 * fade)
        self._fill(circle_fan(x - r * 0.35, y - r * 0.35, r * 0.35))

    def _draw_hud(self, session: Session, entry: ThoughtInput) -> None:  # pragma: no cover - visual
        self.hud_text.draw_text(f"Depth: {session.depth}", 20, 20, key="depth")

        box_y = self.height - 36
        if entry.active:
            glColor4f(1.0, 1.0, 1.0, 0.12)
            self._fill(
                np.array(
                    [[16, box_y - 18], [436, box_y - 18], [436, box_y + 18], [16, box_y + 18]],
                    dtype=np.float32,
                )
            )
            self.input_text.draw_text(f"{entry.text}_", 26, box_y, key="entry", align="midleft")
        else:
            self.input_text.draw_text(
                "Enter: add a thought   WASD/arrows: tilt   click: grow",
                20,
                box_y,
                alpha=0.5,
                align="midleft",
            )

    # ------------------------------------------------------------------
    def draw(self, session: Session, entry: ThoughtInput) -> None:  # pragma: no cover - visual
        glClearColor(*BACKGROUND)
        glClear(GL_COLOR_BUFFER_BIT)

        if session.walls is not self._walls_source:
            self.label_text.forget(h.label for h in session.holes)
        self._sync_walls(session.walls)
        self._draw_walls()
        for hole in session.holes:
            self._draw_hole(hole)
        self._draw_marble(session)
        self._draw_hud(session, entry)

    def release(self) -> None:  # pragma: no cover - visual
        if self._wall_vbo is not None:
            glDeleteBuffers(1, [self._wall_vbo])
            self._wall_vbo = None
