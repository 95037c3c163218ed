"""Text labels for the 2D OpenGL board, rendered with pygame fonts.

Each distinct (text, colour) pair is rasterised once into a texture and kept
in a small cache; dynamic strings such as the depth counter or the entry box
pass a `key` so one texture slot is reused and only re-uploaded on change.
Opacity is applied per draw, so fading labels do not need new textures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Optional

import pygame
from OpenGL.GL import (
    glGenTextures,
    glDeleteTextures,
    glBindTexture,
    glTexImage2D,
    glTexParameteri,
    glBegin,
    glEnd,
    glTexCoord2f,
    glVertex2f,
    glColor4f,
    glEnable,
    glDisable,
    GL_TEXTURE_2D,
    GL_TEXTURE_MIN_FILTER,
    GL_TEXTURE_MAG_FILTER,
    GL_LINEAR,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    GL_QUADS,
)

Color = Tuple[int, int, int]


@dataclass
class _TexSlot:
    id: int
    size: Tuple[int, int]
    last_text: str | None = None


class TextRenderer:
    """Screen-space text for an orthographic (0..w, 0..h, y down) projection.

    The caller owns the projection and blending state; draw_text() only
    toggles GL_TEXTURE_2D around its own quad.
    """

    def __init__(self, font: Optional[pygame.font.Font] = None, size: int = 24, *, bold: bool = False) -> None:
        if font is None:
            font = pygame.font.Font(None, size)
            font.set_bold(bold)
        self.font = font
        self._cache: Dict[Tuple[str, Color], _TexSlot] = {}
        self._slots: Dict[str, _TexSlot] = {}

    # --------------------------- uploads ------------------------------
    def _upload_surface(self, slot: _TexSlot, surf: pygame.Surface) -> None:  # pragma: no cover - visual
        data = pygame.image.tostring(surf, "RGBA", True)
        w, h = surf.get_width(), surf.get_height()
        glBindTexture(GL_TEXTURE_2D, slot.id)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, w, h, 0, GL_RGBA, GL_UNSIGNED_BYTE, data)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        slot.size = (w, h)

    def _slot_for_key(self, key: str, text: str, color: Color) -> _TexSlot:
        slot = self._slots.get(key)
        if slot is None:
            slot = _TexSlot(id=glGenTextures(1), size=(0, 0))
            self._slots[key] = slot
        if slot.last_text != text:
            # Font.render refuses empty strings on some pygame builds
            self._upload_surface(slot, self.font.render(text or " ", True, color))
            slot.last_text = text
        return slot

    def _slot_for_static(self, text: str, color: Color) -> _TexSlot:
        slot = self._cache.get((text, color))
        if slot is None:
            slot = _TexSlot(id=glGenTextures(1), size=(0, 0), last_text=text)
            self._upload_surface(slot, self.font.render(text or " ", True, color))
            self._cache[(text, color)] = slot
        return slot

    def forget(self, keep_texts) -> None:
        """Drop cached static textures whose text is not in `keep_texts`."""
        keep = set(keep_texts)
        stale = [k for k in self._cache if k[0] not in keep]
        for k in stale:
            glDeleteTextures([self._cache.pop(k).id])

    # --------------------------- drawing ------------------------------
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color = (255, 255, 255),
        *,
        alpha: float = 1.0,
        key: Optional[str] = None,
        align: str = "topleft",
    ) -> Tuple[int, int]:  # pragma: no cover - visual
        """Draw one line of text; returns its (w, h) in pixels.

        align: 'topleft' | 'topright' | 'center' | 'midleft'
        """
        slot = self._slot_for_key(key, text, color) if key is not None else self._slot_for_static(text, color)

        w, h = slot.size
        if align == "topright":
            draw_x, draw_y = x - w, y
        elif align == "center":
            draw_x, draw_y = x - w / 2, y - h / 2
        elif align == "midleft":
            draw_x, draw_y = x, y - h / 2
        else:
            draw_x, draw_y = x, y

        glEnable(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, slot.id)
        glColor4f(1.0, 1.0, 1.0, alpha)
        glBegin(GL_QUADS)
        # tostring(..., True) flips rows, so v runs bottom-up
        glTexCoord2f(0.0, 1.0)
        glVertex2f(draw_x, draw_y)
        glTexCoord2f(1.0, 1.0)
        glVertex2f(draw_x + w, draw_y)
        glTexCoord2f(1.0, 0.0)
        glVertex2f(draw_x + w, draw_y + h)
        glTexCoord2f(0.0, 0.0)
        glVertex2f(draw_x, draw_y + h)
        glEnd()
        glDisable(GL_TEXTURE_2D)
        return w, h
