"""Board scene: wires input, the level controller and the renderer together.

Per frame the engine calls handle_event() for each pygame event, then
update() once (one physics tick), then render(). The scene itself holds no
game rules; those live in the `board` package.
"""

from __future__ import annotations

from typing import Optional

import pygame

from board import LevelController, Session
from core.scene import Scene
from ui.board_renderer import BoardRenderer
from ui.input import KeyboardTilt, ThoughtInput
from words.resolver import WordAssociationResolver


class BoardScene(Scene):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        resolver: Optional[WordAssociationResolver] = None,
    ) -> None:
        super().__init__()
        self.session = Session(width=width, height=height)
        self.controller = LevelController(self.session, resolver)
        self.tilt = KeyboardTilt()
        self.entry = ThoughtInput()
        self.renderer = BoardRenderer(width, height)
        self.updaters.append(self._tick)
        print(f"[Engine] Board scene ready ({width}x{height})")

    def _tick(self, dt: float) -> None:
        tilt = (0, 0) if self.entry.active else self.tilt.tilt()
        self.controller.tick(tilt)

    def handle_event(self, event) -> bool:
        was_active = self.entry.active
        consumed, submitted = self.entry.handle_event(event)
        if consumed:
            if not was_active and self.entry.active:
                # Keys held when the box opened would never see their KEYUP
                self.tilt.release_all()
            if submitted is not None:
                self.controller.submit_label(submitted)
            return True

        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            self.tilt.handle_event(event)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.controller.click(*event.pos)
        return False

    def resize(self, width: int, height: int) -> None:
        self.session.resize(width, height)
        self.renderer.resize(width, height)

    def render(self) -> None:  # pragma: no cover - visual
        self.renderer.draw(self.session, self.entry)

    def close(self) -> None:
        self.controller.shutdown()
        self.renderer.release()
