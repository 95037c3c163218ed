"""Core engine loop & orchestration.

Separates concerns:
- Engine: sets up the window and GL context, pumps events, runs the loop.
- Scene: owns game state, per-frame updates and drawing.

One loop iteration is one game tick: events, then scene.update(), then
scene.render() and a buffer flip. Physics is tuned per tick, so the frame
cap doubles as the simulation rate.
"""

from __future__ import annotations

import pygame
from OpenGL.GL import glClearColor

from config import WIDTH, HEIGHT, FULLSCREEN, RESIZABLE, FPS, VSYNC, CAPTION, BACKGROUND
from core.scene import Scene


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class Engine:
    def __init__(self, scene_factory=None):
        pygame.init()
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLEBUFFERS, 1)
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLESAMPLES, 4)
        pygame.display.set_caption(CAPTION)
        self._flags = pygame.DOUBLEBUF | pygame.OPENGL
        if FULLSCREEN:
            self._flags |= pygame.FULLSCREEN
        elif RESIZABLE:
            self._flags |= pygame.RESIZABLE
        self._set_mode(WIDTH, HEIGHT)
        self.width, self.height = pygame.display.get_surface().get_size()
        self.clock = pygame.time.Clock()

        glClearColor(*BACKGROUND)
        pygame.key.set_repeat()
        pygame.key.start_text_input()

        if scene_factory is None:
            from ui.board_scene import BoardScene

            scene_factory = BoardScene
        self.scene: Scene = scene_factory(self.width, self.height)

    def _set_mode(self, width: int, height: int) -> None:
        try:
            # vsync: 1 to enable, 0 to disable
            pygame.display.set_mode((width, height), self._flags, vsync=(1 if VSYNC else 0))
        except (TypeError, pygame.error):
            # Older pygame builds reject the vsync kwarg, or the driver
            # can't provide vsync; fall back to the plain call.
            pygame.display.set_mode((width, height), self._flags)

    # ------------------------------------------------------------------
    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.VIDEORESIZE:
                self.width, self.height = event.w, event.h
                self.scene.resize(event.w, event.h)
                continue
            consumed = self.scene.handle_event(event)
            if not consumed and event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    # ------------------------------------------------------------------
    def update(self, dt: float):
        self.scene.update(dt)

    # ------------------------------------------------------------------
    def render(self):  # pragma: no cover - visual
        self.scene.render()
        pygame.display.flip()

    # ------------------------------------------------------------------
    def run(self):  # pragma: no cover - visual
        running = True
        try:
            while running:
                dt = self.clock.tick(FPS) / 1000.0
                running = self.handle_events()
                if not running:
                    break
                self.update(dt)
                self.render()
        finally:
            self.scene.close()
            pygame.quit()
