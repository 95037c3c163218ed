"""Keyboard tilt and the thought entry box.

`KeyboardTilt` tracks held keys and turns WASD / arrow keys into a tilt
vector in {-1, 0, 1}^2. `ThoughtInput` is a one-line text field fed by
pygame TEXTINPUT/KEYDOWN events; it returns the submitted text from
`handle_event()` when the player presses Enter.
"""

from __future__ import annotations

from typing import Optional, Set, Tuple

import pygame

from config import INPUT_MAX_LENGTH

UP_KEYS = (pygame.K_w, pygame.K_UP)
DOWN_KEYS = (pygame.K_s, pygame.K_DOWN)
LEFT_KEYS = (pygame.K_a, pygame.K_LEFT)
RIGHT_KEYS = (pygame.K_d, pygame.K_RIGHT)


class KeyboardTilt:
    def __init__(self) -> None:
        self.held: Set[int] = set()

    def handle_event(self, event) -> None:
        if event.type == pygame.KEYDOWN:
            self.held.add(event.key)
        elif event.type == pygame.KEYUP:
            self.held.discard(event.key)

    def release_all(self) -> None:
        self.held.clear()

    def _any(self, keys) -> bool:
        return any(k in self.held for k in keys)

    def tilt(self) -> Tuple[int, int]:
        # Down wins over up and right over left when both are held
        tilt_x = tilt_y = 0
        if self._any(UP_KEYS):
            tilt_y = -1
        if self._any(DOWN_KEYS):
            tilt_y = 1
        if self._any(LEFT_KEYS):
            tilt_x = -1
        if self._any(RIGHT_KEYS):
            tilt_x = 1
        return tilt_x, tilt_y


class ThoughtInput:
    """Single-line text entry. Inactive until focused with Enter or Tab."""

    def __init__(self, max_length: int = INPUT_MAX_LENGTH) -> None:
        self.max_length = max_length
        self.text = ""
        self.active = False

    def focus(self) -> None:
        self.active = True

    def blur(self) -> None:
        self.active = False
        self.text = ""

    def handle_event(self, event) -> Tuple[bool, Optional[str]]:
        """Returns (consumed, submitted_text)."""
        if not self.active:
            if event.type == pygame.KEYDOWN and event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_TAB):
                self.focus()
                return True, None
            return False, None

        if event.type == pygame.TEXTINPUT:
            room = self.max_length - len(self.text)
            if room > 0:
                self.text += event.text[:room]
            return True, None

        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                submitted = self.text
                self.blur()
                return True, submitted
            if event.key == pygame.K_ESCAPE:
                self.blur()
            elif event.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
            return True, None

        if event.type == pygame.KEYUP:
            return True, None
        return False, None
