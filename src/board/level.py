"""Level controller: the per-tick pipeline and depth progression.

State machine (see `LevelState`)::

    ROLLING --fall detected--> FALLING --fade done--> TRANSITIONING --board ready--> ROLLING

Anything else is rejected. TRANSITIONING doubles as the reentrancy guard: a
second advance request while a board is being built is ignored.

When the fallen-into label is not in the local word table, the remote lookup
runs on a single worker thread. The controller keeps the returned future and
polls it once per tick; the new holes are placed and the marble reset on the
main thread when it completes, so session state only ever has one writer.
"""

from __future__ import annotations

import random
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from board import holes as hole_engine
from board import physics
from board.maze import generate_board, maze_rect_for
from board.state import Hole, LevelState, Session, Wall
from board.physics import Tilt
from words.resolver import WordAssociationResolver
from config import FADE_SPEED, FADE_MAX, SPAWN_OFFSET

_TRANSITIONS = {
    LevelState.ROLLING: {LevelState.FALLING},
    LevelState.FALLING: {LevelState.TRANSITIONING},
    LevelState.TRANSITIONING: {LevelState.ROLLING},
}


@dataclass
class _PendingWords:
    future: Future
    existing_labels: List[str]


class LevelController:
    def __init__(
        self,
        session: Session,
        resolver: Optional[WordAssociationResolver] = None,
        *,
        executor: Optional[ThreadPoolExecutor] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.session = session
        self.resolver = resolver or WordAssociationResolver()
        self.rng = rng
        self._executor = executor
        self._owns_executor = executor is None
        self._pending: Optional[_PendingWords] = None
        self._maze_rect: Wall = maze_rect_for(session.width, session.height)

    @property
    def state(self) -> LevelState:
        return self.session.state

    @property
    def executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="word-lookup")
        return self._executor

    def _set_state(self, new_state: LevelState) -> bool:
        if new_state not in _TRANSITIONS[self.session.state]:
            return False
        self.session.state = new_state
        return True

    # ------------------------------------------------------------------
    # Per-tick pipeline
    # ------------------------------------------------------------------
    def tick(self, tilt: Tilt = (0, 0)) -> None:
        state = self.session.state
        if state is LevelState.ROLLING:
            self._roll(tilt)
        elif state is LevelState.FALLING:
            self._fade()
        else:
            self.poll()

    def _roll(self, tilt: Tilt) -> None:
        s = self.session
        marble = s.marble
        physics.integrate(marble, tilt)
        physics.collide_with_walls(marble, s.walls)

        hole = hole_engine.find_fall(s.holes, marble)
        if hole is not None:
            self.begin_fall(hole)

        hole_engine.update_growth(s.holes, marble, falling=s.is_falling)
        physics.clamp_to_bounds(marble, s.width, s.height)

    def begin_fall(self, hole: Hole) -> bool:
        if not self._set_state(LevelState.FALLING):
            return False
        self.session.fade_timer = 0.0
        self.session.last_fallen_hole = hole
        return True

    def _fade(self) -> None:
        s = self.session
        s.fade_timer += FADE_SPEED
        s.marble.fade_alpha = max(0.0, FADE_MAX - s.fade_timer)
        if s.fade_timer >= FADE_MAX:
            self.advance()

    # ------------------------------------------------------------------
    # Level advance
    # ------------------------------------------------------------------
    def advance(self) -> Optional[Future]:
        """Move to the next depth.

        Returns the pending word lookup future when the remote service is
        involved, otherwise None (the new level is already live). A call
        outside the FALLING state does nothing.
        """
        if not self._set_state(LevelState.TRANSITIONING):
            return None
        s = self.session

        previous_labels = [h.label for h in s.holes]
        s.boards.append(s.snapshot())
        s.depth += 1

        board = generate_board(s.depth, s.width, s.height)
        s.walls = board.walls
        s.holes = board.holes
        self._maze_rect = board.maze_rect

        fallen = s.last_fallen_hole
        s.last_fallen_hole = None
        if fallen is None:
            self._finish_advance([])
            return None

        words = self.resolver.lookup_local(fallen.label)
        if words is not None:
            self._finish_advance(self.resolver.finalize(words, previous_labels))
            return None

        future = self.executor.submit(self.resolver.lookup_remote_or_fallback, fallen.label)
        self._pending = _PendingWords(future, previous_labels)
        return future

    def poll(self) -> bool:
        """Finish a pending advance if its word lookup is done."""
        pending = self._pending
        if pending is None or not pending.future.done():
            return False
        self._pending = None
        try:
            words = pending.future.result()
        except Exception as e:
            print(f"[Level] Related word lookup crashed: {e}")
            words = []
        self._finish_advance(self.resolver.finalize(words, pending.existing_labels))
        return True

    @property
    def transition_pending(self) -> bool:
        return self._pending is not None

    def _finish_advance(self, words: Sequence[str]) -> None:
        s = self.session
        for word in words:
            hole_engine.spawn_hole(word, s.holes, s.walls, s.width, s.height, rng=self.rng)

        s.marble.reset(self._maze_rect.x + SPAWN_OFFSET, self._maze_rect.y + SPAWN_OFFSET)
        s.fade_timer = 0.0
        self._set_state(LevelState.ROLLING)
        print(f"[Level] Depth {s.depth}: {len(s.walls)} walls, holes {[h.label for h in s.holes]}")

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def submit_label(self, text: str) -> Optional[Hole]:
        s = self.session
        return hole_engine.spawn_hole(text, s.holes, s.walls, s.width, s.height, rng=self.rng)

    def click(self, x: float, y: float) -> Optional[Hole]:
        return hole_engine.click(self.session.holes, x, y)

    def shutdown(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
        self._executor = None
