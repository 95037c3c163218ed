from typing import List, Callable
from dataclasses import dataclass, field

UpdateFn = Callable[[float], None]


@dataclass
class Scene:
    """Base scene: a list of per-frame updaters plus event/render hooks.

    The engine only talks to this interface, so a board scene, a menu or a
    test double can be swapped in without touching the main loop.
    """

    updaters: List[UpdateFn] = field(default_factory=list)

    def update(self, dt: float):
        for fn in self.updaters:
            fn(dt)

    # Return True when the event was consumed (e.g. Escape closing a text box)
    def handle_event(self, event) -> bool:
        return False

    def resize(self, width: int, height: int) -> None:
        pass

    def render(self):  # pragma: no cover - visual
        pass

    def close(self) -> None:
        pass
