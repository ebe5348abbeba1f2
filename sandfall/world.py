import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .canvas import Canvas, CellState
from .config import Settings
from .line import trace
from .sand import advance, spawn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointerDown:
    x: int
    y: int


@dataclass(frozen=True)
class PointerDrag:
    x: int
    y: int


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Event = Union[PointerDown, PointerDrag, PointerUp, Quit]


class World:
    """Owns the canvas, the random source and the state of one drag gesture."""

    def __init__(
        self,
        width: int,
        height: int,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.canvas = Canvas(width, height)
        self.settings = settings or Settings()
        self.rng = rng or random.Random()
        self.pointer_down = False
        self.pointer: Tuple[int, int] = (0, 0)
        self.previous: Tuple[int, int] = (0, 0)
        self.ticks = 0

    def reset(self) -> None:
        self.canvas.clear()
        self.pointer_down = False
        self.pointer = (0, 0)
        self.previous = (0, 0)

    def deposit(self, x: int, y: int) -> None:
        if self.canvas.in_bounds(y, x):
            self.canvas.set(y, x, CellState.MATERIAL)

    def handle(self, event: Event) -> bool:
        """Apply one input event. Returns False when the loop should stop."""
        if isinstance(event, Quit):
            logger.info("quit requested after %d ticks", self.ticks)
            return False
        if isinstance(event, PointerDown):
            self.pointer_down = True
            self.pointer = (event.x, event.y)
            self.previous = self.pointer
        elif isinstance(event, PointerDrag):
            if not self.pointer_down:
                return True
            px, py = self.previous
            for x, y in trace(px, py, event.x, event.y):
                self.deposit(x, y)
            self.pointer = (event.x, event.y)
            self.previous = self.pointer
        elif isinstance(event, PointerUp):
            self.pointer_down = False
        return True

    def step(self, paused: bool = False) -> None:
        # a held button keeps pouring even when no drag arrived this tick
        if self.pointer_down:
            self.deposit(*self.pointer)
        if paused:
            return
        spawned = spawn(self.canvas, self.settings.spawn_rate, self.rng)
        moved = advance(self.canvas, self.rng)
        self.ticks += 1
        logger.debug("tick %d: spawned=%d moved=%d", self.ticks, spawned, moved)
