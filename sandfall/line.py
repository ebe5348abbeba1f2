from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Line:
    """Integer Bresenham path from ``(x0, y0)`` to ``(x1, y1)``.

    Iterating yields every point including both endpoints. Diagonal steps are
    allowed, so consecutive points differ by at most one on each axis. The
    object can be iterated any number of times.
    """

    x0: int
    y0: int
    x1: int
    y1: int

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        dx = abs(self.x1 - self.x0)
        dy = abs(self.y1 - self.y0)
        sx = 1 if self.x0 < self.x1 else -1
        sy = 1 if self.y0 < self.y1 else -1
        err = dx // 2 if dx > dy else -(dy // 2)
        x, y = self.x0, self.y0
        while True:
            yield x, y
            if x == self.x1 and y == self.y1:
                return
            e2 = err
            if e2 > -dx:
                err -= dy
                x += sx
            if e2 < dy:
                err += dx
                y += sy


def trace(x0: int, y0: int, x1: int, y1: int) -> Line:
    return Line(x0, y0, x1, y1)
