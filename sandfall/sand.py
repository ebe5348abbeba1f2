import random

from .canvas import Canvas, CellState

EMPTY = CellState.EMPTY
MATERIAL = CellState.MATERIAL


def spawn(canvas: Canvas, rate: int, rng: random.Random) -> int:
    """Drop up to ``rate`` grains into random top-row columns.

    A trial that lands on an occupied cell is skipped, not retried. Returns
    how many cells were actually filled.
    """
    cells = canvas.cells
    filled = 0
    for _ in range(rate):
        x = rng.randrange(canvas.width)
        if cells[x] == EMPTY:
            cells[x] = MATERIAL
            filled += 1
    return filled


def advance(canvas: Canvas, rng: random.Random) -> int:
    """Move every grain one step under gravity, in place.

    Rows are written from the bottom up while reading the row above, so a
    grain moved into row ``y`` is not picked up again in the same step.
    Blocked grains slide to a free lower diagonal, choosing at random when
    both are free. Returns the number of grains that moved.
    """
    cells = canvas.cells
    width = canvas.width
    moved = 0
    for y in range(canvas.height - 1, 0, -1):
        below = y * width
        above = below - width
        for x in range(width):
            src = above + x
            if cells[src] != MATERIAL:
                continue
            dst = below + x
            if cells[dst] != EMPTY:
                left_free = x > 0 and cells[dst - 1] == EMPTY
                right_free = x < width - 1 and cells[dst + 1] == EMPTY
                if left_free and right_free:
                    dst = dst - 1 if rng.random() < 0.5 else dst + 1
                elif left_free:
                    dst -= 1
                elif right_free:
                    dst += 1
                else:
                    continue
            cells[dst] = MATERIAL
            cells[src] = EMPTY
            moved += 1
    return moved
