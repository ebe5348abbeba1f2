from enum import IntEnum
from typing import List


class CellState(IntEnum):
    EMPTY = 0
    MATERIAL = 1


class OutOfBounds(IndexError):
    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(f"cell ({row}, {col}) outside {height}x{width} canvas")
        self.row = row
        self.col = col


class Canvas:
    """Fixed-size grid of cell states stored row-major in one flat list."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[CellState] = [CellState.EMPTY] * (width * height)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.height, self.width)
        return row * self.width + col

    def get(self, row: int, col: int) -> CellState:
        return self.cells[self.index(row, col)]

    def set(self, row: int, col: int, state: CellState) -> None:
        self.cells[self.index(row, col)] = state

    def row(self, row: int) -> List[CellState]:
        start = self.index(row, 0)
        return self.cells[start:start + self.width]

    def count(self, state: CellState = CellState.MATERIAL) -> int:
        return self.cells.count(state)

    def clear(self) -> None:
        for i in range(len(self.cells)):
            self.cells[i] = CellState.EMPTY
