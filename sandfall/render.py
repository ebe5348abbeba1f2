from typing import List

from .canvas import Canvas, CellState


def frame_lines(canvas: Canvas, sand_char: str = "▪", empty_char: str = " ") -> List[str]:
    """One string per canvas row, ready to paint."""
    glyphs = {CellState.EMPTY: empty_char, CellState.MATERIAL: sand_char}
    width = canvas.width
    return [
        "".join(glyphs[cell] for cell in canvas.cells[row * width:(row + 1) * width])
        for row in range(canvas.height)
    ]
