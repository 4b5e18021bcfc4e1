from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from .pieces import Piece


EMPTY = 0


@dataclass(frozen=True)
class ClearResult:
    field: "Field"
    lines_cleared: int


class Field:
    """Immutable 2D play field.

    Uses 0 for empty cells and the tetromino value (1..7) for locked cells.
    Row 0 is the top. Every transform returns a new Field and the backing
    array is never written after construction.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: np.ndarray) -> None:
        arr = np.array(cells, dtype=np.int8)
        if arr.ndim != 2:
            raise ValueError(f"field must be 2-dimensional, got shape {arr.shape}")
        arr.flags.writeable = False
        self._cells = arr

    @classmethod
    def empty(cls, width: int, height: int) -> "Field":
        return cls(np.zeros((int(height), int(width)), dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Optional[int]]]) -> "Field":
        """Build a field from nested rows; None is treated as empty."""
        return cls(np.array([[EMPTY if v is None else int(v) for v in row] for row in rows], dtype=np.int8))

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_empty_at(self, x: int, y: int) -> bool:
        return self._cells[y, x] == EMPTY

    def stamp(self, piece: Piece) -> "Field":
        """Write every occupied cell of `piece` tagged with its kind.

        Cells falling outside the field are dropped.
        """
        grid = self._cells.copy()
        value = int(piece.kind)
        for x, y in piece.cells():
            if self.is_inside(x, y):
                grid[y, x] = value
        return Field(grid)

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self._cells != EMPTY, axis=1))[0]]

    def clear_full_rows(self) -> ClearResult:
        full_rows = self.full_rows()
        if not full_rows:
            return ClearResult(self, 0)
        num = len(full_rows)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self._cells, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        return ClearResult(Field(np.vstack((new_rows, kept))), num)

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self._cells != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def column_heights(self) -> List[int]:
        heights: List[int] = []
        for x in range(self.width):
            filled = np.flatnonzero(self._cells[:, x])
            heights.append(self.height - int(filled[0]) if filled.size else 0)
        return heights

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self._cells[:, x]
            seen_block = False
            for cell in column:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def bumpiness(self) -> int:
        heights = self.column_heights()
        return sum(abs(a - b) for a, b in zip(heights, heights[1:]))

    def to_rows(self) -> List[List[int]]:
        return self._cells.tolist()

    def clone_state(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self._cells.shape, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Field(width={self.width}, height={self.height}, filled={int(np.count_nonzero(self._cells))})"


def collides(piece: Piece, field: Field, dx: int = 0, dy: int = 0) -> bool:
    """True if `piece` shifted by (dx, dy) leaves the walls/floor or overlaps a locked cell.

    Rows above the field (y < 0) are only checked against the side walls.
    """
    for x, y in piece.cells(dx, dy):
        if x < 0 or x >= field.width or y >= field.height:
            return True
        if y >= 0 and not field.is_empty_at(x, y):
            return True
    return False
