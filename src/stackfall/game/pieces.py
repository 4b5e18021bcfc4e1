from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class RotationDirection(Enum):
    CW = 1
    CCW = -1


Shape = np.ndarray


def _frozen(shape: Shape) -> Shape:
    arr = np.array(shape, dtype=np.int8)
    arr.flags.writeable = False
    return arr


# Rotation-0 matrices. Every matrix is square so four rotations cycle back.
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
}


def rotate_cw(shape: Shape) -> Shape:
    """Transpose, then reverse each row."""
    return _frozen(np.rot90(shape, 1, axes=(1, 0)))


def rotate_ccw(shape: Shape) -> Shape:
    """Reverse each row, then transpose."""
    return _frozen(np.rot90(shape, 1))


class Piece:
    """An active tetromino: kind, current rotation matrix and top-left anchor.

    Instances are immutable; `moved` and `rotated` return new pieces.
    """

    __slots__ = ("kind", "shape", "x", "y")

    def __init__(self, kind: TetrominoType, shape: Shape, x: int, y: int) -> None:
        object.__setattr__(self, "kind", TetrominoType(kind))
        object.__setattr__(self, "shape", _frozen(shape))
        object.__setattr__(self, "x", int(x))
        object.__setattr__(self, "y", int(y))

    def __setattr__(self, name, value):
        raise AttributeError(f"Piece is immutable, cannot set {name!r}")

    @classmethod
    def spawn(cls, kind: TetrominoType, field_width: int) -> "Piece":
        shape = BASE_SHAPES[TetrominoType(kind)]
        w = shape.shape[1]
        return cls(kind, shape, field_width // 2 - w // 2, 0)

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, self.shape, self.x + dx, self.y + dy)

    def rotated(self, direction: RotationDirection) -> "Piece":
        if direction is RotationDirection.CW:
            shape = rotate_cw(self.shape)
        else:
            shape = rotate_ccw(self.shape)
        return Piece(self.kind, shape, self.x, self.y)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dy, dx in zip(*np.nonzero(self.shape)):
            cells.append((origin_x + int(dx), origin_y + int(dy)))
        return cells

    def cells(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        """Absolute (x, y) of every occupied cell, optionally offset."""
        return self.cells_at(self.x + dx, self.y + dy)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.x, self.y, self.shape.shape, self.shape.tobytes()))

    def __repr__(self) -> str:
        return f"Piece(kind={self.kind.name}, x={self.x}, y={self.y}, shape={self.shape.tolist()})"
