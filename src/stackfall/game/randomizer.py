"""Piece generation and the lookahead queue.

Kinds are drawn independently and uniformly from the seven tetrominoes; there
is no bag or repeat-avoidance policy.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, Tuple

from .pieces import TetrominoType


Queue = Tuple[TetrominoType, ...]

_KINDS = tuple(TetrominoType)


class Randomizer(Protocol):
    def draw(self) -> TetrominoType:
        ...


class UniformRandomizer:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def reseed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def draw(self) -> TetrominoType:
        return self.rng.choice(_KINDS)


def fill_queue(randomizer: Randomizer, length: int) -> Queue:
    return tuple(randomizer.draw() for _ in range(length))


def advance_queue(queue: Queue, randomizer: Randomizer) -> Tuple[TetrominoType, Queue]:
    """Pop the head and append one fresh draw, keeping the length constant."""
    head = queue[0]
    return head, queue[1:] + (randomizer.draw(),)
