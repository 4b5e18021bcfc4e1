from __future__ import annotations

from dataclasses import replace
from typing import Iterable

import numpy as np
import pytest

from stackfall.game import Engine, Field, GameConfig, GameState, Piece, TetrominoType


class ScriptedRandomizer:
    """Draws kinds from a fixed script, repeating the last one when exhausted."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self.kinds = list(kinds)
        self.drawn = 0

    def draw(self) -> TetrominoType:
        idx = min(self.drawn, len(self.kinds) - 1)
        self.drawn += 1
        return self.kinds[idx]


def make_engine(*kinds: TetrominoType) -> Engine:
    return Engine(randomizer=ScriptedRandomizer(kinds or (TetrominoType.O,)))


def with_field(state: GameState, rows) -> GameState:
    return replace(state, field=Field(np.array(rows, dtype=np.int8)))


def with_piece(state: GameState, kind: TetrominoType, x: int, y: int) -> GameState:
    piece = Piece.spawn(kind, state.field.width)
    return replace(state, active=Piece(kind, piece.shape, x, y))


@pytest.fixture
def o_engine() -> Engine:
    return make_engine(TetrominoType.O)


@pytest.fixture
def playing(o_engine: Engine) -> GameState:
    """A 10x20 game with an O piece just spawned."""
    return o_engine.start(o_engine.init(GameConfig()))
