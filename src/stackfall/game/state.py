from __future__ import annotations

import dataclasses
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from .grid import Field
from .pieces import Piece, TetrominoType
from .randomizer import Queue
from .rules import SpeedCurve


class Theme(str, Enum):
    ELECTRONIKA = "electronika"
    TECHNICOLOR = "technicolor"


THEME_ROWS: Dict[Theme, int] = {
    Theme.ELECTRONIKA: 24,
    Theme.TECHNICOLOR: 20,
}
COMPACT_ROWS = 20

# Keys accepted by GameConfig.from_dict besides the field names themselves
_CONFIG_ALIASES = {
    "fieldHeight": "field_height",
    "fieldWidth": "field_width",
    "speedBase": "speed_base_ms",
    "speedFactor": "speed_factor",
    "queueLength": "queue_length",
}


@dataclass(frozen=True)
class GameConfig:
    field_width: int = 10
    field_height: int = 20
    speed_base_ms: float = 800.0
    speed_factor: float = 0.9
    queue_length: int = 3

    def __post_init__(self) -> None:
        if self.field_width < 4:
            raise ValueError(f"field_width must be at least 4, got {self.field_width}")
        if self.field_height < 4:
            raise ValueError(f"field_height must be at least 4, got {self.field_height}")
        if self.queue_length < 3:
            raise ValueError(f"queue_length must be at least 3, got {self.queue_length}")
        # Validates speed_base_ms and speed_factor
        self.speed_curve()

    @classmethod
    def for_theme(cls, theme: Theme | str, compact: bool = False, **overrides: Any) -> "GameConfig":
        rows = COMPACT_ROWS if compact else THEME_ROWS[Theme(theme)]
        overrides.setdefault("field_height", rows)
        return cls(**overrides)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        names = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name not in names:
                raise ValueError(f"unknown config key: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def speed_curve(self) -> SpeedCurve:
        return SpeedCurve(self.speed_base_ms, self.speed_factor)


class Phase(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def _zero_counts() -> Tuple[int, ...]:
    return (0,) * len(TetrominoType)


@dataclass(frozen=True)
class GameState:
    """One immutable snapshot of a game.

    Produced only by `Engine`; presentation layers read it and hand it back
    with the next action or tick.
    """

    config: GameConfig
    field: Field
    queue: Queue
    active: Optional[Piece] = None
    score: int = 0
    lines: int = 0
    level: int = 1
    piece_counts: Tuple[int, ...] = dataclasses.field(default_factory=_zero_counts)
    paused: bool = False
    game_over: bool = False
    hard_drop_guard: bool = False

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        if self.paused:
            return Phase.PAUSED
        if self.active is None and self.score == 0 and self.lines == 0:
            return Phase.IDLE
        return Phase.PLAYING

    @property
    def piece_stats(self) -> Dict[TetrominoType, int]:
        return {kind: self.piece_counts[i] for i, kind in enumerate(TetrominoType)}

    @property
    def total_pieces(self) -> int:
        return sum(self.piece_counts)

    @property
    def gravity_interval_ms(self) -> float:
        return self.config.speed_curve().interval_ms(self.level)

    def board_view(self) -> np.ndarray:
        """Field with the active piece overlaid as negative kind values."""
        view = self.field.clone_state()
        if self.active is not None and not self.game_over:
            for x, y in self.active.cells():
                if self.field.is_inside(x, y):
                    view[y, x] = -int(self.active.kind)
        return view
