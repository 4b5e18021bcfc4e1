"""Game module for Stackfall.

Exports the rules engine and supporting classes:
- Field / collides: Play field, collision checks and line clearing
- Piece / TetrominoType: Tetromino shapes with naive rotation
- ScoringRules / SpeedCurve: Line-clear rewards, levels and gravity speed
- UniformRandomizer: Injectable IID piece generator
- GameConfig / GameState: Configuration and immutable state snapshots
- Engine / Action: Action and gravity-tick API over snapshots
- GravityClock / GameSession: Host-side timer and stateful wrapper
"""

from .grid import Field, collides
from .pieces import Piece, RotationDirection, TetrominoType
from .rules import ScoringRules, SpeedCurve
from .randomizer import Randomizer, UniformRandomizer
from .state import GameConfig, GameState, Phase, Theme
from .core import Action, Engine
from .clock import GravityClock
from .session import GameSession

__all__ = [
    "Field",
    "collides",
    "Piece",
    "RotationDirection",
    "TetrominoType",
    "ScoringRules",
    "SpeedCurve",
    "Randomizer",
    "UniformRandomizer",
    "GameConfig",
    "GameState",
    "Phase",
    "Theme",
    "Action",
    "Engine",
    "GravityClock",
    "GameSession",
]
