from __future__ import annotations

import logging
from dataclasses import replace
from enum import IntEnum
from typing import Optional

from .grid import Field, collides
from .pieces import Piece, RotationDirection, TetrominoType
from .randomizer import Randomizer, UniformRandomizer, advance_queue, fill_queue
from .rules import ScoringRules
from .state import GameConfig, GameState, Phase

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6
    TOGGLE_PAUSE = 7
    RESTART = 8


GAMEPLAY_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE_CW,
    Action.ROTATE_CCW,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.NONE,
)

_KIND_INDEX = {kind: i for i, kind in enumerate(TetrominoType)}


class Engine:
    """Rules engine over immutable `GameState` snapshots.

    Every public method takes a snapshot and returns the next one; the input
    is never modified. Moves that are not possible (into a wall, while
    paused, after game over) return the input snapshot itself. The only
    state held by the engine is the injected randomizer and scoring rules.

    `hard_drop_guard` is set only on the snapshot a hard drop is working on
    and is cleared on the snapshot it returns. It rejects a re-entrant
    HARD_DROP against that in-flight snapshot; separate HARD_DROP calls from
    a caller each drop their own piece.
    """

    def __init__(self, randomizer: Optional[Randomizer] = None, rules: Optional[ScoringRules] = None) -> None:
        self.randomizer = randomizer or UniformRandomizer()
        self.rules = rules or ScoringRules()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self, config: Optional[GameConfig] = None) -> GameState:
        config = config or GameConfig()
        return GameState(
            config=config,
            field=Field.empty(config.field_width, config.field_height),
            queue=fill_queue(self.randomizer, config.queue_length),
        )

    def start(self, state: GameState) -> GameState:
        """Spawn the first piece of an idle game."""
        if state.phase is not Phase.IDLE:
            return state
        return self._spawn(state)

    def restart(self, state: GameState) -> GameState:
        logger.info("Restarting game (score=%d, lines=%d, level=%d)", state.score, state.lines, state.level)
        return self.start(self.init(state.config))

    def reconfigure(self, state: GameState, config: GameConfig) -> GameState:
        """Replace the game with a fresh idle one when `config` differs."""
        if config == state.config:
            return state
        logger.info(
            "Config changed (%dx%d -> %dx%d), discarding current game",
            state.config.field_width,
            state.config.field_height,
            config.field_width,
            config.field_height,
        )
        return self.init(config)

    # ------------------------------------------------------------------
    # Action surface
    # ------------------------------------------------------------------
    def apply_action(self, state: GameState, action: Action | int) -> GameState:
        action = Action(action)
        if action is Action.RESTART:
            return self.restart(state)
        if action is Action.TOGGLE_PAUSE:
            return self.toggle_pause(state)
        if action is Action.NONE or not self._is_live(state):
            return state
        if state.phase is Phase.IDLE:
            return self.start(state)

        if action is Action.LEFT:
            return self.move_horizontal(state, -1)
        if action is Action.RIGHT:
            return self.move_horizontal(state, 1)
        if action is Action.ROTATE_CW:
            return self.rotate(state, RotationDirection.CW)
        if action is Action.ROTATE_CCW:
            return self.rotate(state, RotationDirection.CCW)
        if action is Action.SOFT_DROP:
            return self.drop_one(state)
        # Action.HARD_DROP
        if state.hard_drop_guard:
            return state
        dropped = self.drop_to_floor(replace(state, hard_drop_guard=True))
        return replace(dropped, hard_drop_guard=False)

    def tick(self, state: GameState) -> GameState:
        """Advance gravity by one row."""
        if not self._is_live(state):
            return state
        if state.phase is Phase.IDLE:
            return self.start(state)
        return self.drop_one(state)

    def toggle_pause(self, state: GameState) -> GameState:
        if state.game_over:
            return state
        return replace(state, paused=not state.paused)

    def move_left(self, state: GameState) -> GameState:
        return self.apply_action(state, Action.LEFT)

    def move_right(self, state: GameState) -> GameState:
        return self.apply_action(state, Action.RIGHT)

    def rotate_cw(self, state: GameState) -> GameState:
        return self.apply_action(state, Action.ROTATE_CW)

    def rotate_ccw(self, state: GameState) -> GameState:
        return self.apply_action(state, Action.ROTATE_CCW)

    def soft_drop(self, state: GameState) -> GameState:
        return self.apply_action(state, Action.SOFT_DROP)

    def hard_drop(self, state: GameState) -> GameState:
        return self.apply_action(state, Action.HARD_DROP)

    # ------------------------------------------------------------------
    # Movement & rotation
    # ------------------------------------------------------------------
    def move_horizontal(self, state: GameState, direction: int) -> GameState:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction}")
        piece = state.active
        if piece is None or collides(piece, state.field, direction, 0):
            return state
        return replace(state, active=piece.moved(direction, 0))

    def rotate(self, state: GameState, direction: RotationDirection) -> GameState:
        piece = state.active
        if piece is None:
            return state
        rotated = piece.rotated(direction)
        # No kicks: blocked rotations are rejected outright
        if collides(rotated, state.field):
            return state
        return replace(state, active=rotated)

    def drop_one(self, state: GameState) -> GameState:
        """Move down one row, or lock when resting on the floor or stack."""
        piece = state.active
        if piece is None:
            return state
        if not collides(piece, state.field, 0, 1):
            return replace(state, active=piece.moved(0, 1))
        return self.lock(state)

    def drop_to_floor(self, state: GameState) -> GameState:
        """Fall to the lowest free position and lock in one transition."""
        piece = state.active
        if piece is None:
            return state
        offset = 0
        while not collides(piece, state.field, 0, offset + 1):
            offset += 1
        return self.lock(replace(state, active=piece.moved(0, offset)))

    # ------------------------------------------------------------------
    # Lock & line clear
    # ------------------------------------------------------------------
    def lock(self, state: GameState) -> GameState:
        piece = state.active
        if piece is None:
            return state

        stamped = state.field.stamp(piece)
        counts = list(state.piece_counts)
        counts[_KIND_INDEX[piece.kind]] += 1

        result = stamped.clear_full_rows()
        cleared = result.lines_cleared
        score = state.score + self.rules.score_for_lines(cleared, state.level)
        lines = state.lines + cleared
        level = self.rules.level_for_lines(lines)

        logger.debug("Locked %s at (%d, %d), cleared %d rows", piece.kind.name, piece.x, piece.y, cleared)
        if level != state.level:
            logger.info("Level %d -> %d after %d lines", state.level, level, lines)

        locked = replace(
            state,
            field=result.field,
            active=None,
            score=score,
            lines=lines,
            level=level,
            piece_counts=tuple(counts),
        )
        return self._spawn(locked)

    def _spawn(self, state: GameState) -> GameState:
        kind, queue = advance_queue(state.queue, self.randomizer)
        piece = Piece.spawn(kind, state.field.width)
        if collides(piece, state.field):
            logger.info("Game over: %s cannot spawn (score=%d, lines=%d)", kind.name, state.score, state.lines)
            return replace(state, active=None, queue=queue, game_over=True)
        logger.debug("Spawned %s at column %d", kind.name, piece.x)
        return replace(state, active=piece, queue=queue)

    @staticmethod
    def _is_live(state: GameState) -> bool:
        return not (state.paused or state.game_over)
