from __future__ import annotations

import gymnasium as gym
from gymnasium import spaces

from stackfall.game import Action, GameState
from stackfall.game.pieces import RotationDirection

ROTATIONS = 4


def _leftmost_column(state: GameState) -> int:
    assert state.active is not None
    return min(x for x, _ in state.active.cells())


class PlacementActionWrapper(gym.ActionWrapper):
    """Exposes Discrete(width * 4) placements (column, rotation) for agents.

    Placement index = column * 4 + rotation. The wrapper rotates the falling
    piece clockwise `rotation` times, slides it until its leftmost cell sits
    in `column` (or it is blocked), and hard-drops it. Blocked rotations or
    slides are skipped, exactly as the engine treats them.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        self.width = int(env.unwrapped.config.field_width)
        self.n = self.width * ROTATIONS
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int]:
        return int(idx) // ROTATIONS, int(idx) % ROTATIONS

    def action(self, action: int):  # type: ignore[override]
        column, rotation = self._unflatten(int(action))
        base = self.env.unwrapped
        engine = base.engine
        state = engine.start(base.state)
        if state.active is not None and not state.paused and not state.game_over:
            for _ in range(rotation):
                state = engine.rotate(state, RotationDirection.CW)
            while _leftmost_column(state) != column:
                step = 1 if _leftmost_column(state) < column else -1
                moved = engine.move_horizontal(state, step)
                if moved is state:
                    break
                state = moved
        base.state = state
        return int(Action.HARD_DROP)
