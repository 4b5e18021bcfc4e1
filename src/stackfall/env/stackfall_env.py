from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stackfall.game import Action, Engine, GameConfig, GameState, ScoringRules, TetrominoType, UniformRandomizer
from stackfall.game.core import GAMEPLAY_ACTIONS


_ANSI_CHARS = {0: "·"}
_ANSI_CHARS.update({int(k): k.name for k in TetrominoType})


def _board_features(state: GameState) -> Dict[str, int]:
    return {
        "holes": state.field.count_holes(),
        "bumpiness": state.field.bumpiness(),
        "max_height": state.field.get_max_height(),
    }


class StackfallEnv(gym.Env):
    """Falling-block environment over the snapshot engine.

    One step applies a gameplay action, then a gravity tick every
    `gravity_every` steps. The board observation carries locked cells as
    kind values and the falling piece as negative kind values.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        rules: Optional[ScoringRules] = None,
        gravity_every: int = 1,
        max_episode_steps: int = 10000,
        reward_weights: Optional[Dict[str, float]] = None,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        if gravity_every < 1:
            raise ValueError(f"gravity_every must be at least 1, got {gravity_every}")
        self.config = config or GameConfig()
        self.randomizer = UniformRandomizer()
        self.engine = Engine(self.randomizer, rules)
        self.state = self.engine.init(self.config)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "score": 0.01,           # per engine score point
            "lines": 1.0,            # per line cleared
            # Negative components (penalize increases)
            "holes": 0.1,
            "bumpiness": 0.01,
            "height": 0.02,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.config.field_height, self.config.field_width
        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8),
                "queue": spaces.Box(low=1, high=n_kinds, shape=(self.config.queue_length,), dtype=np.int8),
                "level": spaces.Box(low=1, high=np.iinfo(np.int64).max, shape=(1,), dtype=np.int64),
            }
        )
        self.action_space = spaces.Discrete(len(GAMEPLAY_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.state.board_view().astype(np.int8),
            "queue": np.array([int(k) for k in self.state.queue], dtype=np.int8),
            "level": np.array([self.state.level], dtype=np.int64),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.state.score,
            "lines": self.state.lines,
            "level": self.state.level,
            "pieces": self.state.total_pieces,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.randomizer.reseed(seed)
        self.state = self.engine.start(self.engine.init(self.config))
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        if action not in GAMEPLAY_ACTIONS:
            raise ValueError(f"{action.name} is not a gameplay action")

        before = self.state
        features_before = _board_features(before)

        state = self.engine.apply_action(before, action)
        self._steps += 1
        if self._steps % self.gravity_every == 0:
            state = self.engine.tick(state)
        self.state = state

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(state.score - before.score),
            "lines": self.reward_weights["lines"] * float(state.lines - before.lines),
        }
        if state.total_pieces != before.total_pieces:
            # Board shape only changes on a lock
            features_after = _board_features(state)
            reward_components["holes"] = -self.reward_weights["holes"] * float(
                max(0, features_after["holes"] - features_before["holes"]))
            reward_components["bumpiness"] = -self.reward_weights["bumpiness"] * float(
                max(0, features_after["bumpiness"] - features_before["bumpiness"]))
            reward_components["height"] = -self.reward_weights["height"] * float(
                max(0, features_after["max_height"] - features_before["max_height"]))

        terminated = bool(state.game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = state.score - before.score
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[str | np.ndarray]:
        board = self.state.board_view()
        if self.render_mode == "ansi":
            rows = ["".join(_ANSI_CHARS[abs(int(v))] for v in row) for row in board]
            rows.append(f"score {self.state.score}  lines {self.state.lines}  level {self.state.level}")
            return "\n".join(rows)
        if self.render_mode == "rgb_array":
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(board[y, x])
                    if v > 0:
                        color = (70, 200, 120)
                    elif v < 0:
                        color = (230, 230, 230)
                    else:
                        color = (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
