import gymnasium as gym
import numpy as np
import pytest

import stackfall.env  # noqa: F401
from stackfall.env.stackfall_env import StackfallEnv
from stackfall.env.wrappers import PlacementActionWrapper
from stackfall.game import Action, GameConfig


def test_reset_returns_spawned_board():
    env = gym.make("Stackfall-v0")
    obs, info = env.reset(seed=0)
    assert obs["board"].shape == (20, 10)
    assert obs["board"].dtype == np.int8
    assert (obs["board"] < 0).sum() == 4
    assert obs["queue"].shape == (3,)
    assert obs["level"].tolist() == [1]
    assert info["score"] == 0
    assert env.observation_space.contains(obs)
    env.close()


def test_seeded_resets_are_reproducible():
    env = StackfallEnv()
    first, _ = env.reset(seed=42)
    again, _ = env.reset(seed=42)
    assert np.array_equal(first["board"], again["board"])
    assert np.array_equal(first["queue"], again["queue"])


def test_noop_step_applies_gravity():
    env = StackfallEnv()
    env.reset(seed=1)
    y = env.state.active.y
    env.step(int(Action.NONE))
    assert env.state.active.y == y + 1


def test_gravity_every_skips_ticks():
    env = StackfallEnv(gravity_every=3)
    env.reset(seed=1)
    y = env.state.active.y
    env.step(int(Action.NONE))
    env.step(int(Action.NONE))
    assert env.state.active.y == y
    env.step(int(Action.NONE))
    assert env.state.active.y == y + 1


def test_hard_drops_end_in_termination():
    env = StackfallEnv(config=GameConfig(field_height=8))
    env.reset(seed=3)
    terminated = False
    for _ in range(200):
        _, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        assert isinstance(reward, float)
        assert not truncated
        if terminated:
            break
    assert terminated
    assert env.state.game_over
    assert info["reward_components"]["terminal"] == 0.0


def test_truncates_after_max_steps():
    env = StackfallEnv(max_episode_steps=2)
    env.reset(seed=0)
    assert env.step(int(Action.LEFT))[3] is False
    assert env.step(int(Action.LEFT))[3] is True


def test_non_gameplay_action_raises():
    env = StackfallEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(int(Action.RESTART))


def test_render_modes():
    env = StackfallEnv(render_mode="ansi")
    env.reset(seed=0)
    text = env.render()
    assert len(text.splitlines()) == 21
    assert "score 0" in text

    env = StackfallEnv(render_mode="rgb_array")
    env.reset(seed=0)
    assert env.render().shape == (20 * 12, 10 * 12, 3)


def test_placement_wrapper_drops_at_column():
    env = PlacementActionWrapper(gym.make("Stackfall-v0"))
    assert env.action_space.n == 40
    env.reset(seed=5)
    env.step(0)  # column 0, no rotation
    field = env.unwrapped.state.field
    assert int(np.count_nonzero(field.cells)) == 4
    assert field.cells[:, 0].any()
    assert env.unwrapped.state.total_pieces == 1
