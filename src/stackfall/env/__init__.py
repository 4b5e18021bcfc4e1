"""Gymnasium environments for Stackfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default environment (7 gameplay actions, one gravity tick per step)
register(
    id="Stackfall-v0",
    entry_point="stackfall.env.stackfall_env:StackfallEnv",
)

from .stackfall_env import StackfallEnv  # noqa: E402
from .wrappers import PlacementActionWrapper  # noqa: E402

__all__ = ["StackfallEnv", "PlacementActionWrapper"]
