from __future__ import annotations

from typing import Optional

from .clock import GravityClock
from .core import Action, Engine
from .state import GameConfig, GameState


class GameSession:
    """Holds the current snapshot for a host loop and drives gravity.

    Inputs are applied in the order `act` is called; `update` delivers every
    gravity tick that became due in the elapsed time. A level reached on a tick
    sets the next interval at once; one reached through `act` waits for the
    interval in progress.
    """

    def __init__(self, config: Optional[GameConfig] = None, engine: Optional[Engine] = None) -> None:
        self.engine = engine or Engine()
        self.state: GameState = self.engine.init(config)
        self.clock = GravityClock(self.state.gravity_interval_ms)

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def act(self, action: Action | int) -> GameState:
        action = Action(action)
        before = self.state
        self.state = self.engine.apply_action(before, action)
        if action is Action.RESTART:
            self.clock.reset(self.state.gravity_interval_ms)
        else:
            self._sync_clock(before)
        return self.state

    def update(self, dt_ms: float) -> int:
        """Advance host time by `dt_ms` and return the number of ticks applied."""
        self.clock.advance(dt_ms)
        ticks = 0
        while not self.state.game_over and self.clock.consume():
            before = self.state
            self.state = self.engine.tick(before)
            ticks += 1
            self._sync_clock(before, at_boundary=True)
        return ticks

    def reset(self) -> GameState:
        return self.act(Action.RESTART)

    def reconfigure(self, config: GameConfig) -> GameState:
        before = self.state
        self.state = self.engine.reconfigure(before, config)
        if self.state is not before:
            self.clock.reset(self.state.gravity_interval_ms)
        return self.state

    def _sync_clock(self, before: GameState, at_boundary: bool = False) -> None:
        state = self.state
        if state.game_over:
            self.clock.cancel()
            self.clock.pause()
            return
        if state.paused != self.clock.paused:
            if state.paused:
                self.clock.pause()
            else:
                self.clock.resume()
        if state.level != before.level:
            self.clock.reschedule(state.gravity_interval_ms, at_boundary=at_boundary)
