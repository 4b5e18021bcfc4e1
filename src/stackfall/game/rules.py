from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    """Line-clear rewards and level progression.

    `line_clear_scores[n]` is the base reward for clearing n rows in a single
    lock; it is multiplied by `level + level_factor_offset`, using the level
    held at the moment of the lock.
    """

    line_clear_scores: tuple[int, int, int, int, int] = (0, 40, 100, 300, 1200)
    level_factor_offset: int = 1
    lines_per_level: int = 10

    def __post_init__(self) -> None:
        scores = tuple(int(s) for s in self.line_clear_scores)
        if len(scores) != 5:
            raise ValueError(f"line_clear_scores needs 5 entries (0..4 rows), got {len(scores)}")
        if any(s < 0 for s in scores) or list(scores) != sorted(scores):
            raise ValueError("line_clear_scores must be non-negative and non-decreasing")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")
        object.__setattr__(self, "line_clear_scores", scores)

    def level_factor(self, level: int) -> int:
        return level + self.level_factor_offset

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        # A single lock can clear at most 4 rows with tetrominoes
        base = self.line_clear_scores[min(lines, 4)]
        return base * self.level_factor(level)

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1


@dataclass(frozen=True)
class SpeedCurve:
    """Maps a level to the gravity interval in milliseconds."""

    base_ms: float = 800.0
    factor: float = 0.9

    def __post_init__(self) -> None:
        if self.base_ms <= 0:
            raise ValueError(f"base_ms must be positive, got {self.base_ms}")
        if not 0 < self.factor < 1:
            raise ValueError(f"factor must be in (0, 1), got {self.factor}")

    def interval_ms(self, level: int) -> float:
        return self.base_ms * self.factor ** (max(level, 1) - 1)
