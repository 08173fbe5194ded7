"""
Difficulty scaling: pure functions of elapsed ticks and score
"""

from dataclasses import dataclass

from .config import EngineConfig


@dataclass(frozen=True)
class Difficulty:
    level: int
    base_scroll: float


class DifficultyScaler:
    """Level rises every ``level_ticks`` ticks or every ``level_score`` points,
    whichever is further along; the base scroll speed follows it up to a cap."""

    def __init__(self, config: EngineConfig):
        self.config = config

    def level(self, ticks: int, score: int = 0) -> int:
        cfg = self.config
        by_time = max(ticks, 0) // cfg.level_ticks
        by_score = max(score, 0) // cfg.level_score if cfg.level_score > 0 else 0
        return int(max(by_time, by_score))

    def base_scroll(self, level: int) -> float:
        cfg = self.config
        return min(cfg.scroll_cap, cfg.initial_scroll + cfg.scroll_step * level)

    def __call__(self, ticks: int, score: int = 0) -> Difficulty:
        level = self.level(ticks, score)
        return Difficulty(level=level, base_scroll=self.base_scroll(level))
