"""
Score accumulator
"""

from collections import defaultdict
from typing import Dict


class ScoreKeeper:
    """Only ever goes up"""

    def __init__(self):
        self.total = 0
        self.by_reason: Dict[str, int] = defaultdict(int)

    def award(self, points: int, reason: str = "kill") -> int:
        points = int(points)
        if points < 0:
            raise ValueError(f"score awards must be non-negative, got {points}")
        self.total += points
        self.by_reason[reason] += points
        return self.total

    def reset(self):
        self.total = 0
        self.by_reason.clear()
