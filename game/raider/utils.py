"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def approach(current: float, target: float, factor: float) -> float:
    """Move current toward target by a fixed fraction of the remaining gap"""
    return current + (target - current) * factor


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length, (0, 0) for a degenerate vector"""
    l = math.hypot(x, y)
    if l < eps or not math.isfinite(l):
        return 0.0, 0.0
    return x / l, y / l


def rects_overlap(ax, ay, aw, ah, bx, by, bw, bh, padding: float = 0.0) -> bool:
    """Axis-aligned box overlap; padding shrinks the first box on every side"""
    return (
        ax + padding < bx + bw
        and ax + aw - padding > bx
        and ay + padding < by + bh
        and ay + ah - padding > by
    )


def is_finite_entity(entity) -> bool:
    """False for None or for records whose coordinates have gone non-finite"""
    if entity is None:
        return False
    try:
        return math.isfinite(entity.x) and math.isfinite(entity.y)
    except (AttributeError, TypeError):
        return False


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Seedable generator used for every random draw of the simulation"""
    return np.random.default_rng(seed)
