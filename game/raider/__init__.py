"""River raid frame-simulation engine and its Gymnasium environment"""

from .config import BankPolicy, EngineConfig
from .engine import FrameSnapshot, RaiderEngine, RunSummary
from .entities import EffectType, ObstacleType, ProjectileTag
from .motion import InputState
from .raider_env import RaiderEnv, run_random_episode

__all__ = [
    'BankPolicy',
    'EngineConfig',
    'EffectType',
    'FrameSnapshot',
    'InputState',
    'ObstacleType',
    'ProjectileTag',
    'RaiderEngine',
    'RaiderEnv',
    'RunSummary',
    'run_random_episode',
]
