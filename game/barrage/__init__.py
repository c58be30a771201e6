"""Boss barrage game module - bullet-hell boss battle core and environment"""

from .session import (
    GameSession,
    GameState,
    start_new_game,
    advance_to_next_boss,
    tick,
    render,
    resize,
    elapsed_seconds,
)
from .difficulty import BossConfig, derive_boss_config
from .interfaces import InputIntent
from .boss_env import BossBarrageEnv, run_random_episode

__all__ = [
    'GameSession',
    'GameState',
    'start_new_game',
    'advance_to_next_boss',
    'tick',
    'render',
    'resize',
    'elapsed_seconds',
    'BossConfig',
    'derive_boss_config',
    'InputIntent',
    'BossBarrageEnv',
    'run_random_episode',
]
