"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .constants import (
    PLAYER_SIZE, PLAYER_SPEED, BOSS_WIDTH, BOSS_HEIGHT, BOSS_BULLET_RADIUS,
)


class Owner(Enum):
    """Which side fired a projectile"""
    PLAYER = "player"
    BOSS = "boss"


@dataclass
class Player:
    """Player ship, a square box anchored at its top-left corner"""
    x: float
    y: float
    size: float = PLAYER_SIZE
    speed: float = PLAYER_SPEED
    last_fire: float = 0.0


@dataclass
class Boss:
    """Boss entity, a box anchored at its top-left corner"""
    x: float
    y: float
    hp: int
    max_hp: int
    shot_interval: float
    speed: float
    dx: float = 0.0
    dy: float = 0.0
    width: float = BOSS_WIDTH
    height: float = BOSS_HEIGHT
    last_shot: float = 0.0
    last_turn: float = 0.0
    hard: bool = False
    visual_tier: str = "normal"

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    @property
    def defeated(self) -> bool:
        return self.hp <= 0


@dataclass
class Projectile:
    """Projectile fired by the player or the boss; x, y is the centre"""
    x: float
    y: float
    vx: float
    vy: float
    owner: Owner
    radius: float = BOSS_BULLET_RADIUS
    color: Optional[Tuple[int, int, int]] = None
