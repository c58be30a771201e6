"""
Bullet-pattern generation. Patterns only create projectiles; movement,
collisions and lifetime are handled by the combat step.
"""

from __future__ import annotations
import math
import random
from typing import List, Optional, Tuple

from .constants import (
    AUTOFIRE_INTERVAL, PLAYER_BULLET_SPEED, PLAYER_BULLET_RADIUS, PLAYER_BULLET_COLOR,
    BOSS_BULLET_RADIUS, BOSS_BULLET_COLOR,
    AMBIENT_BULLET_COUNT, AMBIENT_BULLET_SPEED, AMBIENT_BULLET_COLOR,
)
from .difficulty import BossConfig
from .entities import Boss, Player, Projectile, Owner


def radial_pattern(
    cx: float,
    cy: float,
    count: int,
    speed: float,
    owner: Owner = Owner.BOSS,
    radius: float = BOSS_BULLET_RADIUS,
    color: Optional[Tuple[int, int, int]] = None,
    phase: float = 0.0,
) -> List[Projectile]:
    """`count` projectiles from (cx, cy), evenly spaced around the full circle"""
    step = (math.pi * 2) / count
    bullets = []
    for i in range(count):
        ang = phase + i * step
        bullets.append(Projectile(
            x=cx, y=cy,
            vx=math.cos(ang) * speed,
            vy=math.sin(ang) * speed,
            owner=owner,
            radius=radius,
            color=color,
        ))
    return bullets


def emit_boss_pattern(boss: Boss, config: BossConfig, now: float) -> List[Projectile]:
    if boss.defeated:
        return []
    if now - boss.last_shot <= boss.shot_interval:
        return []

    boss.last_shot = now
    cx, cy = boss.center
    return radial_pattern(
        cx, cy,
        count=config.bullet_count,
        speed=config.bullet_speed,
        color=BOSS_BULLET_COLOR,
    )


def ambient_pattern(
    width: float,
    rng: random.Random,
    count: int = AMBIENT_BULLET_COUNT,
    speed: float = AMBIENT_BULLET_SPEED,
) -> List[Projectile]:
    """Petal burst from a random point on the top edge"""
    cx = rng.random() * width
    return radial_pattern(cx, 0.0, count, speed, color=AMBIENT_BULLET_COLOR)


def autofire(player: Player, now: float) -> Optional[Projectile]:
    if now - player.last_fire < AUTOFIRE_INTERVAL:
        return None

    player.last_fire = now
    return Projectile(
        x=player.x + player.size / 2,
        y=player.y,
        vx=0.0,
        vy=-PLAYER_BULLET_SPEED,
        owner=Owner.PLAYER,
        radius=PLAYER_BULLET_RADIUS,
        color=PLAYER_BULLET_COLOR,
    )
