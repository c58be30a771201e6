"""
Boss progression: everything about the next boss is derived from how many
bosses have been defeated so far.
"""

from dataclasses import dataclass
from typing import Tuple

from .constants import (
    BASE_HP, HARD_TIER_EVERY,
    ORDINARY_SHOT_INTERVAL, MIN_SHOT_INTERVAL, SHOT_INTERVAL_STEP,
    ORDINARY_BULLET_COUNT, MAX_ORDINARY_BULLET_COUNT, MAX_HARD_BULLET_COUNT,
    ORDINARY_BULLET_SPEED, HARD_BULLET_SPEED,
    ORDINARY_BOSS_SPEED, HARD_BOSS_SPEED,
    BOSS_COLOR, RAINBOW,
)


@dataclass(frozen=True)
class BossConfig:
    hp: int
    shot_interval: float
    bullet_count: int
    bullet_speed: float
    boss_speed: float
    is_hard_tier: bool
    visual_tier: str


def is_hard_tier(defeat_count: int) -> bool:
    return (defeat_count + 1) % HARD_TIER_EVERY == 0


def derive_boss_config(defeat_count: int) -> BossConfig:
    """
    Build the configuration of the boss that follows `defeat_count` defeats.

    Ordinary bosses escalate linearly (more bullets, faster fire) up to a cap.
    Every 5th boss steps up on top of that: +50% bullets, faster bullets,
    2/3 of the fire interval and the rainbow visual tier.
    """
    if defeat_count < 0:
        raise ValueError(f"defeat_count must be >= 0, got {defeat_count}")

    hp = (defeat_count + 1) * BASE_HP
    shot_interval = max(MIN_SHOT_INTERVAL, ORDINARY_SHOT_INTERVAL - SHOT_INTERVAL_STEP * defeat_count)
    bullet_count = ORDINARY_BULLET_COUNT + min(defeat_count, MAX_ORDINARY_BULLET_COUNT - ORDINARY_BULLET_COUNT)

    if not is_hard_tier(defeat_count):
        return BossConfig(
            hp=hp,
            shot_interval=float(shot_interval),
            bullet_count=bullet_count,
            bullet_speed=ORDINARY_BULLET_SPEED,
            boss_speed=ORDINARY_BOSS_SPEED,
            is_hard_tier=False,
            visual_tier="normal",
        )

    return BossConfig(
        hp=hp,
        shot_interval=shot_interval * 2 / 3,
        bullet_count=min(bullet_count * 3 // 2, MAX_HARD_BULLET_COUNT),
        bullet_speed=HARD_BULLET_SPEED,
        boss_speed=HARD_BOSS_SPEED,
        is_hard_tier=True,
        visual_tier="rainbow",
    )


def rainbow_color(frame: int) -> Tuple[int, int, int]:
    """Cycle through the 7-color rainbow, one step per frame"""
    return RAINBOW[frame % len(RAINBOW)]


def boss_color(visual_tier: str, frame: int = 0) -> Tuple[int, int, int]:
    if visual_tier == "rainbow":
        return rainbow_color(frame)
    return BOSS_COLOR
