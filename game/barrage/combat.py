"""
Combat resolution for one frame.

Order:
  1. advance every projectile
  2. boss projectiles vs player (first hit ends the checks)
  3. player projectiles vs boss (skipped if the player was hit)
  4. report the boss defeat once
  5. drop projectiles outside the field

Boss fire is resolved before player fire, so a frame where the player is hit
always ends in a loss even if the same frame would have killed the boss.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .entities import Player, Boss, Projectile
from .utils import point_in_rect, circle_rect_collide


@dataclass
class CombatEvents:
    player_hit: bool = False
    boss_hits: int = 0
    boss_defeated: bool = False
    removed_player_bullets: int = 0
    removed_boss_bullets: int = 0


def advance_projectiles(bullets: List[Projectile]):
    for b in bullets:
        b.x += b.vx
        b.y += b.vy


def in_field(b: Projectile, width: float, height: float) -> bool:
    """A projectile is live while its centre is inside the field grown by its radius"""
    r = b.radius
    return point_in_rect(b.x, b.y, -r, -r, width + 2 * r, height + 2 * r)


def prune_projectiles(bullets: List[Projectile], width: float, height: float) -> int:
    """Remove off-field projectiles in place; returns how many were removed"""
    before = len(bullets)
    bullets[:] = [b for b in bullets if in_field(b, width, height)]
    return before - len(bullets)


def projectile_hits_player(b: Projectile, player: Player) -> bool:
    return circle_rect_collide(b.x, b.y, b.radius, player.x, player.y, player.size, player.size)


def projectile_hits_boss(b: Projectile, boss: Boss) -> bool:
    return circle_rect_collide(b.x, b.y, b.radius, boss.x, boss.y, boss.width, boss.height)


def resolve_combat(
    player: Player,
    boss: Boss,
    player_bullets: List[Projectile],
    boss_bullets: List[Projectile],
    width: float,
    height: float,
) -> CombatEvents:
    events = CombatEvents()

    advance_projectiles(player_bullets)
    advance_projectiles(boss_bullets)

    for b in boss_bullets:
        if projectile_hits_player(b, player):
            events.player_hit = True
            break

    if not events.player_hit and not boss.defeated:
        remaining = []
        for b in player_bullets:
            if not boss.defeated and projectile_hits_boss(b, boss):
                boss.hp -= 1
                events.boss_hits += 1
                continue
            remaining.append(b)
        player_bullets[:] = remaining
        events.boss_defeated = boss.defeated

    events.removed_player_bullets = prune_projectiles(player_bullets, width, height)
    events.removed_boss_bullets = prune_projectiles(boss_bullets, width, height)

    return events
