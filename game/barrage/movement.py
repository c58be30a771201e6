"""
Per-tick position integration and field bounds for the player and the boss.

Positions advance by `velocity` per tick, not `velocity * dt`: the game runs
one logical step per display frame.
"""

from __future__ import annotations
import math
import random

from .constants import BOSS_TURN_INTERVAL
from .entities import Player, Boss
from .interfaces import InputIntent
from .utils import clamp


def move_player(player: Player, intent: InputIntent, width: float, height: float):
    dx, dy = 0.0, 0.0
    if intent.left:
        dx -= player.speed
    if intent.right:
        dx += player.speed
    if intent.up:
        dy -= player.speed
    if intent.down:
        dy += player.speed

    # Keys and pointer drag are summed
    player.x += dx + intent.pointer_dx
    player.y += dy + intent.pointer_dy

    player.x = clamp(player.x, 0.0, width - player.size)
    player.y = clamp(player.y, 0.0, height - player.size)


def turn_boss(boss: Boss, rng: random.Random):
    """Pick a new heading uniformly at random; magnitude is the tier speed"""
    ang = rng.uniform(0.0, math.pi * 2)
    boss.dx = math.cos(ang) * boss.speed
    boss.dy = math.sin(ang) * boss.speed


def update_boss(boss: Boss, now: float, rng: random.Random, width: float, height: float):
    if now - boss.last_turn >= BOSS_TURN_INTERVAL:
        turn_boss(boss, rng)
        boss.last_turn = now

    boss.x += boss.dx
    boss.y += boss.dy

    # Bounce off the edges so the boss never hugs a wall
    max_x = width - boss.width
    max_y = height - boss.height
    if boss.x < 0:
        boss.x = 0.0
        boss.dx = abs(boss.dx)
    elif boss.x > max_x:
        boss.x = max_x
        boss.dx = -abs(boss.dx)
    if boss.y < 0:
        boss.y = 0.0
        boss.dy = abs(boss.dy)
    elif boss.y > max_y:
        boss.y = max_y
        boss.dy = -abs(boss.dy)
