import pytest

from game.barrage.combat import (
    resolve_combat, prune_projectiles, in_field, advance_projectiles,
)
from game.barrage.entities import Player, Boss, Projectile, Owner

W, H = 600, 400


def boss_at(x=280.0, y=40.0, hp=3):
    return Boss(x=x, y=y, hp=hp, max_hp=hp, shot_interval=1500.0, speed=0.0)


def shot_at(x, y, owner=Owner.PLAYER, vx=0.0, vy=0.0, radius=3.0):
    return Projectile(x=x, y=y, vx=vx, vy=vy, owner=owner, radius=radius)


def test_advance_moves_by_velocity():
    bullets = [shot_at(10, 10, vx=2, vy=-3)]
    advance_projectiles(bullets)
    assert (bullets[0].x, bullets[0].y) == (12, 7)


def test_prune_is_exact_on_expanded_rect():
    r = 5.0
    keep = [
        shot_at(-r, -r, radius=r),
        shot_at(W + r, H + r, radius=r),
        shot_at(W / 2, H / 2, radius=r),
    ]
    drop = [
        shot_at(-r - 0.01, 10, radius=r),
        shot_at(10, H + r + 0.01, radius=r),
        shot_at(W + r + 1, -r - 1, radius=r),
    ]
    bullets = keep + drop
    removed = prune_projectiles(bullets, W, H)
    assert removed == len(drop)
    assert bullets == keep
    assert all(in_field(b, W, H) for b in bullets)
    assert not any(in_field(b, W, H) for b in drop)


def test_player_hit_is_reported_once():
    player = Player(x=100.0, y=300.0)
    boss = boss_at()
    boss_bullets = [shot_at(105, 305, owner=Owner.BOSS) for _ in range(3)]
    events = resolve_combat(player, boss, [], boss_bullets, W, H)
    assert events.player_hit
    assert events.boss_hits == 0
    assert not events.boss_defeated


def test_player_bullets_damage_boss_and_are_consumed():
    player = Player(x=100.0, y=300.0)
    boss = boss_at(hp=3)
    cx, cy = boss.center
    player_bullets = [shot_at(cx, cy), shot_at(500, 300)]
    events = resolve_combat(player, boss, player_bullets, [], W, H)
    assert events.boss_hits == 1
    assert boss.hp == 2
    assert not events.boss_defeated
    assert len(player_bullets) == 1
    assert player_bullets[0].x == 500


def test_boss_hp_never_goes_below_zero():
    player = Player(x=100.0, y=300.0)
    boss = boss_at(hp=3)
    cx, cy = boss.center
    player_bullets = [shot_at(cx, cy) for _ in range(5)]
    events = resolve_combat(player, boss, player_bullets, [], W, H)
    assert boss.hp == 0
    assert events.boss_hits == 3
    assert events.boss_defeated
    # Leftover bullets are not consumed by a dead boss
    assert len(player_bullets) == 2


def test_already_defeated_boss_is_not_reported_again():
    player = Player(x=100.0, y=300.0)
    boss = boss_at(hp=0)
    cx, cy = boss.center
    events = resolve_combat(player, boss, [shot_at(cx, cy)], [], W, H)
    assert events.boss_hits == 0
    assert not events.boss_defeated
    assert boss.hp == 0


def test_player_hit_takes_precedence_over_boss_kill():
    player = Player(x=100.0, y=300.0)
    boss = boss_at(hp=1)
    cx, cy = boss.center
    events = resolve_combat(
        player, boss,
        [shot_at(cx, cy)],
        [shot_at(105, 305, owner=Owner.BOSS)],
        W, H,
    )
    assert events.player_hit
    assert not events.boss_defeated
    assert boss.hp == 1


def test_projectiles_are_moved_before_collision_tests():
    player = Player(x=100.0, y=300.0)
    boss = boss_at()
    # Starts clear of the player, lands on it after one step
    bullet = shot_at(105, 290, owner=Owner.BOSS, vy=10.0, radius=1.0)
    events = resolve_combat(player, boss, [], [bullet], W, H)
    assert bullet.y == pytest.approx(300.0)
    assert events.player_hit
