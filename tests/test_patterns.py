import math
import random

import pytest

from game.barrage.constants import AUTOFIRE_INTERVAL
from game.barrage.difficulty import derive_boss_config
from game.barrage.entities import Boss, Player, Owner
from game.barrage.patterns import radial_pattern, emit_boss_pattern, ambient_pattern, autofire


def make_boss(cfg, **kw):
    return Boss(x=100.0, y=50.0, hp=cfg.hp, max_hp=cfg.hp,
                shot_interval=cfg.shot_interval, speed=cfg.boss_speed, **kw)


@pytest.mark.parametrize("count,speed", [(12, 3.0), (16, 4.0), (24, 4.0), (7, 1.5)])
def test_radial_pattern_is_evenly_spaced(count, speed):
    bullets = radial_pattern(10.0, 20.0, count, speed)
    assert len(bullets) == count

    step = 2 * math.pi / count
    for i, b in enumerate(bullets):
        assert (b.x, b.y) == (10.0, 20.0)
        assert math.hypot(b.vx, b.vy) == pytest.approx(speed)
        ang = math.atan2(b.vy, b.vx) % (2 * math.pi)
        expected = (i * step) % (2 * math.pi)
        diff = min(abs(ang - expected), 2 * math.pi - abs(ang - expected))
        assert diff == pytest.approx(0.0, abs=1e-9)
        assert b.owner is Owner.BOSS


def test_boss_pattern_respects_interval():
    cfg = derive_boss_config(0)
    boss = make_boss(cfg, last_shot=1000.0)

    assert emit_boss_pattern(boss, cfg, 1000.0 + cfg.shot_interval) == []
    assert boss.last_shot == 1000.0

    now = 1000.0 + cfg.shot_interval + 1
    bullets = emit_boss_pattern(boss, cfg, now)
    assert len(bullets) == cfg.bullet_count
    assert boss.last_shot == now
    cx, cy = boss.center
    assert all((b.x, b.y) == (cx, cy) for b in bullets)
    assert all(math.hypot(b.vx, b.vy) == pytest.approx(cfg.bullet_speed) for b in bullets)


def test_defeated_boss_does_not_fire():
    cfg = derive_boss_config(0)
    boss = make_boss(cfg, last_shot=0.0)
    boss.hp = 0
    assert emit_boss_pattern(boss, cfg, 10_000.0) == []
    assert boss.last_shot == 0.0


def test_hard_boss_fires_the_larger_pattern():
    cfg = derive_boss_config(4)
    boss = make_boss(cfg, last_shot=0.0)
    bullets = emit_boss_pattern(boss, cfg, 10_000.0)
    assert len(bullets) == cfg.bullet_count == 24


def test_ambient_pattern_starts_on_top_edge():
    bullets = ambient_pattern(600, random.Random(5))
    assert len(bullets) == 12
    x0 = bullets[0].x
    assert 0 <= x0 <= 600
    assert all(b.y == 0.0 and b.x == x0 for b in bullets)
    assert all(math.hypot(b.vx, b.vy) == pytest.approx(2.0) for b in bullets)


def test_autofire_cadence():
    p = Player(x=100.0, y=200.0, last_fire=0.0)
    assert autofire(p, AUTOFIRE_INTERVAL - 1) is None

    shot = autofire(p, AUTOFIRE_INTERVAL)
    assert shot is not None
    assert shot.owner is Owner.PLAYER
    assert shot.vy < 0 and shot.vx == 0
    assert shot.x == pytest.approx(p.x + p.size / 2)
    assert p.last_fire == AUTOFIRE_INTERVAL

    assert autofire(p, AUTOFIRE_INTERVAL + 50) is None
