import pytest

from game.barrage.constants import RAINBOW, BOSS_COLOR
from game.barrage.difficulty import derive_boss_config, is_hard_tier, rainbow_color, boss_color


@pytest.mark.parametrize("n", range(0, 40))
def test_hp_and_hard_tier(n):
    cfg = derive_boss_config(n)
    assert cfg.hp == (n + 1) * 3
    assert cfg.is_hard_tier == ((n + 1) % 5 == 0)
    assert cfg.visual_tier == ("rainbow" if cfg.is_hard_tier else "normal")


def test_hp_strictly_increasing():
    hps = [derive_boss_config(n).hp for n in range(30)]
    assert all(a < b for a, b in zip(hps, hps[1:]))


@pytest.mark.parametrize("n", [n for n in range(40) if not is_hard_tier(n)])
def test_ordinary_tier_ranges(n):
    cfg = derive_boss_config(n)
    assert 800 <= cfg.shot_interval <= 2000
    assert 12 <= cfg.bullet_count <= 20
    assert cfg.bullet_speed == pytest.approx(3.0)


@pytest.mark.parametrize("n", [4, 9, 14, 19, 24])
def test_hard_tier_beats_its_neighbours(n):
    hard = derive_boss_config(n)
    for other in (derive_boss_config(n - 1), derive_boss_config(n + 1)):
        assert hard.bullet_count > other.bullet_count
        assert hard.bullet_speed > other.bullet_speed
        assert hard.shot_interval < other.shot_interval
        assert hard.boss_speed > other.boss_speed


def test_fifth_boss_is_hard():
    assert derive_boss_config(4).is_hard_tier
    assert not derive_boss_config(3).is_hard_tier
    assert not derive_boss_config(5).is_hard_tier


def test_negative_defeat_count_rejected():
    with pytest.raises(ValueError):
        derive_boss_config(-1)


def test_rainbow_cycles_through_seven_colors():
    colors = [rainbow_color(f) for f in range(14)]
    assert colors[:7] == RAINBOW
    assert colors[7:] == RAINBOW
    assert boss_color("normal", 3) == BOSS_COLOR
    assert boss_color("rainbow", 3) == RAINBOW[3]
