import math
import random

import numpy as np
import pytest

from game.barrage.utils import (
    clamp, vec_len, normalize, point_in_rect, rect_overlap,
    circle_collide, circle_rect_collide, seed_everything,
)


def test_clamp():
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10
    assert clamp(5.5, 0, 10) == 5.5


def test_normalize_unit_and_zero():
    x, y = normalize(3.0, 4.0)
    assert vec_len(x, y) == pytest.approx(1.0)
    assert (x, y) == pytest.approx((0.6, 0.8))
    assert normalize(0.0, 0.0) == (0.0, 0.0)


def test_point_in_rect_includes_edges():
    assert point_in_rect(0, 0, 0, 0, 10, 10)
    assert point_in_rect(10, 10, 0, 0, 10, 10)
    assert not point_in_rect(10.01, 5, 0, 0, 10, 10)


def test_rect_overlap_touching_edges_do_not_count():
    assert rect_overlap(0, 0, 10, 10, 5, 5, 10, 10)
    assert not rect_overlap(0, 0, 10, 10, 10, 0, 10, 10)


def test_circle_collide():
    assert circle_collide(0, 0, 1, 2, 0, 1)
    assert not circle_collide(0, 0, 1, 2.01, 0, 1)


def test_circle_rect_collide_sides_and_corners():
    # side
    assert circle_rect_collide(-2, 5, 2, 0, 0, 10, 10)
    assert not circle_rect_collide(-2.1, 5, 2, 0, 0, 10, 10)
    # corner: distance to (0, 0) is sqrt(2) * 1.5 > 2
    assert not circle_rect_collide(-1.5, -1.5, 2, 0, 0, 10, 10)
    assert circle_rect_collide(-1.0, -1.0, 2, 0, 0, 10, 10)
    # centre inside
    assert circle_rect_collide(5, 5, 0.1, 0, 0, 10, 10)


def test_seed_everything_is_reproducible():
    seed_everything(7)
    a = (random.random(), np.random.rand())
    seed_everything(7)
    b = (random.random(), np.random.rand())
    assert a == b
    # None leaves generators alone
    seed_everything(None)
    assert not math.isnan(random.random())
