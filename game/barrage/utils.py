"""
Geometry and collision helpers
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def point_in_rect(px, py, rx, ry, rw, rh) -> bool:
    """Check if a point lies inside (or on the edge of) a rectangle"""
    return rx <= px <= rx + rw and ry <= py <= ry + rh


def rect_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges do not count)"""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles collide"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) <= (rr * rr)


def circle_rect_collide(cx, cy, r, rx, ry, rw, rh) -> bool:
    """Check if a circle touches a rectangle (closest-point test)"""
    nx = clamp(cx, rx, rx + rw)
    ny = clamp(cy, ry, ry + rh)
    dx = cx - nx
    dy = cy - ny
    return (dx * dx + dy * dy) <= r * r


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
