# pathdemo/geom.py
from __future__ import annotations

import math
from typing import Tuple

Vec2 = Tuple[float, float]


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(v: Vec2, k: float) -> Vec2:
    return (v[0] * k, v[1] * k)


def vec_norm(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def distance(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def as_point(p) -> Vec2:
    """Coerce any 2-sequence (tuple, list, pygame.Vector2) into a float tuple."""
    return (float(p[0]), float(p[1]))


def is_finite_point(p: Vec2) -> bool:
    return math.isfinite(p[0]) and math.isfinite(p[1])
