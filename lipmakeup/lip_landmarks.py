# ==========================================
# LIP SELECTION MODULE
# - 68-point landmark convention (mouth = 48..67)
# - Outer lip split into upper / lower polygons
# ==========================================

import json
from typing import NamedTuple

import numpy as np

from lipmakeup.errors import InsufficientLandmarks

MOUTH_START = 48
MOUTH_END = 68

# outer lip: first 7 points = upper, points 6..11 = lower (shares the corner point)
UPPER_LIP_SLICE = slice(0, 7)
LOWER_LIP_SLICE = slice(6, 12)
MIN_MOUTH_POINTS = 12


class Point2D(NamedTuple):
    x: float
    y: float


def as_polygon(points):
    """
    points : Point2D / (x, y) pairs / Nx2 array / objects with .x and .y
    return : (N, 2) float64 array
    """
    pts = []
    for p in points:
        if hasattr(p, "x") and hasattr(p, "y"):
            pts.append((float(p.x), float(p.y)))
        elif isinstance(p, dict):
            pts.append((float(p["x"]), float(p["y"])))
        else:
            x, y = p
            pts.append((float(x), float(y)))
    return np.array(pts, dtype=np.float64).reshape(-1, 2)


def split_mouth(mouth_points):
    """
    return:
      upper_poly (first 7 points)
      lower_poly (points 6..11)
    """
    mouth = as_polygon(mouth_points)
    if len(mouth) < MIN_MOUTH_POINTS:
        raise InsufficientLandmarks(
            f"Need at least {MIN_MOUTH_POINTS} mouth points, got {len(mouth)}"
        )
    return mouth[UPPER_LIP_SLICE], mouth[LOWER_LIP_SLICE]


def mouth_from_landmarks68(landmarks):
    pts = as_polygon(landmarks)
    if len(pts) != MOUTH_END:
        raise InsufficientLandmarks(
            f"Expected {MOUTH_END} facial landmarks, got {len(pts)}"
        )
    return pts[MOUTH_START:MOUTH_END]


def mouth_bounds(mouth_points):
    """(left, top, right, bottom) of the mouth points, unrounded."""
    pts = as_polygon(mouth_points)
    if len(pts) == 0:
        raise InsufficientLandmarks("No mouth points given")
    left, top = pts.min(axis=0)
    right, bottom = pts.max(axis=0)
    return float(left), float(top), float(right), float(bottom)


def load_landmarks(path):
    """
    JSON list of [x, y] or {"x": .., "y": ..}.
    A full 68-point face is reduced to its mouth.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("mouth", data.get("landmarks", []))

    pts = as_polygon(data)
    if len(pts) == MOUTH_END:
        return mouth_from_landmarks68(pts)
    return pts
