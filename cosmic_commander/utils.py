"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional, Tuple
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def clamp_elapsed(elapsed_ms, lo: float, hi: float) -> float:
    """Clamp a frame time into [lo, hi]; NaN, negative or junk input maps to lo"""
    try:
        value = float(elapsed_ms)
    except (TypeError, ValueError):
        return lo
    if math.isnan(value) or value < 0:
        return lo
    return clamp(value, lo, hi)


def rects_overlap(
    a: Tuple[float, float, float, float],
    b: Tuple[float, float, float, float],
    padding: float = 0.0,
) -> bool:
    """Check if rect a overlaps rect b, with b grown by padding on every side"""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    bx -= padding
    by -= padding
    bw += padding * 2
    bh += padding * 2
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def format_time(seconds: int) -> str:
    """Format whole seconds as m:ss"""
    minutes, rest = divmod(int(seconds), 60)
    return f"{minutes}:{rest:02d}"


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
