"""
Particle bursts
"""

import random
from typing import List, Tuple

from .entities import Particle


# size class -> (size multiplier, speed multiplier)
BURST_SIZES = {
    "small": (0.5, 0.7),
    "medium": (1.0, 1.0),
    "large": (1.5, 1.3),
}


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """'#ff4444' -> (255, 68, 68)"""
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def create_burst(
    particles: List[Particle],
    x: float,
    y: float,
    count: int,
    color: str,
    size: str = "medium",
    rng: random.Random = random,
) -> List[Particle]:
    """Append `count` particles scattered around (x, y) and return them"""
    size_mul, speed_mul = BURST_SIZES[size]
    rgb = hex_to_rgb(color)

    burst = []
    for _ in range(count):
        burst.append(Particle(
            x=x + (rng.random() - 0.5) * 10,
            y=y + (rng.random() - 0.5) * 10,
            vx=(rng.random() - 0.5) * 8 * speed_mul,
            vy=(rng.random() - 0.5) * 8 * speed_mul,
            life=800 + rng.random() * 400,
            color=rgb,
            size=(rng.random() * 3 + 2) * size_mul,
        ))
    particles.extend(burst)
    return burst


def cap_particles(particles: List[Particle], max_particles: int) -> List[Particle]:
    """Keep only the newest `max_particles` particles"""
    if max_particles <= 0:
        return []
    if len(particles) > max_particles:
        return particles[-max_particles:]
    return particles
