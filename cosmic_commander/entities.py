"""
Game entity dataclasses and per-kind behaviour tables

Coordinates are canvas coordinates: origin top-left, y grows downward.
Timers are in milliseconds.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


Rect = Tuple[float, float, float, float]  # x, y, width, height


@dataclass(frozen=True)
class EnemySpec:
    """Behaviour table row for an enemy kind"""
    band: float  # upper bound of the cumulative probability band
    width: float
    height: float
    speed_range: Tuple[float, float]
    health: int
    shoot_interval: Tuple[float, float]  # ms
    points: int
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class ObstacleSpec:
    """Behaviour table row for an obstacle kind"""
    band: float
    size_range: Tuple[float, float]
    speed_range: Tuple[float, float]
    health: int
    max_rotation_speed: float
    points: int
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class PowerupSpec:
    """Behaviour table row for a powerup kind"""
    band: float
    size: float
    speed: float
    color: Tuple[int, int, int]


class EnemyKind(Enum):
    BASIC = EnemySpec(0.7, 45, 35, (2.0, 3.0), 1, (2000, 4000), 10, (255, 68, 68))
    ADVANCED = EnemySpec(0.9, 55, 45, (1.5, 2.5), 2, (2500, 4500), 10, (255, 102, 102))
    BOSS = EnemySpec(1.0, 75, 60, (0.8, 1.5), 3, (3000, 5000), 10, (255, 136, 136))

    @property
    def spec(self) -> EnemySpec:
        return self.value


class ObstacleKind(Enum):
    SMALL = ObstacleSpec(0.6, (35, 60), (3.0, 5.0), 2, 0.04, 5, (140, 130, 120))
    MEDIUM = ObstacleSpec(0.85, (50, 70), (2.0, 3.5), 3, 0.03, 5, (120, 110, 100))
    LARGE = ObstacleSpec(1.0, (70, 100), (1.0, 2.0), 5, 0.02, 5, (150, 90, 60))

    @property
    def spec(self) -> ObstacleSpec:
        return self.value


class PowerupKind(Enum):
    STAR = PowerupSpec(0.6, 25, 1.5, (255, 220, 60))
    HEART = PowerupSpec(1.0, 20, 1.5, (255, 70, 110))

    @property
    def spec(self) -> PowerupSpec:
        return self.value


class BulletKind(Enum):
    NORMAL = "normal"
    DOUBLE = "double"


def pick_kind(kinds, roll: float):
    """Map a uniform roll in [0, 1) onto the first kind whose band contains it"""
    for kind in kinds:
        if roll < kind.spec.band:
            return kind
    return list(kinds)[-1]


@dataclass
class Player:
    """Player ship"""
    x: float
    y: float
    width: float = 50.0
    height: float = 60.0
    speed: float = 5.5
    health: int = 3
    max_health: int = 3
    last_shot_time: float = -math.inf
    shoot_cooldown_ms: float = 250.0
    invulnerable: bool = False
    invulnerable_ms: float = 0.0
    thrust_phase: float = 0.0  # cosmetic

    @classmethod
    def spawn(cls, canvas_width: float, canvas_height: float, **kwargs) -> "Player":
        """Create a player centred near the bottom of the canvas"""
        player = cls(x=0.0, y=0.0, **kwargs)
        player.x = canvas_width / 2 - player.width / 2
        player.y = canvas_height - 120
        return player

    @property
    def rect(self) -> Rect:
        return self.x, self.y, self.width, self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Bullet:
    """Player projectile, travels upward"""
    x: float
    y: float
    width: float = 6.0
    height: float = 18.0
    speed: float = 7.0
    damage: int = 1
    kind: BulletKind = BulletKind.NORMAL

    @property
    def rect(self) -> Rect:
        return self.x, self.y, self.width, self.height


@dataclass
class EnemyBullet:
    """Enemy projectile, travels downward"""
    x: float
    y: float
    width: float = 4.0
    height: float = 12.0
    speed: float = 5.0
    damage: int = 1

    @property
    def rect(self) -> Rect:
        return self.x, self.y, self.width, self.height


@dataclass
class Enemy:
    """Alien ship descending the screen"""
    x: float
    y: float
    width: float
    height: float
    speed: float
    health: int
    kind: EnemyKind = EnemyKind.BASIC
    shoot_timer: float = 2000.0

    @property
    def rect(self) -> Rect:
        return self.x, self.y, self.width, self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Obstacle:
    """Asteroid with a square bounding box"""
    x: float
    y: float
    size: float
    speed: float
    health: int
    kind: ObstacleKind = ObstacleKind.SMALL
    rotation: float = 0.0
    rotation_speed: float = 0.0

    @property
    def rect(self) -> Rect:
        return self.x, self.y, self.size, self.size

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.size / 2, self.y + self.size / 2


@dataclass
class Powerup:
    """Collectible pickup"""
    x: float
    y: float
    size: float
    speed: float
    kind: PowerupKind = PowerupKind.STAR
    rotation: float = 0.0
    pulse: float = 0.0  # cosmetic

    @property
    def rect(self) -> Rect:
        return self.x, self.y, self.size, self.size

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.size / 2, self.y + self.size / 2


@dataclass
class Particle:
    """Short-lived visual effect square"""
    x: float
    y: float
    vx: float
    vy: float
    life: float  # ms left
    color: Tuple[int, int, int]
    size: float
    max_life: float = 1200.0

    @property
    def alpha(self) -> float:
        return max(0.0, self.life / self.max_life)


@dataclass
class Star:
    """Background star"""
    x: float
    y: float
    speed: float
    size: float
    twinkle: float = 0.0

    @property
    def opacity(self) -> float:
        return 0.5 + math.sin(self.twinkle) * 0.5
