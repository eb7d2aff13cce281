"""
Timer-driven spawning of enemies, obstacles and powerups
"""

import logging
import random
from typing import Optional

from .entities import (
    Enemy, EnemyKind, Obstacle, ObstacleKind, Powerup, PowerupKind, pick_kind,
)

logger = logging.getLogger(__name__)

# Horizontal sections used to spread enemies across the canvas
N_SECTIONS = 5


class Spawner:
    """
    Accumulates elapsed simulation time per category and spawns one entity
    each time a category's accumulator exceeds its interval.
    """

    def __init__(
        self,
        enemy_interval: float = 1500.0,
        enemy_timer_rate: float = 2.0,
        obstacle_interval: float = 3000.0,
        powerup_interval: float = 12000.0,
        max_enemies: int = 8,
        rng: Optional[random.Random] = None,
    ):
        self.enemy_interval = enemy_interval
        self.enemy_timer_rate = enemy_timer_rate
        self.obstacle_interval = obstacle_interval
        self.powerup_interval = powerup_interval
        self.max_enemies = max_enemies
        self.rng = rng or random.Random()

        self.enemy_timer = 0.0
        self.obstacle_timer = 0.0
        self.powerup_timer = 0.0

    def reset(self):
        self.enemy_timer = 0.0
        self.obstacle_timer = 0.0
        self.powerup_timer = 0.0

    def update(self, world, dt: float):
        """Advance all accumulators by dt and spawn into the world's collections"""
        self.enemy_timer += dt * self.enemy_timer_rate
        if self.enemy_timer > self.enemy_interval:
            self.enemy_timer = 0.0
            if len(world.enemies) < self.max_enemies:
                world.enemies.append(self.create_enemy(world.width))
                logger.debug("Spawned enemy (%d alive)", len(world.enemies))

        self.obstacle_timer += dt
        if self.obstacle_timer > self.obstacle_interval:
            self.obstacle_timer = 0.0
            world.obstacles.append(self.create_obstacle(world.width))

        self.powerup_timer += dt
        if self.powerup_timer > self.powerup_interval:
            self.powerup_timer = 0.0
            world.powerups.append(self.create_powerup(world.width))

    def force_enemy_spawn(self, world) -> Enemy:
        """Spawn one enemy immediately, bypassing the accumulator"""
        enemy = self.create_enemy(world.width)
        world.enemies.append(enemy)
        return enemy

    # ----------------------------
    # Factories
    # ----------------------------

    def create_enemy(self, canvas_width: float, roll: Optional[float] = None) -> Enemy:
        if roll is None:
            roll = self.rng.random()
        kind = pick_kind(EnemyKind, roll)
        spec = kind.spec

        # Pick one of the sections, then an offset inside it
        section = self.rng.randrange(N_SECTIONS)
        section_width = canvas_width / N_SECTIONS
        x = section * section_width + self.rng.random() * max(0.0, section_width - spec.width)

        return Enemy(
            x=x,
            y=-spec.height - 15,
            width=spec.width,
            height=spec.height,
            speed=self.rng.uniform(*spec.speed_range),
            health=spec.health,
            kind=kind,
            shoot_timer=self.rng.uniform(*spec.shoot_interval),
        )

    def create_obstacle(self, canvas_width: float, roll: Optional[float] = None) -> Obstacle:
        if roll is None:
            roll = self.rng.random()
        kind = pick_kind(ObstacleKind, roll)
        spec = kind.spec

        size = self.rng.uniform(*spec.size_range)
        return Obstacle(
            x=self.rng.random() * max(0.0, canvas_width - size),
            y=-size,
            size=size,
            speed=self.rng.uniform(*spec.speed_range),
            health=spec.health,
            kind=kind,
            rotation_speed=self.rng.uniform(-spec.max_rotation_speed, spec.max_rotation_speed),
        )

    def create_powerup(self, canvas_width: float, roll: Optional[float] = None) -> Powerup:
        if roll is None:
            roll = self.rng.random()
        kind = pick_kind(PowerupKind, roll)
        spec = kind.spec

        return Powerup(
            x=self.rng.random() * max(0.0, canvas_width - spec.size),
            y=-spec.size,
            size=spec.size,
            speed=spec.speed,
            kind=kind,
        )
