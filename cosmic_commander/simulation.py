"""
World - the simulation state and its per-tick update
----------------------------------------------------
- Owns every entity collection (player, bullets, enemies, obstacles, ...)
- step() advances the world by one clamped frame time, in a fixed order:
    player -> motion & timers -> enemy fire -> collisions -> spawners -> cleanup
- Combat outcomes (score credit, damage, game over) go to an injected
  CombatEvents sink, so the world runs headless and under test

Elapsed time is in milliseconds; velocities are scaled by per-collection
factors from MOTION_FACTORS.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional

from .collisions import CollisionResolver
from .configs.game_config import ENGINE_CONFIG, MOTION_FACTORS, SPAWN_CONFIG
from .effects import cap_particles, create_burst
from .entities import (
    Bullet, BulletKind, Enemy, EnemyBullet, Obstacle, Particle, Player, Powerup, Star,
)
from .events import CombatEvents
from .spawner import Spawner
from .utils import clamp, clamp_elapsed


@dataclass(frozen=True)
class InputSnapshot:
    """Input held during one tick (keyboard and touch buttons merged)"""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    fire: bool = False

    @property
    def horizontal(self) -> int:
        return int(self.right) - int(self.left)

    @property
    def vertical(self) -> int:
        return int(self.down) - int(self.up)

    def merge(self, other: Optional["InputSnapshot"]) -> "InputSnapshot":
        if other is None:
            return self
        return InputSnapshot(
            left=self.left or other.left,
            right=self.right or other.right,
            up=self.up or other.up,
            down=self.down or other.down,
            fire=self.fire or other.fire,
        )


NO_INPUT = InputSnapshot()


class World:
    """Game world state and simulation step"""

    def __init__(
        self,
        width: int = ENGINE_CONFIG["width"],
        height: int = ENGINE_CONFIG["height"],
        time_scale: float = ENGINE_CONFIG["time_scale"],
        min_dt: float = ENGINE_CONFIG["min_dt"],
        max_dt: float = ENGINE_CONFIG["max_dt"],
        max_particles: int = ENGINE_CONFIG["max_particles"],
        cleanup_interval_ms: float = ENGINE_CONFIG["cleanup_interval_ms"],
        hit_padding: float = ENGINE_CONFIG["hit_padding"],
        invulnerability_ms: float = ENGINE_CONFIG["invulnerability_ms"],
        double_shot_ms: float = ENGINE_CONFIG["double_shot_ms"],
        powerup_points: int = ENGINE_CONFIG["powerup_points"],
        n_stars: int = ENGINE_CONFIG["n_stars"],
        events: Optional[CombatEvents] = None,
        spawn_config: Optional[dict] = None,
        motion_factors: Optional[dict] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        # Arena
        self.width = width
        self.height = height

        # Timing
        self.time_scale = time_scale
        self.min_dt = min_dt
        self.max_dt = max_dt
        self.cleanup_interval_ms = cleanup_interval_ms
        self.max_particles = max_particles
        self.motion = {**MOTION_FACTORS, **(motion_factors or {})}

        self.rng = rng or random.Random(seed)
        self.events = events or CombatEvents()
        self.spawner = Spawner(rng=self.rng, **{**SPAWN_CONFIG, **(spawn_config or {})})
        self.collisions = CollisionResolver(
            self.events,
            hit_padding=hit_padding,
            invulnerability_ms=invulnerability_ms,
            double_shot_ms=double_shot_ms,
            powerup_points=powerup_points,
        )

        # World state
        self.player: Optional[Player] = None
        self.bullets: List[Bullet] = []
        self.enemy_bullets: List[EnemyBullet] = []
        self.enemies: List[Enemy] = []
        self.obstacles: List[Obstacle] = []
        self.powerups: List[Powerup] = []
        self.particles: List[Particle] = []
        self.stars: List[Star] = []

        self.double_shot = False
        self.double_shot_ms = 0.0
        self.game_speed = 1.0  # hostile motion multiplier, raised per level
        self.game_over = False
        self.pending_enemies = 0

        self.time_ms = 0.0
        self.tick = 0
        self._cleanup_timer = 0.0

        self._setup_star_field(n_stars)
        self.reset()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def _setup_star_field(self, n_stars: int):
        self.stars = []
        for _ in range(n_stars):
            self.stars.append(Star(
                x=self.rng.random() * self.width,
                y=self.rng.random() * self.height,
                speed=self.rng.random() * 3 + 1,
                size=self.rng.random() * 2 + 0.5,
                twinkle=self.rng.random() * math.pi * 2,
            ))

    def reset_player(self):
        self.player = Player.spawn(self.width, self.height)

    def reset(self):
        """Clear every transient collection and timer and rebuild the player"""
        self.bullets = []
        self.enemy_bullets = []
        self.enemies = []
        self.obstacles = []
        self.powerups = []
        self.particles = []
        self.spawner.reset()

        self.double_shot = False
        self.double_shot_ms = 0.0
        self.game_speed = 1.0
        self.game_over = False
        self.pending_enemies = 0

        self.time_ms = 0.0
        self.tick = 0
        self._cleanup_timer = 0.0
        self.reset_player()

    def queue_enemies(self, count: int):
        """Spawn `count` extra enemies at the start of the next spawn phase"""
        self.pending_enemies += count

    def clamp_dt(self, elapsed_ms) -> float:
        return clamp_elapsed(elapsed_ms, self.min_dt, self.max_dt)

    # ----------------------------
    # Step
    # ----------------------------

    def step(self, elapsed_ms, inputs: Optional[InputSnapshot] = None):
        """Advance the world by one tick of (clamped) elapsed time"""
        if self.game_over:
            return

        dt = self.clamp_dt(elapsed_ms) * self.time_scale
        inputs = inputs or NO_INPUT
        self.time_ms += dt

        self._update_player(dt, inputs)
        self._update_bullets(dt)
        self._update_enemy_bullets(dt)
        self._update_enemies(dt)
        self._update_obstacles(dt)
        self._update_powerups(dt)
        self._update_particles(dt)
        self._update_stars(dt)
        self._update_timers(dt)

        self._enemy_fire()
        self.collisions.resolve(self)
        # Round ended this tick, nothing spawns after the final hit
        if self.game_over:
            self.tick += 1
            return

        self._spawn_pending()
        self.spawner.update(self, dt)

        self._drop_offscreen()
        self._cleanup_timer += dt
        if self._cleanup_timer > self.cleanup_interval_ms:
            self.cleanup()
            self._cleanup_timer = 0.0

        self.tick += 1

    def _update_player(self, dt: float, inputs: InputSnapshot):
        p = self.player
        if p is None:
            return

        if p.invulnerable:
            p.invulnerable_ms -= dt
            if p.invulnerable_ms <= 0:
                p.invulnerable = False
                p.invulnerable_ms = 0.0

        move = p.speed * dt * self.motion["player"]
        p.x += inputs.horizontal * move
        p.y += inputs.vertical * move

        # Keep in bounds
        p.x = clamp(p.x, 0.0, self.width - p.width)
        p.y = clamp(p.y, 0.0, self.height - p.height)

        p.thrust_phase += dt * 0.02

        if inputs.fire:
            self.shoot()

    def shoot(self) -> List[Bullet]:
        """Fire if the cooldown has elapsed; returns the bullets created"""
        p = self.player
        if p is None or self.game_over:
            return []
        if self.time_ms - p.last_shot_time < p.shoot_cooldown_ms:
            return []

        center_x = p.x + p.width / 2
        start_y = p.y

        if self.double_shot:
            shots = [
                Bullet(x=center_x - 15, y=start_y, height=20.0, speed=10.0, kind=BulletKind.DOUBLE),
                Bullet(x=center_x + 9, y=start_y, height=20.0, speed=10.0, kind=BulletKind.DOUBLE),
            ]
        else:
            shots = [Bullet(x=center_x - 3, y=start_y)]

        self.bullets.extend(shots)
        p.last_shot_time = self.time_ms

        # Muzzle flash
        create_burst(self.particles, center_x, start_y, 3, "#00d4ff", "small", self.rng)
        self.events.shot_fired(len(shots))
        return shots

    def _update_bullets(self, dt: float):
        factor = dt * self.motion["bullet"]
        for b in self.bullets:
            b.y -= b.speed * factor

    def _update_enemy_bullets(self, dt: float):
        factor = dt * self.motion["enemy_bullet"] * self.game_speed
        for b in self.enemy_bullets:
            b.y += b.speed * factor

    def _update_enemies(self, dt: float):
        factor = dt * self.motion["enemy"] * self.game_speed
        for e in self.enemies:
            e.y += e.speed * factor
            e.shoot_timer -= dt

    def _update_obstacles(self, dt: float):
        factor = dt * self.motion["obstacle"] * self.game_speed
        for o in self.obstacles:
            o.y += o.speed * factor
            o.rotation += o.rotation_speed * dt * 0.1

    def _update_powerups(self, dt: float):
        factor = dt * self.motion["powerup"]
        for pu in self.powerups:
            pu.y += pu.speed * factor
            pu.rotation += 0.05 * dt * 0.1
            pu.pulse += dt * 0.01

    def _update_particles(self, dt: float):
        factor = dt * self.motion["particle"]
        for pt in self.particles:
            pt.x += pt.vx * factor
            pt.y += pt.vy * factor
            pt.life -= dt

    def _update_stars(self, dt: float):
        factor = dt * self.motion["star"]
        for s in self.stars:
            s.y += s.speed * factor
            s.twinkle += dt * 0.1 / 16
            if s.y > self.height:
                s.y = -5.0
                s.x = self.rng.random() * self.width

    def _update_timers(self, dt: float):
        if self.double_shot:
            self.double_shot_ms -= dt
            if self.double_shot_ms <= 0:
                self.double_shot = False
                self.double_shot_ms = 0.0

    def _enemy_fire(self):
        for e in self.enemies:
            if e.shoot_timer <= 0 and 50 < e.y < self.height - 100:
                self.enemy_bullets.append(EnemyBullet(
                    x=e.x + e.width / 2 - 2,
                    y=e.y + e.height,
                ))
                e.shoot_timer = self.rng.uniform(*e.kind.spec.shoot_interval)

    def _spawn_pending(self):
        while self.pending_enemies > 0:
            self.pending_enemies -= 1
            if len(self.enemies) < self.spawner.max_enemies:
                self.spawner.force_enemy_spawn(self)

    # ----------------------------
    # Lifecycle filtering
    # ----------------------------

    def _drop_offscreen(self):
        h = self.height
        self.bullets = [b for b in self.bullets if b.y > -b.height]
        self.enemy_bullets = [b for b in self.enemy_bullets if b.y < h + b.height]
        self.enemies = [e for e in self.enemies if e.y < h + e.height]
        self.obstacles = [o for o in self.obstacles if o.y < h + o.size]
        self.powerups = [pu for pu in self.powerups if pu.y < h + pu.size]
        self.particles = cap_particles(
            [pt for pt in self.particles if pt.life > 0], self.max_particles
        )

    def cleanup(self):
        """Full sweep of everything outside the off-screen margins"""
        h = self.height
        self.enemies = [e for e in self.enemies if -100 < e.y < h + 100]
        self.obstacles = [o for o in self.obstacles if -o.size <= o.y < h + o.size]
        self.powerups = [pu for pu in self.powerups if -50 < pu.y < h + 50]
        self.bullets = [b for b in self.bullets if -b.height < b.y < h]
        self.enemy_bullets = [b for b in self.enemy_bullets if -b.height < b.y < h + b.height]
        self.particles = cap_particles(self.particles, self.max_particles)

    # ----------------------------
    # Info
    # ----------------------------

    def info(self) -> dict:
        p = self.player
        return {
            "health": p.health if p else 0,
            "invulnerable": p.invulnerable if p else False,
            "double_shot": self.double_shot,
            "num_enemies": len(self.enemies),
            "num_obstacles": len(self.obstacles),
            "num_powerups": len(self.powerups),
            "num_bullets": len(self.bullets),
            "num_particles": len(self.particles),
            "tick": self.tick,
            "game_over": self.game_over,
        }
