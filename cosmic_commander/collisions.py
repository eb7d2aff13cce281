"""
Collision detection and combat resolution
"""

from typing import List

from .effects import create_burst
from .entities import PowerupKind
from .events import CombatEvents
from .utils import rects_overlap


class CollisionResolver:
    """
    Resolves one tick of hits between bullets, enemies, obstacles, powerups
    and the player. Score credit and damage are reported to the event sink.
    """

    def __init__(
        self,
        events: CombatEvents,
        hit_padding: float = 20.0,
        invulnerability_ms: float = 2000.0,
        double_shot_ms: float = 10000.0,
        powerup_points: int = 10,
    ):
        self.events = events
        self.hit_padding = hit_padding
        self.invulnerability_ms = invulnerability_ms
        self.double_shot_ms = double_shot_ms
        self.powerup_points = powerup_points

    def resolve(self, world):
        self._bullets_vs_enemies(world)
        self._bullets_vs_obstacles(world)
        self._player_vs_hostiles(world)
        # Nothing is collected after the lethal hit
        if world.game_over:
            return
        self._player_vs_powerups(world)

    # ----------------------------
    # Bullets
    # ----------------------------

    def _first_hit(self, bullet, targets: List, dead: set):
        for target in targets:
            if id(target) in dead:
                continue
            if rects_overlap(bullet.rect, target.rect, self.hit_padding):
                return target
        return None

    def _bullets_vs_enemies(self, world):
        dead = set()
        remaining = []
        for bullet in world.bullets:
            enemy = self._first_hit(bullet, world.enemies, dead)
            if enemy is None:
                remaining.append(bullet)
                continue

            enemy.health -= 1
            cx, cy = enemy.center
            create_burst(world.particles, cx, cy, 6, "#ffaa00", "medium", world.rng)
            self.events.bullet_hit(enemy)

            if enemy.health <= 0:
                dead.add(id(enemy))
                create_burst(world.particles, cx, cy, 12, "#ff4444", "large", world.rng)
                points = enemy.kind.spec.points * self.events.current_combo()
                self.events.enemy_destroyed(enemy, points)

        world.bullets = remaining
        world.enemies = [e for e in world.enemies if id(e) not in dead]

    def _bullets_vs_obstacles(self, world):
        dead = set()
        remaining = []
        for bullet in world.bullets:
            obstacle = self._first_hit(bullet, world.obstacles, dead)
            if obstacle is None:
                remaining.append(bullet)
                continue

            obstacle.health -= 1
            cx, cy = obstacle.center
            create_burst(world.particles, cx, cy, 4, "#999999", "small", world.rng)
            self.events.bullet_hit(obstacle)

            if obstacle.health <= 0:
                dead.add(id(obstacle))
                create_burst(world.particles, cx, cy, 8, "#666666", "medium", world.rng)
                self.events.obstacle_destroyed(obstacle, obstacle.kind.spec.points)

        world.bullets = remaining
        world.obstacles = [o for o in world.obstacles if id(o) not in dead]

    # ----------------------------
    # Player
    # ----------------------------

    def _player_vs_hostiles(self, world):
        player = world.player
        if player is None:
            return

        # Enemies and enemy bullets are consumed by the hit, obstacles persist
        survivors = []
        for enemy in world.enemies:
            if not player.invulnerable and rects_overlap(player.rect, enemy.rect):
                self.damage_player(world)
            else:
                survivors.append(enemy)
        world.enemies = survivors

        for obstacle in world.obstacles:
            if not player.invulnerable and rects_overlap(player.rect, obstacle.rect):
                self.damage_player(world)

        survivors = []
        for bullet in world.enemy_bullets:
            if not player.invulnerable and rects_overlap(player.rect, bullet.rect):
                self.damage_player(world)
            else:
                survivors.append(bullet)
        world.enemy_bullets = survivors

    def damage_player(self, world):
        player = world.player
        if player is None or player.invulnerable:
            return

        player.health -= 1
        player.invulnerable = True
        player.invulnerable_ms = self.invulnerability_ms

        cx, cy = player.center
        create_burst(world.particles, cx, cy, 15, "#ff4444", "large", world.rng)
        self.events.player_damaged(player.health)

        if player.health <= 0 and not world.game_over:
            world.game_over = True
            self.events.game_over()

    def _player_vs_powerups(self, world):
        player = world.player
        if player is None:
            return

        remaining = []
        for powerup in world.powerups:
            if rects_overlap(player.rect, powerup.rect):
                self.collect_powerup(world, powerup)
            else:
                remaining.append(powerup)
        world.powerups = remaining

    def collect_powerup(self, world, powerup):
        player = world.player
        cx, cy = powerup.center
        create_burst(world.particles, cx, cy, 8, "#00ff88", "medium", world.rng)

        if powerup.kind is PowerupKind.STAR:
            world.double_shot = True
            world.double_shot_ms = self.double_shot_ms
        elif powerup.kind is PowerupKind.HEART:
            if player.health < player.max_health:
                player.health += 1
                self.events.player_healed(player.health)

        self.events.powerup_collected(powerup, self.powerup_points)
