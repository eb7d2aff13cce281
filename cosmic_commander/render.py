"""
Arcade render pipeline.
Reads the world and draws it; never writes to it. All animation phases
(twinkle, rotation, pulse, thrust) are advanced by the simulation.
The world uses canvas coordinates (y down); arcade is y up, so every y
goes through _sy().
"""

import math
from typing import Callable, Optional

import arcade

from .entities import BulletKind, EnemyKind, ObstacleKind, PowerupKind


class Renderer:
    """Draws a World into the current arcade window"""

    # Colors
    BG = (4, 0, 20)
    NEBULA_1 = (20, 0, 50)
    NEBULA_2 = (50, 0, 80)
    PLAYER_C = (0, 228, 255)
    PLAYER_FIN_C = (0, 153, 221)
    THRUST_OUTER_C = (255, 204, 0)
    THRUST_INNER_C = (0, 204, 255)
    BULLET_C = (0, 228, 255)
    DOUBLE_BULLET_C = (255, 204, 0)
    ENEMY_BULLET_C = (255, 68, 68)
    ENEMY_GLOW_C = (255, 60, 60)
    HUD_C = (220, 220, 220)
    PAUSE_C = (0, 212, 255)

    def __init__(self, width: int, height: int, hud: Optional[Callable[[], dict]] = None):
        self.width = width
        self.height = height
        self.hud = hud

    def _sy(self, y: float) -> float:
        return self.height - y

    def _rect(self, x, y, w, h, color):
        arcade.draw_lrbt_rectangle_filled(x, x + w, self._sy(y + h), self._sy(y), color)

    def render(self, world, paused: bool = False):
        self.draw_background()
        self.draw_stars(world)
        self.draw_player(world)
        self.draw_bullets(world)
        self.draw_enemies(world)
        self.draw_obstacles(world)
        self.draw_powerups(world)
        self.draw_enemy_bullets(world)
        self.draw_particles(world)
        self.draw_hud(world)
        if paused:
            self.draw_pause_overlay()

    # ----------------------------
    # Layers
    # ----------------------------

    def draw_background(self):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.BG)
        # Two soft nebula glows, faked with stacked translucent circles
        for cx, cy, radius, color, alpha in (
            (0.3, 0.2, 0.8, self.NEBULA_1, 10),
            (0.7, 0.8, 0.6, self.NEBULA_2, 8),
        ):
            for i in range(4, 0, -1):
                arcade.draw_circle_filled(
                    self.width * cx, self._sy(self.height * cy),
                    self.width * radius * i / 4, (*color, alpha),
                )

    def draw_stars(self, world):
        for s in world.stars:
            alpha = int(255 * max(0.0, min(1.0, s.opacity)))
            if s.size > 1.5:
                # Larger stars get a faint tint
                hue = (s.size * 50) % 360
                color = (200 + int(55 * math.cos(math.radians(hue))), 220, 255, alpha)
            else:
                color = (255, 255, 255, alpha)
            arcade.draw_circle_filled(s.x, self._sy(s.y), s.size / 1.5, color)
            if s.size > 2:
                arcade.draw_circle_filled(s.x, self._sy(s.y), s.size, (*color[:3], alpha * 3 // 10))

    def draw_player(self, world):
        p = world.player
        if p is None:
            return

        alpha = 255
        if p.invulnerable:
            alpha = int(255 * (math.sin(world.time_ms * 0.02) * 0.5 + 0.5))

        cx, cy = p.center
        sy = self._sy(cy)
        half_w, half_h = p.width / 2, p.height / 2
        thrust = math.sin(p.thrust_phase) * 3

        # Engine thrust
        arcade.draw_triangle_filled(
            cx - 14, sy - half_h + 5,
            cx, sy - half_h - 20 - thrust,
            cx + 14, sy - half_h + 5,
            (*self.THRUST_OUTER_C, alpha),
        )
        arcade.draw_triangle_filled(
            cx - 7, sy - half_h + 2,
            cx, sy - half_h - 12 - thrust,
            cx + 7, sy - half_h + 2,
            (*self.THRUST_INNER_C, alpha),
        )

        # Hull, nose cone, fins, cockpit
        arcade.draw_triangle_filled(
            cx, sy + half_h,
            cx - p.width / 3, sy - p.height / 3,
            cx + p.width / 3, sy - p.height / 3,
            (*self.PLAYER_C, alpha),
        )
        arcade.draw_triangle_filled(
            cx, sy + half_h,
            cx - 9, sy + p.height / 4,
            cx + 9, sy + p.height / 4,
            (255, 255, 255, alpha),
        )
        arcade.draw_lrbt_rectangle_filled(cx - half_w, cx - half_w + 9, sy - 22, sy, (*self.PLAYER_FIN_C, alpha))
        arcade.draw_lrbt_rectangle_filled(cx + half_w - 9, cx + half_w, sy - 22, sy, (*self.PLAYER_FIN_C, alpha))
        arcade.draw_lrbt_rectangle_filled(cx - 4, cx + 4, sy - 2, sy + 10, (136, 221, 255, alpha))

    def draw_bullets(self, world):
        for b in world.bullets:
            color = self.DOUBLE_BULLET_C if b.kind is BulletKind.DOUBLE else self.BULLET_C
            self._rect(b.x, b.y, b.width, b.height, color)
            # Trail
            self._rect(b.x - 1, b.y + b.height, b.width + 2, 10, (*color, 178))

    def draw_enemy_bullets(self, world):
        for b in world.enemy_bullets:
            self._rect(b.x, b.y, b.width, b.height, self.ENEMY_BULLET_C)
            self._rect(b.x - 1, b.y - 8, b.width + 2, 8, (*self.ENEMY_BULLET_C, 128))

    def draw_enemies(self, world):
        for e in world.enemies:
            cx, cy = e.center
            sy = self._sy(cy)
            color = e.kind.spec.color

            arcade.draw_circle_filled(cx, sy, e.width * 0.8, (*self.ENEMY_GLOW_C, 90))

            if e.kind is EnemyKind.BASIC:
                arcade.draw_ellipse_filled(cx, sy, e.width * 0.9, e.height * 0.7, color)
                arcade.draw_circle_filled(cx - e.width * 0.18, sy + 3, 4, (0, 0, 0))
                arcade.draw_circle_filled(cx + e.width * 0.18, sy + 3, 4, (0, 0, 0))
            elif e.kind is EnemyKind.ADVANCED:
                arcade.draw_lrbt_rectangle_filled(
                    cx - e.width * 0.4, cx + e.width * 0.4,
                    sy - e.height * 0.35, sy + e.height * 0.35, color,
                )
                arcade.draw_triangle_filled(
                    cx - e.width / 2, sy, cx - e.width * 0.4, sy + e.height * 0.35,
                    cx - e.width * 0.4, sy - e.height * 0.35, color,
                )
                arcade.draw_triangle_filled(
                    cx + e.width / 2, sy, cx + e.width * 0.4, sy + e.height * 0.35,
                    cx + e.width * 0.4, sy - e.height * 0.35, color,
                )
            else:
                # Saucer with a golden rim
                arcade.draw_ellipse_filled(cx, sy, e.width, e.height * 0.45, (255, 255, 0, 200))
                arcade.draw_ellipse_filled(cx, sy, e.width * 0.9, e.height * 0.35, color)
                arcade.draw_ellipse_filled(cx, sy + e.height * 0.2, e.width * 0.4, e.height * 0.35, (180, 240, 255))

            # Health pips for multi-hit enemies
            if e.kind.spec.health > 1:
                for i in range(e.health):
                    arcade.draw_lrbt_rectangle_filled(
                        e.x + i * 8, e.x + i * 8 + 6,
                        self._sy(e.y) + 2, self._sy(e.y) + 5, (80, 255, 120),
                    )

    def draw_obstacles(self, world):
        for o in world.obstacles:
            cx, cy = o.center
            sy = self._sy(cy)
            sides = {ObstacleKind.SMALL: 6, ObstacleKind.MEDIUM: 7, ObstacleKind.LARGE: 9}[o.kind]
            radius = o.size / 2
            points = []
            for i in range(sides):
                # Jagged outline, rotated by the simulation-owned angle
                angle = -o.rotation + 2 * math.pi * i / sides
                r = radius * (0.8 if i % 2 else 1.0)
                points.append((cx + math.cos(angle) * r, sy + math.sin(angle) * r))
            arcade.draw_polygon_filled(points, o.kind.spec.color)
            arcade.draw_polygon_outline(points, (70, 60, 55), 2)

    def draw_powerups(self, world):
        for pu in world.powerups:
            cx, cy = pu.center
            sy = self._sy(cy)
            color = pu.kind.spec.color

            if pu.kind is PowerupKind.STAR:
                points = []
                for i in range(10):
                    angle = -pu.rotation + math.pi / 2 + math.pi * i / 5
                    r = pu.size / 2 if i % 2 == 0 else pu.size / 4.5
                    points.append((cx + math.cos(angle) * r, sy + math.sin(angle) * r))
                arcade.draw_polygon_filled(points, color)
            else:
                scale = 1 + math.sin(pu.pulse) * 0.1
                r = pu.size / 4 * scale
                arcade.draw_circle_filled(cx - r, sy + r / 2, r, color)
                arcade.draw_circle_filled(cx + r, sy + r / 2, r, color)
                arcade.draw_triangle_filled(
                    cx - 2 * r, sy + r / 4, cx + 2 * r, sy + r / 4, cx, sy - 2 * r, color,
                )

    def draw_particles(self, world):
        for pt in world.particles:
            alpha = int(255 * pt.alpha)
            half = pt.size / 2
            arcade.draw_lrbt_rectangle_filled(
                pt.x - half, pt.x + half, self._sy(pt.y + half), self._sy(pt.y - half),
                (*pt.color, alpha),
            )

    def draw_hud(self, world):
        if self.hud is None:
            return
        values = self.hud()
        txt = (f"Score: {values['score']}  Lives: {values['lives']}  "
               f"Level: {values['level']}  Time: {values['time']}  "
               f"Acc: {values['accuracy']}  Combo: {values['combo']}")
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)
        if world.double_shot:
            arcade.draw_text(
                f"DOUBLE SHOT {world.double_shot_ms / 1000:.1f}s",
                12, self.height - 44, self.DOUBLE_BULLET_C, 12,
            )

    def draw_pause_overlay(self):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, 178))
        arcade.draw_text(
            "PAUSED", self.width / 2, self.height / 2, self.PAUSE_C, 48,
            anchor_x="center", anchor_y="center", bold=True,
        )
