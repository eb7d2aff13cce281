import copy

import pytest

from cosmic_commander.entities import (
    Bullet, BulletKind, Enemy, EnemyBullet, EnemyKind, Obstacle, ObstacleKind, Powerup, PowerupKind,
)

try:
    from cosmic_commander import render
except ImportError as e:
    pytest.skip(f"arcade unavailable: {e}", allow_module_level=True)


class RecordingArcade:
    """Stands in for the arcade draw module and records every call"""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("draw_"):
            raise AttributeError(name)

        def draw(*args, **kwargs):
            self.calls.append((name, args, kwargs))
        return draw

    def texts(self):
        return [args[0] for name, args, _ in self.calls if name == "draw_text"]


@pytest.fixture
def fake_arcade(monkeypatch):
    fake = RecordingArcade()
    monkeypatch.setattr(render, "arcade", fake)
    return fake


@pytest.fixture
def busy_world(world):
    world.bullets += [Bullet(x=10, y=300), Bullet(x=30, y=300, kind=BulletKind.DOUBLE)]
    world.enemy_bullets.append(EnemyBullet(x=50, y=200))
    world.enemies += [
        Enemy(x=100 * i, y=50, width=45, height=35, speed=2, health=kind.spec.health, kind=kind)
        for i, kind in enumerate(EnemyKind)
    ]
    world.obstacles += [
        Obstacle(x=100 * i, y=150, size=50, speed=2, health=2, kind=kind, rotation=0.3)
        for i, kind in enumerate(ObstacleKind)
    ]
    world.powerups += [
        Powerup(x=400, y=100, size=25, speed=1.5, kind=PowerupKind.STAR),
        Powerup(x=450, y=100, size=20, speed=1.5, kind=PowerupKind.HEART),
    ]
    world.shoot()
    world.player.invulnerable = True
    world.player.invulnerable_ms = 500
    world.double_shot = True
    world.double_shot_ms = 4000
    return world


def hud_values():
    return {"score": 120, "lives": 2, "level": 2, "time": "1:05",
            "accuracy": "40%", "combo": "x1.3", "challenge": "3/50"}


def test_render_does_not_touch_world(fake_arcade, busy_world):
    before = copy.deepcopy(busy_world.__dict__)
    renderer = render.Renderer(busy_world.width, busy_world.height, hud=hud_values)
    renderer.render(busy_world)

    after = busy_world.__dict__
    for key in ("player", "bullets", "enemy_bullets", "enemies", "obstacles",
                "powerups", "particles", "stars", "double_shot_ms", "time_ms"):
        assert after[key] == before[key], key
    assert fake_arcade.calls


def test_hud_and_pause_overlay(fake_arcade, busy_world):
    renderer = render.Renderer(busy_world.width, busy_world.height, hud=hud_values)
    renderer.render(busy_world, paused=True)

    texts = fake_arcade.texts()
    assert any(t.startswith("Score: 120") for t in texts)
    assert "DOUBLE SHOT 4.0s" in texts
    assert texts[-1] == "PAUSED"


def test_no_pause_overlay_while_running(fake_arcade, world):
    render.Renderer(world.width, world.height).render(world)
    assert "PAUSED" not in fake_arcade.texts()


def test_canvas_y_is_flipped(fake_arcade, world):
    world.stars = []
    world.player = None
    world.bullets.append(Bullet(x=10, y=100))
    renderer = render.Renderer(world.width, world.height)
    renderer.draw_bullets(world)

    name, args, _ = fake_arcade.calls[0]
    left, right, bottom, top = args[:4]
    assert (left, right) == (10, 16)
    assert (bottom, top) == (world.height - 118, world.height - 100)
