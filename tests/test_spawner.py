import random
from types import SimpleNamespace

import pytest

from cosmic_commander.entities import EnemyKind, ObstacleKind, PowerupKind
from cosmic_commander.spawner import Spawner


def make_world(width=800):
    return SimpleNamespace(width=width, enemies=[], obstacles=[], powerups=[])


@pytest.fixture
def spawner():
    return Spawner(rng=random.Random(7))


def test_enemy_spawns_when_accumulator_exceeds_interval(spawner):
    world = make_world()
    spawner.update(world, 700)  # accumulator runs at 2x -> 1400
    assert world.enemies == []
    spawner.update(world, 60)   # 1520 > 1500
    assert len(world.enemies) == 1
    assert spawner.enemy_timer == 0.0


def test_enemy_cap_resets_timer_without_spawning(spawner):
    world = make_world()
    world.enemies = [object()] * spawner.max_enemies
    spawner.update(world, 800)
    assert len(world.enemies) == spawner.max_enemies
    assert spawner.enemy_timer == 0.0


def test_obstacle_and_powerup_intervals(spawner):
    world = make_world()
    spawner.update(world, 2999)
    assert world.obstacles == []
    spawner.update(world, 2)
    assert len(world.obstacles) == 1

    spawner.update(world, 12000 - 3001 + 1)
    assert len(world.powerups) == 1


def test_reset_zeroes_accumulators(spawner):
    spawner.update(make_world(), 500)
    spawner.reset()
    assert (spawner.enemy_timer, spawner.obstacle_timer, spawner.powerup_timer) == (0, 0, 0)


@pytest.mark.parametrize("roll,kind", [
    (0.5, EnemyKind.BASIC),
    (0.75, EnemyKind.ADVANCED),
    (0.95, EnemyKind.BOSS),
])
def test_enemy_attributes_follow_kind_table(spawner, roll, kind):
    enemy = spawner.create_enemy(800, roll=roll)
    spec = kind.spec
    assert enemy.kind is kind
    assert enemy.health == spec.health
    assert (enemy.width, enemy.height) == (spec.width, spec.height)
    assert spec.speed_range[0] <= enemy.speed <= spec.speed_range[1]
    assert spec.shoot_interval[0] <= enemy.shoot_timer <= spec.shoot_interval[1]
    assert enemy.y + enemy.height < 0


def test_enemies_spread_across_sections(spawner):
    sections = set()
    for _ in range(300):
        enemy = spawner.create_enemy(800)
        section = int(enemy.x // 160)
        sections.add(section)
        assert 0 <= enemy.x
        # Entity stays inside the section it was placed in
        assert enemy.x + enemy.width <= (section + 1) * 160 + 1e-9
    assert sections == {0, 1, 2, 3, 4}


@pytest.mark.parametrize("roll,kind", [
    (0.1, ObstacleKind.SMALL),
    (0.7, ObstacleKind.MEDIUM),
    (0.9, ObstacleKind.LARGE),
])
def test_obstacle_attributes_follow_kind_table(spawner, roll, kind):
    obstacle = spawner.create_obstacle(800, roll=roll)
    spec = kind.spec
    assert obstacle.kind is kind
    assert obstacle.health == spec.health
    assert spec.size_range[0] <= obstacle.size <= spec.size_range[1]
    assert 0 <= obstacle.x <= 800 - obstacle.size
    assert obstacle.y == -obstacle.size
    assert abs(obstacle.rotation_speed) <= spec.max_rotation_speed


def test_powerup_kinds(spawner):
    star = spawner.create_powerup(800, roll=0.3)
    heart = spawner.create_powerup(800, roll=0.8)
    assert star.kind is PowerupKind.STAR and star.size == 25
    assert heart.kind is PowerupKind.HEART and heart.size == 20


def test_force_enemy_spawn_appends_immediately(spawner):
    world = make_world()
    enemy = spawner.force_enemy_spawn(world)
    assert world.enemies == [enemy]
