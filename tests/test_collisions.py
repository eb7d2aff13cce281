import pytest

from cosmic_commander.entities import (
    Bullet, Enemy, EnemyBullet, EnemyKind, Obstacle, ObstacleKind, Powerup, PowerupKind,
)
from cosmic_commander.events import EventRecorder
from cosmic_commander.simulation import World

from conftest import QUIET_SPAWNS


def basic_enemy(x=100, y=100, health=1, kind=EnemyKind.BASIC):
    return Enemy(x=x, y=y, width=25, height=20, speed=2, health=health, kind=kind)


def resolve(world):
    world.collisions.resolve(world)


def test_bullet_destroys_enemy_and_credits_points(world, recorder):
    world.enemies.append(basic_enemy())
    world.bullets.append(Bullet(x=100, y=118))
    resolve(world)

    assert world.enemies == []
    assert world.bullets == []
    assert recorder.score == 10
    # 6 hit sparks and 12 explosion particles
    assert len(world.particles) == 18


def test_kill_points_scale_with_combo():
    recorder = EventRecorder(combo=2.5)
    world = World(events=recorder, seed=3, n_stars=0, spawn_config=QUIET_SPAWNS)
    world.enemies.append(basic_enemy(kind=EnemyKind.ADVANCED))
    world.bullets.append(Bullet(x=100, y=118))
    world.enemies[0].health = 1
    resolve(world)
    assert recorder.score == pytest.approx(25.0)


def test_bullet_hits_at_most_one_target(world, recorder):
    first, second = basic_enemy(), basic_enemy()
    world.enemies.extend([first, second])
    world.bullets.append(Bullet(x=100, y=118))
    resolve(world)

    assert world.enemies == [second]
    assert second.health == 1
    assert recorder.count("bullet_hit") == 1


def test_health_drops_by_exact_hit_count(world, recorder):
    boss = basic_enemy(health=3, kind=EnemyKind.BOSS)
    world.enemies.append(boss)
    world.bullets.extend([Bullet(x=100, y=110), Bullet(x=105, y=110)])
    resolve(world)

    assert boss.health == 1
    assert world.enemies == [boss]
    assert recorder.count("enemy_destroyed") == 0


def test_extra_bullets_pass_a_destroyed_enemy(world, recorder):
    world.enemies.append(basic_enemy(health=3, kind=EnemyKind.BOSS))
    world.bullets.extend([Bullet(x=100 + i, y=110) for i in range(4)])
    resolve(world)

    assert world.enemies == []
    assert len(world.bullets) == 1
    assert recorder.count("enemy_destroyed") == 1
    assert recorder.score == EnemyKind.BOSS.spec.points


def test_hit_padding_widens_target(recorder):
    near_miss = Bullet(x=75, y=100)

    padded = World(events=recorder, seed=1, n_stars=0, spawn_config=QUIET_SPAWNS)
    padded.enemies.append(basic_enemy())
    padded.bullets.append(near_miss)
    resolve(padded)
    assert padded.enemies == []

    strict = World(events=EventRecorder(), seed=1, n_stars=0, hit_padding=0,
                   spawn_config=QUIET_SPAWNS)
    strict.enemies.append(basic_enemy())
    strict.bullets.append(Bullet(x=75, y=100))
    resolve(strict)
    assert len(strict.enemies) == 1


def test_obstacle_breaks_after_enough_hits(world, recorder):
    rock = Obstacle(x=200, y=200, size=40, speed=3, health=2, kind=ObstacleKind.SMALL)
    world.obstacles.append(rock)
    world.bullets.append(Bullet(x=210, y=210))
    resolve(world)
    assert rock.health == 1 and world.obstacles == [rock]

    world.bullets.append(Bullet(x=210, y=210))
    resolve(world)
    assert world.obstacles == []
    assert recorder.score == ObstacleKind.SMALL.spec.points


def test_lethal_enemy_bullet_ends_the_round(world, recorder):
    p = world.player
    p.health = 1
    world.enemy_bullets.append(EnemyBullet(x=p.x + 10, y=p.y + 10))
    resolve(world)

    assert p.health == 0
    assert p.invulnerable
    assert p.invulnerable_ms == 2000
    assert world.game_over
    assert world.enemy_bullets == []
    assert recorder.count("game_over") == 1

    # Further damage is ignored once invulnerable
    world.enemy_bullets.append(EnemyBullet(x=p.x + 10, y=p.y + 10))
    resolve(world)
    assert recorder.count("game_over") == 1


def test_invulnerable_player_takes_no_damage(world, recorder):
    p = world.player
    p.invulnerable = True
    p.invulnerable_ms = 1000
    world.enemies.append(basic_enemy(x=p.x, y=p.y))
    resolve(world)

    assert p.health == 3
    assert len(world.enemies) == 1
    assert recorder.count("player_damaged") == 0


def test_obstacle_survives_ramming(world):
    p = world.player
    rock = Obstacle(x=p.x, y=p.y, size=40, speed=3, health=2)
    world.obstacles.append(rock)
    resolve(world)

    assert p.health == 2
    assert world.obstacles == [rock]


def test_simultaneous_overlaps_cost_one_life(world, recorder):
    p = world.player
    world.enemies.append(basic_enemy(x=p.x, y=p.y))
    world.enemy_bullets.append(EnemyBullet(x=p.x + 5, y=p.y + 5))
    resolve(world)

    assert p.health == 2
    assert recorder.count("player_damaged") == 1
    assert world.enemies == []
    # The bullet was not consumed by an invulnerable player
    assert len(world.enemy_bullets) == 1


def test_star_powerup_grants_double_shot(world, recorder):
    p = world.player
    world.powerups.append(Powerup(x=p.x, y=p.y, size=25, speed=1.5, kind=PowerupKind.STAR))
    resolve(world)

    assert world.powerups == []
    assert world.double_shot
    assert world.double_shot_ms == 10000
    assert recorder.score == 10


@pytest.mark.parametrize("health,expected", [(2, 3), (3, 3)])
def test_heart_powerup_heals_up_to_max(world, health, expected):
    p = world.player
    p.health = health
    world.powerups.append(Powerup(x=p.x, y=p.y, size=20, speed=1.5, kind=PowerupKind.HEART))
    resolve(world)
    assert p.health == expected


def test_no_pickup_after_lethal_hit(world, recorder):
    p = world.player
    p.health = 1
    world.enemy_bullets.append(EnemyBullet(x=p.x + 10, y=p.y + 10))
    heart = Powerup(x=p.x + 20, y=p.y + 20, size=20, speed=1.5, kind=PowerupKind.HEART)
    world.powerups.append(heart)
    world.step(16)

    assert world.game_over
    assert p.health == 0
    assert world.powerups == [heart]
    assert recorder.score == 0
    assert recorder.count("player_healed") == 0


def test_heart_reports_new_health(world, recorder):
    p = world.player
    p.health = 1
    world.powerups.append(Powerup(x=p.x, y=p.y, size=20, speed=1.5, kind=PowerupKind.HEART))
    resolve(world)
    assert recorder.events[-2] == ("player_healed", 2)
