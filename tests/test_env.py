import numpy as np

from cosmic_commander.env import CosmicCommanderEnv


def test_reset_observation_shape_and_bounds():
    env = CosmicCommanderEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (29,)
    assert env.observation_space.contains(obs)
    assert info["health"] == 3
    assert info["num_enemies"] == 0


def test_episode_truncates_at_max_steps():
    env = CosmicCommanderEnv(max_steps=50, engine_config={"n_stars": 0})
    env.reset(seed=3)
    env.action_space.seed(3)

    truncated = terminated = False
    steps = 0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert np.all(obs >= -1.0) and np.all(obs <= 1.0)
        steps += 1
    assert steps == 50
    assert truncated and not terminated
    assert info["step"] == 50


def test_first_step_spawns_initial_wave():
    env = CosmicCommanderEnv()
    env.reset(seed=1)
    _, _, _, _, info = env.step(np.array([1, 1, 0]))
    assert info["num_enemies"] == 4


def test_reset_is_deterministic_for_seed():
    env = CosmicCommanderEnv()
    a, _ = env.reset(seed=7)
    for _ in range(30):
        a, *_ = env.step(np.array([2, 1, 1]))
    b, _ = env.reset(seed=7)
    for _ in range(30):
        b, *_ = env.step(np.array([2, 1, 1]))
    assert np.array_equal(a, b)
