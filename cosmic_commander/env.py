"""
CosmicCommanderEnv - headless Gymnasium wrapper around the game world
---------------------------------------------------------------------
- Gymnasium API over World.step, one fixed frame per env step
- Discrete MultiDiscrete action space: [horizontal(3), vertical(3), fire(2)]
- Vector observation: player state + top-K nearest enemies + nearest
  enemy bullets + nearest powerup
- Reward = score credited this step, minus a penalty per life lost

Useful for scripted bots, soak tests and long headless runs.

Quick test:
    python -m cosmic_commander.env
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .configs.game_config import ENGINE_CONFIG
from .events import EventRecorder
from .simulation import InputSnapshot, World
from .utils import clamp


class CosmicCommanderEnv(gym.Env):
    """Headless Cosmic Commander environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        frame_ms: float = 16.0,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        k_bullets: int = 3,
        damage_penalty: float = 20.0,
        engine_config: Optional[dict] = None,
    ):
        super().__init__()

        self.render_mode = render_mode
        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.k_bullets = k_bullets
        self.damage_penalty = damage_penalty
        self.engine_config = {**ENGINE_CONFIG, **(engine_config or {})}

        # Action space:
        # horizontal: 0 left, 1 stay, 2 right
        # vertical: 0 up, 1 stay, 2 down
        # fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Observation space (vector)
        # Player: pos(2) health(1) invulnerable(1) double_shot(1)
        # Each enemy: rel pos(2) health(1)
        # Each enemy bullet: rel pos(2)
        # Nearest powerup: rel pos(2) kind(1)
        obs_dim = 5 + (self.k_enemies * 3) + (self.k_bullets * 2) + 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.world: World = None  # type: ignore
        self.recorder: EventRecorder = None  # type: ignore
        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self.recorder = EventRecorder()
        world_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.world = World(events=self.recorder, seed=world_seed, **self.engine_config)
        self.world.queue_enemies(4)

        return self._get_obs(), self._get_info()

    def step(self, action):
        horizontal, vertical, fire = int(action[0]), int(action[1]), int(action[2])
        inputs = InputSnapshot(
            left=horizontal == 0,
            right=horizontal == 2,
            up=vertical == 0,
            down=vertical == 2,
            fire=fire == 1,
        )

        score_before = self.recorder.score
        hits_before = self.recorder.count("player_damaged")

        self.world.step(self.frame_ms, inputs)
        self._step_count += 1

        reward = self.recorder.score - score_before
        reward -= self.damage_penalty * (self.recorder.count("player_damaged") - hits_before)

        terminated = self.world.game_over
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _rel(self, x: float, y: float) -> List[float]:
        px, py = self.world.player.center
        return [
            clamp((x - px) / self.world.width, -1, 1),
            clamp((y - py) / self.world.height, -1, 1),
        ]

    def _nearest(self, items, k: int):
        px, py = self.world.player.center
        return sorted(
            items,
            key=lambda e: (e.x - px) ** 2 + (e.y - py) ** 2
        )[:k]

    def _get_obs(self) -> np.ndarray:
        w = self.world
        p = w.player
        px, py = p.center

        obs_parts = [
            px / w.width * 2 - 1, py / w.height * 2 - 1,  # map to [-1,1]
            p.health / p.max_health * 2 - 1,
            1.0 if p.invulnerable else -1.0,
            1.0 if w.double_shot else -1.0,
        ]

        enemies = self._nearest(w.enemies, self.k_enemies)
        for i in range(self.k_enemies):
            if i < len(enemies):
                e = enemies[i]
                obs_parts += self._rel(*e.center) + [e.health / 5.0]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        bullets = self._nearest(w.enemy_bullets, self.k_bullets)
        for i in range(self.k_bullets):
            if i < len(bullets):
                b = bullets[i]
                obs_parts += self._rel(b.x, b.y)
            else:
                obs_parts += [0.0, 0.0]

        powerups = self._nearest(w.powerups, 1)
        if powerups:
            pu = powerups[0]
            obs_parts += self._rel(*pu.center) + [1.0 if pu.kind.name == "STAR" else -1.0]
        else:
            obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        info = self.world.info()
        info.update({
            "score": self.recorder.score,
            "enemies_killed": self.recorder.count("enemy_destroyed"),
            "damage_taken": self.recorder.count("player_damaged"),
            "step": self._step_count,
        })
        return info

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode != "human":
            return None

        import arcade
        from .render import Renderer

        if self._window is None:
            self._window = arcade.Window(self.world.width, self.world.height, "CosmicCommanderEnv")
            self._renderer = Renderer(self.world.width, self.world.height)

        self._window.dispatch_events()
        self._window.clear()
        self._renderer.render(self.world)
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: int = 42) -> float:
    """Run a random-policy episode and return its total reward"""
    env = CosmicCommanderEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.1f}  "
          f"(score {info['score']:.0f}, kills {info['enemies_killed']}, steps {info['step']})")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
