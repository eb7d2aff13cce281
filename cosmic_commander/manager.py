"""
Game manager: round bookkeeping around the game loop.

Receives combat events from the world (score credit, damage, game over),
keeps score / lives / level / combo and round statistics, runs the periodic
round clock and reinforcement timers, and submits the final score.
"""

import logging
from typing import Callable, List, Optional

from .api import ApiError, ScoreClient, ScoreSubmission
from .configs.game_config import ENGINE_CONFIG, LOOP_CONFIG, MANAGER_CONFIG, SPAWN_CONFIG
from .driver import FrameScheduler, GameLoop
from .events import CombatEvents
from .scoring import LocalScoreStore
from .simulation import InputSnapshot, World
from .utils import format_time

logger = logging.getLogger(__name__)


class Clock:
    """
    Periodic timer capability. Callbacks receive the elapsed seconds since
    their previous call, like arcade.schedule.
    """

    def schedule(self, callback: Callable[[float], None], interval: float) -> None:
        raise NotImplementedError

    def schedule_once(self, callback: Callable[[float], None], delay: float) -> None:
        raise NotImplementedError

    def unschedule(self, callback: Callable[[float], None]) -> None:
        raise NotImplementedError


def _log_notification(message: str, kind: str = "info") -> None:
    logger.info("[%s] %s", kind, message)


class GameManager(CombatEvents):
    """Owns the world and the loop for one player session."""

    def __init__(
        self,
        renderer,
        scheduler: FrameScheduler,
        clock: Clock,
        input_source: Optional[Callable[[], InputSnapshot]] = None,
        client: Optional[ScoreClient] = None,
        store: Optional[LocalScoreStore] = None,
        player_id: str = "local",
        notify: Callable[..., None] = _log_notification,
        engine_config: Optional[dict] = None,
        spawn_config: Optional[dict] = None,
        loop_config: Optional[dict] = None,
        manager_config: Optional[dict] = None,
        seed: Optional[int] = None,
    ):
        self.config = {**MANAGER_CONFIG, **(manager_config or {})}
        self.clock = clock
        self.client = client
        self.store = store
        self.player_id = player_id
        self.notify = notify

        engine = {**ENGINE_CONFIG, **(engine_config or {})}
        self.world = World(
            events=self,
            spawn_config={**SPAWN_CONFIG, **(spawn_config or {})},
            seed=seed,
            **engine,
        )
        self.loop = GameLoop(
            self.world, renderer, scheduler, input_source,
            **{**LOOP_CONFIG, **(loop_config or {})},
        )

        self.leaderboard: List[dict] = []
        self.last_result: Optional[dict] = None
        self.is_game_over = False
        self._timers_active = False
        self._reset_stats()

    # ----------------------------
    # Round control
    # ----------------------------

    def _reset_stats(self):
        self.score = 0
        self.lives = self.config["lives"]
        self.level = 1
        self.combo = 1.0
        self.max_combo = 1.0
        self.aliens_defeated = 0
        self.shots_fired = 0
        self.shots_hit = 0
        self.powerups_collected = 0
        self.game_time_ms = 0.0
        self.accuracy = 0
        self.challenge_progress = 0

    def start_game(self):
        self.reset_game()
        self.loop.start()
        self.world.queue_enemies(self.config["initial_enemies"])

        self.clock.schedule(self._on_clock, self.config["clock_interval"])
        self.clock.schedule(self._on_reinforce, self.config["reinforce_interval"])
        self._timers_active = True
        self.is_game_over = False
        logger.info("Round started")

    def pause_game(self):
        if self.loop.is_running and not self.is_game_over:
            self.loop.pause()

    def reset_game(self):
        """Stop the loop, cancel timers and rebuild the world, synchronously"""
        self.loop.stop()
        self._stop_timers()
        self.world.reset()
        self._reset_stats()
        self.is_game_over = False

    def _stop_timers(self):
        if self._timers_active:
            self.clock.unschedule(self._on_clock)
            self.clock.unschedule(self._on_reinforce)
            self._timers_active = False

    def _active(self) -> bool:
        return self.loop.is_running and not self.loop.is_paused and not self.is_game_over

    def _on_clock(self, delta_time: float):
        if self._active():
            self.game_time_ms += delta_time * 1000
            self.update_accuracy()

    def _on_reinforce(self, delta_time: float):
        if self._active() and len(self.world.enemies) < self.world.spawner.max_enemies:
            self.world.spawner.force_enemy_spawn(self.world)

    # ----------------------------
    # Combat events
    # ----------------------------

    def current_combo(self) -> float:
        return self.combo

    def shot_fired(self, count: int) -> None:
        # One trigger pull, however many bullets it produced
        self.shots_fired += 1

    def bullet_hit(self, target) -> None:
        self.shots_hit += 1

    def enemy_destroyed(self, enemy, points: float) -> None:
        self.aliens_defeated += 1
        self.add_score(points)
        self.combo = min(round(self.combo + self.config["combo_step"], 2), self.config["max_combo"])
        self.max_combo = max(self.max_combo, self.combo)
        if self.challenge_progress < self.config["challenge_target"]:
            self.challenge_progress += 1

    def obstacle_destroyed(self, obstacle, points: float) -> None:
        self.add_score(points)

    def powerup_collected(self, powerup, points: float) -> None:
        self.powerups_collected += 1
        self.add_score(points)
        self.notify(f"{powerup.kind.name.title()} collected! +{int(points)} points", "success")

    def player_damaged(self, health: int) -> None:
        self.lives = health
        self.combo = 1.0

    def player_healed(self, health: int) -> None:
        self.lives = health

    def game_over(self) -> None:
        self.loop.stop()
        self._stop_timers()
        self.is_game_over = True

        self.update_accuracy()
        self.last_result = self.final_stats()
        logger.info("Game over: score=%d level=%d time=%s",
                    self.score, self.level, format_time(self.last_result["survivalTime"]))

        # Submit outside the frame that ended the round
        self.clock.schedule_once(self._submit_final_score, 0)

    # ----------------------------
    # Scoring
    # ----------------------------

    def add_score(self, points: float):
        self.score += int(round(points))
        if self.score > self.level * self.config["level_score_step"]:
            self.level_up()

    def level_up(self):
        self.level += 1
        self.world.game_speed = min(
            self.world.game_speed + self.config["speed_per_level"],
            self.config["max_game_speed"],
        )
        logger.info("Level %d reached! Game speed: %.2fx", self.level, self.world.game_speed)
        self.notify(f"LEVEL {self.level} REACHED!", "success")

    def update_accuracy(self) -> int:
        if self.shots_fired > 0:
            self.accuracy = round(self.aliens_defeated / self.shots_fired * 100)
        else:
            self.accuracy = 0
        return self.accuracy

    def final_stats(self) -> dict:
        return ScoreSubmission(
            score=self.score,
            aliens_defeated=self.aliens_defeated,
            level_reached=self.level,
            survival_time=int(self.game_time_ms // 1000),
            accuracy=self.update_accuracy(),
            shots_fired=self.shots_fired,
            shots_hit=self.shots_hit,
            powerups_collected=self.powerups_collected,
            max_combo=self.max_combo,
        ).to_payload()

    # ----------------------------
    # Backend
    # ----------------------------

    def _submit_final_score(self, delta_time: float = 0.0):
        self.save_score(self.last_result)
        self.load_leaderboard()

    def save_score(self, payload: Optional[dict]) -> bool:
        """Submit once; failures become a notification and are not retried"""
        if payload is None:
            return False
        try:
            if self.client is not None and self.client.is_logged_in:
                result = self.client.save_score(ScoreSubmission(
                    score=payload["score"],
                    aliens_defeated=payload["aliensDefeated"],
                    level_reached=payload["levelReached"],
                    survival_time=payload["survivalTime"],
                    accuracy=payload["accuracy"],
                    shots_fired=payload["shotsFired"],
                    shots_hit=payload["shotsHit"],
                    powerups_collected=payload["powerupsCollected"],
                    max_combo=payload["maxCombo"],
                ))
            elif self.store is not None:
                result = self.store.save_score(self.player_id, payload)
            else:
                return False
        except ApiError as e:
            logger.warning("Score not saved: %s", e)
            self.notify(e.message or "Connection error. Score not saved.", "error")
            return False

        if result.get("newHighScore"):
            self.notify("NEW HIGH SCORE! You've earned your place among the Elite!", "success")
        else:
            self.notify("Commander, see you next time!", "success")
        return True

    def load_leaderboard(self, limit: Optional[int] = None) -> List[dict]:
        try:
            if self.client is not None:
                self.leaderboard = self.client.leaderboard(limit)
            elif self.store is not None:
                self.leaderboard = self.store.leaderboard(limit or 10)
        except ApiError as e:
            logger.warning("Leaderboard unavailable: %s", e)
            self.leaderboard = []
        return self.leaderboard

    def hud(self) -> dict:
        """Values shown in the heads-up display"""
        return {
            "score": self.score,
            "lives": self.lives,
            "level": self.level,
            "time": format_time(int(self.game_time_ms // 1000)),
            "accuracy": f"{self.accuracy}%",
            "combo": f"x{self.combo:.1f}",
            "challenge": f"{self.challenge_progress}/{self.config['challenge_target']}",
        }
