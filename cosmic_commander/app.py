"""
Cosmic Commander - arcade window and command line entry point

Controls:
    Arrow keys / WASD - Move ship
    Space             - Fire (hold for auto-fire)
    P / Esc           - Pause / Resume
    Enter             - Start / Play again

Usage:
    cosmic-commander --profile balanced
    python -m cosmic_commander.app --api-url http://localhost:5000 --email me@x.io --password ...
"""

import argparse
import logging
import time
from typing import Callable, Optional

import arcade

from .api import ApiError, ScoreClient
from .configs.game_config import ENGINE_CONFIG, SPEED_PROFILES, get_speed_profile
from .driver import FrameScheduler
from .manager import Clock, GameManager
from .render import Renderer
from .scoring import LocalScoreStore
from .simulation import InputSnapshot
from .utils import seed_everything

logger = logging.getLogger(__name__)

MOVE_KEYS = {
    arcade.key.LEFT: "left", arcade.key.A: "left",
    arcade.key.RIGHT: "right", arcade.key.D: "right",
    arcade.key.UP: "up", arcade.key.W: "up",
    arcade.key.DOWN: "down", arcade.key.S: "down",
    arcade.key.SPACE: "fire",
}


def setup_logging(level: int = logging.INFO):
    """Configure root logging once"""
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


class ArcadeFrameScheduler(FrameScheduler):
    """Runs the requested callback on the window's next draw"""

    def __init__(self):
        self._pending: Optional[Callable[[float], None]] = None

    def request_frame(self, callback):
        self._pending = callback

    def fire(self, now_ms: float) -> bool:
        callback, self._pending = self._pending, None
        if callback is None:
            return False
        callback(now_ms)
        return True


class ArcadeClock(Clock):
    """Clock backed by arcade's pyglet scheduler"""

    def schedule(self, callback, interval):
        arcade.schedule(callback, interval)

    def schedule_once(self, callback, delay):
        arcade.schedule_once(callback, delay)

    def unschedule(self, callback):
        arcade.unschedule(callback)


class GameWindow(arcade.Window):
    """Arcade window hosting one game session"""

    def __init__(self, width: int, height: int, profile: str = "balanced",
                 client: Optional[ScoreClient] = None, seed: Optional[int] = None):
        super().__init__(width, height, "Cosmic Commander Elite")
        self.held = {name: False for name in set(MOVE_KEYS.values())}
        self.scheduler = ArcadeFrameScheduler()
        self.messages = []

        configs = get_speed_profile(profile)
        engine = {**configs["engine"], "width": width, "height": height}
        self.renderer = Renderer(width, height)
        self.manager = GameManager(
            self.renderer,
            self.scheduler,
            ArcadeClock(),
            input_source=self.current_input,
            client=client,
            store=LocalScoreStore() if client is None else None,
            notify=self.show_message,
            engine_config=engine,
            spawn_config=configs["spawn"],
            loop_config=configs["loop"],
            seed=seed,
        )
        self.renderer.hud = self.manager.hud
        self.manager.load_leaderboard()

    def current_input(self) -> InputSnapshot:
        return InputSnapshot(**self.held)

    def show_message(self, message: str, kind: str = "info"):
        logger.info("[%s] %s", kind, message)
        self.messages = (self.messages + [message])[-3:]

    def on_draw(self):
        self.clear()
        # The pending frame callback steps the world and draws it
        if not self.scheduler.fire(time.perf_counter() * 1000):
            self.renderer.render(self.manager.world, paused=False)
            self.draw_menu()

    def draw_menu(self):
        title = "GAME OVER" if self.manager.is_game_over else "COSMIC COMMANDER ELITE"
        arcade.draw_text(title, self.width / 2, self.height / 2 + 60, (0, 212, 255), 36,
                         anchor_x="center", anchor_y="center", bold=True)
        if self.manager.last_result:
            r = self.manager.last_result
            arcade.draw_text(
                f"Score {r['score']}  Aliens {r['aliensDefeated']}  Level {r['levelReached']}  "
                f"Accuracy {r['accuracy']}%",
                self.width / 2, self.height / 2 + 10, (220, 220, 220), 14, anchor_x="center",
            )
        for i, entry in enumerate(self.manager.leaderboard[:3]):
            arcade.draw_text(f"{i + 1}. {entry['username']}  {entry['highScore']}",
                             self.width / 2, self.height / 2 - 30 - i * 22, (255, 220, 60), 14,
                             anchor_x="center")
        for i, message in enumerate(self.messages):
            arcade.draw_text(message, 12, 12 + i * 18, (180, 255, 180), 11)
        arcade.draw_text("Press ENTER to start", self.width / 2, 60, (220, 220, 220), 16,
                         anchor_x="center")

    def on_key_press(self, symbol, modifiers):
        if symbol in MOVE_KEYS:
            self.held[MOVE_KEYS[symbol]] = True
        elif symbol in (arcade.key.P, arcade.key.ESCAPE):
            self.manager.pause_game()
        elif symbol == arcade.key.ENTER and not self.manager.loop.is_running:
            self.manager.start_game()

    def on_key_release(self, symbol, modifiers):
        if symbol in MOVE_KEYS:
            self.held[MOVE_KEYS[symbol]] = False


def main():
    parser = argparse.ArgumentParser(description="Cosmic Commander Elite")
    parser.add_argument(
        "--profile",
        type=str,
        default="balanced",
        choices=list(SPEED_PROFILES),
        help="Speed profile (default: balanced)",
    )
    parser.add_argument("--width", type=int, default=ENGINE_CONFIG["width"])
    parser.add_argument("--height", type=int, default=ENGINE_CONFIG["height"])
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--api-url", type=str, default=None, help="Score backend base URL")
    parser.add_argument("--email", type=str, default=None, help="Login email for score saving")
    parser.add_argument("--password", type=str, default=None)
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    seed_everything(args.seed)

    client = None
    if args.api_url:
        client = ScoreClient(base_url=args.api_url)
        if args.email and args.password:
            try:
                client.login(args.email, args.password)
                print(f"Logged in as {client.user.get('username')}")
            except ApiError as e:
                print(f"Login failed ({e.code}), scores will not be saved")

    GameWindow(args.width, args.height, profile=args.profile, client=client, seed=args.seed)
    arcade.run()


if __name__ == "__main__":
    main()
