"""
Combat event sink.
The simulation reports score credit, damage and round end through this interface
instead of reaching into the game manager.
"""

from typing import Dict, List, Tuple, Any


class CombatEvents:
    """
    Base sink: every hook is a no-op.
    Subclass and override the hooks you care about.
    """

    def current_combo(self) -> float:
        """Multiplier applied to enemy kill points."""
        return 1.0

    def shot_fired(self, count: int) -> None:
        pass

    def bullet_hit(self, target: Any) -> None:
        pass

    def enemy_destroyed(self, enemy: Any, points: float) -> None:
        pass

    def obstacle_destroyed(self, obstacle: Any, points: float) -> None:
        pass

    def powerup_collected(self, powerup: Any, points: float) -> None:
        pass

    def player_damaged(self, health: int) -> None:
        pass

    def player_healed(self, health: int) -> None:
        pass

    def game_over(self) -> None:
        pass


class EventRecorder(CombatEvents):
    """Sink that records every event, used by headless runs and the Gym env."""

    def __init__(self, combo: float = 1.0):
        self.combo = combo
        self.events: List[Tuple[str, Any]] = []
        self.score = 0.0
        self.counts: Dict[str, int] = {}

    def _record(self, name: str, payload: Any = None) -> None:
        self.events.append((name, payload))
        self.counts[name] = self.counts.get(name, 0) + 1

    def current_combo(self) -> float:
        return self.combo

    def shot_fired(self, count: int) -> None:
        self._record("shot_fired", count)

    def bullet_hit(self, target: Any) -> None:
        self._record("bullet_hit", target)

    def enemy_destroyed(self, enemy: Any, points: float) -> None:
        self.score += points
        self._record("enemy_destroyed", points)

    def obstacle_destroyed(self, obstacle: Any, points: float) -> None:
        self.score += points
        self._record("obstacle_destroyed", points)

    def powerup_collected(self, powerup: Any, points: float) -> None:
        self.score += points
        self._record("powerup_collected", powerup.kind)

    def player_damaged(self, health: int) -> None:
        self._record("player_damaged", health)

    def player_healed(self, health: int) -> None:
        self._record("player_healed", health)

    def game_over(self) -> None:
        self._record("game_over")

    def count(self, name: str) -> int:
        return self.counts.get(name, 0)
