"""
Score service contract rules and an in-memory score store.

The rules mirror what the backend enforces on /api/game/save-score and
/api/game/leaderboard; LocalScoreStore applies them without a network so the
game can run offline and the contract can be exercised in tests.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from .api import ApiError


DEFAULT_LEADERBOARD_LIMIT = 10
MAX_LEADERBOARD_LIMIT = 50

DAILY_CHALLENGES = [
    {
        "name": "Alien Exterminator",
        "description": "Destroy 50 aliens without taking damage",
        "target": 50,
        "type": "aliensDefeated",
    },
    {
        "name": "Survival Master",
        "description": "Survive for 300 seconds",
        "target": 300,
        "type": "survivalTime",
    },
    {
        "name": "Precision Strike",
        "description": "Achieve 85% accuracy or higher",
        "target": 85,
        "type": "accuracy",
    },
    {
        "name": "Score Hunter",
        "description": "Reach a score of 5000 points",
        "target": 5000,
        "type": "score",
    },
]


def max_reasonable_score(level_reached: int, aliens_defeated: int) -> int:
    """Upper plausibility bound for a submitted score"""
    return level_reached * 10000 + aliens_defeated * 200


def is_plausible_score(score: float, level_reached: int, aliens_defeated: int) -> bool:
    return score <= max_reasonable_score(level_reached, aliens_defeated)


def clamp_leaderboard_limit(limit: Any) -> int:
    """Parse a ?limit= value: junk or 0 means the default, never above the max"""
    try:
        value = int(limit)
    except (TypeError, ValueError):
        value = 0
    return min(value or DEFAULT_LEADERBOARD_LIMIT, MAX_LEADERBOARD_LIMIT)


def daily_challenge(today: Optional[date] = None) -> dict:
    """Challenge of the day, rotating by day of year"""
    today = today or date.today()
    day_of_year = today.timetuple().tm_yday
    return dict(DAILY_CHALLENGES[day_of_year % len(DAILY_CHALLENGES)])


@dataclass
class UserRecord:
    """Persisted user fields the game client reads"""
    id: str
    username: str
    email: str = ""
    high_score: float = 0
    total_games_played: int = 0
    total_play_time: float = 0
    total_score: float = 0
    achievements: List[str] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=lambda: {
        "soundEnabled": True,
        "musicEnabled": True,
        "difficulty": "normal",
    })
    stats: Dict[str, float] = field(default_factory=dict)
    profile_picture: Optional[str] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def leaderboard_entry(self) -> dict:
        return {
            "username": self.username,
            "highScore": self.high_score,
            "profilePicture": self.profile_picture,
            "createdAt": self.created_at.isoformat(),
        }


# Per-game stats merged into the user record with max() on a new high score
_MAX_MERGED = (
    "aliensDefeated", "levelReached", "survivalTime", "accuracy",
    "shotsFired", "shotsHit", "powerupsCollected", "maxCombo",
)


class LocalScoreStore:
    """In-memory save-score / leaderboard / rank implementation"""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}

    def add_user(self, user_id: str, username: str, **kwargs) -> UserRecord:
        user = UserRecord(id=user_id, username=username, **kwargs)
        self.users[user_id] = user
        return user

    def save_score(self, user_id: str, payload: Dict[str, Any]) -> dict:
        """Apply a save-score body for user_id; raises ApiError on rejection"""
        score = payload.get("score")
        if not isinstance(score, (int, float)) or score < 0:
            raise ApiError(400, "VALIDATION_ERROR", "Score must be a non-negative number")

        aliens = payload.get("aliensDefeated", 0)
        level = payload.get("levelReached", 1)
        if not is_plausible_score(score, level, aliens):
            raise ApiError(400, "INVALID_SCORE", "Score appears to be invalid")

        user = self.users.get(user_id)
        new_high_score = False
        if user is not None:
            if score > user.high_score:
                user.high_score = score
                for key in _MAX_MERGED:
                    if key in payload:
                        user.stats[key] = max(user.stats.get(key, 0), payload[key])
                new_high_score = True
            user.total_games_played += 1
            user.total_score += score
            user.total_play_time += payload.get("survivalTime", 0)

        return {"message": "Score saved successfully", "newHighScore": new_high_score}

    def leaderboard(self, limit: Any = DEFAULT_LEADERBOARD_LIMIT) -> List[dict]:
        limit = clamp_leaderboard_limit(limit)
        active = [u for u in self.users.values() if u.is_active]
        active.sort(key=lambda u: u.high_score, reverse=True)
        return [u.leaderboard_entry() for u in active[:limit]]

    def user_rank(self, user_id: str) -> Optional[int]:
        user = self.users.get(user_id)
        if user is None:
            return None
        better = sum(
            1 for u in self.users.values()
            if u.is_active and u.high_score > user.high_score
        )
        return better + 1
