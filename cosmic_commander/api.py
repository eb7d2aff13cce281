"""
Client for the Cosmic Commander account and score backend
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from .configs.game_config import API_CONFIG

logger = logging.getLogger(__name__)


class AuthErrorCode(str, Enum):
    NO_TOKEN = "NO_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    AUTH_REQUIRED = "AUTH_REQUIRED"


class ApiError(Exception):
    """Backend failure with HTTP status and machine-readable code"""

    def __init__(self, status: int, code: str, message: str = "", errors: Optional[list] = None):
        super().__init__(f"{status} {code}: {message}")
        self.status = status
        self.code = code
        self.message = message
        self.errors = errors or []

    @property
    def is_auth_error(self) -> bool:
        return self.code in AuthErrorCode.__members__


@dataclass
class ScoreSubmission:
    """Body of POST /api/game/save-score"""
    score: int
    aliens_defeated: int = 0
    level_reached: int = 1
    survival_time: int = 0
    accuracy: int = 0
    shots_fired: int = 0
    shots_hit: int = 0
    powerups_collected: int = 0
    max_combo: float = 1.0
    game_mode: str = "normal"
    difficulty: str = "normal"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "aliensDefeated": self.aliens_defeated,
            "levelReached": self.level_reached,
            "survivalTime": self.survival_time,
            "accuracy": self.accuracy,
            "shotsFired": self.shots_fired,
            "shotsHit": self.shots_hit,
            "powerupsCollected": self.powerups_collected,
            "maxCombo": self.max_combo,
            "gameMode": self.game_mode,
            "difficulty": self.difficulty,
        }


class ScoreClient:
    """
    Thin requests-based client. Keeps the bearer token and user returned by
    register/login; every failure surfaces as ApiError.
    """

    def __init__(
        self,
        base_url: str = API_CONFIG["base_url"],
        timeout: float = API_CONFIG["timeout"],
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token
        self.user: Optional[dict] = None
        self.session = session or requests.Session()

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token and self.user)

    def logout(self):
        self.token = None
        self.user = None

    # ----------------------------
    # Transport
    # ----------------------------

    def _request(self, method: str, path: str, auth: bool = False,
                 json: Optional[dict] = None, params: Optional[dict] = None) -> Any:
        headers = {}
        if auth:
            if not self.token:
                raise ApiError(401, AuthErrorCode.NO_TOKEN.value, "Access token required")
            headers["Authorization"] = f"Bearer {self.token}"

        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, json=json, params=params, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(0, "NETWORK_ERROR", str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            body = data if isinstance(data, dict) else {}
            raise ApiError(
                response.status_code,
                body.get("error", "SERVER_ERROR"),
                body.get("message", response.reason or ""),
                body.get("errors"),
            )
        if data is None:
            raise ApiError(response.status_code, "SERVER_ERROR", "Invalid JSON response")
        return data

    def _store_session(self, data: dict) -> dict:
        self.token = data.get("token")
        self.user = data.get("user")
        return data

    # ----------------------------
    # Auth
    # ----------------------------

    def register(self, username: str, email: str, password: str) -> dict:
        data = self._request("POST", "/auth/register", json={
            "username": username, "email": email, "password": password,
        })
        return self._store_session(data)

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._store_session(data)

    def verify(self) -> dict:
        data = self._request("GET", "/auth/verify", auth=True)
        if data.get("user"):
            self.user = data["user"]
        return data

    def google_login_url(self, redirect: Optional[str] = None) -> str:
        """Start of the OAuth redirect flow; the callback returns token and user in the query"""
        url = f"{self.base_url}/auth/google"
        if redirect:
            url += "?" + urlencode({"redirect": redirect})
        return url

    # ----------------------------
    # Game
    # ----------------------------

    def save_score(self, submission: ScoreSubmission) -> dict:
        return self._request("POST", "/api/game/save-score", auth=True, json=submission.to_payload())

    def leaderboard(self, limit: Optional[int] = None) -> List[dict]:
        params = {"limit": limit} if limit is not None else None
        return self._request("GET", "/api/game/leaderboard", params=params)

    def user_stats(self, user_id: str) -> dict:
        return self._request("GET", f"/api/game/user-stats/{user_id}", auth=True)

    # ----------------------------
    # Users
    # ----------------------------

    def profile(self) -> dict:
        return self._request("GET", "/api/users/profile", auth=True)

    def update_profile(self, **fields) -> dict:
        data = self._request("PUT", "/api/users/profile", auth=True, json=fields)
        if isinstance(data.get("user"), dict):
            self.user = data["user"]
        return data

    def change_password(self, current_password: str, new_password: str) -> dict:
        return self._request("PUT", "/api/users/change-password", auth=True, json={
            "currentPassword": current_password, "newPassword": new_password,
        })

    def delete_account(self, password: Optional[str] = None) -> dict:
        body = {"password": password} if password is not None else None
        data = self._request("DELETE", "/api/users/account", auth=True, json=body)
        self.logout()
        return data
