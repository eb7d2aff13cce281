from .game_config import (
    ENGINE_CONFIG,
    SPAWN_CONFIG,
    MOTION_FACTORS,
    LOOP_CONFIG,
    SPEED_PROFILES,
    MANAGER_CONFIG,
    API_CONFIG,
    get_speed_profile,
)

__all__ = [
    "ENGINE_CONFIG",
    "SPAWN_CONFIG",
    "MOTION_FACTORS",
    "LOOP_CONFIG",
    "SPEED_PROFILES",
    "MANAGER_CONFIG",
    "API_CONFIG",
    "get_speed_profile",
]
