"""
Game configuration for Cosmic Commander
Engine tuning, loop timing, manager bookkeeping and backend settings
"""

import os

# Engine parameters (World constructor kwargs)
ENGINE_CONFIG = {
    "width": 800,
    "height": 600,
    "time_scale": 0.85,        # smoothing factor applied to every clamped frame time
    "min_dt": 12.0,            # ms
    "max_dt": 33.0,            # ms, 30 FPS floor
    "max_particles": 150,
    "cleanup_interval_ms": 5000.0,
    "hit_padding": 20.0,       # forgiveness margin around bullet targets
    "invulnerability_ms": 2000.0,
    "double_shot_ms": 10000.0,
    "powerup_points": 10,
    "n_stars": 100,
}

# Spawner parameters (Spawner constructor kwargs)
SPAWN_CONFIG = {
    "enemy_interval": 1500.0,
    "enemy_timer_rate": 2.0,   # enemy accumulator runs at twice the elapsed rate
    "obstacle_interval": 3000.0,
    "powerup_interval": 12000.0,
    "max_enemies": 8,
}

# Per-collection velocity factors: displacement = speed * dt * factor
MOTION_FACTORS = {
    "player": 0.08,
    "bullet": 0.5,
    "enemy_bullet": 0.2,
    "enemy": 0.15,
    "obstacle": 0.12,
    "powerup": 0.15,
    "particle": 0.08,
    "star": 0.05,
}

# Game loop driver
LOOP_CONFIG = {
    # The elapsed-time clamp band lives in ENGINE_CONFIG only
    "fixed_step_ms": None,     # set to 16.0 to ignore real elapsed time
}

# ==============================================================================
# SPEED PROFILES
# The tuned engine variants, expressed as overrides of the configs above
# ==============================================================================

SPEED_PROFILES = {
    "balanced": {
        "description": "Default tuning, clamped real elapsed time",
        "engine": {},
        "spawn": {},
        "loop": {},
    },
    "arcade": {
        "description": "Faster spawns, tighter frame band",
        "engine": {"time_scale": 1.0, "max_dt": 30.0},
        "spawn": {"enemy_interval": 1200.0, "obstacle_interval": 2500.0},
        "loop": {},
    },
    "classic": {
        "description": "Fixed 16ms step, fewer particles, smaller enemy cap",
        "engine": {"time_scale": 1.0, "max_particles": 50},
        "spawn": {"max_enemies": 6},
        "loop": {"fixed_step_ms": 16.0},
    },
}

# ==============================================================================
# GAME MANAGER
# ==============================================================================

MANAGER_CONFIG = {
    "lives": 3,
    "combo_step": 0.1,
    "max_combo": 5.0,
    "level_score_step": 100,      # level up once score > level * step
    "speed_per_level": 0.15,
    "max_game_speed": 2.5,
    "initial_enemies": 4,
    "clock_interval": 0.1,        # seconds
    "reinforce_interval": 1.2,    # seconds
    "challenge_target": 50,
}

# ==============================================================================
# BACKEND
# ==============================================================================

API_CONFIG = {
    "base_url": os.environ.get("COSMIC_API_URL", "http://localhost:5000"),
    "timeout": 10,
    "leaderboard_limit": 10,
    "max_leaderboard_limit": 50,
}


def get_speed_profile(name: str) -> dict:
    """
    Resolve a speed profile into full engine/spawn/loop configs.
    Returns dict with: engine, spawn, loop
    """
    if name not in SPEED_PROFILES:
        raise ValueError(f"Unknown speed profile: {name}")

    profile = SPEED_PROFILES[name]
    return {
        "engine": {**ENGINE_CONFIG, **profile["engine"]},
        "spawn": {**SPAWN_CONFIG, **profile["spawn"]},
        "loop": {**LOOP_CONFIG, **profile["loop"]},
    }


# Print profile summary when loaded
if __name__ == "__main__":
    print(f"Speed profiles: {len(SPEED_PROFILES)}")
    print("-" * 70)
    for name, profile in SPEED_PROFILES.items():
        print(f"  {name:12} | {profile['description']}")
    print("-" * 70)
