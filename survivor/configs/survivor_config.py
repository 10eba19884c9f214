"""
Run configuration for the survivor simulation
Session presets for the simulation core, the gym wrapper and the viewer
"""

# Simulation parameters (overrides on top of SimSettings defaults)
SIM_CONFIG = {
    "width": 900,
    "height": 600,
    "base_spawn_interval": 1.2,
    "difficulty_interval": 20.0,
    "spawn_rate_scale": 0.1,
    "boost_duration": 10.0,
    "boost_spawn_interval": 12.0,
}

# ==============================================================================
# PRESETS
# Alternate sessions for quick experiments
# ==============================================================================

# Faster ramp: difficulty steps every 8 seconds
SIM_CONFIG_RUSH = {
    **SIM_CONFIG,
    "difficulty_interval": 8.0,
    "base_spawn_interval": 0.9,
}

# Relaxed: slower spawns, longer boosts
SIM_CONFIG_CASUAL = {
    **SIM_CONFIG,
    "base_spawn_interval": 1.8,
    "boost_duration": 15.0,
    "contact_dps": 12.0,
}

SIM_PRESETS = {
    "default": SIM_CONFIG,
    "rush": SIM_CONFIG_RUSH,
    "casual": SIM_CONFIG_CASUAL,
}

# ==============================================================================
# GYM ENVIRONMENT
# ==============================================================================

ENV_CONFIG = {
    "dt": 1 / 30,
    "max_steps": 3600,  # 120s at 30 FPS
    "k_enemies": 5,
    "m_orbs": 3,
}

# ==============================================================================
# VIEWER
# ==============================================================================

VIEWER_CONFIG = {
    "title": "Survivor",
    "fps": 60,
    "max_dt": 0.05,  # clamp long frames (window drag, breakpoints)
}

# ==============================================================================
# REWARD SHAPING (gym wrapper)
# ==============================================================================

REWARD_CONFIG = {
    "R_SCORE": 1.0,      # per score point (tank kills count 3)
    "R_XP": 0.01,        # per XP point gained
    "R_DAMAGE": 0.05,    # penalty per health point lost
    "R_DEATH": 5.0,      # death penalty
}
