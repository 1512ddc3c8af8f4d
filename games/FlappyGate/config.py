"""
FlappyGate - Configuration loader.

Simulation constants can be overridden through environment variables or a
.env file next to this module. Units follow the simulation: positions in
play-area pixels, speeds and gravity per tick, timings in seconds.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Play area
PLAY_WIDTH = _get_int('PLAY_WIDTH', 400)
PLAY_HEIGHT = _get_int('PLAY_HEIGHT', 600)

# Actor
ACTOR_SIZE = _get_int('ACTOR_SIZE', 30)
ACTOR_X = _get_float('ACTOR_X', 50.0)               # Fixed left edge of the actor
ACTOR_START_Y = _get_float('ACTOR_START_Y', 250.0)
JUMP_FORCE = _get_float('JUMP_FORCE', -8.0)         # Velocity set by an impulse (negative = up)

# Obstacles
OBSTACLE_WIDTH = _get_int('OBSTACLE_WIDTH', 60)
GATE_MARGIN = _get_float('GATE_MARGIN', 100.0)      # Gate never closer than this to top/bottom

# Timing
TICK_INTERVAL = _get_float('TICK_INTERVAL', 0.016)  # ~60 ticks per second
FIRST_OBSTACLE_DELAY = _get_float('FIRST_OBSTACLE_DELAY', 1.0)
IMPULSE_CUE_DURATION = _get_float('IMPULSE_CUE_DURATION', 0.1)
LEVEL_UP_FLASH_DURATION = _get_float('LEVEL_UP_FLASH_DURATION', 0.5)

# Collision
COLLISION_MARGIN = _get_float('COLLISION_MARGIN', 3.0)  # Vertical forgiveness
HITBOX_INSET_X = _get_float('HITBOX_INSET_X', 5.0)      # Horizontal forgiveness

# Rotation cues (degrees, positive = nose down)
ROTATION_MULTIPLIER = _get_float('ROTATION_MULTIPLIER', 3.0)
MAX_ROTATION_UP = _get_float('MAX_ROTATION_UP', -30.0)
MAX_ROTATION_DOWN = _get_float('MAX_ROTATION_DOWN', 60.0)
IMPULSE_ROTATION = _get_float('IMPULSE_ROTATION', -20.0)
DEATH_ROTATION = _get_float('DEATH_ROTATION', 90.0)

# Progression
SCORE_PER_LEVEL = _get_int('SCORE_PER_LEVEL', 5)

# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', PLAY_WIDTH)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', PLAY_HEIGHT)
SHOW_HITBOXES = _get_bool('SHOW_HITBOXES', False)

# Visual
BACKGROUND_COLOR: Tuple[int, int, int] = (112, 197, 206)
ACTOR_COLOR: Tuple[int, int, int] = (255, 215, 0)
ACTOR_OUTLINE_COLOR: Tuple[int, int, int] = (230, 120, 30)
OBSTACLE_COLOR: Tuple[int, int, int] = (76, 175, 80)
OBSTACLE_EDGE_COLOR: Tuple[int, int, int] = (46, 125, 50)
HUD_COLOR: Tuple[int, int, int] = (255, 255, 255)
LEVEL_COLOR: Tuple[int, int, int] = (255, 235, 59)
LEVEL_FLASH_COLOR: Tuple[int, int, int] = (255, 68, 68)
OVERLAY_COLOR: Tuple[int, int, int, int] = (0, 0, 0, 160)
HITBOX_COLOR: Tuple[int, int, int] = (255, 0, 0)


@dataclass(frozen=True)
class SimulationConfig:
    """Simulation constants bundled for injection into the controller."""

    play_width: float = PLAY_WIDTH
    play_height: float = PLAY_HEIGHT
    actor_size: float = ACTOR_SIZE
    actor_x: float = ACTOR_X
    actor_start_y: float = ACTOR_START_Y
    jump_force: float = JUMP_FORCE
    obstacle_width: float = OBSTACLE_WIDTH
    gate_margin: float = GATE_MARGIN
    tick_interval: float = TICK_INTERVAL
    first_obstacle_delay: float = FIRST_OBSTACLE_DELAY
    impulse_cue_duration: float = IMPULSE_CUE_DURATION
    level_up_flash_duration: float = LEVEL_UP_FLASH_DURATION
    collision_margin: float = COLLISION_MARGIN
    hitbox_inset_x: float = HITBOX_INSET_X
    rotation_multiplier: float = ROTATION_MULTIPLIER
    max_rotation_up: float = MAX_ROTATION_UP
    max_rotation_down: float = MAX_ROTATION_DOWN
    impulse_rotation: float = IMPULSE_ROTATION
    death_rotation: float = DEATH_ROTATION
    score_per_level: int = SCORE_PER_LEVEL

