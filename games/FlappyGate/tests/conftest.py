"""Shared fixtures for FlappyGate tests."""
import os
import random
from unittest.mock import Mock

# Headless pygame
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from hopkit.games.input import InputManager
from hopkit.scheduler import Scheduler
from games.FlappyGate.config import SimulationConfig
from games.FlappyGate.difficulty import DIFFICULTY_LEVELS
from games.FlappyGate.game.controller import SimulationController
from games.FlappyGate.game.render import RenderSurface


@pytest.fixture
def sim_config():
    """Default simulation constants, independent of any local .env."""
    return SimulationConfig(
        play_width=400, play_height=600, actor_size=30, actor_x=50.0,
        actor_start_y=250.0, jump_force=-8.0, obstacle_width=60,
        gate_margin=100.0, tick_interval=0.016, first_obstacle_delay=1.0,
        impulse_cue_duration=0.1, level_up_flash_duration=0.5,
        collision_margin=3.0, hitbox_inset_x=5.0, rotation_multiplier=3.0,
        max_rotation_up=-30.0, max_rotation_down=60.0, impulse_rotation=-20.0,
        death_rotation=90.0, score_per_level=5,
    )


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def surface():
    """Render collaborator that records every call."""
    return Mock(spec=RenderSurface)


@pytest.fixture
def fixed_rng():
    """Random source that always places the gate top at 150 (gate 150-400 at level 1)."""
    rng = Mock(spec=random.Random)
    rng.uniform.return_value = 150.0
    return rng


@pytest.fixture
def input_manager():
    return InputManager()


@pytest.fixture
def controller(scheduler, surface, input_manager, sim_config, fixed_rng):
    return SimulationController(
        scheduler,
        surface,
        input_manager,
        table=DIFFICULTY_LEVELS,
        config=sim_config,
        rng=fixed_rng,
    )
