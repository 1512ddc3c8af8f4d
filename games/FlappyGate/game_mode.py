"""FlappyGate - Steer a falling box through scrolling gates.

Features:
- Fixed-tick simulation driven by a cooperative scheduler
- Ten difficulty levels, one every five gates passed
- Optional YAML difficulty table
"""

import random
from typing import Any, Dict, List, Optional

import pygame

from hopkit.games import BaseGame, GameState
from hopkit.games.input import InputEvent, InputManager
from hopkit.logging import configure_logging, get_logger
from hopkit.scheduler import Scheduler
from models import GameSnapshot, RunState

from .config import SimulationConfig
from .difficulty import DIFFICULTY_LEVELS, load_difficulty_table
from .game.controller import SimulationController
from .game.pygame_surface import PygameRenderSurface

log = get_logger('flappygate')

_STATE_MAP = {
    RunState.STOPPED: GameState.IDLE,
    RunState.RUNNING: GameState.PLAYING,
    RunState.PAUSED: GameState.PAUSED,
    RunState.GAME_OVER: GameState.GAME_OVER,
}


class FlappyGateMode(BaseGame):
    """Flappy Gate game mode.

    The host calls update(dt) every frame; the scheduler turns elapsed
    time into fixed simulation ticks. Activations (click or space) reach
    the controller through the InputManager.
    """

    # Game metadata
    NAME = "Flappy Gate"
    DESCRIPTION = "Flap through the gates. Speed and gravity rise every five points."
    VERSION = "1.0.0"

    # CLI arguments
    ARGUMENTS = [
        {
            'name': '--difficulty-file',
            'type': str,
            'default': None,
            'help': 'YAML file with a replacement difficulty table'
        },
        {
            'name': '--autostart',
            'action': 'store_true',
            'default': False,
            'help': 'Start the first run without waiting for ENTER'
        },
    ]

    def __init__(
        self,
        difficulty_file: Optional[str] = None,
        seed: Optional[int] = None,
        log_level: Optional[str] = None,
        autostart: bool = False,
        sim_config: Optional[SimulationConfig] = None,
        **kwargs,
    ):
        """Initialize FlappyGate.

        Args:
            difficulty_file: Optional YAML difficulty table
            seed: Random seed for gate placement
            log_level: Default log level
            autostart: Start a run immediately
            sim_config: Simulation constants (defaults from config.py)
            **kwargs: Base game args

        Raises:
            FileNotFoundError: If difficulty_file does not exist
            DifficultyTableError: If the difficulty table is malformed
        """
        if log_level:
            configure_logging(level=log_level)

        super().__init__(**kwargs)

        self._sim_config = sim_config or SimulationConfig()
        if difficulty_file:
            table = load_difficulty_table(
                difficulty_file,
                play_height=self._sim_config.play_height,
                gate_margin=self._sim_config.gate_margin,
            )
            log.info("Loaded %d difficulty levels from %s", len(table), difficulty_file)
        else:
            table = DIFFICULTY_LEVELS

        self._scheduler = Scheduler()
        self._surface = PygameRenderSurface(
            play_width=self._sim_config.play_width,
            play_height=self._sim_config.play_height,
            actor_x=self._sim_config.actor_x,
            actor_size=self._sim_config.actor_size,
            actor_start_y=self._sim_config.actor_start_y,
            hitbox_inset_x=self._sim_config.hitbox_inset_x,
            collision_margin=self._sim_config.collision_margin,
        )
        self._input = InputManager()
        self._controller = SimulationController(
            self._scheduler,
            self._surface,
            self._input,
            table=table,
            config=self._sim_config,
            rng=random.Random(seed),
        )

        self._surface.show_start_screen()
        if autostart:
            self._controller.start()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def controller(self) -> SimulationController:
        return self._controller

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def surface(self) -> PygameRenderSurface:
        return self._surface

    @property
    def input_manager(self) -> InputManager:
        return self._input

    # =========================================================================
    # BaseGame interface
    # =========================================================================

    def _get_internal_state(self) -> GameState:
        return _STATE_MAP[self._controller.run_state]

    def get_score(self) -> int:
        return self._controller.score

    def handle_input(self, events: List[InputEvent]) -> None:
        """Each event is one activation (flap)."""
        self._input.dispatch(events)

    def update(self, dt: float) -> None:
        """Run every simulation callback that fell due during dt."""
        self._scheduler.advance(dt)

    def render(self, screen: pygame.Surface) -> None:
        self._surface.draw(screen)

    def reset(self) -> None:
        """Back to the start screen."""
        self._controller.reset()

    # =========================================================================
    # Host actions
    # =========================================================================

    def get_available_actions(self) -> List[Dict[str, Any]]:
        """Actions offered by the host UI for the current state."""
        state = self._controller.run_state
        if state == RunState.STOPPED:
            return [{'id': 'start', 'label': 'Start', 'style': 'primary'}]
        if state == RunState.RUNNING:
            return [{'id': 'pause', 'label': 'Pause', 'style': 'secondary'}]
        if state == RunState.PAUSED:
            return [
                {'id': 'pause', 'label': 'Resume', 'style': 'primary'},
                {'id': 'restart', 'label': 'Restart', 'style': 'secondary'},
            ]
        return [{'id': 'restart', 'label': 'Play Again', 'style': 'primary'}]

    def execute_action(self, action_id: str) -> bool:
        if action_id == 'start':
            if self._controller.run_state in (RunState.RUNNING, RunState.PAUSED):
                return False
            self._controller.start()
            return True
        if action_id == 'restart':
            self._controller.restart()
            return True
        if action_id == 'pause':
            before = self._controller.run_state
            return self._controller.toggle_pause() != before
        return False

    def get_snapshot(self) -> GameSnapshot:
        """Debug snapshot of the simulation."""
        return self._controller.get_state()

