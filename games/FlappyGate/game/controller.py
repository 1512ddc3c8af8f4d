"""
SimulationController - Run state, scoring and the fixed-tick loop.

The controller owns the actor, the obstacle field, score, level and the
current difficulty profile. The Scheduler calls tick() at a fixed cadence
while a run is active; everything the player sees goes through the
RenderSurface.

States:
    STOPPED -> RUNNING -> (PAUSED <-> RUNNING) -> GAME_OVER
    stop() returns any state to STOPPED without a game over.

Usage:
    scheduler = Scheduler()
    controller = SimulationController(scheduler, surface, input_manager)
    controller.start()

    # In game loop:
    scheduler.advance(dt)
"""
import random
from typing import Optional

from hopkit.games.input import InputManager
from hopkit.logging import emit_record, get_logger
from hopkit.scheduler import ScheduledCallback, Scheduler
from models import DifficultyProfile, ForcedState, GameSnapshot, RunState
from games.FlappyGate.config import SimulationConfig
from games.FlappyGate.difficulty import (
    DIFFICULTY_LEVELS,
    DifficultyTable,
    get_profile,
    level_for_score,
    max_level,
)
from games.FlappyGate.game.entities.actor import Actor, ActorConfig
from games.FlappyGate.game.obstacle_field import ObstacleField
from games.FlappyGate.game.render import NullRenderSurface, RenderSurface

log = get_logger('controller')


class SimulationController:
    """Drives one actor through an obstacle field at a fixed tick rate."""

    def __init__(
        self,
        scheduler: Scheduler,
        surface: Optional[RenderSurface] = None,
        input_manager: Optional[InputManager] = None,
        table: DifficultyTable = DIFFICULTY_LEVELS,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Create a stopped controller.

        Args:
            scheduler: Scheduler shared with the host loop
            surface: Render collaborator (defaults to a no-op surface)
            input_manager: If given, activations trigger handle_input()
            table: Difficulty profiles indexed by level
            config: Simulation constants
            rng: Random source for obstacle placement
        """
        self._scheduler = scheduler
        self._surface = surface or NullRenderSurface()
        self._input = input_manager
        self._table = table
        self._config = config or SimulationConfig()

        self._actor = Actor(ActorConfig(
            x=self._config.actor_x,
            size=self._config.actor_size,
            start_y=self._config.actor_start_y,
            hitbox_inset_x=self._config.hitbox_inset_x,
            rotation_multiplier=self._config.rotation_multiplier,
            max_rotation_up=self._config.max_rotation_up,
            max_rotation_down=self._config.max_rotation_down,
        ))
        self._field = ObstacleField(scheduler, self._surface, self._config, rng)

        self._run_state = RunState.STOPPED
        self._score = 0
        self._level = 1
        self._difficulty: DifficultyProfile = get_profile(1, table)

        # Session statistics
        self._best_score = 0
        self._games_played = 0

        # Scheduled callbacks owned by the current run
        self._tick_timer: Optional[ScheduledCallback] = None
        self._impulse_timer: Optional[ScheduledCallback] = None
        self._flash_timer: Optional[ScheduledCallback] = None
        self._cue_rotation: Optional[float] = None

        if self._input is not None:
            self._input.on_activate(self.handle_input)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def running(self) -> bool:
        return self._run_state == RunState.RUNNING

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._level

    @property
    def difficulty(self) -> DifficultyProfile:
        return self._difficulty

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def games_played(self) -> int:
        return self._games_played

    @property
    def actor(self) -> Actor:
        return self._actor

    @property
    def field(self) -> ObstacleField:
        return self._field

    # =========================================================================
    # Run lifecycle
    # =========================================================================

    def start(self) -> None:
        """Begin a new run from score 0 at level 1."""
        self._cancel_run_callbacks()

        self._score = 0
        self._level = 1
        self._difficulty = get_profile(1, self._table)

        self._actor.reset()
        self._field.clear()
        self._run_state = RunState.RUNNING

        self._tick_timer = self._scheduler.call_every(
            self._config.tick_interval, self.tick, name='tick')
        self._field.start(self._difficulty)

        self._surface.hide_screens()
        self._surface.flash_level_up(False)
        self._surface.set_actor_transform(self._actor.position, self._actor.rotation)
        self._update_hud()
        log.info("Run started (%s)", self._difficulty.label)

    def restart(self) -> None:
        """Clear the field and start a new run."""
        self._field.clear()
        self.start()

    def stop(self) -> None:
        """Cancel every callback of the run without a game over. Idempotent."""
        self._cancel_run_callbacks()
        if self._run_state in (RunState.RUNNING, RunState.PAUSED):
            self._run_state = RunState.STOPPED
            log.debug("Run stopped at score %d", self._score)

    def reset(self) -> None:
        """Abandon any run and go back to the start screen."""
        self._cancel_run_callbacks()
        self._field.clear()
        self._actor.reset()
        self._run_state = RunState.STOPPED
        self._score = 0
        self._level = 1
        self._difficulty = get_profile(1, self._table)

        self._surface.flash_level_up(False)
        self._surface.set_actor_transform(self._actor.position, 0.0)
        self._update_hud()
        self._surface.show_start_screen()

    def dispose(self) -> None:
        """Stop, clear the field and release the input handler. Idempotent."""
        self.stop()
        self._field.clear()
        if self._input is not None:
            self._input.remove_activate(self.handle_input)

    def toggle_pause(self) -> RunState:
        """Pause a running game or resume a paused one.

        Any other state is left unchanged.

        Returns:
            The run state after the call
        """
        if self._run_state == RunState.RUNNING:
            self._scheduler.cancel(self._tick_timer)
            self._tick_timer = None
            self._field.stop()
            self._run_state = RunState.PAUSED
            log.debug("Paused at score %d", self._score)
        elif self._run_state == RunState.PAUSED:
            self._run_state = RunState.RUNNING
            self._scheduler.cancel(self._tick_timer)
            self._tick_timer = self._scheduler.call_every(
                self._config.tick_interval, self.tick, name='tick')
            self._field.start(self._difficulty)
            log.debug("Resumed at score %d", self._score)
        return self._run_state

    # =========================================================================
    # Simulation
    # =========================================================================

    def tick(self) -> None:
        """Advance the simulation by one step. Does nothing unless running."""
        if self._run_state != RunState.RUNNING:
            return

        self._actor.apply_tick(self._difficulty.gravity)
        self._push_actor_transform()

        if self._actor.is_out_of_bounds(self._config.play_height, self._config.actor_size):
            self._end_run('out_of_bounds')
            return

        for _ in self._field.tick(self._difficulty):
            self._on_scored()

        rect = self._actor.collision_rect(self._config.collision_margin)
        if self._field.check_collision(rect):
            self._end_run('collision')

    def handle_input(self) -> None:
        """Give the actor an upward impulse. Ignored unless running."""
        if self._run_state != RunState.RUNNING:
            return

        self._actor.trigger_impulse(self._config.jump_force)
        self._cue_rotation = self._config.impulse_rotation
        self._push_actor_transform()

        self._scheduler.cancel(self._impulse_timer)
        self._impulse_timer = self._scheduler.call_later(
            self._config.impulse_cue_duration, self._end_impulse_cue, name='impulse_cue')

    def _push_actor_transform(self) -> None:
        rotation = self._cue_rotation if self._cue_rotation is not None else self._actor.rotation
        self._surface.set_actor_transform(self._actor.position, rotation)

    def _end_impulse_cue(self) -> None:
        self._impulse_timer = None
        self._cue_rotation = None
        if self._run_state == RunState.RUNNING:
            self._push_actor_transform()

    def _on_scored(self) -> None:
        """Apply one scoring event and any level change it causes."""
        self._score += 1
        new_level = level_for_score(self._score, self._table, self._config.score_per_level)

        if new_level != self._level:
            self._level = new_level
            self._difficulty = get_profile(new_level, self._table)
            if self._run_state == RunState.RUNNING:
                self._field.restart(self._difficulty)
            self._flash_level_up()
            log.info("Level %d: %s", self._level, self._difficulty.label)

        self._update_hud()

    def _flash_level_up(self) -> None:
        self._surface.flash_level_up(True)
        self._scheduler.cancel(self._flash_timer)
        self._flash_timer = self._scheduler.call_later(
            self._config.level_up_flash_duration, self._end_flash, name='level_flash')

    def _end_flash(self) -> None:
        self._flash_timer = None
        self._surface.flash_level_up(False)

    def _end_run(self, reason: str) -> None:
        """Terminal transition: stop everything and show the result."""
        self._run_state = RunState.GAME_OVER
        self._cancel_run_callbacks()
        self._surface.flash_level_up(False)

        self._surface.set_actor_transform(self._actor.position, self._config.death_rotation)
        self._surface.show_game_over(self._score, self._level, self._difficulty.label)

        self._games_played += 1
        self._best_score = max(self._best_score, self._score)

        log.info("Game over (%s): score %d, level %d", reason, self._score, self._level)
        emit_record('session', {
            'event': 'game_over',
            'reason': reason,
            'score': self._score,
            'level': self._level,
            'difficulty': self._difficulty.label,
            'best_score': self._best_score,
            'games_played': self._games_played,
        })

    def _cancel_run_callbacks(self) -> None:
        self._scheduler.cancel(self._tick_timer)
        self._scheduler.cancel(self._impulse_timer)
        self._scheduler.cancel(self._flash_timer)
        self._tick_timer = None
        self._impulse_timer = None
        self._flash_timer = None
        self._cue_rotation = None
        self._field.stop()

    def _update_hud(self) -> None:
        self._surface.update_hud(self._score, self._level, self._difficulty.label)

    # =========================================================================
    # Administrative / debug
    # =========================================================================

    def force_state(self, score: Optional[int] = None, level: Optional[int] = None) -> None:
        """Overwrite score and/or level while keeping them consistent.

        Args:
            score: New score; the level is derived from it if level is omitted
            level: New level; the score becomes the first score of that level
                if score is omitted

        Raises:
            ValueError: If neither value is given, the level is not in the
                table, or score and level disagree
        """
        if score is None and level is None:
            raise ValueError("force_state needs a score, a level or both")
        forced = ForcedState(score=score, level=level)

        top = max_level(self._table)
        if forced.level is not None and forced.level > top:
            raise ValueError(f"Level must be between 1 and {top}, got {forced.level}")

        if forced.score is None:
            new_level = forced.level
            new_score = (new_level - 1) * self._config.score_per_level
        else:
            new_score = forced.score
            new_level = level_for_score(new_score, self._table, self._config.score_per_level)
            if forced.level is not None and forced.level != new_level:
                raise ValueError(
                    f"Score {new_score} belongs to level {new_level}, not {forced.level}")

        level_changed = new_level != self._level
        self._score = new_score
        self._level = new_level
        self._difficulty = get_profile(new_level, self._table)

        if level_changed and self._run_state == RunState.RUNNING:
            self._field.restart(self._difficulty)

        self._update_hud()
        log.debug("State forced to score %d, level %d", self._score, self._level)

    def add_score(self, points: int = 1) -> None:
        """Apply points scoring events as if obstacles had been passed.

        Raises:
            ValueError: If points is negative
        """
        if points < 0:
            raise ValueError(f"Points must be non-negative, got {points}")
        for _ in range(points):
            self._on_scored()

    def force_game_over(self) -> None:
        """End the current run as if the actor had crashed."""
        if self._run_state == RunState.RUNNING:
            self._end_run('forced')

    def get_state(self) -> GameSnapshot:
        """Get a snapshot of the simulation for debugging."""
        return GameSnapshot(
            run_state=self._run_state,
            score=self._score,
            level=self._level,
            difficulty=self._difficulty.label,
            obstacle_count=self._field.count,
            actor_position=self._actor.position,
            actor_velocity=self._actor.velocity,
            best_score=self._best_score,
            games_played=self._games_played,
        )
