"""
ObstacleField - Spawns, moves, scores and evicts obstacles.

The field owns the live obstacles in spawn order. Spawning is timed by the
shared Scheduler: one obstacle shortly after start, then one every
spawn_interval of the current difficulty profile.

Usage:
    field = ObstacleField(scheduler, surface, config)
    field.start(profile)

    # Every simulation tick:
    for event in field.tick(profile):
        ...
    if field.check_collision(actor.collision_rect(margin)):
        ...
"""
import itertools
import random
from typing import List, Optional, Tuple

from hopkit.logging import get_logger
from hopkit.scheduler import ScheduledCallback, Scheduler
from models import DifficultyProfile, ObstacleInfo, Rectangle, ScoreEvent
from games.FlappyGate.config import SimulationConfig
from games.FlappyGate.game.entities.obstacle import Obstacle
from games.FlappyGate.game.render import RenderSurface

log = get_logger('obstacle_field')


class ObstacleField:
    """Ordered collection of live obstacles with timed spawning."""

    def __init__(
        self,
        scheduler: Scheduler,
        surface: RenderSurface,
        config: SimulationConfig,
        rng: Optional[random.Random] = None,
    ):
        """Initialize an idle, empty field.

        Args:
            scheduler: Scheduler that times spawns
            surface: Render collaborator passed on to each obstacle
            config: Simulation constants
            rng: Random source for gate placement (seed it for reproducible runs)
        """
        self._scheduler = scheduler
        self._surface = surface
        self._config = config
        self._rng = rng or random.Random()

        self._obstacles: List[Obstacle] = []
        self._ids = itertools.count(1)
        self._difficulty: Optional[DifficultyProfile] = None
        self._spawn_timer: Optional[ScheduledCallback] = None
        self._first_spawn_timer: Optional[ScheduledCallback] = None

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        """Live obstacles, oldest first."""
        return tuple(self._obstacles)

    @property
    def count(self) -> int:
        return len(self._obstacles)

    @property
    def has_obstacles(self) -> bool:
        return len(self._obstacles) > 0

    @property
    def spawning(self) -> bool:
        """True while a spawn schedule is active."""
        return self._spawn_timer is not None or self._first_spawn_timer is not None

    # =========================================================================
    # Spawn scheduling
    # =========================================================================

    def start(self, difficulty: DifficultyProfile) -> None:
        """Begin spawning with a difficulty profile.

        Any existing schedule is cancelled first, so calling start() again
        never doubles the spawn rate. Live obstacles are kept.
        """
        self.stop()
        self._difficulty = difficulty
        self._spawn_timer = self._scheduler.call_every(
            difficulty.spawn_interval, self._on_spawn_timer, name='spawn')
        self._first_spawn_timer = self._scheduler.call_later(
            self._config.first_obstacle_delay, self._on_first_spawn, name='first_spawn')
        log.debug("Spawning every %.2fs (%s)", difficulty.spawn_interval, difficulty.label)

    def restart(self, difficulty: DifficultyProfile) -> None:
        """Re-establish spawning for a new difficulty.

        Obstacles already in flight keep their gap; they move at whatever
        speed later ticks pass in.
        """
        self.start(difficulty)

    def stop(self) -> None:
        """Cancel spawn scheduling. Live obstacles stay where they are."""
        self._scheduler.cancel(self._spawn_timer)
        self._scheduler.cancel(self._first_spawn_timer)
        self._spawn_timer = None
        self._first_spawn_timer = None

    def _on_spawn_timer(self) -> None:
        if self._difficulty is not None:
            self.spawn_one(self._difficulty)

    def _on_first_spawn(self) -> None:
        self._first_spawn_timer = None
        self._on_spawn_timer()

    def spawn_one(self, difficulty: DifficultyProfile) -> Obstacle:
        """Append a new obstacle at the right edge with a random gate.

        The gate top is uniform in [margin, play_height - margin - gap], so
        the gate never comes closer than the margin to either border.
        """
        margin = self._config.gate_margin
        high = max(margin, self._config.play_height - margin - difficulty.gap)
        gate_top = self._rng.uniform(margin, high)

        obstacle = Obstacle(
            self._surface,
            next(self._ids),
            gate_top,
            difficulty.gap,
            x=self._config.play_width,
            width=self._config.obstacle_width,
            play_height=self._config.play_height,
        )
        self._obstacles.append(obstacle)
        log.trace("spawned %r", obstacle)
        return obstacle

    # =========================================================================
    # Per-tick update
    # =========================================================================

    def tick(self, difficulty: DifficultyProfile) -> List[ScoreEvent]:
        """Advance every obstacle, collect score events and evict stale ones.

        Args:
            difficulty: Profile whose speed applies to this tick

        Returns:
            One ScoreEvent per obstacle the actor cleared during this tick
        """
        events: List[ScoreEvent] = []
        survivors: List[Obstacle] = []
        actor_x = self._config.actor_x

        for obstacle in self._obstacles:
            obstacle.advance(difficulty.speed)

            if obstacle.has_been_passed(actor_x):
                obstacle.mark_scored()
                events.append(ScoreEvent(obstacle_id=obstacle.obstacle_id, x=obstacle.x))

            if obstacle.is_off_screen():
                obstacle.destroy()
                log.trace("evicted %r", obstacle)
            else:
                survivors.append(obstacle)

        self._obstacles = survivors
        return events

    def check_collision(self, rect: Rectangle) -> bool:
        """True if the rectangle hits any live obstacle."""
        return any(obstacle.intersects(rect) for obstacle in self._obstacles)

    # =========================================================================
    # Cleanup / debug
    # =========================================================================

    def clear(self) -> None:
        """Destroy every obstacle visual and empty the field."""
        for obstacle in self._obstacles:
            obstacle.destroy()
        self._obstacles.clear()

    def get_all_info(self) -> List[ObstacleInfo]:
        """Get debug info for all live obstacles."""
        return [obstacle.get_info() for obstacle in self._obstacles]
