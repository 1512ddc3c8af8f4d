"""
FlappyGate-specific data models.

These models define the immutable records exchanged between the
simulation core and its host: difficulty profiles, scoring events,
debug snapshots and administrative state changes.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, ConfigDict

from .enums import RunState


class DifficultyProfile(BaseModel):
    """Immutable per-level difficulty parameters.

    Attributes:
        level: Level this profile applies to (1-based)
        label: Display name shown in the HUD and on the game over screen
        gap: Height of the passable gate in pixels
        speed: Horizontal obstacle speed in pixels per tick
        spawn_interval: Seconds between obstacle spawns
        gravity: Downward acceleration in pixels per tick squared

    Examples:
        >>> profile = DifficultyProfile(level=1, label='Iniciante', gap=250,
        ...                             speed=1.5, spawn_interval=2.0, gravity=0.35)
        >>> profile.gap
        250.0
    """
    level: int = Field(..., ge=1)
    label: str
    gap: float = Field(..., gt=0)
    speed: float = Field(..., gt=0)
    spawn_interval: float = Field(..., gt=0)
    gravity: float = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"DifficultyProfile({self.level} {self.label!r}, gap={self.gap:.0f}, "
                f"speed={self.speed:.1f}, every={self.spawn_interval:.2f}s, g={self.gravity:.2f})")


class ScoreEvent(BaseModel):
    """An obstacle was passed by the actor during a field tick."""
    obstacle_id: int
    x: float

    model_config = ConfigDict(frozen=True)


class ObstacleInfo(BaseModel):
    """Debug view of a single obstacle."""
    obstacle_id: int
    x: float
    gate_top: float
    gate_bottom: float
    scored: bool
    is_off_screen: bool

    model_config = ConfigDict(frozen=True)


class GameSnapshot(BaseModel):
    """Debug view of the whole simulation.

    Attributes:
        run_state: Current controller run state
        score: Obstacles passed this run
        level: Current level
        difficulty: Label of the current difficulty profile
        obstacle_count: Live obstacles in the field
        actor_position: Actor distance from the top of the play area
        actor_velocity: Actor vertical velocity (positive = downward)
        best_score: Best score of this session
        games_played: Finished runs this session
    """
    run_state: RunState
    score: int
    level: int
    difficulty: str
    obstacle_count: int
    actor_position: float
    actor_velocity: float
    best_score: int = 0
    games_played: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def running(self) -> bool:
        """True while ticks are being processed."""
        return self.run_state == RunState.RUNNING


class ForcedState(BaseModel):
    """Validated request to overwrite score and/or level.

    At least one of the two values must be given. Consistency between
    score and level is checked by the controller, which knows the
    difficulty table.
    """
    score: Optional[int] = None
    level: Optional[int] = None

    @field_validator('score')
    @classmethod
    def validate_score(cls, v: Optional[int]) -> Optional[int]:
        """Validate score is non-negative."""
        if v is not None and v < 0:
            raise ValueError(f'Score must be non-negative, got {v}')
        return v

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: Optional[int]) -> Optional[int]:
        """Validate level is at least 1."""
        if v is not None and v < 1:
            raise ValueError(f'Level must be at least 1, got {v}')
        return v

    model_config = ConfigDict(frozen=True)
