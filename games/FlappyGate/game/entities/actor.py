"""Actor entity: the falling, player-controlled box.

The actor only moves vertically. Obstacles scroll past its fixed
horizontal position.
"""

from dataclasses import dataclass

from models import Rectangle


@dataclass
class ActorConfig:
    """Actor configuration from SimulationConfig or defaults."""

    x: float = 50.0             # Fixed left edge
    size: float = 30.0
    start_y: float = 250.0
    hitbox_inset_x: float = 5.0
    rotation_multiplier: float = 3.0
    max_rotation_up: float = -30.0
    max_rotation_down: float = 60.0


class Actor:
    """Vertical position and velocity under per-tick gravity."""

    def __init__(self, config: ActorConfig):
        """Initialize actor at its start height.

        Args:
            config: Actor configuration
        """
        self._config = config
        self._position = config.start_y
        self._velocity = 0.0

    @property
    def position(self) -> float:
        """Distance from the top of the play area to the actor's top edge."""
        return self._position

    @property
    def velocity(self) -> float:
        """Vertical velocity, positive = downward."""
        return self._velocity

    @property
    def x(self) -> float:
        """Fixed left edge."""
        return self._config.x

    @property
    def size(self) -> float:
        return self._config.size

    @property
    def rotation(self) -> float:
        """Tilt in degrees derived from velocity, clamped to the configured range."""
        return min(
            max(self._velocity * self._config.rotation_multiplier, self._config.max_rotation_up),
            self._config.max_rotation_down,
        )

    def reset(self) -> None:
        """Return to the start height with no velocity."""
        self._position = self._config.start_y
        self._velocity = 0.0

    def apply_tick(self, gravity: float) -> None:
        """Integrate one tick: velocity first, then position. No clamping.

        Args:
            gravity: Acceleration added to velocity this tick
        """
        self._velocity += gravity
        self._position += self._velocity

    def trigger_impulse(self, jump_force: float) -> None:
        """Replace the current velocity with an upward impulse.

        Args:
            jump_force: New velocity (negative = upward)
        """
        self._velocity = jump_force

    def is_out_of_bounds(self, play_height: float, actor_size: float) -> bool:
        """True above the top edge or below the floor."""
        return self._position < 0 or self._position > play_height - actor_size

    def collision_rect(self, margin: float) -> Rectangle:
        """Hitbox slightly smaller than the drawn box.

        Args:
            margin: Vertical inset applied to top and bottom

        Returns:
            Rectangle spanning [x + inset, x + size - inset] horizontally and
            [position + margin, position + size - margin] vertically
        """
        inset = self._config.hitbox_inset_x
        return Rectangle(
            x=self._config.x + inset,
            y=self._position + margin,
            width=self._config.size - 2 * inset,
            height=self._config.size - 2 * margin,
        )

    def set_state(self, position: float, velocity: float = 0.0) -> None:
        """Place the actor directly (tests and debugging)."""
        self._position = position
        self._velocity = velocity
