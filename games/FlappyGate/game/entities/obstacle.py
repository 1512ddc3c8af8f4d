"""Obstacle entity: one gated barrier pair scrolling right to left.

An obstacle is two barriers, one hanging from the top of the play area
down to gate_top and one standing on the floor up from gate_bottom. The
actor passes safely only through the gate between them.
"""

from models import ObstacleInfo, Rectangle
from games.FlappyGate.game.render import RenderSurface


class Obstacle:
    """A gated barrier pair owning its horizontal position and gate bounds."""

    def __init__(
        self,
        surface: RenderSurface,
        obstacle_id: int,
        gate_top: float,
        gap: float,
        x: float,
        width: float,
        play_height: float,
    ):
        """Create an obstacle and its visual.

        Args:
            surface: Render collaborator that owns the visual
            obstacle_id: Identifier unique within the field
            gate_top: Distance from the top of the play area to the gate
            gap: Gate height
            x: Initial left edge (normally the right border of the play area)
            width: Obstacle width
            play_height: Play area height, for the lower barrier visual
        """
        self._surface = surface
        self._id = obstacle_id
        self._x = float(x)
        self._width = float(width)
        self._gate_top = float(gate_top)
        self._gate_bottom = float(gate_top + gap)
        self._scored = False
        self._destroyed = False

        self._surface.create_obstacle_visual(
            obstacle_id,
            self._x,
            self._gate_top,
            play_height - self._gate_bottom,
            self._width,
        )

    @property
    def obstacle_id(self) -> int:
        return self._id

    @property
    def x(self) -> float:
        return self._x

    @property
    def width(self) -> float:
        return self._width

    @property
    def gate_top(self) -> float:
        return self._gate_top

    @property
    def gate_bottom(self) -> float:
        return self._gate_bottom

    @property
    def scored(self) -> bool:
        """True once the actor has passed this obstacle."""
        return self._scored

    def advance(self, speed: float) -> None:
        """Move left by speed pixels and update the visual."""
        self._x -= speed
        if not self._destroyed:
            self._surface.update_obstacle_visual(self._id, self._x)

    def is_off_screen(self) -> bool:
        """True once the trailing edge has left the play area."""
        return self._x + self._width < 0

    def has_been_passed(self, actor_x: float) -> bool:
        """True if the actor cleared this obstacle and it was not scored yet."""
        return not self._scored and self._x + self._width < actor_x

    def mark_scored(self) -> None:
        self._scored = True

    def intersects(self, rect: Rectangle) -> bool:
        """Check a collision rectangle against both barriers.

        A rectangle that overlaps the obstacle horizontally collides when
        any part of it is above the gate top or below the gate bottom.
        """
        if rect.right <= self._x or rect.left >= self._x + self._width:
            return False
        return rect.top < self._gate_top or rect.bottom > self._gate_bottom

    def destroy(self) -> None:
        """Remove the visual. Safe to call more than once."""
        if self._destroyed:
            return
        self._destroyed = True
        self._surface.destroy_obstacle_visual(self._id)

    def get_info(self) -> ObstacleInfo:
        """Get debug info for this obstacle."""
        return ObstacleInfo(
            obstacle_id=self._id,
            x=self._x,
            gate_top=self._gate_top,
            gate_bottom=self._gate_bottom,
            scored=self._scored,
            is_off_screen=self.is_off_screen(),
        )

    def __repr__(self) -> str:
        return (f"Obstacle({self._id}, x={self._x:.1f}, "
                f"gate={self._gate_top:.0f}-{self._gate_bottom:.0f})")
