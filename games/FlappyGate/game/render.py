"""Render collaborator interface for the simulation core.

The simulation never draws. It tells a RenderSurface what changed and the
surface decides how to show it. Implementations:

- NullRenderSurface: ignores every call (headless runs, tests)
- PygameRenderSurface: retained state drawn with pygame each frame
"""

from abc import ABC, abstractmethod


class HostUnavailableError(RuntimeError):
    """Raised at startup when the host cannot provide a render target."""
    pass


class RenderSurface(ABC):
    """Visual side of the game, driven by the simulation core."""

    @abstractmethod
    def set_actor_transform(self, position: float, rotation: float) -> None:
        """Place the actor at a vertical position with a rotation in degrees."""
        pass

    @abstractmethod
    def create_obstacle_visual(
        self,
        obstacle_id: int,
        x: float,
        top_height: float,
        bottom_height: float,
        width: float,
    ) -> None:
        """Create the visual for a new obstacle.

        Args:
            obstacle_id: Identifier used by later update/destroy calls
            x: Left edge of the obstacle
            top_height: Height of the upper barrier (0 to gate top)
            bottom_height: Height of the lower barrier (gate bottom to floor)
            width: Obstacle width
        """
        pass

    @abstractmethod
    def update_obstacle_visual(self, obstacle_id: int, x: float) -> None:
        """Move an obstacle visual horizontally."""
        pass

    @abstractmethod
    def destroy_obstacle_visual(self, obstacle_id: int) -> None:
        """Remove an obstacle visual."""
        pass

    @abstractmethod
    def show_start_screen(self) -> None:
        pass

    @abstractmethod
    def hide_screens(self) -> None:
        pass

    @abstractmethod
    def show_game_over(self, score: int, level: int, difficulty_label: str) -> None:
        pass

    @abstractmethod
    def update_hud(self, score: int, level: int, difficulty_label: str) -> None:
        """Refresh score, level and difficulty label."""
        pass

    @abstractmethod
    def flash_level_up(self, active: bool) -> None:
        """Turn the level-up highlight on or off."""
        pass


class NullRenderSurface(RenderSurface):
    """Surface that ignores every call."""

    def set_actor_transform(self, position: float, rotation: float) -> None:
        pass

    def create_obstacle_visual(self, obstacle_id: int, x: float, top_height: float,
                               bottom_height: float, width: float) -> None:
        pass

    def update_obstacle_visual(self, obstacle_id: int, x: float) -> None:
        pass

    def destroy_obstacle_visual(self, obstacle_id: int) -> None:
        pass

    def show_start_screen(self) -> None:
        pass

    def hide_screens(self) -> None:
        pass

    def show_game_over(self, score: int, level: int, difficulty_label: str) -> None:
        pass

    def update_hud(self, score: int, level: int, difficulty_label: str) -> None:
        pass

    def flash_level_up(self, active: bool) -> None:
        pass
