"""Pygame render surface - retained state drawn every frame.

The simulation pushes changes (actor transform, obstacle visuals, screens,
HUD) into this surface; draw() paints the current state onto a
pygame.Surface. The play area is drawn at the top-left of the target,
scaled to fit when the window size differs.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import pygame

from games.FlappyGate import config
from games.FlappyGate.game.render import HostUnavailableError, RenderSurface


def open_display(width: int, height: int, fullscreen: bool = False,
                 caption: str = "Flappy Gate") -> pygame.Surface:
    """Initialize pygame and open the game window.

    Raises:
        HostUnavailableError: If no display can be opened
    """
    pygame.init()
    try:
        if fullscreen:
            screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            screen = pygame.display.set_mode((width, height))
    except pygame.error as e:
        raise HostUnavailableError(f"Cannot open a {width}x{height} display: {e}") from e
    pygame.display.set_caption(caption)
    return screen


@dataclass
class ObstacleVisual:
    """Retained visual state of one obstacle."""
    x: float
    top_height: float
    bottom_height: float
    width: float


class PygameRenderSurface(RenderSurface):
    """Renders the game with simple shapes.

    - Actor: yellow square with outline, rotated with its velocity
    - Obstacles: green barriers above and below the gate
    - HUD: score, level and difficulty label
    - Screens: start prompt, game over summary
    """

    SCREEN_NONE = 'none'
    SCREEN_START = 'start'
    SCREEN_GAME_OVER = 'game_over'

    def __init__(
        self,
        play_width: float = config.PLAY_WIDTH,
        play_height: float = config.PLAY_HEIGHT,
        actor_x: float = config.ACTOR_X,
        actor_size: float = config.ACTOR_SIZE,
        actor_start_y: float = config.ACTOR_START_Y,
        hitbox_inset_x: float = config.HITBOX_INSET_X,
        collision_margin: float = config.COLLISION_MARGIN,
        show_hitboxes: bool = config.SHOW_HITBOXES,
    ):
        """Initialize surface state.

        hitbox_inset_x and collision_margin should be the values the
        controller collides with.
        """
        self._play_width = play_width
        self._play_height = play_height
        self._actor_x = actor_x
        self._actor_size = actor_size
        self._hitbox_inset_x = hitbox_inset_x
        self._collision_margin = collision_margin
        self._show_hitboxes = show_hitboxes

        self._actor_position = actor_start_y
        self._actor_rotation = 0.0
        self._obstacles: Dict[int, ObstacleVisual] = {}

        self._screen = self.SCREEN_START
        self._score = 0
        self._level = 1
        self._label = ''
        self._final: Tuple[int, int, str] = (0, 1, '')
        self._level_flash = False

        self._actor_image = self._build_actor_image()
        self._font: Optional[pygame.font.Font] = None
        self._small_font: Optional[pygame.font.Font] = None

    def _build_actor_image(self) -> pygame.Surface:
        size = int(self._actor_size)
        image = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.rect(image, config.ACTOR_COLOR, (0, 0, size, size), border_radius=6)
        pygame.draw.rect(image, config.ACTOR_OUTLINE_COLOR, (0, 0, size, size), 2, border_radius=6)
        # Eye, so the rotation is visible
        pygame.draw.circle(image, (0, 0, 0), (int(size * 0.7), int(size * 0.35)), max(2, size // 10))
        return image

    def _ensure_fonts(self) -> None:
        """Ensure fonts are initialized."""
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, 48)
            self._small_font = pygame.font.Font(None, 28)

    # =========================================================================
    # RenderSurface interface
    # =========================================================================

    def set_actor_transform(self, position: float, rotation: float) -> None:
        self._actor_position = position
        self._actor_rotation = rotation

    def create_obstacle_visual(self, obstacle_id: int, x: float, top_height: float,
                               bottom_height: float, width: float) -> None:
        self._obstacles[obstacle_id] = ObstacleVisual(x, top_height, bottom_height, width)

    def update_obstacle_visual(self, obstacle_id: int, x: float) -> None:
        visual = self._obstacles.get(obstacle_id)
        if visual is not None:
            visual.x = x

    def destroy_obstacle_visual(self, obstacle_id: int) -> None:
        self._obstacles.pop(obstacle_id, None)

    def show_start_screen(self) -> None:
        self._screen = self.SCREEN_START

    def hide_screens(self) -> None:
        self._screen = self.SCREEN_NONE

    def show_game_over(self, score: int, level: int, difficulty_label: str) -> None:
        self._screen = self.SCREEN_GAME_OVER
        self._final = (score, level, difficulty_label)

    def update_hud(self, score: int, level: int, difficulty_label: str) -> None:
        self._score = score
        self._level = level
        self._label = difficulty_label

    def flash_level_up(self, active: bool) -> None:
        self._level_flash = active

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def screen_mode(self) -> str:
        """Which overlay is showing: 'start', 'game_over' or 'none'."""
        return self._screen

    @property
    def obstacle_count(self) -> int:
        return len(self._obstacles)

    @property
    def actor_transform(self) -> Tuple[float, float]:
        return self._actor_position, self._actor_rotation

    @property
    def level_flash(self) -> bool:
        return self._level_flash

    @property
    def hitbox(self) -> Tuple[float, float, float, float]:
        """Actor collision box as (x, y, width, height)."""
        return (
            self._actor_x + self._hitbox_inset_x,
            self._actor_position + self._collision_margin,
            self._actor_size - 2 * self._hitbox_inset_x,
            self._actor_size - 2 * self._collision_margin,
        )

    # =========================================================================
    # Drawing
    # =========================================================================

    def draw(self, screen: pygame.Surface) -> None:
        """Paint the current state onto screen."""
        play = pygame.Surface((int(self._play_width), int(self._play_height)))
        play.fill(config.BACKGROUND_COLOR)

        self._draw_obstacles(play)
        self._draw_actor(play)
        if self._screen != self.SCREEN_START:
            self._draw_hud(play)

        if self._screen == self.SCREEN_START:
            self._draw_start_screen(play)
        elif self._screen == self.SCREEN_GAME_OVER:
            self._draw_game_over(play)

        screen.fill((0, 0, 0))
        if screen.get_size() == play.get_size():
            screen.blit(play, (0, 0))
        else:
            # Keep aspect ratio, centered
            sw, sh = screen.get_size()
            scale = min(sw / self._play_width, sh / self._play_height)
            size = (int(self._play_width * scale), int(self._play_height * scale))
            scaled = pygame.transform.scale(play, size)
            screen.blit(scaled, ((sw - size[0]) // 2, (sh - size[1]) // 2))

    def _draw_obstacles(self, play: pygame.Surface) -> None:
        for visual in self._obstacles.values():
            top = pygame.Rect(int(visual.x), 0, int(visual.width), int(visual.top_height))
            bottom_y = int(self._play_height - visual.bottom_height)
            bottom = pygame.Rect(int(visual.x), bottom_y, int(visual.width), int(visual.bottom_height))
            for rect in (top, bottom):
                pygame.draw.rect(play, config.OBSTACLE_COLOR, rect)
                pygame.draw.rect(play, config.OBSTACLE_EDGE_COLOR, rect, 3)

    def _draw_actor(self, play: pygame.Surface) -> None:
        # Positive rotation means nose down; pygame rotates counter-clockwise
        rotated = pygame.transform.rotate(self._actor_image, -self._actor_rotation)
        half = self._actor_size / 2
        center = (self._actor_x + half, self._actor_position + half)
        play.blit(rotated, rotated.get_rect(center=(int(center[0]), int(center[1]))))

        if self._show_hitboxes:
            x, y, w, h = self.hitbox
            pygame.draw.rect(play, config.HITBOX_COLOR, (int(x), int(y), int(w), int(h)), 1)

    def _draw_hud(self, play: pygame.Surface) -> None:
        self._ensure_fonts()
        score_text = self._font.render(str(self._score), True, config.HUD_COLOR)
        play.blit(score_text, score_text.get_rect(midtop=(int(self._play_width / 2), 20)))

        level_color = config.LEVEL_FLASH_COLOR if self._level_flash else config.LEVEL_COLOR
        level_text = self._small_font.render(f"Level {self._level}", True, level_color)
        play.blit(level_text, (10, 10))

        label_text = self._small_font.render(self._label, True, config.HUD_COLOR)
        play.blit(label_text, label_text.get_rect(topright=(int(self._play_width - 10), 10)))

    def _draw_overlay(self, play: pygame.Surface) -> None:
        overlay = pygame.Surface(play.get_size(), pygame.SRCALPHA)
        overlay.fill(config.OVERLAY_COLOR)
        play.blit(overlay, (0, 0))

    def _draw_centered(self, play: pygame.Surface, font: pygame.font.Font,
                       text: str, y: float, color=config.HUD_COLOR) -> None:
        surface = font.render(text, True, color)
        play.blit(surface, surface.get_rect(center=(int(self._play_width / 2), int(y))))

    def _draw_start_screen(self, play: pygame.Surface) -> None:
        self._ensure_fonts()
        self._draw_overlay(play)
        mid = self._play_height / 2
        self._draw_centered(play, self._font, "FLAPPY GATE", mid - 60)
        self._draw_centered(play, self._small_font, "Click or press SPACE to flap", mid)
        self._draw_centered(play, self._small_font, "Press ENTER to start", mid + 40)

    def _draw_game_over(self, play: pygame.Surface) -> None:
        self._ensure_fonts()
        self._draw_overlay(play)
        score, level, label = self._final
        mid = self._play_height / 2
        self._draw_centered(play, self._font, "GAME OVER", mid - 80)
        self._draw_centered(play, self._small_font, f"Score: {score}", mid - 20)
        self._draw_centered(play, self._small_font, f"Level: {level}", mid + 10)
        self._draw_centered(play, self._small_font, label, mid + 40, config.LEVEL_COLOR)
        self._draw_centered(play, self._small_font, "Press ENTER or R to play again", mid + 90)
