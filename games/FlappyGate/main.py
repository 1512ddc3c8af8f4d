#!/usr/bin/env python3
"""FlappyGate - Standalone Entry Point.

Run this to play with mouse or keyboard.

Usage:
    python main.py
    python main.py --seed 42 --autostart
    python main.py --difficulty-file levels.yaml --log-level DEBUG
"""

import argparse
import os
import sys

# Add project root to path for imports
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import pygame

from hopkit.games import GameState
from hopkit.games.input.sources import PointerKeyInputSource
from hopkit.logging import close_all_sinks, create_sink_for_environment, get_logger, register_sink
from games.FlappyGate.config import SCREEN_WIDTH, SCREEN_HEIGHT
from games.FlappyGate.game.render import HostUnavailableError
from games.FlappyGate.game.pygame_surface import open_display
from games.FlappyGate.game_mode import FlappyGateMode

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    """Display options plus every argument FlappyGateMode declares."""
    parser = argparse.ArgumentParser(
        description=f"{FlappyGateMode.NAME} - {FlappyGateMode.DESCRIPTION}")
    parser.add_argument('--version', action='version',
                        version=f"%(prog)s {FlappyGateMode.VERSION}")

    # Display options
    parser.add_argument('--width', type=int, default=SCREEN_WIDTH, help='Screen width')
    parser.add_argument('--height', type=int, default=SCREEN_HEIGHT, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', help='Run fullscreen')

    # Game options
    for arg_def in FlappyGateMode.get_arguments():
        kwargs = {key: value for key, value in arg_def.items() if key != 'name'}
        if 'action' in kwargs:
            kwargs.pop('type', None)  # action and type are mutually exclusive
        parser.add_argument(arg_def['name'], **kwargs)

    return parser


def game_kwargs(args: argparse.Namespace) -> dict:
    """Constructor keyword arguments for the game options in args."""
    result = {}
    for arg_def in FlappyGateMode.get_arguments():
        dest = arg_def['name'].lstrip('-').replace('-', '_')
        result[dest] = getattr(args, dest)
    return result


def _open_display_or_retry(width: int, height: int, fullscreen: bool, caption: str):
    """Open the window, offering a retry when the host has no display.

    Returns:
        The display surface, or None if the user gave up
    """
    while True:
        try:
            return open_display(width, height, fullscreen, caption=caption)
        except HostUnavailableError as e:
            log.error("%s", e)
            pygame.quit()
            print(f"\n{caption} could not open a window.")
            print("Check that a display is available, then press ENTER to try again")
            print("(or type q and ENTER to quit).")
            try:
                answer = input("> ")
            except EOFError:
                return None
            if answer.strip().lower() == 'q':
                return None


def main(argv=None):
    """Run FlappyGate standalone."""
    args = build_parser().parse_args(argv)

    game = FlappyGateMode(**game_kwargs(args))
    register_sink('session', create_sink_for_environment('session'))

    screen = _open_display_or_retry(args.width, args.height, args.fullscreen,
                                    caption=FlappyGateMode.NAME)
    if screen is None:
        game.controller.dispose()
        close_all_sinks()
        return 1

    input_manager = game.input_manager
    input_manager.set_source(PointerKeyInputSource())

    # Game loop
    clock = pygame.time.Clock()
    running = True

    print("\n" + "=" * 50)
    print(FlappyGateMode.NAME.upper())
    print("=" * 50)
    print("Controls:")
    print("  - Click or SPACE to flap")
    print("  - ENTER to start / play again")
    print("  - P to pause, R to restart")
    print("  - ESC to quit")
    print("=" * 50 + "\n")

    try:
        while running:
            dt = clock.tick(60) / 1000.0  # 60 FPS

            # Activations first; everything else is re-posted for us
            input_manager.update(dt)
            game.handle_input(input_manager.get_events())

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                        if game.state == GameState.IDLE:
                            game.execute_action('start')
                        elif game.state == GameState.GAME_OVER:
                            game.execute_action('restart')
                    elif event.key == pygame.K_p:
                        game.execute_action('pause')
                    elif event.key == pygame.K_r:
                        game.execute_action('restart')
                        print("Game restarted!")

            game.update(dt)

            game.render(screen)
            pygame.display.flip()
    finally:
        game.controller.dispose()
        close_all_sinks()
        pygame.quit()

    snapshot = game.get_snapshot()
    print(f"Best score: {snapshot.best_score} in {snapshot.games_played} games")
    return 0


if __name__ == "__main__":
    sys.exit(main())
