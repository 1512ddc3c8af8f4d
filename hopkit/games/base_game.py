"""Common interface between a hopkit game and the runner that hosts it.

A runner reads the class metadata to title its window and build its
command line, then drives the game with handle_input/update/render once
per frame.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import pygame

from hopkit.games.game_state import GameState
from hopkit.logging import get_logger

log = get_logger('base_game')


class BaseGame(ABC):
    """Abstract hopkit game.

    ARGUMENTS entries are keyword sets for argparse.add_argument plus a
    'name' key; the parsed value is passed to the constructor under the
    option's dest name (``--difficulty-file`` -> ``difficulty_file``).
    """

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = ""
    VERSION: str = "1.0.0"

    ARGUMENTS: List[Dict[str, Any]] = []

    # Offered by every game; a game's own entry with the same name wins
    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--log-level',
            'type': str,
            'default': None,
            'choices': ['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
            'help': 'Default log level (overrides HOPKIT_LOG_LEVEL)'
        },
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible runs'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Game arguments followed by the base ones, without duplicate names."""
        seen = set()
        result = []
        for arg in cls.ARGUMENTS + cls._BASE_ARGUMENTS:
            if arg['name'] not in seen:
                seen.add(arg['name'])
                result.append(arg)
        return result

    def __init__(self, **kwargs):
        if kwargs:
            log.debug("Ignoring unused game arguments: %s", sorted(kwargs))

    @property
    def state(self) -> GameState:
        return self._get_internal_state()

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        """Translate the game's own run state into a GameState."""

    @abstractmethod
    def get_score(self) -> int:
        pass

    @abstractmethod
    def handle_input(self, events: List) -> None:
        """Consume this frame's InputEvents."""

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance the game by dt seconds of wall time."""

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        pass

    @abstractmethod
    def reset(self) -> None:
        """Return to the start screen with a fresh score."""

    @abstractmethod
    def get_available_actions(self) -> List[Dict[str, Any]]:
        """Actions valid right now, as dicts with 'id', 'label' and 'style'."""

    @abstractmethod
    def execute_action(self, action_id: str) -> bool:
        """Run an action from get_available_actions(); False if not applicable."""
