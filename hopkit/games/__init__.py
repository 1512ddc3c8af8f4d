"""
Hopkit Game Framework.

Provides:
- base_game: BaseGame class that all games should inherit from
- game_state: Standard GameState enum for platform compatibility
- input: Common input event handling
"""

from hopkit.games.game_state import GameState
from hopkit.games.base_game import BaseGame

__all__ = [
    'GameState',
    'BaseGame',
]
