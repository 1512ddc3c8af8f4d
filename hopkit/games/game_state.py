"""Common GameState enum for all games.

All games must use this standard GameState enum for compatibility with
the standalone runners and the host UI.

Games can have additional internal states, but must map them to these
standard states via the `state` property.
"""
from enum import Enum


class GameState(Enum):
    """Standard game states used by the framework.

    States:
        IDLE: Waiting on the start screen, nothing simulated
        PLAYING: Active gameplay in progress
        PAUSED: Game temporarily paused (manual pause)
        GAME_OVER: Game ended in loss/failure

    For games with internal states:
        class MyGameMode:
            @property
            def state(self) -> GameState:
                if self._internal_state in ("crashed", "fell"):
                    return GameState.GAME_OVER
                return GameState.PLAYING
    """
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
