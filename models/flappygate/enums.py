"""
FlappyGate-specific enumerations.
"""

from enum import Enum


class RunState(str, Enum):
    """Run states of the simulation controller.

    These map to the common GameState for platform compatibility:
    - STOPPED -> GameState.IDLE
    - RUNNING -> GameState.PLAYING
    - PAUSED -> GameState.PAUSED
    - GAME_OVER -> GameState.GAME_OVER

    Attributes:
        STOPPED: Not started yet, or stopped by the host
        RUNNING: Ticks and obstacle spawning are active
        PAUSED: Suspended by toggle_pause(); score and level are kept
        GAME_OVER: Ended by a collision or by leaving the play area
    """
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
