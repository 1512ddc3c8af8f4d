"""
FlappyGate-specific models package.
"""

from .enums import RunState
from .models import (
    DifficultyProfile,
    ScoreEvent,
    ObstacleInfo,
    GameSnapshot,
    ForcedState,
)

__all__ = [
    "RunState",
    "DifficultyProfile",
    "ScoreEvent",
    "ObstacleInfo",
    "GameSnapshot",
    "ForcedState",
]
