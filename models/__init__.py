"""
Unified models library.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric types (Point2D, Vector2D, Rectangle)
- Enums: Input event kinds
- FlappyGate: Game-specific records (difficulty profiles, snapshots)

Usage:
    >>> from models import Point2D, Rectangle
    >>> from models.flappygate import DifficultyProfile, GameSnapshot
"""

from .primitives import (
    Point2D,
    Vector2D,
    Rectangle,
)

from .enums import EventType

from .flappygate import (
    RunState,
    DifficultyProfile,
    ScoreEvent,
    ObstacleInfo,
    GameSnapshot,
    ForcedState,
)

__all__ = [
    # Primitives
    "Point2D",
    "Vector2D",
    "Rectangle",
    # Enums
    "EventType",
    # FlappyGate
    "RunState",
    "DifficultyProfile",
    "ScoreEvent",
    "ObstacleInfo",
    "GameSnapshot",
    "ForcedState",
]
