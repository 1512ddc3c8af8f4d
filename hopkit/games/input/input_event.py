"""
Input Event - Represents a single activation action.

This is a shared module used by all games.
Uses Pydantic for validation and immutability.
"""
from typing import Optional

from pydantic import BaseModel, field_validator, ConfigDict

from models import Vector2D, EventType


class InputEvent(BaseModel):
    """Immutable input event from any source.

    Represents a single primary action (pointer press or designated key).
    All input sources must convert their events to this common format.

    Attributes:
        timestamp: Time when the event occurred (seconds, from monotonic clock)
        event_type: Kind of activation (POINTER or KEY)
        position: Screen position for pointer events, None for keys
    """
    timestamp: float
    event_type: EventType = EventType.POINTER
    position: Optional[Vector2D] = None

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        """Validate timestamp is non-negative."""
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        if self.position is None:
            return f"InputEvent(t={self.timestamp:.3f}, type={self.event_type.value})"
        return (f"InputEvent(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"t={self.timestamp:.3f}, type={self.event_type.value})")
