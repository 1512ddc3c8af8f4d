"""
Enumerations shared by the input layer and games.
"""

from enum import Enum


class EventType(str, Enum):
    """Kinds of activation input.

    Attributes:
        POINTER: Primary pointer button press (mouse click, touch)
        KEY: Designated key press (space bar)
    """
    POINTER = "pointer"
    KEY = "key"
