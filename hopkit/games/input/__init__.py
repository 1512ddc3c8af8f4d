"""
Input abstraction layer for games.

Provides unified input handling that works identically with mouse,
touch or keyboard sources.
"""

from hopkit.games.input.input_event import InputEvent
from hopkit.games.input.input_manager import InputManager

__all__ = ['InputEvent', 'InputManager']
