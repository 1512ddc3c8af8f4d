"""
Pointer/Key Input Source - Left click or a designated key.

This is a shared module used by all games.
"""
import time
from typing import List

import pygame

from models import Vector2D, EventType
from hopkit.games.input.input_event import InputEvent
from hopkit.games.input.sources.base import InputSource


class PointerKeyInputSource(InputSource):
    """Left mouse button or activation key input source.

    Converts pygame left clicks and presses of the activation key into
    InputEvent models. Other events are re-posted to the pygame event queue
    for the main loop.
    """

    def __init__(self, activation_key: int = pygame.K_SPACE):
        """Initialize the input source.

        Args:
            activation_key: pygame key code that counts as a primary action
        """
        self._activation_key = activation_key
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect activations."""
        passthrough = []
        for event in pygame.event.get():
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                pos_x, pos_y = event.pos
                self._event_queue.append(InputEvent(
                    timestamp=time.monotonic(),
                    event_type=EventType.POINTER,
                    position=Vector2D(x=float(pos_x), y=float(pos_y)),
                ))
            elif event.type == pygame.KEYDOWN and event.key == self._activation_key:
                self._event_queue.append(InputEvent(
                    timestamp=time.monotonic(),
                    event_type=EventType.KEY,
                ))
            elif event.type != pygame.MOUSEMOTION:
                passthrough.append(event)

        # Re-post non-activation events for the main loop to handle
        for event in passthrough:
            pygame.event.post(event)

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
