"""
Input Manager - Collects input from a source and dispatches activations.

This is a shared module used by all games.
"""
from typing import Callable, List, Optional

from hopkit.games.input.input_event import InputEvent
from hopkit.games.input.sources.base import InputSource

ActivateCallback = Callable[[], None]


class InputManager:
    """Manages an input source and the handlers fired on activation.

    The InputManager allows games to switch between input sources at
    runtime without changing game logic. Games register activation handlers
    with on_activate(); every event passed to dispatch() fires each handler
    once.
    """

    def __init__(self, source: Optional[InputSource] = None):
        """Initialize with an optional input source."""
        self._source = source
        self._handlers: List[ActivateCallback] = []

    def set_source(self, source: InputSource) -> None:
        """Set the input source."""
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        """Get the currently active input source."""
        return self._source

    def has_source(self) -> bool:
        """Check if an input source is currently active."""
        return self._source is not None

    def on_activate(self, callback: ActivateCallback) -> None:
        """Register a handler for primary actions.

        Registering the same callback twice keeps a single registration.
        """
        if callback not in self._handlers:
            self._handlers.append(callback)

    def remove_activate(self, callback: ActivateCallback) -> None:
        """Unregister a handler. Unknown callbacks are ignored."""
        if callback in self._handlers:
            self._handlers.remove(callback)

    @property
    def handler_count(self) -> int:
        """Number of registered activation handlers."""
        return len(self._handlers)

    def update(self, dt: float) -> None:
        """Update the active input source.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Get collected events since last update."""
        if self._source is None:
            return []
        return self._source.poll_events()

    def dispatch(self, events: List[InputEvent]) -> int:
        """Fire the activation handlers once per event.

        Returns:
            Number of events dispatched
        """
        for _ in events:
            for handler in list(self._handlers):
                handler()
        return len(events)

    def clear_events(self) -> None:
        """Clear any pending events from the active source."""
        if self._source is not None:
            self._source.poll_events()
