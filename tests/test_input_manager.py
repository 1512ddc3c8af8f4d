"""
Tests for the input layer: InputEvent, InputManager and the pointer/key source.
"""

from unittest.mock import Mock

import pygame
import pytest
from pydantic import ValidationError

from hopkit.games.input import InputEvent, InputManager
from hopkit.games.input.sources import InputSource, PointerKeyInputSource
from models import EventType, Vector2D


class TestInputEvent:
    """Tests for the InputEvent model."""

    def test_pointer_event(self):
        event = InputEvent(timestamp=1.0, position=Vector2D(x=10, y=20))

        assert event.event_type == EventType.POINTER
        assert "10.00" in str(event)

    def test_key_event_has_no_position(self):
        event = InputEvent(timestamp=1.0, event_type=EventType.KEY)

        assert event.position is None
        assert "key" in str(event)

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            InputEvent(timestamp=-1.0)

    def test_immutable(self):
        event = InputEvent(timestamp=1.0)
        with pytest.raises(ValidationError):
            event.timestamp = 2.0


class TestInputManager:
    """Tests for activation handler registration and dispatch."""

    def test_dispatch_fires_each_handler_per_event(self):
        manager = InputManager()
        handler = Mock()
        manager.on_activate(handler)

        count = manager.dispatch([InputEvent(timestamp=0.0), InputEvent(timestamp=0.1)])

        assert count == 2
        assert handler.call_count == 2

    def test_duplicate_registration_ignored(self):
        manager = InputManager()
        handler = Mock()

        manager.on_activate(handler)
        manager.on_activate(handler)
        manager.dispatch([InputEvent(timestamp=0.0)])

        assert manager.handler_count == 1
        handler.assert_called_once()

    def test_remove_activate(self):
        manager = InputManager()
        handler = Mock()
        manager.on_activate(handler)

        manager.remove_activate(handler)
        manager.remove_activate(handler)
        manager.dispatch([InputEvent(timestamp=0.0)])

        assert manager.handler_count == 0
        handler.assert_not_called()

    def test_events_come_from_source(self):
        source = Mock(spec=InputSource)
        source.poll_events.return_value = [InputEvent(timestamp=0.0)]
        manager = InputManager(source)

        manager.update(0.016)

        source.update.assert_called_once_with(0.016)
        assert len(manager.get_events()) == 1

    def test_no_source(self):
        manager = InputManager()

        manager.update(0.016)

        assert manager.has_source() is False
        assert manager.get_events() == []


class TestPointerKeyInputSource:
    """Tests for the pygame-backed source (headless display)."""

    @pytest.fixture(autouse=True)
    def pygame_display(self):
        pygame.display.init()
        pygame.display.set_mode((1, 1))
        pygame.event.clear()
        yield
        pygame.display.quit()

    def test_left_click_becomes_pointer_event(self):
        source = PointerKeyInputSource()
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(12, 34)))

        source.update(0.016)
        events = source.poll_events()

        assert len(events) == 1
        assert events[0].event_type == EventType.POINTER
        assert events[0].position.x == 12.0

    def test_activation_key_becomes_key_event(self):
        source = PointerKeyInputSource()
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))

        source.update(0.016)

        assert [e.event_type for e in source.poll_events()] == [EventType.KEY]

    def test_other_events_are_reposted(self):
        source = PointerKeyInputSource()
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p))

        source.update(0.016)

        assert source.poll_events() == []
        remaining = [e for e in pygame.event.get() if e.type == pygame.KEYDOWN]
        assert [e.key for e in remaining] == [pygame.K_p]
