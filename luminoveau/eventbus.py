"""A publish/subscribe event bus for named and system events."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Optional, Union

EventValue = Union[int, float, str]
EventData = dict[str, EventValue]
EventCallback = Callable[[], None]
EventCallbackData = Callable[[EventData], None]


class SystemEvent(enum.Enum):
    """Events raised by the engine itself."""

    GAMEPAD_CONNECTED = enum.auto()
    GAMEPAD_DISCONNECTED = enum.auto()
    WINDOW_RESIZE = enum.auto()
    WINDOW_FULLSCREEN = enum.auto()


class EventNotRegistered(LookupError):
    """A named event was fired with no matching callbacks registered."""

    def __init__(self, event: str) -> None:
        super().__init__(f"Event '{event}' not registered.")
        self.event = event


class EventBus:
    """Holds callbacks per event and calls them when the event fires.

    A named event keeps two separate callback lists: callbacks without
    arguments, called when the event fires without data, and callbacks
    taking a data dictionary, called when it fires with data.  System events
    always carry data.
    """

    def __init__(self) -> None:
        self._events: dict[str, list[EventCallback]] = {}
        self._events_data: dict[str, list[EventCallbackData]] = {}
        self._system_events: dict[SystemEvent, list[EventCallbackData]] = {}

    def register(
        self,
        event: Union[str, SystemEvent],
        callback: Callable[..., None],
        with_data: Optional[bool] = None,
    ) -> None:
        """Register *callback* for *event*.

        For a named event *with_data* chooses whether the callback receives
        the event data; it defaults to false.  System event callbacks always
        receive data.
        """
        if isinstance(event, SystemEvent):
            if with_data is False:
                raise ValueError("system event callbacks always receive data")
            self._system_events.setdefault(event, []).append(callback)
        elif with_data:
            self._events_data.setdefault(event, []).append(callback)
        else:
            self._events.setdefault(event, []).append(callback)

    def fire(
        self,
        event: Union[str, SystemEvent],
        data: Optional[Mapping[str, EventValue]] = None,
    ) -> None:
        """Call the callbacks registered for *event*.

        Each data callback receives its own copy of *data*.  Firing a named
        event that has no callbacks of the matching kind raises
        :class:`EventNotRegistered`; a system event with none does nothing.
        """
        if isinstance(event, SystemEvent):
            payload = dict(data) if data is not None else {}
            for callback in list(self._system_events.get(event, ())):
                callback(dict(payload))
            return

        if data is not None:
            callbacks = self._events_data.get(event)
            if callbacks is None:
                raise EventNotRegistered(event)
            payload = dict(data)
            for callback in list(callbacks):
                callback(dict(payload))
        else:
            plain = self._events.get(event)
            if plain is None:
                raise EventNotRegistered(event)
            for callback in list(plain):
                callback()