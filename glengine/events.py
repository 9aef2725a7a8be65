"""Type-keyed event dispatching with a shared dispatcher."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, ClassVar


@dataclass
class Event:
    """Base class for everything sent through a dispatcher."""

    event_type: str = ""


EventHandler = Callable[[Event], None]


class EventDispatcher:
    """Maps event classes to the handlers registered for them."""

    def __init__(self) -> None:
        self._handlers: defaultdict[type, list[EventHandler]] = defaultdict(list)

    def on(self, event_type: type[Event], handler: EventHandler) -> None:
        """Register ``handler`` for events whose class is exactly ``event_type``."""
        self._handlers[event_type].append(handler)

    def dispatch(self, event_type: type[Event], event: Event) -> None:
        """Send ``event`` to the handlers registered for its concrete class.

        Raises TypeError if ``event`` is not an ``event_type``.
        """
        if not isinstance(event, event_type):
            raise TypeError(f"{type(event).__name__} is not a {event_type.__name__}")
        for handler in list(self._handlers.get(type(event), ())):
            handler(event)


_INSTANCE = EventDispatcher()


def instance() -> EventDispatcher:
    """The process-wide dispatcher."""
    return _INSTANCE


class Observable:
    """Mixin for objects that emit events through the shared dispatcher."""

    @staticmethod
    def send_event(event_type: type[Event], event: Event) -> None:
        instance().dispatch(event_type, event)


class Observer(ABC):
    """Subscribes ``handle_event`` to ``event_type`` on the shared dispatcher."""

    event_type: ClassVar[type[Event]]

    def __init__(self) -> None:
        event_type = getattr(type(self), "event_type", None)
        if event_type is None:
            raise TypeError(f"{type(self).__name__} must define event_type")
        instance().on(event_type, self.handle_event)

    @abstractmethod
    def handle_event(self, event: Event) -> None:
        """Respond to an event."""