"""Input contexts: filter triggered actions and report them with their data."""

from __future__ import annotations

import enum
import math
from typing import Iterable, Sequence

from avalon.events import Channel, Dispatcher, Event, EntryKind, Library
from avalon.input.action import Action
from avalon.input.event import (
    InputEvent,
    MouseMoveEvent,
    MouseScrollEvent,
    StickEvent,
    TriggerEvent,
)

__all__ = ["Priority", "Block", "Context"]

TriggeredActions = Sequence[tuple[Action, Sequence[InputEvent]]]


class Priority(enum.Enum):
    LOW = "low"
    HIGH = "high"


class Block(enum.Enum):
    """How far a context stops actions from reaching the contexts below it."""

    NONE = "none"
    NON_CRITICAL = "non_critical"
    ALL = "all"


def _store_axis(data: Library[str], direction: tuple[float, float]) -> None:
    x, y = float(direction[0]), float(direction[1])
    magnitude = math.hypot(x, y)
    if magnitude == 0.0:
        normal = (0.0, 0.0)
    else:
        normal = (x / magnitude, y / magnitude)
    data.store("axis_x", normal[0], EntryKind.F32)
    data.store("axis_y", normal[1], EntryKind.F32)
    data.store("axis_magnitude", magnitude, EntryKind.F32)


def _store_event_data(data: Library[str], event: InputEvent) -> None:
    if isinstance(event, MouseMoveEvent):
        data.store("cursor_x", event.position[0], EntryKind.I32)
        data.store("cursor_y", event.position[1], EntryKind.I32)
        _store_axis(data, event.direction)
    elif isinstance(event, MouseScrollEvent):
        data.store("scroll", event.scroll, EntryKind.F32)
    elif isinstance(event, StickEvent):
        _store_axis(data, event.stick.direction)
    elif isinstance(event, TriggerEvent):
        data.store("axis_pressure", event.trigger.amount, EntryKind.F32)


class Context:
    """Passes on the allowed actions, with data from their triggering events."""

    def __init__(
        self,
        priority: Priority,
        block: Block,
        allowed_actions: Iterable[str],
        name: str | None = None,
    ) -> None:
        self.name = name
        self.priority = priority
        self.block = block
        self.allowed_actions = set(allowed_actions)
        self._dispatcher: Dispatcher[Action, str] = Dispatcher()
        self._channel = self._dispatcher.producer()

    def process(self, actions: TriggeredActions) -> None:
        """Report each allowed action to every handler."""
        for action, triggered in actions:
            if action.name not in self.allowed_actions:
                continue
            report: Event[Action, str] = Event(action)
            for event in triggered:
                _store_event_data(report.data, event)
            self._channel.push(report)
        self._dispatcher.tick()

    def context_handler(self) -> Channel[Action, str]:
        """A channel that receives every action this context reports."""
        return self._dispatcher.receiver()