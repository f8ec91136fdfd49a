"""Input events produced by controllers, mice and keyboards.

Stick, trigger, mouse-move and mouse-scroll events compare equal to any other
event of the same variant whatever their payload, so that an action map can
require "any stick movement" by putting a single placeholder event in a set.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Hashable, Union

__all__ = [
    "Binary",
    "Side",
    "ControllerButton",
    "MouseButton",
    "Stick",
    "Trigger",
    "ControllerButtonEvent",
    "StickEvent",
    "TriggerEvent",
    "MouseButtonEvent",
    "MouseMoveEvent",
    "MouseScrollEvent",
    "KeyboardEvent",
    "ControllerEvent",
    "MouseEvent",
    "InputEvent",
    "is_controller_event",
]


class Binary(enum.Enum):
    """The state of a two-state input such as a button or key."""

    SINGLE = "single"
    DOUBLE = "double"
    HOLD = "hold"
    RELEASE = "release"


class Side(enum.Enum):
    """Which of a pair of sticks or triggers."""

    LEFT = "left"
    RIGHT = "right"


class ControllerButton(enum.Enum):
    UNKNOWN = "unknown"
    A = "a"
    B = "b"
    X = "x"
    Y = "y"
    BACK = "back"
    GUIDE = "guide"
    START = "start"
    LEFT_STICK = "left_stick"
    RIGHT_STICK = "right_stick"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_TRIGGER = "left_trigger"
    RIGHT_TRIGGER = "right_trigger"
    DPAD_UP = "dpad_up"
    DPAD_DOWN = "dpad_down"
    DPAD_LEFT = "dpad_left"
    DPAD_RIGHT = "dpad_right"
    TOUCHPAD = "touchpad"


class MouseButton(enum.Enum):
    UNKNOWN = "unknown"
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    X1 = "x1"
    X2 = "x2"


@dataclass(frozen=True)
class Stick:
    """An analogue stick: its direction on each axis in [-1, 1]."""

    direction: tuple[float, float] = (0.0, 0.0)
    amount: float = 0.0


@dataclass(frozen=True)
class Trigger:
    """An analogue trigger and how far it is pulled."""

    amount: float = 0.0


@dataclass(frozen=True)
class ControllerButtonEvent:
    state: Binary
    button: ControllerButton


@dataclass(frozen=True)
class StickEvent:
    """A stick moved; equal to any other event for the same side."""

    side: Side
    stick: Stick = field(default_factory=Stick, compare=False)


@dataclass(frozen=True)
class TriggerEvent:
    """A trigger moved; equal to any other event for the same side."""

    side: Side
    trigger: Trigger = field(default_factory=Trigger, compare=False)


@dataclass(frozen=True)
class MouseButtonEvent:
    state: Binary
    button: MouseButton


@dataclass(frozen=True)
class MouseMoveEvent:
    """The cursor moved; equal to any other move event."""

    position: tuple[int, int] = field(default=(0, 0), compare=False)
    direction: tuple[int, int] = field(default=(0, 0), compare=False)


@dataclass(frozen=True)
class MouseScrollEvent:
    """The wheel turned; equal to any other scroll event."""

    scroll: float = field(default=float("nan"), compare=False)


@dataclass(frozen=True)
class KeyboardEvent:
    state: Binary
    key: Hashable


ControllerEvent = Union[ControllerButtonEvent, StickEvent, TriggerEvent]
MouseEvent = Union[MouseButtonEvent, MouseMoveEvent, MouseScrollEvent]
InputEvent = Union[ControllerEvent, MouseEvent, KeyboardEvent]

_CONTROLLER_EVENTS = (ControllerButtonEvent, StickEvent, TriggerEvent)


def is_controller_event(event: object) -> bool:
    """Whether ``event`` came from a game controller."""
    return isinstance(event, _CONTROLLER_EVENTS)