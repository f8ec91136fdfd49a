"""Game controller state: buttons, sticks and triggers."""

from __future__ import annotations

import dataclasses
import enum
import time
from typing import Callable

from avalon.input.event import (
    Binary,
    ControllerButton,
    ControllerButtonEvent,
    ControllerEvent,
    Side,
    Stick,
    StickEvent,
    Trigger,
    TriggerEvent,
)

__all__ = ["Axis", "Controller", "AXIS_MAX", "TRIGGER_PRESS_THRESHOLD"]

AXIS_MAX = 32767
_AXIS_MIN = -32768
TRIGGER_PRESS_THRESHOLD = 0.5


class Axis(enum.Enum):
    LEFT_X = "left_x"
    LEFT_Y = "left_y"
    RIGHT_X = "right_x"
    RIGHT_Y = "right_y"
    TRIGGER_LEFT = "trigger_left"
    TRIGGER_RIGHT = "trigger_right"


class Controller:
    """Tracks which buttons are held and where the sticks and triggers are."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.pressed_buttons: dict[ControllerButton, float] = {}
        self.left_stick = Stick()
        self.right_stick = Stick()
        self.left_trigger = Trigger()
        self.right_trigger = Trigger()

    def held(self) -> list[ControllerButtonEvent]:
        """A hold event for every button currently pressed."""
        return [ControllerButtonEvent(Binary.HOLD, button) for button in self.pressed_buttons]

    def press(self, button: ControllerButton) -> ControllerButtonEvent:
        self.pressed_buttons[button] = self._clock()
        return ControllerButtonEvent(Binary.SINGLE, button)

    def release(self, button: ControllerButton) -> ControllerButtonEvent:
        self.pressed_buttons.pop(button, None)
        return ControllerButtonEvent(Binary.RELEASE, button)

    def axis(self, axis: Axis, amount: int) -> ControllerEvent:
        """Apply a raw 16-bit axis reading and return the resulting event."""
        if not _AXIS_MIN <= amount <= AXIS_MAX:
            raise ValueError(f"axis value {amount} is outside the 16-bit range")
        value = amount / AXIS_MAX

        if axis is Axis.LEFT_X:
            self.left_stick = _with_component(self.left_stick, 0, value)
            return StickEvent(Side.LEFT, self.left_stick)
        if axis is Axis.LEFT_Y:
            self.left_stick = _with_component(self.left_stick, 1, value)
            return StickEvent(Side.LEFT, self.left_stick)
        if axis is Axis.RIGHT_X:
            self.right_stick = _with_component(self.right_stick, 0, value)
            return StickEvent(Side.RIGHT, self.right_stick)
        if axis is Axis.RIGHT_Y:
            self.right_stick = _with_component(self.right_stick, 1, value)
            return StickEvent(Side.RIGHT, self.right_stick)
        if axis is Axis.TRIGGER_LEFT:
            self.left_trigger = Trigger(value)
            self._track_trigger(ControllerButton.LEFT_TRIGGER, value)
            return TriggerEvent(Side.LEFT, self.left_trigger)
        if axis is Axis.TRIGGER_RIGHT:
            self.right_trigger = Trigger(value)
            self._track_trigger(ControllerButton.RIGHT_TRIGGER, value)
            return TriggerEvent(Side.RIGHT, self.right_trigger)
        raise ValueError(f"unknown axis {axis!r}")

    def _track_trigger(self, button: ControllerButton, value: float) -> None:
        if value > TRIGGER_PRESS_THRESHOLD:
            self.pressed_buttons[button] = self._clock()
        else:
            self.pressed_buttons.pop(button, None)


def _with_component(stick: Stick, index: int, value: float) -> Stick:
    x, y = stick.direction
    direction = (value, y) if index == 0 else (x, value)
    return dataclasses.replace(stick, direction=direction)