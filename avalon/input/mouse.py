"""Mouse state: buttons, cursor position and scroll."""

from __future__ import annotations

import enum
import time
from typing import Callable

from avalon.input.event import (
    Binary,
    MouseButton,
    MouseButtonEvent,
    MouseMoveEvent,
    MouseScrollEvent,
)

__all__ = ["WheelDirection", "Mouse"]


class WheelDirection(enum.Enum):
    NORMAL = "normal"
    FLIPPED = "flipped"
    UNKNOWN = "unknown"


class Mouse:
    """Tracks held buttons, the cursor and the scroll accumulated this frame."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.pressed_buttons: dict[MouseButton, float] = {}
        self.position: tuple[int, int] = (0, 0)
        self.direction: tuple[int, int] = (0, 0)
        self.scroll_amount: float = 0.0

    def held(self) -> list[MouseButtonEvent]:
        """A hold event for every button currently pressed."""
        return [MouseButtonEvent(Binary.HOLD, button) for button in self.pressed_buttons]

    def press(self, button: MouseButton) -> MouseButtonEvent:
        self.pressed_buttons[button] = self._clock()
        return MouseButtonEvent(Binary.SINGLE, button)

    def release(self, button: MouseButton) -> MouseButtonEvent:
        self.pressed_buttons.pop(button, None)
        return MouseButtonEvent(Binary.RELEASE, button)

    def motion(self, x: int, y: int, dx: int, dy: int) -> MouseMoveEvent:
        """Record the cursor position and its relative movement."""
        self.position = (x, y)
        self.direction = (dx, dy)
        return MouseMoveEvent(self.position, self.direction)

    def scroll(self, amount: float, direction: WheelDirection) -> MouseScrollEvent:
        """Add a wheel movement to the frame's scroll, honouring flipped wheels."""
        sign = -1.0 if direction is WheelDirection.FLIPPED else 1.0
        self.scroll_amount += amount * sign
        return MouseScrollEvent(self.scroll_amount)

    def reset_frame(self) -> None:
        """Clear the per-frame movement and scroll."""
        self.direction = (0, 0)
        self.scroll_amount = 0.0