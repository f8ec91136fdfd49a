"""Keyboard state: which keys are held."""

from __future__ import annotations

import time
from typing import Callable, Hashable, Optional

from avalon.input.event import Binary, KeyboardEvent

__all__ = ["Keyboard", "UNMAPPED_KEY"]

# Reported in place of a key that has no scancode.
UNMAPPED_KEY = "Power"


class Keyboard:
    """Tracks held keys by scancode."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.pressed_keys: dict[Hashable, float] = {}

    def held(self) -> list[KeyboardEvent]:
        """A hold event for every key currently pressed."""
        return [KeyboardEvent(Binary.HOLD, key) for key in self.pressed_keys]

    def press(self, key: Optional[Hashable]) -> KeyboardEvent:
        """Press ``key``; ``None`` stands for a key with no scancode."""
        if key is None:
            return KeyboardEvent(Binary.SINGLE, UNMAPPED_KEY)
        self.pressed_keys[key] = self._clock()
        return KeyboardEvent(Binary.SINGLE, key)

    def release(self, key: Optional[Hashable]) -> KeyboardEvent:
        """Release ``key``; ``None`` stands for a key with no scancode."""
        if key is None:
            return KeyboardEvent(Binary.RELEASE, UNMAPPED_KEY)
        self.pressed_keys.pop(key, None)
        return KeyboardEvent(Binary.RELEASE, key)