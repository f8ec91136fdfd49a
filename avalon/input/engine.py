"""The input engine: turns raw window events into actions on the active layer."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Optional

from avalon.events import Channel
from avalon.input.action import Action, ActionMap
from avalon.input.controller import Axis, Controller
from avalon.input.event import (
    ControllerButton,
    InputEvent,
    MouseButton,
    is_controller_event,
)
from avalon.input.keyboard import Keyboard
from avalon.input.layer import Layer
from avalon.input.mouse import Mouse, WheelDirection

__all__ = [
    "KeyDown",
    "KeyUp",
    "MouseWheel",
    "MouseMotion",
    "MouseButtonDown",
    "MouseButtonUp",
    "ControllerButtonDown",
    "ControllerButtonUp",
    "ControllerAxisMotion",
    "ControllerDeviceAdded",
    "ControllerDeviceRemoved",
    "InputEngine",
]


@dataclass(frozen=True)
class KeyDown:
    key: Optional[Hashable]


@dataclass(frozen=True)
class KeyUp:
    key: Optional[Hashable]


@dataclass(frozen=True)
class MouseWheel:
    amount: float
    direction: WheelDirection = WheelDirection.NORMAL


@dataclass(frozen=True)
class MouseMotion:
    x: int
    y: int
    dx: int
    dy: int


@dataclass(frozen=True)
class MouseButtonDown:
    button: MouseButton


@dataclass(frozen=True)
class MouseButtonUp:
    button: MouseButton


@dataclass(frozen=True)
class ControllerButtonDown:
    which: int
    button: ControllerButton


@dataclass(frozen=True)
class ControllerButtonUp:
    which: int
    button: ControllerButton


@dataclass(frozen=True)
class ControllerAxisMotion:
    which: int
    axis: Axis
    value: int


@dataclass(frozen=True)
class ControllerDeviceAdded:
    which: int


@dataclass(frozen=True)
class ControllerDeviceRemoved:
    which: int


class InputEngine:
    """Collects device input each frame and dispatches matching actions."""

    def __init__(
        self,
        event_channel: Channel,
        action_map: ActionMap,
        controllers: Iterable[int] = (),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._channel = event_channel
        self._action_map = action_map
        self._clock = clock
        self.controllers: dict[int, Controller] = {
            which: Controller(clock) for which in controllers
        }
        self.mouse = Mouse(clock)
        self.keyboard = Keyboard(clock)
        self._events: list[InputEvent] = []
        self._timestamp = 0
        self._last_controller_timestamp = 0
        self._last_kbm_timestamp = 0
        self._layers: list[Layer] = []
        self._pop_pending = False

    def _controller(self, which: int) -> Controller:
        try:
            return self.controllers[which]
        except KeyError:
            raise KeyError(f"no controller with id {which}") from None

    def poll(self) -> None:
        """Drain the event channel and update device state."""
        self._timestamp += 1
        self.mouse.reset_frame()
        while (message := self._channel.pop()) is not None:
            match message.id:
                case KeyDown(key=key):
                    self._events.append(self.keyboard.press(key))
                    self._last_kbm_timestamp = self._timestamp
                case KeyUp(key=key):
                    self._events.append(self.keyboard.release(key))
                case MouseWheel(amount=amount, direction=direction):
                    self._events.append(self.mouse.scroll(amount, direction))
                case MouseMotion(x=x, y=y, dx=dx, dy=dy):
                    self._events.append(self.mouse.motion(x, y, dx, dy))
                case MouseButtonDown(button=button):
                    self._events.append(self.mouse.press(button))
                    self._last_kbm_timestamp = self._timestamp
                case MouseButtonUp(button=button):
                    self._events.append(self.mouse.release(button))
                case ControllerButtonDown(which=which, button=button):
                    self._events.append(self._controller(which).press(button))
                    self._last_controller_timestamp = self._timestamp
                case ControllerButtonUp(which=which, button=button):
                    self._events.append(self._controller(which).release(button))
                case ControllerAxisMotion(which=which, axis=axis, value=value):
                    self._events.append(self._controller(which).axis(axis, value))
                    self._last_controller_timestamp = self._timestamp
                case ControllerDeviceAdded(which=which):
                    self.controllers[which] = Controller(self._clock)
                case ControllerDeviceRemoved(which=which):
                    self.controllers.pop(which, None)
                case _:
                    pass

    def dispatch(self) -> None:
        """Match the frame's events against the action map and feed the active layer."""
        if self._pop_pending:
            if self._layers:
                self._layers.pop()
            self._pop_pending = False

        for controller in self.controllers.values():
            self._events.extend(controller.held())
        self._events.extend(self.keyboard.held())
        self._events.extend(self.mouse.held())

        use_controller = self._last_controller_timestamp > self._last_kbm_timestamp
        frame = [e for e in self._events if is_controller_event(e) == use_controller]

        # The first occurrence of each event stands for all equal ones.
        present: dict[InputEvent, InputEvent] = {}
        for event in frame:
            present.setdefault(event, event)

        actions: list[tuple[Action, list[InputEvent]]] = []
        for mapping in self._action_map.mappings:
            required = mapping.required_events
            if required and all(event in present for event in required):
                actions.append((mapping.to_action(), [present[event] for event in required]))

        if self._layers:
            self._layers[-1].process_actions(actions)

        self._events.clear()

    def active_layer(self) -> Optional[Layer]:
        """The layer on top of the stack, or None."""
        return self._layers[-1] if self._layers else None

    def push_layer(self, name: str) -> Layer:
        layer = Layer(str(name))
        self._layers.append(layer)
        return layer

    def pop_layer(self) -> None:
        """Remove the top layer at the start of the next dispatch."""
        self._pop_pending = True