"""Action maps: named actions and the input events that trigger them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable

from avalon.input.event import (
    Binary,
    ControllerButton,
    ControllerButtonEvent,
    InputEvent,
    KeyboardEvent,
    MouseButton,
    MouseButtonEvent,
    MouseMoveEvent,
    MouseScrollEvent,
    Side,
    StickEvent,
    TriggerEvent,
)

__all__ = ["Action", "Mapping", "ActionMap", "MapBuilder", "MappingBuilder"]

_MAPPABLE_STATES = (Binary.SINGLE, Binary.RELEASE, Binary.HOLD)


@dataclass(frozen=True)
class Action:
    """A named action that was triggered."""

    name: str


@dataclass(frozen=True)
class Mapping:
    """An action together with every event that must occur to trigger it."""

    action: str
    required_events: frozenset[InputEvent]

    def to_action(self) -> Action:
        return Action(self.action)


@dataclass(frozen=True)
class ActionMap:
    """An ordered collection of mappings."""

    mappings: tuple[Mapping, ...] = ()

    @staticmethod
    def builder() -> MapBuilder:
        return MapBuilder()


@dataclass
class MapBuilder:
    """Builds an :class:`ActionMap` one mapping at a time."""

    _mappings: list[Mapping] = field(default_factory=list)

    def map(self, action: str) -> MappingBuilder:
        """Start a mapping for ``action``."""
        return MappingBuilder(self, str(action))

    def build(self) -> ActionMap:
        return ActionMap(tuple(self._mappings))


def _check_state(state: Binary) -> Binary:
    if state not in _MAPPABLE_STATES:
        raise ValueError(f"{state!r} cannot be mapped; use single, release or hold")
    return state


class MappingBuilder:
    """Collects the events required by one action."""

    def __init__(self, map_builder: MapBuilder, action: str) -> None:
        self._map_builder = map_builder
        self._action = action
        self._required: set[InputEvent] = set()

    def _require(self, event: InputEvent) -> MappingBuilder:
        self._required.add(event)
        return self

    def key(self, state: Binary, key: Hashable) -> MappingBuilder:
        return self._require(KeyboardEvent(_check_state(state), key))

    def mouse_button(self, state: Binary, button: MouseButton) -> MappingBuilder:
        return self._require(MouseButtonEvent(_check_state(state), button))

    def mouse_move(self) -> MappingBuilder:
        return self._require(MouseMoveEvent())

    def mouse_scroll(self) -> MappingBuilder:
        return self._require(MouseScrollEvent())

    def controller_button(self, state: Binary, button: ControllerButton) -> MappingBuilder:
        return self._require(ControllerButtonEvent(_check_state(state), button))

    def controller_stick(self, side: Side) -> MappingBuilder:
        return self._require(StickEvent(side))

    def controller_trigger(self, side: Side) -> MappingBuilder:
        return self._require(TriggerEvent(side))

    def finish(self) -> MapBuilder:
        """Add the mapping and return to the map builder."""
        self._map_builder._mappings.append(Mapping(self._action, frozenset(self._required)))
        return self._map_builder