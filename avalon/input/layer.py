"""Layers: stacks of contexts that decide which contexts see an action."""

from __future__ import annotations

from typing import Sequence

from avalon.events import Channel
from avalon.input.action import Action
from avalon.input.context import Block, Context, Priority
from avalon.input.event import InputEvent

__all__ = ["Layer", "ContextBuilder"]


class Layer:
    """A named stack of contexts; the most recently added is on top."""

    def __init__(self, name: str, context_stack: list[Context] | None = None) -> None:
        self.name = name
        self.context_stack: list[Context] = context_stack if context_stack is not None else []

    def process_actions(self, actions: Sequence[tuple[Action, Sequence[InputEvent]]]) -> None:
        """Offer actions to contexts from the top down, honouring their blocking."""
        only_critical = False
        for context in reversed(self.context_stack):
            if not (only_critical and context.priority is Priority.LOW):
                context.process(actions)
                if context.block is Block.NON_CRITICAL:
                    only_critical = True
            if context.block is Block.ALL:
                break

    def context_handler(self) -> ContextBuilder:
        """Start building a new context on top of this layer."""
        return ContextBuilder(self)


class ContextBuilder:
    """Configures a context before pushing it onto a layer."""

    def __init__(self, layer: Layer) -> None:
        self._layer = layer
        self._allowed: set[str] = set()
        self._name: str | None = None
        self._priority = Priority.LOW
        self._block = Block.NONE

    def name(self, name: str) -> ContextBuilder:
        self._name = str(name)
        return self

    def block(self, block: Block) -> ContextBuilder:
        self._block = block
        return self

    def priority(self, priority: Priority) -> ContextBuilder:
        self._priority = priority
        return self

    def action(self, action: str) -> ContextBuilder:
        self._allowed.add(str(action))
        return self

    def build(self) -> Channel[Action, str]:
        """Push the context and return a channel receiving its actions."""
        context = Context(self._priority, self._block, self._allowed, self._name)
        self._layer.context_stack.append(context)
        return context.context_handler()