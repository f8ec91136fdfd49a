import pytest

from avalon.events import EntryKind, KeyPresentError
from avalon.input.action import Action
from avalon.input.context import Block, Context, Priority
from avalon.input.event import (
    Binary,
    KeyboardEvent,
    MouseMoveEvent,
    MouseScrollEvent,
    Side,
    Stick,
    StickEvent,
    Trigger,
    TriggerEvent,
)


def drain(channel):
    out = []
    while (event := channel.pop()) is not None:
        out.append(event)
    return out


@pytest.fixture
def context():
    return Context(Priority.LOW, Block.NONE, {"jump", "look"})


def test_allowed_action_is_reported(context):
    handler = context.context_handler()
    context.process([(Action("jump"), [KeyboardEvent(Binary.SINGLE, "Space")])])
    received = drain(handler)
    assert [e.id for e in received] == [Action("jump")]
    assert len(received[0].data) == 0


def test_disallowed_action_is_dropped(context):
    handler = context.context_handler()
    context.process([(Action("crouch"), [])])
    assert drain(handler) == []


def test_mouse_move_data(context):
    handler = context.context_handler()
    context.process([(Action("look"), [MouseMoveEvent((10, 20), (3, 4))])])
    (event,) = drain(handler)
    assert event.data.retrieve("cursor_x", EntryKind.I32) == 10
    assert event.data.retrieve("cursor_y", EntryKind.I32) == 20
    x = event.data.retrieve("axis_x", EntryKind.F32)
    y = event.data.retrieve("axis_y", EntryKind.F32)
    assert x * x + y * y == pytest.approx(1.0, rel=1e-6)
    assert event.data.retrieve("axis_magnitude", EntryKind.F32) == pytest.approx(5.0)


def test_zero_stick_has_zero_axis(context):
    handler = context.context_handler()
    context.process([(Action("look"), [StickEvent(Side.LEFT, Stick((0.0, 0.0)))])])
    (event,) = drain(handler)
    assert event.data.retrieve("axis_x", EntryKind.F32) == 0.0
    assert event.data.retrieve("axis_y", EntryKind.F32) == 0.0
    assert event.data.retrieve("axis_magnitude", EntryKind.F32) == 0.0


def test_trigger_and_scroll_data(context):
    handler = context.context_handler()
    context.process([(Action("jump"), [TriggerEvent(Side.RIGHT, Trigger(0.5))])])
    context.process([(Action("look"), [MouseScrollEvent(2.0)])])
    first, second = drain(handler)
    assert first.data.retrieve("axis_pressure", EntryKind.F32) == 0.5
    assert second.data.retrieve("scroll", EntryKind.F32) == 2.0


def test_every_handler_gets_a_copy(context):
    first = context.context_handler()
    second = context.context_handler()
    context.process([(Action("jump"), [])])
    assert [e.id for e in drain(first)] == [Action("jump")]
    assert [e.id for e in drain(second)] == [Action("jump")]


def test_conflicting_axis_data_raises(context):
    context.context_handler()
    with pytest.raises(KeyPresentError):
        context.process(
            [(Action("look"), [MouseMoveEvent((0, 0), (1, 0)), StickEvent(Side.LEFT)])]
        )