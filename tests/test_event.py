import pytest

from avalon.input.event import (
    Binary,
    ControllerButton,
    ControllerButtonEvent,
    KeyboardEvent,
    MouseButton,
    MouseButtonEvent,
    MouseMoveEvent,
    MouseScrollEvent,
    Side,
    Stick,
    StickEvent,
    Trigger,
    TriggerEvent,
    is_controller_event,
)


def test_button_events_compare_state_and_button():
    a = ControllerButtonEvent(Binary.SINGLE, ControllerButton.A)
    assert a == ControllerButtonEvent(Binary.SINGLE, ControllerButton.A)
    assert a != ControllerButtonEvent(Binary.HOLD, ControllerButton.A)
    assert a != ControllerButtonEvent(Binary.SINGLE, ControllerButton.B)


def test_stick_events_ignore_payload_but_not_side():
    moved = StickEvent(Side.LEFT, Stick((0.5, -0.5), 0.3))
    assert moved == StickEvent(Side.LEFT)
    assert hash(moved) == hash(StickEvent(Side.LEFT))
    assert moved != StickEvent(Side.RIGHT, Stick((0.5, -0.5), 0.3))


def test_trigger_events_ignore_payload_but_not_side():
    pulled = TriggerEvent(Side.RIGHT, Trigger(0.9))
    assert pulled == TriggerEvent(Side.RIGHT)
    assert pulled != TriggerEvent(Side.LEFT, Trigger(0.9))


def test_stick_and_trigger_differ():
    assert StickEvent(Side.LEFT) != TriggerEvent(Side.LEFT)


def test_mouse_move_and_scroll_match_any_of_their_kind():
    assert MouseMoveEvent((10, 20), (1, 2)) == MouseMoveEvent()
    assert MouseScrollEvent(3.0) == MouseScrollEvent()
    assert MouseMoveEvent() != MouseScrollEvent()


def test_set_membership_uses_variant_equality():
    required = {MouseMoveEvent(), StickEvent(Side.LEFT)}
    assert MouseMoveEvent((5, 5), (1, 0)) in required
    assert StickEvent(Side.LEFT, Stick((1.0, 0.0))) in required
    assert StickEvent(Side.RIGHT) not in required


def test_mouse_button_events():
    event = MouseButtonEvent(Binary.RELEASE, MouseButton.LEFT)
    assert event == MouseButtonEvent(Binary.RELEASE, MouseButton.LEFT)
    assert event != MouseButtonEvent(Binary.RELEASE, MouseButton.RIGHT)


def test_keyboard_events_compare_key_and_state():
    event = KeyboardEvent(Binary.SINGLE, "W")
    assert {event, KeyboardEvent(Binary.SINGLE, "W")} == {event}
    assert event != KeyboardEvent(Binary.HOLD, "W")


@pytest.mark.parametrize(
    "event, expected",
    [
        (ControllerButtonEvent(Binary.SINGLE, ControllerButton.A), True),
        (StickEvent(Side.LEFT), True),
        (TriggerEvent(Side.RIGHT), True),
        (MouseButtonEvent(Binary.SINGLE, MouseButton.LEFT), False),
        (MouseMoveEvent(), False),
        (MouseScrollEvent(), False),
        (KeyboardEvent(Binary.SINGLE, "A"), False),
    ],
)
def test_is_controller_event(event, expected):
    assert is_controller_event(event) is expected


def test_events_are_immutable():
    event = StickEvent(Side.LEFT)
    with pytest.raises(AttributeError):
        event.side = Side.RIGHT
    assert event.side is Side.LEFT
    assert event == StickEvent(Side.LEFT)
    assert event != StickEvent(Side.RIGHT)