import pytest

from avalon.events import (
    ConversionError,
    Dispatcher,
    Entry,
    EntryKind,
    EntryTypeMismatch,
    Event,
    KeyNotPresentError,
    KeyPresentError,
    Library,
    LibraryError,
    channel_pair,
)


@pytest.mark.parametrize(
    "kind,value",
    [
        (EntryKind.BOOL, True),
        (EntryKind.I8, -128),
        (EntryKind.I32, 12345),
        (EntryKind.U8, 255),
        (EntryKind.U128, (1 << 128) - 1),
        (EntryKind.F64, 0.1),
        (EntryKind.F32, 0.5),
    ],
)
def test_library_round_trip(kind, value):
    library = Library()
    library.store("key", value, kind)
    assert library.retrieve("key", kind) == value


def test_entry_convert_mismatch():
    entry = Entry(EntryKind.I32, 7)
    assert entry.convert(EntryKind.I32) == 7
    with pytest.raises(EntryTypeMismatch):
        entry.convert(EntryKind.I64)


def test_entry_mismatch_message():
    with pytest.raises(EntryTypeMismatch, match="does not match conversion type"):
        Entry(EntryKind.BOOL, False).convert(EntryKind.U8)


@pytest.mark.parametrize(
    "kind,value",
    [(EntryKind.I8, 128), (EntryKind.U8, -1), (EntryKind.U16, 1 << 16), (EntryKind.I64, 1 << 63)],
)
def test_entry_out_of_range(kind, value):
    with pytest.raises(ValueError):
        Entry(kind, value)


@pytest.mark.parametrize(
    "kind,value",
    [(EntryKind.BOOL, 1), (EntryKind.I32, True), (EntryKind.I32, 1.5), (EntryKind.F32, "x")],
)
def test_entry_wrong_python_type(kind, value):
    with pytest.raises(TypeError):
        Entry(kind, value)


def test_f32_entry_loses_precision_relative_to_f64():
    f32 = Entry(EntryKind.F32, 0.1).value
    f64 = Entry(EntryKind.F64, 0.1).value
    assert f64 == 0.1
    assert f32 != f64
    assert abs(f32 - 0.1) < 1e-7


def test_retrieve_missing_key():
    library = Library()
    with pytest.raises(KeyNotPresentError) as info:
        library.retrieve("cursor_x", EntryKind.I32)
    assert info.value.key == "cursor_x"
    assert "does not contain key" in str(info.value)
    assert isinstance(info.value, LibraryError)


def test_store_duplicate_key():
    library = Library()
    library.store("scroll", 1.0, EntryKind.F32)
    with pytest.raises(KeyPresentError) as info:
        library.store("scroll", 2.0, EntryKind.F32)
    assert info.value.key == "scroll"
    assert library.retrieve("scroll", EntryKind.F32) == 1.0


def test_retrieve_wrong_kind_is_conversion_error():
    library = Library()
    library.store("axis_x", 3, EntryKind.I32)
    with pytest.raises(ConversionError) as info:
        library.retrieve("axis_x", EntryKind.F32)
    assert isinstance(info.value.__cause__, EntryTypeMismatch)


def test_library_contains_and_len():
    library = Library()
    library.store("a", True, EntryKind.BOOL)
    library.store("b", 2, EntryKind.U8)
    assert "a" in library
    assert "c" not in library
    assert len(library) == 2


def test_channel_is_fifo():
    receiver, sender = channel_pair()
    for name in ["first", "second", "third"]:
        sender.push(Event(name))
    assert [receiver.pop().id for _ in range(3)] == ["first", "second", "third"]
    assert receiver.pop() is None


def test_channel_roles_enforced():
    receiver, sender = channel_pair()
    with pytest.raises(RuntimeError, match="non-sender"):
        receiver.push(Event("x"))
    with pytest.raises(RuntimeError, match="non-receiver"):
        sender.pop()


def test_channel_close_affects_both_ends():
    receiver, sender = channel_pair()
    assert receiver.alive() and sender.alive()
    with sender:
        pass
    assert not receiver.alive()
    assert not sender.alive()


def test_dispatcher_broadcasts_to_all_receivers():
    dispatcher = Dispatcher()
    producer = dispatcher.producer()
    first = dispatcher.receiver()
    second = dispatcher.receiver()
    producer.push(Event("a"))
    producer.push(Event("b"))
    dispatcher.tick()
    for receiver in (first, second):
        assert receiver.pop().id == "a"
        assert receiver.pop().id == "b"
        assert receiver.pop() is None


def test_dispatcher_orders_by_producer_then_arrival():
    dispatcher = Dispatcher()
    p1 = dispatcher.producer()
    p2 = dispatcher.producer()
    out = dispatcher.receiver()
    p2.push(Event("p2-a"))
    p1.push(Event("p1-a"))
    p1.push(Event("p1-b"))
    dispatcher.tick()
    received = []
    while (event := out.pop()) is not None:
        received.append(event.id)
    assert received == ["p1-a", "p1-b", "p2-a"]


def test_dispatcher_copies_event_data():
    dispatcher = Dispatcher()
    producer = dispatcher.producer()
    first = dispatcher.receiver()
    second = dispatcher.receiver()
    event = Event("move")
    event.data.store("cursor_x", 10, EntryKind.I32)
    producer.push(event)
    dispatcher.tick()
    a = first.pop()
    b = second.pop()
    a.data.store("extra", True, EntryKind.BOOL)
    assert "extra" not in b.data
    assert b.data.retrieve("cursor_x", EntryKind.I32) == 10


def test_dispatcher_drops_closed_channels():
    dispatcher = Dispatcher()
    producer = dispatcher.producer()
    kept = dispatcher.receiver()
    dropped = dispatcher.receiver()
    dropped.close()
    producer.push(Event("x"))
    dispatcher.tick()
    assert kept.pop().id == "x"
    assert dropped.pop() is None


def test_closed_producer_is_not_read():
    dispatcher = Dispatcher()
    producer = dispatcher.producer()
    out = dispatcher.receiver()
    producer.push(Event("lost"))
    producer.close()
    dispatcher.tick()
    assert out.pop() is None


def test_tick_without_events_leaves_receivers_empty():
    dispatcher = Dispatcher()
    dispatcher.producer()
    out = dispatcher.receiver()
    dispatcher.tick()
    assert out.pop() is None