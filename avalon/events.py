"""Typed event payloads, single-direction channels and a fan-out dispatcher."""

from __future__ import annotations

import copy
import enum
import math
import struct
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, TypeVar

__all__ = [
    "EntryKind",
    "Entry",
    "EntryTypeMismatch",
    "LibraryError",
    "KeyNotPresentError",
    "KeyPresentError",
    "ConversionError",
    "Library",
    "Event",
    "Channel",
    "Dispatcher",
    "channel_pair",
]

K = TypeVar("K", bound=Hashable)
E = TypeVar("E")


class EntryKind(enum.Enum):
    """The primitive type held by an :class:`Entry`."""

    BOOL = "bool"
    F32 = "f32"
    F64 = "f64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_RANGES

    @property
    def is_float(self) -> bool:
        return self in (EntryKind.F32, EntryKind.F64)


def _int_range(bits: int, signed: bool) -> tuple[int, int]:
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


_INTEGER_RANGES: dict[EntryKind, tuple[int, int]] = {
    EntryKind.I8: _int_range(8, True),
    EntryKind.I16: _int_range(16, True),
    EntryKind.I32: _int_range(32, True),
    EntryKind.I64: _int_range(64, True),
    EntryKind.I128: _int_range(128, True),
    EntryKind.U8: _int_range(8, False),
    EntryKind.U16: _int_range(16, False),
    EntryKind.U32: _int_range(32, False),
    EntryKind.U64: _int_range(64, False),
    EntryKind.U128: _int_range(128, False),
}


def _to_f32(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        raise ValueError(f"{value!r} does not fit in an f32") from exc


class EntryTypeMismatch(Exception):
    """The stored entry is not of the requested kind."""

    def __init__(self) -> None:
        super().__init__("Type in entry does not match conversion type")


@dataclass(frozen=True)
class Entry:
    """A primitive value tagged with its kind."""

    kind: EntryKind
    value: Any

    def __post_init__(self) -> None:
        kind, value = self.kind, self.value
        if kind is EntryKind.BOOL:
            if not isinstance(value, bool):
                raise TypeError(f"bool entry needs a bool, got {type(value).__name__}")
        elif kind.is_integer:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{kind.value} entry needs an int, got {type(value).__name__}")
            low, high = _INTEGER_RANGES[kind]
            if not low <= value <= high:
                raise ValueError(f"{value} is out of range for {kind.value}")
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{kind.value} entry needs a number, got {type(value).__name__}")
            number = float(value)
            if kind is EntryKind.F32:
                number = _to_f32(number)
            object.__setattr__(self, "value", number)

    def convert(self, kind: EntryKind) -> Any:
        """Return the stored value if it is of ``kind``, else raise EntryTypeMismatch."""
        if self.kind is not kind:
            raise EntryTypeMismatch()
        return self.value


class LibraryError(Exception):
    """Base of the errors raised by :class:`Library`."""


class KeyNotPresentError(LibraryError, KeyError):
    """Retrieving a key that the library does not hold."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Library does not contain key `{key!r}` while trying to retrieve")

    def __str__(self) -> str:
        return str(self.args[0])


class KeyPresentError(LibraryError):
    """Storing a key that the library already holds."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Library already contains key `{key!r}` while trying to insert")


class ConversionError(LibraryError):
    """The stored entry could not be converted to the requested kind."""

    def __init__(self) -> None:
        super().__init__("Error while converting entry")


class Library(Generic[K]):
    """A write-once map of keys to typed entries."""

    def __init__(self) -> None:
        self._entries: dict[K, Entry] = {}

    def store(self, key: K, value: Any, kind: EntryKind) -> None:
        """Store ``value`` as ``kind`` under ``key``; a key may be stored only once."""
        if key in self._entries:
            raise KeyPresentError(key)
        self._entries[key] = Entry(kind, value)

    def retrieve(self, key: K, kind: EntryKind) -> Any:
        """Return the value under ``key``, which must have been stored as ``kind``."""
        try:
            entry = self._entries[key]
        except KeyError:
            raise KeyNotPresentError(key) from None
        try:
            return entry.convert(kind)
        except EntryTypeMismatch as exc:
            raise ConversionError() from exc

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __copy__(self) -> Library[K]:
        duplicate: Library[K] = Library()
        duplicate._entries = dict(self._entries)
        return duplicate

    def __repr__(self) -> str:
        return f"Library({self._entries!r})"


@dataclass
class Event(Generic[E, K]):
    """An identified event carrying a library of typed data."""

    id: E
    data: Library[K] = field(default_factory=Library)

    def __copy__(self) -> Event[E, K]:
        return Event(self.id, copy.copy(self.data))


class _Role(enum.Enum):
    SENDER = enum.auto()
    RECEIVER = enum.auto()


class _SharedQueue:
    def __init__(self) -> None:
        self.queue: deque[Event] = deque()
        self.lock = threading.Lock()
        self.alive = True


class Channel(Generic[E, K]):
    """One end of a FIFO event queue: either the sending or the receiving end."""

    def __init__(self, shared: _SharedQueue, role: _Role) -> None:
        self._shared = shared
        self._role = role

    @property
    def is_sender(self) -> bool:
        return self._role is _Role.SENDER

    def pop(self) -> Event[E, K] | None:
        """Take the oldest event, or None when the queue is empty."""
        if self._role is _Role.SENDER:
            raise RuntimeError("Attempting to pop on non-receiver")
        with self._shared.lock:
            return self._shared.queue.popleft() if self._shared.queue else None

    def push(self, event: Event[E, K]) -> None:
        """Append an event to the queue."""
        if self._role is _Role.RECEIVER:
            raise RuntimeError("Attempting to push on non-sender")
        with self._shared.lock:
            self._shared.queue.append(event)

    def alive(self) -> bool:
        """Whether neither end of the channel has been closed."""
        return self._shared.alive

    def close(self) -> None:
        """Mark the channel dead for both ends."""
        self._shared.alive = False

    def __enter__(self) -> Channel[E, K]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def channel_pair() -> tuple[Channel, Channel]:
    """Create a connected (receiver, sender) pair."""
    shared = _SharedQueue()
    return Channel(shared, _Role.RECEIVER), Channel(shared, _Role.SENDER)


class Dispatcher(Generic[E, K]):
    """Collects events from producers and copies each one to every receiver."""

    def __init__(self) -> None:
        self._publish_targets: list[Channel[E, K]] = []
        self._to_publish: list[Channel[E, K]] = []

    def producer(self) -> Channel[E, K]:
        """Return a sending channel whose events are published on each tick."""
        receiver, sender = channel_pair()
        self._to_publish.append(receiver)
        return sender

    def receiver(self) -> Channel[E, K]:
        """Return a receiving channel that gets a copy of every published event."""
        receiver, sender = channel_pair()
        self._publish_targets.append(sender)
        return receiver

    def tick(self) -> None:
        """Drop closed channels, then forward all pending events in order."""
        self._publish_targets = [c for c in self._publish_targets if c.alive()]
        self._to_publish = [c for c in self._to_publish if c.alive()]

        inbound: list[Event[E, K]] = []
        for channel in self._to_publish:
            while (event := channel.pop()) is not None:
                inbound.append(event)

        for event in inbound:
            for target in self._publish_targets:
                target.push(copy.copy(event))