# avalon

The engine-independent core of a small game engine: a publish/subscribe event
system with typed payloads, rolling frame timings, and an input layer that turns
keyboard, mouse and controller events into named actions.

No third-party libraries are needed.

## Install

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Events (`avalon.events`)

- `channel_pair()` returns a connected `(receiver, sender)` pair of `Channel`s.
  The sender may only `push`, the receiver may only `pop`; using the wrong end
  raises `RuntimeError`. Events come out in the order they went in, and `pop()`
  returns `None` when the queue is empty. `close()` (also called on leaving a
  `with` block) marks both ends dead, so `alive()` returns `False`.
- `Dispatcher.producer()` hands out sending channels and
  `Dispatcher.receiver()` receiving ones. `Dispatcher.tick()` drops closed
  channels, then copies every pending event from every producer to every
  receiver, in order.
- An `Event` has an `id` and a `data` `Library`: a write-once map of keys to
  `Entry` values tagged with an `EntryKind` (`BOOL`, `F32`, `F64`, `I8` ...
  `I128`, `U8` ... `U128`). Entries check their type and range; `F32` values
  are rounded to single precision.
  - `Library.store(key, value, kind)` raises `KeyPresentError` if the key is
    already there.
  - `Library.retrieve(key, kind)` raises `KeyNotPresentError` (also a
    `KeyError`) for a missing key and `ConversionError` if the entry is of
    another kind. All three derive from `LibraryError`.

```python
from avalon.events import Dispatcher, Event, EntryKind

dispatcher = Dispatcher()
sender = dispatcher.producer()
listener = dispatcher.receiver()

event = Event("hit")
event.data.store("damage", 12, EntryKind.I32)
sender.push(event)
dispatcher.tick()

received = listener.pop()
assert received.data.retrieve("damage", EntryKind.I32) == 12
```

## Frame timing (`avalon.timing`)

`FrameTimings` keeps the last 120 frame and render durations in seconds (the
window size and the clock can be passed to the constructor). Bracket work with
`start_frame()`/`end_frame()` and `start_render()`/`end_render()`, then read
`average_frame_time()` and `average_render_time()` (0.0 before any sample) and
`total_runtime()`.

## Input (`avalon.input`)

1. Describe actions with `ActionMap.builder()` (in `avalon.input.action`):
   call `map("jump")`, add the events it needs (`key`, `mouse_button`,
   `mouse_move`, `mouse_scroll`, `controller_button`, `controller_stick`,
   `controller_trigger`), then `finish()`; call `build()` once all mappings are
   added. Button and key states must be `Binary.SINGLE`, `Binary.RELEASE` or
   `Binary.HOLD`.
2. Create an `InputEngine` (in `avalon.input.engine`) from the receiving end of
   a channel and the action map. `push_layer("game")` returns the new `Layer`;
   register contexts on it through `context_handler()`, a `ContextBuilder`
   whose `build()` returns the channel that receives the actions allowed for
   that context.
3. Each frame, push raw device events wrapped in an `Event`
   (`Event(KeyDown("Space"))`, `MouseMotion`, `ControllerAxisMotion`, ...)
   through the sending end, call `poll()` and then `dispatch()`, and pop the
   resulting action events from the context channels.

```python
from avalon.events import Event, channel_pair
from avalon.input.action import ActionMap
from avalon.input.engine import InputEngine, KeyDown
from avalon.input.event import Binary

actions = ActionMap.builder().map("jump").key(Binary.SINGLE, "Space").finish().build()
raw_in, raw_out = channel_pair()
engine = InputEngine(raw_in, actions)
jumps = engine.push_layer("game").context_handler().action("jump").build()

raw_out.push(Event(KeyDown("Space")))
engine.poll()
engine.dispatch()
assert jumps.pop().id.name == "jump"
```

Behaviour worth knowing:

- Whichever of keyboard/mouse or controller was pressed or moved most recently
  decides which events count in a frame.
- Held keys and buttons produce `Binary.HOLD` events on every dispatch. A
  controller trigger pulled past 0.5 counts as a held button.
- Stick, trigger, mouse-move and mouse-scroll events match any event of the
  same kind, whatever their values.
- `KeyDown(None)` / `KeyUp(None)` stand for a key with no scancode and are
  reported as the key `"Power"` without being held.
- Action events carry data from the events that triggered them: `cursor_x`,
  `cursor_y` (`I32`) for mouse movement; `axis_x`, `axis_y`, `axis_magnitude`
  (`F32`, the direction normalised) for mouse movement and sticks; `scroll` for
  the wheel; `axis_pressure` for triggers.
- Contexts on a layer are visited from the most recently added one down. A
  context with `Block.ALL` stops the walk after itself; one with
  `Block.NON_CRITICAL` lets only `Priority.HIGH` contexts below it receive
  actions. Only the top layer receives actions; `pop_layer()` removes it at the
  start of the next `dispatch()`.

## What this package does not do

It opens no window, draws nothing and reads no hardware: there is no renderer,
no shader, texture or model handling, no asset loading, and no device polling.
Raw input must be supplied by the caller as the event classes in
`avalon.input.engine`, and controllers are known only by the integer ids given
to `InputEngine` or announced with `ControllerDeviceAdded`.