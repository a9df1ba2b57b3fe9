# modeframe

A small framework for frame-driven programs such as games. Work is split into
*modes* (a title screen, the game itself, a pause menu) that a `ModeServer`
keeps in layer order. Each mode owns *actors*, and actors are built from
*components*. `SpriteComponent`s register themselves with their actor's mode
so that the mode draws them.

The package also has a JSON writer (`modeframe.serializer`) with its own
string escaping (`modeframe.escape`) and output adapters (`modeframe.output`).

## Installing

```
pip install .
```

To run the tests, install the test extra and run `pytest`:

```
pip install .[test]
pytest
```

## Modes and the server

```python
from modeframe.server import ModeServer
from modeframe.mode import ModeBase

class Title(ModeBase):
    def process(self):
        super().process()
        # per-frame logic
        return True

server = ModeServer(clock)        # clock(): current time in milliseconds
uid = server.add(Title(), 1, "title")

# each frame
server.process_init()
server.process()
server.process_finish()
server.render_init()
server.render()
server.render_finish()
```

If you leave out `clock`, the server reads a monotonic clock in milliseconds.
`ModeServer.instance()` returns the server that was created most recently.

`add` sets the mode's `uid`, `layer` and `name` and returns the uid. It does
not make the mode active: the mode joins the layer list at the next
`process_init`, which calls its `initialize()` and sorts the list by layer.
`delete` marks a mode for removal in the same way. At the next `process_init`
the mode's `terminate()` is called and the mode is dropped. `clear` terminates
and drops every mode. `layer_top()` returns the highest layer, 2**31 - 1.

`process` goes through the modes from the top layer down. For each mode it
advances the mode's clock, then calls `process()` and `update()`, then
advances the mode's frame counter. `render` goes from the bottom layer up and
calls each mode's `render()`. While a mode is being processed, it can call
these on the server:

- `skip_process_under_layer()`: the layers below are not processed this frame.
- `skip_render_under_layer()`: the layers below are not rendered.
- `pause_process_under_layer()`: the clocks and frame counters of the layers
  below stand still.

`process_init` resets all three.

`get(key)` finds a mode by uid (`int`) or by name (`str`). It looks at both
active modes and modes waiting to be added, leaves out modes marked for
deletion, and returns `None` when nothing matches. `get_id` accepts a mode or
a name, and `get_name` accepts a mode or a uid. Both return `None` for a mode
that is not registered.

Each mode has these read-only properties:

- `mode_count`: frames since the mode started.
- `mode_time`: milliseconds since the mode started.
- `frame_time`: milliseconds since the previous frame.

Times wrap around like 32-bit unsigned counters. A mode also stores
`call_per_frame` and `call_of_count`, both 1 by default. The server does not
read them: it processes each mode once per frame.

## Actors and components

```python
from modeframe.actor import Actor, ActorState, Vector
from modeframe.component import Component, SpriteComponent

class Mover(Component):
    def update(self):
        ...

actor = Actor(mode)               # registers itself with the mode
actor.position = Vector(1.0, 2.0, 0.0)
Mover(actor, 50)                  # components run in ascending update order
SpriteComponent(actor, 10)        # drawn by the mode in ascending draw order
actor.send(42)                    # passed to every component's receive()
actor.state = ActorState.DEAD     # destroyed by the mode's next update()
```

An actor that is created while its mode is updating actors is held in
`pending_actors`. It moves to `actors` at the end of that update.

A mode's `process()` calls `process_input()` on its actors. An actor passes
that call on to its components only when its state is `ACTIVE`. A mode's
`update()` calls `update()` on its actors. An actor whose state is `ACTIVE` or
`PREPARATION` then updates its components in order, followed by
`update_actor()`. Components and sprites with the same order keep the order in
which they were added. `destroy()` on an actor removes it from its mode and
destroys its components. `destroy()` on a sprite also removes it from its
mode's `sprites`.

The base classes do only bookkeeping. `Component` counts `update_count` and
`input_count` and keeps the `last_message` it received. `Actor.update_actor`
counts `frame_count`. `SpriteComponent.draw` counts `draw_count` and clears
`dirty`, and `set_image` sets `dirty` again. Override these methods to do
real work.

## JSON output

`modeframe.serializer.dumps` writes JSON text. It takes the following values:

- `None`, `bool`, `int` and `float`. A NaN or an infinite float is written as
  `null`.
- `str`, and `bytes` holding UTF-8.
- Mappings with string keys, written in the mapping's own order.
- Lists and tuples.
- `Binary(data, subtype)`, written as `{"bytes":[...],"subtype":...}`.

Any other type raises `TypeError`.

```python
from modeframe.serializer import dumps, Serializer
from modeframe.escape import ErrorHandler

dumps({"a": [1, 2.5, None]})                        # '{"a":[1,2.5,null]}'
dumps({"a": 1}, indent=2)                           # '{\n  "a": 1\n}'
dumps("é", ensure_ascii=True)                       # '"\\u00e9"'
dumps(b"\xff", error_handler=ErrorHandler.REPLACE)  # '"\ufffd"'
```

Invalid UTF-8 in byte strings is handled according to `ErrorHandler`:

- `STRICT` (the default) raises `JsonTypeError`. The error is a `TypeError`,
  and its `id` is 316.
- `REPLACE` puts U+FFFD in place of the bad bytes.
- `IGNORE` drops the bad bytes.

`escape_string` in `modeframe.escape` gives you the escaped body of a string
literal directly.

`Serializer(output, indent_char, error_handler)` writes to any target that
`modeframe.output.output_adapter` accepts:

- an object that already has `write_character` and `write_characters`;
- a writable stream such as `io.StringIO`, wrapped as `StreamOutput`;
- a list or `bytearray`, wrapped as `BufferOutput`.

The serializer writes `str` pieces, so use a list rather than a `bytearray`
as its buffer.

## What it does not do

- The package opens no window and reads no keyboard or controller. Drawing
  and input are hooks for you to override.
- The JSON support only writes JSON. It does not parse it.