# xgbkit

Building blocks for X11 clients and window managers. They are independent of
any particular wire-protocol library. The package contains these modules:

- **`xgbkit.rects`**: a mutable `Rect(x, y, width, height)` with `pieces()`.
  It also has `valid`, `subtract`, `intersect_area`, `largest_overlap` and
  `apply_strut`. `apply_strut` shrinks head rectangles in place to leave room
  for a partial strut, such as a dock or a panel.
- **`xgbkit.heads`**: `sort_heads` orders heads left to right and then top to
  bottom. `physical_heads` does the same for the heads that the connection
  reports, and drops cloned heads that share an origin.
- **`xgbkit.core`**: the `XUtil` state object holds the connection, the atom
  caches, the event queue, the callbacks, the hooks and the error handler.
  The queue holds `EventOrError` entries. The module also provides
  `MAX_REQ_SIZE` and `NO_WINDOW`.
- **`xgbkit.events`**: the event codes in `EventType`, the generic `Event`,
  `ClientMessageEvent` and `ConfigureNotifyEvent`. The builders
  `new_client_message` and `new_configure_notify` make these two events.
  `dispatch_windows` names the windows whose callbacks run for an event.
- **`xgbkit.loop`**: the event queue functions `enqueue`, `dequeue`,
  `dequeue_at`, `empty` and `peek`. Callbacks are attached to a pair of event
  type and window with `connect` and removed with `detach`. The module also
  has `connect_hook`, `redirect_key_events`, `quit`, `read`, `process_queue`
  and the main loop `run`.
- **`xgbkit.atoms`**: `atom`, `atm` and `atom_name` intern atoms and look up
  their names. Every answer is cached on the `XUtil`, so each name is asked
  of the server only once.
- **`xgbkit.props`**: `PropertyReply`, `get_property`, `change_prop`,
  `change_prop32` and `str_to_atoms`, plus the `prop_val_*` decoders for
  numbers, windows, atoms and strings.
- **`xgbkit.image`**: an `Image` stored in BGRA byte order, with `BGRA`
  pixels, `Rectangle` geometry and `to_bgra`. `Image.sub_image` returns a view
  that shares the pixels. The class also has `scale`, `write_png` and
  `save_png`.
- **`xgbkit.convert`**: `new_convert`, `new_file_name` and `new_bytes` build
  images from Pillow images, files and bytes. `new_ewmh_icon` builds one from
  `EwmhIcon` data, and `merge_icccm_icon` joins an icon pixmap with its mask.
  `get_format` and `read_drawable_data` read raw ZPixmap data described by a
  `PixmapFormat`.
- **`xgbkit.blend`**: `scale`, `alpha`, `blend`, `blend_bg_color`,
  `blend_bgra` and `find_best_ewmh_icon`.

## Installation

```
pip install xgbkit
```

To run the test suite, install the test extra:

```
pip install "xgbkit[test]"
pytest
```

## The connection object

`XUtil(conn=...)` accepts any object. The modules call only the methods they
need on it, by duck typing:

| Used by | Call on `conn` | Expected result |
| --- | --- | --- |
| `loop.read` | `wait_for_event()`, `poll_for_event()` | an `(event, error)` pair; `(None, None)` from polling means nothing is pending |
| `atoms.atom` | `intern_atom(name, only_if_exists)` | an atom id |
| `atoms.atom_name` | `get_atom_name(aid)` | a `str` or `bytes` name |
| `props.get_property` | `get_property(window, atom_id)` | a `PropertyReply` |
| `props.change_prop` | `change_property(window, prop_atom, type_atom, fmt, count, data)` | nothing |
| `heads.physical_heads` | `query_screens()` | `(x, y, width, height)` tuples |
| `XUtil.ext_initialized` | the `extensions` attribute | a mapping of extension names |

## Examples

Subtracting one rectangle from another:

```python
from xgbkit.rects import Rect, subtract

pieces = subtract(Rect(0, 0, 100, 100), Rect(25, 25, 50, 50))
print([p.pieces() for p in pieces])
```

Finding the head that a window mostly sits on:

```python
from xgbkit.rects import Rect, largest_overlap

heads = [Rect(0, 0, 1920, 1080), Rect(1920, 0, 1280, 1024)]
index = largest_overlap(Rect(1800, 100, 400, 300), heads)  # None if no overlap
```

Dispatching a queued event to a callback:

```python
from xgbkit.core import XUtil
from xgbkit.events import EventType, new_configure_notify
from xgbkit.loop import connect, enqueue, process_queue

xu = XUtil(conn=None)
connect(xu, EventType.CONFIGURE_NOTIFY, 42,
        lambda xu, ev: print(ev.x, ev.y, ev.width, ev.height))
enqueue(xu, new_configure_notify(42, 42, 0, 10, 20, 300, 200, 0, False), None)
process_queue(xu)  # prints: 10 20 300 200
```

Decoding a property reply:

```python
from xgbkit.props import PropertyReply, prop_val_strs

reply = PropertyReply(format=8, value=b"one\x00two\x00", value_len=8)
print(prop_val_strs(reply))  # ['one', 'two']
```

Converting a Pillow image to a BGRA image and blending it onto a background:

```python
from PIL import Image as PILImage
from xgbkit.convert import new_convert
from xgbkit.blend import blend_bg_color

ximg = new_convert(PILImage.new("RGBA", (16, 16), (255, 0, 0, 128)))
blend_bg_color(ximg, (0, 0, 0))
ximg.save_png("out.png")
```

Picking the EWMH icon that best fits a preferred size:

```python
from xgbkit.convert import EwmhIcon
from xgbkit.blend import find_best_ewmh_icon

icons = [EwmhIcon(16, 16, [0] * 256), EwmhIcon(48, 48, [0] * 2304)]
best = find_best_ewmh_icon(32, 32, icons)  # the 48x48 icon
```

## What the package does not do

- It does not open a connection to an X server and does not speak the X
  protocol. You supply the `conn` object described above.
- It has no window objects. It does not create, map, move or destroy windows,
  and it does not create pixmaps or draw images onto them. An `Image` exists
  only in memory, and you can write it out as a PNG.
- It has no key bindings or mouse bindings and no keyboard mapping. It offers
  only the plain callbacks for each pair of event type and window, and the
  redirection of key events.
- It does not read or write the EWMH and ICCCM properties themselves. The
  generic property helpers in `xgbkit.props` are all it provides.
- It draws no text and has no command-line program.