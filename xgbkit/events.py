"""Event types, event values and the windows each event is dispatched to."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, ClassVar, Optional

from xgbkit.core import NO_WINDOW


class EventType(IntEnum):
    """Event codes used to key callbacks.

    Core events carry their protocol codes; SHAPE_NOTIFY carries the SHAPE
    extension's event number.
    """

    SHAPE_NOTIFY = 0
    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSURE = 13
    NO_EXPOSURE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34


#: Events whose ``time`` field updates the connection's last event time.
TIMED_EVENTS = frozenset(
    {
        EventType.KEY_PRESS,
        EventType.KEY_RELEASE,
        EventType.BUTTON_PRESS,
        EventType.BUTTON_RELEASE,
        EventType.MOTION_NOTIFY,
        EventType.ENTER_NOTIFY,
        EventType.LEAVE_NOTIFY,
        EventType.PROPERTY_NOTIFY,
        EventType.SELECTION_CLEAR,
        EventType.SELECTION_REQUEST,
        EventType.SELECTION_NOTIFY,
    }
)

#: Key events, which may be redirected to another window.
KEY_EVENTS = frozenset({EventType.KEY_PRESS, EventType.KEY_RELEASE})

# For each event type, the fields naming the windows whose callbacks run,
# in order. An empty tuple means the callbacks attached to NO_WINDOW run.
_DISPATCH_FIELDS: dict[EventType, tuple[str, ...]] = {
    EventType.KEY_PRESS: ("event",),
    EventType.KEY_RELEASE: ("event",),
    EventType.BUTTON_PRESS: ("event",),
    EventType.BUTTON_RELEASE: ("event",),
    EventType.MOTION_NOTIFY: ("event",),
    EventType.ENTER_NOTIFY: ("event",),
    EventType.LEAVE_NOTIFY: ("event",),
    EventType.FOCUS_IN: ("event",),
    EventType.FOCUS_OUT: ("event",),
    EventType.KEYMAP_NOTIFY: (),
    EventType.EXPOSE: ("window",),
    EventType.GRAPHICS_EXPOSURE: ("drawable",),
    EventType.NO_EXPOSURE: ("drawable",),
    EventType.VISIBILITY_NOTIFY: ("window",),
    EventType.CREATE_NOTIFY: ("parent",),
    EventType.DESTROY_NOTIFY: ("window",),
    EventType.UNMAP_NOTIFY: ("window",),
    EventType.MAP_NOTIFY: ("event",),
    EventType.MAP_REQUEST: ("window", "parent"),
    EventType.REPARENT_NOTIFY: ("window",),
    EventType.CONFIGURE_NOTIFY: ("window",),
    EventType.CONFIGURE_REQUEST: ("window", "parent"),
    EventType.GRAVITY_NOTIFY: ("window",),
    EventType.RESIZE_REQUEST: ("window",),
    EventType.CIRCULATE_NOTIFY: ("window",),
    EventType.CIRCULATE_REQUEST: ("window",),
    EventType.PROPERTY_NOTIFY: ("window",),
    EventType.SELECTION_CLEAR: ("owner",),
    EventType.SELECTION_REQUEST: ("owner",),
    EventType.SELECTION_NOTIFY: ("requestor",),
    EventType.COLORMAP_NOTIFY: ("window",),
    EventType.CLIENT_MESSAGE: ("window",),
    EventType.MAPPING_NOTIFY: (),
    EventType.SHAPE_NOTIFY: ("affected_window",),
}


class Event:
    """An X event: its type plus the fields the server sent with it."""

    event_type: EventType

    def __init__(self, event_type: int, **fields: Any) -> None:
        self.event_type = EventType(event_type)
        for name, value in fields.items():
            setattr(self, name, value)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value!r}"
            for name, value in vars(self).items()
            if name != "event_type"
        )
        return f"Event({self.event_type.name}, {fields})"


def _wrap(value: int, bits: int, signed: bool) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


_DATA_LAYOUT = {8: ("<20B", 20), 16: ("<10H", 10), 32: ("<5I", 5)}


@dataclass(eq=True)
class ClientMessageEvent(Event):
    """A ClientMessage event; ``data`` holds the items in ``format`` bits."""

    event_type: ClassVar[EventType] = EventType.CLIENT_MESSAGE

    format: int
    window: int
    type: int
    data: tuple[int, ...]
    sequence: int = 0

    @property
    def raw(self) -> bytes:
        """The 20 bytes of message data as they appear on the wire."""
        layout, _ = _DATA_LAYOUT[self.format]
        return struct.pack(layout, *self.data)

    @property
    def data8(self) -> tuple[int, ...]:
        """The message data read as twenty 8-bit items."""
        return struct.unpack(_DATA_LAYOUT[8][0], self.raw)

    @property
    def data16(self) -> tuple[int, ...]:
        """The message data read as ten 16-bit items."""
        return struct.unpack(_DATA_LAYOUT[16][0], self.raw)

    @property
    def data32(self) -> tuple[int, ...]:
        """The message data read as five 32-bit items."""
        return struct.unpack(_DATA_LAYOUT[32][0], self.raw)


@dataclass(eq=True)
class ConfigureNotifyEvent(Event):
    """A ConfigureNotify event."""

    event_type: ClassVar[EventType] = EventType.CONFIGURE_NOTIFY

    event: int
    window: int
    above_sibling: int
    x: int
    y: int
    width: int
    height: int
    border_width: int
    override_redirect: bool
    sequence: int = field(default=0)


def _client_item(fmt: int, value: Any) -> int:
    if not isinstance(value, int):
        raise TypeError(
            f"client message data for format {fmt} must be integers, "
            f"not {type(value).__name__}"
        )
    if fmt == 8:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"format 8 data must be a byte, got {value}")
        return value
    if fmt == 16:
        if not -0x8000 <= value <= 0x7FFF:
            raise ValueError(f"format 16 data must be a 16-bit signed int, got {value}")
        return _wrap(value, 16, signed=False)
    return _wrap(value, 32, signed=False)


def new_client_message(fmt: int, window: int, type_: int, *args: int) -> ClientMessageEvent:
    """Build a ClientMessage event.

    Format 8 takes bytes, format 16 takes signed 16-bit integers and format
    32 takes integers (stored as unsigned 32-bit words). Missing items are
    zero and items past the capacity of the format are ignored.
    """
    if fmt not in _DATA_LAYOUT:
        raise ValueError(f"new_client_message: unsupported format '{fmt}'")
    _, capacity = _DATA_LAYOUT[fmt]
    items = [_client_item(fmt, value) for value in args[:capacity]]
    items.extend([0] * (capacity - len(items)))
    return ClientMessageEvent(format=fmt, window=window, type=type_, data=tuple(items))


def new_configure_notify(
    event: int,
    window: int,
    above_sibling: int,
    x: int,
    y: int,
    width: int,
    height: int,
    border_width: int,
    override_redirect: bool,
) -> ConfigureNotifyEvent:
    """Build a ConfigureNotify event, fitting values to their wire sizes."""
    return ConfigureNotifyEvent(
        event=event,
        window=window,
        above_sibling=above_sibling,
        x=_wrap(x, 16, signed=True),
        y=_wrap(y, 16, signed=True),
        width=_wrap(width, 16, signed=False),
        height=_wrap(height, 16, signed=False),
        border_width=_wrap(border_width, 16, signed=False),
        override_redirect=bool(override_redirect),
    )


def dispatch_windows(event: Event) -> tuple[int, ...]:
    """Return the windows whose callbacks run for ``event``, in order."""
    event_type: Optional[EventType] = getattr(event, "event_type", None)
    if event_type is None or event_type not in _DISPATCH_FIELDS:
        raise ValueError(f"unsupported event type: {event!r}")
    names = _DISPATCH_FIELDS[event_type]
    if not names:
        return (NO_WINDOW,)
    return tuple(getattr(event, name) for name in names)