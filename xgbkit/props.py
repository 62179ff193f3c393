"""Reading and writing window properties and decoding property values."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from xgbkit.atoms import atm, atom, atom_name
from xgbkit.core import XUtil

_VALID_FORMATS = (8, 16, 32)


@dataclass
class PropertyReply:
    """The answer to a GetProperty request.

    ``format`` is 0 when the property does not exist. ``value_len`` counts
    items of ``format`` bits and defaults to what ``value`` holds.
    """

    format: int
    value: bytes = b""
    value_len: Optional[int] = None
    type: int = 0

    def __post_init__(self) -> None:
        self.value = bytes(self.value)
        if self.value_len is None:
            self.value_len = len(self.value) // (self.format // 8) if self.format else 0


def get_property(xu: XUtil, window: int, atom_name: str) -> PropertyReply:
    """Fetch the whole property ``atom_name`` of ``window``.

    The connection's ``get_property(window, atom_id)`` returns a
    PropertyReply. A missing property raises LookupError; a failed request
    raises RuntimeError.
    """
    atom_id = atm(xu, atom_name)
    try:
        reply = xu.conn.get_property(window, atom_id)
    except Exception as err:
        raise RuntimeError(
            f"Error retrieving property '{atom_name}' on window {window:x}: {err}"
        ) from err

    if reply.format == 0:
        raise LookupError(f"No such property '{atom_name}' on window {window:x}.")
    return reply


def change_prop(
    xu: XUtil, window: int, fmt: int, prop: str, typ: str, data: bytes
) -> None:
    """Replace property ``prop`` of ``window`` with raw ``data`` of type ``typ``."""
    if fmt not in _VALID_FORMATS:
        raise ValueError(f"change_prop: unsupported format {fmt}")
    prop_atom = atm(xu, prop)
    typ_atom = atm(xu, typ)
    data = bytes(data)
    xu.conn.change_property(window, prop_atom, typ_atom, fmt, len(data) // (fmt // 8), data)


def change_prop32(xu: XUtil, window: int, prop: str, typ: str, *args: int) -> None:
    """Replace a 32-bit property with the given integers (little-endian words)."""
    data = b"".join(struct.pack("<I", value & 0xFFFFFFFF) for value in args)
    change_prop(xu, window, 32, prop, typ, data)


def str_to_atoms(xu: XUtil, atom_names: Iterable[str]) -> list[int]:
    """Intern each name, creating atoms that do not exist yet."""
    return [atom(xu, name, False) for name in atom_names]


def _check_format(reply: PropertyReply, expected: int, who: str) -> None:
    if reply.format != expected:
        raise ValueError(f"{who}: Expected format {expected} but got {reply.format}")


def _words(reply: PropertyReply, who: str) -> list[int]:
    _check_format(reply, 32, who)
    usable = len(reply.value) // 4 * 4
    return [word for (word,) in struct.iter_unpack("<I", reply.value[:usable])]


def _first_word(reply: PropertyReply, who: str) -> int:
    words = _words(reply, who)
    if not words:
        raise ValueError(f"{who}: property value holds no 32-bit item")
    return words[0]


def _fill(items: list[Any], reply: PropertyReply, default: Any, who: str) -> list[Any]:
    length = reply.value_len or 0
    if len(items) > length:
        raise ValueError(f"{who}: value holds more items than its length {length}")
    return items + [default] * (length - len(items))


def prop_val_atom(xu: XUtil, reply: PropertyReply) -> str:
    """Decode a 32-bit property holding one atom into its name."""
    return atom_name(xu, _first_word(reply, "prop_val_atom"))


def prop_val_atoms(xu: XUtil, reply: PropertyReply) -> list[str]:
    """Decode a 32-bit property holding atoms into their names."""
    names = [atom_name(xu, aid) for aid in _words(reply, "prop_val_atoms")]
    return _fill(names, reply, "", "prop_val_atoms")


def prop_val_window(reply: PropertyReply) -> int:
    """Decode a 32-bit property holding one window identifier."""
    return _first_word(reply, "prop_val_window")


def prop_val_windows(reply: PropertyReply) -> list[int]:
    """Decode a 32-bit property holding window identifiers."""
    return _fill(_words(reply, "prop_val_windows"), reply, 0, "prop_val_windows")


def prop_val_num(reply: PropertyReply) -> int:
    """Decode a 32-bit property holding one unsigned integer."""
    return _first_word(reply, "prop_val_num")


def prop_val_nums(reply: PropertyReply) -> list[int]:
    """Decode a 32-bit property holding unsigned integers."""
    return _fill(_words(reply, "prop_val_nums"), reply, 0, "prop_val_nums")


def prop_val_num64(reply: PropertyReply) -> int:
    """Decode a 32-bit property holding one integer, for 64-bit use."""
    return _first_word(reply, "prop_val_num64")


def prop_val_str(reply: PropertyReply) -> str:
    """Decode an 8-bit property into a string."""
    _check_format(reply, 8, "prop_val_str")
    return reply.value.decode("utf-8", errors="replace")


def prop_val_strs(reply: PropertyReply) -> list[str]:
    """Decode an 8-bit property of NUL-terminated strings into a list."""
    _check_format(reply, 8, "prop_val_strs")
    parts = reply.value.split(b"\0")
    last = parts.pop()
    strings = [part.decode("utf-8", errors="replace") for part in parts]
    if len(reply.value) - len(last) < (reply.value_len or 0):
        strings.append(last.decode("utf-8", errors="replace"))
    return strings