"""Connection state shared by the event loop, atom cache and helpers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger("xgbkit")

#: The largest request the X server accepts without BIG-REQUESTS, in bytes.
MAX_REQ_SIZE = (1 << 16) * 4

#: A window identifier meaning "no window", e.g. for MappingNotify handlers.
NO_WINDOW = 0

Callback = Callable[["XUtil", Any], None]
Hook = Callable[["XUtil", Any], bool]
ErrorHandler = Callable[[Any], None]


@dataclass(frozen=True)
class EventOrError:
    """One entry of the event queue: an event or an error from the server."""

    event: Any = None
    error: Any = None

    @property
    def is_error(self) -> bool:
        """Whether this entry carries an error rather than an event."""
        return self.error is not None


def _log_error(error: Any) -> None:
    logger.error("%s", error)


def _lock() -> threading.RLock:
    return threading.RLock()


@dataclass(eq=False)
class XUtil:
    """State kept for one X connection.

    ``conn`` is the protocol connection. It is used through duck typing:
    ``extensions`` (a mapping of extension names), ``wait_for_event()``,
    ``poll_for_event()``, ``intern_atom()``, ``get_atom_name()``,
    ``get_property()``, ``change_property()`` and ``query_screens()`` are
    called by the modules that need them.
    """

    conn: Any
    setup: Any = None
    screen: Any = None
    root: int = 0
    gc: int = 0
    dummy: int = 0

    quit: bool = False
    event_time: int = 0
    key_redirect: int = NO_WINDOW
    error_handler: ErrorHandler = _log_error

    atoms: dict[str, int] = field(default_factory=dict)
    atom_names: dict[int, str] = field(default_factory=dict)
    evqueue: list[EventOrError] = field(default_factory=list)
    callbacks: dict[int, dict[int, list[Callback]]] = field(default_factory=dict)
    hooks: list[Hook] = field(default_factory=list)

    atoms_lock: threading.RLock = field(default_factory=_lock, repr=False)
    evqueue_lock: threading.RLock = field(default_factory=_lock, repr=False)
    callbacks_lock: threading.RLock = field(default_factory=_lock, repr=False)
    hooks_lock: threading.RLock = field(default_factory=_lock, repr=False)

    def __post_init__(self) -> None:
        if not self.root and self.screen is not None:
            self.root = getattr(self.screen, "root", 0) or 0

    def ext_initialized(self, ext_name: str) -> bool:
        """Whether the named extension was initialized on the connection."""
        extensions: Optional[Any] = getattr(self.conn, "extensions", None)
        if not extensions:
            return False
        return ext_name in extensions