"""The event queue, callback registry and main X event loop."""

from __future__ import annotations

import copy
from typing import Any, Optional

from xgbkit.core import Callback, EventOrError, Hook, XUtil, logger
from xgbkit.events import KEY_EVENTS, TIMED_EVENTS, EventType, dispatch_windows


def enqueue(xu: XUtil, event: Any, error: Any) -> None:
    """Append an event, or an error, read from the server to the queue."""
    with xu.evqueue_lock:
        xu.evqueue.append(EventOrError(event=event, error=error))


def dequeue(xu: XUtil) -> tuple[Any, Any]:
    """Pop the oldest queue entry and return it as ``(event, error)``.

    Raises IndexError when the queue is empty.
    """
    with xu.evqueue_lock:
        if not xu.evqueue:
            raise IndexError("dequeue from an empty event queue")
        entry = xu.evqueue.pop(0)
    return entry.event, entry.error


def dequeue_at(xu: XUtil, index: int) -> None:
    """Remove the queue entry at ``index``; useful for event compression."""
    with xu.evqueue_lock:
        del xu.evqueue[index]


def empty(xu: XUtil) -> bool:
    """Whether the event queue is empty."""
    with xu.evqueue_lock:
        return not xu.evqueue


def peek(xu: XUtil) -> list[EventOrError]:
    """Return a copy of the event queue for inspection."""
    with xu.evqueue_lock:
        return list(xu.evqueue)


def connect(xu: XUtil, event_type: int, window: int, callback: Callback) -> None:
    """Attach ``callback`` to the (event type, window) pair.

    The callback list is replaced rather than mutated, so a dispatch in
    progress keeps the list it started with.
    """
    key = int(event_type)
    with xu.callbacks_lock:
        per_window = xu.callbacks.setdefault(key, {})
        per_window[window] = [*per_window.get(window, ()), callback]


def connect_hook(xu: XUtil, hook: Hook) -> None:
    """Add a hook run before each event; a false result stops its dispatch."""
    with xu.hooks_lock:
        xu.hooks = [*xu.hooks, hook]


def detach(xu: XUtil, window: int) -> None:
    """Remove every callback attached to ``window``."""
    with xu.callbacks_lock:
        for per_window in xu.callbacks.values():
            per_window.pop(window, None)


def redirect_key_events(xu: XUtil, window: int) -> None:
    """Send all key events to ``window``'s callbacks; 0 stops redirection."""
    xu.key_redirect = window


def quit(xu: XUtil) -> None:
    """Stop the main loop once the current event has been handled."""
    xu.quit = True


def _run_callbacks(xu: XUtil, event: Any, event_type: int, window: int) -> None:
    with xu.callbacks_lock:
        callbacks = xu.callbacks.get(int(event_type), {}).get(window, [])
    for callback in callbacks:
        callback(xu, event)


def read(xu: XUtil, block: bool) -> None:
    """Read pending events and errors from the connection into the queue.

    The connection's ``wait_for_event()`` and ``poll_for_event()`` each
    return an ``(event, error)`` pair; ``(None, None)`` from polling means
    nothing is pending. When ``block`` is true, one entry is waited for
    first; getting nothing from that wait raises RuntimeError.
    """
    if block:
        event, error = xu.conn.wait_for_event()
        if event is None and error is None:
            raise RuntimeError("could not read an event or an error")
        enqueue(xu, event, error)

    while True:
        event, error = xu.conn.poll_for_event()
        if event is None and error is None:
            break
        enqueue(xu, event, error)


def _dispatch(xu: XUtil, event: Any) -> None:
    event_type: Optional[int] = getattr(event, "event_type", None)
    try:
        event_type = EventType(event_type)  # type: ignore[arg-type]
        dispatch_windows(event)
    except (ValueError, TypeError):
        logger.error("unsupported event type: %s", type(event).__name__)
        return

    if event_type in KEY_EVENTS and xu.key_redirect > 0:
        event = copy.copy(event)
        event.event = xu.key_redirect

    if event_type in TIMED_EVENTS:
        xu.event_time = event.time

    for window in dispatch_windows(event):
        _run_callbacks(xu, event, event_type, window)


def process_queue(xu: XUtil) -> None:
    """Handle every queued entry until the queue is empty or quitting.

    Errors go to ``xu.error_handler``. Events pass through the hooks first,
    then run the callbacks of the windows they are dispatched to.
    """
    while not empty(xu):
        if xu.quit:
            return

        event, error = dequeue(xu)
        if error is not None:
            xu.error_handler(error)
            continue

        if event is None:
            raise RuntimeError("expected an event but got nothing")

        with xu.hooks_lock:
            hooks = xu.hooks
        if all(hook(xu, event) for hook in hooks):
            _dispatch(xu, event)


def run(xu: XUtil) -> None:
    """Run the main event loop until :func:`quit` is called."""
    while not xu.quit:
        read(xu, True)
        process_queue(xu)