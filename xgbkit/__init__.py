"""Helpers for X11 clients: rectangles, heads, events, atoms, properties and BGRA images."""

__version__ = "0.1.0"

__all__ = [
    "atoms",
    "blend",
    "convert",
    "core",
    "events",
    "heads",
    "image",
    "loop",
    "props",
    "rects",
]