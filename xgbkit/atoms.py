"""Interning atoms and looking up atom names, with a per-connection cache.

Atom identifiers never change while the server runs, so each name is sent
to the server at most once.
"""

from __future__ import annotations

from typing import Optional

from xgbkit.core import XUtil


def _cached_atom(xu: XUtil, name: str) -> Optional[int]:
    with xu.atoms_lock:
        return xu.atoms.get(name)


def _cached_name(xu: XUtil, aid: int) -> Optional[str]:
    with xu.atoms_lock:
        return xu.atom_names.get(aid)


def _cache(xu: XUtil, name: str, aid: int) -> None:
    with xu.atoms_lock:
        xu.atoms[name] = aid
        xu.atom_names[aid] = name


def atom(xu: XUtil, name: str, only_if_exists: bool) -> int:
    """Intern ``name`` and return its identifier, using the cache first.

    The connection's ``intern_atom(name, only_if_exists)`` is asked only for
    names not yet cached. When ``only_if_exists`` is true and the atom does
    not exist, the server answers 0, and that answer is cached too.
    Failures of the request raise RuntimeError.
    """
    cached = _cached_atom(xu, name)
    if cached is not None:
        return cached

    try:
        aid = int(xu.conn.intern_atom(name, only_if_exists))
    except Exception as err:
        raise RuntimeError(f"Error interning atom '{name}': {err}") from err

    _cache(xu, name, aid)
    return aid


def atm(xu: XUtil, name: str) -> int:
    """Intern ``name``, creating it if needed; an identifier of 0 is an error."""
    aid = atom(xu, name, False)
    if aid == 0:
        raise ValueError(f"atm: '{name}' returned an identifier of 0.")
    return aid


def atom_name(xu: XUtil, aid: int) -> str:
    """Return the name of the atom ``aid``, using the cache first.

    The connection's ``get_atom_name(aid)`` may answer with a str or with
    bytes (read as Latin-1). Failures of the request raise RuntimeError.
    """
    cached = _cached_name(xu, aid)
    if cached is not None:
        return cached

    try:
        raw = xu.conn.get_atom_name(aid)
    except Exception as err:
        raise RuntimeError(
            f"Error fetching name for ATOM id '{aid}': {err}"
        ) from err

    name = raw.decode("latin-1") if isinstance(raw, (bytes, bytearray)) else str(raw)
    _cache(xu, name, aid)
    return name