from __future__ import annotations

from typing import Iterable

from .linkedmap import LinkedMap
from .model import K, V


def new() -> LinkedMap[K, V]:
    """Return an initialized, empty LinkedMap."""
    return LinkedMap().init()


def from_pairs(pairs: Iterable[tuple[K, V]], *, overwrite: bool = True) -> LinkedMap[K, V]:
    # overwrite=False keeps the first value seen for a repeated key
    m: LinkedMap[K, V] = new()
    insert = m.upsert if overwrite else m.insert_if_absent
    for key, value in pairs:
        insert(key, value)
    return m
