from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Visitor = Callable[[K, V], bool]


@dataclass(frozen=True, slots=True)
class Handle:
    """Position of a key in the order arena.

    ``generation`` is the serial stamped on the slot when it was handed out;
    a handle only refers to its slot while the two still agree.
    """

    slot: int
    generation: int


@dataclass(slots=True, eq=False)
class Entry(Generic[K, V]):
    key: K
    value: V
    handle: Handle
