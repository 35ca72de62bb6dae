from __future__ import annotations

import logging
from typing import Generic, Iterator, Optional

from .model import Entry, Handle, K, V, Visitor

logger = logging.getLogger(__name__)

# sentinel slot: next[ROOT] is the front, prev[ROOT] the back
ROOT = 0


class LinkedMap(Generic[K, V]):
    """Hash map whose keys also form a mutable linked order.

    Keys are indexed by a dict of entries; the order lives in an arena of
    slots (parallel ``keys``/``prev``/``next``/``generation`` lists) forming a
    circular list through the ``ROOT`` sentinel. Every entry carries a handle
    to its slot, so moves and removals never search.

    A map built with ``LinkedMap()`` starts uninitialized and behaves as
    empty; the first insert sets it up. Not safe for concurrent use.
    """

    def __init__(self) -> None:
        self._index: Optional[dict[K, Entry[K, V]]] = None
        self._keys: list[Optional[K]] = []
        self._prev: list[int] = []
        self._next: list[int] = []
        self._generation: list[int] = []
        self._free: list[int] = []
        # never reset, so handles stay unique across init()
        self._issued = 0
        self._modcount = 0

    # lifecycle

    def _inited(self) -> bool:
        return self._index is not None

    def _lazy_init(self) -> None:
        if not self._inited():
            logger.debug("lazy init of %s", type(self).__name__)
            self.init()

    def init(self) -> LinkedMap[K, V]:
        """Initialize or clear the map and return it."""
        if self._index:
            logger.debug("discarding %d entries", len(self._index))
        self._index = {}
        self._keys = [None]
        self._prev = [ROOT]
        self._next = [ROOT]
        self._generation = [0]
        self._free = []
        self._modcount += 1
        return self

    def reset(self) -> LinkedMap[K, V]:
        """Alias of ``init``."""
        return self.init()

    # arena

    def _slot(self, handle: Handle) -> int:
        slot = handle.slot
        assert self._generation[slot] == handle.generation, f"stale handle {handle}"
        return slot

    def _alloc(self, key: K) -> Handle:
        self._issued += 1
        if self._free:
            slot = self._free.pop()
            self._keys[slot] = key
            self._generation[slot] = self._issued
        else:
            slot = len(self._keys)
            self._keys.append(key)
            self._prev.append(slot)
            self._next.append(slot)
            self._generation.append(self._issued)
        return Handle(slot, self._issued)

    def _release(self, slot: int) -> None:
        self._unlink(slot)
        self._keys[slot] = None
        self._generation[slot] = 0
        self._free.append(slot)

    def _link_after(self, slot: int, at: int) -> None:
        nxt = self._next[at]
        self._prev[slot] = at
        self._next[slot] = nxt
        self._next[at] = slot
        self._prev[nxt] = slot

    def _unlink(self, slot: int) -> None:
        prv, nxt = self._prev[slot], self._next[slot]
        self._next[prv] = nxt
        self._prev[nxt] = prv
        self._prev[slot] = slot
        self._next[slot] = slot

    def _move_after(self, slot: int, at: int) -> None:
        if slot == at:
            return
        self._unlink(slot)
        self._link_after(slot, at)

    def _entry(self, key: K) -> Optional[Entry[K, V]]:
        if self._index is None:
            # unhashable keys fail the same way before and after lazy init
            hash(key)
            return None
        return self._index.get(key)

    def _push_back(self, key: K, value: V) -> None:
        self._lazy_init()
        assert self._index is not None
        handle = self._alloc(key)
        self._link_after(handle.slot, self._prev[ROOT])
        self._index[key] = Entry(key, value, handle)
        self._modcount += 1

    # insertion

    def upsert(self, key: K, value: V) -> bool:
        """Set ``value`` for ``key``; new keys go to the back.

        An existing key keeps its position. Returns whether the key is new.
        """
        entry = self._entry(key)
        if entry is not None:
            entry.value = value
            return False
        self._push_back(key, value)
        return True

    def insert_if_absent(self, key: K, value: V) -> bool:
        """Append ``key`` at the back unless present. Returns whether it was added."""
        if self._entry(key) is not None:
            return False
        self._push_back(key, value)
        return True

    set = upsert
    add = insert_if_absent

    # reordering

    def move_to_front(self, key: K) -> bool:
        entry = self._entry(key)
        if entry is None:
            return False
        self._move_after(self._slot(entry.handle), ROOT)
        self._modcount += 1
        return True

    def move_to_back(self, key: K) -> bool:
        entry = self._entry(key)
        if entry is None:
            return False
        self._move_after(self._slot(entry.handle), self._prev[ROOT])
        self._modcount += 1
        return True

    def move_before(self, key: K, mark: K) -> bool:
        """Place ``key`` directly before ``mark``. Moving a key before itself is a no-op."""
        entry, mark_entry = self._entry(key), self._entry(mark)
        if entry is None or mark_entry is None:
            return False
        slot, mark_slot = self._slot(entry.handle), self._slot(mark_entry.handle)
        if slot != mark_slot:
            self._move_after(slot, self._prev[mark_slot])
            self._modcount += 1
        return True

    def move_after(self, key: K, mark: K) -> bool:
        """Place ``key`` directly after ``mark``. Moving a key after itself is a no-op."""
        entry, mark_entry = self._entry(key), self._entry(mark)
        if entry is None or mark_entry is None:
            return False
        slot, mark_slot = self._slot(entry.handle), self._slot(mark_entry.handle)
        if slot != mark_slot:
            self._move_after(slot, mark_slot)
            self._modcount += 1
        return True

    # lookup

    def _at(self, slot: int) -> tuple[Optional[K], Optional[V], bool]:
        if slot == ROOT:
            return None, None, False
        assert self._index is not None
        key = self._keys[slot]
        return key, self._index[key].value, True

    def front(self) -> tuple[Optional[K], Optional[V], bool]:
        if not self._inited():
            return None, None, False
        return self._at(self._next[ROOT])

    def back(self) -> tuple[Optional[K], Optional[V], bool]:
        if not self._inited():
            return None, None, False
        return self._at(self._prev[ROOT])

    def has(self, key: K) -> bool:
        return self._entry(key) is not None

    def load(self, key: K) -> tuple[Optional[V], bool]:
        entry = self._entry(key)
        if entry is None:
            return None, False
        return entry.value, True

    def remove(self, key: K) -> tuple[Optional[V], bool]:
        """Delete ``key`` and return its value, or ``(None, False)`` if absent."""
        entry = self._entry(key)
        if entry is None:
            return None, False
        assert self._index is not None
        del self._index[key]
        self._release(self._slot(entry.handle))
        self._modcount += 1
        return entry.value, True

    # traversal

    def _walk(self) -> Iterator[K]:
        if not self._inited():
            return
        modcount = self._modcount
        slot = self._next[ROOT]
        while slot != ROOT:
            yield self._keys[slot]  # type: ignore[misc]
            if self._modcount != modcount:
                raise RuntimeError("LinkedMap order changed during iteration")
            slot = self._next[slot]

    def range(self, visit: Visitor[K, V]) -> None:
        """Call ``visit(key, value)`` front to back until it returns false.

        Adding, removing or moving keys from inside ``visit`` raises
        ``RuntimeError``; replacing the value of an existing key is fine.
        """
        for key in self._walk():
            assert self._index is not None
            if not visit(key, self._index[key].value):
                break

    def __iter__(self) -> Iterator[K]:
        return self._walk()

    def keys(self) -> list[K]:
        return list(self._walk())

    def values(self) -> list[V]:
        return [value for _, value in self.items()]

    def items(self) -> list[tuple[K, V]]:
        out: list[tuple[K, V]] = []

        def collect(key: K, value: V) -> bool:
            out.append((key, value))
            return True

        self.range(collect)
        return out

    def __len__(self) -> int:
        return len(self._index) if self._index is not None else 0

    def __bool__(self) -> bool:
        return len(self) > 0

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    # display

    def render(self) -> str:
        """Format as ``{k1: v1, k2: v2}`` in current order."""
        return "{" + ", ".join(f"{key}: {value}" for key, value in self.items()) + "}"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.items()!r})"
