from __future__ import annotations

from .linkedmap import ROOT, LinkedMap


def check_invariants(m: LinkedMap) -> None:
    """Audit the index/order bijection of ``m``; raise ValueError on the first fault."""
    index = m._index
    if index is None:
        if m._keys or m._prev or m._next or m._free:
            raise ValueError("uninitialized map has arena slots")
        return

    size = len(m._keys)
    if not (len(m._prev) == len(m._next) == len(m._generation) == size):
        raise ValueError("arena lists out of step")

    # forward walk, bounded so a cycle that skips ROOT cannot hang
    forward = []
    seen = set()
    slot = m._next[ROOT]
    while slot != ROOT:
        if slot in seen or len(forward) > size:
            raise ValueError(f"order loops at slot {slot}")
        seen.add(slot)
        if m._next[m._prev[slot]] != slot or m._prev[m._next[slot]] != slot:
            raise ValueError(f"broken links around slot {slot}")
        forward.append(slot)
        slot = m._next[slot]

    backward = []
    slot = m._prev[ROOT]
    while slot != ROOT and len(backward) <= size:
        backward.append(slot)
        slot = m._prev[slot]
    if backward[::-1] != forward:
        raise ValueError("backward walk disagrees with forward walk")

    if len(forward) != len(index):
        raise ValueError(f"order has {len(forward)} keys, index has {len(index)}")

    for slot in forward:
        key = m._keys[slot]
        entry = index.get(key)
        if entry is None:
            raise ValueError(f"key {key!r} in order but not in index")
        if entry.key != key:
            raise ValueError(f"entry for {key!r} holds key {entry.key!r}")
        if entry.handle.slot != slot:
            raise ValueError(f"entry for {key!r} points at slot {entry.handle.slot}, not {slot}")
        if entry.handle.generation != m._generation[slot]:
            raise ValueError(f"stale handle for {key!r}")

    free = set(m._free)
    if len(free) != len(m._free):
        raise ValueError("slot freed twice")
    if free & seen or ROOT in free:
        raise ValueError("free list holds a linked slot")
    if len(free) + len(seen) + 1 != size:
        raise ValueError("arena slots leaked")
