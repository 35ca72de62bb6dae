from .api import new, from_pairs
from .check import check_invariants
from .linkedmap import LinkedMap
from .model import Entry, Handle

__all__ = [
    "new",
    "from_pairs",
    "check_invariants",
    "LinkedMap",
    "Entry",
    "Handle",
]
