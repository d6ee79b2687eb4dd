from .avl_tree import BALST, Comparable, RebalanceStrategy
from .exceptions import (
    BALSTError,
    DuplicateKeyError,
    IllegalNullKeyError,
    KeyNotFoundError,
)

__all__ = [
    "BALST",
    "Comparable",
    "RebalanceStrategy",
    "BALSTError",
    "DuplicateKeyError",
    "IllegalNullKeyError",
    "KeyNotFoundError",
]
