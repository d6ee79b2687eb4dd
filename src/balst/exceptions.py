"""Errors raised by BALST operations.

Each error subclasses the builtin a plain container would raise in the same
situation, so ``except KeyError`` and ``except ValueError`` still catch them.
"""

from typing import Any


class BALSTError(Exception):
    """Base class for every error raised by the tree."""


class IllegalNullKeyError(BALSTError, ValueError):
    def __init__(self) -> None:
        super().__init__("key must not be None")


class KeyNotFoundError(BALSTError, KeyError):
    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key


class DuplicateKeyError(BALSTError, KeyError):
    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key
