from __future__ import annotations


class HanoiError(Exception):
    pass


class EmptyPegError(HanoiError, IndexError):
    """Raised when reading or removing the top of an empty peg."""


class InvalidPegError(HanoiError, ValueError):
    """Raised when a bulk-built peg would break the descending order."""


class PegNotFoundError(HanoiError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Peg not found: {self.name!r}"
