from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Generic, Protocol, TypeVar

from hanoi.core.errors import EmptyPegError, InvalidPegError


class Comparable(Protocol):
    def __lt__(self, other: Any, /) -> bool:  # pragma: no cover
        ...


T = TypeVar("T", bound=Comparable)


class Peg(Generic[T]):
    """Ordered stack of disks where every disk sits on a strictly larger one.

    Contents are stored bottom-to-top. `place` is the only way to add a disk,
    so the descending order holds between any two calls.
    """

    __slots__ = ("_disks",)

    def __init__(self) -> None:
        self._disks: list[T] = []

    @classmethod
    def from_values(cls, values: Iterable[T]) -> Peg[T]:
        """Build a peg from bottom-to-top values.

        Raises InvalidPegError on the first value that can't be placed; the
        partially built peg is discarded.
        """

        peg: Peg[T] = cls()
        for value in values:
            if not peg.place(value):
                raise InvalidPegError(f"Cannot place {value!r} on top of {peg.top()!r}")
        return peg

    def top(self) -> T:
        if not self._disks:
            raise EmptyPegError("Peg is empty")
        return self._disks[-1]

    def is_empty(self) -> bool:
        return not self._disks

    def size(self) -> int:
        return len(self._disks)

    def can_place(self, value: T) -> bool:
        return not self._disks or value < self._disks[-1]

    def place(self, value: T) -> bool:
        if not self.can_place(value):
            return False
        self._disks.append(value)
        return True

    def remove(self) -> T:
        if not self._disks:
            raise EmptyPegError("Peg is empty")
        return self._disks.pop()

    def snapshot(self) -> tuple[T, ...]:
        """Contents bottom-to-top, as an immutable copy."""

        return tuple(self._disks)

    def __len__(self) -> int:
        return len(self._disks)

    def __iter__(self) -> Iterator[T]:
        return iter(self.snapshot())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Peg):
            return NotImplemented
        return self._disks == other._disks

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Peg({self._disks!r})"
