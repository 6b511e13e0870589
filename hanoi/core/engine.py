from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic

from hanoi.core.errors import InvalidPegError, PegNotFoundError
from hanoi.core.peg import Peg, T

logger = logging.getLogger(__name__)

PegInitializer = Callable[[Peg[T]], bool]


@dataclass(frozen=True, slots=True)
class CreateResult(Generic[T]):
    """Result of creating a peg.

    - `ok`: whether a new peg was committed under the name.
    - `peg`: the committed peg, the already existing peg on a duplicate name,
      or None when the initializer rejected the peg.
    """

    ok: bool
    peg: Peg[T] | None


class GameEngine(Generic[T]):
    """Owns the named pegs and routes every transfer through the placement check."""

    def __init__(self) -> None:
        # dicts keep insertion order, which is also the render order.
        self._pegs: dict[str, Peg[T]] = {}

    def has(self, name: str) -> bool:
        return name in self._pegs

    def create(self, name: str, initializer: PegInitializer[T] | None = None) -> CreateResult[T]:
        existing = self._pegs.get(name)
        if existing is not None:
            logger.debug("create rejected: peg %r already exists", name)
            return CreateResult(ok=False, peg=existing)

        # Build detached; only a fully initialized peg claims the name.
        peg: Peg[T] = Peg()
        if initializer is not None:
            try:
                ok = initializer(peg)
            except InvalidPegError as e:
                logger.debug("create rolled back for %r: %s", name, e)
                return CreateResult(ok=False, peg=None)
            if not ok:
                logger.debug("create rolled back for %r: initializer reported failure", name)
                return CreateResult(ok=False, peg=None)

        self._pegs[name] = peg
        return CreateResult(ok=True, peg=peg)

    def select(self, name: str) -> Peg[T]:
        try:
            return self._pegs[name]
        except KeyError:
            raise PegNotFoundError(name) from None

    def names(self) -> list[str]:
        return list(self._pegs)

    def pegs(self) -> Iterator[tuple[str, Peg[T]]]:
        return iter(list(self._pegs.items()))

    def total_disks(self) -> int:
        return sum(len(p) for p in self._pegs.values())

    def snapshot(self) -> dict[str, tuple[T, ...]]:
        return {name: peg.snapshot() for name, peg in self._pegs.items()}

    def move(self, from_name: str, to_name: str) -> bool:
        """Move the top disk of `from_name` onto `to_name`.

        Returns False (state unchanged) if the source is empty or the destination
        top is not larger. Unknown names raise PegNotFoundError via `select`.
        """

        if from_name == to_name:
            return True

        source = self.select(from_name)
        destination = self.select(to_name)
        if source.is_empty():
            logger.debug("move %s -> %s rejected: nothing to move", from_name, to_name)
            return False

        if not destination.place(source.top()):
            logger.debug(
                "move %s -> %s rejected: %r is not smaller than %r",
                from_name,
                to_name,
                source.top(),
                destination.top(),
            )
            return False

        source.remove()
        return True
