from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from hanoi.core.engine import GameEngine
from hanoi.core.errors import HanoiError
from hanoi.core.peg import Peg
from hanoi.models import PegLayout

logger = logging.getLogger(__name__)


class LayoutLoadError(HanoiError, RuntimeError):
    pass


def default_layout(*, disks: int, peg_names: list[str]) -> PegLayout:
    """First peg holds `disks..1` (largest at the bottom); the rest start empty."""

    if not peg_names:
        raise ValueError("At least one peg is required")
    if disks < 0:
        raise ValueError("disks must be >= 0")

    pegs: dict[str, list[int]] = {name: [] for name in peg_names}
    pegs[peg_names[0]] = list(range(disks, 0, -1))
    return PegLayout(pegs=pegs)


def load_layout(path: Path) -> PegLayout:
    """Load a starting layout from JSON, e.g. `{"pegs": {"a": [3, 2, 1], "b": []}}`."""

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise LayoutLoadError(f"Layout not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise LayoutLoadError(f"Cannot read layout {path}: {e}") from e

    try:
        return PegLayout.model_validate_json(raw)
    except ValidationError as e:
        raise LayoutLoadError(f"Invalid layout {path}: {e}") from e


def _fill_from(values: list[int]):
    def _initializer(peg: Peg[int]) -> bool:
        return all(peg.place(v) for v in values)

    return _initializer


def build_engine(layout: PegLayout) -> GameEngine[int]:
    """Create every peg of the layout through the engine's all-or-nothing initializer.

    Raises ValueError naming the first peg whose disks are not strictly descending.
    """

    engine: GameEngine[int] = GameEngine()
    for name, disks in layout.pegs.items():
        result = engine.create(name, _fill_from(disks))
        if not result.ok:
            raise ValueError(f"Peg {name!r} is not strictly descending bottom-to-top: {disks}")

    logger.debug("built engine with %d pegs and %d disks", len(layout.pegs), engine.total_disks())
    return engine
