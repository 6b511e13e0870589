from __future__ import annotations

from hanoi.core.engine import GameEngine

CLEAR_SCREEN = "\033[2J\033[1;1H"
NAME_SEPARATOR = "#"


def format_peg_line(name: str, disks: tuple[object, ...]) -> str:
    return f"{name}{NAME_SEPARATOR}{' '.join(str(d) for d in disks)}"


def render_engine(engine: GameEngine, *, clear_screen: bool = True) -> str:
    """One line per peg (`name#bottom ... top`), in creation order.

    Disks are space separated so multi-digit sizes stay unambiguous.
    """

    lines = [format_peg_line(name, peg.snapshot()) for name, peg in engine.pegs()]
    board = "\n".join(lines) + "\n\n"
    return (CLEAR_SCREEN + board) if clear_screen else board
