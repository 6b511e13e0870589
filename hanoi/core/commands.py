from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_PREFIX = "/"
DEFAULT_SEPARATOR = ","


class CommandKind(StrEnum):
    nop = "nop"
    move = "move"
    undo = "undo"
    quit = "quit"
    unrecognized = "unrecognized"


@dataclass(frozen=True, slots=True)
class Command:
    kind: CommandKind
    source: str = ""
    destination: str = ""


DIRECTIVES: dict[str, CommandKind] = {
    "quit": CommandKind.quit,
    "undo": CommandKind.undo,
}


def parse_command(line: str, *, prefix: str = DEFAULT_PREFIX, separator: str = DEFAULT_SEPARATOR) -> Command:
    """Parse one input line.

    - `/quit`, `/undo` -> directives; any other `/...` is a no-op directive.
    - `src,dst` -> move; only the first separator splits, the rest stays in `dst`.
    - anything else -> unrecognized.

    Peg names are taken verbatim; only the line terminator is stripped.
    """

    text = line.rstrip("\r\n")

    if text.startswith(prefix):
        return Command(kind=DIRECTIVES.get(text[len(prefix):], CommandKind.nop))

    source, sep, destination = text.partition(separator)
    if sep:
        return Command(kind=CommandKind.move, source=source, destination=destination)

    return Command(kind=CommandKind.unrecognized)
