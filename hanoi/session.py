from __future__ import annotations

import logging
from collections.abc import Callable

from hanoi.core.commands import Command, CommandKind, parse_command
from hanoi.core.engine import GameEngine
from hanoi.core.render import render_engine
from hanoi.fsm import SessionFSM
from hanoi.models import MoveRecord, SessionConfig

logger = logging.getLogger(__name__)

ReadLine = Callable[[], str]
Write = Callable[[str], object]

# Errors from the input channel that only skip the current iteration.
TRANSIENT_READ_ERRORS: tuple[type[Exception], ...] = (EOFError, UnicodeDecodeError, ValueError)


class GameSession:
    """One interactive game: an engine, the undo record, and the read-eval-render loop.

    Invalid commands never raise out of `handle_line`; they leave the board unchanged.
    """

    def __init__(self, engine: GameEngine, config: SessionConfig | None = None):
        self.engine = engine
        self.config = config or SessionConfig()
        self.fsm = SessionFSM()

    @property
    def last_move(self) -> MoveRecord | None:
        return self.fsm.last_move

    @property
    def running(self) -> bool:
        return self.fsm.accepting_input

    def render(self) -> str:
        return render_engine(self.engine, clear_screen=self.config.clear_screen)

    def parse(self, line: str) -> Command:
        return parse_command(line, prefix=self.config.command_prefix, separator=self.config.move_separator)

    def apply_move(self, source: str, destination: str) -> bool:
        if not self.running:
            logger.debug("move %r -> %r ignored: session stopped", source, destination)
            return False

        if not (self.engine.has(source) and self.engine.has(destination)):
            logger.debug("move %r -> %r ignored: unknown peg", source, destination)
            return False

        if not self.engine.move(source, destination):
            return False

        self.fsm.move_recorded(record=MoveRecord(source=source, destination=destination))
        return True

    def undo(self) -> bool:
        """Reverse the last move through the regular engine move.

        On success the record is swapped, so a second undo re-applies the move.
        """

        last = self.last_move
        if not self.fsm.can_undo or last is None:
            logger.debug("undo ignored: no move recorded yet")
            return False

        reverse = last.reversed()
        if not (self.engine.has(reverse.source) and self.engine.has(reverse.destination)):
            return False
        if not self.engine.move(reverse.source, reverse.destination):
            logger.debug("undo of %s -> %s rejected", last.source, last.destination)
            return False

        self.fsm.undo_applied()
        return True

    def quit(self) -> None:
        if self.running:
            self.fsm.quit_requested()

    def apply(self, command: Command) -> bool:
        """Apply a parsed command; returns whether the board changed."""

        if command.kind == CommandKind.quit:
            self.quit()
            return False
        if command.kind == CommandKind.move:
            return self.apply_move(command.source, command.destination)
        if command.kind == CommandKind.undo:
            return self.undo()
        if command.kind == CommandKind.unrecognized:
            logger.debug("unrecognized input ignored")
        return False

    def handle_line(self, line: str) -> bool:
        """Apply one input line; returns whether the session is still running."""

        if self.running:
            self.apply(self.parse(line))
        return self.running

    def run(self, *, read_line: ReadLine, write: Write) -> None:
        """Render, read one line, apply it; until `/quit`.

        A read that fails or hits end of input is skipped (or ends the loop when
        `exit_on_eof` is set).
        """

        logger.info("session started with pegs %s", ",".join(self.engine.names()))
        while self.running:
            write(self.render())

            try:
                line = read_line()
            except TRANSIENT_READ_ERRORS as e:
                if isinstance(e, EOFError) and self.config.exit_on_eof:
                    break
                logger.debug("input read failed, retrying: %s", e)
                continue

            if line == "":
                if self.config.exit_on_eof:
                    break
                logger.debug("end of input, retrying")
                continue

            self.handle_line(line)

        logger.info("session stopped")
