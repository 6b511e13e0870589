from __future__ import annotations

import pytest

from hanoi.core.engine import GameEngine
from hanoi.models import MoveRecord, SessionConfig
from hanoi.session import GameSession


def _feed(session: GameSession, *lines: str) -> None:
    for line in lines:
        session.handle_line(line)


def test_concrete_scenario_with_undo(session: GameSession) -> None:
    _feed(session, "a,c", "a,b", "c,b")
    assert session.engine.snapshot() == {"a": (3,), "b": (2, 1), "c": ()}
    assert session.last_move == MoveRecord(source="c", destination="b")

    session.handle_line("/undo")

    assert session.engine.snapshot() == {"a": (3,), "b": (2,), "c": (1,)}
    assert session.last_move == MoveRecord(source="b", destination="c")


def test_undo_restores_pre_move_state(session: GameSession) -> None:
    before = session.engine.snapshot()

    assert session.apply_move("a", "b")
    assert session.undo()

    assert session.engine.snapshot() == before


def test_undo_twice_reapplies_the_move(session: GameSession) -> None:
    session.handle_line("a,b")
    after_move = session.engine.snapshot()

    session.handle_line("/undo")
    session.handle_line("/undo")

    assert session.engine.snapshot() == after_move
    assert session.last_move == MoveRecord(source="a", destination="b")


def test_undo_without_previous_move_is_noop(session: GameSession) -> None:
    before = session.engine.snapshot()

    assert not session.undo()
    assert session.engine.snapshot() == before
    assert session.last_move is None


def test_undo_rejected_when_reverse_is_illegal(make_engine) -> None:
    engine = make_engine({"a": [3, 2, 1], "b": [], "c": []})
    session = GameSession(engine, SessionConfig(clear_screen=False))

    session.handle_line("a,b")  # b = {1}
    # Manual engine moves behind the session's back make the reverse b -> a illegal.
    assert engine.move("a", "c")
    assert engine.move("b", "c")
    assert engine.move("a", "b")  # b = {3}, a = {}
    assert engine.move("c", "a")  # a = {1}
    before = engine.snapshot()

    assert not session.undo()  # would put 3 onto 1
    assert engine.snapshot() == before
    assert session.last_move == MoveRecord(source="a", destination="b")


@pytest.mark.parametrize("line", ["x,a", "a,x", "b,c", "a,a,", "nonsense", "/dance", ""])
def test_rejected_or_ignored_lines_leave_state_untouched(session: GameSession, line: str) -> None:
    before = session.engine.snapshot()

    assert session.handle_line(line)

    assert session.engine.snapshot() == before
    assert session.last_move is None


def test_invariant_rejection_does_not_update_record(session: GameSession) -> None:
    session.handle_line("a,b")  # b = {1}
    session.handle_line("a,b")  # 2 onto 1 -> rejected

    assert session.engine.snapshot() == {"a": (3, 2), "b": (1,), "c": ()}
    assert session.last_move == MoveRecord(source="a", destination="b")


def test_self_move_is_recorded_and_harmless(session: GameSession) -> None:
    session.handle_line("a,a")

    assert session.engine.snapshot()["a"] == (3, 2, 1)
    assert session.last_move == MoveRecord(source="a", destination="a")


def test_quit_stops_session(session: GameSession) -> None:
    assert not session.handle_line("/quit")
    assert not session.running

    # Lines after quit are not applied.
    assert not session.handle_line("a,b")
    assert session.engine.snapshot()["a"] == (3, 2, 1)


def test_run_loop_renders_each_iteration_and_stops_on_quit(small_engine: GameEngine[int]) -> None:
    session = GameSession(small_engine, SessionConfig(clear_screen=False))
    lines = iter(["a,c\n", "/undo\n", "a,b\n", "/quit\n", "a,c\n"])
    frames: list[str] = []

    session.run(read_line=lambda: next(lines), write=frames.append)

    assert len(frames) == 4
    assert frames[0].splitlines()[0] == "a#3 2 1"
    assert "c#1" in frames[1].splitlines()
    assert frames[2].splitlines()[:3] == ["a#3 2 1", "b#", "c#"]
    assert session.engine.snapshot() == {"a": (3, 2), "b": (1,), "c": ()}
    # The trailing line after /quit is never read.
    assert next(lines) == "a,c\n"


def test_run_loop_treats_read_failures_as_transient(small_engine: GameEngine[int]) -> None:
    session = GameSession(small_engine, SessionConfig(clear_screen=False))
    reads: list[object] = [
        UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
        "",
        EOFError(),
        "a,b\n",
        "/quit\n",
    ]

    def _read() -> str:
        item = reads.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item  # type: ignore[return-value]

    frames: list[str] = []
    session.run(read_line=_read, write=frames.append)

    assert not reads
    assert len(frames) == 5
    assert session.engine.snapshot()["b"] == (1,)


def test_run_loop_exit_on_eof(small_engine: GameEngine[int]) -> None:
    session = GameSession(small_engine, SessionConfig(clear_screen=False, exit_on_eof=True))
    lines = iter(["a,b\n", ""])

    session.run(read_line=lambda: next(lines), write=lambda _: None)

    assert session.engine.snapshot()["b"] == (1,)
    assert session.running


def test_render_includes_clear_screen_by_default(small_engine: GameEngine[int]) -> None:
    session = GameSession(small_engine)

    assert session.render().startswith("\033[2J\033[1;1H")


def test_custom_grammar_from_config(small_engine: GameEngine[int]) -> None:
    session = GameSession(small_engine, SessionConfig(command_prefix=":", move_separator=" "))

    session.handle_line("a c")
    session.handle_line(":undo")
    assert session.engine.snapshot()["a"] == (3, 2, 1)

    assert not session.handle_line(":quit")


def test_move_after_quit_is_rejected_without_touching_board(session: GameSession) -> None:
    before = session.engine.snapshot()
    session.quit()

    assert not session.apply_move("a", "b")
    assert session.engine.snapshot() == before
    assert session.last_move is None


def test_undo_after_quit_is_rejected(session: GameSession) -> None:
    session.handle_line("a,b")
    after_move = session.engine.snapshot()
    session.quit()

    assert not session.undo()
    assert session.engine.snapshot() == after_move
    assert session.last_move == MoveRecord(source="a", destination="b")
