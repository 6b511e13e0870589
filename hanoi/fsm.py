from __future__ import annotations

from statemachine import State, StateMachine

from hanoi.models import MoveRecord


class SessionFSM(StateMachine):
    """FSM around the session's one-slot undo record.

    - idle: no successful move yet, `/undo` does nothing.
    - tracking: a move is recorded; `/undo` reverses it and records the reversal.
    - stopped: `/quit` was received.
    Engine calls happen in the session; the FSM only guards transitions and holds the record.
    """

    idle = State("idle", value="idle", initial=True)
    tracking = State("tracking", value="tracking")
    stopped = State("stopped", value="stopped", final=True)

    move_recorded = idle.to(tracking) | tracking.to(tracking)
    undo_applied = tracking.to(tracking)
    quit_requested = idle.to(stopped) | tracking.to(stopped)

    def __init__(self) -> None:
        self.last_move: MoveRecord | None = None
        super().__init__()

    @property
    def can_undo(self) -> bool:
        return self.current_state == self.tracking and self.last_move is not None

    @property
    def accepting_input(self) -> bool:
        return self.current_state != self.stopped

    def on_move_recorded(self, record: MoveRecord) -> None:
        self.last_move = record

    def on_undo_applied(self) -> None:
        if self.last_move is not None:
            self.last_move = self.last_move.reversed()
