from __future__ import annotations

import os
from collections.abc import Callable

import pytest

from hanoi.core.engine import GameEngine
from hanoi.models import SessionConfig
from hanoi.session import GameSession

EngineFactory = Callable[[dict[str, list[int]]], GameEngine[int]]


@pytest.fixture(autouse=True)
def _clear_hanoi_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests hermetic: a developer's HANOI_* settings must not leak in."""

    for key in list(os.environ):
        if key.startswith("HANOI_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def make_engine() -> EngineFactory:
    def _make(pegs: dict[str, list[int]]) -> GameEngine[int]:
        engine: GameEngine[int] = GameEngine()
        for name, disks in pegs.items():
            result = engine.create(name, lambda p, d=disks: all(p.place(v) for v in d))
            assert result.ok, name
        return engine

    return _make


@pytest.fixture()
def small_engine(make_engine: EngineFactory) -> GameEngine[int]:
    return make_engine({"a": [3, 2, 1], "b": [], "c": []})


@pytest.fixture()
def session(small_engine: GameEngine[int]) -> GameSession:
    return GameSession(small_engine, SessionConfig(clear_screen=False))
