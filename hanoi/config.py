from __future__ import annotations

import os
from pathlib import Path

from hanoi.models import SessionConfig

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def get_log_level() -> str:
    return os.environ.get("HANOI_LOG_LEVEL", "WARNING").upper()


def _env_bool(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().casefold()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def settings_from_env() -> SessionConfig:
    """Session settings from HANOI_* environment variables; unset ones keep their defaults."""

    values: dict[str, object] = {}

    if (disks := os.environ.get("HANOI_DISKS")) is not None:
        values["disks"] = disks
    if (pegs := os.environ.get("HANOI_PEGS")) is not None:
        values["peg_names"] = [p for p in pegs.split(",") if p]
    if (prefix := os.environ.get("HANOI_COMMAND_PREFIX")) is not None:
        values["command_prefix"] = prefix
    if (sep := os.environ.get("HANOI_MOVE_SEPARATOR")) is not None:
        values["move_separator"] = sep

    for field, env_name in (("clear_screen", "HANOI_CLEAR_SCREEN"), ("exit_on_eof", "HANOI_EXIT_ON_EOF")):
        flag = _env_bool(env_name)
        if flag is not None:
            values[field] = flag

    # pydantic coerces "7" -> 7 and raises ValidationError on bad values.
    return SessionConfig.model_validate(values)


def load_dotenv_if_present(path: Path) -> bool:
    """Load a `.env` file without overriding variables already set in the environment."""

    if not path.exists():
        return False

    from dotenv import load_dotenv

    return load_dotenv(dotenv_path=path, override=False)
