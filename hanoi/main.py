from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from hanoi.config import get_log_level, load_dotenv_if_present, settings_from_env
from hanoi.game_setup import LayoutLoadError, build_engine, default_layout, load_layout
from hanoi.session import GameSession

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hanoi",
        description="Play the Tower of Hanoi in the terminal. Move with 'a,c'; '/undo' and '/quit' are directives.",
    )
    parser.add_argument("--disks", type=int, default=None, help="Disks on the first peg (default: 9 or HANOI_DISKS)")
    parser.add_argument("--pegs", default=None, help="Comma separated peg names (default: a,b,c or HANOI_PEGS)")
    parser.add_argument("--layout", type=Path, default=None, help="JSON file with a starting layout")
    parser.add_argument("--script", type=Path, default=None, help="Read commands from a file instead of stdin")
    parser.add_argument("--no-clear", action="store_true", help="Don't clear the screen before each render")
    parser.add_argument("--exit-on-eof", action="store_true", help="Stop at end of input instead of waiting")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING or HANOI_LOG_LEVEL)")
    parser.add_argument("--env-file", type=Path, default=Path(".env"), help="Optional .env file with HANOI_* settings")
    return parser


def _run(args: argparse.Namespace, *, stdin: TextIO, stdout: TextIO) -> int:
    try:
        config = settings_from_env()
        overrides: dict[str, object] = {}
        if args.disks is not None:
            overrides["disks"] = args.disks
        if args.pegs is not None:
            overrides["peg_names"] = [p for p in args.pegs.split(",") if p]
        if args.no_clear:
            overrides["clear_screen"] = False
        if args.exit_on_eof or args.script is not None:
            overrides["exit_on_eof"] = True
        if overrides:
            config = config.model_validate({**config.model_dump(), **overrides})
    except (ValidationError, ValueError) as e:
        print(f"hanoi: invalid settings: {e}", file=sys.stderr)
        return 2

    try:
        if args.layout is not None:
            layout = load_layout(args.layout)
        else:
            layout = default_layout(disks=config.disks, peg_names=config.peg_names)
        engine = build_engine(layout)
    except (LayoutLoadError, ValueError) as e:
        print(f"hanoi: {e}", file=sys.stderr)
        return 1

    session = GameSession(engine, config)

    def _write(text: str) -> None:
        stdout.write(text)
        stdout.flush()

    if args.script is not None:
        try:
            with args.script.open(encoding="utf-8") as fh:
                session.run(read_line=fh.readline, write=_write)
        except FileNotFoundError:
            print(f"hanoi: script not found: {args.script}", file=sys.stderr)
            return 1
    else:
        session.run(read_line=stdin.readline, write=_write)
    return 0


def main(argv: list[str] | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv_if_present(args.env_file)
    level = (args.log_level or get_log_level()).upper()
    if level not in LOG_LEVELS:
        print(f"hanoi: invalid log level {level!r} (choose from {', '.join(LOG_LEVELS)})", file=sys.stderr)
        return 2
    logging.basicConfig(level=level, stream=sys.stderr)

    return _run(args, stdin=stdin or sys.stdin, stdout=stdout or sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
