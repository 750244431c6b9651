"""Entry point for the gnugo-gtp command line tool.

The tool starts a GTP engine, runs one short conversation with it and prints
the outcome.  It supports three modes:

``info``     - print the engine's name, version, protocol version and
               supported commands as JSON.
``genmove``  - set up a board, replay ``--play`` moves and print the move the
               engine chooses for ``--color``.
``score``    - load an SGF file and print the engine's final score.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml

from api import gnugo
from core.errors import EngineError, GTPError
from core.types import Color, SpecialMove, parse_move

DEFAULTS: Dict[str, Any] = {
    "engine": gnugo.DEFAULT_EXECUTABLE,
    "engine_args": list(gnugo.DEFAULT_ARGS),
    "boardsize": 19,
    "komi": 6.5,
    "log_level": "WARNING",
}


def _load_config(path: str | None) -> Dict[str, Any]:
    """Load optional YAML/JSON configuration file."""

    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh) or {}
    except FileNotFoundError:
        logging.warning("Config file %s not found", path)
        return {}
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logging.warning("Failed to load config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logging.warning("Config file %s does not contain a mapping", path)
        return {}
    return data


def _settings(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge defaults, config file values and command line flags."""
    settings = dict(DEFAULTS)
    settings.update(_load_config(args.config))
    for key in ("engine", "boardsize", "komi", "log_level"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    return settings


def _parse_color(text: str) -> Color:
    """Accept ``black``/``white`` and the GTP abbreviations ``b``/``w``."""
    lowered = text.lower()
    for color in Color:
        if lowered in (color.value, color.value[0]):
            return color
    raise ValueError(f"invalid color {text!r}")


def _format_move(move: Any) -> str:
    if isinstance(move, SpecialMove):
        return move.value
    return str(move)


def _run_info(session: gnugo.Session) -> Dict[str, Any]:
    """Collect identification data from the engine."""
    return {
        "name": gnugo.name(session),
        "version": gnugo.version(session),
        "protocol_version": gnugo.protocol_version(session),
        "commands": gnugo.list_commands(session),
    }


def _run_genmove(session: gnugo.Session, settings: Dict[str, Any],
                 moves: List[List[str]], color: str) -> str:
    """Replay ``moves`` on a fresh board and ask for the next move."""
    gnugo.boardsize(session, int(settings["boardsize"]))
    gnugo.clear_board(session)
    gnugo.komi(session, float(settings["komi"]))
    for move_color, token in moves:
        gnugo.play(session, _parse_color(move_color), parse_move(token))
    move = gnugo.genmove(session, _parse_color(color))
    logging.info("Engine played %s for %s", _format_move(move), color)
    return _format_move(move)


def _run_score(session: gnugo.Session, sgf: str, move_number: Optional[int]) -> str:
    """Load ``sgf`` and return the engine's score estimate."""
    gnugo.loadsgf(session, sgf, move_number)
    return gnugo.final_score(session)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``gnugo-gtp`` command line tool."""
    parser = argparse.ArgumentParser(description="Talk to a Go engine over GTP")
    parser.add_argument("--mode", choices=["info", "genmove", "score"], required=True)
    parser.add_argument("--engine", help="Engine executable (default: gnugo)")
    parser.add_argument("--config", help="Optional configuration YAML/JSON")
    parser.add_argument("--boardsize", type=int, help="Board size for genmove mode")
    parser.add_argument("--komi", type=float, help="Komi for genmove mode")
    parser.add_argument("--play", nargs=2, action="append", default=[],
                        metavar=("COLOR", "MOVE"), help="Move to replay before genmove")
    parser.add_argument("--color", choices=["black", "white"], default="black",
                        help="Color to generate a move for")
    parser.add_argument("--sgf", help="SGF file for score mode")
    parser.add_argument("--move-number", type=int, help="Load the SGF file up to this move")
    parser.add_argument("--log-level", dest="log_level", help="Logging level")

    args = parser.parse_args(argv)
    if args.mode == "score" and not args.sgf:
        parser.error("--sgf is required for score mode")

    settings = _settings(args)
    level = str(settings["log_level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        print(f"invalid log level: {settings['log_level']!r}", file=sys.stderr)
        return 1
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.debug("Effective settings: %s", settings)

    try:
        session = gnugo.start(settings["engine"], settings["engine_args"])
    except GTPError as exc:
        logging.error("%s", exc)
        return 1

    with session:
        try:
            if args.mode == "info":
                print(json.dumps(_run_info(session), indent=2))
            elif args.mode == "genmove":
                print(_run_genmove(session, settings, args.play, args.color))
            elif args.mode == "score":
                print(_run_score(session, args.sgf, args.move_number))
            gnugo.quit(session)
        except EngineError as exc:
            logging.warning("Engine refused %s: %s", exc.command, exc.message)
            print(f"engine error: {exc.message}", file=sys.stderr)
            return 1
        except (GTPError, ValueError) as exc:
            logging.error("%s", exc)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
