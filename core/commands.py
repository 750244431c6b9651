"""Typed GTP commands.

Each command is a frozen dataclass carrying the arguments of one GTP verb.
The class attributes ``verb`` and ``reply`` give the wire token and the
grammar of the success reply; :mod:`core.encoder` and :mod:`core.parser`
only ever look at those two attributes and at :meth:`Command.arguments`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Optional, Tuple

from core.types import Color, Move, Status, Vertex


class ReplyShape(Enum):
    """Grammar of a success reply."""

    UNIT = "unit"
    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    LINES = "lines"
    VERTICES = "vertices"
    MOVE = "move"
    TEXT = "text"


@dataclass(frozen=True)
class Command:
    """Base class of every GTP command."""

    verb: ClassVar[str] = ""
    reply: ClassVar[ReplyShape] = ReplyShape.UNIT

    def arguments(self) -> Tuple[Any, ...]:
        """Return the typed arguments in wire order."""
        return tuple(getattr(self, field.name) for field in fields(self))


# ----------------------------------------------------------------------
# Administrative commands
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class ProtocolVersion(Command):
    verb: ClassVar[str] = "protocol_version"
    reply: ClassVar[ReplyShape] = ReplyShape.INTEGER


@dataclass(frozen=True)
class Name(Command):
    verb: ClassVar[str] = "name"
    reply: ClassVar[ReplyShape] = ReplyShape.STRING


@dataclass(frozen=True)
class Version(Command):
    verb: ClassVar[str] = "version"
    reply: ClassVar[ReplyShape] = ReplyShape.STRING


@dataclass(frozen=True)
class KnownCommand(Command):
    command: str
    verb: ClassVar[str] = "known_command"
    reply: ClassVar[ReplyShape] = ReplyShape.BOOLEAN


@dataclass(frozen=True)
class ListCommands(Command):
    verb: ClassVar[str] = "list_commands"
    reply: ClassVar[ReplyShape] = ReplyShape.LINES


@dataclass(frozen=True)
class Quit(Command):
    verb: ClassVar[str] = "quit"


# ----------------------------------------------------------------------
# Setup commands
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class BoardSize(Command):
    size: int
    verb: ClassVar[str] = "boardsize"


@dataclass(frozen=True)
class ClearBoard(Command):
    verb: ClassVar[str] = "clear_board"


@dataclass(frozen=True)
class Komi(Command):
    komi: float
    verb: ClassVar[str] = "komi"


@dataclass(frozen=True)
class FixedHandicap(Command):
    stones: int
    verb: ClassVar[str] = "fixed_handicap"
    reply: ClassVar[ReplyShape] = ReplyShape.VERTICES


@dataclass(frozen=True)
class PlaceFreeHandicap(Command):
    stones: int
    verb: ClassVar[str] = "place_free_handicap"
    reply: ClassVar[ReplyShape] = ReplyShape.VERTICES


@dataclass(frozen=True)
class SetFreeHandicap(Command):
    vertices: Tuple[Vertex, ...]
    verb: ClassVar[str] = "set_free_handicap"

    def arguments(self) -> Tuple[Any, ...]:
        return tuple(self.vertices)


# ----------------------------------------------------------------------
# Core play commands
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Play(Command):
    color: Color
    move: Move
    verb: ClassVar[str] = "play"


@dataclass(frozen=True)
class GenMove(Command):
    color: Color
    verb: ClassVar[str] = "genmove"
    reply: ClassVar[ReplyShape] = ReplyShape.MOVE


@dataclass(frozen=True)
class Undo(Command):
    verb: ClassVar[str] = "undo"


# ----------------------------------------------------------------------
# Time keeping
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class TimeSettings(Command):
    main_time: int
    byo_yomi_time: int
    byo_yomi_stones: int
    verb: ClassVar[str] = "time_settings"


@dataclass(frozen=True)
class TimeLeft(Command):
    color: Color
    time: int
    stones: int
    verb: ClassVar[str] = "time_left"


# ----------------------------------------------------------------------
# Scoring, regression and debug commands
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class FinalScore(Command):
    verb: ClassVar[str] = "final_score"
    reply: ClassVar[ReplyShape] = ReplyShape.STRING


@dataclass(frozen=True)
class FinalStatusList(Command):
    status: Status
    verb: ClassVar[str] = "final_status_list"
    reply: ClassVar[ReplyShape] = ReplyShape.VERTICES


@dataclass(frozen=True)
class LoadSgf(Command):
    filename: str
    move_number: Optional[int] = None
    verb: ClassVar[str] = "loadsgf"

    def arguments(self) -> Tuple[Any, ...]:
        if self.move_number is None:
            return (self.filename,)
        return (self.filename, self.move_number)


@dataclass(frozen=True)
class RegGenMove(Command):
    color: Color
    verb: ClassVar[str] = "reg_genmove"
    reply: ClassVar[ReplyShape] = ReplyShape.MOVE


@dataclass(frozen=True)
class ShowBoard(Command):
    verb: ClassVar[str] = "showboard"
    reply: ClassVar[ReplyShape] = ReplyShape.TEXT
