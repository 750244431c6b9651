"""Value types shared by the GTP encoder and parser.

Vertices follow the usual Go board convention: columns are letters with
``I`` skipped, rows are numbered from 1 at the bottom of the board.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from core.errors import ProtocolError

COLUMNS = "ABCDEFGHJKLMNOPQRSTUVWXYZ"
MAX_BOARD_SIZE = len(COLUMNS)


class Color(Enum):
    BLACK = "black"
    WHITE = "white"


class Status(Enum):
    ALIVE = "alive"
    SEKI = "seki"
    DEAD = "dead"


class SpecialMove(Enum):
    """Moves that do not place a stone."""

    PASS = "pass"
    RESIGN = "resign"


PASS = SpecialMove.PASS
RESIGN = SpecialMove.RESIGN


@dataclass(frozen=True)
class Vertex:
    """A single board intersection such as ``D4``."""

    column: str
    row: int

    def __post_init__(self) -> None:
        column = self.column.upper()
        if len(column) != 1 or column not in COLUMNS:
            raise ValueError(f"invalid column {self.column!r}")
        if not 1 <= self.row <= MAX_BOARD_SIZE:
            raise ValueError(f"invalid row {self.row!r}")
        object.__setattr__(self, "column", column)

    @classmethod
    def from_string(cls, token: str) -> "Vertex":
        """Parse ``token`` (e.g. ``"c3"`` or ``"Q16"``).

        Raises :class:`ProtocolError` when the token is not a vertex.
        """
        if len(token) < 2 or not token[1:].isdigit():
            raise ProtocolError(f"malformed vertex {token!r}")
        try:
            return cls(token[0], int(token[1:]))
        except ValueError as exc:
            raise ProtocolError(f"malformed vertex {token!r}: {exc}") from exc

    def __str__(self) -> str:
        return f"{self.column}{self.row}"


Move = Union[Vertex, SpecialMove]


def parse_move(token: str) -> Move:
    """Return the move named by ``token``; ``pass``/``resign`` in any case."""
    lowered = token.lower()
    for special in SpecialMove:
        if lowered == special.value:
            return special
    return Vertex.from_string(token)
