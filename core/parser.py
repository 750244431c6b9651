"""Decode framed GTP replies into typed values.

A reply on the wire looks like ``=[id] payload`` or ``?[id] message``
followed by any number of further lines.  GTP replies do not name the
command they answer, so every function here takes the originating
:class:`~core.commands.Command` to pick the payload grammar.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Tuple

from core.commands import Command, ReplyShape
from core.errors import EngineError, ProtocolError
from core.types import Move, Vertex, parse_move

_HEADER_RE = re.compile(r"\A([=?])(\d*)(.*)\Z", re.DOTALL)


def split_reply(text: str) -> Tuple[bool, str]:
    """Return ``(is_success, body)`` for the framed reply ``text``.

    ``body`` has the status marker, the optional id and the separating
    whitespace removed from its first line.
    """
    if not text:
        raise ProtocolError("empty reply from engine")
    first_line = text.split("\n", 1)[0]
    match = _HEADER_RE.match(text)
    if match is None:
        raise ProtocolError(f"no success/failure indication: {first_line!r}")
    marker, _ident, rest = match.groups()
    if rest and rest[0] not in " \t\n":
        raise ProtocolError(f"malformed reply header: {first_line!r}")
    return marker == "=", rest.lstrip(" \t")


def _single_token(body: str) -> str:
    tokens = body.split()
    if len(tokens) != 1:
        raise ProtocolError(f"expected a single token, got {body!r}")
    return tokens[0]


def _parse_unit(body: str) -> None:
    return None


def _parse_integer(body: str) -> int:
    token = _single_token(body)
    try:
        return int(token)
    except ValueError as exc:
        raise ProtocolError(f"expected an integer, got {token!r}") from exc


def _parse_string(body: str) -> str:
    return body.strip()


def _parse_boolean(body: str) -> bool:
    token = _single_token(body)
    if token == "true":
        return True
    if token == "false":
        return False
    raise ProtocolError(f"expected true or false, got {token!r}")


def _parse_lines(body: str) -> List[str]:
    lines = [line.strip() for line in body.split("\n")]
    while lines and not lines[-1]:
        lines.pop()
    while lines and not lines[0]:
        lines.pop(0)
    return lines


def _parse_vertices(body: str) -> List[Vertex]:
    return [Vertex.from_string(token) for token in body.split()]


def _parse_move(body: str) -> Move:
    return parse_move(_single_token(body))


def _parse_text(body: str) -> str:
    return body.strip("\n")


_PARSERS: Dict[ReplyShape, Callable[[str], Any]] = {
    ReplyShape.UNIT: _parse_unit,
    ReplyShape.INTEGER: _parse_integer,
    ReplyShape.STRING: _parse_string,
    ReplyShape.BOOLEAN: _parse_boolean,
    ReplyShape.LINES: _parse_lines,
    ReplyShape.VERTICES: _parse_vertices,
    ReplyShape.MOVE: _parse_move,
    ReplyShape.TEXT: _parse_text,
}


def parse_reply(command: Command, text: str) -> Any:
    """Decode the reply ``text`` received for ``command``.

    Returns the success payload, raises :class:`EngineError` for failure
    replies and :class:`ProtocolError` when the text does not fit the
    grammar of ``command``.

    An empty block is accepted as a bare acknowledgement for commands
    without a payload.
    """
    if not text and command.reply is ReplyShape.UNIT:
        return None
    ok, body = split_reply(text)
    if not ok:
        raise EngineError(body.strip(), command=command.verb)
    return _PARSERS[command.reply](body)
