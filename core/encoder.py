"""Render typed commands into GTP request lines."""

from __future__ import annotations

from enum import Enum
from typing import Any, TextIO

from core.commands import Command
from core.types import Vertex


def render_float(value: float) -> str:
    """Return ``value`` in plain decimal notation (``6.5``, ``7.0``)."""
    text = format(value, "f").rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


def render_argument(value: Any) -> str:
    """Return the wire form of a single typed argument."""
    if isinstance(value, Enum):
        # Color, Status and SpecialMove all carry their GTP token as value
        return str(value.value)
    if isinstance(value, Vertex):
        return str(value)
    if isinstance(value, bool):
        raise TypeError("GTP commands take no boolean arguments")
    if isinstance(value, float):
        return render_float(value)
    if isinstance(value, (int, str)):
        return str(value)
    raise TypeError(f"cannot encode argument {value!r}")


def encode(command: Command) -> str:
    """Return the request line for ``command`` including the newline."""
    words = [command.verb]
    words.extend(render_argument(arg) for arg in command.arguments())
    return " ".join(words) + "\n"


def write_command(stream: TextIO, command: Command) -> str:
    """Write ``command`` to ``stream`` and flush it.

    Returns the line that was written so callers can log it.
    """
    line = encode(command)
    stream.write(line)
    stream.flush()
    return line
