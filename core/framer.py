"""Assemble blank-line-terminated GTP replies from a line stream."""

from __future__ import annotations

from typing import List, Optional, TextIO

from core.errors import ProcessExit


class LineFramer:
    """Collect reply lines until the terminating empty line.

    ``feed`` is the pure framing step; ``read_block`` drives it from a
    blocking text stream such as a subprocess's standard output.
    """

    def __init__(self) -> None:
        self._buffer: List[str] = []

    @property
    def pending_lines(self) -> List[str]:
        """Lines received for the reply currently being assembled."""
        return list(self._buffer)

    def feed(self, line: str) -> Optional[str]:
        """Consume one line; return the joined reply once it is complete."""
        text = line.rstrip("\r\n")
        if text:
            self._buffer.append(text)
            return None
        block = "\n".join(self._buffer)
        self._buffer = []
        return block

    def read_block(self, stream: TextIO) -> str:
        """Block until a full reply has been read from ``stream``."""
        while True:
            line = stream.readline()
            if not line:
                raise ProcessExit("engine closed its output stream")
            block = self.feed(line)
            if block is not None:
                return block
