"""Half-duplex command dispatch over a GTP engine's standard streams.

GTP allows exactly one outstanding command.  :class:`Dispatcher` tracks
whether a reply is still owed (``Idle`` or ``AwaitingReply``) and refuses to
send another command until it has been consumed.  Synchronous calls go
through :meth:`Dispatcher.call`; asynchronous ones split the round trip into
:meth:`Dispatcher.send` and :meth:`Dispatcher.receive`.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TextIO

from core.commands import Command
from core.encoder import write_command
from core.errors import CommandInFlightError, ProcessExit, ProtocolError
from core.framer import LineFramer
from core.parser import parse_reply

logger = logging.getLogger(__name__)


class DispatchState(Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


@dataclass(frozen=True, eq=False)
class PendingReply:
    """Handle for a command whose reply has not been read yet.

    The originating command is kept so the reply can be decoded with the
    right grammar once it arrives.  Handles compare by identity: each
    send produces a distinct one.
    """

    command: Command


class Dispatcher:
    """Drive one GTP conversation over a pair of text streams."""

    def __init__(
        self,
        stdin: TextIO,
        stdout: TextIO,
        process: Optional[subprocess.Popen] = None,
    ) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self.process = process
        self.framer = LineFramer()
        self._pending: Optional[PendingReply] = None
        self._failure: Optional[Exception] = None

    @property
    def state(self) -> DispatchState:
        if self._pending is None:
            return DispatchState.IDLE
        return DispatchState.AWAITING_REPLY

    @property
    def pending(self) -> Optional[PendingReply]:
        return self._pending

    # ------------------------------------------------------------------
    # Round trip
    # ------------------------------------------------------------------
    def send(self, command: Command) -> PendingReply:
        """Write ``command`` to the engine without waiting for its reply."""
        if self._failure is not None:
            raise self._failure
        if self._pending is not None:
            raise CommandInFlightError(
                f"cannot send {command.verb!r}: reply to "
                f"{self._pending.command.verb!r} not consumed yet"
            )
        try:
            line = write_command(self.stdin, command)
        except (BrokenPipeError, ValueError, OSError) as exc:
            raise self._exited(f"engine closed its input stream: {exc}") from exc
        logger.debug(">> %s", line.rstrip("\n"))
        self._pending = PendingReply(command)
        return self._pending

    def receive(self, pending: PendingReply) -> Any:
        """Block until the reply for ``pending`` arrives and decode it."""
        if pending is not self._pending:
            raise CommandInFlightError(
                f"no outstanding reply for {pending.command.verb!r}"
            )
        try:
            block = self.framer.read_block(self.stdout)
        except ProcessExit as exc:
            self._pending = None
            raise self._exited(str(exc)) from exc
        self._pending = None
        logger.debug("<< %s", block)
        try:
            return parse_reply(pending.command, block)
        except ProtocolError as exc:
            self._failure = ProtocolError(
                f"conversation desynchronized after {pending.command.verb!r}: {exc}"
            )
            raise

    def call(self, command: Command) -> Any:
        """Send ``command`` and return its decoded reply."""
        return self.receive(self.send(command))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _exited(self, message: str) -> ProcessExit:
        exit_status = self.process.poll() if self.process is not None else None
        if exit_status is not None:
            message = f"{message} (exit status {exit_status})"
        error = ProcessExit(message, exit_status)
        self._failure = error
        logger.info("GTP engine gone: %s", message)
        return error
