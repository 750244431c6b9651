"""Exceptions raised while talking to a GTP engine."""

from __future__ import annotations

from typing import Optional


class GTPError(Exception):
    """Base class for every error raised by this package."""


class SpawnError(GTPError):
    """The engine executable could not be found or started."""


class ProtocolError(GTPError):
    """A reply did not match the grammar expected for the issued command.

    The conversation is out of step once this is raised; the session should
    be restarted.
    """


class CommandInFlightError(ProtocolError):
    """A command was sent while the reply to the previous one was pending."""


class EngineError(GTPError):
    """The engine answered with a failure (``?``) reply."""

    def __init__(self, message: str, command: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.command = command


class ProcessExit(GTPError):
    """The engine process closed its streams or exited."""

    def __init__(self, message: str, exit_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.exit_status = exit_status
