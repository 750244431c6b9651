"""Drive a GNU Go (or any GTP speaking) engine subprocess.

``start`` spawns the engine in GTP mode and returns a :class:`Session`.
Every other function takes that session first and issues one GTP command,
returning the decoded reply.  ``genmove_async`` only sends its command; the
move is collected later with :func:`receive_reply`.

Example::

    session = start()
    boardsize(session, 9)
    play(session, Color.BLACK, Vertex("E", 5))
    move = genmove(session, Color.WHITE)
    quit(session)
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Any, Iterable, List, Optional, Sequence

from api.dispatcher import Dispatcher, PendingReply
from core import commands as cmd
from core.errors import SpawnError
from core.types import Color, Move, Status, Vertex

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "gnugo"
DEFAULT_ARGS = ("--mode", "gtp")
QUIT_TIMEOUT = 5.0


class Session:
    """A running engine subprocess and the conversation held with it."""

    def __init__(self, process: subprocess.Popen) -> None:
        self.process = process
        self.dispatcher = Dispatcher(process.stdin, process.stdout, process=process)

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def exit_status(self) -> Optional[int]:
        """Return code of the engine, ``None`` while it is running."""
        return self.process.poll()

    def close(self) -> None:
        """Terminate the engine if it is still running and reap it."""
        if self.process.poll() is None:
            logger.info("Terminating GTP engine (pid %d)", self.process.pid)
            self.process.terminate()
        try:
            self.process.wait(timeout=QUIT_TIMEOUT)
        except subprocess.TimeoutExpired:
            self.process.kill()
            self.process.wait()
        for stream in (self.process.stdin, self.process.stdout):
            if stream is not None and not stream.closed:
                try:
                    stream.close()
                except BrokenPipeError:
                    pass

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def start(
    executable: str = DEFAULT_EXECUTABLE,
    args: Sequence[str] = DEFAULT_ARGS,
    stderr: Any = subprocess.DEVNULL,
) -> Session:
    """Locate ``executable`` on the search path and spawn it in GTP mode.

    Raises :class:`SpawnError` if the executable cannot be found or the
    process cannot be created.
    """
    path = shutil.which(executable)
    if path is None:
        raise SpawnError(f"could not find {executable!r} executable")
    try:
        process = subprocess.Popen(
            [path, *args],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=stderr,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except OSError as exc:
        raise SpawnError(f"could not start {path}: {exc}") from exc
    logger.info("Started GTP engine %s (pid %d)", path, process.pid)
    return Session(process)


def receive_reply(session: Session, pending: PendingReply) -> Any:
    """Wait for and decode the reply to an asynchronously sent command."""
    return session.dispatcher.receive(pending)


# ----------------------------------------------------------------------
# Administrative commands
# ----------------------------------------------------------------------
def protocol_version(session: Session) -> int:
    return session.dispatcher.call(cmd.ProtocolVersion())


def name(session: Session) -> str:
    return session.dispatcher.call(cmd.Name())


def version(session: Session) -> str:
    return session.dispatcher.call(cmd.Version())


def known_command(session: Session, command: str) -> bool:
    return session.dispatcher.call(cmd.KnownCommand(command))


def list_commands(session: Session) -> List[str]:
    return session.dispatcher.call(cmd.ListCommands())


def quit(session: Session) -> None:
    """Ask the engine to exit and wait for the process to end."""
    session.dispatcher.call(cmd.Quit())
    try:
        session.process.wait(timeout=QUIT_TIMEOUT)
    except subprocess.TimeoutExpired:
        logger.warning("GTP engine (pid %d) did not exit after quit", session.pid)


# ----------------------------------------------------------------------
# Setup commands
# ----------------------------------------------------------------------
def boardsize(session: Session, size: int) -> None:
    session.dispatcher.call(cmd.BoardSize(size))


def clear_board(session: Session) -> None:
    session.dispatcher.call(cmd.ClearBoard())


def komi(session: Session, value: float) -> None:
    session.dispatcher.call(cmd.Komi(float(value)))


def fixed_handicap(session: Session, stones: int) -> List[Vertex]:
    return session.dispatcher.call(cmd.FixedHandicap(stones))


def place_free_handicap(session: Session, stones: int) -> List[Vertex]:
    return session.dispatcher.call(cmd.PlaceFreeHandicap(stones))


def set_free_handicap(session: Session, vertices: Iterable[Vertex]) -> None:
    session.dispatcher.call(cmd.SetFreeHandicap(tuple(vertices)))


# ----------------------------------------------------------------------
# Core play commands
# ----------------------------------------------------------------------
def play(session: Session, color: Color, move: Move) -> None:
    session.dispatcher.call(cmd.Play(color, move))


def genmove(session: Session, color: Color) -> Move:
    return session.dispatcher.call(cmd.GenMove(color))


def genmove_async(session: Session, color: Color) -> PendingReply:
    """Send ``genmove`` and return at once; see :func:`receive_reply`."""
    return session.dispatcher.send(cmd.GenMove(color))


def undo(session: Session) -> None:
    session.dispatcher.call(cmd.Undo())


# ----------------------------------------------------------------------
# Time keeping
# ----------------------------------------------------------------------
def time_settings(
    session: Session, main_time: int, byo_yomi_time: int, byo_yomi_stones: int
) -> None:
    session.dispatcher.call(cmd.TimeSettings(main_time, byo_yomi_time, byo_yomi_stones))


def time_left(session: Session, color: Color, time: int, stones: int) -> None:
    session.dispatcher.call(cmd.TimeLeft(color, time, stones))


# ----------------------------------------------------------------------
# Scoring, regression and debug commands
# ----------------------------------------------------------------------
def final_score(session: Session) -> str:
    return session.dispatcher.call(cmd.FinalScore())


def final_status_list(session: Session, status: Status) -> List[Vertex]:
    return session.dispatcher.call(cmd.FinalStatusList(status))


def loadsgf(session: Session, filename: str, move_number: Optional[int] = None) -> None:
    session.dispatcher.call(cmd.LoadSgf(filename, move_number))


def reg_genmove(session: Session, color: Color) -> Move:
    return session.dispatcher.call(cmd.RegGenMove(color))


def showboard(session: Session) -> str:
    return session.dispatcher.call(cmd.ShowBoard())
