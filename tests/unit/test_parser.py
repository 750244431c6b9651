import pathlib
import sys

import pytest

# Add project root to path
ROOT = pathlib.Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from core import commands as cmd
from core.errors import EngineError, ProtocolError
from core.parser import parse_reply, split_reply
from core.types import PASS, RESIGN, Color, Status, Vertex


class TestSplitReply:
    def test_success(self):
        assert split_reply("= 2") == (True, "2")

    def test_failure(self):
        assert split_reply("? unknown command") == (False, "unknown command")

    def test_bare_marker(self):
        assert split_reply("=") == (True, "")

    def test_command_id_is_skipped(self):
        assert split_reply("=17 D4") == (True, "D4")
        assert split_reply("?3 illegal move") == (False, "illegal move")

    def test_multiline_body_kept(self):
        assert split_reply("= play\ngenmove") == (True, "play\ngenmove")

    @pytest.mark.parametrize("text", ["", "2", "ok", "=abc", "#comment"])
    def test_missing_marker(self, text):
        with pytest.raises(ProtocolError):
            split_reply(text)


class TestUnitReplies:
    @pytest.mark.parametrize(
        "command",
        [cmd.ClearBoard(), cmd.Quit(), cmd.BoardSize(9), cmd.Komi(5.5), cmd.Undo(),
         cmd.Play(Color.BLACK, Vertex("D", 4)), cmd.LoadSgf("game.sgf", 3)],
    )
    def test_unit_ignores_trailing_text(self, command):
        assert parse_reply(command, "=") is None
        assert parse_reply(command, "= white") is None

    def test_empty_block_acknowledges(self):
        assert parse_reply(cmd.ClearBoard(), "") is None
        assert parse_reply(cmd.Play(Color.WHITE, PASS), "") is None

    @pytest.mark.parametrize("command", [cmd.Name(), cmd.ProtocolVersion(), cmd.GenMove(Color.BLACK)])
    def test_empty_block_needs_payload(self, command):
        with pytest.raises(ProtocolError):
            parse_reply(command, "")


class TestAtomReplies:
    def test_protocol_version(self):
        assert parse_reply(cmd.ProtocolVersion(), "= 2") == 2

    def test_protocol_version_not_numeric(self):
        with pytest.raises(ProtocolError):
            parse_reply(cmd.ProtocolVersion(), "= two")

    def test_protocol_version_extra_tokens(self):
        with pytest.raises(ProtocolError):
            parse_reply(cmd.ProtocolVersion(), "= 2 3")

    def test_name_may_contain_spaces(self):
        assert parse_reply(cmd.Name(), "= GNU Go") == "GNU Go"

    def test_version(self):
        assert parse_reply(cmd.Version(), "= 3.8") == "3.8"

    @pytest.mark.parametrize("text, expected", [("= true", True), ("= false", False)])
    def test_known_command(self, text, expected):
        assert parse_reply(cmd.KnownCommand("play"), text) is expected

    @pytest.mark.parametrize("text", ["= TRUE", "= yes", "= 1", "="])
    def test_known_command_strict(self, text):
        with pytest.raises(ProtocolError):
            parse_reply(cmd.KnownCommand("play"), text)

    def test_final_score_verbatim(self):
        assert parse_reply(cmd.FinalScore(), "= B+3.5") == "B+3.5"
        assert parse_reply(cmd.FinalScore(), "= 0") == "0"


class TestListReplies:
    def test_list_commands(self):
        assert parse_reply(cmd.ListCommands(), "= play\ngenmove\nquit") == ["play", "genmove", "quit"]

    def test_list_commands_drops_trailing_empty(self):
        assert parse_reply(cmd.ListCommands(), "= play\nquit\n\n") == ["play", "quit"]

    def test_list_commands_bare_marker_line(self):
        assert parse_reply(cmd.ListCommands(), "=\nplay\nquit") == ["play", "quit"]

    def test_fixed_handicap(self):
        assert parse_reply(cmd.FixedHandicap(2), "= C3 D4") == [Vertex("C", 3), Vertex("D", 4)]

    def test_place_free_handicap_lowercase(self):
        assert parse_reply(cmd.PlaceFreeHandicap(2), "= q16 d4") == [Vertex("Q", 16), Vertex("D", 4)]

    def test_final_status_list_multiline(self):
        result = parse_reply(cmd.FinalStatusList(Status.DEAD), "= A1 B2\nC3")
        assert result == [Vertex("A", 1), Vertex("B", 2), Vertex("C", 3)]

    def test_final_status_list_empty(self):
        assert parse_reply(cmd.FinalStatusList(Status.SEKI), "=") == []

    @pytest.mark.parametrize("text", ["= I3", "= C3 X", "= C3 pass", "= C99"])
    def test_bad_vertex(self, text):
        with pytest.raises(ProtocolError):
            parse_reply(cmd.FixedHandicap(2), text)


class TestMoveReplies:
    @pytest.mark.parametrize("command", [cmd.GenMove(Color.BLACK), cmd.RegGenMove(Color.WHITE)])
    def test_vertex(self, command):
        assert parse_reply(command, "= Q16") == Vertex("Q", 16)

    def test_pass(self):
        assert parse_reply(cmd.GenMove(Color.BLACK), "= pass") is PASS
        assert parse_reply(cmd.GenMove(Color.BLACK), "= PASS") is PASS

    def test_resign(self):
        assert parse_reply(cmd.GenMove(Color.WHITE), "= resign") is RESIGN

    def test_empty_move(self):
        with pytest.raises(ProtocolError):
            parse_reply(cmd.GenMove(Color.WHITE), "=")


class TestFailureReplies:
    @pytest.mark.parametrize(
        "command",
        [cmd.Play(Color.BLACK, Vertex("D", 4)), cmd.GenMove(Color.BLACK), cmd.ListCommands(),
         cmd.ProtocolVersion(), cmd.FixedHandicap(3), cmd.KnownCommand("x")],
    )
    def test_engine_error_regardless_of_grammar(self, command):
        with pytest.raises(EngineError) as info:
            parse_reply(command, "? illegal move")
        assert info.value.message == "illegal move"
        assert info.value.command == command.verb

    def test_engine_error_without_text(self):
        with pytest.raises(EngineError) as info:
            parse_reply(cmd.Undo(), "?")
        assert info.value.message == ""


def test_showboard_keeps_diagram_alignment():
    text = "= \n   A B C\n 3 . . . 3\n   A B C"
    assert parse_reply(cmd.ShowBoard(), text) == "   A B C\n 3 . . . 3\n   A B C"
