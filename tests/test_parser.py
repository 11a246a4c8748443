"""Tests for the command line tokenizer."""

import pytest

from papersh.commands.parser import (
    DANGLING_PIPE,
    DOUBLE_PIPE,
    LEADING_PIPE,
    parse_command_line,
)
from papersh.errors import ParseError


class TestWords:
    def test_whitespace_is_collapsed(self):
        assert parse_command_line("  ls   by\tChung  in 2020 ") == [["ls", "by", "Chung", "in", "2020"]]

    def test_empty_line_is_one_empty_segment(self):
        assert parse_command_line("") == [[]]
        assert parse_command_line("   ") == [[]]

    def test_quotes_group_words(self):
        assert parse_command_line("ls 'shadow tutor' by Chung") == [["ls", "shadow tutor", "by", "Chung"]]

    def test_quotes_join_adjacent_text(self):
        assert parse_command_line("ls ab'c d'e") == [["ls", "abc de"]]

    def test_escaped_quote(self):
        assert parse_command_line(r"ls it\'s") == [["ls", "it's"]]
        assert parse_command_line(r"ls 'it\'s here'") == [["ls", "it's here"]]

    def test_empty_quotes_produce_no_word(self):
        assert parse_command_line("ls ''") == [["ls"]]


class TestPipes:
    def test_split(self):
        assert parse_command_line("cmd1 | cmd2") == [["cmd1"], ["cmd2"]]
        assert parse_command_line("cmd1|cmd2") == [["cmd1"], ["cmd2"]]

    def test_pipe_inside_quotes_is_literal(self):
        assert parse_command_line("ls 'shadow|tutor' | open") == [["ls", "shadow|tutor"], ["open"]]

    def test_three_segments(self):
        assert parse_command_line("ls by Chung | set is read | wc") == [
            ["ls", "by", "Chung"],
            ["set", "is", "read"],
            ["wc"],
        ]

    @pytest.mark.parametrize(
        "line, message",
        [
            ("| ls", LEADING_PIPE),
            ("   |ls", LEADING_PIPE),
            ("ls |", DANGLING_PIPE),
            ("ls |   ", DANGLING_PIPE),
            ("ls || open", DOUBLE_PIPE),
            ("ls | | open", DOUBLE_PIPE),
        ],
    )
    def test_misplaced_pipes(self, line, message):
        with pytest.raises(ParseError, match=message.rstrip(".")):
            parse_command_line(line)
