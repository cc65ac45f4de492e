#!/usr/bin/env python3
"""
Unit tests for the console loop
"""

import io
import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from bot.console_bot import build_session, parse_choice, run_session
from responder.config import ResponderConfig
from responder.io import ConsoleIO
from responder.menu import INVALID_CHOICE, SERVICES_PROMPT
from responder.store import STARTING_FRESH_NOTICE


@pytest.fixture
def config(knowledge_file):
    knowledge_file.write_text("hi\nHello! How can I help?\n", encoding="utf-8")
    return ResponderConfig(
        bot_name="Service Bot",
        knowledge_path=knowledge_file,
        emergency_text="Call 112.",
    )


def run(config, scripted):
    parts = build_session(config, scripted)
    return run_session(*parts, scripted)


class TestParseChoice:

    def test_numbers(self):
        assert parse_choice("3") == 3
        assert parse_choice(" 12 ") == 12

    def test_leading_number_rest_ignored(self):
        assert parse_choice("3 please") == 3
        assert parse_choice("2abc") == 2
        assert parse_choice("-1") == -1

    def test_text(self):
        assert parse_choice("hours") is None
        assert parse_choice("") is None
        assert parse_choice("call 3") is None


class TestRunSession:

    def test_greets_and_exits_on_bye(self, config, scripted_io):
        scripted = scripted_io("BYE")
        turns = run(config, scripted)
        assert turns == 0
        assert "Service Bot" in scripted.output[0]
        assert scripted.output[-1] == config.farewell

    def test_exit_command(self, config, scripted_io):
        scripted = scripted_io("hi", "exit")
        assert run(config, scripted) == 1
        assert "Hello! How can I help?" in scripted.output

    def test_bye_inside_sentence_is_not_exit(self, config, scripted_io):
        scripted = scripted_io("ok bye now", "goodbye", "Later!", "exit")
        assert run(config, scripted) == 1
        assert "I've learned a new response! Keyword: 'goodbye'" in scripted.output

    def test_emergency_text_command(self, config, scripted_io):
        scripted = scripted_io("Emergency", "bye")
        run(config, scripted)
        assert "Call 112." in scripted.output

    def test_services_then_invalid(self, config, scripted_io):
        scripted = scripted_io("1", "42", "bye")
        run(config, scripted)
        assert SERVICES_PROMPT in scripted.output
        assert INVALID_CHOICE in scripted.output

    def test_blank_lines_are_skipped(self, config, scripted_io):
        scripted = scripted_io("", "   ", "bye")
        assert run(config, scripted) == 0
        assert scripted.prompts == ["You: ", "You: ", "You: "]
        assert not any("understand" in line for line in scripted.output)

    def test_number_with_trailing_words_selects_menu(self, config, scripted_io):
        scripted = scripted_io("1 please", "bye")
        run(config, scripted)
        assert SERVICES_PROMPT in scripted.output
        assert scripted.prompts == ["You: ", "You: "]

    def test_end_of_input_says_goodbye(self, config, scripted_io):
        scripted = scripted_io("hi")
        assert run(config, scripted) == 1
        assert scripted.output[-1] == config.farewell

    def test_learned_pair_survives_restart(self, config, scripted_io):
        run(config, scripted_io("what about pets", "pets", "Pets welcome", "bye"))

        scripted = scripted_io("Any PETS allowed?", "bye")
        run(config, scripted)
        assert "Pets welcome" in scripted.output

    def test_fresh_start_notice(self, tmp_path, scripted_io):
        cfg = ResponderConfig(knowledge_path=tmp_path / "none.txt")
        scripted = scripted_io("bye")
        run(cfg, scripted)
        assert scripted.output[0] == STARTING_FRESH_NOTICE


class TestConsoleIO:

    def test_prompt_and_emit(self):
        stdin = io.StringIO("hello\n")
        stdout = io.StringIO()
        console = ConsoleIO(stdin, stdout)

        assert console.prompt_line("You: ") == "hello"
        console.emit_line("reply")

        assert stdout.getvalue() == "You: reply\n"

    def test_end_of_input(self):
        console = ConsoleIO(io.StringIO(""), io.StringIO())
        with pytest.raises(EOFError):
            console.prompt_line("You: ")

    def test_full_session_over_streams(self, config):
        stdin = io.StringIO("2\nbye\n")
        stdout = io.StringIO()
        console = ConsoleIO(stdin, stdout)

        run(config, console)

        text = stdout.getvalue()
        assert "1. services" in text
        assert "7. Emergency Contact" in text
        assert "Enter a keyword or phrase: " in text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
