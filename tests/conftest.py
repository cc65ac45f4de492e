import pytest


class ScriptedIO:
    """LineIO that answers prompts from a fixed script and records output."""

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.prompts = []
        self.output = []

    def prompt_line(self, text):
        self.prompts.append(text)
        if not self.answers:
            raise EOFError("script exhausted")
        return self.answers.pop(0)

    def emit_line(self, text):
        self.output.append(text)


@pytest.fixture
def scripted_io():
    def _make(*answers):
        return ScriptedIO(answers)

    return _make


@pytest.fixture
def knowledge_file(tmp_path):
    return tmp_path / "details.txt"
