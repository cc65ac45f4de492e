"""Text normalization shared by the store and the conversation engine."""

from __future__ import annotations

WHITESPACE = " \t\n\r"


def trim(text: str) -> str:
    return text.strip(WHITESPACE)


def normalize(text: str) -> str:
    """Lowercase only. Internal whitespace is left alone, so "good  bye" will
    not match a "good bye" keyword."""
    return text.lower()


def strip_annotation(line: str) -> str:
    """Return the effective keyword of a persisted keyword line.

    Lines such as ``[imported] hours`` carry a source tag; everything after the
    last ``]`` is kept. The result is trimmed but not lowercased.
    """
    _, bracket, rest = line.rpartition("]")
    if bracket:
        return trim(rest)
    return trim(line)
