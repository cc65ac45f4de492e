"""Keyword → reply table backed by an append-only text file.

File format, two lines per pair:

    <keyword line>
    <reply line>

A keyword line may carry a bracketed source tag (``[imported] hours``); only
the text after the last ``]`` is used. Replies are replayed exactly as stored.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .text import normalize, strip_annotation

logger = logging.getLogger(__name__)

STARTING_FRESH_NOTICE = "No previous knowledge found. Starting fresh!"


class PersistenceError(Exception):
    """Raised when a learned pair could not be appended to the knowledge file.

    The entry is already part of the in-memory table when this is raised.
    """

    def __init__(self, entry: "ResponseEntry", path: Path, reason: str) -> None:
        super().__init__(f"could not save keyword {entry.keyword!r} to {path}: {reason}")
        self.entry = entry
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class ResponseEntry:
    keyword: str
    reply: str


def parse_knowledge(lines: Iterable[str]) -> List[ResponseEntry]:
    """Turn raw file lines (terminators removed) into entries.

    A trailing unpaired line is ignored, as is any pair whose keyword is empty
    after the annotation is stripped.
    """
    entries: List[ResponseEntry] = []
    iterator = iter(lines)
    for keyword_line in iterator:
        reply = next(iterator, None)
        if reply is None:
            logger.debug("dropping unpaired trailing line %r", keyword_line)
            break
        keyword = strip_annotation(keyword_line)
        if not keyword:
            logger.debug("dropping pair with empty keyword line %r", keyword_line)
            continue
        entries.append(ResponseEntry(keyword=normalize(keyword), reply=reply))
    return entries


def _read_lines(path: Path) -> List[str]:
    # only "\n" ends a line; a "\r" inside a reply is kept
    with path.open("r", encoding="utf-8", newline="\n") as handle:
        return [line[:-1] if line.endswith("\n") else line for line in handle]


class ResponseStore:
    """Ordered keyword table. Order is match priority; it never changes."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        self.starting_fresh = False
        self._entries: List[ResponseEntry] = self.load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def entries(self) -> Tuple[ResponseEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> List[ResponseEntry]:
        """Read the backing file. A missing or unreadable file yields an empty table."""
        try:
            lines = _read_lines(self._path)
        except FileNotFoundError:
            self.starting_fresh = True
            logger.info(STARTING_FRESH_NOTICE)
            return []
        except (OSError, UnicodeDecodeError) as exc:
            self.starting_fresh = True
            logger.info("%s (%s: %s)", STARTING_FRESH_NOTICE, self._path, exc)
            return []

        entries = parse_knowledge(lines)
        logger.info("loaded %d responses from %s", len(entries), self._path)
        return entries

    def match(self, normalized_input: str) -> Optional[ResponseEntry]:
        """First entry, in insertion order, whose keyword occurs in the input."""
        for entry in self._entries:
            if entry.keyword and entry.keyword in normalized_input:
                return entry
        return None

    def lookup(self, normalized_input: str) -> Optional[str]:
        entry = self.match(normalized_input)
        return entry.reply if entry else None

    def learn(self, raw_keyword: str, reply: str) -> ResponseEntry:
        """Add a pair to the table, then append it to the backing file.

        Raises PersistenceError if the append fails; the entry stays in memory.
        """
        entry = ResponseEntry(keyword=normalize(raw_keyword), reply=reply)
        self._entries.append(entry)

        try:
            self._append(raw_keyword, reply)
        except OSError as exc:
            raise PersistenceError(entry, self._path, str(exc)) from exc

        logger.debug("learned keyword %r (%d entries)", entry.keyword, len(self._entries))
        return entry

    def _append(self, keyword: str, reply: str) -> None:
        with self._path.open("a", encoding="utf-8", newline="\n") as handle:
            handle.write(f"{keyword}\n{reply}\n")
            handle.flush()
            os.fsync(handle.fileno())
