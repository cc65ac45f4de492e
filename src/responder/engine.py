"""
Conversation engine: one user turn against the response table.

  Hit  → reply emitted verbatim
  Miss → "I don't understand", then the teach prompts:
         keyword, reply → ResponseStore.learn → confirmation

The teach prompts block on the injected LineIO and cannot be cancelled.
Empty answers are accepted.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .io import LineIO
from .observability import TurnLogRecord
from .store import PersistenceError, ResponseStore
from .text import normalize, trim

logger = logging.getLogger(__name__)

HIT = "hit"
LEARNED = "learned"


@dataclass(frozen=True)
class EngineMessages:
    not_understood: str = "I don't understand. Can you teach me a response for this?"
    keyword_prompt: str = "Enter a keyword or phrase: "
    reply_prompt: str = "Enter the response for this keyword or phrase: "
    learned: str = "I've learned a new response! Keyword: '{keyword}'"
    save_failed: str = "Error: Unable to save response to file."


@dataclass
class TurnResult:
    outcome: str
    reply: Optional[str]
    keyword: Optional[str]
    persisted: Optional[bool] = None
    record: Optional[TurnLogRecord] = None


class ConversationEngine:
    def __init__(
        self,
        store: ResponseStore,
        io: LineIO,
        messages: Optional[EngineMessages] = None,
    ) -> None:
        self._store = store
        self._io = io
        self._messages = messages or EngineMessages()
        self._turns = 0

    @property
    def store(self) -> ResponseStore:
        return self._store

    def handle_turn(self, raw_input: str, source: str = "text") -> TurnResult:
        """Answer one line of input, teaching the store on a miss."""
        self._turns += 1
        normalized = normalize(raw_input)

        entry = self._store.match(normalized)
        if entry is not None:
            self._io.emit_line(entry.reply)
            result = TurnResult(outcome=HIT, reply=entry.reply, keyword=entry.keyword)
        else:
            result = self._teach()

        result.record = TurnLogRecord(
            turn_id=self._turns,
            outcome=result.outcome,
            keyword=result.keyword,
            persisted=result.persisted,
            store_size=len(self._store),
            source=source,
        )
        if logger.isEnabledFor(logging.DEBUG):
            try:
                logger.debug("turn %s", result.record.to_dict())
            except ValueError as exc:
                logger.warning("Dropping malformed turn record: %s", exc)
        return result

    def _teach(self) -> TurnResult:
        msgs = self._messages
        self._io.emit_line(msgs.not_understood)
        keyword = trim(self._io.prompt_line(msgs.keyword_prompt))
        reply = self._io.prompt_line(msgs.reply_prompt)

        persisted = True
        try:
            entry = self._store.learn(keyword, reply)
        except PersistenceError as exc:
            logger.error("Failed to persist learned response: %s", exc)
            self._io.emit_line(msgs.save_failed)
            entry = exc.entry
            persisted = False

        self._io.emit_line(msgs.learned.format(keyword=entry.keyword))
        return TurnResult(outcome=LEARNED, reply=None, keyword=entry.keyword, persisted=persisted)
