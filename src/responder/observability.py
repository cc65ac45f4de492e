"""Turn log schema enforcement."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jsonschema import Draft7Validator

TURN_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": [
        "turn_id",
        "received_at",
        "source",
        "outcome",
        "keyword",
        "persisted",
        "store_size",
    ],
    "properties": {
        "turn_id": {"type": "integer", "minimum": 1},
        "received_at": {"type": "string", "format": "date-time"},
        "source": {"type": "string", "enum": ["text", "menu"]},
        "outcome": {"type": "string", "enum": ["hit", "learned"]},
        "keyword": {"type": ["string", "null"]},
        "persisted": {"type": ["boolean", "null"]},
        "store_size": {"type": "integer", "minimum": 0},
    },
}

_validator = Draft7Validator(TURN_SCHEMA)


def validate_turn(payload: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(payload), key=lambda e: e.path)
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ValueError(f"turn log validation failed: {messages}")


@dataclass
class TurnLogRecord:
    turn_id: int
    outcome: str
    keyword: Optional[str]
    persisted: Optional[bool]
    store_size: int
    source: str = "text"
    received_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "turn_id": self.turn_id,
            "received_at": self.received_at,
            "source": self.source,
            "outcome": self.outcome,
            "keyword": self.keyword,
            "persisted": self.persisted,
            "store_size": self.store_size,
        }
        validate_turn(payload)
        return payload
