"""
HomeCare Responder
Keyword → reply matching with teach-on-miss learning and an append-only
knowledge file.
"""

from .store import ResponseStore, ResponseEntry, PersistenceError
from .engine import ConversationEngine, TurnResult
from .io import LineIO, ConsoleIO

__all__ = [
    'ResponseStore', 'ResponseEntry', 'PersistenceError',
    'ConversationEngine', 'TurnResult',
    'LineIO', 'ConsoleIO',
]
