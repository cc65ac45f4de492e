"""
Menu layer: numbered shortcuts into the conversation engine.

Primary menu:   1..N   → topic label, forwarded to the engine as typed text
                N + 1  → emergency contact (engine untouched)
Secondary menu: 1..M   → cleaning sub-topic, forwarded to the engine

Choosing the services topic switches to the secondary menu instead of
reaching the engine. Any other choice returns to the primary menu.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .config import MenuConfig
from .engine import ConversationEngine, TurnResult
from .io import LineIO

logger = logging.getLogger(__name__)

MENU_HINT = "Type the option number, or type your query directly (e.g., timings, hi, bye)."
MENU_RULE = "--------------------------"
SERVICES_PROMPT = "Great! Which service are you interested in?"
INVALID_CHOICE = "Invalid menu choice. Please try again."


class MenuState(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


class MenuAction(str, Enum):
    TOPIC = "topic"
    SERVICES = "services"
    EMERGENCY = "emergency"
    INVALID = "invalid"


@dataclass
class MenuSelection:
    action: MenuAction
    topic: Optional[str] = None
    turn: Optional[TurnResult] = None


class Greeter:
    def __init__(self, name: str, greeting: str, farewell: str) -> None:
        self.name = name
        self._greeting = greeting
        self._farewell = farewell

    def greeting(self) -> str:
        return self._greeting.format(name=self.name)

    def farewell(self) -> str:
        return self._farewell


class EmergencyService:
    def __init__(self, text: str, io: LineIO) -> None:
        self._text = text
        self._io = io

    def provide(self) -> None:
        logger.info("emergency contact requested")
        self._io.emit_line(self._text)


class ServiceMenu:
    def __init__(
        self,
        config: MenuConfig,
        engine: ConversationEngine,
        emergency: EmergencyService,
        io: LineIO,
    ) -> None:
        self._config = config
        self._engine = engine
        self._emergency = emergency
        self._io = io
        self.state = MenuState.PRIMARY

    @property
    def emergency_slot(self) -> int:
        return len(self._config.primary) + 1

    def render(self, state: Optional[MenuState] = None) -> List[str]:
        state = state or self.state
        primary = state == MenuState.PRIMARY
        topics = self._config.primary if primary else self._config.secondary
        title = self._config.primary_title if primary else self._config.secondary_title

        lines = ["", f"--- {title} ---"]
        lines.extend(f"{i}. {topic}" for i, topic in enumerate(topics, start=1))
        if primary:
            lines.append(f"{self.emergency_slot}. {self._config.emergency_label}")
        lines.append(MENU_RULE)
        lines.append(MENU_HINT)
        return lines

    def show(self) -> None:
        for line in self.render():
            self._io.emit_line(line)

    def reset(self) -> None:
        self.state = MenuState.PRIMARY

    def resolve(self, choice: int) -> MenuSelection:
        """Map a number to an action against the menu currently shown."""
        if self.state == MenuState.SECONDARY:
            topics = self._config.secondary
            if 1 <= choice <= len(topics):
                return MenuSelection(MenuAction.TOPIC, topic=topics[choice - 1])
            return MenuSelection(MenuAction.INVALID)

        topics = self._config.primary
        if 1 <= choice <= len(topics):
            topic = topics[choice - 1]
            if topic == self._config.services_topic:
                return MenuSelection(MenuAction.SERVICES, topic=topic)
            return MenuSelection(MenuAction.TOPIC, topic=topic)
        if choice == self.emergency_slot:
            return MenuSelection(MenuAction.EMERGENCY)
        return MenuSelection(MenuAction.INVALID)

    def handle_choice(self, choice: int) -> MenuSelection:
        selection = self.resolve(choice)
        logger.debug("menu %s choice=%d action=%s", self.state.value, choice, selection.action.value)

        if selection.action == MenuAction.SERVICES:
            self._io.emit_line(SERVICES_PROMPT)
            self.state = MenuState.SECONDARY
            return selection

        self.state = MenuState.PRIMARY
        if selection.action == MenuAction.TOPIC:
            selection.turn = self._engine.handle_turn(selection.topic, source="menu")
        elif selection.action == MenuAction.EMERGENCY:
            self._emergency.provide()
        else:
            self._io.emit_line(INVALID_CHOICE)
        return selection
