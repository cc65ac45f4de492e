#!/usr/bin/env python3
"""
HomeCare Console Bot

Reads one line per turn from stdin:
  Number          → menu shortcut (primary / service sub-menu / emergency)
  "bye" / "exit"  → farewell, quit
  "emergency"     → emergency contact text
  Anything else   → conversation engine (reply, or teach on miss)

Learned pairs are appended to the knowledge file and reloaded next session.

Usage:
  RESPONDER_CONFIG=config/responder.defaults.yml python -m bot.console_bot
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Optional

from responder.config import DEFAULT_CONFIG_PATH, ResponderConfig, default_config, load_config
from responder.engine import ConversationEngine
from responder.io import ConsoleIO, LineIO
from responder.menu import EmergencyService, Greeter, ServiceMenu
from responder.store import STARTING_FRESH_NOTICE, ResponseStore
from responder.text import normalize

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"bye", "exit"}
EMERGENCY_COMMAND = "emergency"
USER_PROMPT = "You: "
CHOICE_PATTERN = re.compile(r"\s*([+-]?\d+)")


def parse_choice(text: str) -> Optional[int]:
    """Leading integer of the line, if any; the rest of the line is ignored."""
    match = CHOICE_PATTERN.match(text)
    return int(match.group(1)) if match else None


def run_session(
    engine: ConversationEngine,
    menu: ServiceMenu,
    greeter: Greeter,
    emergency: EmergencyService,
    io: LineIO,
) -> int:
    """Drive the dialogue until bye/exit or end of input. Returns turns handled."""
    io.emit_line(greeter.greeting())
    menu.show()
    turns = 0

    while True:
        try:
            text = io.prompt_line(USER_PROMPT)
            if not text.strip():
                continue
            choice = parse_choice(text)

            if choice is not None:
                menu.handle_choice(choice)
            else:
                command = normalize(text)
                if command in EXIT_COMMANDS:
                    io.emit_line(greeter.farewell())
                    return turns
                if command == EMERGENCY_COMMAND:
                    emergency.provide()
                else:
                    engine.handle_turn(text)
                menu.reset()
        except (EOFError, KeyboardInterrupt):
            io.emit_line("")
            io.emit_line(greeter.farewell())
            return turns

        turns += 1
        menu.show()


def resolve_config() -> ResponderConfig:
    config_path = os.environ.get("RESPONDER_CONFIG")
    if config_path:
        return load_config(config_path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return load_config(DEFAULT_CONFIG_PATH)
    logger.warning("%s not found, using built-in defaults", DEFAULT_CONFIG_PATH)
    return default_config()


def build_session(config: ResponderConfig, io: LineIO):
    store = ResponseStore(config.knowledge_path)
    if store.starting_fresh:
        io.emit_line(STARTING_FRESH_NOTICE)
    engine = ConversationEngine(store, io)
    emergency = EmergencyService(config.emergency_text, io)
    menu = ServiceMenu(config.menus, engine, emergency, io)
    greeter = Greeter(config.bot_name, config.greeting, config.farewell)
    return engine, menu, greeter, emergency


def main():
    """Start the console bot."""
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        level=logging.WARNING,
        stream=sys.stderr,
    )

    try:
        config = resolve_config()
    except FileNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)
    logger.info("Starting %s with knowledge file %s", config.bot_name, config.knowledge_path)

    io = ConsoleIO()
    engine, menu, greeter, emergency = build_session(config, io)
    turns = run_session(engine, menu, greeter, emergency, io)
    logger.info("Session ended after %d turns, %d responses known", turns, len(engine.store))


if __name__ == "__main__":
    main()
