"""Configuration loader for the console responder."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

DEFAULT_CONFIG_PATH = "config/responder.defaults.yml"

DEFAULT_GREETING = (
    "Hello! Welcome to the HomeCare Services. I'm {name}. How can I assist you today?"
)
DEFAULT_FAREWELL = "Goodbye! Have a great day!"
DEFAULT_EMERGENCY_TEXT = (
    "In case of urgency, please contact +91 123 4567890 for immediate assistance."
)
DEFAULT_PRIMARY_TOPICS = (
    "services",
    "appointment",
    "pricing",
    "location",
    "hours",
    "feedback",
)
DEFAULT_SECONDARY_TOPICS = (
    "deep cleaning",
    "kitchen cleaning",
    "bathroom cleaning",
    "carpet cleaning",
    "dusting",
    "floor cleaning",
)


@dataclass(frozen=True)
class MenuConfig:
    primary: Tuple[str, ...] = DEFAULT_PRIMARY_TOPICS
    secondary: Tuple[str, ...] = DEFAULT_SECONDARY_TOPICS
    primary_title: str = "🏡 Primary Options"
    secondary_title: str = "🧹 Service Options"
    services_topic: str = "services"
    emergency_label: str = "Emergency Contact"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuConfig":
        defaults = cls()
        return cls(
            primary=tuple(str(t) for t in data.get("primary", defaults.primary)),
            secondary=tuple(str(t) for t in data.get("secondary", defaults.secondary)),
            primary_title=data.get("primary_title", defaults.primary_title),
            secondary_title=data.get("secondary_title", defaults.secondary_title),
            services_topic=data.get("services_topic", defaults.services_topic),
            emergency_label=data.get("emergency_label", defaults.emergency_label),
        )


@dataclass(frozen=True)
class ResponderConfig:
    bot_name: str = "Service Bot"
    knowledge_path: Path = Path("details.txt")
    log_level: str = "WARNING"
    greeting: str = DEFAULT_GREETING
    farewell: str = DEFAULT_FAREWELL
    emergency_text: str = DEFAULT_EMERGENCY_TEXT
    menus: MenuConfig = field(default_factory=MenuConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResponderConfig":
        return cls(
            bot_name=data.get("bot_name", "Service Bot"),
            knowledge_path=Path(data.get("knowledge_path", "details.txt")),
            log_level=str(data.get("log_level", "WARNING")).upper(),
            greeting=data.get("greeting", DEFAULT_GREETING),
            farewell=data.get("farewell", DEFAULT_FAREWELL),
            emergency_text=data.get("emergency_text", DEFAULT_EMERGENCY_TEXT),
            menus=MenuConfig.from_dict(data.get("menus") or {}),
        )


ENV_MAP = {
    "bot_name": "RESPONDER_BOT_NAME",
    "knowledge_path": "RESPONDER_KNOWLEDGE_PATH",
    "log_level": "RESPONDER_LOG_LEVEL",
    "greeting": "RESPONDER_GREETING",
    "emergency_text": "RESPONDER_EMERGENCY_TEXT",
    "menus.services_topic": "RESPONDER_SERVICES_TOPIC",
}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = json.loads(json.dumps(config_data))  # deep copy via json

    for dotted_key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        target = merged
        parts = dotted_key.split(".")
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = os.environ[env_name]

    return merged


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> ResponderConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = load_yaml(path)
    data = merge_env_overrides(data)
    return ResponderConfig.from_dict(data)


def default_config() -> ResponderConfig:
    """Built-in defaults with environment overrides, for when no file is shipped."""
    return ResponderConfig.from_dict(merge_env_overrides({}))
