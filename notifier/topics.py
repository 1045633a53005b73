"""
Topic identity: (emitter kind, address, notification) <-> topic key string.

The key keeps the familiar "Kind.address.notification" shape. Components are
escaped before joining, so two different triples never produce the same key,
even when an address carries the delimiter:

    derive_topic_key("Airbus", "A380", "didTakeOff")  -> "Airbus.A380.didTakeOff"
    derive_topic_key("Airbus", "A320.neo", "didLand") -> "Airbus.A320\\.neo.didLand"
"""
from enum import Enum
from typing import List, Union

import config
from .errors import MalformedTopicKeyError
from .models import Topic


def escape_component(text: str) -> str:
    # escape char first, otherwise the delimiter escapes get doubled
    text = text.replace(config.TOPIC_ESCAPE, config.TOPIC_ESCAPE * 2)
    return text.replace(config.TOPIC_DELIMITER, config.TOPIC_ESCAPE + config.TOPIC_DELIMITER)


def unescape_component(text: str) -> str:
    parts = _split_escaped(text, text)
    if len(parts) != 1:
        raise MalformedTopicKeyError(text, "unescaped delimiter inside component")
    return parts[0]


def raw_value(notification: Union[Enum, str]) -> str:
    """Raw string of an event kind: an enum member's value, or the string itself."""
    if isinstance(notification, Enum):
        return str(notification.value)
    return str(notification)


def derive_topic_key(
    emitter_kind: str,
    address: str,
    notification: Union[Enum, str],
) -> str:
    """Pure function: same inputs, same key. No validation is performed."""
    raw = raw_value(notification)
    return config.TOPIC_DELIMITER.join(
        escape_component(part) for part in (emitter_kind, address, raw)
    )


def parse_topic_key(key: str) -> Topic:
    """Inverse of derive_topic_key."""
    parts = _split_escaped(key, key)
    if len(parts) != config.TOPIC_PARTS:
        raise MalformedTopicKeyError(
            key, f"expected {config.TOPIC_PARTS} components, got {len(parts)}"
        )
    kind, address, notification = parts
    return Topic(emitter_kind=kind, address=address, notification=notification)


def _split_escaped(text: str, key: str) -> List[str]:
    parts: List[str] = []
    current: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == config.TOPIC_ESCAPE:
            if i + 1 >= len(text):
                raise MalformedTopicKeyError(key, "dangling escape at end")
            nxt = text[i + 1]
            if nxt not in (config.TOPIC_ESCAPE, config.TOPIC_DELIMITER):
                raise MalformedTopicKeyError(key, f"unknown escape '{ch}{nxt}'")
            current.append(nxt)
            i += 2
            continue
        if ch == config.TOPIC_DELIMITER:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    parts.append("".join(current))
    return parts
