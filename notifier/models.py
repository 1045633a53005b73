from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class NotificationKind(str, Enum):
    """
    Base for an emitter's notifications. Members are plain strings, so the
    raw value is what ends up in the topic key:

        class Notification(NotificationKind):
            DID_TAKE_OFF = "didTakeOff"
            DID_LAND = "didLand"
    """

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Topic:
    emitter_kind: str
    address: str
    notification: str       # raw value of the NotificationKind

    @property
    def key(self) -> str:
        """Serialized form handed to the dispatch bus."""
        from .topics import derive_topic_key
        return derive_topic_key(self.emitter_kind, self.address, self.notification)

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Notification:
    """What an observer's callback receives."""
    name: str                                   # topic key that fired
    object: Any = None                          # originating object, may be None
    user_info: Optional[Dict[str, Any]] = None  # free-form metadata

    def copy(self) -> "Notification":
        """Same notification with its own user_info dict."""
        if self.user_info is None:
            return self
        return replace(self, user_info=dict(self.user_info))

    def get(self, key: str, default: Any = None) -> Any:
        if not self.user_info:
            return default
        return self.user_info.get(key, default)
