"""Errors raised by the notifier core itself.

Almost everything the bus does is permissive: posting to a topic nobody
listens to, or removing an observer that was never added, is a no-op.
These cover the few inputs that are rejected outright.
"""


class NotifierError(Exception):
    """Base error for notifier operations."""
    pass


class UnknownNotificationError(NotifierError, ValueError):
    """Raw value is not one of the emitter's notifications."""

    def __init__(self, emitter_kind: str, value):
        self.emitter_kind = emitter_kind
        self.value = value
        super().__init__(
            f"'{value}' is not a notification of emitter kind '{emitter_kind}'."
        )


class MalformedTopicKeyError(NotifierError, ValueError):
    """Topic key cannot be split back into kind/address/notification."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Malformed topic key '{key}': {reason}.")


class BusClosedError(NotifierError, RuntimeError):
    """Publish attempted on a queued bus after close()."""

    def __init__(self, topic_key: str):
        self.topic_key = topic_key
        super().__init__(f"Cannot publish '{topic_key}': bus is closed.")
