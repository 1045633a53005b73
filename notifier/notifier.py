from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Type, Union

from . import bus as dispatch
from .bus import Callback, EventBus, Subscription
from .errors import MalformedTopicKeyError, UnknownNotificationError
from .models import NotificationKind, Topic
from .topics import derive_topic_key, parse_topic_key, raw_value

NotificationLike = Union[NotificationKind, str]


class Notifier:
    """
    Mixin for anything that posts notifications under its own address.

    A subclass declares its notifications and where it lives:

        class Airbus(Notifier):
            class Notification(NotificationKind):
                DID_TAKE_OFF = "didTakeOff"

            def __init__(self, model):
                self.address = model

    Topics are scoped by (emitter_kind, address, notification), so observers
    pick instances by address rather than holding a reference to them.
    The *_at classmethods take the address explicitly and can be used
    before any instance exists; the instance methods fill in self.address.
    """

    emitter_kind: ClassVar[str] = "Notifier"
    notification_bus: ClassVar[Optional[EventBus]] = None
    Notification: ClassVar[Type[NotificationKind]]

    address: str

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "emitter_kind" not in cls.__dict__:
            cls.emitter_kind = cls.__name__

    # ------------------------------------------------------------------
    # Class-level forms (explicit address)
    # ------------------------------------------------------------------

    @classmethod
    def topic_at(cls, address: str, notification: NotificationLike) -> Topic:
        return Topic(cls.emitter_kind, address, raw_value(cls._coerce(notification)))

    @classmethod
    def add_observer_at(
        cls,
        observer: Any,
        address: str,
        notification: NotificationLike,
        callback: Callback,
        *,
        obj: Any = None,
        bus: Optional[EventBus] = None,
    ) -> Subscription:
        """
        Register `callback` for `notification` from the emitter at `address`.
        The same observer may register several callbacks for one topic; each
        is called on every post. `obj` restricts delivery to posts made with
        that exact object.
        """
        key = cls._key(address, notification)
        return cls._bus(bus).subscribe(key, callback, observer=observer, obj=obj)

    @classmethod
    def post_notification_at(
        cls,
        notification: NotificationLike,
        address: str,
        obj: Any = None,
        user_info: Optional[Dict[str, Any]] = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        cls._bus(bus).publish(cls._key(address, notification), obj, user_info)

    @classmethod
    def remove_observer_at(
        cls,
        observer: Any,
        address: str,
        notification: NotificationLike,
        obj: Any = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        cls._bus(bus).unsubscribe(observer, cls._key(address, notification), obj)

    @classmethod
    def remove_all_observers_at(
        cls,
        observer: Any,
        address: Optional[str] = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        """Drop every registration of `observer` on this emitter kind (one address, or all)."""
        target = cls._bus(bus)
        for key in target.topics():
            try:
                topic = parse_topic_key(key)
            except MalformedTopicKeyError:
                continue
            if topic.emitter_kind != cls.emitter_kind:
                continue
            if address is not None and topic.address != address:
                continue
            target.unsubscribe(observer, key)

    # ------------------------------------------------------------------
    # Instance forms (address from self)
    # ------------------------------------------------------------------

    def topic(self, notification: NotificationLike) -> Topic:
        return type(self).topic_at(self.address, notification)

    def add_observer(
        self,
        observer: Any,
        notification: NotificationLike,
        callback: Callback,
        *,
        obj: Any = None,
        bus: Optional[EventBus] = None,
    ) -> Subscription:
        return type(self).add_observer_at(
            observer, self.address, notification, callback, obj=obj, bus=bus
        )

    def post_notification(
        self,
        notification: NotificationLike,
        obj: Any = None,
        user_info: Optional[Dict[str, Any]] = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        type(self).post_notification_at(notification, self.address, obj, user_info, bus=bus)

    def remove_observer(
        self,
        observer: Any,
        notification: NotificationLike,
        obj: Any = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        type(self).remove_observer_at(observer, self.address, notification, obj, bus=bus)

    # ------------------------------------------------------------------

    @classmethod
    def _coerce(cls, notification: NotificationLike) -> NotificationLike:
        kinds = getattr(cls, "Notification", None)
        if kinds is None or isinstance(notification, kinds):
            return notification
        if isinstance(notification, Enum):
            # another emitter's kind, even if its raw value matches one of ours
            raise UnknownNotificationError(cls.emitter_kind, notification)
        try:
            return kinds(notification)
        except ValueError:
            raise UnknownNotificationError(cls.emitter_kind, notification) from None

    @classmethod
    def _key(cls, address: str, notification: NotificationLike) -> str:
        return derive_topic_key(cls.emitter_kind, address, cls._coerce(notification))

    @classmethod
    def _bus(cls, bus: Optional[EventBus]) -> EventBus:
        if bus is not None:
            return bus
        if cls.notification_bus is not None:
            return cls.notification_bus
        return dispatch.default_bus
