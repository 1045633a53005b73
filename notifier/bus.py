# A tiny pub/sub event bus to keep layers decoupled.
# Topics are plain strings; see notifier.topics for how they are built.
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .models import Notification

logger = logging.getLogger(__name__)

Callback = Callable[[Notification], Any]


@dataclass(eq=False)
class Subscription:
    """One registration. Returned by subscribe(); cancel() removes it."""
    topic_key: str
    callback: Callback
    observer: Any = None        # identity used by unsubscribe()
    obj: Any = None             # only deliver posts from this object (None = any)
    active: bool = True
    _bus: Optional["EventBus"] = field(default=None, repr=False)

    def accepts(self, obj: Any) -> bool:
        return self.obj is None or self.obj is obj

    def cancel(self) -> None:
        if self._bus is not None:
            self._bus._remove([self])


class EventBus:
    """
    In-process dispatch: publish() calls every matching callback on the
    caller's thread, in registration order, before returning.

    Fan-out iterates over a snapshot taken under the lock, so a callback
    added mid-dispatch is not called for that post. A removed callback is
    skipped from the moment its removal returns, even inside a dispatch
    that already took its snapshot.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._lock = threading.Lock()

    def subscribe(
        self,
        topic_key: str,
        callback: Callback,
        *,
        observer: Any = None,
        obj: Any = None,
    ) -> Subscription:
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        sub = Subscription(topic_key, callback, observer=observer, obj=obj, _bus=self)
        with self._lock:
            self._subs.setdefault(topic_key, []).append(sub)
        logger.debug("subscribe %s (observer=%r)", topic_key, observer)
        return sub

    def publish(self, topic_key: str, obj: Any = None, user_info: Optional[Dict[str, Any]] = None) -> None:
        self._dispatch(Notification(name=topic_key, object=obj, user_info=user_info))

    def unsubscribe(self, observer: Any, topic_key: Optional[str] = None, obj: Any = None) -> None:
        """
        Remove every registration of `observer` for `topic_key` (all topics
        when None). With `obj`, only registrations made with that object
        filter are removed. Nothing matching -> no-op.
        """
        if observer is None:
            return
        with self._lock:
            keys = [topic_key] if topic_key is not None else list(self._subs)
            doomed = [
                sub
                for key in keys
                for sub in self._subs.get(key, [])
                if sub.observer is observer and (obj is None or sub.obj is obj)
            ]
        self._remove(doomed)

    def has_subscribers(self, topic_key: str) -> bool:
        with self._lock:
            return bool(self._subs.get(topic_key))

    def subscriber_count(self, topic_key: str) -> int:
        with self._lock:
            return len(self._subs.get(topic_key, []))

    def topics(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._subs)

    def clear(self) -> None:
        with self._lock:
            for subs in self._subs.values():
                for sub in subs:
                    sub.active = False
            self._subs.clear()

    # ------------------------------------------------------------------

    def _snapshot(self, note: Notification) -> List[Subscription]:
        with self._lock:
            return [s for s in self._subs.get(note.name, []) if s.accepts(note.object)]

    def _dispatch(self, note: Notification) -> None:
        subs = self._snapshot(note)
        if not subs:
            logger.debug("publish %s: no observers", note.name)
            return
        delivered = 0
        for sub in subs:
            if not sub.active:
                continue
            # each observer gets its own user_info, mutations stay local
            self._invoke(sub, note.copy())
            delivered += 1
        logger.debug("publish %s: delivered to %d observer(s)", note.name, delivered)

    def _invoke(self, sub: Subscription, note: Notification) -> None:
        # errors reach the poster untouched
        sub.callback(note)

    def _remove(self, doomed: List[Subscription]) -> None:
        if not doomed:
            return
        with self._lock:
            for sub in doomed:
                if not sub.active:
                    continue
                sub.active = False
                subs = self._subs.get(sub.topic_key)
                if subs is None:
                    continue
                try:
                    subs.remove(sub)
                except ValueError:
                    continue
                if not subs:
                    del self._subs[sub.topic_key]
        logger.debug("unsubscribe %d registration(s)", len(doomed))


# Process default, used when no bus is injected
default_bus = EventBus()
