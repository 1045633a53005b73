from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Dict, Optional

import config
from .bus import EventBus, Subscription
from .errors import BusClosedError
from .models import Notification

logger = logging.getLogger(__name__)


class QueuedEventBus(EventBus):
    """
    Same registry as EventBus, but publish() only enqueues. A single daemon
    worker thread delivers notifications in the order they were posted.

    Callbacks run on the worker, after publish() has returned, so they may
    see emitter state that changed since the post. A failing callback is
    logged and the rest of the fan-out continues.
    """

    def __init__(self, name: str = config.QUEUE_WORKER_NAME) -> None:
        super().__init__()
        self._queue: "queue.Queue[Optional[Notification]]" = queue.Queue()
        self._state_lock = threading.Lock()
        self._closed = False
        self._worker = threading.Thread(target=self._run, name=name, daemon=True)
        self._worker.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, topic_key: str, obj: Any = None, user_info: Optional[Dict[str, Any]] = None) -> None:
        with self._state_lock:
            if self._closed:
                raise BusClosedError(topic_key)
            # copied now: the poster may reuse its dict before the worker runs
            self._queue.put(Notification(name=topic_key, object=obj, user_info=user_info).copy())

    def join(self, timeout: Optional[float] = config.QUEUE_JOIN_TIMEOUT_S) -> bool:
        """
        Wait until every queued notification is delivered. False on timeout,
        and False at once when called from a callback on the worker, which
        cannot drain a queue it is still working through.
        """
        if threading.current_thread() is self._worker:
            return False
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._queue.all_tasks_done:
            while self._queue.unfinished_tasks:
                if deadline is None:
                    self._queue.all_tasks_done.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._queue.all_tasks_done.wait(remaining)
        return True

    def close(self, timeout: Optional[float] = config.QUEUE_JOIN_TIMEOUT_S) -> None:
        """Deliver what is already queued, then stop the worker."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(None)
        if threading.current_thread() is not self._worker:
            self._worker.join(timeout)
        logger.debug("queued bus %s closed", self._worker.name)

    def __enter__(self) -> "QueuedEventBus":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------

    def _run(self) -> None:
        while True:
            note = self._queue.get()
            try:
                if note is None:
                    break
                self._dispatch(note)
            finally:
                self._queue.task_done()

    def _invoke(self, sub: Subscription, note: Notification) -> None:
        try:
            sub.callback(note)
        except Exception as e:
            logger.exception(
                "observer %r failed for %s: %s", sub.observer, note.name, e
            )
