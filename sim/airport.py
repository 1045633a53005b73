import logging
from typing import List, Optional, Protocol, runtime_checkable

from notifier.bus import EventBus
from notifier.models import Notification, NotificationKind
from notifier.notifier import Notifier

logger = logging.getLogger(__name__)


@runtime_checkable
class Plane(Protocol):
    model: str


class Airbus(Notifier):
    """A plane that announces take-off and landing under its model name."""

    class Notification(NotificationKind):
        DID_TAKE_OFF = "didTakeOff"
        DID_LAND = "didLand"

    def __init__(self, model: str, bus: Optional[EventBus] = None) -> None:
        self.model = model
        self.is_on_air = False
        self.bus = bus

    @property
    def address(self) -> str:
        return self.model

    def take_off(self) -> None:
        self.is_on_air = True
        self.post_notification(Airbus.Notification.DID_TAKE_OFF, obj=self, bus=self.bus)

    def land(self) -> None:
        self.is_on_air = False
        self.post_notification(Airbus.Notification.DID_LAND, obj=self, bus=self.bus)


class Airport:
    """
    Watches planes by model name. Never holds the planes themselves:
    it learns which plane moved from the notification's object.
    """

    def __init__(self, *models: str, bus: Optional[EventBus] = None) -> None:
        self.bus = bus
        self.log: List[str] = []
        for model in models:
            self.add_observer(model)

    def add_observer(self, model: str) -> None:
        Airbus.add_observer_at(
            self, model, Airbus.Notification.DID_TAKE_OFF, self.handle_take_off, bus=self.bus
        )
        Airbus.add_observer_at(
            self, model, Airbus.Notification.DID_LAND, self.handle_land, bus=self.bus
        )

    def stop_observing(self, model: str) -> None:
        Airbus.remove_all_observers_at(self, model, bus=self.bus)

    def handle_take_off(self, notification: Notification) -> None:
        plane = notification.object
        if not isinstance(plane, Plane):
            return
        self._report(f"Airport: {plane.model} is taking off")

    def handle_land(self, notification: Notification) -> None:
        plane = notification.object
        if not isinstance(plane, Plane):
            return
        self._report(f"Airport: {plane.model} landed")

    def _report(self, line: str) -> None:
        self.log.append(line)
        logger.debug(line)
