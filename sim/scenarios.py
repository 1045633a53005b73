from typing import Dict, Optional

from notifier.bus import EventBus
from sim.airport import Airbus, Airport


def fleet(*models: str, bus: Optional[EventBus] = None) -> Dict[str, Airbus]:
    return {m: Airbus(m, bus=bus) for m in models}


def two_planes(bus: Optional[EventBus] = None) -> Airport:
    # Both planes watched; each takes off then lands
    planes = fleet("A380", "A350", bus=bus)
    airport = Airport("A380", "A350", bus=bus)
    planes["A380"].take_off()
    planes["A350"].take_off()
    planes["A380"].land()
    planes["A350"].land()
    return airport


def watch_one(bus: Optional[EventBus] = None) -> Airport:
    # Only the A380 is watched; A350 traffic must not show up
    planes = fleet("A380", "A350", bus=bus)
    airport = Airport("A380", bus=bus)
    for plane in planes.values():
        plane.take_off()
    for plane in planes.values():
        plane.land()
    return airport


def stop_watching(bus: Optional[EventBus] = None) -> Airport:
    # Airport loses interest in the A350 while it is in the air
    planes = fleet("A380", "A350", bus=bus)
    airport = Airport("A380", "A350", bus=bus)
    planes["A380"].take_off()
    planes["A350"].take_off()
    airport.stop_observing("A350")
    planes["A380"].land()
    planes["A350"].land()
    return airport


SCENARIOS = {
    "1": two_planes,
    "2": watch_one,
    "3": stop_watching,
}
