import argparse
import sys

from notifier.bus import EventBus
from notifier.logging_config import setup_logging
from notifier.queued import QueuedEventBus
from sim.scenarios import SCENARIOS


def main():
    parser = argparse.ArgumentParser(description="Replay an airport notification scenario.")
    parser.add_argument(
        "--scenario", "-s",
        help="scenario key (%s)" % "/".join(SCENARIOS),
        default="1",
    )
    parser.add_argument(
        "--queued", "-q",
        help="deliver notifications on a worker thread instead of inline",
        action="store_true",
    )
    parser.add_argument(
        "--log-level",
        help="root log level (DEBUG shows every subscribe/publish)",
        default=None,
    )
    parser.add_argument(
        "--log-file",
        help="also write the log to this file",
        default=None,
    )
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_file)

    scenario = SCENARIOS.get(args.scenario)
    if scenario is None:
        print(f"Unknown scenario '{args.scenario}'", file=sys.stderr)
        sys.exit(2)

    if args.queued:
        with QueuedEventBus() as bus:
            airport = scenario(bus)
            bus.join()
    else:
        airport = scenario(EventBus())

    for line in airport.log:
        print(line)


if __name__ == "__main__":
    main()
