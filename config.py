# Global knobs (topic addressing + dispatch + logging)

# ---------------------------------------------------------------------
# Topic keys
# A topic key is "<emitter kind>.<address>.<notification>".
# Components are escaped so that the key stays unique even when an
# address (e.g. "A320.neo") contains the delimiter itself:
#   "\"  -> "\\"
#   "."  -> "\."
# ---------------------------------------------------------------------
TOPIC_DELIMITER = "."
TOPIC_ESCAPE = "\\"
TOPIC_PARTS = 3

# ---------------------------------------------------------------------
# Queued (cross-thread) bus
# ---------------------------------------------------------------------
QUEUE_JOIN_TIMEOUT_S = 5.0      # default wait in join()/close()
QUEUE_WORKER_NAME = "notifier-dispatch"

# ---------------------------------------------------------------------
# Logging (used by run.py through notifier.logging_config)
# ---------------------------------------------------------------------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE = None                 # e.g. "logs/notifier.log"; None = console only
