from datetime import timedelta
from enum import StrEnum

# Entries older than this are expired and never returned by reads
DATA_RETENTION = timedelta(hours=24)

# Pause after a failed periodic sweep before trying again
SWEEP_RETRY_DELAY = timedelta(minutes=1)


class SweeperState(StrEnum):
    """Lifecycle of the periodic retention sweeper."""

    IDLE = "idle"  # Created, not started yet
    RUNNING = "running"  # Waiting for the next tick
    SWEEPING = "sweeping"  # Deleting expired entries
    STOPPED = "stopped"  # Cancelled; terminal
