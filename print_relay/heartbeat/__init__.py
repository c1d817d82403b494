# Heartbeat
# Periodic keep-alive ping for every authenticated connection

from print_relay.heartbeat.monitor import (
    HeartbeatMonitor,
    DEFAULT_HEARTBEAT_INTERVAL,
)

__all__ = ["HeartbeatMonitor", "DEFAULT_HEARTBEAT_INTERVAL"]
