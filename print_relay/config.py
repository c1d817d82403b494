"""
Relay Configuration

Environment-based settings for the print relay.

Environment variables (a .env file in the working directory is loaded by
the entry point):
- WS_SECRET: Shared master secret, required
- PORT: Listening port (default: 3001)
- HOST: Listening interface (default: 0.0.0.0)
- HEARTBEAT_INTERVAL: Seconds between pings (default: 30)
- SERVER_NAME: Identifier sent to saas clients in the welcome frame
- LOG_LEVEL: Root log level (default: INFO)
- OUTBOUND_QUEUE_SIZE: Per-connection outbound queue depth (default: 200)
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from print_relay.heartbeat import DEFAULT_HEARTBEAT_INTERVAL


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(Exception):
    """Raised when the relay cannot start with the given settings."""


@dataclass
class RelaySettings:
    """
    Configuration for the relay process.

    Attributes:
        secret: Shared master credential, valid for every tenant
        port: Listening port
        host: Listening interface
        heartbeat_interval: Seconds between keep-alive pings
        server_name: Identifier sent in the welcome frame
        log_level: Root log level name
        outbound_queue_size: Max pending frames per connection
    """
    secret: str
    port: int = 3001
    host: str = "0.0.0.0"
    heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL
    server_name: str = "print-ws"
    log_level: str = "INFO"
    outbound_queue_size: int = 200

    def __post_init__(self):
        if not self.secret:
            raise ConfigurationError("WS_SECRET is not set")
        if not math.isfinite(self.heartbeat_interval) or self.heartbeat_interval <= 0:
            raise ConfigurationError(
                f"HEARTBEAT_INTERVAL must be a positive finite number, got {self.heartbeat_interval}"
            )
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"PORT out of range: {self.port}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL must be one of {LOG_LEVELS}, got {self.log_level!r}")
        if self.outbound_queue_size < 1:
            raise ConfigurationError(
                f"OUTBOUND_QUEUE_SIZE must be at least 1, got {self.outbound_queue_size}"
            )


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def settings_from_env() -> RelaySettings:
    """
    Create RelaySettings from environment variables.

    Raises:
        ConfigurationError: If WS_SECRET is missing or a value is invalid
    """
    return RelaySettings(
        secret=os.getenv("WS_SECRET", ""),
        port=_env_number("PORT", "3001", int),
        host=os.getenv("HOST", "0.0.0.0"),
        heartbeat_interval=_env_number(
            "HEARTBEAT_INTERVAL", str(DEFAULT_HEARTBEAT_INTERVAL), float
        ),
        server_name=os.getenv("SERVER_NAME", "print-ws"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        outbound_queue_size=_env_number("OUTBOUND_QUEUE_SIZE", "200", int),
    )
