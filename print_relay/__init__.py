# Print Relay
# Pairs each restaurant's local print agent with the saas over WebSocket
# and forwards print orders between them

__version__ = "0.1.0"

# Re-export commonly used components for convenience
from print_relay.auth import Authenticator, ConnectionRole, Credentials
from print_relay.config import ConfigurationError, RelaySettings, settings_from_env
from print_relay.registry import AgentRecord, AgentRegistry
from print_relay.routing import PrintRouter, RoutingOutcome

__all__ = [
    "__version__",
    # Authentication
    "Authenticator",
    "ConnectionRole",
    "Credentials",
    # Configuration
    "ConfigurationError",
    "RelaySettings",
    "settings_from_env",
    # Registry and routing
    "AgentRecord",
    "AgentRegistry",
    "PrintRouter",
    "RoutingOutcome",
]
