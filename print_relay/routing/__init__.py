# Print Routing
# Forwards saas print orders to the tenant's agent and reports the outcome

from print_relay.routing.router import (
    PrintRouter,
    RoutingOutcome,
    REASON_AGENT_OFFLINE,
    REASON_DELIVERY_ERROR,
)

__all__ = [
    "PrintRouter",
    "RoutingOutcome",
    "REASON_AGENT_OFFLINE",
    "REASON_DELIVERY_ERROR",
]
