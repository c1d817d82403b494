# Agent Registry
# One active agent connection per tenant, compare-and-swap removal

from print_relay.registry.agent import AgentRecord
from print_relay.registry.registry import AgentRegistry

__all__ = ["AgentRecord", "AgentRegistry"]
